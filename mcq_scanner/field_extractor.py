# field_extractor.py
"""
Student name and roll number extraction through the Gemini generateContent API.

The network call lives behind GeminiFieldExtractor.extract() so the rest of the
pipeline can run, and be tested, without it. Every failure ends in the
placeholder identity rather than an exception.
"""
import base64
import re
import sys
import cv2
import requests
from . import config

def placeholder_info():
    """The identity used when the service gives us nothing usable."""
    return {'name': config.PLACEHOLDER_NAME, 'rollNumber': config.PLACEHOLDER_ROLL_NUMBER}

def encode_image(image, quality=config.GEMINI_JPEG_QUALITY):
    """JPEG-compresses an image and returns it as a single-line base64 string."""
    ok, buffer = cv2.imencode('.jpg', image, [cv2.IMWRITE_JPEG_QUALITY, quality])
    if not ok:
        raise ValueError("Could not encode image as JPEG")
    return base64.b64encode(buffer.tobytes()).decode('ascii')

def build_payload(encoded_image, instruction=config.GEMINI_INSTRUCTION):
    return {
        'contents': [{
            'parts': [
                {'inline_data': {'mime_type': 'image/jpeg', 'data': encoded_image}},
                {'text': instruction}
            ]
        }]
    }

class GeminiFieldExtractor:
    """Sends a sheet photo to Gemini and returns the decoded JSON response."""

    def __init__(self, api_key=None, endpoint=config.GEMINI_ENDPOINT,
                 timeout=config.GEMINI_TIMEOUT_SECONDS, session=None):
        self.api_key = api_key if api_key is not None else config.GEMINI_API_KEY
        self.endpoint = endpoint
        self.timeout = timeout
        self.session = session or requests.Session()

    def extract(self, image):
        """
        Returns the parsed response body on HTTP 200, otherwise the placeholder
        identity. Encoding, network, HTTP and JSON errors are reported on stderr.
        """
        try:
            if image is None or image.size == 0:
                raise ValueError("Input image is None or empty")
            payload = build_payload(encode_image(image))

            response = self.session.post(
                self.endpoint,
                params={'key': self.api_key},
                json=payload,
                timeout=self.timeout
            )
            if response.status_code != 200:
                print(f"Gemini API error: HTTP {response.status_code} Response: {response.text or 'No error details'}",
                      file=sys.stderr)
                return placeholder_info()

            return response.json()
        except (requests.RequestException, ValueError, cv2.error) as e:
            print(f"Error extracting student info: {e}", file=sys.stderr)
            return placeholder_info()

def extract_field(text, label):
    """
    Returns the text after `label` up to the next newline, double quote or the
    end of the string, with '*' emphasis removed. Empty string if the label is
    not present.
    """
    # Model output often arrives with escaped newlines
    text = text.replace('\\n', '\n')
    match = re.search(re.escape(label) + r'\s*(.*?)(\n|"|$)', text)
    if match:
        return match.group(1).replace('*', '').strip()
    return ''

def parse_student_info(response):
    """
    Reads name and roll number out of a generateContent response.
    A response that is already a {'name', 'rollNumber'} object is passed through.
    Anything else that does not look like a response gives the placeholder.
    """
    if not isinstance(response, dict):
        print("Warning: Gemini response is not a JSON object. Using placeholder info.", file=sys.stderr)
        return placeholder_info()

    if 'name' in response and 'rollNumber' in response:
        return {'name': response['name'], 'rollNumber': response['rollNumber']}

    try:
        parts = response['candidates'][0]['content']['parts']
    except (KeyError, IndexError, TypeError):
        parts = None
    if not isinstance(parts, list):
        print("Warning: Gemini response has no candidate text. Using placeholder info.", file=sys.stderr)
        return placeholder_info()

    # Only parts carrying a text string can hold the fields
    text = '\n'.join(
        part['text'] for part in parts
        if isinstance(part, dict) and isinstance(part.get('text'), str)
    )
    return {
        'name': extract_field(text, config.NAME_LABEL),
        'rollNumber': extract_field(text, config.ROLL_NUMBER_LABEL)
    }

# image_processing.py
"""
Functions for loading answer sheet photos and rectifying them to a canonical size.
"""
import sys
import cv2
import numpy as np
from . import config
from .geometry import reorder_corners

def load_image(image_path):
    """Loads an image from the specified path."""
    image = cv2.imread(image_path)
    if image is None:
        raise FileNotFoundError(f"Error: Could not read image at {image_path}")
    print(f"Loaded image: {image_path} (shape={image.shape})")
    return image

def normalize_channels(image):
    """Returns a 3-channel BGR version of a gray, BGR or BGRA image."""
    if image.ndim == 2 or image.shape[2] == 1:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2BGR)
    return image

def find_sheet_quad(image):
    """
    Looks for the outer boundary of the answer sheet in a BGR image.

    Returns the four corners ordered TL, TR, BR, BL, or None when the largest
    contour does not approximate to a quadrilateral.
    """
    gray = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
    blurred = cv2.GaussianBlur(gray, config.BLUR_KERNEL_SIZE, 0)

    # Inverted so pen strokes and sheet edges are white
    thresh = cv2.adaptiveThreshold(
        blurred, 255, cv2.ADAPTIVE_THRESH_GAUSSIAN_C, cv2.THRESH_BINARY_INV,
        config.ADAPTIVE_BLOCK_SIZE, config.ADAPTIVE_C
    )
    edges = cv2.Canny(thresh, config.CANNY_LOW_THRESHOLD, config.CANNY_HIGH_THRESHOLD)

    contours, _ = cv2.findContours(edges, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)
    print(f"Total contours found: {len(contours)}")
    if not contours:
        return None

    largest = max(contours, key=cv2.contourArea)
    perimeter = cv2.arcLength(largest, True)
    approx = cv2.approxPolyDP(largest, config.APPROX_EPSILON_RATIO * perimeter, True)
    if len(approx) != 4:
        print(f"Largest contour has {len(approx)} vertices, expected 4.")
        return None

    return reorder_corners(approx)

def rectify(image):
    """
    Warps the sheet in a photo onto a SHEET_WIDTH x SHEET_HEIGHT canvas.

    A None or empty image is returned unchanged. When no quadrilateral is
    found, a copy of the channel-normalized photo is returned instead, so the
    result is not guaranteed to be warped.
    """
    if image is None or image.size == 0:
        print("Error: Input image is None or empty.", file=sys.stderr)
        return image

    bgr = normalize_channels(image)
    quad = find_sheet_quad(bgr)
    if quad is None:
        print("No sheet boundary found. Using the image as-is.")
        return bgr.copy()

    width, height = config.SHEET_WIDTH, config.SHEET_HEIGHT
    dst = np.array([
        [0, 0],
        [width - 1, 0],
        [width - 1, height - 1],
        [0, height - 1]
    ], dtype=np.float32)
    matrix = cv2.getPerspectiveTransform(quad, dst)
    warped = cv2.warpPerspective(bgr, matrix, (width, height))
    print(f"Rectified sheet to {width}x{height}.")
    return warped

# /mcq_scanner/config.py
"""
Configuration constants for the MCQ Scanner application.
"""
import os

# --- Core Paths ---
# Base directory is one level up from the package directory where this file lives
BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))

INPUT_DIR = os.path.join(BASE_DIR, 'omr_input')
OUTPUT_VISUAL_DIR = os.path.join(BASE_DIR, 'graded_output')

# Photo of the teacher's filled-in answer sheet
KEY_IMAGE_PATH = os.path.join(BASE_DIR, 'answer_key', 'key.jpg')


# --- Rectification Parameters ---
BLUR_KERNEL_SIZE = (5, 5)
ADAPTIVE_BLOCK_SIZE = 11
ADAPTIVE_C = 2
CANNY_LOW_THRESHOLD = 50
CANNY_HIGH_THRESHOLD = 150
# Polygon approximation tolerance as a fraction of the contour perimeter
APPROX_EPSILON_RATIO = 0.02
# Canonical sheet size after the perspective warp (width, height)
SHEET_WIDTH = 700
SHEET_HEIGHT = 800


# --- Mark Detection Parameters ---
# HSV band for blue ink / marker (OpenCV hue runs 0-180)
MARK_HSV_LOWER = (90, 50, 50)
MARK_HSV_UPPER = (130, 255, 255)
MARK_MIN_AREA = 100
MARK_MAX_AREA = 5000


# --- Comparison Parameters ---
# Max distance in pixels between a teacher mark and a student mark to count as the same answer
MATCH_THRESHOLD = 30.0


# --- Visualization Parameters ---
VIS_CORRECT_COLOR = (0, 255, 0)   # Green
VIS_EXTRA_COLOR = (0, 0, 255)     # Red
VIS_MARK_RADIUS = 10
VIS_THICKNESS_MISSING = 1
VIS_THICKNESS_KEY = 3
VIS_THICKNESS_DETECTED = 2


# --- Student Info Extraction (Gemini) ---
GEMINI_API_KEY = os.environ.get('GEMINI_API_KEY', '')
GEMINI_ENDPOINT = 'https://generativelanguage.googleapis.com/v1beta/models/gemini-1.5-flash:generateContent'
GEMINI_TIMEOUT_SECONDS = 30.0
GEMINI_JPEG_QUALITY = 30
GEMINI_INSTRUCTION = "Extract only the student's name and roll number from this exam sheet image."

# Returned when the service cannot be reached or answers with garbage
PLACEHOLDER_NAME = 'John Doe'
PLACEHOLDER_ROLL_NUMBER = '12345'

NAME_LABEL = 'Name:'
ROLL_NUMBER_LABEL = 'Roll Number:'

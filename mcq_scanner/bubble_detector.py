# bubble_detector.py
"""
Functions to detect filled answer marks by their ink color.
"""
import cv2
import numpy as np
from . import config

def _is_valid_mark(contour):
    """Rejects specks of noise and blobs where several marks ran together."""
    area = cv2.contourArea(contour)
    return config.MARK_MIN_AREA < area < config.MARK_MAX_AREA

def detect_marks(image):
    """
    Finds filled marks in the blue ink band of a BGR image.
    Returns a list of (x, y) centers in contour discovery order.
    """
    hsv = cv2.cvtColor(image, cv2.COLOR_BGR2HSV)
    mask = cv2.inRange(
        hsv,
        np.array(config.MARK_HSV_LOWER, dtype=np.uint8),
        np.array(config.MARK_HSV_UPPER, dtype=np.uint8)
    )

    contours, _ = cv2.findContours(mask, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)

    marks = []
    for contour in contours:
        if _is_valid_mark(contour):
            (x, y), _ = cv2.minEnclosingCircle(contour)
            marks.append((float(x), float(y)))

    print(f"Detected {len(marks)} filled marks out of {len(contours)} contours.")
    return marks

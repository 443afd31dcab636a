# grader.py
"""
Functions for grading a student's marks against the teacher's key marks.
"""
import math
import cv2
from . import config

def _to_pixel(point):
    return int(round(point[0])), int(round(point[1]))

def match_marks(teacher_marks, student_marks):
    """
    Pairs each teacher mark with the first remaining student mark closer than
    MATCH_THRESHOLD. A student mark is used at most once.

    The pairing is greedy and depends on input order; it is not a minimum
    distance assignment.

    Returns a dict with 'matched' (teacher, student) pairs, 'missing' teacher
    marks and 'extra' student marks.
    """
    remaining = list(student_marks)
    matched = []
    missing = []

    for t in teacher_marks:
        for i, s in enumerate(remaining):
            if math.hypot(t[0] - s[0], t[1] - s[1]) < config.MATCH_THRESHOLD:
                matched.append((t, s))
                del remaining[i]
                break
        else:
            missing.append(t)

    return {'matched': matched, 'missing': missing, 'extra': remaining}

def compare(teacher_marks, student_marks, image, match_result=None):
    """
    Draws the grading overlay onto a BGR image and returns it as RGB.

    Missing answers get a thin green ring, every key position a thicker green
    ring, correct answers a filled green disc and extra answers a filled red
    disc. The image is modified in place and the same array is returned;
    pass a copy to keep the original.

    A match_result already computed by match_marks() for the same marks is
    drawn as-is instead of matching again.
    """
    result = match_result if match_result is not None else match_marks(teacher_marks, student_marks)
    radius = config.VIS_MARK_RADIUS

    for t in result['missing']:
        cv2.circle(image, _to_pixel(t), radius, config.VIS_CORRECT_COLOR, config.VIS_THICKNESS_MISSING)

    for t in teacher_marks:
        cv2.circle(image, _to_pixel(t), radius, config.VIS_CORRECT_COLOR, config.VIS_THICKNESS_KEY)

    for _, s in result['matched']:
        cv2.circle(image, _to_pixel(s), radius, config.VIS_CORRECT_COLOR, -1)

    for s in result['extra']:
        cv2.circle(image, _to_pixel(s), radius, config.VIS_EXTRA_COLOR, -1)

    image[:] = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
    return image

def summarize(match_result):
    """
    Turns a match result into a score summary dictionary.
    """
    total_marks = len(match_result['matched']) + len(match_result['missing'])
    obtained_marks = len(match_result['matched'])

    percent = (100.0 * obtained_marks / total_marks) if total_marks else 0.0

    summary = {
        "total": total_marks,
        "obtained": obtained_marks,
        "missing": len(match_result['missing']),
        "extra": len(match_result['extra']),
        "percentage": percent
    }

    print(f"Grading complete. Score: {summary['obtained']}/{summary['total']} ({summary['percentage']:.2f}%), "
          f"{summary['extra']} extra mark(s)")
    return summary

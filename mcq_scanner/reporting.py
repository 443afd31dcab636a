# /mcq_scanner/reporting.py
"""
Functions for generating reports (detected-mark previews and the batch summary).
"""
import cv2
import pandas as pd
from . import config
from .bubble_detector import detect_marks

# FUNCTION 1: Preview of what the detector picked up on a sheet
def draw_detected_marks(image):
    """Returns a copy of a BGR image with a ring around every detected mark."""
    output = image.copy()
    for x, y in detect_marks(image):
        cv2.circle(output, (int(round(x)), int(round(y))), config.VIS_MARK_RADIUS,
                   config.VIS_CORRECT_COLOR, config.VIS_THICKNESS_DETECTED)
    return output

# FUNCTION 2: Summary of all students in a batch
def create_summary_report(rows):
    """
    Compiles per-student summaries into a DataFrame and prints overall statistics.

    Each row is a grading summary with an added 'student_name' key.
    Returns the DataFrame, or None when there is nothing to report.
    """
    if not rows:
        print("No student results to summarize.")
        return None

    summary_df = pd.DataFrame(rows, columns=['student_name', 'obtained', 'total', 'missing', 'extra', 'percentage'])
    num_students, avg_score, max_score, min_score, std_dev = (
        len(summary_df), summary_df['percentage'].mean(), summary_df['percentage'].max(),
        summary_df['percentage'].min(), summary_df['percentage'].std()
    )
    stats_df = pd.DataFrame({
        'Statistic': ['Number of Students', 'Average Score (%)', 'Highest Score (%)', 'Lowest Score (%)', 'Std Deviation'],
        'Value': [num_students, f'{avg_score:.2f}', f'{max_score:.2f}', f'{min_score:.2f}', f'{std_dev:.2f}']
    })

    print(summary_df.to_string(index=False))
    print('\n--- Overall Statistics ---')
    print(stats_df.to_string(index=False))
    return summary_df

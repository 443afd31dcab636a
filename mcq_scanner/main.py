# /mcq_scanner/main.py
"""
Main script to run the MCQ Scanner in batch mode.

This script rectifies the teacher's answer key photo, then finds all student
sheet photos in the input directory, grades each one against the key and saves
the annotated result in the output directory.
"""
import sys
import os
import glob
import cv2

from mcq_scanner import (
    config,
    image_processing,
    bubble_detector,
    grader,
    field_extractor,
    reporting
)

def setup_directories():
    """Create output directories if they don't exist."""
    os.makedirs(config.OUTPUT_VISUAL_DIR, exist_ok=True)
    print("Output directories verified.")

def load_key_marks(key_image_path):
    """Rectifies the answer key photo and returns its mark centers."""
    key_image = image_processing.rectify(image_processing.load_image(key_image_path))
    key_marks = bubble_detector.detect_marks(key_image)
    if not key_marks:
        print(f"Warning: No marks detected on the answer key {os.path.basename(key_image_path)}.")
    return key_marks

def process_single_sheet(image_path, key_marks, extractor=None):
    """
    Executes the full grading workflow for a single sheet photo.
    Returns the score summary, or None if the sheet could not be processed.
    """
    try:
        student_name = os.path.splitext(os.path.basename(image_path))[0]

        # 1. Load and rectify
        original_image = image_processing.load_image(image_path)
        sheet = image_processing.rectify(original_image)

        # 2. Student identity from the raw photo
        if extractor is not None:
            info = field_extractor.parse_student_info(extractor.extract(original_image))
            print(f"Student info: {info['name']} ({info['rollNumber']})")
            student_name = info['name'] or student_name

        # 3. Detect marks
        student_marks = bubble_detector.detect_marks(sheet)

        # 4. Grade and annotate
        match_result = grader.match_marks(key_marks, student_marks)
        summary = grader.summarize(match_result)
        annotated = grader.compare(key_marks, student_marks, sheet, match_result)

        # compare() hands back RGB; imwrite expects BGR
        visual_output_path = os.path.join(
            config.OUTPUT_VISUAL_DIR,
            f"{os.path.splitext(os.path.basename(image_path))[0]}_graded.png"
        )
        cv2.imwrite(visual_output_path, cv2.cvtColor(annotated, cv2.COLOR_RGB2BGR))
        print(f"Saved graded image to {visual_output_path}")

        summary['student_name'] = student_name
        return summary

    except Exception as e:
        print(f"An unexpected error occurred while processing {os.path.basename(image_path)}: {e}", file=sys.stderr)
        return None

def main():
    """Main function to orchestrate the batch processing."""
    setup_directories()

    try:
        key_marks = load_key_marks(config.KEY_IMAGE_PATH)
    except FileNotFoundError as e:
        print(f"FATAL ERROR: {e}. Cannot proceed without the answer key.", file=sys.stderr)
        sys.exit(1)

    image_files = glob.glob(os.path.join(config.INPUT_DIR, '*.png')) + \
                  glob.glob(os.path.join(config.INPUT_DIR, '*.jpg'))

    if not image_files:
        print(f"No images found in the input directory: {config.INPUT_DIR}")
        return

    extractor = field_extractor.GeminiFieldExtractor() if config.GEMINI_API_KEY else None

    print(f"Found {len(image_files)} image(s) to process.")
    summaries = []
    for image_path in image_files:
        print(f"\n--- Processing: {os.path.basename(image_path)} ---")
        summary = process_single_sheet(image_path, key_marks, extractor)
        if summary is not None:
            summaries.append(summary)

    print("\n--- Summary of all students ---")
    reporting.create_summary_report(summaries)

    print("\n--- Batch processing complete. ---")


if __name__ == '__main__':
    main()

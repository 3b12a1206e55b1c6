"""
main.py

Main entry point for the Examplanner allotment engine.
Builds the sample dataset, runs the full allotment session by session,
validates it and prints the reports.
"""

import os
import sys
import pandas as pd
from examplanner.config import load_config
from examplanner.sample_data import generate_sample_data
from examplanner.allotment import generate_full_allotment, summarize_allotment
from examplanner.eligibility import build_exclusion_report
from examplanner.validators import validate_all
from examplanner.exceptions import ExamplannerError
from examplanner import reports

# --- Configuration ---
DATA_DIR = "data"
CONFIG_FILE = os.path.join(DATA_DIR, "allotment_config.csv")


def print_table(title: str, df: pd.DataFrame, max_rows: int = 15):
    print("\n" + "=" * 90)
    print(title.center(90))
    print("=" * 90)
    if df.empty:
        print("  (no rows)")
        return
    print(df.head(max_rows).to_string(index=False))
    if len(df) > max_rows:
        print(f"  ... {len(df) - max_rows} more rows")


def main() -> int:
    """
    Main execution pipeline.
    """
    print("=" * 90)
    print("EXAMPLANNER - SEAT ALLOTMENT & INVIGILATION".center(90))
    print("=" * 90)

    # --- 1. Settings and Data ---
    try:
        config = load_config(CONFIG_FILE)
    except ValueError as e:
        print(f"Fatal Error: Invalid configuration. {e}")
        return 1

    data = generate_sample_data(
        num_students=config.sample_students,
        num_invigilators=config.sample_invigilators,
        seed=config.sample_seed,
    )
    print(f"✓ Generated {len(data.students)} students")
    print(f"✓ Generated {len(data.classrooms)} classrooms")
    print(f"✓ Generated {len(data.invigilators)} invigilators")
    print(f"✓ Generated {len(data.exam_schedule)} exam slots")

    first_exam = data.exam_schedule[0]
    exclusions = build_exclusion_report(
        data.students, data.classrooms, data.invigilators,
        [e for e in data.exam_schedule if e.session_key == first_exam.session_key],
    )
    print(f"\nExclusions for {first_exam.session_key}: "
          f"{len(exclusions.debarred_students)} debarred students, "
          f"{len(exclusions.unavailable_invigilators)} unavailable invigilators")

    # --- 2. Allotment ---
    try:
        allotment = generate_full_allotment(
            data.students, data.classrooms, data.invigilators, data.exam_schedule, config
        )
    except ExamplannerError as e:
        print(f"Fatal Error: Allotment failed. {e}")
        return 1

    for line in summarize_allotment(allotment):
        print(f"  {line}")

    # --- 3. Validation ---
    is_valid = validate_all(allotment)

    # --- 4. Reports ---
    master = reports.build_master_report(allotment, data.classrooms)
    print_table("INVIGILATION MASTER DATA", master[["Exam_Date", "Shift", "Room_No", "Room_Capacity",
                                                    "No_of_Students_Allotted", "Total_Invigilators"]])
    print_table("TEACHER-WISE SUMMARY", reports.build_teacher_summary(allotment, allotment.invigilators, master))
    print_table("ROOM-WISE REPORT", reports.build_room_report(master))
    print_table("DEPARTMENT LOAD SHEET", reports.build_department_load(allotment, allotment.invigilators))
    first_key = next(iter(allotment.sessions))
    print_table(f"SEATING CHART {first_key}", reports.build_seating_chart(allotment, first_key), max_rows=10)

    print("\n--- Allotment Complete. ---")
    return 0 if is_valid else 1


if __name__ == "__main__":
    sys.exit(main())

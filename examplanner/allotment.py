"""
examplanner/allotment.py

Builds the full allotment: every exam session in chronological order, with
the student and invigilator snapshots returned by one session handed to the
next. Sessions are never planned against a shared mutable list.
"""

from typing import List, Dict, Optional
from .models import (
    Student, Classroom, Invigilator, ExamSlot, SessionAllotment, FullAllotment,
)
from .planning import generate_seat_plan, assign_invigilators
from .config import AllotmentConfig
from .exceptions import InputInconsistency
from . import utils


def group_exams_by_session(exam_schedule: List[ExamSlot]) -> Dict[str, List[ExamSlot]]:
    """Groups concurrent exams under their 'YYYY-MM-DD HH:MM' key, keeping schedule order."""
    sessions: Dict[str, List[ExamSlot]] = {}
    for exam in exam_schedule:
        sessions.setdefault(exam.session_key, []).append(exam)
    return sessions

def sorted_session_keys(sessions: Dict[str, List[ExamSlot]]) -> List[str]:
    return sorted(sessions.keys(), key=utils.parse_session_key)


def plan_session(students: List[Student], classrooms: List[Classroom], invigilators: List[Invigilator],
                 exams: List[ExamSlot], config: Optional[AllotmentConfig] = None) -> SessionAllotment:
    """Seats one session and staffs the rooms it uses."""
    config = config or AllotmentConfig()
    seat_plan, _ = generate_seat_plan(
        students, classrooms, exams,
        roll_number_order=config.roll_number_order,
        verify=config.verify_plans,
    )
    invigilator_plan = assign_invigilators(
        invigilators, seat_plan.classrooms_in_use(), seat_plan.exam,
        seated_counts=seat_plan.seated_counts(),
        headcount_basis=config.headcount_basis,
    )
    return SessionAllotment(seat_plan.session_key, list(exams), seat_plan, invigilator_plan)


def generate_full_allotment(students: List[Student], classrooms: List[Classroom],
                            invigilators: List[Invigilator], exam_schedule: List[ExamSlot],
                            config: Optional[AllotmentConfig] = None) -> FullAllotment:
    """
    Plans every session of the schedule. Each session starts from the
    snapshots produced by the one before it, so seat assignments and duty
    counts carry forward.
    """
    if not students or not classrooms or not invigilators or not exam_schedule:
        raise InputInconsistency(
            "Students, classrooms, invigilators and an exam schedule are all required for an allotment."
        )
    config = config or AllotmentConfig()

    print("\n🔄 Generating full allotment...")
    sessions = group_exams_by_session(exam_schedule)
    allotment = FullAllotment()
    student_snapshot = list(students)
    invigilator_snapshot = list(invigilators)

    for key in sorted_session_keys(sessions):
        exams = sessions[key]
        seat_plan, student_snapshot = generate_seat_plan(
            student_snapshot, classrooms, exams,
            roll_number_order=config.roll_number_order,
            verify=config.verify_plans,
        )
        invigilator_plan = assign_invigilators(
            invigilator_snapshot, seat_plan.classrooms_in_use(), seat_plan.exam,
            seated_counts=seat_plan.seated_counts(),
            headcount_basis=config.headcount_basis,
            session_key=key,
        )
        invigilator_snapshot = invigilator_plan.invigilators
        allotment.sessions[key] = SessionAllotment(key, exams, seat_plan, invigilator_plan)

        codes = ", ".join(e.subject_code for e in exams)
        print(f"  ✓ {key} ({codes}): {seat_plan.seated_count} seated in "
              f"{len(seat_plan.classrooms_in_use())} rooms")
        if seat_plan.unseated:
            print(f"  ⚠ {len(seat_plan.unseated)} students could not be seated")
        for shortfall in invigilator_plan.shortfalls:
            print(f"  ⚠ {shortfall.classroom.room_no}: {shortfall.assigned}/{shortfall.required} invigilators")

    allotment.students = student_snapshot
    allotment.invigilators = invigilator_snapshot
    print(f"\n✓ Generated allotment for {len(allotment.sessions)} sessions")
    return allotment


def summarize_allotment(allotment: FullAllotment) -> List[str]:
    """One printable line per session, followed by totals."""
    lines = []
    for key, session in allotment.sessions.items():
        plan = session.seat_plan
        missing = sum(s.missing for s in session.invigilator_plan.shortfalls)
        line = (f"{key}: {plan.seated_count} seated, {len(plan.unseated)} unseated, "
                f"{len(session.invigilator_plan.assignments)} duties")
        if plan.shortfall.count:
            line += f", capacity short by {plan.shortfall.count}"
        if missing:
            line += f", {missing} invigilators short"
        if plan.conflicts:
            line += f", {len(plan.conflicts)} concurrent-exam conflicts"
        lines.append(line)
    lines.append(f"Total: {allotment.total_seated} seated, {allotment.total_unseated} unseated")
    return lines

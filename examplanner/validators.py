"""
examplanner/validators.py

Post-allotment checks. Each check returns a list of human readable
violations; validate_all runs them over a full allotment and prints a report.
"""

from typing import List, Dict, Tuple, Set, Optional
from .models import SeatPlan, Seat, InvigilatorPlan, FullAllotment, Classroom
from .exceptions import ConstraintViolation


def validate_all(allotment: FullAllotment) -> bool:
    """
    Runs all validation checks and prints a report.
    """
    print("\n--- RUNNING POST-ALLOTMENT VALIDATION ---")

    bench_conflicts: List[str] = []
    capacity_conflicts: List[str] = []
    order_conflicts: List[str] = []
    exclusion_conflicts: List[str] = []
    invigilator_conflicts: List[str] = []

    for session in allotment.sessions.values():
        bench_conflicts += check_bench_constraint(session.seat_plan)
        capacity_conflicts += check_room_capacity(session.seat_plan)
        order_conflicts += check_room_order(session.seat_plan)
        exclusion_conflicts += check_exclusions(session.seat_plan)
        invigilator_conflicts += check_invigilator_assignments(session.invigilator_plan)

    if not (bench_conflicts or capacity_conflicts or order_conflicts
            or exclusion_conflicts or invigilator_conflicts):
        print("Validation PASSED: No same-course benches, no overfull rooms, no excluded students seated.")
        return True

    print("Validation FAILED:")
    for label, conflicts in [
        ("same-course bench conflicts", bench_conflicts),
        ("room capacity violations", capacity_conflicts),
        ("room order violations", order_conflicts),
        ("excluded students seated", exclusion_conflicts),
        ("invigilator conflicts", invigilator_conflicts),
    ]:
        if conflicts:
            print(f"  Found {len(conflicts)} {label}.")
            for c in conflicts: print(f"    - {c}")
    return False


def _group_by_bench(plan: SeatPlan) -> Dict[Tuple[str, int], List[Seat]]:
    benches: Dict[Tuple[str, int], List[Seat]] = {}
    for seat in plan.assignments:
        benches.setdefault((seat.classroom.id, seat.bench_index), []).append(seat)
    return benches

def check_bench_constraint(plan: SeatPlan) -> List[str]:
    """
    Checks that no bench holds two students of the same course.
    """
    conflicts = []
    for (classroom_id, _), seats in _group_by_bench(plan).items():
        courses: Set[str] = set()
        for seat in seats:
            if seat.is_empty:
                continue
            if seat.course in courses:
                conflicts.append(
                    f"Same-course bench: {seat.course} twice on row {seat.row}, column {seat.col} "
                    f"of {seat.classroom.room_no} ({plan.session_key})"
                )
                break
            courses.add(seat.course)
    return conflicts

def assert_bench_constraint(plan: SeatPlan):
    """Raises ConstraintViolation if the bench rule is broken; that is a planner bug."""
    conflicts = check_bench_constraint(plan)
    if conflicts:
        raise ConstraintViolation("; ".join(conflicts))

def check_room_capacity(plan: SeatPlan) -> List[str]:
    conflicts = []
    for room in plan.classrooms_in_use():
        seats = plan.seats_for(room.id)
        seated = sum(1 for s in seats if not s.is_empty)
        if seated > room.capacity or len(seats) > room.capacity:
            conflicts.append(
                f"Room {room.room_no} holds {seated} students in {len(seats)} seats "
                f"but has capacity {room.capacity} ({plan.session_key})"
            )
    return conflicts

def check_room_order(plan: SeatPlan, classrooms: Optional[List[Classroom]] = None) -> List[str]:
    """
    Rooms must be opened in non-decreasing capacity order, and rooms marked
    unavailable for any exam of the session must stay empty.
    """
    conflicts = []
    used = plan.classrooms_in_use()
    for previous, current in zip(used, used[1:]):
        if current.capacity < previous.capacity:
            conflicts.append(
                f"Room {current.room_no} ({current.capacity}) opened after larger room "
                f"{previous.room_no} ({previous.capacity}) ({plan.session_key})"
            )
    rooms_to_check = classrooms if classrooms is not None else used
    used_ids = {room.id for room in used}
    for room in rooms_to_check:
        if room.id in used_ids and any(room.is_unavailable_for(exam.id) for exam in plan.exams):
            conflicts.append(f"Room {room.room_no} is unavailable for {plan.session_key} but was used")
    return conflicts

def check_exclusions(plan: SeatPlan) -> List[str]:
    """
    Checks that no debarred, subject-ineligible or unavailable student was seated.
    """
    conflicts = []
    seen: Set[str] = set()
    for seat in plan.assignments:
        if seat.is_empty:
            continue
        student, exam = seat.student, seat.exam
        if student.id in seen:
            conflicts.append(f"Student {student.roll_no} seated twice in {plan.session_key}")
        seen.add(student.id)
        if student.is_debarred:
            conflicts.append(f"Debarred student {student.roll_no} seated for {exam.subject_code}")
        if student.is_ineligible_for(exam.subject_code):
            conflicts.append(f"Ineligible student {student.roll_no} seated for {exam.subject_code}")
        if student.is_unavailable_for(exam.id):
            conflicts.append(f"Unavailable student {student.roll_no} seated for {exam.subject_code}")
    return conflicts

def check_invigilator_assignments(plan: InvigilatorPlan) -> List[str]:
    """
    Checks that only available invigilators were used and nobody appears
    twice in the same room.
    """
    conflicts = []
    per_room: Dict[str, Set[str]] = {}
    for a in plan.assignments:
        inv = a.invigilator
        if not inv.is_available or inv.is_unavailable_for(a.exam.id):
            conflicts.append(f"Unavailable invigilator {inv.name} assigned to {a.classroom.room_no}")
        room_ids = per_room.setdefault(a.classroom.id, set())
        if inv.id in room_ids:
            conflicts.append(f"Invigilator {inv.name} assigned twice to {a.classroom.room_no}")
        room_ids.add(inv.id)
    return conflicts

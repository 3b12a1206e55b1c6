"""
examplanner/planning.py

Seat allocation and invigilator assignment for one exam session.

Seating is a greedy fill: rooms smallest-first, benches row-major, and for
every seat the largest remaining course queue whose course is not already on
the bench. Seats that no course can take are left empty.
"""

from collections import deque
from dataclasses import replace
from typing import List, Dict, Optional, Tuple, Set, Deque
from .models import (
    Student, Classroom, ExamSlot, Invigilator, SeatAssignment, SeatCandidate,
    Seat, SeatPlan, InvigilatorAssignment, InvigilatorShortfall, InvigilatorPlan,
)
from .eligibility import get_eligible_students, get_registered_students
from .exceptions import InputInconsistency
from .validators import assert_bench_constraint
from . import utils


class _CourseQueue:
    """Students of one course waiting for a seat, in seating order."""

    def __init__(self, course: str, order: int):
        self.course = course
        self.order = order  # first-seen index, breaks ties between equal lengths
        self.members: Deque[SeatCandidate] = deque()

    def __len__(self):
        return len(self.members)


def _check_session(exams: List[ExamSlot]) -> str:
    if not exams:
        raise InputInconsistency("No exams given for the session.")
    session_key = exams[0].session_key
    for exam in exams[1:]:
        if exam.session_key != session_key:
            raise InputInconsistency(
                f"Exam {exam.id} is at {exam.session_key}, not {session_key}; "
                "only concurrent exams can be planned together."
            )
    return session_key

def usable_classrooms(classrooms: List[Classroom], exams: List[ExamSlot]) -> List[Classroom]:
    """Rooms available for every exam of the session, smallest capacity first."""
    available = [
        room for room in classrooms
        if not any(room.is_unavailable_for(exam.id) for exam in exams)
    ]
    return sorted(available, key=lambda room: room.capacity)

def build_candidates(students: List[Student], exams: List[ExamSlot],
                     session_key: str) -> Tuple[List[SeatCandidate], List[SeatCandidate]]:
    """
    Tags every eligible student with their exam. Students already seated in
    this session are left out. A student eligible for two concurrent exams
    keeps the first; the later pairing is returned as a conflict.
    """
    candidates: List[SeatCandidate] = []
    conflicts: List[SeatCandidate] = []
    taken: Set[str] = set()

    for exam in exams:
        for student in get_eligible_students(students, exam):
            if student.is_seated_in(session_key):
                continue
            if student.id in taken:
                conflicts.append(SeatCandidate(student, exam))
                continue
            taken.add(student.id)
            candidates.append(SeatCandidate(student, exam))
    return candidates, conflicts

def _build_course_queues(candidates: List[SeatCandidate], roll_number_order: bool) -> List[_CourseQueue]:
    queues: Dict[str, _CourseQueue] = {}
    for candidate in candidates:
        queue = queues.get(candidate.course)
        if queue is None:
            queue = queues[candidate.course] = _CourseQueue(candidate.course, len(queues))
        queue.members.append(candidate)

    if roll_number_order:
        for queue in queues.values():
            queue.members = deque(sorted(queue.members, key=lambda c: c.student.roll_no))
    return list(queues.values())

def _pick_candidate(queues: List[_CourseQueue], bench_courses: Set[str]) -> Optional[SeatCandidate]:
    """Pops the head of the longest queue whose course is not on the bench yet."""
    for queue in sorted(queues, key=lambda q: (-len(q), q.order)):
        if not queue:
            break
        if queue.course not in bench_courses:
            return queue.members.popleft()
    return None


def generate_seat_plan(students: List[Student], classrooms: List[Classroom], exams: List[ExamSlot],
                       roll_number_order: bool = True, verify: bool = True) -> Tuple[SeatPlan, List[Student]]:
    """
    Seats the eligible students of one session (all exams sharing a date and
    time) and returns the plan together with an updated copy of `students`
    in which every seated student carries their seat for this session.

    Students that could not be seated are listed in `plan.unseated`; nothing
    is raised for a shortfall. An exam with no eligible students at all
    raises InputInconsistency.
    """
    session_key = _check_session(exams)
    for exam in exams:
        registered = get_registered_students(students, exam)
        if not registered:
            raise InputInconsistency(
                f"Exam {exam.id} ({exam.subject_code}) has no registered students for "
                f"{exam.course} / {exam.department}, semester {exam.semester}."
            )
        if not get_eligible_students(registered, exam):
            raise InputInconsistency(
                f"Exam {exam.id} ({exam.subject_code}) has no eligible students: all {len(registered)} "
                f"registered for {exam.course} / {exam.department} are debarred, ineligible or unavailable."
            )

    candidates, conflicts = build_candidates(students, exams, session_key)
    queues = _build_course_queues(candidates, roll_number_order)
    rooms = usable_classrooms(classrooms, exams)

    remaining = len(candidates)
    assignments: List[Seat] = []

    for room in rooms:
        if remaining == 0:
            break
        seat_number = 0
        for bench_index, row, col, seats in room.benches():
            if remaining == 0:
                break
            bench_courses: Set[str] = set()
            for _ in range(seats):
                if remaining == 0:
                    break
                seat_number += 1
                candidate = _pick_candidate(queues, bench_courses)
                if candidate is not None:
                    bench_courses.add(candidate.course)
                    remaining -= 1
                assignments.append(Seat(room, seat_number, bench_index, row, col, candidate))

    placed = {id(seat.candidate) for seat in assignments if seat.candidate is not None}
    plan = SeatPlan(
        exams=list(exams),
        assignments=assignments,
        unseated=[c for c in candidates if id(c) not in placed],
        usable_capacity=sum(room.capacity for room in rooms),
        conflicts=conflicts,
    )

    if verify:
        assert_bench_constraint(plan)

    return plan, _apply_seat_assignments(students, plan)

def _apply_seat_assignments(students: List[Student], plan: SeatPlan) -> List[Student]:
    seats: Dict[str, SeatAssignment] = {}
    for seat in plan.assignments:
        if seat.student is None:
            continue
        seats[seat.student.id] = SeatAssignment(
            classroom_id=seat.classroom.id,
            room_no=seat.classroom.room_no,
            row=seat.row,
            col=seat.col,
            seat_number=seat.seat_number,
            session_key=plan.session_key,
        )
    return [
        replace(s, seat_assignment=seats[s.id]) if s.id in seats else s
        for s in students
    ]


# --- Invigilators ---

def assign_invigilators(invigilators: List[Invigilator], classrooms_in_use: List[Classroom], exam: ExamSlot,
                        seated_counts: Optional[Dict[str, int]] = None,
                        headcount_basis: str = utils.HEADCOUNT_CAPACITY,
                        session_key: Optional[str] = None) -> InvigilatorPlan:
    """
    Assigns invigilators to rooms round-robin from the available pool.

    The number each room needs comes from `utils.required_invigilators`,
    applied to the room capacity or, with the 'occupancy' basis, to the
    number of students seated there. Nobody is placed twice in one room; a
    room that cannot be fully staffed gets an InvigilatorShortfall.
    """
    if headcount_basis not in utils.HEADCOUNT_BASES:
        raise ValueError(f"Unknown headcount basis '{headcount_basis}', expected one of {utils.HEADCOUNT_BASES}")
    if headcount_basis == utils.HEADCOUNT_OCCUPANCY and seated_counts is None:
        raise InputInconsistency("Seated counts are required for the 'occupancy' headcount basis.")

    session_key = session_key or exam.session_key
    pool = [
        inv for inv in invigilators
        if inv.is_available and not inv.is_unavailable_for(exam.id)
    ]
    pass_duties: Dict[str, int] = {}

    def under_daily_limit(inv: Invigilator) -> bool:
        if inv.max_daily_sessions is None:
            return True
        return inv.duties_on(exam.date) + pass_duties.get(inv.id, 0) < inv.max_daily_sessions

    plan = InvigilatorPlan()
    index = 0

    for room in classrooms_in_use:
        if headcount_basis == utils.HEADCOUNT_CAPACITY:
            headcount = room.capacity
        else:
            headcount = seated_counts.get(room.id, 0)
        required = utils.required_invigilators(headcount)

        in_room: Set[str] = set()
        tried = 0
        # At most one lap of the pool per room
        while len(in_room) < required and tried < len(pool):
            inv = pool[index % len(pool)]
            index += 1
            tried += 1
            if inv.id in in_room or not under_daily_limit(inv):
                continue
            in_room.add(inv.id)
            pass_duties[inv.id] = pass_duties.get(inv.id, 0) + 1
            plan.assignments.append(InvigilatorAssignment(exam, room, inv))

        if len(in_room) < required:
            plan.shortfalls.append(InvigilatorShortfall(room, required, len(in_room)))

    plan.invigilators = [
        replace(inv, assigned_session_ids=inv.assigned_session_ids + [session_key] * pass_duties[inv.id])
        if inv.id in pass_duties else inv
        for inv in invigilators
    ]
    return plan

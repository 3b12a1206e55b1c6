"""
tests/test_allotment.py

Tests for the session-by-session allotment run.
Requires 'pytest' to run.
"""
import pytest
from examplanner.models import Student, Classroom, Invigilator, ExamSlot
from examplanner.allotment import (
    group_exams_by_session, sorted_session_keys, plan_session,
    generate_full_allotment, summarize_allotment,
)
from examplanner.config import AllotmentConfig
from examplanner.sample_data import generate_sample_data
from examplanner.validators import validate_all
from examplanner.exceptions import InputInconsistency


def make_students(course: str, count: int) -> list:
    return [Student(f"{course}{i}", f"Student {course}{i}", f"{course}-{i:02d}", "Dept", course, 1)
            for i in range(1, count + 1)]

@pytest.fixture
def schedule() -> list:
    # Listed out of order on purpose
    return [
        ExamSlot("E1", "Paper X", "X-201", "Dept", "X", 1, "2024-09-10", "14:00"),
        ExamSlot("E2", "Paper Y", "Y-201", "Dept", "Y", 1, "2024-09-10", "14:00"),
        ExamSlot("E3", "Paper X", "X-101", "Dept", "X", 1, "2024-09-10", "09:00"),
    ]

@pytest.fixture
def rooms() -> list:
    return [Classroom("R1", "R1", rows=2, columns=1), Classroom("R2", "R2", rows=2, columns=1)]

@pytest.fixture
def invigilators() -> list:
    return [Invigilator(f"I{n}", f"Prof. {n}", "Dept") for n in "ABC"]


def test_sessions_are_grouped_and_sorted(schedule):
    sessions = group_exams_by_session(schedule)

    assert [e.id for e in sessions["2024-09-10 14:00"]] == ["E1", "E2"]
    assert sorted_session_keys(sessions) == ["2024-09-10 09:00", "2024-09-10 14:00"]

def test_full_allotment_threads_snapshots(schedule, rooms, invigilators):
    students = make_students("X", 3) + make_students("Y", 3)

    allotment = generate_full_allotment(students, rooms, invigilators, schedule)

    assert list(allotment.sessions) == ["2024-09-10 09:00", "2024-09-10 14:00"]
    morning = allotment.sessions["2024-09-10 09:00"].seat_plan
    afternoon = allotment.sessions["2024-09-10 14:00"].seat_plan
    # A single course can only use every other seat
    assert morning.seated_counts() == {"R1": 2, "R2": 1}
    assert afternoon.seated_count == 6
    assert allotment.total_seated == 9
    assert allotment.total_unseated == 0

    # The final snapshot holds each student's latest seat
    seats = {s.id: s.seat_assignment for s in allotment.students}
    assert seats["X1"].session_key == "2024-09-10 14:00"
    assert seats["Y3"].session_key == "2024-09-10 14:00"

    # Duties accumulate across sessions
    duties = {inv.name: inv.duty_count for inv in allotment.invigilators}
    assert duties == {"Prof. A": 2, "Prof. B": 2, "Prof. C": 0}
    total = sum(len(s.invigilator_plan.assignments) for s in allotment.sessions.values())
    assert sum(duties.values()) == total

    # Callers' lists are untouched
    assert all(s.seat_assignment is None for s in students)
    assert all(inv.duty_count == 0 for inv in invigilators)

def test_plan_session_uses_config(rooms, invigilators):
    exams = [ExamSlot("E1", "Paper X", "X-101", "Dept", "X", 1, "2024-09-10", "09:00")]
    students = list(reversed(make_students("X", 2)))

    session = plan_session(students, rooms, invigilators, exams,
                           AllotmentConfig(roll_number_order=False, headcount_basis="occupancy"))

    assert session.session_key == "2024-09-10 09:00"
    assert [s.student.roll_no for s in session.seat_plan.assignments if s.student] == ["X-02", "X-01"]
    assert len(session.invigilator_plan.assignments) == 1

def test_missing_inputs_are_rejected(schedule, rooms, invigilators):
    with pytest.raises(InputInconsistency):
        generate_full_allotment([], rooms, invigilators, schedule)
    with pytest.raises(InputInconsistency):
        generate_full_allotment(make_students("X", 1), rooms, invigilators, [])

def test_summary_lines(schedule, rooms, invigilators):
    allotment = generate_full_allotment(make_students("X", 3) + make_students("Y", 3), rooms, invigilators, schedule)
    lines = summarize_allotment(allotment)

    assert lines[0].startswith("2024-09-10 09:00: 3 seated, 0 unseated, 2 duties")
    assert lines[-1] == "Total: 9 seated, 0 unseated"

def test_summary_reports_capacity_shortfall(rooms, invigilators):
    exams = [ExamSlot("E1", "Paper X", "X-101", "Dept", "X", 1, "2024-09-10", "09:00")]
    allotment = generate_full_allotment(make_students("X", 9), rooms, invigilators, exams)

    assert allotment.total_unseated == 5
    assert "capacity short by 1" in summarize_allotment(allotment)[0]


def test_sample_data_allotment_validates():
    data = generate_sample_data()
    allotment = generate_full_allotment(data.students, data.classrooms, data.invigilators, data.exam_schedule)

    assert len(allotment.sessions) == len(group_exams_by_session(data.exam_schedule))
    assert allotment.total_seated > 0
    assert validate_all(allotment)

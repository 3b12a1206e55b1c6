"""
tests/test_models.py

Basic unit tests for the data model and utils.
Requires 'pytest' to run.
"""
import pytest
from examplanner.models import Classroom, ExamSlot, Invigilator, SeatPlan, CapacityShortfall
from examplanner.exceptions import InputInconsistency, ExamplannerError
from examplanner import utils


def test_classroom_capacity():
    """Uniform benches and per-bench capacities both give the right total."""
    uniform = Classroom("R1", "A-101", rows=8, columns=5)
    assert uniform.capacity == 80
    assert uniform.bench_count == 40

    mixed = Classroom("R2", "A-201", rows=2, columns=2, bench_capacities=[2, 2, 3, 3])
    assert mixed.capacity == 10
    assert repr(mixed) == "Classroom(A-201, 10 seats)"

def test_benches_are_row_major():
    room = Classroom("R", "R", rows=2, columns=3, bench_capacities=[1, 2, 3, 1, 2, 3])
    benches = list(room.benches())

    assert benches[0] == (0, 1, 1, 1)
    assert benches[2] == (2, 1, 3, 3)
    assert benches[3] == (3, 2, 1, 1)
    assert len(benches) == 6

@pytest.mark.parametrize("kwargs", [
    {"rows": 0, "columns": 3},
    {"rows": 2, "columns": 2, "bench_capacities": [2, 2, 2]},
    {"rows": 1, "columns": 2, "bench_capacities": [2, 0]},
    {"rows": 1, "columns": 1, "bench_capacity": 0},
])
def test_bad_layouts_raise(kwargs):
    with pytest.raises(InputInconsistency):
        Classroom("BAD", "BAD", **kwargs)

def test_input_inconsistency_is_a_value_error():
    assert issubclass(InputInconsistency, ValueError)
    assert issubclass(InputInconsistency, ExamplannerError)


def test_exam_session_key():
    exam = ExamSlot("E1", "Maths", "MA-101", "CSE", "CSE Core", 1, "2024-09-10", "14:00")
    assert exam.session_key == "2024-09-10 14:00"
    assert exam.starts_at.hour == 14

def test_invigilator_duties_on_date():
    inv = Invigilator("I1", "Prof. A", "CSE",
                      assigned_session_ids=["2024-09-10 09:00", "2024-09-10 14:00", "2024-09-11 09:00"])
    assert inv.duty_count == 3
    assert inv.duties_on("2024-09-10") == 2
    assert inv.duties_on("2024-09-12") == 0

def test_capacity_shortfall_count():
    assert CapacityShortfall(required=5, available=4).count == 1
    assert CapacityShortfall(required=3, available=4).count == 0
    assert not CapacityShortfall(required=3, available=4)

def test_empty_seat_plan():
    exam = ExamSlot("E1", "Maths", "MA-101", "CSE", "CSE Core", 1, "2024-09-10", "09:00")
    plan = SeatPlan([exam])
    assert plan.seated_count == 0
    assert plan.classrooms_in_use() == []
    assert plan.session_key == "2024-09-10 09:00"


def test_utils_helpers():
    assert utils.get_shift_name("09:00") == "Morning"
    assert utils.get_shift_name("12:00") == "Afternoon"
    assert utils.get_day_of_week("2024-09-10") == "Tuesday"
    assert utils.make_exam_session_id("2024-09-10", "09:00") == "EXAM-20240910-0900"
    assert utils.session_date("2024-09-10 09:00") == "2024-09-10"
    with pytest.raises(ValueError):
        utils.parse_session_key("10/09/2024 9am")

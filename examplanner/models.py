"""
examplanner/models.py

Data model for the allotment engine. Everything here is plain data plus a few
derived properties; the algorithms live in eligibility.py and planning.py.
"""

from typing import List, Optional, Dict, Iterator, Tuple
from dataclasses import dataclass, field
from datetime import datetime
from . import utils
from .exceptions import InputInconsistency


@dataclass
class AvailabilitySlot:
    """Marks a resource as unavailable for one exam slot."""
    slot_id: str
    reason: str = ""

@dataclass
class IneligibilityRecord:
    subject_code: str
    reason: str = ""

@dataclass
class SeatAssignment:
    """A student's seat for one session."""
    classroom_id: str
    room_no: str
    row: int
    col: int
    seat_number: int
    session_key: str


@dataclass
class Student:
    """
    Represents a single student.
    A student sits an exam when their course and semester match it, or when
    the exam's subject code is listed in `eligible_subjects`.
    """
    id: str
    name: str
    roll_no: str
    department: str
    course: str
    semester: int
    section: str = ""
    group: Optional[str] = None
    eligible_subjects: List[str] = field(default_factory=list)
    ineligibility_records: List[IneligibilityRecord] = field(default_factory=list)
    unavailable_slots: List[AvailabilitySlot] = field(default_factory=list)
    seat_assignment: Optional[SeatAssignment] = None
    is_debarred: bool = False
    debarment_reason: str = ""

    def is_unavailable_for(self, slot_id: str) -> bool:
        return any(slot.slot_id == slot_id for slot in self.unavailable_slots)

    def ineligibility_for(self, subject_code: str) -> Optional[IneligibilityRecord]:
        return next((r for r in self.ineligibility_records if r.subject_code == subject_code), None)

    def is_ineligible_for(self, subject_code: str) -> bool:
        return self.ineligibility_for(subject_code) is not None

    def is_seated_in(self, session_key: str) -> bool:
        return self.seat_assignment is not None and self.seat_assignment.session_key == session_key


@dataclass
class Classroom:
    """
    Represents an exam room laid out as `rows` x `columns` benches.
    `bench_capacities` holds one entry per bench in row-major order; when it
    is omitted every bench seats `bench_capacity` students.
    """
    id: str
    room_no: str
    rows: int
    columns: int
    bench_capacity: int = utils.DEFAULT_BENCH_CAPACITY
    bench_capacities: Optional[List[int]] = None
    building: str = ""
    department_block: str = ""
    unavailable_slots: List[AvailabilitySlot] = field(default_factory=list)

    def __post_init__(self):
        if self.rows <= 0 or self.columns <= 0:
            raise InputInconsistency(
                f"Classroom {self.id}: rows and columns must be positive (got {self.rows}x{self.columns})."
            )
        bench_count = self.rows * self.columns
        if self.bench_capacities is None:
            if self.bench_capacity < 1:
                raise InputInconsistency(f"Classroom {self.id}: bench capacity must be at least 1.")
            self.bench_capacities = [self.bench_capacity] * bench_count
        else:
            self.bench_capacities = list(self.bench_capacities)
            if len(self.bench_capacities) != bench_count:
                raise InputInconsistency(
                    f"Classroom {self.id}: {len(self.bench_capacities)} bench capacities given "
                    f"for a {self.rows}x{self.columns} layout ({bench_count} benches)."
                )
            if any(c < 1 for c in self.bench_capacities):
                raise InputInconsistency(f"Classroom {self.id}: every bench must seat at least 1 student.")

    @property
    def capacity(self) -> int:
        return sum(self.bench_capacities)

    @property
    def bench_count(self) -> int:
        return self.rows * self.columns

    def benches(self) -> Iterator[Tuple[int, int, int, int]]:
        """Yields (bench_index, row, col, seats) in row-major order. Rows/cols are 1-based."""
        for index, seats in enumerate(self.bench_capacities):
            row, col = divmod(index, self.columns)
            yield index, row + 1, col + 1, seats

    def is_unavailable_for(self, slot_id: str) -> bool:
        return any(slot.slot_id == slot_id for slot in self.unavailable_slots)

    def __repr__(self):
        return f"Classroom({self.room_no}, {self.capacity} seats)"


@dataclass
class ExamSlot:
    """
    A scheduled paper. Slots with identical (date, time) are concurrent and
    are planned together as one session.
    """
    id: str
    subject_name: str
    subject_code: str
    department: str
    course: str
    semester: int
    date: str  # YYYY-MM-DD
    time: str  # HH:MM
    duration: int = 180  # minutes
    group: Optional[str] = None

    @property
    def session_key(self) -> str:
        return utils.make_session_key(self.date, self.time)

    @property
    def starts_at(self) -> datetime:
        return utils.parse_session_key(self.session_key)


@dataclass
class Invigilator:
    id: str
    name: str
    department: str
    is_available: bool = True
    unavailable_slots: List[AvailabilitySlot] = field(default_factory=list)
    # One entry per duty, holding the session key
    assigned_session_ids: List[str] = field(default_factory=list)
    max_daily_sessions: Optional[int] = None

    def is_unavailable_for(self, slot_id: str) -> bool:
        return any(slot.slot_id == slot_id for slot in self.unavailable_slots)

    @property
    def duty_count(self) -> int:
        return len(self.assigned_session_ids)

    def duties_on(self, date: str) -> int:
        return sum(1 for key in self.assigned_session_ids if utils.session_date(key) == date)


# --- Planning Results ---

@dataclass
class SeatCandidate:
    """A student tagged with the exam they sit in the current session."""
    student: Student
    exam: ExamSlot

    @property
    def course(self) -> str:
        return self.exam.course


@dataclass
class Seat:
    """One seat of a classroom; `candidate` is None for an empty seat."""
    classroom: Classroom
    seat_number: int  # 1-based within the classroom
    bench_index: int
    row: int
    col: int
    candidate: Optional[SeatCandidate] = None

    @property
    def student(self) -> Optional[Student]:
        return self.candidate.student if self.candidate else None

    @property
    def exam(self) -> Optional[ExamSlot]:
        return self.candidate.exam if self.candidate else None

    @property
    def course(self) -> Optional[str]:
        return self.candidate.course if self.candidate else None

    @property
    def is_empty(self) -> bool:
        return self.candidate is None


@dataclass
class CapacityShortfall:
    """Eligible students versus usable seats for one session."""
    required: int
    available: int
    unseated: List[SeatCandidate] = field(default_factory=list)

    @property
    def count(self) -> int:
        return max(0, self.required - self.available)

    def __bool__(self):
        return self.count > 0 or bool(self.unseated)


@dataclass
class SeatPlan:
    """All seats produced for one session (one or more concurrent exams)."""
    exams: List[ExamSlot]
    assignments: List[Seat] = field(default_factory=list)
    unseated: List[SeatCandidate] = field(default_factory=list)
    usable_capacity: int = 0
    # Students eligible for more than one concurrent exam; seated for the first only
    conflicts: List[SeatCandidate] = field(default_factory=list)

    @property
    def exam(self) -> ExamSlot:
        return self.exams[0]

    @property
    def session_key(self) -> str:
        return self.exam.session_key

    @property
    def seated_count(self) -> int:
        return sum(1 for seat in self.assignments if not seat.is_empty)

    @property
    def shortfall(self) -> CapacityShortfall:
        return CapacityShortfall(
            required=self.seated_count + len(self.unseated),
            available=self.usable_capacity,
            unseated=list(self.unseated),
        )

    def classrooms_in_use(self) -> List[Classroom]:
        """Classrooms in the order they first appear in the plan."""
        seen: Dict[str, Classroom] = {}
        for seat in self.assignments:
            seen.setdefault(seat.classroom.id, seat.classroom)
        return list(seen.values())

    def seats_for(self, classroom_id: str) -> List[Seat]:
        return [seat for seat in self.assignments if seat.classroom.id == classroom_id]

    def seated_counts(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for seat in self.assignments:
            counts.setdefault(seat.classroom.id, 0)
            if not seat.is_empty:
                counts[seat.classroom.id] += 1
        return counts


@dataclass
class InvigilatorAssignment:
    exam: ExamSlot
    classroom: Classroom
    invigilator: Invigilator


@dataclass
class InvigilatorShortfall:
    classroom: Classroom
    required: int
    assigned: int

    @property
    def missing(self) -> int:
        return self.required - self.assigned


@dataclass
class InvigilatorPlan:
    assignments: List[InvigilatorAssignment] = field(default_factory=list)
    shortfalls: List[InvigilatorShortfall] = field(default_factory=list)
    # Updated snapshot with this pass's duties recorded
    invigilators: List[Invigilator] = field(default_factory=list)

    def for_classroom(self, classroom_id: str) -> List[Invigilator]:
        return [a.invigilator for a in self.assignments if a.classroom.id == classroom_id]


@dataclass
class SessionAllotment:
    session_key: str
    exams: List[ExamSlot]
    seat_plan: SeatPlan
    invigilator_plan: InvigilatorPlan


@dataclass
class FullAllotment:
    """Allotment for every session, plus the final student/invigilator snapshots."""
    sessions: Dict[str, SessionAllotment] = field(default_factory=dict)
    students: List[Student] = field(default_factory=list)
    invigilators: List[Invigilator] = field(default_factory=list)

    @property
    def total_seated(self) -> int:
        return sum(s.seat_plan.seated_count for s in self.sessions.values())

    @property
    def total_unseated(self) -> int:
        return sum(len(s.seat_plan.unseated) for s in self.sessions.values())

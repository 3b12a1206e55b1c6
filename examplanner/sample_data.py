"""
examplanner/sample_data.py

Generates a demo dataset of first-year students, exam rooms, invigilators and
an exam schedule. The same seed always gives the same data.
"""

import random
from dataclasses import dataclass, field
from typing import List, Dict, Optional
from .models import Student, Classroom, Invigilator, ExamSlot, IneligibilityRecord

DEPARTMENTS: List[str] = [
    "B.Tech Computer Science & Engineering",
    "B.Tech Mechanical Engineering",
    "B.Tech Civil Engineering",
    "B.Tech Electronics & Communication Engineering",
]

COURSES: Dict[str, List[str]] = {
    "B.Tech Computer Science & Engineering": ["CSE Core", "CSE with specialization in AI & ML", "CSE with specialization in Cyber Security"],
    "B.Tech Mechanical Engineering": ["ME Core", "ME with specialization in Robotics", "ME with specialization in Automotive"],
    "B.Tech Civil Engineering": ["CE Core", "CE with specialization in Structural Engineering", "CE with specialization in Environmental Engineering"],
    "B.Tech Electronics & Communication Engineering": ["ECE Core", "ECE with specialization in VLSI Design", "ECE with specialization in Telecommunications"],
}

DEPT_CODES: Dict[str, str] = {
    "B.Tech Computer Science & Engineering": "CSE",
    "B.Tech Mechanical Engineering": "ME",
    "B.Tech Civil Engineering": "CE",
    "B.Tech Electronics & Communication Engineering": "ECE",
}

COMMON_SUBJECTS = [
    {"code": "MA-101", "name": "Engineering Mathematics-I"},
    {"code": "PH-101", "name": "Engineering Physics", "group": "A"},
    {"code": "CH-101", "name": "Engineering Chemistry", "group": "B"},
    {"code": "HS-101", "name": "Professional Communication"},
    {"code": "EV-101", "name": "Environmental Science"},
]

DEPT_SUBJECTS: Dict[str, List[Dict[str, str]]] = {
    "B.Tech Computer Science & Engineering": [{"code": "CS-101", "name": "Programming for Problem Solving"}],
    "B.Tech Mechanical Engineering": [
        {"code": "ME-101", "name": "Engineering Mechanics"},
        {"code": "ME-102", "name": "Workshop Practice"},
    ],
    "B.Tech Civil Engineering": [{"code": "CE-101", "name": "Basic Civil Engineering"}],
    "B.Tech Electronics & Communication Engineering": [{"code": "EC-101", "name": "Basic Electronics Engineering"}],
}

EXAM_DATES = ["2024-09-10", "2024-09-11", "2024-09-12", "2024-09-13", "2024-09-14",
              "2024-09-16", "2024-09-17", "2024-09-18", "2024-09-19", "2024-09-20"]
EXAM_TIMES = ["09:00", "14:00"]
MAX_EXAMS = 50

FIRST_NAMES = ["Aarav", "Vivaan", "Aditya", "Vihaan", "Arjun", "Sai", "Reyansh", "Ayaan", "Krishna", "Ishaan",
               "Saanvi", "Aadhya", "Kiara", "Diya", "Pari", "Ananya", "Riya", "Sitara", "Avni", "Zoya"]
LAST_NAMES = ["Sharma", "Verma", "Gupta", "Singh", "Kumar", "Patel", "Shah", "Mehta", "Joshi", "Das",
              "Reddy", "Menon", "Nair", "Pillai"]

# (id, room_no, building, block, rows, columns, 3-seater rows)
ROOM_LAYOUTS = [
    ("CRA101", "A-101", "Academic Block A", "CS/IT", 8, 5, []),
    ("CRA102", "A-102", "Academic Block A", "CS/IT", 10, 5, []),
    ("CRA201", "A-201", "Academic Block A", "CS/IT", 10, 6, [5, 6]),
    ("CRB101", "B-101", "Academic Block B", "ME/CE/AE", 10, 5, []),
    ("CRB201", "B-201", "Academic Block B", "ME/CE/AE", 15, 5, [7, 8, 9]),
    ("CRC101", "C-101", "Academic Block C", "EE/EC/BT", 7, 4, []),
    ("CRC102", "C-102", "Academic Block C", "EE/EC/BT", 8, 5, [4]),
    ("CRD101", "D-101", "Architecture Block D", "Arch", 10, 4, []),
]


@dataclass
class SampleData:
    students: List[Student] = field(default_factory=list)
    classrooms: List[Classroom] = field(default_factory=list)
    invigilators: List[Invigilator] = field(default_factory=list)
    exam_schedule: List[ExamSlot] = field(default_factory=list)


def generate_bench_capacities(rows: int, cols: int, special_rows: Optional[List[int]] = None,
                              special_capacity: int = 3, default_capacity: int = 2) -> List[int]:
    """Row-major bench capacities; rows listed in `special_rows` (1-based) get 3-seaters."""
    special_rows = special_rows or []
    return [
        special_capacity if r + 1 in special_rows else default_capacity
        for r in range(rows)
        for _ in range(cols)
    ]

def _generate_name(rng: random.Random) -> str:
    return f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}"

def generate_students(count: int, rng: random.Random, year: int = 24) -> List[Student]:
    """
    First-year students spread round-robin over departments and courses; every
    50th is debarred. Split papers are sat by one group only, so students of
    the other group carry an ineligibility record for them.
    """
    students = []
    for i in range(count):
        dept = DEPARTMENTS[i % len(DEPARTMENTS)]
        course = COURSES[dept][i % len(COURSES[dept])]
        group = "A" if (i // len(DEPARTMENTS)) % 2 == 0 else "B"
        is_debarred = (i + 1) % 50 == 0
        students.append(Student(
            id=f"S{i + 1:04d}",
            name=_generate_name(rng),
            roll_no=f"{DEPT_CODES[dept]}{year}-{i + 1:04d}",
            department=dept,
            course=course,
            semester=1,
            section="ABCDEFGH"[i % 8],
            group=group,
            ineligibility_records=[
                IneligibilityRecord(s["code"], f"Group {s['group']} paper")
                for s in COMMON_SUBJECTS if s.get("group") not in (None, group)
            ],
            is_debarred=is_debarred,
            debarment_reason="Attendance shortage" if is_debarred else "",
        ))
    return students

def generate_classrooms() -> List[Classroom]:
    return [
        Classroom(
            id=room_id, room_no=room_no, rows=rows, columns=cols,
            bench_capacities=generate_bench_capacities(rows, cols, special),
            building=building, department_block=block,
        )
        for room_id, room_no, building, block, rows, cols, special in ROOM_LAYOUTS
    ]

def generate_invigilators(count: int, rng: random.Random) -> List[Invigilator]:
    """Every 10th invigilator is marked unavailable."""
    return [
        Invigilator(
            id=f"I{i + 1:03d}",
            name=f"Prof. {_generate_name(rng)}",
            department=DEPARTMENTS[i % len(DEPARTMENTS)],
            is_available=(i + 1) % 10 != 0,
        )
        for i in range(count)
    ]

def generate_exam_schedule(rng: random.Random) -> List[ExamSlot]:
    """
    Shuffles every (department, subject) pair and gives each one its own
    session, scheduling the subject for all courses of the department.
    """
    subjects = []
    for dept in DEPARTMENTS:
        for subject in COMMON_SUBJECTS + DEPT_SUBJECTS.get(dept, []):
            subjects.append((dept, subject))
    rng.shuffle(subjects)

    schedule: List[ExamSlot] = []
    slots = [(date, time) for date in EXAM_DATES for time in EXAM_TIMES]
    for (date, time), (dept, subject) in zip(slots, subjects):
        for course in COURSES[dept]:
            if len(schedule) >= MAX_EXAMS:
                return schedule
            schedule.append(ExamSlot(
                id=f"E{len(schedule) + 1:03d}",
                subject_name=subject["name"],
                subject_code=subject["code"],
                department=dept,
                course=course,
                semester=1,
                date=date,
                time=time,
                duration=180,
                group=subject.get("group"),
            ))
    return schedule


def generate_sample_data(num_students: int = 400, num_invigilators: int = 40, seed: int = 7) -> SampleData:
    rng = random.Random(seed)
    return SampleData(
        students=generate_students(num_students, rng),
        classrooms=generate_classrooms(),
        invigilators=generate_invigilators(num_invigilators, rng),
        exam_schedule=generate_exam_schedule(rng),
    )

"""
examplanner/utils.py
"""
from datetime import datetime
from typing import List, Tuple

# --- Date / Time Formats ---
DATE_FORMAT: str = "%Y-%m-%d"
TIME_FORMAT: str = "%H:%M"
SESSION_KEY_FORMAT: str = f"{DATE_FORMAT} {TIME_FORMAT}"
DAYS: List[str] = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

# Sessions starting before this hour are the morning shift
AFTERNOON_START_HOUR: int = 12

# --- Classroom Defaults ---
DEFAULT_BENCH_CAPACITY: int = 2

# --- Invigilation Rule ---
# (headcount strictly above, invigilators required), checked top-down
INVIGILATOR_THRESHOLDS: List[Tuple[int, int]] = [
    (90, 4),
    (60, 3),
    (19, 2),
]
MIN_INVIGILATORS: int = 1

HEADCOUNT_CAPACITY: str = "capacity"
HEADCOUNT_OCCUPANCY: str = "occupancy"
HEADCOUNT_BASES: Tuple[str, str] = (HEADCOUNT_CAPACITY, HEADCOUNT_OCCUPANCY)

# --- Reporting ---
HIGH_LOAD_DUTIES: int = 3
REPORT_CREATOR: str = "Examplanner"


def make_session_key(date: str, time: str) -> str:
    return f"{date} {time}"

def parse_session_key(session_key: str) -> datetime:
    """Parses 'YYYY-MM-DD HH:MM' into a datetime. Raises ValueError if malformed."""
    return datetime.strptime(session_key.strip(), SESSION_KEY_FORMAT)

def session_date(session_key: str) -> str:
    return session_key.split(" ")[0]

def get_shift_name(time_str: str) -> str:
    t = datetime.strptime(time_str, TIME_FORMAT)
    return "Morning" if t.hour < AFTERNOON_START_HOUR else "Afternoon"

def get_day_of_week(date_str: str) -> str:
    return DAYS[datetime.strptime(date_str, DATE_FORMAT).weekday()]

def make_exam_session_id(date_str: str, time_str: str) -> str:
    """'2024-09-10', '09:00' -> 'EXAM-20240910-0900'"""
    return f"EXAM-{date_str.replace('-', '')}-{time_str.replace(':', '')}"

def required_invigilators(headcount: int) -> int:
    """Step function from a room headcount to the number of invigilators."""
    for threshold, required in INVIGILATOR_THRESHOLDS:
        if headcount > threshold:
            return required
    return MIN_INVIGILATORS

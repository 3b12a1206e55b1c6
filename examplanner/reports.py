"""
examplanner/reports.py

Tabular reports over a full allotment, as pandas DataFrames: invigilation
master data, teacher-wise summary, room-wise report, department load and the
invigilator duty roster.
"""

from datetime import datetime
from typing import List, Dict, Optional
import pandas as pd
from .models import FullAllotment, Classroom, Invigilator, Student
from . import utils

MASTER_COLUMNS = [
    "Exam_Date", "Day", "Shift", "Time", "Course_Name", "Department", "Subject_Name",
    "Subject_Code", "Room_No", "Room_Capacity", "No_of_Students_Allotted",
    "Invigilator_1_Name", "Invigilator_1_ID", "Invigilator_1_Dept",
    "Invigilator_2_Name", "Invigilator_2_ID", "Invigilator_2_Dept",
    "Total_Invigilators", "Room_Zone_Block", "Invigilator_Duty_Type",
    "Teacher_Duty_Count", "Exam_Session_ID", "Created_By", "Created_On",
]


def _unique_join(values: List[str]) -> str:
    return ", ".join(dict.fromkeys(values))


def build_master_report(allotment: FullAllotment, classrooms: List[Classroom],
                        created_on: Optional[datetime] = None) -> pd.DataFrame:
    """
    One row per (session, room) that holds students or invigilators.
    Teacher_Duty_Count is the first invigilator's running duty count up to
    and including that session.
    """
    created_on = created_on or datetime.now()
    rooms_by_id = {room.id: room for room in classrooms}
    duty_counts: Dict[str, int] = {}
    rows = []

    for key in sorted(allotment.sessions, key=utils.parse_session_key):
        session = allotment.sessions[key]
        exam = session.seat_plan.exam
        students_by_room: Dict[str, List] = {}
        invigilators_by_room: Dict[str, List[Invigilator]] = {}

        for seat in session.seat_plan.assignments:
            if not seat.is_empty:
                students_by_room.setdefault(seat.classroom.id, []).append(seat.candidate)

        for a in session.invigilator_plan.assignments:
            students_by_room.setdefault(a.classroom.id, [])
            invigilators_by_room.setdefault(a.classroom.id, []).append(a.invigilator)
            duty_counts[a.invigilator.id] = duty_counts.get(a.invigilator.id, 0) + 1

        for room_id, candidates in students_by_room.items():
            room = rooms_by_id.get(room_id)
            if room is None:
                continue
            invs = invigilators_by_room.get(room_id, [])
            inv1 = invs[0] if len(invs) > 0 else None
            inv2 = invs[1] if len(invs) > 1 else None
            rows.append({
                "Exam_Date": exam.date,
                "Day": utils.get_day_of_week(exam.date),
                "Shift": utils.get_shift_name(exam.time),
                "Time": exam.time,
                "Course_Name": _unique_join([c.student.course for c in candidates]),
                "Department": _unique_join([c.student.department for c in candidates]),
                "Subject_Name": _unique_join([c.exam.subject_name for c in candidates]),
                "Subject_Code": _unique_join([c.exam.subject_code for c in candidates]),
                "Room_No": room.room_no,
                "Room_Capacity": room.capacity,
                "No_of_Students_Allotted": len(candidates),
                "Invigilator_1_Name": inv1.name if inv1 else None,
                "Invigilator_1_ID": inv1.id if inv1 else None,
                "Invigilator_1_Dept": inv1.department if inv1 else None,
                "Invigilator_2_Name": inv2.name if inv2 else None,
                "Invigilator_2_ID": inv2.id if inv2 else None,
                "Invigilator_2_Dept": inv2.department if inv2 else None,
                "Total_Invigilators": len(invs),
                "Room_Zone_Block": room.building,
                "Invigilator_Duty_Type": "Main / Assistant" if len(invs) > 1 else "Main",
                "Teacher_Duty_Count": duty_counts.get(inv1.id) if inv1 else None,
                "Exam_Session_ID": utils.make_exam_session_id(exam.date, exam.time),
                "Created_By": utils.REPORT_CREATOR,
                "Created_On": created_on.strftime("%Y-%m-%d %H:%M"),
            })

    return pd.DataFrame(rows, columns=MASTER_COLUMNS)


def _duty_counts(allotment: FullAllotment) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for session in allotment.sessions.values():
        for a in session.invigilator_plan.assignments:
            counts[a.invigilator.id] = counts.get(a.invigilator.id, 0) + 1
    return counts


def build_teacher_summary(allotment: FullAllotment, invigilators: List[Invigilator],
                          master: pd.DataFrame) -> pd.DataFrame:
    """Duties per invigilator; invigilators without duties are left out."""
    counts = _duty_counts(allotment)
    rows = []
    for inv in invigilators:
        duties = counts.get(inv.id, 0)
        if duties == 0:
            continue
        mine = master[(master["Invigilator_1_ID"] == inv.id) | (master["Invigilator_2_ID"] == inv.id)]
        rows.append({
            "Teacher_Name": inv.name,
            "Dept": inv.department,
            "No_of_Duties": duties,
            "Date_Wise_Rooms": "; ".join(f"{r.Exam_Date} ({r.Room_No})" for r in mine.itertuples()),
            "Remarks": "High Load" if duties > utils.HIGH_LOAD_DUTIES else "",
        })
    return pd.DataFrame(rows, columns=["Teacher_Name", "Dept", "No_of_Duties", "Date_Wise_Rooms", "Remarks"])


def build_room_report(master: pd.DataFrame) -> pd.DataFrame:
    columns = ["Room_No", "Date", "Shift", "Course(s)", "Subject(s)", "Invigilators", "Student_Count"]
    if master.empty:
        return pd.DataFrame(columns=columns)
    report = pd.DataFrame({
        "Room_No": master["Room_No"],
        "Date": master["Exam_Date"],
        "Shift": master["Shift"],
        "Course(s)": master["Course_Name"],
        "Subject(s)": master["Subject_Code"],
        "Invigilators": [
            ", ".join(n for n in (a, b) if isinstance(n, str) and n)
            for a, b in zip(master["Invigilator_1_Name"], master["Invigilator_2_Name"])
        ],
        "Student_Count": master["No_of_Students_Allotted"],
    })
    return report[columns]


def build_department_load(allotment: FullAllotment, invigilators: List[Invigilator]) -> pd.DataFrame:
    counts = _duty_counts(allotment)
    df = pd.DataFrame(
        [{"Department": inv.department, "Duties": counts.get(inv.id, 0)} for inv in invigilators],
        columns=["Department", "Duties"],
    )
    columns = ["Department", "No_of_Teachers", "Total_Duties", "Avg_Duties_per_Teacher"]
    if df.empty:
        return pd.DataFrame(columns=columns)
    load = df.groupby("Department", sort=False).agg(
        No_of_Teachers=("Duties", "size"),
        Total_Duties=("Duties", "sum"),
    ).reset_index()
    load["Avg_Duties_per_Teacher"] = (load["Total_Duties"] / load["No_of_Teachers"]).round(2)
    return load[columns]


def build_duty_roster(allotment: FullAllotment, invigilators: List[Invigilator]) -> pd.DataFrame:
    """
    One row per invigilator with duties, one column per session
    ('YYYY-MM-DD Morning'), holding the room number(s) or '-'.
    """
    keys = sorted(allotment.sessions, key=utils.parse_session_key)
    headers = [f"{utils.session_date(k)} {utils.get_shift_name(k.split(' ')[1])}" for k in keys]

    duties: Dict[str, Dict[str, str]] = {}
    for key, header in zip(keys, headers):
        for a in allotment.sessions[key].invigilator_plan.assignments:
            inv_duties = duties.setdefault(a.invigilator.id, {})
            existing = inv_duties.get(header)
            inv_duties[header] = f"{existing}, {a.classroom.room_no}" if existing else a.classroom.room_no

    rows = []
    for inv in invigilators:
        inv_duties = duties.get(inv.id)
        if not inv_duties:
            continue
        row = {"Invigilator Name": inv.name, "Department": inv.department}
        for header in headers:
            row[header] = inv_duties.get(header, "-")
        row["Total Duties"] = sum(1 for h in headers if h in inv_duties)
        rows.append(row)

    columns = ["Invigilator Name", "Department"] + list(dict.fromkeys(headers)) + ["Total Duties"]
    return pd.DataFrame(rows, columns=columns)


def build_seating_chart(allotment: FullAllotment, session_key: str) -> pd.DataFrame:
    """Seat-by-seat listing of one session."""
    plan = allotment.sessions[session_key].seat_plan
    rows = []
    for seat in plan.assignments:
        student: Optional[Student] = seat.student
        rows.append({
            "Room_No": seat.classroom.room_no,
            "Seat": seat.seat_number,
            "Row": seat.row,
            "Column": seat.col,
            "Roll_No": student.roll_no if student else "",
            "Name": student.name if student else "",
            "Course": seat.course or "",
            "Subject_Code": seat.exam.subject_code if seat.exam else "",
        })
    return pd.DataFrame(rows, columns=["Room_No", "Seat", "Row", "Column", "Roll_No", "Name", "Course", "Subject_Code"])

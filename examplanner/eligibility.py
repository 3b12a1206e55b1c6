"""
examplanner/eligibility.py

Decides which students sit a given exam, and reports who was left out of a
session and why.
"""

from typing import List
from dataclasses import dataclass, field
from .models import Student, Classroom, Invigilator, ExamSlot


def is_registered_for(student: Student, exam: ExamSlot) -> bool:
    """True if the student must sit this exam, ignoring every exclusion."""
    if exam.subject_code in student.eligible_subjects:
        return True
    return student.course == exam.course and student.semester == exam.semester

def get_registered_students(students: List[Student], exam: ExamSlot) -> List[Student]:
    return [s for s in students if is_registered_for(s, exam)]

def get_eligible_students(students: List[Student], exam: ExamSlot) -> List[Student]:
    """
    Returns the students who sit `exam`: registered for it, not debarred,
    not ineligible for its subject and not unavailable for its slot.
    Input order is preserved.
    """
    return [
        s for s in students
        if is_registered_for(s, exam)
        and not s.is_debarred
        and not s.is_ineligible_for(exam.subject_code)
        and not s.is_unavailable_for(exam.id)
    ]


# --- Exclusion Report ---

@dataclass
class ExcludedStudent:
    student: Student
    exam: ExamSlot
    reason: str

@dataclass
class ExcludedClassroom:
    classroom: Classroom
    exam: ExamSlot
    reason: str

@dataclass
class ExcludedInvigilator:
    invigilator: Invigilator
    reason: str

@dataclass
class ExclusionReport:
    """Resources not considered for one session, with the reason for each."""
    debarred_students: List[Student] = field(default_factory=list)
    ineligible_students: List[ExcludedStudent] = field(default_factory=list)
    unavailable_students: List[ExcludedStudent] = field(default_factory=list)
    unavailable_classrooms: List[ExcludedClassroom] = field(default_factory=list)
    unavailable_invigilators: List[ExcludedInvigilator] = field(default_factory=list)

    @property
    def has_exclusions(self) -> bool:
        return bool(
            self.debarred_students or self.ineligible_students or self.unavailable_students
            or self.unavailable_classrooms or self.unavailable_invigilators
        )


def build_exclusion_report(students: List[Student], classrooms: List[Classroom],
                           invigilators: List[Invigilator], exams: List[ExamSlot]) -> ExclusionReport:
    """
    Collects everything excluded from the session made of `exams`.
    Only students registered for one of the exams are reported.
    """
    report = ExclusionReport()
    seen_debarred = set()

    for exam in exams:
        for student in get_registered_students(students, exam):
            if student.is_debarred:
                if student.id not in seen_debarred:
                    seen_debarred.add(student.id)
                    report.debarred_students.append(student)
                continue
            record = student.ineligibility_for(exam.subject_code)
            if record:
                report.ineligible_students.append(
                    ExcludedStudent(student, exam, record.reason or "Not specified")
                )
                continue
            slot = next((s for s in student.unavailable_slots if s.slot_id == exam.id), None)
            if slot:
                report.unavailable_students.append(
                    ExcludedStudent(student, exam, slot.reason or "Not specified")
                )

    for classroom in classrooms:
        for exam in exams:
            slot = next((s for s in classroom.unavailable_slots if s.slot_id == exam.id), None)
            if slot:
                report.unavailable_classrooms.append(
                    ExcludedClassroom(classroom, exam, slot.reason or "Not specified")
                )
                break

    exam_ids = {exam.id for exam in exams}
    for invigilator in invigilators:
        if not invigilator.is_available:
            report.unavailable_invigilators.append(ExcludedInvigilator(invigilator, "Marked unavailable"))
            continue
        slot = next((s for s in invigilator.unavailable_slots if s.slot_id in exam_ids), None)
        if slot:
            report.unavailable_invigilators.append(
                ExcludedInvigilator(invigilator, slot.reason or "Not specified")
            )

    return report

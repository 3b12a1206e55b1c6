"""
examplanner/exceptions.py

Errors raised by the allotment engine. Capacity and invigilator shortfalls
are not errors; they are returned alongside the plans.
"""


class ExamplannerError(Exception):
    """Base class for every error raised by examplanner."""
    pass


class InputInconsistency(ExamplannerError, ValueError):
    """Raised when allotment inputs are missing or contradict each other."""
    pass


class ConstraintViolation(ExamplannerError, AssertionError):
    """Raised when a produced seat plan breaks the same-course bench rule."""
    pass

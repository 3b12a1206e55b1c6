"""
Examplanner: exam seat allotment and invigilator duty assignment.
"""

__version__ = "0.1.0"

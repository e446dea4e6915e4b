"""
Error taxonomy for the transcript tracker.

Calculators never raise for well-formed input; these come from the data
layer (missing students, unreadable exports) and from the CLI.
"""

from typing import Optional


class TranscriptTrackerError(Exception):
    """Base error carrying a machine-readable code"""

    code = "TRANSCRIPT_ERROR"

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class DataValidationError(TranscriptTrackerError):
    code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class StudentNotFoundError(TranscriptTrackerError):
    code = "NOT_FOUND"

    def __init__(self, student_id: str):
        super().__init__(f"Student with id {student_id} not found")
        self.student_id = student_id


class DataLoadError(TranscriptTrackerError):
    """A required data source could not be loaded"""

    code = "DATA_LOAD_ERROR"

    def __init__(self, message: str, errors: Optional[list] = None):
        super().__init__(message)
        self.errors = list(errors or [])


__all__ = [
    "TranscriptTrackerError",
    "DataValidationError",
    "StudentNotFoundError",
    "DataLoadError",
]

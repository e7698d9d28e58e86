"""
Error types shared by the engine, the record store and the front-end.

Validation failures are a single ``ValidationError`` tagged with an
``ErrorKind``. The kind's ``category`` tells whether the problem sits on a
course, on an academic limit (unit band) or on the student's prior record.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class ValidationCategory(Enum):
    COURSE = "course"
    ACADEMIC_CONSTRAINT = "academic_constraint"
    STUDENT = "student"


class ErrorKind(Enum):
    INVALID_COURSE_NAME = ("invalid_course_name", ValidationCategory.COURSE)
    INVALID_UNITS = ("invalid_units", ValidationCategory.COURSE)
    INVALID_GRADE = ("invalid_grade", ValidationCategory.COURSE)
    DUPLICATE_COURSE = ("duplicate_course", ValidationCategory.COURSE)
    UNIT_BAND_VIOLATION = ("unit_band_violation", ValidationCategory.ACADEMIC_CONSTRAINT)
    INVALID_PRIOR_CGPA = ("invalid_prior_cgpa", ValidationCategory.STUDENT)
    INVALID_PRIOR_UNITS = ("invalid_prior_units", ValidationCategory.STUDENT)
    INCONSISTENT_PRIOR_DATA = ("inconsistent_prior_data", ValidationCategory.STUDENT)
    INVALID_CGPA = ("invalid_cgpa", ValidationCategory.STUDENT)

    def __init__(self, code: str, category: ValidationCategory) -> None:
        self.code = code
        self.category = category


class BoundDirection(Enum):
    MINIMUM = "minimum"
    MAXIMUM = "maximum"


class CalculationErrorKind(Enum):
    EMPTY_COURSE_LIST = "empty_course_list"
    ZERO_UNITS = "zero_units"


class CGPACalculatorError(Exception):
    pass


class ValidationError(CGPACalculatorError):
    def __init__(
        self,
        message: str,
        kind: ErrorKind,
        *,
        field: Optional[str] = None,
        value: Any = None,
        limit: Optional[float] = None,
        direction: Optional[BoundDirection] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.field = field
        self.value = value
        self.limit = limit
        self.direction = direction

    @property
    def category(self) -> ValidationCategory:
        return self.kind.category

    @property
    def is_minimum_violation(self) -> bool:
        return self.direction is BoundDirection.MINIMUM

    @property
    def is_maximum_violation(self) -> bool:
        return self.direction is BoundDirection.MAXIMUM

    def __str__(self) -> str:
        parts = [self.message]
        if self.field is not None:
            parts.append(f"[Field: {self.field}]")
        if self.value is not None:
            parts.append(f"[Invalid Value: {self.value}]")
        if self.limit is not None and self.direction is not None:
            parts.append(f"[{self.direction.value.capitalize()}: {self.limit}]")
        return " ".join(parts)


class CalculationError(CGPACalculatorError):
    def __init__(self, message: str, kind: CalculationErrorKind) -> None:
        super().__init__(message)
        self.kind = kind


class RecordStoreError(CGPACalculatorError):
    pass


class RecordParseError(RecordStoreError):
    pass

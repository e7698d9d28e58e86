from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from cgpacalc.core.grades import GradeScale, grade_points_for
from cgpacalc.core.validation import (
    parse_prior_cgpa,
    parse_prior_units,
    parse_units_text,
    validate_course_name,
    validate_course_units,
    validate_grade_letter,
)


@dataclass(frozen=True)
class Course:
    name: str
    units: int
    grade: str

    def __post_init__(self) -> None:
        # Frozen: normalised values go through object.__setattr__.
        object.__setattr__(self, "name", validate_course_name(self.name))
        object.__setattr__(self, "units", validate_course_units(self.units))
        object.__setattr__(self, "grade", validate_grade_letter(self.grade))

    @classmethod
    def from_text(cls, name: str, units_text: str, grade: str) -> "Course":
        return cls(name=name, units=parse_units_text(units_text), grade=grade)

    def grade_points(self, scale: Optional[GradeScale] = None) -> float:
        return grade_points_for(self.grade, scale)

    def credit_points(self, scale: Optional[GradeScale] = None) -> float:
        return self.grade_points(scale) * self.units


@dataclass(frozen=True)
class PriorRecord:
    """Prior cumulative standing. ``None`` means "not entered"."""

    cgpa: Optional[float] = None
    units: Optional[int] = None

    @classmethod
    def from_text(cls, cgpa_text: Optional[str], units_text: Optional[str]) -> "PriorRecord":
        return cls(cgpa=parse_prior_cgpa(cgpa_text), units=parse_prior_units(units_text))

    @property
    def is_new_student(self) -> bool:
        return self.cgpa is None and self.units is None

    @property
    def is_consistent(self) -> bool:
        return (self.cgpa is None) == (self.units is None)

    def as_text(self) -> Tuple[str, str]:
        cgpa_text = "" if self.cgpa is None else repr(self.cgpa)
        units_text = "" if self.units is None else str(self.units)
        return cgpa_text, units_text


@dataclass(frozen=True)
class SemesterRecord:
    courses: Tuple[Course, ...] = ()
    prior: PriorRecord = field(default_factory=PriorRecord)

    def __post_init__(self) -> None:
        object.__setattr__(self, "courses", tuple(self.courses))

    @property
    def total_units(self) -> int:
        return sum(course.units for course in self.courses)


@dataclass(frozen=True)
class CalculationResult:
    semester_gpa: float
    updated_cgpa: float
    classification: str
    total_units: int
    semester_units: int
    semester_grade_points: float
    prior: PriorRecord = field(default_factory=PriorRecord)
    warnings: Tuple[str, ...] = ()

from dataclasses import dataclass, field
from typing import List

from cgpacalc.core.models import Course
from cgpacalc.core.validation import validate_unique_names


@dataclass
class SessionState:
    courses: List[Course] = field(default_factory=list)
    prior_cgpa_text: str = ""
    prior_units_text: str = ""
    dirty: bool = False

    @property
    def total_units(self) -> int:
        return sum(course.units for course in self.courses)

    def add_course(self, course: Course) -> None:
        validate_unique_names([*(c.name for c in self.courses), course.name])
        self.courses.append(course)
        self.dirty = True

    def remove_course(self, index: int) -> Course:
        removed = self.courses.pop(index)
        self.dirty = True
        return removed

    def set_prior(self, cgpa_text: str, units_text: str) -> None:
        if (cgpa_text, units_text) != (self.prior_cgpa_text, self.prior_units_text):
            self.prior_cgpa_text = cgpa_text
            self.prior_units_text = units_text
            self.dirty = True

    def replace(self, courses: List[Course], cgpa_text: str, units_text: str) -> None:
        self.courses = list(courses)
        self.prior_cgpa_text = cgpa_text
        self.prior_units_text = units_text
        self.dirty = False

    def mark_saved(self) -> None:
        self.dirty = False

    def clear(self) -> None:
        self.courses = []
        self.prior_cgpa_text = ""
        self.prior_units_text = ""
        self.dirty = True

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

from cgpacalc.config.settings import settings
from cgpacalc.core.errors import ErrorKind, ValidationError


@dataclass(frozen=True)
class GradeScale:
    """Letter grade -> grade-point table, in descending order of points."""

    points: Tuple[Tuple[str, float], ...]

    def __post_init__(self) -> None:
        if not self.points:
            raise ValueError("Grade scale needs at least one letter grade")

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, float]]) -> "GradeScale":
        ordered = sorted(
            ((letter.strip().upper(), float(value)) for letter, value in pairs),
            key=lambda pair: pair[1],
            reverse=True,
        )
        return cls(tuple(ordered))

    @classmethod
    def from_settings(cls) -> "GradeScale":
        return cls.from_pairs(settings.grade_points)

    @property
    def mapping(self) -> Dict[str, float]:
        return dict(self.points)

    @property
    def top_points(self) -> float:
        return self.points[0][1]

    @property
    def letters(self) -> Tuple[str, ...]:
        return tuple(letter for letter, _ in self.points)

    def normalise(self, letter_grade: str) -> str:
        letter = letter_grade.strip().upper() if isinstance(letter_grade, str) else None
        if letter not in self.mapping:
            raise ValidationError(
                f"Grade must be one of {', '.join(self.letters)}",
                ErrorKind.INVALID_GRADE,
                field="grade",
                value=letter_grade,
            )
        return letter

    def points_for(self, letter_grade: str) -> float:
        return self.mapping[self.normalise(letter_grade)]

    def is_valid(self, letter_grade: str) -> bool:
        try:
            self.normalise(letter_grade)
        except ValidationError:
            return False
        return True


DEFAULT_SCALE = GradeScale.from_settings()


def grade_points_for(letter_grade: str, scale: Optional[GradeScale] = None) -> float:
    return (scale or DEFAULT_SCALE).points_for(letter_grade)


def is_valid_grade(letter_grade: str, scale: Optional[GradeScale] = None) -> bool:
    return (scale or DEFAULT_SCALE).is_valid(letter_grade)

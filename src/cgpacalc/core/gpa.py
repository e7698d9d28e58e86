from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Sequence, Tuple

from cgpacalc.core.errors import (
    BoundDirection,
    CalculationError,
    CalculationErrorKind,
    ErrorKind,
    ValidationError,
)
from cgpacalc.core.grades import GradeScale
from cgpacalc.core.models import Course
from cgpacalc.core.validation import validate_prior_pair


def semester_totals(courses: Iterable[Course], scale: Optional[GradeScale] = None) -> Tuple[float, int]:
    """
    Returns (Σ(grade_point * units), Σ(units)) for the given courses.
    """
    grade_points = 0.0
    total_units = 0
    for course in courses:
        grade_points += course.credit_points(scale)
        total_units += course.units
    return grade_points, total_units


def compute_semester_gpa(courses: Sequence[Course], scale: Optional[GradeScale] = None) -> float:
    """
    GPA = Σ(grade_point * units) / Σ(units), unrounded.
    """
    if not courses:
        raise CalculationError(
            "Course list cannot be empty for GPA calculation",
            CalculationErrorKind.EMPTY_COURSE_LIST,
        )
    grade_points, total_units = semester_totals(courses, scale)
    if total_units <= 0:
        raise CalculationError("Total course units cannot be zero", CalculationErrorKind.ZERO_UNITS)
    return grade_points / total_units


def compute_updated_cgpa(
    semester_grade_points: float,
    semester_units: int,
    prior_cgpa: Optional[float] = None,
    prior_units: Optional[int] = None,
) -> Tuple[float, int]:
    """
    New student: CGPA is the semester GPA.
    Returning student: CGPA = (prior_cgpa * prior_units + semester_grade_points)
                              / (prior_units + semester_units)
    Returns (cgpa, total_units).
    """
    validate_prior_pair(prior_cgpa, prior_units)

    if prior_cgpa is None or prior_units is None:
        total_grade_points = semester_grade_points
        total_units = semester_units
    else:
        total_grade_points = prior_cgpa * prior_units + semester_grade_points
        total_units = prior_units + semester_units

    if total_units <= 0:
        raise CalculationError("Updated total units cannot be zero", CalculationErrorKind.ZERO_UNITS)
    return total_grade_points / total_units, total_units


def validate_unit_band(total_units: int, minimum: int, maximum: int) -> None:
    if total_units < minimum:
        raise ValidationError(
            "Minimum required units per semester not met",
            ErrorKind.UNIT_BAND_VIOLATION,
            field="semester_units",
            value=total_units,
            limit=minimum,
            direction=BoundDirection.MINIMUM,
        )
    if total_units > maximum:
        raise ValidationError(
            "Maximum allowed units per semester exceeded",
            ErrorKind.UNIT_BAND_VIOLATION,
            field="semester_units",
            value=total_units,
            limit=maximum,
            direction=BoundDirection.MAXIMUM,
        )


def round_half_up(value: float, places: int = 2) -> float:
    if places < 0:
        raise ValueError("Decimal places cannot be negative")
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def calculation_breakdown(courses: Sequence[Course], scale: Optional[GradeScale] = None) -> str:
    if not courses:
        return "No courses available for calculation breakdown"

    lines = ["Calculation Breakdown:", "===================="]
    for course in courses:
        points = course.grade_points(scale)
        lines.append(
            f"{course.name:<20}: {course.units} units x {points:.1f} points = {points * course.units:.2f} credit points"
        )
    grade_points, total_units = semester_totals(courses, scale)
    lines.append("--------------------")
    lines.append(f"Total Credit Points: {grade_points:.2f}")
    lines.append(f"Total Units: {total_units}")
    lines.append(f"GPA: {grade_points:.2f} / {total_units} = {grade_points / total_units:.2f}")
    return "\n".join(lines)

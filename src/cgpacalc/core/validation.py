from typing import Iterable, List, Optional

from cgpacalc.config.settings import settings
from cgpacalc.core.errors import BoundDirection, ErrorKind, ValidationError


def validate_course_name(name: str, *, max_length: Optional[int] = None) -> str:
    max_length = max_length or settings.max_course_name_length
    cleaned = name.strip() if isinstance(name, str) else ""
    if not cleaned or len(cleaned) > max_length:
        raise ValidationError(
            f"Course name must be 1-{max_length} characters",
            ErrorKind.INVALID_COURSE_NAME,
            field="name",
            value=name,
        )
    if len(cleaned.splitlines()) != 1:
        raise ValidationError(
            "Course name must fit on one line",
            ErrorKind.INVALID_COURSE_NAME,
            field="name",
            value=name,
        )
    return cleaned


def validate_grade_letter(grade: str) -> str:
    letter = grade.strip().upper() if isinstance(grade, str) else ""
    if not letter or len(letter.split()) != 1:
        raise ValidationError(
            "Grade must be a single letter grade",
            ErrorKind.INVALID_GRADE,
            field="grade",
            value=grade,
        )
    return letter


def validate_course_units(
    units: int,
    *,
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
) -> int:
    minimum = settings.min_course_units if minimum is None else minimum
    maximum = settings.max_course_units if maximum is None else maximum
    message = f"Units must be between {minimum}-{maximum}"
    if isinstance(units, bool) or not isinstance(units, int):
        raise ValidationError(message, ErrorKind.INVALID_UNITS, field="units", value=units)
    if units < minimum:
        raise ValidationError(
            message,
            ErrorKind.INVALID_UNITS,
            field="units",
            value=units,
            limit=minimum,
            direction=BoundDirection.MINIMUM,
        )
    if units > maximum:
        raise ValidationError(
            message,
            ErrorKind.INVALID_UNITS,
            field="units",
            value=units,
            limit=maximum,
            direction=BoundDirection.MAXIMUM,
        )
    return units


def parse_units_text(units_text: str) -> int:
    try:
        return int(str(units_text).strip())
    except ValueError as exc:
        raise ValidationError(
            "Units must be a whole number",
            ErrorKind.INVALID_UNITS,
            field="units",
            value=units_text,
        ) from exc


def validate_cgpa_value(
    cgpa: float,
    *,
    kind: ErrorKind = ErrorKind.INVALID_CGPA,
    field: str = "cgpa",
    maximum: Optional[float] = None,
) -> float:
    maximum = settings.max_cgpa if maximum is None else maximum
    if cgpa != cgpa or cgpa < 0.0 or cgpa > maximum:
        raise ValidationError(
            f"CGPA must be between 0.00-{maximum:.2f}",
            kind,
            field=field,
            value=cgpa,
            limit=0.0 if cgpa < 0.0 else maximum,
            direction=BoundDirection.MINIMUM if cgpa < 0.0 else BoundDirection.MAXIMUM,
        )
    return cgpa


def parse_prior_cgpa(cgpa_text: Optional[str], *, maximum: Optional[float] = None) -> Optional[float]:
    if cgpa_text is None or not str(cgpa_text).strip():
        return None
    try:
        value = float(str(cgpa_text).strip())
    except ValueError as exc:
        raise ValidationError(
            "Current CGPA must be a valid decimal number",
            ErrorKind.INVALID_PRIOR_CGPA,
            field="current_cgpa",
            value=cgpa_text,
        ) from exc
    return validate_cgpa_value(
        value,
        kind=ErrorKind.INVALID_PRIOR_CGPA,
        field="current_cgpa",
        maximum=maximum,
    )


def parse_prior_units(units_text: Optional[str]) -> Optional[int]:
    if units_text is None or not str(units_text).strip():
        return None
    try:
        value = int(str(units_text).strip())
    except ValueError as exc:
        raise ValidationError(
            "Cumulative units must be a valid whole number",
            ErrorKind.INVALID_PRIOR_UNITS,
            field="cumulative_units",
            value=units_text,
        ) from exc
    if value < 0:
        raise ValidationError(
            "Cumulative units cannot be negative",
            ErrorKind.INVALID_PRIOR_UNITS,
            field="cumulative_units",
            value=value,
            limit=0,
            direction=BoundDirection.MINIMUM,
        )
    return value


def validate_prior_pair(cgpa: Optional[float], units: Optional[int]) -> None:
    if cgpa is not None and units is None:
        raise ValidationError(
            "Current CGPA provided but cumulative units missing",
            ErrorKind.INCONSISTENT_PRIOR_DATA,
            field="cumulative_units",
        )
    if cgpa is None and units is not None:
        raise ValidationError(
            "Cumulative units provided but current CGPA missing",
            ErrorKind.INCONSISTENT_PRIOR_DATA,
            field="current_cgpa",
        )


def find_duplicate_names(names: Iterable[str]) -> List[str]:
    seen = set()
    duplicates: List[str] = []
    for name in names:
        key = name.strip().casefold()
        if key in seen and name not in duplicates:
            duplicates.append(name)
        seen.add(key)
    return duplicates


def validate_unique_names(names: Iterable[str]) -> None:
    duplicates = find_duplicate_names(names)
    if duplicates:
        raise ValidationError(
            f"Duplicate course detected: {duplicates[0]}",
            ErrorKind.DUPLICATE_COURSE,
            field="name",
            value=duplicates[0],
        )

import random
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

from cgpacalc.config.settings import settings
from cgpacalc.core.gpa import round_half_up
from cgpacalc.core.validation import validate_cgpa_value

FIRST_CLASS = "First Class"
SECOND_CLASS_UPPER = "Second Class Upper"
SECOND_CLASS_LOWER = "Second Class Lower"
THIRD_CLASS = "Third Class"
FAIL = "Fail"


@dataclass(frozen=True)
class ClassificationBand:
    label: str
    minimum: float
    color: str


def build_bands(thresholds: Sequence[float]) -> Tuple[ClassificationBand, ...]:
    """
    thresholds: (first, second_upper, second_lower, third) minimums, highest first
    """
    first, upper, lower, third = thresholds
    if not first > upper > lower > third >= 0.0:
        raise ValueError("Classification thresholds must be strictly descending and non-negative")
    return (
        ClassificationBand(FIRST_CLASS, first, "#2E7D32"),
        ClassificationBand(SECOND_CLASS_UPPER, upper, "#1976D2"),
        ClassificationBand(SECOND_CLASS_LOWER, lower, "#F57C00"),
        ClassificationBand(THIRD_CLASS, third, "#FF5722"),
        ClassificationBand(FAIL, 0.0, "#D32F2F"),
    )


DEFAULT_BANDS = build_bands(settings.class_thresholds)

MESSAGES: Dict[str, Tuple[str, ...]] = {
    "excellent": (
        "Excellent work! Keep it up!",
        "Outstanding performance! You're crushing it!",
        "Phenomenal grades! You're on fire!",
        "Amazing work! You're setting the bar high!",
    ),
    "good": (
        "Great job! You're doing well!",
        "Solid performance! Keep up the momentum!",
        "Nice work! You're on the right track!",
        "Good progress! Stay consistent!",
    ),
    "average": (
        "Above average, you can do better! Time to lock in!",
        "Good foundation! Let's push for excellence!",
        "You're getting there! Time to step it up!",
        "Not bad! But you've got more potential!",
    ),
    "needs_improvement": (
        "You've got this! Every expert was once a beginner!",
        "Tough semester? Fresh start ahead!",
        "Every setback is a setup for a comeback!",
        "Growth happens outside comfort zones!",
    ),
    "critical": (
        "New semester, new opportunities! You can turn this around!",
        "Every journey starts with a single step!",
        "Focus on progress, not perfection!",
        "Small steps lead to big changes!",
    ),
}

GOOD_TIER_MIN = 4.00


def band_for(cgpa: float, bands: Optional[Sequence[ClassificationBand]] = None) -> ClassificationBand:
    bands = bands or DEFAULT_BANDS
    for band in bands:
        if cgpa >= band.minimum:
            return band
    return bands[-1]


def classify(cgpa: float, bands: Optional[Sequence[ClassificationBand]] = None) -> str:
    return band_for(cgpa, bands).label


def band_range(band: ClassificationBand, bands: Optional[Sequence[ClassificationBand]] = None) -> Tuple[float, float]:
    """Display range for a band: its minimum up to just below the next band."""
    bands = bands or DEFAULT_BANDS
    index = list(bands).index(band)
    if index == 0:
        return band.minimum, settings.max_cgpa
    return band.minimum, round(bands[index - 1].minimum - 0.01, 2)


def is_passing(cgpa: float, bands: Optional[Sequence[ClassificationBand]] = None) -> bool:
    validate_cgpa_value(cgpa)
    bands = bands or DEFAULT_BANDS
    return cgpa >= bands[-2].minimum


def points_to_next_band(cgpa: float, bands: Optional[Sequence[ClassificationBand]] = None) -> float:
    validate_cgpa_value(cgpa)
    bands = bands or DEFAULT_BANDS
    next_minimum = None
    for band in bands:
        if cgpa < band.minimum:
            next_minimum = band.minimum
    if next_minimum is None:
        return 0.0
    return next_minimum - cgpa


def _message_tier(cgpa: float, bands: Sequence[ClassificationBand]) -> str:
    if cgpa >= bands[0].minimum:
        return "excellent"
    if cgpa >= GOOD_TIER_MIN:
        return "good"
    if cgpa >= bands[2].minimum:
        return "average"
    if cgpa >= bands[3].minimum:
        return "needs_improvement"
    return "critical"


def motivational_message(
    cgpa: float,
    rng: Optional[random.Random] = None,
    bands: Optional[Sequence[ClassificationBand]] = None,
) -> str:
    validate_cgpa_value(cgpa)
    messages = MESSAGES[_message_tier(cgpa, bands or DEFAULT_BANDS)]
    return (rng or random).choice(messages)


def performance_summary(
    cgpa: float,
    rng: Optional[random.Random] = None,
    bands: Optional[Sequence[ClassificationBand]] = None,
) -> str:
    validate_cgpa_value(cgpa)
    band = band_for(cgpa, bands)
    low, high = band_range(band, bands)
    return "\n".join(
        [
            f"CGPA: {round_half_up(cgpa, settings.decimal_places):.{settings.decimal_places}f}",
            f"Classification: {band.label}",
            f"Range: {low:.2f} - {high:.2f}",
            f"Message: {motivational_message(cgpa, rng, bands)}",
        ]
    )


def classification_ranges(bands: Optional[Sequence[ClassificationBand]] = None) -> str:
    bands = bands or DEFAULT_BANDS
    lines = ["Degree Classification Ranges:", "============================"]
    for band in bands:
        low, high = band_range(band, bands)
        lines.append(f"{band.label:<20}: {low:.2f} - {high:.2f}")
    return "\n".join(lines)

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from cgpacalc.config.settings import Settings, settings as default_settings
from cgpacalc.core.classification import DEFAULT_BANDS, ClassificationBand, classify
from cgpacalc.core.errors import ValidationError
from cgpacalc.core.gpa import compute_semester_gpa, compute_updated_cgpa, semester_totals, validate_unit_band
from cgpacalc.core.grades import GradeScale, DEFAULT_SCALE
from cgpacalc.core.models import CalculationResult, Course, PriorRecord, SemesterRecord
from cgpacalc.core.validation import parse_prior_cgpa, parse_prior_units, validate_prior_pair, validate_unique_names
from cgpacalc.services.record_store import RecordStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadedRecord:
    courses: List[Course]
    prior_cgpa_text: str
    prior_units_text: str


class CalculatorService:
    """Entry points the front-end calls: validation, calculation and save/load."""

    def __init__(
        self,
        store: RecordStore,
        settings: Settings = default_settings,
        scale: Optional[GradeScale] = None,
        bands: Optional[Sequence[ClassificationBand]] = None,
    ) -> None:
        self.store = store
        self.settings = settings
        self.scale = scale or DEFAULT_SCALE
        self.bands = tuple(bands or DEFAULT_BANDS)
        if self.scale.top_points > settings.max_cgpa:
            raise ValueError(
                f"Grade scale tops out at {self.scale.top_points}, above the maximum CGPA {settings.max_cgpa}"
            )

    @classmethod
    def from_settings(cls) -> "CalculatorService":
        return cls(RecordStore.from_settings())

    def validate(self, courses: Sequence[Course], prior_cgpa_text: str, prior_units_text: str) -> PriorRecord:
        prior = PriorRecord(
            cgpa=parse_prior_cgpa(prior_cgpa_text, maximum=self.settings.max_cgpa),
            units=parse_prior_units(prior_units_text),
        )
        validate_prior_pair(prior.cgpa, prior.units)
        for course in courses:
            self.scale.normalise(course.grade)
        validate_unique_names(course.name for course in courses)
        validate_unit_band(
            sum(course.units for course in courses),
            self.settings.min_semester_units,
            self.settings.max_semester_units,
        )
        return prior

    def can_calculate(self, courses: Sequence[Course], prior_cgpa_text: str, prior_units_text: str) -> bool:
        if not courses:
            return False
        try:
            self.validate(courses, prior_cgpa_text, prior_units_text)
        except ValidationError:
            return False
        return True

    def calculate(
        self, courses: Sequence[Course], prior_cgpa_text: str, prior_units_text: str
    ) -> CalculationResult:
        prior = self.validate(courses, prior_cgpa_text, prior_units_text)

        semester_gpa = compute_semester_gpa(courses, self.scale)
        grade_points, semester_units = semester_totals(courses, self.scale)
        updated_cgpa, total_units = compute_updated_cgpa(grade_points, semester_units, prior.cgpa, prior.units)

        warnings: List[str] = []
        if prior.units is not None and prior.units < self.settings.min_cumulative_units:
            warnings.append(
                f"Cumulative units below {self.settings.min_cumulative_units} may affect CGPA accuracy"
            )

        result = CalculationResult(
            semester_gpa=semester_gpa,
            updated_cgpa=updated_cgpa,
            classification=self.classify(updated_cgpa),
            total_units=total_units,
            semester_units=semester_units,
            semester_grade_points=grade_points,
            prior=prior,
            warnings=tuple(warnings),
        )
        logger.info(
            "calculation_done courses=%s semester_units=%s gpa=%.4f cgpa=%.4f class=%s",
            len(courses),
            semester_units,
            semester_gpa,
            updated_cgpa,
            result.classification,
        )
        return result

    def classify(self, cgpa: float) -> str:
        return classify(cgpa, self.bands)

    def save_record(self, courses: Sequence[Course], prior_cgpa_text: str, prior_units_text: str) -> Path:
        record = SemesterRecord(courses=tuple(courses), prior=self._lenient_prior(prior_cgpa_text, prior_units_text))
        return self.store.save(record)

    def load_record(self) -> Optional[LoadedRecord]:
        record = self.store.load()
        if record is None:
            return None
        cgpa_text, units_text = record.prior.as_text()
        return LoadedRecord(courses=list(record.courses), prior_cgpa_text=cgpa_text, prior_units_text=units_text)

    def _lenient_prior(self, prior_cgpa_text: str, prior_units_text: str) -> PriorRecord:
        # Unparseable prior values are saved as absent.
        try:
            cgpa = parse_prior_cgpa(prior_cgpa_text, maximum=self.settings.max_cgpa)
        except ValidationError:
            logger.warning("save_prior_cgpa_dropped value=%r", prior_cgpa_text)
            cgpa = None
        try:
            units = parse_prior_units(prior_units_text)
        except ValidationError:
            logger.warning("save_prior_units_dropped value=%r", prior_units_text)
            units = None
        return PriorRecord(cgpa=cgpa, units=units)

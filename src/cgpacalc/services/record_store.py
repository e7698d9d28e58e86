from __future__ import annotations

import logging
import os
import re
import shutil
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from cgpacalc.config.settings import settings
from cgpacalc.core.errors import RecordParseError, RecordStoreError, ValidationError
from cgpacalc.core.grades import DEFAULT_SCALE, GradeScale
from cgpacalc.core.models import Course, PriorRecord, SemesterRecord

logger = logging.getLogger(__name__)

HEADER = "# CGPA Calculator data"
KEY_CGPA = "CURRENT_CGPA"
KEY_UNITS = "CUMULATIVE_UNITS"
KEY_COUNT = "COURSE_COUNT"
BACKUP_DATE_FORMAT = "%Y%m%d_%H%M%S"
COURSE_KEY_RE = re.compile(r"^COURSE_(0|[1-9][0-9]{0,8})_(?:NAME|UNITS|GRADE)$")


def _course_key(index: int, attr: str) -> str:
    return f"COURSE_{index}_{attr}"


def dump_record(record: SemesterRecord, *, saved_at: Optional[datetime] = None) -> str:
    saved_at = saved_at or datetime.now()
    cgpa_text, units_text = record.prior.as_text()
    lines = [
        HEADER,
        f"# Saved {saved_at.isoformat(timespec='seconds')}",
        f"{KEY_CGPA}={cgpa_text}",
        f"{KEY_UNITS}={units_text}",
        f"{KEY_COUNT}={len(record.courses)}",
        "",
    ]
    for index, course in enumerate(record.courses):
        lines.append(f"{_course_key(index, 'NAME')}={course.name}")
        lines.append(f"{_course_key(index, 'UNITS')}={course.units}")
        lines.append(f"{_course_key(index, 'GRADE')}={course.grade}")
    return "\n".join(lines) + "\n"


def _read_pairs(text: str) -> Dict[str, str]:
    pairs: Dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        pairs[key.strip()] = value.strip()
    return pairs


def _optional_float(pairs: Dict[str, str], key: str) -> Optional[float]:
    value = pairs.get(key, "")
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        logger.warning("record_field_ignored key=%s value=%r", key, value)
        return None


def _optional_int(pairs: Dict[str, str], key: str) -> Optional[int]:
    value = pairs.get(key, "")
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        logger.warning("record_field_ignored key=%s value=%r", key, value)
        return None


def _course_indices(pairs: Dict[str, str], count: int) -> List[int]:
    indices = set()
    for key in pairs:
        match = COURSE_KEY_RE.match(key)
        if match and int(match.group(1)) < count:
            indices.add(int(match.group(1)))
    return sorted(indices)


def parse_record(text: str, scale: Optional[GradeScale] = None) -> SemesterRecord:
    scale = scale or DEFAULT_SCALE
    pairs = _read_pairs(text)

    count_text = pairs.get(KEY_COUNT)
    if count_text is None:
        raise RecordParseError(f"Missing {KEY_COUNT} in saved data")
    try:
        count = int(count_text)
    except ValueError as exc:
        raise RecordParseError(f"Invalid {KEY_COUNT}: {count_text!r}") from exc
    if count < 0:
        raise RecordParseError(f"Invalid {KEY_COUNT}: {count_text!r}")

    indices = _course_indices(pairs, count)
    if len(indices) < count:
        logger.warning("record_courses_missing expected=%s found=%s", count, len(indices))

    courses: List[Course] = []
    for index in indices:
        name = pairs.get(_course_key(index, "NAME"))
        units = pairs.get(_course_key(index, "UNITS"))
        grade = pairs.get(_course_key(index, "GRADE"))
        if name is None or units is None or grade is None:
            logger.warning("record_course_skipped index=%s reason=incomplete", index)
            continue
        try:
            course = Course.from_text(name, units, grade)
            scale.normalise(course.grade)
        except ValidationError as exc:
            logger.warning("record_course_skipped index=%s reason=%s", index, exc)
            continue
        courses.append(course)

    prior = PriorRecord(cgpa=_optional_float(pairs, KEY_CGPA), units=_optional_int(pairs, KEY_UNITS))
    return SemesterRecord(courses=tuple(courses), prior=prior)


class RecordStore:
    def __init__(
        self,
        path: str | os.PathLike,
        backup_dir: str | os.PathLike | None = None,
        scale: Optional[GradeScale] = None,
    ) -> None:
        self.path = Path(path)
        self.backup_dir = Path(backup_dir) if backup_dir else None
        self.scale = scale or DEFAULT_SCALE

    @classmethod
    def from_settings(cls) -> "RecordStore":
        return cls(settings.data_file, settings.backup_dir or None)

    def exists(self) -> bool:
        return self.path.is_file()

    def save(self, record: SemesterRecord) -> Path:
        content = dump_record(record)
        tmp_name: Optional[str] = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if self.backup_dir is not None and self.exists():
                self._backup_existing(self.backup_dir)

            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
                handle.write(content)
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as exc:
            raise RecordStoreError(f"Failed to save data to {self.path}: {exc}") from exc
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.remove(tmp_name)

        logger.info("record_saved path=%s courses=%s", self.path, len(record.courses))
        return self.path

    def load(self) -> Optional[SemesterRecord]:
        if not self.exists():
            logger.info("record_not_found path=%s", self.path)
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as handle:
                text = handle.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise RecordStoreError(f"Failed to read data from {self.path}: {exc}") from exc

        record = parse_record(text, self.scale)
        logger.info("record_loaded path=%s courses=%s", self.path, len(record.courses))
        return record

    def list_backups(self) -> List[Path]:
        if self.backup_dir is None or not self.backup_dir.is_dir():
            return []
        return sorted(self.backup_dir.glob(f"*_{self.path.name}"))

    def _backup_existing(self, backup_dir: Path) -> Path:
        backup_dir.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now().strftime(BACKUP_DATE_FORMAT)
        target = backup_dir / f"{stamp}_{self.path.name}"
        shutil.copy2(self.path, target)
        logger.debug("record_backup_created path=%s", target)
        return target

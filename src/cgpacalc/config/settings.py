from dataclasses import dataclass
import os
from dotenv import load_dotenv


load_dotenv()


def _split_csv(value: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in value.split(",") if item.strip())


def _parse_grade_points(value: str) -> tuple[tuple[str, float], ...]:
    """
    "A=5.0,B=4.0" -> (("A", 5.0), ("B", 4.0))
    """
    pairs = []
    for item in _split_csv(value):
        letter, sep, points = item.partition("=")
        if not sep or not letter.strip():
            raise ValueError(f"Invalid grade point entry: {item!r}")
        pairs.append((letter.strip().upper(), float(points)))
    return tuple(pairs)


def _parse_thresholds(value: str) -> tuple[float, ...]:
    thresholds = tuple(float(item) for item in _split_csv(value))
    if len(thresholds) != 4:
        raise ValueError("CGPA_CLASS_THRESHOLDS needs four values: first, upper, lower, third")
    return thresholds


@dataclass(frozen=True)
class Settings:
    data_file: str = os.getenv("CGPA_DATA_FILE", "data/cgpa_data.txt")
    backup_dir: str = os.getenv("CGPA_BACKUP_DIR", "data/backups")

    min_semester_units: int = int(os.getenv("CGPA_MIN_SEMESTER_UNITS", "18"))
    max_semester_units: int = int(os.getenv("CGPA_MAX_SEMESTER_UNITS", "24"))
    min_course_units: int = int(os.getenv("CGPA_MIN_COURSE_UNITS", "1"))
    max_course_units: int = int(os.getenv("CGPA_MAX_COURSE_UNITS", "6"))
    max_course_name_length: int = int(os.getenv("CGPA_MAX_COURSE_NAME_LENGTH", "50"))
    max_cgpa: float = float(os.getenv("CGPA_MAX_CGPA", "5.0"))
    min_cumulative_units: int = int(os.getenv("CGPA_MIN_CUMULATIVE_UNITS", "24"))

    grade_points: tuple[tuple[str, float], ...] = _parse_grade_points(
        os.getenv("CGPA_GRADE_POINTS", "A=5.0,B=4.0,C=3.0,D=2.0,E=1.0,F=0.0")
    )
    class_thresholds: tuple[float, ...] = _parse_thresholds(
        os.getenv("CGPA_CLASS_THRESHOLDS", "4.50,3.50,2.50,1.50")
    )
    decimal_places: int = int(os.getenv("CGPA_DECIMAL_PLACES", "2"))

    log_level: str = os.getenv("CGPA_LOG_LEVEL", "INFO")
    web_mode: bool = os.getenv("CGPA_WEB", "0") == "1"
    port: int = int(os.getenv("PORT", "8550"))

    def __post_init__(self) -> None:
        top = max((points for _, points in self.grade_points), default=0.0)
        if top > self.max_cgpa:
            raise ValueError(
                f"CGPA_GRADE_POINTS tops out at {top}, above CGPA_MAX_CGPA {self.max_cgpa}"
            )


settings = Settings()

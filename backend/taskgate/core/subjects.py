"""Subjects and grade-level limits known to the validation engine."""
from enum import Enum


class Subject(str, Enum):
    MATH = "math"
    ALGEBRA = "algebra"
    GEOMETRY = "geometry"
    RUSSIAN = "russian"


MIN_GRADE = 1
MAX_GRADE = 11

# Largest magnitude a grade's arithmetic is expected to reach (math only).
# Grades without an entry have no ceiling.
MATH_NUMBER_CEILINGS: dict[int, int] = {
    1: 20,
    2: 100,
    3: 1_000,
    4: 1_000_000,
}


def parse_subject(subject: "Subject | str") -> Subject:
    """Return the Subject for a value or raise ValueError for an unknown one."""
    if isinstance(subject, Subject):
        return subject
    try:
        return Subject(str(subject).strip().lower())
    except ValueError:
        known = ", ".join(s.value for s in Subject)
        raise ValueError(f"Unknown subject '{subject}' (expected one of: {known})") from None


def check_grade(grade: int) -> int:
    if isinstance(grade, bool) or not isinstance(grade, int):
        raise ValueError(f"Grade must be an integer, got {type(grade).__name__}")
    if not MIN_GRADE <= grade <= MAX_GRADE:
        raise ValueError(f"Grade {grade} is outside the supported range {MIN_GRADE}-{MAX_GRADE}")
    return grade


def number_ceiling(subject: Subject, grade: int) -> int | None:
    if subject is not Subject.MATH:
        return None
    return MATH_NUMBER_CEILINGS.get(grade)

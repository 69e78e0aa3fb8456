"""engine.py — the task validation pipeline and verdict aggregator.

    validate(tasks, subject, grade) -> ValidationResult

Phases, in order:

  1. schema      parse_task() + check_structure() per task (SCHEMA_INVALID)
  2. semantic    check_semantics() per task that passed phase 1
  3. cross-task  check_duplicate_questions() over the tasks that passed phase 1
  4. heuristic   check_number_ranges() per task that passed phase 1

Issues keep phase order, then task order within a phase, and are split
into errors and warnings by code. Malformed content never raises; only a
broken calling contract (tasks not a list, unknown subject, grade out of
range) does.
"""
import logging
from collections.abc import Sequence

from taskgate.core.subjects import Subject, check_grade, parse_subject
from taskgate.models.tasks import Task
from taskgate.models.validation import Issue, Severity, ValidationResult
from taskgate.validation.cross_task import check_duplicate_questions
from taskgate.validation.heuristics import check_number_ranges
from taskgate.validation.schema import check_structure, parse_task
from taskgate.validation.semantic import check_semantics

logger = logging.getLogger(__name__)


def aggregate(issues: list[Issue]) -> ValidationResult:
    """Partition issues by severity, preserving order. No deduplication."""
    errors = tuple(i for i in issues if i.severity is Severity.ERROR)
    warnings = tuple(i for i in issues if i.severity is Severity.WARNING)
    return ValidationResult(valid=not errors, errors=errors, warnings=warnings)


def validate(tasks: Sequence[object], subject: "Subject | str", grade: int) -> ValidationResult:
    """Validate one batch of AI-generated tasks.

    Args:
        tasks:    Raw candidate task objects (usually dicts parsed from JSON).
        subject:  Subject of the worksheet; gates the maths heuristics only.
        grade:    School grade 1-11; gates the maths heuristics only.

    Returns:
        ValidationResult with every issue found in a single pass.

    Raises:
        TypeError:  tasks is None or not a list/tuple.
        ValueError: subject is unknown or grade is outside 1-11.
    """
    if tasks is None or not isinstance(tasks, (list, tuple)):
        raise TypeError(f"tasks must be a list of task objects, got {type(tasks).__name__}")
    subject = parse_subject(subject)
    grade = check_grade(grade)

    issues: list[Issue] = []

    # ── Phase 1: schema + structure ────────────────────────────────────────
    sound: list[tuple[int, Task]] = []
    for index, raw in enumerate(tasks):
        task, shape_issues = parse_task(raw, index)
        if task is None:
            issues += shape_issues
            continue
        structure_issues = check_structure(task, index)
        if structure_issues:
            issues += structure_issues
            continue
        sound.append((index, task))

    # ── Phase 2: per-task semantics ────────────────────────────────────────
    for index, task in sound:
        issues += check_semantics(task, index)

    # ── Phase 3: whole-batch duplicates ────────────────────────────────────
    issues += check_duplicate_questions(sound)

    # ── Phase 4: domain heuristics ─────────────────────────────────────────
    for index, task in sound:
        issues += check_number_ranges(task, index, subject, grade)

    result = aggregate(issues)
    logger.debug(
        "[validation] %d task(s), %d error(s), %d warning(s), subject=%s grade=%d",
        len(tasks), len(result.errors), len(result.warnings), subject.value, grade,
    )
    return result

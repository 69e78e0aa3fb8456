"""schema.py — first gate of the task validation pipeline.

Two checks, both reported as SCHEMA_INVALID:

  parse_task()       shape coercion: the raw object must carry a known
                     `type` and every key its variant requires, with the
                     right scalar types.
  check_structure()  cardinality: option counts, minimum number of correct
                     indices, non-empty collections.

A task that fails either check is excluded from every later phase, since
its fields cannot be trusted.
"""
from collections.abc import Mapping
from typing import Optional

from pydantic import ValidationError

from taskgate.models.tasks import (
    TASK_MODELS,
    FillBlankTask,
    MatchingTask,
    MultipleChoiceTask,
    SingleChoiceTask,
    Task,
)
from taskgate.models.validation import Issue, IssueCode

SINGLE_CHOICE_MIN_OPTIONS = 3
SINGLE_CHOICE_MAX_OPTIONS = 6
MULTIPLE_CHOICE_OPTIONS = 5
MULTIPLE_CHOICE_MIN_CORRECT = 2


def _schema_issue(index: int, field: str, message: str) -> Issue:
    return Issue(task_index=index, field=field, code=IssueCode.SCHEMA_INVALID, message=message)


def field_path(loc: tuple) -> str:
    """Render a pydantic error location as a path hint: ('blanks', 0, 'x') → 'blanks[0].x'."""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path or "root"


def parse_task(raw: object, index: int) -> tuple[Optional[Task], list[Issue]]:
    """Coerce one raw candidate into a task model.

    Returns (task, []) on success or (None, issues) when the object does not
    fit any variant. Never raises for malformed content.
    """
    if not isinstance(raw, Mapping):
        return None, [_schema_issue(index, "root", f"Task must be an object, got {type(raw).__name__}")]

    task_type = raw.get("type")
    model = TASK_MODELS.get(task_type) if isinstance(task_type, str) else None
    if model is None:
        if task_type is None:
            message = "Task has no 'type'"
        else:
            message = f"Unknown task type: {task_type!r}"
        return None, [_schema_issue(index, "type", message)]

    try:
        return model.model_validate(raw), []
    except ValidationError as exc:
        issues = [
            _schema_issue(index, field_path(err["loc"]), err["msg"])
            for err in exc.errors(include_url=False)
        ]
        return None, issues


def check_structure(task: Task, index: int) -> list[Issue]:
    """Cardinality rules a shape parser alone does not express."""
    issues: list[Issue] = []

    if isinstance(task, SingleChoiceTask):
        n = len(task.options)
        if not SINGLE_CHOICE_MIN_OPTIONS <= n <= SINGLE_CHOICE_MAX_OPTIONS:
            issues.append(_schema_issue(
                index, "options",
                f"Single choice needs {SINGLE_CHOICE_MIN_OPTIONS}-{SINGLE_CHOICE_MAX_OPTIONS} "
                f"options, got {n}",
            ))

    elif isinstance(task, MultipleChoiceTask):
        if len(task.options) != MULTIPLE_CHOICE_OPTIONS:
            issues.append(_schema_issue(
                index, "options",
                f"Multiple choice needs exactly {MULTIPLE_CHOICE_OPTIONS} options, "
                f"got {len(task.options)}",
            ))
        if len(task.correct_indices) < MULTIPLE_CHOICE_MIN_CORRECT:
            issues.append(_schema_issue(
                index, "correctIndices",
                f"Multiple choice needs at least {MULTIPLE_CHOICE_MIN_CORRECT} correct "
                f"indices, got {len(task.correct_indices)}",
            ))

    elif isinstance(task, MatchingTask):
        for name, items in (
            ("leftColumn", task.left_column),
            ("rightColumn", task.right_column),
            ("correctPairs", task.correct_pairs),
        ):
            if not items:
                issues.append(_schema_issue(index, name, f"Matching {name} is empty"))

    elif isinstance(task, FillBlankTask):
        if not task.blanks:
            issues.append(_schema_issue(index, "blanks", "Fill-blank task has no blanks"))

    return issues

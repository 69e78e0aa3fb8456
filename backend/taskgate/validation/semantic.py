"""semantic.py — per-task value consistency checks.

Runs only on tasks that passed the schema gate, so every field is present
and correctly typed. Each check is a pure predicate over one task; issues
come back in a fixed order so results are reproducible.

Codes produced:
  EMPTY_FIELD, QUESTION_TOO_SHORT   free-text length rules
  INVALID_INDEX, DUPLICATE_INDICES  choice answer keys
  DUPLICATE_OPTIONS                 options and matching columns
  COLUMN_LENGTH_MISMATCH, INCOMPLETE_PAIRS,
  INVALID_PAIR_INDEX, DUPLICATE_PAIRS
                                    matching bijection
  BLANK_MARKER_MISMATCH, MISSING_BLANK
                                    fill-blank markers vs blank entries
  FEW_OPTIONS (warning)             single choice with only 3 options
"""
import re
from typing import Callable

from taskgate.models.tasks import (
    FillBlankTask,
    MatchingTask,
    MultipleChoiceTask,
    OpenQuestionTask,
    SingleChoiceTask,
    Task,
)
from taskgate.models.validation import Issue, IssueCode

QUESTION_MIN_LENGTH = 10
INSTRUCTION_MIN_LENGTH = 3
FEW_OPTIONS_COUNT = 3

# ___(N)___ positional placeholder inside fill-blank text, N at most 9 digits
BLANK_MARKER_RE = re.compile(r"___\(([0-9]{1,9})\)___")


def normalize(text: str) -> str:
    return text.strip().casefold()


def find_markers(text: str) -> set[int]:
    """Return every marker number present in the text, regardless of order."""
    return {int(m) for m in BLANK_MARKER_RE.findall(text)}


# ── Shared checks ─────────────────────────────────────────────────────────────

def _check_text(index: int, field: str, value: str, min_length: int, label: str) -> list[Issue]:
    stripped = value.strip()
    if not stripped:
        return [Issue(task_index=index, field=field, code=IssueCode.EMPTY_FIELD,
                      message=f"{label} is empty")]
    if len(stripped) < min_length:
        return [Issue(task_index=index, field=field, code=IssueCode.QUESTION_TOO_SHORT,
                      message=f"{label} is too short ({len(stripped)} chars, minimum {min_length})")]
    return []


def _check_non_empty_items(index: int, field: str, items: list[str]) -> list[Issue]:
    return [
        Issue(task_index=index, field=f"{field}[{j}]", code=IssueCode.EMPTY_FIELD,
              message=f"{field}[{j}] is empty")
        for j, item in enumerate(items)
        if not item.strip()
    ]


def _check_duplicate_items(index: int, field: str, items: list[str]) -> list[Issue]:
    """One DUPLICATE_OPTIONS per item that repeats an earlier one (case-insensitive).

    Empty items are skipped here; they already carry EMPTY_FIELD.
    """
    issues = []
    seen: set[str] = set()
    for item in items:
        key = normalize(item)
        if not key:
            continue
        if key in seen:
            issues.append(Issue(
                task_index=index, field=field, code=IssueCode.DUPLICATE_OPTIONS,
                message=f"Duplicate entry in {field}: '{item.strip()}'",
            ))
        seen.add(key)
    return issues


def _in_bounds(i: int, size: int) -> bool:
    return 0 <= i < size


# ── Per-variant checks ────────────────────────────────────────────────────────

def _check_single_choice(task: SingleChoiceTask, index: int) -> list[Issue]:
    issues = _check_text(index, "question", task.question, QUESTION_MIN_LENGTH, "Question")
    n = len(task.options)
    if not _in_bounds(task.correct_index, n):
        issues.append(Issue(
            task_index=index, field="correctIndex", code=IssueCode.INVALID_INDEX,
            message=f"correctIndex {task.correct_index} is outside [0, {n - 1}]",
        ))
    issues += _check_non_empty_items(index, "options", task.options)
    issues += _check_duplicate_items(index, "options", task.options)
    if n == FEW_OPTIONS_COUNT:
        issues.append(Issue(
            task_index=index, field="options", code=IssueCode.FEW_OPTIONS,
            message=f"Only {n} options (4 or more recommended)",
        ))
    return issues


def _check_multiple_choice(task: MultipleChoiceTask, index: int) -> list[Issue]:
    issues = _check_text(index, "question", task.question, QUESTION_MIN_LENGTH, "Question")
    n = len(task.options)
    for idx in task.correct_indices:
        if not _in_bounds(idx, n):
            issues.append(Issue(
                task_index=index, field="correctIndices", code=IssueCode.INVALID_INDEX,
                message=f"correctIndices contains {idx}, outside [0, {n - 1}]",
            ))
    if len(set(task.correct_indices)) != len(task.correct_indices):
        issues.append(Issue(
            task_index=index, field="correctIndices", code=IssueCode.DUPLICATE_INDICES,
            message=f"correctIndices has repeated values: {task.correct_indices}",
        ))
    issues += _check_non_empty_items(index, "options", task.options)
    issues += _check_duplicate_items(index, "options", task.options)
    return issues


def _check_open_question(task: OpenQuestionTask, index: int) -> list[Issue]:
    issues = _check_text(index, "question", task.question, QUESTION_MIN_LENGTH, "Question")
    if not task.correct_answer.strip():
        issues.append(Issue(
            task_index=index, field="correctAnswer", code=IssueCode.EMPTY_FIELD,
            message="correctAnswer is empty",
        ))
    return issues


def _check_matching(task: MatchingTask, index: int) -> list[Issue]:
    issues = _check_text(index, "instruction", task.instruction, INSTRUCTION_MIN_LENGTH, "Instruction")
    left, right, pairs = task.left_column, task.right_column, task.correct_pairs

    if len(left) != len(right):
        issues.append(Issue(
            task_index=index, field="leftColumn/rightColumn", code=IssueCode.COLUMN_LENGTH_MISMATCH,
            message=f"Column lengths differ: left={len(left)}, right={len(right)}",
        ))
    if len(pairs) != len(left):
        issues.append(Issue(
            task_index=index, field="correctPairs", code=IssueCode.INCOMPLETE_PAIRS,
            message=f"{len(pairs)} pair(s) for {len(left)} left item(s)",
        ))

    used_left: set[int] = set()
    used_right: set[int] = set()
    for p, (li, ri) in enumerate(pairs):
        field = f"correctPairs[{p}]"
        if not _in_bounds(li, len(left)):
            issues.append(Issue(
                task_index=index, field=field, code=IssueCode.INVALID_PAIR_INDEX,
                message=f"Left index {li} is outside [0, {len(left) - 1}]",
            ))
        if not _in_bounds(ri, len(right)):
            issues.append(Issue(
                task_index=index, field=field, code=IssueCode.INVALID_PAIR_INDEX,
                message=f"Right index {ri} is outside [0, {len(right) - 1}]",
            ))
        if li in used_left:
            issues.append(Issue(
                task_index=index, field=field, code=IssueCode.DUPLICATE_PAIRS,
                message=f"Left index {li} is paired more than once",
            ))
        if ri in used_right:
            issues.append(Issue(
                task_index=index, field=field, code=IssueCode.DUPLICATE_PAIRS,
                message=f"Right index {ri} is paired more than once",
            ))
        used_left.add(li)
        used_right.add(ri)

    issues += _check_non_empty_items(index, "leftColumn", left)
    issues += _check_non_empty_items(index, "rightColumn", right)
    issues += _check_duplicate_items(index, "leftColumn", left)
    issues += _check_duplicate_items(index, "rightColumn", right)
    return issues


def _check_fill_blank(task: FillBlankTask, index: int) -> list[Issue]:
    issues = []
    if not task.text_with_blanks.strip():
        issues.append(Issue(
            task_index=index, field="textWithBlanks", code=IssueCode.EMPTY_FIELD,
            message="textWithBlanks is empty",
        ))

    markers = find_markers(task.text_with_blanks)
    positions = [b.position for b in task.blanks]

    # Count mismatch and orphan entries are reported with one code or the
    # other, never both, for the same task.
    if len(markers) != len(positions):
        issues.append(Issue(
            task_index=index, field="textWithBlanks/blanks", code=IssueCode.BLANK_MARKER_MISMATCH,
            message=f"{len(markers)} marker(s) in text but {len(positions)} blank entries",
        ))
    else:
        for i, pos in enumerate(positions):
            if pos not in markers:
                issues.append(Issue(
                    task_index=index, field=f"blanks[{i}].position", code=IssueCode.MISSING_BLANK,
                    message=f"Marker ___({pos})___ not found in text",
                ))
        for pos in sorted(markers - set(positions)):
            issues.append(Issue(
                task_index=index, field="blanks", code=IssueCode.MISSING_BLANK,
                message=f"Marker ___({pos})___ has no blank entry",
            ))

    for i, blank in enumerate(task.blanks):
        if not blank.correct_answer.strip():
            issues.append(Issue(
                task_index=index, field=f"blanks[{i}].correctAnswer", code=IssueCode.EMPTY_FIELD,
                message=f"Blank ___({blank.position})___ has an empty answer",
            ))
    return issues


_CHECKS: dict[type, Callable[[Task, int], list[Issue]]] = {
    SingleChoiceTask: _check_single_choice,
    MultipleChoiceTask: _check_multiple_choice,
    OpenQuestionTask: _check_open_question,
    MatchingTask: _check_matching,
    FillBlankTask: _check_fill_blank,
}


def check_semantics(task: Task, index: int) -> list[Issue]:
    """Run every value-consistency check for one structurally sound task."""
    check = _CHECKS.get(type(task))
    if check is None:
        raise TypeError(f"No semantic checks registered for {type(task).__name__}")
    return check(task, index)

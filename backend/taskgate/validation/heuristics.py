"""heuristics.py — subject- and grade-calibrated advisory checks.

Maths only: every maximal run of digits in a task's text is compared to
the grade's ceiling (see taskgate.core.subjects). A number above it yields
one POSSIBLE_NUMBER_OVERFLOW warning per task. Years, page numbers and
similar labels look like operands too, so this never produces an error.
"""
import re

from taskgate.core.subjects import Subject, number_ceiling
from taskgate.models.tasks import (
    FillBlankTask,
    MatchingTask,
    MultipleChoiceTask,
    OpenQuestionTask,
    SingleChoiceTask,
    Task,
)
from taskgate.models.validation import Issue, IssueCode
from taskgate.validation.semantic import BLANK_MARKER_RE

_DIGIT_RUN_RE = re.compile(r"[0-9]+")


def task_text(task: Task) -> list[str]:
    """Return the learner-facing text fragments of a task, in field order."""
    if isinstance(task, (SingleChoiceTask, MultipleChoiceTask)):
        return [task.question, *task.options]
    if isinstance(task, OpenQuestionTask):
        return [task.question, task.correct_answer]
    if isinstance(task, MatchingTask):
        return [task.instruction, *task.left_column, *task.right_column]
    if isinstance(task, FillBlankTask):
        # Marker numbers are labels, not operands
        return [BLANK_MARKER_RE.sub(" ", task.text_with_blanks),
                *(b.correct_answer for b in task.blanks)]
    return []


def extract_numbers(text: str) -> list[str]:
    """Return every maximal digit run, leading zeros stripped, as text.

    Runs stay strings: a generated task may hold thousands of digits, more
    than int() will convert.
    """
    return [run.lstrip("0") or "0" for run in _DIGIT_RUN_RE.findall(text)]


def exceeds(number: str, ceiling: int) -> bool:
    limit = str(ceiling)
    if len(number) != len(limit):
        return len(number) > len(limit)
    return int(number) > ceiling


def _display(number: str) -> str:
    if len(number) <= 20:
        return number
    return f"{number[:12]}... ({len(number)} digits)"


def check_number_ranges(task: Task, index: int, subject: Subject, grade: int) -> list[Issue]:
    ceiling = number_ceiling(subject, grade)
    if ceiling is None:
        return []
    for fragment in task_text(task):
        for number in extract_numbers(fragment):
            if exceeds(number, ceiling):
                return [Issue(
                    task_index=index, field="content", code=IssueCode.POSSIBLE_NUMBER_OVERFLOW,
                    message=f"Number {_display(number)} exceeds the grade {grade} limit of {ceiling}",
                )]
    return []

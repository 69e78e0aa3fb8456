"""cross_task.py — checks that span the whole batch.

Duplicate questions: the first occurrence of a question is kept as the
reference; every later task with the same normalised text is flagged, and
only the later task. Matching and fill-blank tasks have no `question`
field and are not compared.
"""
from collections.abc import Iterable

from taskgate.models.tasks import QUESTION_TASKS, Task
from taskgate.models.validation import Issue, IssueCode
from taskgate.validation.semantic import normalize


def check_duplicate_questions(tasks: Iterable[tuple[int, Task]]) -> list[Issue]:
    """Flag repeated question text across (task_index, task) pairs in batch order."""
    issues = []
    first_seen: dict[str, int] = {}
    for index, task in tasks:
        if not isinstance(task, QUESTION_TASKS):
            continue
        key = normalize(task.question)
        if not key:
            continue  # empty text already carries EMPTY_FIELD
        if key in first_seen:
            preview = task.question.strip()[:50]
            issues.append(Issue(
                task_index=index, field="question", code=IssueCode.DUPLICATE_QUESTIONS,
                message=f"Duplicate of task {first_seen[key]}: \"{preview}\"",
            ))
        else:
            first_seen[key] = index
    return issues

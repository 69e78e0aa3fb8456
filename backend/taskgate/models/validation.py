"""Diagnostics produced by the task validation engine.

Issues are classified by code, never by call site: every code has exactly
one severity, and only ERROR codes make a batch invalid.
"""
from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class IssueCode(str, Enum):
    # ── Hard errors (block acceptance) ──────────────────────────────────────
    SCHEMA_INVALID = "SCHEMA_INVALID"
    INVALID_INDEX = "INVALID_INDEX"
    EMPTY_FIELD = "EMPTY_FIELD"
    DUPLICATE_OPTIONS = "DUPLICATE_OPTIONS"
    DUPLICATE_INDICES = "DUPLICATE_INDICES"
    COLUMN_LENGTH_MISMATCH = "COLUMN_LENGTH_MISMATCH"
    INCOMPLETE_PAIRS = "INCOMPLETE_PAIRS"
    INVALID_PAIR_INDEX = "INVALID_PAIR_INDEX"
    DUPLICATE_PAIRS = "DUPLICATE_PAIRS"
    BLANK_MARKER_MISMATCH = "BLANK_MARKER_MISMATCH"
    MISSING_BLANK = "MISSING_BLANK"
    QUESTION_TOO_SHORT = "QUESTION_TOO_SHORT"
    DUPLICATE_QUESTIONS = "DUPLICATE_QUESTIONS"
    # ── Advisory only ───────────────────────────────────────────────────────
    FEW_OPTIONS = "FEW_OPTIONS"
    POSSIBLE_NUMBER_OVERFLOW = "POSSIBLE_NUMBER_OVERFLOW"

    @property
    def severity(self) -> Severity:
        if self in _WARNING_CODES:
            return Severity.WARNING
        return Severity.ERROR


_WARNING_CODES = frozenset({IssueCode.FEW_OPTIONS, IssueCode.POSSIBLE_NUMBER_OVERFLOW})

# Task index used for issues that concern the batch as a whole
BATCH_LEVEL = -1


class Issue(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    task_index: int
    field: str
    code: IssueCode
    message: str

    @property
    def severity(self) -> Severity:
        return self.code.severity


class ValidationResult(BaseModel):
    """Immutable verdict for one batch. valid is True iff errors is empty."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    valid: bool
    errors: tuple[Issue, ...] = ()
    warnings: tuple[Issue, ...] = ()

    @model_validator(mode="after")
    def check_valid_matches_errors(self) -> "ValidationResult":
        if self.valid != (not self.errors):
            raise ValueError(f"valid={self.valid} contradicts {len(self.errors)} error(s)")
        return self

    def codes(self) -> list[IssueCode]:
        return [i.code for i in self.errors] + [i.code for i in self.warnings]

    def issues_for(self, task_index: int) -> list[Issue]:
        return [i for i in (*self.errors, *self.warnings) if i.task_index == task_index]

    def failing_task_indices(self) -> list[int]:
        """Sorted indices of tasks with at least one error."""
        return sorted({i.task_index for i in self.errors if i.task_index != BATCH_LEVEL})

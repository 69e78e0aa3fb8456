import logging
from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from taskgate.models.validation import ValidationResult
from taskgate.validation.engine import validate

logger = logging.getLogger("taskgate.api.validation")
router = APIRouter(prefix="/api/v1", tags=["validation"])


class ValidateRequest(BaseModel):
    # Items are checked by the engine, not by FastAPI, so that one bad task
    # shows up as an issue instead of rejecting the whole request.
    tasks: list[Any]
    subject: str
    grade: int


@router.post("/validate", response_model=ValidationResult)
def validate_tasks(request: ValidateRequest) -> ValidationResult:
    try:
        result = validate(request.tasks, request.subject, request.grade)
    except ValueError as e:
        logger.warning("[validate] rejected request: %s", e)
        raise HTTPException(status_code=422, detail=str(e))

    if not result.valid:
        logger.info(
            "[validate] batch rejected: %d error(s) on task(s) %s",
            len(result.errors), result.failing_task_indices(),
        )
    return result

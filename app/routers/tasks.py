# =============================================================================
# app/routers/tasks.py - Background Task Status
# =============================================================================
# The admin UI polls here after POST /api/admin/hesudhar/sync. States come
# straight from the Celery result backend; PROGRESS carries the percent and
# step message published by workers.tasks.update_progress.
# =============================================================================

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Path
from pydantic import BaseModel

from app.auth import require_admin

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])

# state -> (progress, message) for states without task-provided details
STATE_DEFAULTS: dict[str, tuple[int | None, str]] = {
    "PENDING": (0, "Waiting in queue..."),
    "STARTED": (0, "Starting..."),
    "RETRY": (0, "Retrying after a failed write..."),
    "SUCCESS": (100, "Complete"),
    "FAILURE": (None, "Failed"),
}


class TaskStatusResponse(BaseModel):
    """Status of a dictionary sync task."""
    task_id: str
    status: str
    progress: int | None = None
    message: str | None = None
    result: dict | None = None
    error: str | None = None


def describe_task(task_id: str, result: Any) -> TaskStatusResponse:
    """Build the status response from a Celery AsyncResult."""
    state = result.status
    progress, message = STATE_DEFAULTS.get(state, (None, None))
    response = TaskStatusResponse(task_id=task_id, status=state, progress=progress, message=message)

    if state == "PROGRESS":
        info = result.info or {}
        response.progress = info.get("percent", 0)
        response.message = info.get("message", "Processing...")
    elif state == "SUCCESS":
        response.result = result.result
    elif state == "FAILURE":
        response.error = str(result.result) if result.result else "Unknown error"

    return response


@router.get("/{task_id}", response_model=TaskStatusResponse)
async def get_task_status(
    task_id: Annotated[str, Path(description="Celery task ID returned by the sync endpoint")]
):
    """
    Get the status of a dictionary sync.

    PENDING, STARTED, PROGRESS (with percent and step), RETRY, SUCCESS
    (result is {success, kind, path, entries}) or FAILURE (with error).
    """
    try:
        from workers.celery_app import celery_app

        return describe_task(task_id, celery_app.AsyncResult(task_id))

    except Exception as e:
        logger.error(f"Error getting task status for {task_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to get task status: {e}")

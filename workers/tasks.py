# =============================================================================
# workers/tasks.py - Celery Task Definitions
# =============================================================================
# Background tasks queued by the admin API.
#
# Tasks:
# - sync_dictionary_file: Export the hesudhar or romanizer dictionary from
#   Supabase to its `word|replacement` text file
# =============================================================================

import logging
from typing import Any
from celery import shared_task, current_task

from core.models.dictionary import DictionaryKind
from core.services.dictionary_service import DictionaryService

logger = logging.getLogger(__name__)


# =============================================================================
# Task State Updates
# =============================================================================

def update_progress(percent: int, message: str = "Processing...") -> None:
    """
    Publish task progress for GET /api/admin/tasks/{task_id}.

    Does nothing when called outside a worker (e.g. the task run eagerly).
    """
    if current_task and current_task.request.id:
        current_task.update_state(
            state="PROGRESS",
            meta={"percent": percent, "message": message},
        )


# =============================================================================
# Dictionary Sync Task
# =============================================================================

@shared_task(bind=True, name="workers.tasks.sync_dictionary_file")
def sync_dictionary_file(self, kind: str = DictionaryKind.HESUDHAR.value) -> dict[str, Any]:
    """
    Export one dictionary to its text file.

    Args:
        kind: "hesudhar" or "romanizer"

    Returns:
        {"success", "kind", "path", "entries"}

    Raises:
        ValueError: If kind is not a known dictionary (not retried)
    """
    dictionary = DictionaryKind(kind)
    logger.info(f"Syncing {dictionary.value} dictionary file")

    try:
        result = DictionaryService.export_file(dictionary, progress=update_progress)
    except OSError as e:
        logger.error(f"Could not write {dictionary.value} dictionary file: {e}")
        raise self.retry(exc=e)

    return {"success": True, **result}

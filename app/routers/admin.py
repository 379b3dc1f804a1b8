# =============================================================================
# app/routers/admin.py - Admin Text Tools & Dashboard
# =============================================================================
# Everything here requires an admin or editor:
# - /romanizer: hesudhar and romanization of a text
# - /romanizer/correct: hesudhar dictionary corrections
# - /romanizer/hesudhar, /romanizer/roman-words: dictionary CRUD
# - /hesudhar/sync: export a dictionary file in the background
# - /stats: dashboard counts
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from app.auth import require_admin
from app.dependencies import PaginationDep
from core.models.dictionary import (
    CorrectRequest,
    DictionaryKind,
    HesudharEntry,
    RomanWordEntry,
    SyncRequest,
    TextToolRequest,
)
from core.services.dictionary_service import DictionaryService
from core.services.stats_service import StatsService

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])


# =============================================================================
# Text Tools
# =============================================================================

@router.get("/romanizer")
async def describe_romanizer():
    """List the supported operations and hesudhar modes."""
    return DictionaryService.describe()


@router.post("/romanizer")
async def run_romanizer(request: TextToolRequest):
    """
    Apply hesudhar or romanization to a text.

    - operation: hesudhar | romanize
    - mode: smart | global
    """
    return DictionaryService.run_text_tool(request)


@router.post("/romanizer/correct")
async def correct_text(request: CorrectRequest):
    """Replace words found in the hesudhar dictionary and report each change."""
    return DictionaryService.correct(request.text)


# =============================================================================
# Hesudhar Dictionary
# =============================================================================

@router.get("/romanizer/hesudhar")
async def list_hesudhar(
    pagination: PaginationDep,
    search: Annotated[str | None, Query(description="Match word or correction")] = None,
):
    return DictionaryService.list_entries(DictionaryKind.HESUDHAR, pagination, search)


@router.post("/romanizer/hesudhar", status_code=status.HTTP_201_CREATED)
async def create_hesudhar(entry: HesudharEntry):
    return {"success": True, "entry": DictionaryService.create_entry(DictionaryKind.HESUDHAR, entry)}


@router.put("/romanizer/hesudhar/{entry_id}")
async def update_hesudhar(
    entry_id: Annotated[str, Path(description="Dictionary row id")],
    entry: HesudharEntry,
):
    return {
        "success": True,
        "entry": DictionaryService.update_entry(DictionaryKind.HESUDHAR, entry_id, entry),
    }


@router.delete("/romanizer/hesudhar/{entry_id}")
async def delete_hesudhar(
    entry_id: Annotated[str, Path(description="Dictionary row id")],
):
    DictionaryService.delete_entry(DictionaryKind.HESUDHAR, entry_id)
    return {"success": True, "message": "Hesudhar entry deleted successfully"}


# =============================================================================
# Roman Words Dictionary
# =============================================================================

@router.get("/romanizer/roman-words")
async def list_roman_words(
    pagination: PaginationDep,
    search: Annotated[str | None, Query(description="Match Sindhi or roman spelling")] = None,
):
    return DictionaryService.list_entries(DictionaryKind.ROMANIZER, pagination, search)


@router.post("/romanizer/roman-words", status_code=status.HTTP_201_CREATED)
async def create_roman_word(entry: RomanWordEntry):
    return {"success": True, "entry": DictionaryService.create_entry(DictionaryKind.ROMANIZER, entry)}


@router.put("/romanizer/roman-words/{entry_id}")
async def update_roman_word(
    entry_id: Annotated[str, Path(description="Dictionary row id")],
    entry: RomanWordEntry,
):
    return {
        "success": True,
        "entry": DictionaryService.update_entry(DictionaryKind.ROMANIZER, entry_id, entry),
    }


@router.delete("/romanizer/roman-words/{entry_id}")
async def delete_roman_word(
    entry_id: Annotated[str, Path(description="Dictionary row id")],
):
    DictionaryService.delete_entry(DictionaryKind.ROMANIZER, entry_id)
    return {"success": True, "message": "Roman word deleted successfully"}


# =============================================================================
# Background Sync
# =============================================================================

@router.post("/hesudhar/sync", status_code=status.HTTP_202_ACCEPTED)
async def sync_dictionary(request: SyncRequest | None = None):
    """
    Queue an export of a dictionary to its text file.

    Poll GET /api/admin/tasks/{task_id} for progress.
    """
    kind = (request or SyncRequest()).kind
    try:
        from workers.tasks import sync_dictionary_file

        result = sync_dictionary_file.delay(kind.value)
    except Exception as e:
        logger.error(f"Error submitting dictionary sync: {e}")
        raise HTTPException(
            status_code=503,
            detail=f"Failed to queue sync. Is Redis running? Error: {e}",
        )

    return {
        "success": True,
        "task_id": result.id,
        "status": "PENDING",
        "kind": kind.value,
        "message": "Sync queued. Use GET /api/admin/tasks/{task_id} to check status.",
    }


# =============================================================================
# Dashboard
# =============================================================================

@router.get("/stats")
async def admin_stats():
    """Counts of live poets, poetry, couplets, categories, tags, periods and events."""
    return StatsService.get_stats()

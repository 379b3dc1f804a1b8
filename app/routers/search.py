# =============================================================================
# app/routers/search.py - Site Search Endpoint
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Query

from app.dependencies import LanguageDep
from core.services.search_service import SearchService

router = APIRouter()


@router.get("")
async def search(
    lang: LanguageDep,
    q: Annotated[str | None, Query(description="Search text")] = None,
):
    """
    Search poets, poetry titles and couplets.

    Returns up to five results per section; an empty query returns none.
    """
    return SearchService.search(q, lang)

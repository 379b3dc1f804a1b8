# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends():
# - LanguageDep: ?lang=sd|en (anything else means English)
# - PaginationDep: ?page=&limit= clamped to the configured page sizes
# - ListQueryDep: search + sortBy/sortOrder + countOnly for listings
# =============================================================================

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Query

from app.config import settings
from core.models.common import Language, Pagination


def get_language(
    lang: Annotated[str | None, Query(description="Display language: sd or en")] = None,
) -> Language:
    return Language.parse(lang)


def get_optional_language(
    lang: Annotated[str | None, Query(description="Only content written in this language")] = None,
) -> Language | None:
    """Filter variant of get_language: no value means no filter."""
    return Language.parse(lang) if lang else None


def get_pagination(
    page: Annotated[int | None, Query(description="Page number (1-indexed)")] = None,
    limit: Annotated[int | None, Query(description="Items per page")] = None,
) -> Pagination:
    """Out-of-range values are clamped rather than rejected."""
    return Pagination.clamp(
        page,
        limit,
        default_limit=settings.DEFAULT_PAGE_SIZE,
        max_limit=settings.MAX_PAGE_SIZE,
    )


@dataclass
class ListQuery:
    """Search, sort and count-only switches shared by listing endpoints."""
    search: str | None
    sort_by: str | None
    sort_order: str | None
    only_count: bool


def get_list_query(
    search: Annotated[str | None, Query(description="Free-text search")] = None,
    sort_by: Annotated[str | None, Query(alias="sortBy")] = None,
    sort_order: Annotated[str | None, Query(alias="sortOrder")] = None,
    only_count: Annotated[bool, Query(alias="countOnly")] = False,
) -> ListQuery:
    return ListQuery(search=search, sort_by=sort_by, sort_order=sort_order, only_count=only_count)


# Type aliases for dependency injection
LanguageDep = Annotated[Language, Depends(get_language)]
OptionalLanguageDep = Annotated[Language | None, Depends(get_optional_language)]
PaginationDep = Annotated[Pagination, Depends(get_pagination)]
ListQueryDep = Annotated[ListQuery, Depends(get_list_query)]

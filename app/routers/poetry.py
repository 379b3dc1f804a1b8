# =============================================================================
# app/routers/poetry.py - Poetry Endpoints
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from app.auth import AdminUser, require_admin
from app.config import settings
from app.dependencies import LanguageDep, ListQueryDep
from core.models.common import Pagination
from core.models.poetry import PoetryCreate, PoetryUpdate
from core.services.poetry_service import PoetryService

router = APIRouter()

DEFAULT_POETRY_PAGE = 12


@router.get("")
async def list_poetry(
    lang: LanguageDep,
    query: ListQueryDep,
    page: Annotated[int | None, Query(description="Page number (1-indexed)")] = None,
    limit: Annotated[int | None, Query(description="Items per page (default 12)")] = None,
    category: Annotated[str | None, Query(description="Category slug")] = None,
):
    """
    List visible poetry.

    sortBy accepts created_at, is_featured and title.
    """
    pagination = Pagination.clamp(
        page, limit, default_limit=DEFAULT_POETRY_PAGE, max_limit=settings.MAX_PAGE_SIZE
    )
    return PoetryService.list_poetry(
        pagination,
        lang,
        search=query.search,
        category=category,
        sort_by=query.sort_by,
        sort_order=query.sort_order,
    )


@router.get("/{id_or_slug}")
async def get_poetry(
    id_or_slug: Annotated[str, Path(description="Numeric id or poetry slug")],
    lang: LanguageDep,
):
    """Get a poem with its translations, poet, category and couplets."""
    return PoetryService.get_poetry_detail(id_or_slug, lang)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_poetry(
    data: PoetryCreate,
    admin: AdminUser = Depends(require_admin),
):
    return {"success": True, "poetry": PoetryService.create_poetry(data)}


@router.put("/{poetry_id}")
async def update_poetry(
    poetry_id: Annotated[str, Path(description="Poetry id")],
    data: PoetryUpdate,
    admin: AdminUser = Depends(require_admin),
):
    return {"success": True, "poetry": PoetryService.update_poetry(poetry_id, data)}


@router.delete("/{poetry_id}")
async def delete_poetry(
    poetry_id: Annotated[str, Path(description="Poetry id")],
    admin: AdminUser = Depends(require_admin),
):
    PoetryService.delete_poetry(poetry_id)
    return {"success": True, "message": "Poetry deleted successfully"}

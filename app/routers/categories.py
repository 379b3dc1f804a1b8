# =============================================================================
# app/routers/categories.py - Category Endpoints
# =============================================================================
# Categories are poetic forms (ghazal, waai, bait...). Public reads are by
# slug; admin writes are by id.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from app.auth import AdminUser, require_admin
from app.config import settings
from app.dependencies import LanguageDep, ListQueryDep
from core.models.category import CategoryCreate, CategoryUpdate
from core.models.common import Pagination
from core.services.category_service import CategoryService

router = APIRouter()


@router.get("")
async def list_categories(
    lang: LanguageDep,
    query: ListQueryDep,
    page: Annotated[int | None, Query(description="Page number (1-indexed)")] = None,
    limit: Annotated[int | None, Query(description="Items per page, 1..48")] = None,
    get_all: Annotated[bool, Query(alias="all", description="Return up to 1000 categories")] = False,
):
    """
    List categories with names, summaries and poetry counts.

    lang=sd keeps categories with Sindhi content, fully translated ones first.
    """
    return CategoryService.list_categories(
        page or 1,
        limit,
        lang,
        get_all=get_all,
        search=query.search,
        sort_order=query.sort_order,
    )


@router.get("/{slug}")
async def get_category(
    slug: Annotated[str, Path(description="Category slug")],
    lang: LanguageDep,
):
    return CategoryService.get_category(slug, lang)


@router.get("/{slug}/poetry")
async def list_category_poetry(
    slug: Annotated[str, Path(description="Category slug")],
    lang: LanguageDep,
    query: ListQueryDep,
    page: Annotated[int | None, Query(description="Page number (1-indexed)")] = None,
    limit: Annotated[int | None, Query(description="Items per page")] = None,
):
    """Poetry of one category. 404 if the category doesn't exist."""
    pagination = Pagination.clamp(page, limit, default_limit=12, max_limit=settings.MAX_PAGE_SIZE)
    return CategoryService.category_poetry(
        slug,
        pagination,
        lang,
        search=query.search,
        sort_by=query.sort_by,
        sort_order=query.sort_order,
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_category(
    data: CategoryCreate,
    admin: AdminUser = Depends(require_admin),
):
    """Create a category; an existing slug has its details updated instead."""
    return {"success": True, **CategoryService.create_category(data)}


@router.put("/{category_id}")
async def update_category(
    category_id: Annotated[str, Path(description="Category id")],
    data: CategoryUpdate,
    admin: AdminUser = Depends(require_admin),
):
    return {"success": True, **CategoryService.update_category(category_id, data)}


@router.delete("/{category_id}")
async def delete_category(
    category_id: Annotated[str, Path(description="Category id")],
    admin: AdminUser = Depends(require_admin),
):
    CategoryService.delete_category(category_id)
    return {"success": True, "message": "Category deleted successfully"}

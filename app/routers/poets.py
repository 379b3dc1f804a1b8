# =============================================================================
# app/routers/poets.py - Poet Endpoints
# =============================================================================
# Public listing and detail; create/update/delete require an admin or editor.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from app.auth import AdminUser, require_admin
from app.dependencies import LanguageDep, ListQueryDep, OptionalLanguageDep, PaginationDep
from core.models.poet import PoetCreate, PoetUpdate
from core.services.couplet_service import CoupletService
from core.services.poet_service import PoetService

router = APIRouter()


@router.get("")
async def list_poets(
    pagination: PaginationDep,
    lang: LanguageDep,
    query: ListQueryDep,
):
    """
    List poets.

    Search matches name, laqab and tagline in the requested language.
    `countOnly=true` returns just the total.
    """
    return PoetService.list_poets(
        pagination,
        lang,
        search=query.search,
        sort_by=query.sort_by,
        sort_order=query.sort_order,
        only_count=query.only_count,
    )


@router.get("/{id_or_slug}")
async def get_poet(
    id_or_slug: Annotated[str, Path(description="Poet UUID or slug")],
):
    """
    Get a poet by id or slug.

    Includes the categories the poet has written in, up to four recent poems
    per category and the ten newest couplets.
    """
    return PoetService.get_poet_detail(id_or_slug)


@router.get("/{poet_id}/couplets")
async def list_poet_couplets(
    poet_id: Annotated[str, Path(description="Poet UUID")],
    pagination: PaginationDep,
    query: ListQueryDep,
    lang: OptionalLanguageDep,
):
    """List a poet's couplets (same as /api/couplets/by-poet/{poet_id})."""
    return CoupletService.list_by_poet(
        poet_id,
        pagination,
        lang=lang,
        sort_by=query.sort_by,
        sort_order=query.sort_order,
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_poet(
    data: PoetCreate,
    admin: AdminUser = Depends(require_admin),
):
    """Create a poet. Both names are required; the slug is derived from the English name."""
    return {"success": True, "poet": PoetService.create_poet(data)}


@router.put("/{poet_id}")
async def update_poet(
    poet_id: Annotated[str, Path(description="Poet UUID")],
    data: PoetUpdate,
    admin: AdminUser = Depends(require_admin),
):
    """Update the fields present in the body."""
    return {"success": True, "poet": PoetService.update_poet(poet_id, data)}


@router.delete("/{poet_id}")
async def delete_poet(
    poet_id: Annotated[str, Path(description="Poet UUID")],
    admin: AdminUser = Depends(require_admin),
):
    """Soft-delete a poet."""
    PoetService.delete_poet(poet_id)
    return {"success": True, "message": "Poet deleted successfully"}

# =============================================================================
# app/routers/couplets.py - Couplet Endpoints
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from app.auth import AdminUser, require_admin
from app.dependencies import ListQueryDep, OptionalLanguageDep, PaginationDep
from core.models.couplet import CoupletCreate, CoupletUpdate
from core.services.couplet_service import CoupletService

router = APIRouter()


@router.get("")
async def list_couplets(
    pagination: PaginationDep,
    query: ListQueryDep,
    lang: OptionalLanguageDep,
    poet_id: Annotated[str | None, Query(description="Only this poet's couplets")] = None,
    poet_id_alias: Annotated[str | None, Query(alias="poetId", include_in_schema=False)] = None,
    poetry_id: Annotated[str | None, Query(description="Only couplets of this poem")] = None,
    standalone: Annotated[str | None, Query(description="1 for couplets outside any poem")] = None,
):
    """
    List couplets.

    Each couplet carries its lines, tags, poet summary, parent poem and
    like/view counters.
    """
    return CoupletService.list_couplets(
        pagination,
        search=query.search,
        lang=lang,
        poet_id=poet_id or poet_id_alias,
        poetry_id=poetry_id,
        standalone=standalone in ("1", "true"),
        sort_by=query.sort_by,
        sort_order=query.sort_order,
    )


@router.get("/by-poet/{poet_id}")
async def list_couplets_by_poet(
    poet_id: Annotated[str, Path(description="Poet UUID")],
    pagination: PaginationDep,
    query: ListQueryDep,
    lang: OptionalLanguageDep,
):
    """List one poet's couplets. 404 if the poet doesn't exist."""
    return CoupletService.list_by_poet(
        poet_id,
        pagination,
        lang=lang,
        sort_by=query.sort_by,
        sort_order=query.sort_order,
    )


@router.get("/{couplet_id}")
async def get_couplet(
    couplet_id: Annotated[str, Path(description="Couplet id")],
):
    return {"success": True, "couplet": CoupletService.get_couplet(couplet_id)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_couplet(
    data: CoupletCreate,
    admin: AdminUser = Depends(require_admin),
):
    """
    Create a couplet.

    Without an explicit couplet_slug one is derived from the text (Sindhi
    text is romanized first).
    """
    return {"success": True, "couplet": CoupletService.create_couplet(data)}


@router.put("/{couplet_id}")
async def update_couplet(
    couplet_id: Annotated[str, Path(description="Couplet id")],
    data: CoupletUpdate,
    admin: AdminUser = Depends(require_admin),
):
    return {"success": True, "couplet": CoupletService.update_couplet(couplet_id, data)}


@router.delete("/{couplet_id}")
async def delete_couplet(
    couplet_id: Annotated[str, Path(description="Couplet id")],
    admin: AdminUser = Depends(require_admin),
):
    CoupletService.delete_couplet(couplet_id)
    return {"success": True, "message": "Couplet deleted successfully"}

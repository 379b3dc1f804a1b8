# =============================================================================
# app/routers/tags.py - Tag Endpoints
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from app.auth import AdminUser, require_admin
from app.dependencies import LanguageDep
from core.models.tag import TagUpsert
from core.services.tag_service import TagService

router = APIRouter()


@router.get("")
async def list_tags(
    lang: LanguageDep,
    tag_type: Annotated[str | None, Query(alias="type", description="Topic, Poet, ...")] = None,
    limit: Annotated[int | None, Query(description="1..100, default 18")] = None,
    offset: Annotated[int | None, Query(description="Rows to skip")] = None,
):
    """List tags of one type with titles in the requested language."""
    return TagService.list_tags(lang, tag_type=tag_type, limit=limit, offset=offset)


@router.post("")
async def upsert_tag(
    data: TagUpsert,
    admin: AdminUser = Depends(require_admin),
):
    """
    Create a tag, or update the tag with the same slug.

    Both the Sindhi and the English title are required.
    """
    return TagService.upsert_tag(data)


@router.delete("/{tag_id}")
async def delete_tag(
    tag_id: Annotated[str, Path(description="Tag id")],
    admin: AdminUser = Depends(require_admin),
):
    TagService.delete_tag(tag_id)
    return {"success": True, "message": "Tag deleted successfully"}

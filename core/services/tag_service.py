# =============================================================================
# core/services/tag_service.py - Tag Business Logic
# =============================================================================
# Handles tag listing by type and admin upsert/delete.
# Tags have no soft delete: removing a tag removes its translations and row.
# =============================================================================

import logging
from typing import Any

from app.exceptions import MissingFieldsError, ResourceNotFoundError
from core.models.common import Language
from core.models.tag import TagUpsert
from lib.supabase_client import SupabaseClient, SupabaseClientError, utc_now_iso

logger = logging.getLogger(__name__)

DEFAULT_TAG_TYPE = "Poet"
DEFAULT_TAG_LIMIT = 18
MAX_TAG_LIMIT = 100


def normalize_tag_type(raw: str | None) -> str:
    """
    Map loose type names to the stored ones.

    Example:
        normalize_tag_type("topics")  # "Topic"
        normalize_tag_type("Era / Tradition")  # unchanged
    """
    raw = raw or DEFAULT_TAG_TYPE
    lowered = raw.strip().lower()
    if lowered in ("topic", "topics"):
        return "Topic"
    if lowered in ("poet", "poets"):
        return "Poet"
    return raw


class TagService:
    """
    Service for tag operations.

    Provides a clean interface between API routes and database.
    """

    @staticmethod
    def to_display(tag: dict[str, Any], lang: Language) -> dict[str, Any]:
        """
        Map a tags row with embedded translations to the display shape.

        The title is the translation in `lang` unless it is missing or just
        repeats the slug, in which case the label is used. A translation
        entry for `lang` is always present in the output.
        """
        translations = list(tag.get("tags_translations") or [])
        existing = next((t for t in translations if t.get("lang_code") == lang.value), None)

        translated = (existing or {}).get("title")
        title = translated if translated and translated != tag.get("slug") else tag.get("label")
        detail = (existing or {}).get("detail") or ""

        if existing is None:
            translations.append({"lang_code": lang.value, "title": title, "detail": detail})

        return {
            "id": tag.get("id"),
            "slug": tag.get("slug"),
            "label": tag.get("label"),
            "tag_type": tag.get("tag_type"),
            "created_at": tag.get("created_at"),
            "tags_translations": translations,
            "title": title,
            "detail": detail,
            "lang_code": lang.value,
        }

    @staticmethod
    def list_tags(
        lang: Language,
        tag_type: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> dict[str, Any]:
        """
        List tags of one type, newest first.

        Args:
            tag_type: Matched case-insensitively after normalization
            limit: Clamped to 1..100 (default 18)
            offset: Negative values become 0
        """
        normalized = normalize_tag_type(tag_type)
        limit = DEFAULT_TAG_LIMIT if limit is None else min(MAX_TAG_LIMIT, max(1, limit))
        offset = max(0, offset or 0)

        client = SupabaseClient.get_client()
        rows = SupabaseClient.execute(
            client.table("tags")
            .select("id, slug, label, tag_type, created_at, tags_translations(lang_code, title, detail)")
            .ilike("tag_type", normalized)
            .order("created_at", desc=True)
            .range(offset, offset + limit - 1),
            "list tags",
        ).data or []

        tags = [TagService.to_display(row, lang) for row in rows]
        return {
            "success": True,
            "tags": tags,
            "total": len(tags),
            "language": lang.value,
            "type": normalized,
            "limit": limit,
            "offset": offset,
        }

    @staticmethod
    def upsert_tag(data: TagUpsert) -> dict[str, Any]:
        """
        Create a tag, or update the one with the same slug, plus translations.

        A newly created tag is removed again if its translations cannot be
        saved, so no tag exists without titles.

        Raises:
            MissingFieldsError: If slug or either title is missing
        """
        missing = []
        if not data.slug:
            missing.append("slug")
        if not data.sindhi.title:
            missing.append("sindhi.title")
        if not data.english.title:
            missing.append("english.title")
        if missing:
            raise MissingFieldsError("Missing required fields", missing)

        now = utc_now_iso()
        existing = SupabaseClient.fetch_row("tags", "slug", data.slug, select="id", include_deleted=True)
        fields = {"label": data.sindhi.title, "tag_type": data.type or "Topic", "updated_at": now}

        if existing:
            tag_id = existing["id"]
            SupabaseClient.update_row("tags", tag_id, fields, include_deleted=True)
        else:
            tag_id = SupabaseClient.insert_row("tags", {"slug": data.slug, "created_at": now, **fields})["id"]

        translations = [
            {"tag_id": tag_id, "lang_code": "sd", "title": data.sindhi.title, "detail": data.sindhi.details or ""},
            {"tag_id": tag_id, "lang_code": "en", "title": data.english.title, "detail": data.english.details or ""},
        ]
        try:
            SupabaseClient.upsert_rows("tags_translations", translations, on_conflict="tag_id,lang_code")
        except SupabaseClientError:
            if not existing:
                logger.error(f"Translations for new tag {tag_id} failed, removing tag")
                SupabaseClient.delete_rows("tags", "id", tag_id)
            raise

        logger.info(f"{'Updated' if existing else 'Created'} tag {tag_id} ({data.slug})")
        return {
            "success": True,
            "message": "Tag updated successfully" if existing else "Tag created successfully",
            "tag_id": tag_id,
            "created": not existing,
        }

    @staticmethod
    def delete_tag(tag_id: str) -> None:
        """
        Remove a tag and its translations.

        Raises:
            ResourceNotFoundError: If the tag doesn't exist
        """
        if not SupabaseClient.fetch_row("tags", "id", tag_id, select="id", include_deleted=True):
            raise ResourceNotFoundError("Tag", tag_id)
        SupabaseClient.delete_rows("tags_translations", "tag_id", tag_id)
        SupabaseClient.delete_rows("tags", "id", tag_id)
        logger.info(f"Deleted tag {tag_id}")

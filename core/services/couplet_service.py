# =============================================================================
# core/services/couplet_service.py - Couplet Business Logic
# =============================================================================
# Handles couplet listing (all / by poet), lookup and admin CRUD.
#
# Display rows embed the poet and parent poem, split the text into lines and
# the comma string into tags, and carry like/view counters looked up from
# user_likes and content_view_counts.
# =============================================================================

import logging
from typing import Any

from app.exceptions import MissingFieldsError, ResourceNotFoundError
from core.models.common import Language, Pagination, SortOrder, paginated, resolve_sort
from core.models.couplet import CoupletCreate, CoupletUpdate
from core.services.dictionary_service import DictionaryService
from lib.romanizer import contains_sindhi, romanize_to_slug
from lib.supabase_client import SupabaseClient, utc_now_iso
from lib.utils import sanitize_search_term, slugify, split_lines, split_tags

logger = logging.getLogger(__name__)

COUPLET_SELECT = (
    "*, "
    "poets(id, slug, sindhi_name, english_name, sindhi_laqab, english_laqab, file_url), "
    "poetry_main(id, poetry_slug, poetry_tags)"
)
COUPLET_SORT_COLUMNS = {
    "created_at": "created_at",
    "updated_at": "updated_at",
    "couplet_slug": "couplet_slug",
    "id": "id",
}
DEFAULT_COUPLET_SORT = ("created_at", SortOrder.DESC)
SLUG_MAX_LENGTH = 50


class CoupletService:
    """
    Service for couplet operations.

    Provides a clean interface between API routes and database.
    """

    # -------------------------------------------------------------------------
    # Display Mapping
    # -------------------------------------------------------------------------

    @staticmethod
    def counters(couplet_ids: list[Any]) -> tuple[dict[str, int], dict[str, int]]:
        """
        Like and view counts for a page of couplets.

        A failed lookup degrades to zero counts.

        Returns:
            (likes by id, views by id), keyed by str(id)
        """
        likes: dict[str, int] = {}
        views: dict[str, int] = {}
        if not couplet_ids:
            return likes, views

        client = SupabaseClient.get_client()
        try:
            view_rows = (
                client.table("content_view_counts")
                .select("content_id, view_count")
                .eq("content_type", "couplet")
                .in_("content_id", couplet_ids)
                .execute()
            ).data or []
            for row in view_rows:
                views[str(row["content_id"])] = row.get("view_count") or 0

            like_rows = (
                client.table("user_likes")
                .select("likeable_id")
                .eq("likeable_type", "couplet")
                .in_("likeable_id", couplet_ids)
                .execute()
            ).data or []
            for row in like_rows:
                key = str(row["likeable_id"])
                likes[key] = likes.get(key, 0) + 1

        except Exception as e:
            logger.warning(f"Failed to fetch couplet counters: {e}")

        return likes, views

    @staticmethod
    def poet_summary(poet: dict[str, Any] | None) -> dict[str, Any]:
        """Embedded poet block of a couplet."""
        poet = poet or {}
        return {
            "id": poet.get("id") or "",
            "name": poet.get("english_name") or poet.get("sindhi_name") or "Unknown",
            "slug": poet.get("slug") or slugify(poet.get("english_name")),
            "photo": poet.get("file_url"),
            "sindhiName": poet.get("sindhi_name"),
            "englishName": poet.get("english_name"),
            "sindhi_laqab": poet.get("sindhi_laqab"),
            "english_laqab": poet.get("english_laqab"),
        }

    @staticmethod
    def to_display(
        couplet: dict[str, Any],
        likes: dict[str, int] | None = None,
        views: dict[str, int] | None = None,
        poet: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Map a poetry_couplets row (with embeds) to the display shape."""
        poetry = couplet.get("poetry_main")
        key = str(couplet.get("id"))
        return {
            "id": couplet.get("id"),
            "couplet_text": couplet.get("couplet_text"),
            "couplet_slug": couplet.get("couplet_slug"),
            "couplet_tags": couplet.get("couplet_tags"),
            "lang": couplet.get("lang"),
            "lines": split_lines(couplet.get("couplet_text")),
            "tags": split_tags(couplet.get("couplet_tags")),
            "poet": CoupletService.poet_summary(poet or couplet.get("poets")),
            "poetry": {
                "id": poetry.get("id"),
                "slug": poetry.get("poetry_slug"),
                "tags": poetry.get("poetry_tags"),
            } if poetry else None,
            "created_at": couplet.get("created_at"),
            "likes": (likes or {}).get(key, 0),
            "views": (views or {}).get(key, 0),
        }

    @staticmethod
    def _display_page(rows: list[dict[str, Any]], poet: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        likes, views = CoupletService.counters([row["id"] for row in rows])
        return [CoupletService.to_display(row, likes, views, poet) for row in rows]

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @staticmethod
    def list_couplets(
        pagination: Pagination,
        search: str | None = None,
        lang: Language | None = None,
        poet_id: str | None = None,
        poetry_id: str | None = None,
        standalone: bool = False,
        sort_by: str | None = None,
        sort_order: str | None = None,
    ) -> dict[str, Any]:
        """
        List live couplets.

        Args:
            lang: Only couplets written in this language
            poet_id: Only this poet's couplets
            poetry_id: Only couplets of this poem
            standalone: Only couplets that belong to no poem
        """
        client = SupabaseClient.get_client()
        query = (
            client.table("poetry_couplets")
            .select(COUPLET_SELECT, count="exact")
            .is_("deleted_at", "null")
        )

        term = sanitize_search_term(search)
        if term:
            query = query.ilike("couplet_text", f"%{term}%")
        if lang:
            query = query.eq("lang", lang.value)
        if poet_id:
            query = query.eq("poet_id", poet_id)
        if poetry_id:
            query = query.eq("poetry_id", poetry_id)
        if standalone:
            query = query.or_("poetry_id.is.null,poetry_id.eq.0")

        column, descending = resolve_sort(sort_by, sort_order, COUPLET_SORT_COLUMNS, DEFAULT_COUPLET_SORT)
        query = query.order(column, desc=descending)

        rows, total = SupabaseClient.fetch_page(query, pagination.offset, pagination.end, "list couplets")
        return paginated("couplets", CoupletService._display_page(rows), total, pagination)

    @staticmethod
    def list_by_poet(
        poet_id: str,
        pagination: Pagination,
        lang: Language | None = None,
        sort_by: str | None = None,
        sort_order: str | None = None,
    ) -> dict[str, Any]:
        """
        List a poet's couplets.

        Raises:
            ResourceNotFoundError: If the poet doesn't exist
        """
        poet = SupabaseClient.fetch_row(
            "poets", "id", poet_id,
            select="id, slug, sindhi_name, english_name, sindhi_laqab, english_laqab, file_url",
        )
        if not poet:
            raise ResourceNotFoundError("Poet", poet_id)

        client = SupabaseClient.get_client()
        query = (
            client.table("poetry_couplets")
            .select("*, poetry_main(id, poetry_slug, poetry_tags)", count="exact")
            .eq("poet_id", poet_id)
            .is_("deleted_at", "null")
        )
        if lang:
            query = query.eq("lang", lang.value)

        column, descending = resolve_sort(sort_by, sort_order, COUPLET_SORT_COLUMNS, DEFAULT_COUPLET_SORT)
        query = query.order(column, desc=descending)

        rows, total = SupabaseClient.fetch_page(
            query, pagination.offset, pagination.end, "list couplets by poet"
        )
        return paginated(
            "couplets",
            CoupletService._display_page(rows, poet),
            total,
            pagination,
            poet=CoupletService.poet_summary(poet),
            pagination=pagination.to_dict(total),
        )

    @staticmethod
    def get_couplet(couplet_id: str) -> dict[str, Any]:
        """
        Get one couplet with counters.

        Raises:
            ResourceNotFoundError: If the couplet doesn't exist
        """
        row = SupabaseClient.fetch_row("poetry_couplets", "id", couplet_id, select=COUPLET_SELECT)
        if not row:
            raise ResourceNotFoundError("Couplet", couplet_id)
        return CoupletService._display_page([row])[0]

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    @staticmethod
    def derive_slug(text: str) -> str:
        """
        Slug from couplet text, at most 50 characters.

        Sindhi text is romanized first (first line only). The romanized
        slug keeps its diacritics (ṭ, ḍh, ṛ, ṇ), so it is only truncated.
        """
        if contains_sindhi(text):
            slug = romanize_to_slug(text, DictionaryService.roman_words_or_empty())
            return slug[:SLUG_MAX_LENGTH].strip("-")
        return slugify(text, max_length=SLUG_MAX_LENGTH).strip("-")

    @staticmethod
    def create_couplet(data: CoupletCreate) -> dict[str, Any]:
        """
        Create a couplet.

        Raises:
            MissingFieldsError: If text or poet is missing
        """
        missing = [f for f in ("couplet_text", "poet_id") if not getattr(data, f)]
        if missing:
            raise MissingFieldsError("Couplet text and poet ID are required", missing)

        row = data.model_dump()
        row["couplet_slug"] = data.couplet_slug or CoupletService.derive_slug(data.couplet_text)

        created = SupabaseClient.insert_row("poetry_couplets", row)
        logger.info(f"Created couplet: {created.get('id')} for poet: {data.poet_id}")
        return CoupletService.get_couplet(created["id"])

    @staticmethod
    def update_couplet(couplet_id: str, data: CoupletUpdate) -> dict[str, Any]:
        """
        Update a couplet with the fields present in the request body.

        Raises:
            ResourceNotFoundError: If the couplet doesn't exist
        """
        changes = data.model_dump(exclude_unset=True)
        changes["updated_at"] = utc_now_iso()

        updated = SupabaseClient.update_row("poetry_couplets", couplet_id, changes)
        if not updated:
            raise ResourceNotFoundError("Couplet", couplet_id)
        return CoupletService.get_couplet(couplet_id)

    @staticmethod
    def delete_couplet(couplet_id: str) -> None:
        """Soft-delete a couplet."""
        if not SupabaseClient.soft_delete("poetry_couplets", couplet_id):
            raise ResourceNotFoundError("Couplet", couplet_id)

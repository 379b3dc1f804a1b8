# =============================================================================
# core/services/poet_service.py - Poet Business Logic
# =============================================================================
# Handles poet listing, lookup by id or slug, and admin CRUD.
# Separates HTTP concerns from database/business logic.
#
# Poets may lack a stored slug; one is derived from english_name and, on
# detail reads, persisted back so later lookups hit the slug column.
# =============================================================================

import logging
from typing import Any

from app.exceptions import MissingFieldsError, ResourceNotFoundError
from core.models.common import (
    Language,
    Pagination,
    SortOrder,
    count_only,
    paginated,
    resolve_sort,
)
from core.models.poet import PoetCreate, PoetUpdate
from lib.supabase_client import SupabaseClient, SupabaseClientError, utc_now_iso
from lib.utils import humanize_slug, ilike_any, is_uuid, sanitize_search_term, slugify

logger = logging.getLogger(__name__)

POET_SORT_COLUMNS = {
    "created_at": "created_at",
    "updated_at": "updated_at",
    "english_name": "english_name",
    "sindhi_name": "sindhi_name",
    "birth_date": "birth_date",
    "death_date": "death_date",
}
DEFAULT_POET_SORT = ("created_at", SortOrder.DESC)

POETRY_PER_CATEGORY = 4
RECENT_COUPLETS = 10


def derive_slug(poet: dict[str, Any]) -> str:
    """Stored slug, or one derived from the English name."""
    return poet.get("slug") or slugify(poet.get("english_name"))


class PoetService:
    """
    Service for poet operations.

    Provides a clean interface between API routes and database.
    """

    @staticmethod
    def to_display(poet: dict[str, Any]) -> dict[str, Any]:
        """Map a poets row to the display shape used by every poet endpoint."""
        slug = derive_slug(poet)
        return {
            "id": poet.get("id"),
            "poet_id": poet.get("id"),
            "poet_slug": slug,
            "slug": slug,
            "sindhi_name": poet.get("sindhi_name"),
            "english_name": poet.get("english_name"),
            "sindhi_laqab": poet.get("sindhi_laqab"),
            "english_laqab": poet.get("english_laqab"),
            "sindhi_tagline": poet.get("sindhi_tagline"),
            "english_tagline": poet.get("english_tagline"),
            "file_url": poet.get("file_url"),
            "birth_date": poet.get("birth_date"),
            "death_date": poet.get("death_date"),
            "birth_place": poet.get("birth_place"),
            "death_place": poet.get("death_place"),
            "sindhi_details": poet.get("sindhi_details"),
            "english_details": poet.get("english_details"),
            "period": poet.get("period"),
            "tags": poet.get("tags") or [],
            "is_active": poet.get("is_active") is not False,
            "created_at": poet.get("created_at"),
            "updated_at": poet.get("updated_at"),
        }

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @staticmethod
    def list_poets(
        pagination: Pagination,
        lang: Language,
        search: str | None = None,
        sort_by: str | None = None,
        sort_order: str | None = None,
        only_count: bool = False,
    ) -> dict[str, Any]:
        """
        List live poets with search, sorting and pagination.

        Search matches name, laqab and tagline in the requested language.
        """
        client = SupabaseClient.get_client()
        query = (
            client.table("poets")
            .select("*", count="exact")
            .is_("deleted_at", "null")
        )

        term = sanitize_search_term(search)
        if term:
            prefix = lang.prefix
            columns = [f"{prefix}_name", f"{prefix}_laqab", f"{prefix}_tagline"]
            query = query.or_(ilike_any(columns, term))

        if only_count:
            return count_only(SupabaseClient.fetch_count(query, "count poets"))

        column, descending = resolve_sort(sort_by, sort_order, POET_SORT_COLUMNS, DEFAULT_POET_SORT)
        query = query.order(column, desc=descending)

        rows, total = SupabaseClient.fetch_page(query, pagination.offset, pagination.end, "list poets")
        poets = [PoetService.to_display(row) for row in rows]
        return paginated("poets", poets, total, pagination)

    @staticmethod
    def find_poet(id_or_slug: str) -> dict[str, Any] | None:
        """
        Resolve a poet from a UUID or a slug.

        Slug resolution order: slug column, poet_slug column, then a scan
        comparing derived slugs (for rows that never had one stored).
        """
        key = str(id_or_slug).strip()
        if is_uuid(key):
            return SupabaseClient.fetch_row("poets", "id", key)

        slug = key.lower()
        poet = SupabaseClient.fetch_row("poets", "slug", slug, case_insensitive=True)
        if poet:
            return poet

        try:
            poet = SupabaseClient.fetch_row("poets", "poet_slug", slug, case_insensitive=True)
        except SupabaseClientError as e:
            # Older schemas have no poet_slug column
            logger.debug(f"poet_slug lookup skipped: {e}")
            poet = None
        if poet:
            return poet

        for row in SupabaseClient.fetch_all("poets"):
            stored = str(row.get("slug") or row.get("poet_slug") or "").strip().lower()
            if stored:
                if stored == slug:
                    return row
            elif slugify(row.get("english_name")) == slug:
                return row
        return None

    @staticmethod
    def get_poet_or_404(id_or_slug: str) -> dict[str, Any]:
        poet = PoetService.find_poet(id_or_slug)
        if not poet:
            raise ResourceNotFoundError("Poet", id_or_slug)
        return poet

    @staticmethod
    def get_poet_detail(id_or_slug: str) -> dict[str, Any]:
        """
        Get a poet with categories, recent poems per category and couplets.

        Raises:
            ResourceNotFoundError: If no live poet matches
        """
        poet = PoetService.get_poet_or_404(id_or_slug)
        poet_id = poet["id"]

        categories = PoetService._poet_categories(poet_id)
        categories_with_poetry = [
            {**category, "poetry": PoetService._recent_poetry(poet_id, category["id"])}
            for category in categories
        ]

        client = SupabaseClient.get_client()
        couplets = SupabaseClient.execute(
            client.table("poetry_couplets")
            .select("id, couplet_text, couplet_slug, couplet_tags, lang, created_at")
            .eq("poet_id", poet_id)
            .is_("deleted_at", "null")
            .order("created_at", desc=True)
            .limit(RECENT_COUPLETS),
            "fetch poet couplets",
        ).data or []

        if not poet.get("slug"):
            PoetService._persist_slug(poet)

        display = PoetService.to_display(poet)
        display["couplets"] = couplets
        return {
            "success": True,
            "poet": display,
            "categories": categories,
            "categoriesWithPoetry": categories_with_poetry,
        }

    @staticmethod
    def _poet_categories(poet_id: str) -> list[dict[str, Any]]:
        """Distinct categories the poet has poetry in, with names in both languages."""
        client = SupabaseClient.get_client()
        rows = SupabaseClient.execute(
            client.table("poetry_main")
            .select("category_id")
            .eq("poet_id", poet_id)
            .is_("deleted_at", "null"),
            "fetch poet categories",
        ).data or []

        category_ids = list(dict.fromkeys(r["category_id"] for r in rows if r.get("category_id")))
        if not category_ids:
            return []

        base = SupabaseClient.fetch_rows_in("categories", "id", category_ids, "id, slug, content_style")
        details = SupabaseClient.fetch_rows_in(
            "category_details", "cat_id", category_ids, "cat_id, cat_name, lang"
        )
        names: dict[tuple[str, str], str] = {
            (str(d["cat_id"]), d.get("lang")): d.get("cat_name") for d in details
        }

        return [
            {
                "id": category["id"],
                "slug": category.get("slug"),
                "content_style": category.get("content_style"),
                "english_name": names.get((str(category["id"]), "en")),
                "sindhi_name": names.get((str(category["id"]), "sd")),
            }
            for category in base
        ]

    @staticmethod
    def _recent_poetry(poet_id: str, category_id: Any) -> list[dict[str, Any]]:
        """Newest poems of a poet in one category."""
        client = SupabaseClient.get_client()
        rows = SupabaseClient.execute(
            client.table("poetry_main")
            .select("*")
            .eq("poet_id", poet_id)
            .eq("category_id", category_id)
            .is_("deleted_at", "null")
            .order("created_at", desc=True)
            .limit(POETRY_PER_CATEGORY),
            "fetch poet poetry",
        ).data or []

        items = []
        for row in rows:
            slug = str(row.get("poetry_slug") or "").strip()
            items.append({
                "id": row["id"],
                "poetry_slug": slug,
                "title": row.get("title") or row.get("poetry_title") or humanize_slug(slug),
            })
        return items

    @staticmethod
    def _persist_slug(poet: dict[str, Any]) -> None:
        """Store the derived slug; failure only costs a slower lookup next time."""
        slug = derive_slug(poet)
        if not slug:
            return
        try:
            SupabaseClient.update_row("poets", poet["id"], {"slug": slug})
            logger.info(f"Stored derived slug '{slug}' for poet {poet['id']}")
        except SupabaseClientError as e:
            logger.warning(f"Failed to store slug for poet {poet['id']}: {e}")

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    @staticmethod
    def create_poet(data: PoetCreate) -> dict[str, Any]:
        """
        Create a poet.

        Raises:
            MissingFieldsError: If either name is missing
        """
        missing = [f for f in ("sindhi_name", "english_name") if not getattr(data, f)]
        if missing:
            raise MissingFieldsError("Sindhi name and English name are required", missing)

        row = data.model_dump()
        row["slug"] = slugify(data.english_name)
        row["is_active"] = True

        poet = SupabaseClient.insert_row("poets", row)
        logger.info(f"Created poet: {poet.get('id')} ({row['slug']})")
        return PoetService.to_display(poet)

    @staticmethod
    def update_poet(poet_id: str, data: PoetUpdate) -> dict[str, Any]:
        """
        Update a poet with the fields present in the request body.

        Raises:
            ResourceNotFoundError: If no live poet has this id
        """
        changes = data.model_dump(exclude_unset=True)
        changes.pop("id", None)
        changes.pop("created_at", None)
        changes["updated_at"] = utc_now_iso()

        poet = SupabaseClient.update_row("poets", poet_id, changes)
        if not poet:
            raise ResourceNotFoundError("Poet", poet_id)

        logger.info(f"Updated poet: {poet_id}")
        return PoetService.to_display(poet)

    @staticmethod
    def delete_poet(poet_id: str) -> None:
        """
        Soft-delete a poet.

        Raises:
            ResourceNotFoundError: If no live poet has this id
        """
        if not SupabaseClient.soft_delete("poets", poet_id):
            raise ResourceNotFoundError("Poet", poet_id)

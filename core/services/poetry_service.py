# =============================================================================
# core/services/poetry_service.py - Poetry Business Logic
# =============================================================================
# Handles poem listing, detail and admin CRUD.
#
# Listing reads one page of poetry_main and then resolves poets, categories,
# category names and translations for the whole page with one `in` query
# each, instead of one query per poem.
# =============================================================================

import logging
from typing import Any

from app.exceptions import MissingFieldsError, ResourceNotFoundError
from core.models.common import (
    Language,
    Pagination,
    SortOrder,
    paginated,
    pick,
    resolve_sort,
)
from core.models.poetry import PoetryCreate, PoetryTranslationInput, PoetryUpdate
from lib.supabase_client import SupabaseClient, utc_now_iso
from lib.utils import sanitize_search_term, slugify, split_tags

logger = logging.getLogger(__name__)

POETRY_SORT_COLUMNS = {
    "created_at": "created_at",
    "is_featured": "is_featured",
    "title": "poetry_slug",
}
DEFAULT_POETRY_SORT = ("created_at", SortOrder.DESC)
POET_COLUMNS = (
    "id, slug, sindhi_name, english_name, sindhi_laqab, english_laqab, "
    "sindhi_tagline, english_tagline, file_url"
)


def _index(rows: list[dict[str, Any]], key: str) -> dict[str, dict[str, Any]]:
    return {str(row[key]): row for row in rows if row.get(key) is not None}


def _group(rows: list[dict[str, Any]], key: str) -> dict[str, list[dict[str, Any]]]:
    grouped: dict[str, list[dict[str, Any]]] = {}
    for row in rows:
        grouped.setdefault(str(row.get(key)), []).append(row)
    return grouped


class PoetryService:
    """
    Service for poetry operations.

    Provides a clean interface between API routes and database.
    """

    # -------------------------------------------------------------------------
    # Related Rows
    # -------------------------------------------------------------------------

    @staticmethod
    def _related(rows: list[dict[str, Any]]) -> dict[str, Any]:
        """Poets, categories, category names and translations for a set of poems."""
        poet_ids = list(dict.fromkeys(r["poet_id"] for r in rows if r.get("poet_id")))
        category_ids = list(dict.fromkeys(r["category_id"] for r in rows if r.get("category_id")))
        poetry_ids = [r["id"] for r in rows]

        return {
            "poets": _index(SupabaseClient.fetch_rows_in("poets", "id", poet_ids, POET_COLUMNS), "id"),
            "categories": _index(
                SupabaseClient.fetch_rows_in("categories", "id", category_ids, "id, slug"), "id"
            ),
            "category_names": {
                (str(d["cat_id"]), d.get("lang")): d.get("cat_name")
                for d in SupabaseClient.fetch_rows_in(
                    "category_details", "cat_id", category_ids, "cat_id, cat_name, lang"
                )
            },
            "translations": _group(
                SupabaseClient.fetch_rows_in(
                    "poetry_translations", "poetry_id", poetry_ids, "poetry_id, lang, title, info"
                ),
                "poetry_id",
            ),
        }

    @staticmethod
    def to_display(poem: dict[str, Any], related: dict[str, Any], lang: Language) -> dict[str, Any]:
        """Map a poetry_main row plus its related rows to the display shape."""
        poet = related["poets"].get(str(poem.get("poet_id"))) or {}
        category = related["categories"].get(str(poem.get("category_id"))) or {}
        category_slug = category.get("slug") or "unknown"
        category_name = (
            related["category_names"].get((str(category.get("id")), lang.value))
            or category.get("slug")
            or "Unknown"
        )

        translations = related["translations"].get(str(poem.get("id")), [])
        translation = next((t for t in translations if t.get("lang") == lang.value), None) or {}

        return {
            "id": poem.get("id"),
            "poetry_slug": poem.get("poetry_slug"),
            "title": translation.get("title") or poem.get("poetry_slug"),
            "info": translation.get("info"),
            "lang": poem.get("lang"),
            "tags": split_tags(poem.get("poetry_tags")),
            "poet_id": poem.get("poet_id"),
            "poet_name": pick(poet, "name", lang) or "Unknown Poet",
            "poet_slug": poet.get("slug") or slugify(poet.get("english_name")) or "unknown",
            "poet_laqab": pick(poet, "laqab", lang),
            "poet_avatar": poet.get("file_url"),
            "poet_tagline": pick(poet, "tagline", lang),
            "category": category_name,
            "category_slug": category_slug,
            "is_featured": bool(poem.get("is_featured")),
            "created_at": poem.get("created_at"),
        }

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @staticmethod
    def list_poetry(
        pagination: Pagination,
        lang: Language,
        search: str | None = None,
        category: str | None = None,
        sort_by: str | None = None,
        sort_order: str | None = None,
    ) -> dict[str, Any]:
        """
        List visible, live poems.

        Args:
            category: Category slug; an unknown slug yields an empty page
        """
        client = SupabaseClient.get_client()
        query = (
            client.table("poetry_main")
            .select("*", count="exact")
            .eq("visibility", True)
            .is_("deleted_at", "null")
        )

        term = sanitize_search_term(search)
        if term:
            query = query.ilike("poetry_slug", f"%{term}%")

        if category:
            category_row = SupabaseClient.fetch_row("categories", "slug", category.strip().lower())
            if not category_row:
                return paginated("poetry", [], 0, pagination)
            query = query.eq("category_id", category_row["id"])

        column, descending = resolve_sort(sort_by, sort_order, POETRY_SORT_COLUMNS, DEFAULT_POETRY_SORT)
        query = query.order(column, desc=descending)

        rows, total = SupabaseClient.fetch_page(query, pagination.offset, pagination.end, "list poetry")
        if not rows:
            return paginated("poetry", [], total, pagination)

        related = PoetryService._related(rows)
        poetry = [PoetryService.to_display(row, related, lang) for row in rows]
        return paginated("poetry", poetry, total, pagination)

    @staticmethod
    def find_poem(id_or_slug: str) -> dict[str, Any] | None:
        """Numeric keys are ids; anything else is a poetry_slug."""
        key = str(id_or_slug).strip()
        if key.isdigit():
            return SupabaseClient.fetch_row("poetry_main", "id", int(key))
        return SupabaseClient.fetch_row("poetry_main", "poetry_slug", key, case_insensitive=True)

    @staticmethod
    def get_poetry_detail(id_or_slug: str, lang: Language) -> dict[str, Any]:
        """
        Get a poem with its translations, poet, category and couplets.

        Raises:
            ResourceNotFoundError: If no live poem matches
        """
        poem = PoetryService.find_poem(id_or_slug)
        if not poem:
            raise ResourceNotFoundError("Poetry", id_or_slug)

        related = PoetryService._related([poem])
        display = PoetryService.to_display(poem, related, lang)
        display["translations"] = related["translations"].get(str(poem["id"]), [])

        client = SupabaseClient.get_client()
        couplets = SupabaseClient.execute(
            client.table("poetry_couplets")
            .select("id, couplet_text, couplet_slug, couplet_tags, lang")
            .eq("poetry_id", poem["id"])
            .is_("deleted_at", "null")
            .order("id"),
            "fetch poem couplets",
        ).data or []
        display["couplets"] = couplets

        return {"success": True, "poetry": display}

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    @staticmethod
    def _save_translations(poetry_id: Any, translations: list[PoetryTranslationInput]) -> list[dict[str, Any]]:
        rows = [
            {"poetry_id": poetry_id, "lang": t.lang.value, "title": t.title, "info": t.info}
            for t in translations
        ]
        return SupabaseClient.upsert_rows("poetry_translations", rows, on_conflict="poetry_id,lang")

    @staticmethod
    def create_poetry(data: PoetryCreate) -> dict[str, Any]:
        """
        Create a poem and its translations.

        Raises:
            MissingFieldsError: If slug, poet or category is missing
        """
        missing = [f for f in ("poetry_slug", "poet_id", "category_id") if not getattr(data, f)]
        if missing:
            raise MissingFieldsError("Poetry slug, poet and category are required", missing)

        row = data.model_dump(exclude={"translations"}, mode="json")
        poem = SupabaseClient.insert_row("poetry_main", row)
        poem["translations"] = PoetryService._save_translations(poem["id"], data.translations)

        logger.info(f"Created poetry: {poem['id']} ({data.poetry_slug})")
        return poem

    @staticmethod
    def update_poetry(poetry_id: str, data: PoetryUpdate) -> dict[str, Any]:
        """
        Update a poem; translations in the body are upserted per language.

        Raises:
            ResourceNotFoundError: If no live poem has this id
        """
        changes = data.model_dump(exclude_unset=True, exclude={"translations"}, mode="json")
        changes["updated_at"] = utc_now_iso()

        poem = SupabaseClient.update_row("poetry_main", poetry_id, changes)
        if not poem:
            raise ResourceNotFoundError("Poetry", poetry_id)

        if data.translations:
            poem["translations"] = PoetryService._save_translations(poem["id"], data.translations)
        return poem

    @staticmethod
    def delete_poetry(poetry_id: str) -> None:
        """Soft-delete a poem."""
        if not SupabaseClient.soft_delete("poetry_main", poetry_id):
            raise ResourceNotFoundError("Poetry", poetry_id)

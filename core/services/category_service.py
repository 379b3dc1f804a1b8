# =============================================================================
# core/services/category_service.py - Category Business Logic
# =============================================================================
# Handles category listing, lookup by slug, the poetry of a category and
# admin CRUD. Category names and descriptions come from category_details
# (one row per language); poetry counts only include visible, live poems.
# =============================================================================

import logging
from typing import Any

from app.exceptions import MissingFieldsError, ResourceNotFoundError
from core.models.category import CategoryCreate, CategoryLocalized, CategoryUpdate
from core.models.common import Language, Pagination
from core.services.poetry_service import PoetryService
from lib.supabase_client import SupabaseClient
from lib.utils import ilike_any, sanitize_search_term

logger = logging.getLogger(__name__)

CATEGORY_SELECT = (
    "id, slug, content_style, is_featured, gender, "
    "category_details(cat_name, cat_name_plural, cat_detail, lang)"
)
MAX_CATEGORY_PAGE = 48
ALL_CATEGORIES_LIMIT = 1000
SUMMARY_TEMPLATE = (
    "{name} brings together notable works and references in this form. "
    "Explore key themes, stylistic patterns, and historical usage curated by our editors."
)


class CategoryService:
    """
    Service for category operations.

    Provides a clean interface between API routes and database.
    """

    # -------------------------------------------------------------------------
    # Display Mapping
    # -------------------------------------------------------------------------

    @staticmethod
    def to_display(category: dict[str, Any], count: int, lang: Language) -> dict[str, Any]:
        """Map a categories row with embedded details to the display shape."""
        details = category.get("category_details") or []
        en = next((d for d in details if d.get("lang") == "en"), None) or {}
        sd = next((d for d in details if d.get("lang") == "sd"), None) or {}

        english_name = en.get("cat_name") or ""
        sindhi_name = sd.get("cat_name") or ""
        english_details = en.get("cat_detail") or ""
        sindhi_details = sd.get("cat_detail") or ""

        languages = []
        if sindhi_name or sindhi_details:
            languages.append("Sindhi")
        if english_name or english_details:
            languages.append("English")

        if lang is Language.SD:
            summary = sindhi_details or SUMMARY_TEMPLATE.format(name=sindhi_name)
        else:
            summary = english_details or SUMMARY_TEMPLATE.format(name=english_name)

        return {
            "id": str(category.get("id")),
            "slug": category.get("slug"),
            "contentStyle": category.get("content_style"),
            "isFeatured": bool(category.get("is_featured")),
            "gender": category.get("gender"),
            "englishName": english_name,
            "sindhiName": sindhi_name,
            "englishPlural": en.get("cat_name_plural") or "",
            "sindhiPlural": sd.get("cat_name_plural") or "",
            "englishDetails": english_details,
            "sindhiDetails": sindhi_details,
            "languages": languages,
            "summary": summary,
            "count": count,
        }

    @staticmethod
    def poetry_counts(category_ids: list[Any]) -> dict[str, int]:
        """Visible, live poems per category id (keyed by str(id))."""
        if not category_ids:
            return {}
        client = SupabaseClient.get_client()
        rows = SupabaseClient.execute(
            client.table("poetry_main")
            .select("category_id")
            .in_("category_id", category_ids)
            .eq("visibility", True)
            .is_("deleted_at", "null"),
            "count category poetry",
        ).data or []

        counts: dict[str, int] = {}
        for row in rows:
            key = str(row.get("category_id"))
            counts[key] = counts.get(key, 0) + 1
        return counts

    @staticmethod
    def filter_for_language(items: list[dict[str, Any]], lang: Language) -> list[dict[str, Any]]:
        """
        Keep categories with content in `lang`.

        For Sindhi, categories with both a Sindhi name and description come
        first; the sort is stable otherwise.
        """
        if lang is Language.SD:
            items = [i for i in items if i["sindhiName"] or i["sindhiDetails"]]
            return sorted(items, key=lambda i: not (i["sindhiName"] and i["sindhiDetails"]))
        return [i for i in items if i["englishName"] or i["englishDetails"]]

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @staticmethod
    def list_categories(
        page: int,
        limit: int | None,
        lang: Language,
        get_all: bool = False,
        search: str | None = None,
        sort_order: str | None = None,
    ) -> dict[str, Any]:
        """
        List live categories.

        Args:
            get_all: Lift the page size to 1000
            limit: Clamped to 1..48 unless get_all
        """
        if get_all:
            pagination = Pagination(page=max(1, page), limit=ALL_CATEGORIES_LIMIT)
        else:
            pagination = Pagination.clamp(page, limit, default_limit=12, max_limit=MAX_CATEGORY_PAGE)

        client = SupabaseClient.get_client()
        query = (
            client.table("categories")
            .select(CATEGORY_SELECT, count="exact")
            .is_("deleted_at", "null")
        )

        term = sanitize_search_term(search)
        if term:
            matches = SupabaseClient.execute(
                client.table("category_details")
                .select("cat_id")
                .or_(ilike_any(["cat_name", "cat_detail"], term)),
                "search categories",
            ).data or []
            matched_ids = list(dict.fromkeys(m["cat_id"] for m in matches))
            if not matched_ids:
                return CategoryService._envelope([], 0, pagination)
            query = query.in_("id", matched_ids)

        query = query.order("id", desc=(sort_order or "").lower() == "desc")

        rows, total = SupabaseClient.fetch_page(query, pagination.offset, pagination.end, "list categories")
        counts = CategoryService.poetry_counts([row["id"] for row in rows])
        items = [CategoryService.to_display(row, counts.get(str(row["id"]), 0), lang) for row in rows]
        return CategoryService._envelope(CategoryService.filter_for_language(items, lang), total, pagination)

    @staticmethod
    def _envelope(items: list[dict[str, Any]], total: int, pagination: Pagination) -> dict[str, Any]:
        return {
            "success": True,
            "items": items,
            "total": total,
            "page": pagination.page,
            "limit": pagination.limit,
            "totalPages": pagination.total_pages(total),
            "pagination": pagination.to_dict(total, with_navigation=True),
        }

    @staticmethod
    def get_category_or_404(slug: str) -> dict[str, Any]:
        category = SupabaseClient.fetch_row(
            "categories", "slug", slug.strip().lower(), select=CATEGORY_SELECT
        )
        if not category:
            raise ResourceNotFoundError("Category", slug)
        return category

    @staticmethod
    def get_category(slug: str, lang: Language) -> dict[str, Any]:
        """
        Get one category by slug, with its poetry count.

        Raises:
            ResourceNotFoundError: If no live category has this slug
        """
        category = CategoryService.get_category_or_404(slug)
        count = CategoryService.poetry_counts([category["id"]]).get(str(category["id"]), 0)
        display = CategoryService.to_display(category, count, lang)
        display["poetryCount"] = count
        return {"success": True, "category": display}

    @staticmethod
    def category_poetry(
        slug: str,
        pagination: Pagination,
        lang: Language,
        search: str | None = None,
        sort_by: str | None = None,
        sort_order: str | None = None,
    ) -> dict[str, Any]:
        """Poetry listing restricted to one category."""
        category = CategoryService.get_category_or_404(slug)
        result = PoetryService.list_poetry(
            pagination,
            lang,
            search=search,
            category=category["slug"],
            sort_by=sort_by,
            sort_order=sort_order,
        )
        result["category"] = CategoryService.to_display(category, result["total"], lang)
        return result

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    @staticmethod
    def _save_details(
        category_id: Any,
        slug: str,
        english: CategoryLocalized | None,
        sindhi: CategoryLocalized | None,
    ) -> None:
        """Upsert category_details for each language given; names default to the slug."""
        rows = []
        for lang, localized in (("en", english), ("sd", sindhi)):
            if localized is None:
                continue
            rows.append({
                "cat_id": category_id,
                "lang": lang,
                "cat_name": localized.name or slug,
                "cat_name_plural": localized.plural or None,
                "cat_detail": localized.details or None,
            })
        SupabaseClient.upsert_rows("category_details", rows, on_conflict="cat_id,lang")

    @staticmethod
    def create_category(data: CategoryCreate) -> dict[str, Any]:
        """
        Create a category, or reuse the live one with the same slug.

        Raises:
            MissingFieldsError: If slug is missing
        """
        slug = (data.slug or "").strip()
        if not slug:
            raise MissingFieldsError("slug required", ["slug"])

        existing = SupabaseClient.fetch_row("categories", "slug", slug)
        if existing:
            category_id = existing["id"]
            logger.info(f"Category '{slug}' exists ({category_id}), updating details")
        else:
            created = SupabaseClient.insert_row("categories", {
                "slug": slug,
                "is_featured": data.is_featured,
                "content_style": data.content_style,
                "gender": data.gender,
            })
            category_id = created["id"]
            logger.info(f"Created category: {category_id} ({slug})")

        CategoryService._save_details(category_id, slug, data.english, data.sindhi)
        return {"id": category_id, "slug": slug, "created": existing is None}

    @staticmethod
    def update_category(category_id: str, data: CategoryUpdate) -> dict[str, Any]:
        """
        Update category flags and upsert the details given.

        Raises:
            ResourceNotFoundError: If no live category has this id
        """
        category = SupabaseClient.fetch_row("categories", "id", category_id)
        if not category:
            raise ResourceNotFoundError("Category", category_id)

        changes = data.model_dump(exclude_unset=True, exclude={"english", "sindhi"})
        if changes.get("slug") is not None:
            changes["slug"] = changes["slug"].strip()
        if changes:
            category = SupabaseClient.update_row("categories", category_id, changes) or category

        CategoryService._save_details(category["id"], category.get("slug") or "", data.english, data.sindhi)
        return {"id": category["id"], "slug": category.get("slug")}

    @staticmethod
    def delete_category(category_id: str) -> None:
        """Soft-delete a category."""
        if not SupabaseClient.soft_delete("categories", category_id):
            raise ResourceNotFoundError("Category", category_id)

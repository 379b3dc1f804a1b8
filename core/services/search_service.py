# =============================================================================
# core/services/search_service.py - Site Search
# =============================================================================
# Quick search across poets, poetry titles and couplets for the search box.
# Each section is queried on its own; a failing section is logged and
# skipped so the others still return results.
# =============================================================================

import logging
from typing import Any

from core.models.common import Language, pick
from lib.supabase_client import SupabaseClient
from lib.utils import ilike_any, sanitize_search_term, slugify

logger = logging.getLogger(__name__)

SECTION_LIMIT = 5
POET_SEARCH_FIELDS = ("name", "laqab", "tagline")
SUBTITLES = {
    "poet": {Language.SD: "شاعر", Language.EN: "Poet"},
    "poetry": {Language.SD: "شاعري", Language.EN: "Poetry"},
    "couplet": {Language.SD: "شعر", Language.EN: "Couplet"},
}


def _result(
    item_id: Any,
    kind: str,
    title: str,
    url: str,
    lang: Language,
    image_url: str | None = None,
    matched_field: str | None = None,
) -> dict[str, Any]:
    return {
        "id": str(item_id),
        "type": kind,
        "title": title,
        "subtitle": SUBTITLES[kind][lang],
        "url": url,
        "imageUrl": image_url,
        "matchedField": matched_field,
    }


class SearchService:
    """
    Service for the site-wide quick search.

    Example:
        SearchService.search("latif", Language.EN)
        # {"success": True, "query": "latif", "results": [{"type": "poet", ...}]}
    """

    @staticmethod
    def search_poets(term: str, lang: Language) -> list[dict[str, Any]]:
        columns = [f"{p}_{f}" for f in POET_SEARCH_FIELDS for p in ("sindhi", "english")] + ["slug"]
        client = SupabaseClient.get_client()
        rows = (
            client.table("poets")
            .select("id, slug, sindhi_name, english_name, sindhi_laqab, english_laqab, "
                    "sindhi_tagline, english_tagline, file_url")
            .or_(ilike_any(columns, term))
            .is_("deleted_at", "null")
            .limit(SECTION_LIMIT)
            .execute()
        ).data or []

        needle = term.lower()
        results = []
        for poet in rows:
            name = pick(poet, "name", lang) or ""
            slug = poet.get("slug") or slugify(poet.get("english_name"))
            matched = None
            title = name
            for field in POET_SEARCH_FIELDS:
                value = pick(poet, field, lang)
                if value and needle in value.lower():
                    matched = f"{lang.prefix}_{field}"
                    if field != "name":
                        title = f"{name} ({value})"
                    break
            if matched is None and slug and needle in slug.lower():
                matched = "slug"
                title = f"{name} ({slug})"
            results.append(_result(
                poet.get("id"), "poet", title, f"/{lang.value}/poets/{slug or poet.get('id')}",
                lang, image_url=poet.get("file_url"), matched_field=matched,
            ))
        return results

    @staticmethod
    def search_poetry(term: str, lang: Language) -> list[dict[str, Any]]:
        client = SupabaseClient.get_client()
        translations = (
            client.table("poetry_translations")
            .select("poetry_id, title")
            .eq("lang", lang.value)
            .ilike("title", f"%{term}%")
            .limit(SECTION_LIMIT)
            .execute()
        ).data or []
        if not translations:
            return []

        poems = {
            str(p["id"]): p
            for p in SupabaseClient.fetch_rows_in(
                "poetry_main", "id", [t["poetry_id"] for t in translations],
                "id, poetry_slug, visibility, deleted_at",
            )
        }
        results = []
        for translation in translations:
            poem = poems.get(str(translation["poetry_id"]))
            if not poem or not poem.get("visibility") or poem.get("deleted_at"):
                continue
            results.append(_result(
                poem["id"], "poetry", translation.get("title") or poem.get("poetry_slug"),
                f"/{lang.value}/poetry/{poem.get('poetry_slug') or poem['id']}",
                lang, matched_field="title",
            ))
        return results

    @staticmethod
    def search_couplets(term: str, lang: Language) -> list[dict[str, Any]]:
        client = SupabaseClient.get_client()
        rows = (
            client.table("poetry_couplets")
            .select("id, couplet_text, couplet_slug")
            .ilike("couplet_text", f"%{term}%")
            .is_("deleted_at", "null")
            .limit(SECTION_LIMIT)
            .execute()
        ).data or []

        results = []
        for couplet in rows:
            first_line = (couplet.get("couplet_text") or "").split("\n")[0].strip()
            results.append(_result(
                couplet.get("id"), "couplet", first_line,
                f"/{lang.value}/couplets/{couplet.get('couplet_slug') or couplet.get('id')}",
                lang, matched_field="couplet_text",
            ))
        return results

    @staticmethod
    def search(query: str | None, lang: Language) -> dict[str, Any]:
        """
        Search every section for `query`.

        An empty query returns no results without touching the database.
        """
        term = sanitize_search_term(query)
        if not term:
            return {"success": True, "query": "", "results": []}

        results: list[dict[str, Any]] = []
        sections = (
            ("poets", SearchService.search_poets),
            ("poetry", SearchService.search_poetry),
            ("couplets", SearchService.search_couplets),
        )
        for name, section in sections:
            try:
                results.extend(section(term, lang))
            except Exception as e:
                logger.warning(f"Search section '{name}' failed for '{term}': {e}")

        logger.debug(f"Search '{term}' ({lang.value}) returned {len(results)} results")
        return {"success": True, "query": term, "results": results}

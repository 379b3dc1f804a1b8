# =============================================================================
# core/services/dictionary_service.py - Hesudhar & Romanizer Dictionaries
# =============================================================================
# Loads the text-tool dictionaries from Supabase, caches them in-process and
# exposes the admin operations built on lib/romanizer.py:
# - Run hesudhar / romanization on a text
# - Apply dictionary corrections
# - CRUD on the dictionary tables (writes invalidate the cache)
# - Export a dictionary to its "word|replacement" file (used by the worker)
#
# Cache: one entry per dictionary kind, replaced whole on reload and kept for
# settings.DICTIONARY_CACHE_TTL seconds.
# =============================================================================

import logging
import os
import time
from typing import Any, Callable, NamedTuple

from app.config import settings
from app.exceptions import InvalidParameterError, MissingFieldsError, ResourceNotFoundError
from core.models.common import Pagination
from core.models.dictionary import (
    DictionaryKind,
    HesudharEntry,
    HesudharModeName,
    RomanWordEntry,
    TextOperation,
    TextToolRequest,
)
from lib import romanizer
from lib.supabase_client import SupabaseClient, utc_now_iso
from lib.utils import ilike_any, sanitize_search_term

logger = logging.getLogger(__name__)


class DictionaryTable(NamedTuple):
    """Where a dictionary lives and how it is exported."""
    table: str
    key: str
    value: str
    items_key: str
    resource: str
    file_name: str
    title: str


DICTIONARIES: dict[DictionaryKind, DictionaryTable] = {
    DictionaryKind.HESUDHAR: DictionaryTable(
        table="baakh_hesudhars",
        key="word",
        value="correct",
        items_key="hesudhars",
        resource="Hesudhar entry",
        file_name="hesudhar.txt",
        title="Hesudhar corrections from database",
    ),
    DictionaryKind.ROMANIZER: DictionaryTable(
        table="baakh_roman_words",
        key="word_sd",
        value="word_roman",
        items_key="words",
        resource="Roman word",
        file_name="romanizer.txt",
        title="Romanizer words from database",
    ),
}

# kind -> (loaded_at monotonic seconds, dictionary)
_cache: dict[DictionaryKind, tuple[float, dict[str, str]]] = {}


class DictionaryService:
    """
    Service for the hesudhar and romanizer dictionaries.

    Example:
        corrections = DictionaryService.load(DictionaryKind.HESUDHAR)
        result = DictionaryService.correct("...")
    """

    # -------------------------------------------------------------------------
    # Cache
    # -------------------------------------------------------------------------

    @staticmethod
    def load(kind: DictionaryKind, force: bool = False) -> dict[str, str]:
        """
        Get a dictionary, reading the table when the cached copy is stale.

        Args:
            kind: Which dictionary
            force: Ignore the cache and re-read the table

        Returns:
            word -> replacement (keys NFC-normalized)
        """
        cached = _cache.get(kind)
        now = time.monotonic()
        if cached and not force and now - cached[0] < settings.DICTIONARY_CACHE_TTL:
            return cached[1]

        source = DICTIONARIES[kind]
        rows = SupabaseClient.fetch_all(source.table, select=f"id, {source.key}, {source.value}")
        dictionary = romanizer.build_dictionary(rows, source.key, source.value)
        _cache[kind] = (now, dictionary)

        logger.info(f"Loaded {len(dictionary)} {kind.value} dictionary entries")
        return dictionary

    @staticmethod
    def invalidate(kind: DictionaryKind | None = None) -> None:
        """Drop one cached dictionary, or all of them."""
        if kind is None:
            _cache.clear()
        else:
            _cache.pop(kind, None)

    @staticmethod
    def roman_words_or_empty() -> dict[str, str]:
        """Romanizer dictionary, or {} if it cannot be loaded (letter map only)."""
        try:
            return DictionaryService.load(DictionaryKind.ROMANIZER)
        except Exception as e:
            logger.warning(f"Romanizer dictionary unavailable, using letter map only: {e}")
            return {}

    # -------------------------------------------------------------------------
    # Text Operations
    # -------------------------------------------------------------------------

    @staticmethod
    def describe() -> dict[str, Any]:
        """What the romanizer endpoint supports."""
        return {
            "success": True,
            "message": "Romanizer API endpoint",
            "operations": [op.value for op in TextOperation],
            "modes": [mode.value for mode in HesudharModeName],
            "features": [
                "Smart hesudhar (ه to ھ inside words)",
                "Global hesudhar (every ه to ھ)",
                "Dictionary-based Sindhi to Roman transliteration",
                "Letter-map fallback for unknown words",
            ],
        }

    @staticmethod
    def run_text_tool(request: TextToolRequest) -> dict[str, Any]:
        """
        Run hesudhar or full romanization on a text.

        Raises:
            MissingFieldsError: If text is empty
            InvalidParameterError: If operation or mode is unknown
        """
        if not request.text or not request.text.strip():
            raise MissingFieldsError("Text is required and must be a string", ["text"])

        operations = [op.value for op in TextOperation]
        if request.operation not in operations:
            raise InvalidParameterError("operation", request.operation, operations)
        modes = [mode.value for mode in HesudharModeName]
        if request.mode not in modes:
            raise InvalidParameterError("mode", request.mode, modes)

        if request.operation == TextOperation.HESUDHAR.value:
            fixed = romanizer.apply_hesudhar(request.text, request.mode)
            return {
                "success": True,
                "original": request.text,
                "hesudhar": fixed.output,
                "replacements": fixed.replacements,
                "mode": request.mode,
            }

        result = romanizer.romanize(
            request.text,
            DictionaryService.roman_words_or_empty(),
            request.mode,
        )
        return {
            "success": True,
            "original": request.text,
            "romanized": result.romanized_text,
            "replacements": result.hesudhar_replacements,
            "dictionaryHits": [
                hit.to_dict("word", "roman") for hit in result.dictionary_hits
            ],
            "mode": request.mode,
        }

    @staticmethod
    def correct(text: str | None) -> dict[str, Any]:
        """
        Apply hesudhar dictionary corrections to a text.

        Raises:
            MissingFieldsError: If text is empty
        """
        if not text or not text.strip():
            raise MissingFieldsError("Text is required", ["text"])

        result = romanizer.correct_text(text, DictionaryService.load(DictionaryKind.HESUDHAR))
        return {
            "success": True,
            "originalText": result.original_text,
            "correctedText": result.corrected_text,
            "corrections": [
                c.to_dict("incorrectWord", "correctedWord") for c in result.corrections
            ],
            "message": result.message,
        }

    # -------------------------------------------------------------------------
    # Dictionary CRUD
    # -------------------------------------------------------------------------

    @staticmethod
    def list_entries(
        kind: DictionaryKind,
        pagination: Pagination,
        search: str | None = None,
    ) -> dict[str, Any]:
        """List dictionary rows, newest first, optionally searching both columns."""
        source = DICTIONARIES[kind]
        client = SupabaseClient.get_client()
        query = (
            client.table(source.table)
            .select("*", count="exact")
            .is_("deleted_at", "null")
            .order("created_at", desc=True)
        )

        term = sanitize_search_term(search)
        if term:
            query = query.or_(ilike_any([source.key, source.value], term))

        rows, total = SupabaseClient.fetch_page(
            query, pagination.offset, pagination.end, f"list {source.items_key}"
        )
        return {
            "success": True,
            source.items_key: rows,
            "total": total,
            "page": pagination.page,
            "limit": pagination.limit,
            "totalPages": pagination.total_pages(total),
            "hasMore": total > pagination.offset + pagination.limit,
        }

    @staticmethod
    def _entry_values(kind: DictionaryKind, entry: HesudharEntry | RomanWordEntry) -> dict[str, str]:
        source = DICTIONARIES[kind]
        values = {
            source.key: (getattr(entry, source.key) or "").strip(),
            source.value: (getattr(entry, source.value) or "").strip(),
        }
        missing = [column for column, value in values.items() if not value]
        if missing:
            raise MissingFieldsError(f"{' and '.join(missing)} required", missing)
        return values

    @staticmethod
    def create_entry(kind: DictionaryKind, entry: HesudharEntry | RomanWordEntry) -> dict[str, Any]:
        """Insert a dictionary row and drop the cached dictionary."""
        source = DICTIONARIES[kind]
        values = DictionaryService._entry_values(kind, entry)
        row = SupabaseClient.insert_row(source.table, {**values, "created_at": utc_now_iso()})
        DictionaryService.invalidate(kind)
        logger.info(f"Created {kind.value} entry {row.get('id')}: {values[source.key]}")
        return row

    @staticmethod
    def update_entry(
        kind: DictionaryKind,
        entry_id: str,
        entry: HesudharEntry | RomanWordEntry,
    ) -> dict[str, Any]:
        """
        Update a dictionary row.

        Raises:
            ResourceNotFoundError: If no live row has this id
        """
        source = DICTIONARIES[kind]
        values = DictionaryService._entry_values(kind, entry)
        row = SupabaseClient.update_row(source.table, entry_id, {**values, "updated_at": utc_now_iso()})
        if not row:
            raise ResourceNotFoundError(source.resource, entry_id)
        DictionaryService.invalidate(kind)
        return row

    @staticmethod
    def delete_entry(kind: DictionaryKind, entry_id: str) -> None:
        """Soft-delete a dictionary row."""
        source = DICTIONARIES[kind]
        if not SupabaseClient.soft_delete(source.table, entry_id):
            raise ResourceNotFoundError(source.resource, entry_id)
        DictionaryService.invalidate(kind)

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    @staticmethod
    def export_file(
        kind: DictionaryKind,
        directory: str | None = None,
        progress: Callable[[int, str], None] | None = None,
    ) -> dict[str, Any]:
        """
        Write a dictionary to its export file.

        Args:
            kind: Which dictionary
            directory: Target directory (default settings.DICTIONARY_EXPORT_DIR)
            progress: Optional callback(percent, message)

        Returns:
            {"kind", "path", "entries"}
        """
        report = progress or (lambda percent, message: None)
        source = DICTIONARIES[kind]

        report(10, f"Reading {source.table}")
        dictionary = DictionaryService.load(kind, force=True)

        report(70, f"Writing {source.file_name}")
        path = os.path.join(directory or settings.DICTIONARY_EXPORT_DIR, source.file_name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(romanizer.format_dictionary_file(dictionary, source.title))

        logger.info(f"Exported {len(dictionary)} {kind.value} entries to {path}")
        report(100, "Complete")
        return {"kind": kind.value, "path": path, "entries": len(dictionary)}

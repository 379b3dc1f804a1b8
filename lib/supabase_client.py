# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database operations.
# It implements the singleton pattern to reuse a single client connection
# and provides the row-level helpers every archive resource shares:
# - Single-row lookups that honour soft deletes
# - Inserts and updates that return the written row
# - Soft deletes (stamping deleted_at)
# - Exact counts and paged full-table reads
#
# Services build their own filter chains for listings via get_client().
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   poet = SupabaseClient.fetch_row("poets", "id", poet_id)
# =============================================================================

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from supabase import create_client, Client

from app.config import settings
from lib.utils import escape_like

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgREST code for "JSON object requested, multiple (or no) rows returned"
NO_ROWS_CODE = "PGRST116"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Provides actionable error messages: errors should tell HOW to fix,
    not just WHAT failed.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string, the format Postgres timestamps accept."""
    return datetime.now(timezone.utc).isoformat()


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        # Fetch a live (not soft-deleted) poet
        poet = SupabaseClient.fetch_row("poets", "id", "550e8400-...")

        # Soft delete a timeline event
        SupabaseClient.soft_delete("timeline_events", event_id)
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def _normalize_id(cls, value: str | int | UUID) -> str | int:
        """Convert UUID to string for queries; leave numeric ids alone."""
        return str(value) if isinstance(value, UUID) else value

    @staticmethod
    def is_no_rows_error(error: Exception) -> bool:
        """True when PostgREST reports that a single-row query matched nothing."""
        return NO_ROWS_CODE in str(error)

    # -------------------------------------------------------------------------
    # Query Execution
    # -------------------------------------------------------------------------

    @classmethod
    def execute(cls, query: Any, action: str) -> Any:
        """
        Run a filter chain built by a service.

        Args:
            query: A PostgREST request builder (client.table(...)...)
            action: What the query does, for the error message ("list poets")

        Returns:
            The PostgREST response (data, count)

        Raises:
            SupabaseClientError: If the request fails
        """
        try:
            return query.execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to {action}: {e}",
                code="QUERY_FAILED",
                suggestion="Check the query filters and that the table exists",
                details={"action": action}
            )

    @classmethod
    def fetch_page(
        cls,
        query: Any,
        offset: int,
        end: int,
        action: str,
    ) -> tuple[list[dict[str, Any]], int]:
        """
        Run a listing query for one page.

        The query must have been built with select(..., count="exact").

        Returns:
            (rows of the page, total matching rows)
        """
        response = cls.execute(query.range(offset, end), action)
        return response.data or [], response.count or 0

    @classmethod
    def fetch_count(cls, query: Any, action: str) -> int:
        """Run a listing query for its exact count only."""
        response = cls.execute(query.limit(1), action)
        return response.count or 0

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_row(
        cls,
        table: str,
        column: str,
        value: str | int | UUID,
        select: str = "*",
        include_deleted: bool = False,
        case_insensitive: bool = False,
    ) -> dict[str, Any] | None:
        """
        Fetch one row where `column` equals `value`.

        Args:
            table: Table name
            column: Column to match on (usually "id" or a slug column)
            value: Value to match
            select: PostgREST select string (may include embedded relations)
            include_deleted: Also match soft-deleted rows
            case_insensitive: Match with ilike instead of eq (for slugs);
                wildcards in `value` are escaped

        Returns:
            Row dict, or None if not found

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        value = cls._normalize_id(value)

        try:
            query = client.table(table).select(select)
            if case_insensitive:
                query = query.ilike(column, escape_like(str(value)))
            else:
                query = query.eq(column, value)
            if not include_deleted:
                query = query.is_("deleted_at", "null")

            response = query.limit(1).execute()
            rows = response.data or []
            return rows[0] if rows else None

        except Exception as e:
            if cls.is_no_rows_error(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch {table} row: {e}",
                code="FETCH_ROW_FAILED",
                suggestion=f"Check that the {table} table is accessible",
                details={"table": table, "column": column, "value": str(value)}
            )

    @classmethod
    def fetch_rows_in(
        cls,
        table: str,
        column: str,
        values: list[Any],
        select: str = "*",
    ) -> list[dict[str, Any]]:
        """
        Fetch all rows whose `column` is one of `values`.

        Used to resolve related rows (poets, categories, translations) for a
        page of results with a single round trip.
        """
        if not values:
            return []

        client = cls.get_client()

        try:
            response = (
                client.table(table)
                .select(select)
                .in_(column, values)
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch related {table} rows: {e}",
                code="FETCH_RELATED_FAILED",
                details={"table": table, "column": column, "count": len(values)}
            )

    @classmethod
    def count_rows(
        cls,
        table: str,
        filters: dict[str, Any] | None = None,
        include_deleted: bool = False,
    ) -> int:
        """
        Exact row count of a table, optionally filtered by equality.

        Returns:
            Number of matching rows
        """
        client = cls.get_client()

        try:
            query = client.table(table).select("id", count="exact")
            for column, value in (filters or {}).items():
                query = query.eq(column, value)
            if not include_deleted:
                query = query.is_("deleted_at", "null")

            response = query.limit(1).execute()
            return response.count or 0

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to count {table} rows: {e}",
                code="COUNT_FAILED",
                details={"table": table, "filters": filters or {}}
            )

    @classmethod
    def fetch_all(
        cls,
        table: str,
        select: str = "*",
        order_by: str = "id",
        page_size: int = 1000,
    ) -> list[dict[str, Any]]:
        """
        Read every live row of a table, one page at a time.

        PostgREST caps a single response, so large tables (the text-tool
        dictionaries) are walked with consecutive ranges until a short page.
        """
        client = cls.get_client()
        rows: list[dict[str, Any]] = []
        page = 0

        try:
            while True:
                start = page * page_size
                response = (
                    client.table(table)
                    .select(select)
                    .is_("deleted_at", "null")
                    .order(order_by)
                    .range(start, start + page_size - 1)
                    .execute()
                )
                batch = response.data or []
                rows.extend(batch)
                if len(batch) < page_size:
                    break
                page += 1

            logger.debug(f"Fetched {len(rows)} rows from {table} in {page + 1} page(s)")
            return rows

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to read {table}: {e}",
                code="FETCH_ALL_FAILED",
                details={"table": table, "fetched": len(rows)}
            )

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    @classmethod
    def insert_row(cls, table: str, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert one row and return it with generated columns filled in.

        Raises:
            SupabaseClientError: If insert fails
        """
        client = cls.get_client()

        try:
            response = client.table(table).insert(data).execute()

            if response.data:
                return response.data[0]
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_NO_DATA",
                details={"table": table}
            )

        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert into {table}: {e}",
                code="INSERT_FAILED",
                details={"table": table}
            )

    @classmethod
    def update_row(
        cls,
        table: str,
        row_id: str | int | UUID,
        data: dict[str, Any],
        id_column: str = "id",
        include_deleted: bool = False,
    ) -> dict[str, Any] | None:
        """
        Update one live row by id.

        Tables without a deleted_at column (tags) must pass include_deleted=True.

        Returns:
            The updated row, or None when no live row has that id
        """
        client = cls.get_client()
        row_id = cls._normalize_id(row_id)

        try:
            query = client.table(table).update(data).eq(id_column, row_id)
            if not include_deleted:
                query = query.is_("deleted_at", "null")
            response = query.execute()
            rows = response.data or []
            return rows[0] if rows else None

        except Exception as e:
            if cls.is_no_rows_error(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to update {table} row: {e}",
                code="UPDATE_FAILED",
                details={"table": table, "id": str(row_id)}
            )

    @classmethod
    def upsert_rows(
        cls,
        table: str,
        rows: list[dict[str, Any]],
        on_conflict: str,
    ) -> list[dict[str, Any]]:
        """Insert or update rows keyed by the `on_conflict` column list."""
        if not rows:
            return []

        client = cls.get_client()

        try:
            response = client.table(table).upsert(rows, on_conflict=on_conflict).execute()
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to upsert into {table}: {e}",
                code="UPSERT_FAILED",
                details={"table": table, "on_conflict": on_conflict}
            )

    @classmethod
    def soft_delete(cls, table: str, row_id: str | int | UUID) -> bool:
        """
        Mark a row deleted by stamping deleted_at.

        Returns:
            True if a live row was marked, False if none matched
        """
        row = cls.update_row(table, row_id, {"deleted_at": utc_now_iso()})
        if row:
            logger.info(f"Soft-deleted {table} row {row_id}")
        return row is not None

    @classmethod
    def delete_rows(cls, table: str, column: str, value: str | int | UUID) -> None:
        """Hard-delete rows where `column` equals `value` (join tables only)."""
        client = cls.get_client()
        value = cls._normalize_id(value)

        try:
            client.table(table).delete().eq(column, value).execute()

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete from {table}: {e}",
                code="DELETE_FAILED",
                details={"table": table, "column": column, "value": str(value)}
            )

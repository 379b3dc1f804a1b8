# =============================================================================
# core/services/timeline_service.py - Timeline Business Logic
# =============================================================================
# Handles timeline periods and events: listing, lookup, admin CRUD and the
# overview used by the landing page (featured periods + recent events).
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
    pick,
    resolve_sort,
)
from core.models.timeline import EventCreate, EventUpdate, PeriodCreate, PeriodUpdate
from lib.supabase_client import SupabaseClient, utc_now_iso
from lib.utils import ilike_any, sanitize_search_term, slugify

logger = logging.getLogger(__name__)

EVENT_SELECT = (
    "*, "
    "timeline_periods(id, period_slug, sindhi_name, english_name, color_code), "
    "poets(id, slug, sindhi_name, english_name, file_url)"
)
PERIOD_SORT_COLUMNS = {
    "start_year": "start_year",
    "end_year": "end_year",
    "sort_order": "sort_order",
    "created_at": "created_at",
    "period_slug": "period_slug",
}
DEFAULT_PERIOD_SORT = ("start_year", SortOrder.ASC)
EVENT_SORT_COLUMNS = {
    "event_year": "event_year",
    "event_date": "event_date",
    "importance_level": "importance_level",
    "sort_order": "sort_order",
    "created_at": "created_at",
}
DEFAULT_EVENT_SORT = ("event_year", SortOrder.DESC)
OVERVIEW_EVENT_LIMIT = 50


def _missing(data: Any, fields: tuple[str, ...]) -> list[str]:
    return [f for f in fields if getattr(data, f) in (None, "")]


class TimelineService:
    """
    Service for timeline periods and events.

    Provides a clean interface between API routes and database.
    """

    # -------------------------------------------------------------------------
    # Display Mapping
    # -------------------------------------------------------------------------

    @staticmethod
    def period_to_display(period: dict[str, Any], lang: Language) -> dict[str, Any]:
        characteristics = pick(period, "characteristics", lang) or []
        return {
            "id": period.get("id"),
            "period_slug": period.get("period_slug"),
            "start_year": period.get("start_year"),
            "end_year": period.get("end_year"),
            "is_ongoing": period.get("is_ongoing"),
            "name": pick(period, "name", lang),
            "description": pick(period, "description", lang),
            "characteristics": [c for c in characteristics if c and str(c).strip()],
            "color_code": period.get("color_code"),
            "icon_name": period.get("icon_name"),
            "is_featured": period.get("is_featured"),
            "sort_order": period.get("sort_order"),
            "created_at": period.get("created_at"),
            "updated_at": period.get("updated_at"),
        }

    @staticmethod
    def event_to_display(event: dict[str, Any], lang: Language) -> dict[str, Any]:
        period = event.get("timeline_periods")
        poet = event.get("poets")
        return {
            "id": event.get("id"),
            "event_slug": event.get("event_slug"),
            "event_date": event.get("event_date"),
            "event_year": event.get("event_year"),
            "is_approximate": event.get("is_approximate"),
            "title": pick(event, "title", lang),
            "description": pick(event, "description", lang),
            "location": pick(event, "location", lang),
            "event_type": event.get("event_type"),
            "importance_level": event.get("importance_level"),
            "tags": event.get("tags") or [],
            "color_code": event.get("color_code"),
            "icon_name": event.get("icon_name"),
            "is_featured": event.get("is_featured"),
            "sort_order": event.get("sort_order"),
            "period": {
                "id": period.get("id"),
                "slug": period.get("period_slug"),
                "name": pick(period, "name", lang),
                "color_code": period.get("color_code"),
            } if period else None,
            "poet": {
                "id": poet.get("id"),
                "slug": poet.get("slug") or slugify(poet.get("english_name")),
                "name": pick(poet, "name", lang),
                "photo": poet.get("file_url"),
            } if poet else None,
            "created_at": event.get("created_at"),
            "updated_at": event.get("updated_at"),
        }

    # -------------------------------------------------------------------------
    # Periods
    # -------------------------------------------------------------------------

    @staticmethod
    def list_periods(
        pagination: Pagination,
        lang: Language,
        search: str | None = None,
        featured: bool = False,
        sort_by: str | None = None,
        sort_order: str | None = None,
        only_count: bool = False,
    ) -> dict[str, Any]:
        """List live periods, oldest first by default."""
        client = SupabaseClient.get_client()
        query = (
            client.table("timeline_periods")
            .select("*", count="exact")
            .is_("deleted_at", "null")
        )

        term = sanitize_search_term(search)
        if term:
            query = query.or_(ilike_any([f"{lang.prefix}_name", f"{lang.prefix}_description"], term))
        if featured:
            query = query.eq("is_featured", True)

        if only_count:
            return count_only(SupabaseClient.fetch_count(query, "count timeline periods"))

        column, descending = resolve_sort(sort_by, sort_order, PERIOD_SORT_COLUMNS, DEFAULT_PERIOD_SORT)
        query = query.order(column, desc=descending)

        rows, total = SupabaseClient.fetch_page(
            query, pagination.offset, pagination.end, "list timeline periods"
        )
        periods = [TimelineService.period_to_display(row, lang) for row in rows]
        return paginated("periods", periods, total, pagination)

    @staticmethod
    def get_period(period_id: str, lang: Language) -> dict[str, Any]:
        period = SupabaseClient.fetch_row("timeline_periods", "id", period_id)
        if not period:
            raise ResourceNotFoundError("Timeline period", period_id)
        return TimelineService.period_to_display(period, lang)

    @staticmethod
    def get_period_by_slug(slug: str, lang: Language) -> dict[str, Any]:
        """
        Get a period by slug together with its events (oldest first).

        Raises:
            ResourceNotFoundError: If no live period has this slug
        """
        period = SupabaseClient.fetch_row("timeline_periods", "period_slug", slug)
        if not period:
            raise ResourceNotFoundError("Timeline period", slug)

        client = SupabaseClient.get_client()
        events = SupabaseClient.execute(
            client.table("timeline_events")
            .select(EVENT_SELECT)
            .eq("period_id", period["id"])
            .is_("deleted_at", "null")
            .order("event_year"),
            "fetch period events",
        ).data or []

        return {
            "success": True,
            "period": TimelineService.period_to_display(period, lang),
            "events": [TimelineService.event_to_display(e, lang) for e in events],
        }

    @staticmethod
    def create_period(data: PeriodCreate) -> dict[str, Any]:
        """
        Create a timeline period.

        Raises:
            MissingFieldsError: If slug, start year or either name is missing
        """
        missing = _missing(data, ("period_slug", "start_year", "sindhi_name", "english_name"))
        if missing:
            raise MissingFieldsError(
                "Period slug, start year, and names in both languages are required", missing
            )
        period = SupabaseClient.insert_row("timeline_periods", data.model_dump())
        logger.info(f"Created timeline period: {period.get('id')} ({data.period_slug})")
        return period

    @staticmethod
    def update_period(period_id: str, data: PeriodUpdate) -> dict[str, Any]:
        changes = data.model_dump(exclude_unset=True)
        changes["updated_at"] = utc_now_iso()
        period = SupabaseClient.update_row("timeline_periods", period_id, changes)
        if not period:
            raise ResourceNotFoundError("Timeline period", period_id)
        return period

    @staticmethod
    def delete_period(period_id: str) -> None:
        if not SupabaseClient.soft_delete("timeline_periods", period_id):
            raise ResourceNotFoundError("Timeline period", period_id)

    # -------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------

    @staticmethod
    def list_events(
        pagination: Pagination,
        lang: Language,
        search: str | None = None,
        event_type: str | None = None,
        period_id: str | None = None,
        poet_id: str | None = None,
        featured: bool = False,
        sort_by: str | None = None,
        sort_order: str | None = None,
        only_count: bool = False,
    ) -> dict[str, Any]:
        """List live events, newest year first by default."""
        client = SupabaseClient.get_client()
        query = (
            client.table("timeline_events")
            .select(EVENT_SELECT, count="exact")
            .is_("deleted_at", "null")
        )

        term = sanitize_search_term(search)
        if term:
            query = query.or_(ilike_any([f"{lang.prefix}_title", f"{lang.prefix}_description"], term))
        if event_type:
            query = query.eq("event_type", event_type)
        if period_id:
            query = query.eq("period_id", period_id)
        if poet_id:
            query = query.eq("poet_id", poet_id)
        if featured:
            query = query.eq("is_featured", True)

        if only_count:
            return count_only(SupabaseClient.fetch_count(query, "count timeline events"))

        column, descending = resolve_sort(sort_by, sort_order, EVENT_SORT_COLUMNS, DEFAULT_EVENT_SORT)
        query = query.order(column, desc=descending)

        rows, total = SupabaseClient.fetch_page(
            query, pagination.offset, pagination.end, "list timeline events"
        )
        events = [TimelineService.event_to_display(row, lang) for row in rows]
        return paginated("events", events, total, pagination)

    @staticmethod
    def get_event(event_id: str, lang: Language) -> dict[str, Any]:
        event = SupabaseClient.fetch_row("timeline_events", "id", event_id, select=EVENT_SELECT)
        if not event:
            raise ResourceNotFoundError("Timeline event", event_id)
        return TimelineService.event_to_display(event, lang)

    @staticmethod
    def create_event(data: EventCreate) -> dict[str, Any]:
        """
        Create a timeline event.

        Raises:
            MissingFieldsError: If slug, date, year or either title is missing
        """
        missing = _missing(
            data, ("event_slug", "event_date", "event_year", "sindhi_title", "english_title")
        )
        if missing:
            raise MissingFieldsError(
                "Event slug, date, year, and titles in both languages are required", missing
            )
        event = SupabaseClient.insert_row("timeline_events", data.model_dump())
        logger.info(f"Created timeline event: {event.get('id')} ({data.event_slug})")
        return event

    @staticmethod
    def update_event(event_id: str, data: EventUpdate) -> dict[str, Any]:
        changes = data.model_dump(exclude_unset=True)
        changes["updated_at"] = utc_now_iso()
        event = SupabaseClient.update_row("timeline_events", event_id, changes)
        if not event:
            raise ResourceNotFoundError("Timeline event", event_id)
        return event

    @staticmethod
    def delete_event(event_id: str) -> None:
        if not SupabaseClient.soft_delete("timeline_events", event_id):
            raise ResourceNotFoundError("Timeline event", event_id)

    # -------------------------------------------------------------------------
    # Overview
    # -------------------------------------------------------------------------

    @staticmethod
    def overview(lang: Language, limit: int = OVERVIEW_EVENT_LIMIT) -> dict[str, Any]:
        """
        Featured periods and the most recent events.

        Each half is fetched independently; a failure leaves that half empty.
        """
        client = SupabaseClient.get_client()

        try:
            periods = (
                client.table("timeline_periods")
                .select("*")
                .eq("is_featured", True)
                .is_("deleted_at", "null")
                .order("sort_order")
                .execute()
            ).data or []
        except Exception as e:
            logger.error(f"Error fetching featured periods: {e}")
            periods = []

        try:
            events = (
                client.table("timeline_events")
                .select(EVENT_SELECT)
                .is_("deleted_at", "null")
                .order("event_year", desc=True)
                .limit(limit)
                .execute()
            ).data or []
        except Exception as e:
            logger.error(f"Error fetching recent events: {e}")
            events = []

        return {
            "success": True,
            "periods": [TimelineService.period_to_display(p, lang) for p in periods],
            "events": [TimelineService.event_to_display(e, lang) for e in events],
            "total_periods": len(periods),
            "total_events": len(events),
        }

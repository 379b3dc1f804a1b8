# =============================================================================
# app/routers/timeline.py - Timeline Endpoints
# =============================================================================
# Literary periods and the events placed in them.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from app.auth import AdminUser, require_admin
from app.dependencies import LanguageDep, ListQueryDep, PaginationDep
from core.models.timeline import EventCreate, EventUpdate, PeriodCreate, PeriodUpdate
from core.services.timeline_service import OVERVIEW_EVENT_LIMIT, TimelineService

router = APIRouter()


# =============================================================================
# Overview
# =============================================================================

@router.get("/overview")
async def timeline_overview(
    lang: LanguageDep,
    limit: Annotated[int, Query(ge=1, le=200, description="Maximum events")] = OVERVIEW_EVENT_LIMIT,
):
    """Featured periods and the most recent events."""
    return TimelineService.overview(lang, limit=limit)


# =============================================================================
# Periods
# =============================================================================

@router.get("/periods")
async def list_periods(
    pagination: PaginationDep,
    lang: LanguageDep,
    query: ListQueryDep,
    featured: bool = False,
):
    return TimelineService.list_periods(
        pagination,
        lang,
        search=query.search,
        featured=featured,
        sort_by=query.sort_by,
        sort_order=query.sort_order,
        only_count=query.only_count,
    )


@router.get("/periods/by-slug/{slug}")
async def get_period_by_slug(
    slug: Annotated[str, Path(description="Period slug")],
    lang: LanguageDep,
):
    """A period together with its events, oldest first."""
    return TimelineService.get_period_by_slug(slug, lang)


@router.get("/periods/{period_id}")
async def get_period(
    period_id: Annotated[str, Path(description="Period id")],
    lang: LanguageDep,
):
    return {"success": True, "period": TimelineService.get_period(period_id, lang)}


@router.post("/periods", status_code=status.HTTP_201_CREATED)
async def create_period(
    data: PeriodCreate,
    admin: AdminUser = Depends(require_admin),
):
    return {"success": True, "period": TimelineService.create_period(data)}


@router.put("/periods/{period_id}")
async def update_period(
    period_id: Annotated[str, Path(description="Period id")],
    data: PeriodUpdate,
    admin: AdminUser = Depends(require_admin),
):
    return {"success": True, "period": TimelineService.update_period(period_id, data)}


@router.delete("/periods/{period_id}")
async def delete_period(
    period_id: Annotated[str, Path(description="Period id")],
    admin: AdminUser = Depends(require_admin),
):
    TimelineService.delete_period(period_id)
    return {"success": True, "message": "Timeline period deleted successfully"}


# =============================================================================
# Events
# =============================================================================

@router.get("/events")
async def list_events(
    pagination: PaginationDep,
    lang: LanguageDep,
    query: ListQueryDep,
    event_type: str | None = None,
    period_id: str | None = None,
    poet_id: str | None = None,
    featured: bool = False,
):
    """List events; each embeds its period and poet when set."""
    return TimelineService.list_events(
        pagination,
        lang,
        search=query.search,
        event_type=event_type,
        period_id=period_id,
        poet_id=poet_id,
        featured=featured,
        sort_by=query.sort_by,
        sort_order=query.sort_order,
        only_count=query.only_count,
    )


@router.get("/events/{event_id}")
async def get_event(
    event_id: Annotated[str, Path(description="Event id")],
    lang: LanguageDep,
):
    return {"success": True, "event": TimelineService.get_event(event_id, lang)}


@router.post("/events", status_code=status.HTTP_201_CREATED)
async def create_event(
    data: EventCreate,
    admin: AdminUser = Depends(require_admin),
):
    return {"success": True, "event": TimelineService.create_event(data)}


@router.put("/events/{event_id}")
async def update_event(
    event_id: Annotated[str, Path(description="Event id")],
    data: EventUpdate,
    admin: AdminUser = Depends(require_admin),
):
    return {"success": True, "event": TimelineService.update_event(event_id, data)}


@router.delete("/events/{event_id}")
async def delete_event(
    event_id: Annotated[str, Path(description="Event id")],
    admin: AdminUser = Depends(require_admin),
):
    TimelineService.delete_event(event_id)
    return {"success": True, "message": "Timeline event deleted successfully"}

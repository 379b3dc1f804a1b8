# =============================================================================
# core/models/timeline.py - Timeline Schemas
# =============================================================================
# The literary timeline is made of periods (eras with a year range) and
# events (dated happenings, optionally linked to a period, poet or poem).
# Both carry bilingual text columns and are soft-deleted.
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PERIOD_COLOR = "#3B82F6"
DEFAULT_EVENT_TYPE = "historical"


class PeriodCreate(BaseModel):
    """
    Schema for creating a timeline period.

    period_slug, start_year and both names are required (400 when missing).

    Example:
        {
            "period_slug": "classical-era",
            "start_year": 1600,
            "end_year": 1850,
            "sindhi_name": "ڪلاسيڪي دور",
            "english_name": "Classical Era"
        }
    """

    model_config = ConfigDict(extra="ignore")

    period_slug: str | None = None
    start_year: int | None = None
    end_year: int | None = None
    is_ongoing: bool = False
    sindhi_name: str | None = None
    sindhi_description: str | None = None
    sindhi_characteristics: list[str] = Field(default_factory=list)
    english_name: str | None = None
    english_description: str | None = None
    english_characteristics: list[str] = Field(default_factory=list)
    color_code: str = Field(default=DEFAULT_PERIOD_COLOR, description="Hex color used by the UI")
    icon_name: str | None = None
    is_featured: bool = False
    sort_order: int = 0


class PeriodUpdate(BaseModel):
    """Partial update of a timeline period."""

    model_config = ConfigDict(extra="ignore")

    period_slug: str | None = None
    start_year: int | None = None
    end_year: int | None = None
    is_ongoing: bool | None = None
    sindhi_name: str | None = None
    sindhi_description: str | None = None
    sindhi_characteristics: list[str] | None = None
    english_name: str | None = None
    english_description: str | None = None
    english_characteristics: list[str] | None = None
    color_code: str | None = None
    icon_name: str | None = None
    is_featured: bool | None = None
    sort_order: int | None = None


class EventCreate(BaseModel):
    """
    Schema for creating a timeline event.

    event_slug, event_date, event_year and both titles are required.
    """

    model_config = ConfigDict(extra="ignore")

    event_slug: str | None = None
    event_date: str | None = Field(default=None, description="ISO date (YYYY-MM-DD)")
    event_year: int | None = None
    is_approximate: bool = False
    period_id: str | None = None
    poet_id: str | None = None
    poetry_id: int | str | None = None
    sindhi_title: str | None = None
    sindhi_description: str | None = None
    sindhi_location: str | None = None
    english_title: str | None = None
    english_description: str | None = None
    english_location: str | None = None
    event_type: str = DEFAULT_EVENT_TYPE
    importance_level: int = Field(default=1, ge=1, le=5)
    tags: list[str] = Field(default_factory=list)
    color_code: str | None = None
    icon_name: str | None = None
    is_featured: bool = False
    sort_order: int = 0


class EventUpdate(BaseModel):
    """Partial update of a timeline event."""

    model_config = ConfigDict(extra="ignore")

    event_slug: str | None = None
    event_date: str | None = None
    event_year: int | None = None
    is_approximate: bool | None = None
    period_id: str | None = None
    poet_id: str | None = None
    poetry_id: int | str | None = None
    sindhi_title: str | None = None
    sindhi_description: str | None = None
    sindhi_location: str | None = None
    english_title: str | None = None
    english_description: str | None = None
    english_location: str | None = None
    event_type: str | None = None
    importance_level: int | None = Field(default=None, ge=1, le=5)
    tags: list[str] | None = None
    color_code: str | None = None
    icon_name: str | None = None
    is_featured: bool | None = None
    sort_order: int | None = None

# =============================================================================
# core/models/couplet.py - Couplet Schemas
# =============================================================================
# A couplet (bait/doho) is a short poem of one or more lines. It either
# belongs to a longer poem (poetry_id) or stands alone (poetry_id null/0).
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field


class CoupletCreate(BaseModel):
    """
    Schema for creating a couplet.

    couplet_text and poet_id are required (checked by the service so the
    error is a 400 with the missing field names).

    Example:
        {
            "couplet_text": "line one\\nline two",
            "poet_id": "550e8400-...",
            "lang": "sd",
            "couplet_tags": "love, longing"
        }
    """

    model_config = ConfigDict(extra="ignore")

    couplet_text: str | None = Field(default=None, description="Lines separated by newlines")
    poet_id: str | None = Field(default=None, description="Poet the couplet is attributed to")
    couplet_slug: str | None = Field(default=None, description="Defaults to a slug of the text")
    couplet_tags: str | None = Field(default=None, description="Comma-separated tags")
    lang: str = Field(default="sd", description="Language of the text (sd or en)")
    poetry_id: int | str | None = Field(default=None, description="Parent poem, if any")


class CoupletUpdate(BaseModel):
    """Partial update; only fields present in the body are written."""

    model_config = ConfigDict(extra="ignore")

    couplet_text: str | None = None
    couplet_slug: str | None = None
    couplet_tags: str | None = None
    lang: str | None = None
    poet_id: str | None = None
    poetry_id: int | str | None = None

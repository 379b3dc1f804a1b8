# =============================================================================
# core/models/poet.py - Poet Schemas
# =============================================================================
# These models define the API contract for poet write operations:
# - PoetCreate: Input for POST /api/poets
# - PoetUpdate: Partial input for PUT /api/poets/{id}
#
# Reads return plain dicts built by PoetService (see to_display()), since the
# display shape mirrors the table columns plus a derived slug.
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field


class PoetFields(BaseModel):
    """Columns an admin may set on a poet."""

    model_config = ConfigDict(extra="ignore")

    sindhi_name: str | None = Field(default=None, description="Name in Sindhi script")
    english_name: str | None = Field(default=None, description="Name in English")
    sindhi_laqab: str | None = Field(default=None, description="Honorific title (Sindhi)")
    english_laqab: str | None = Field(default=None, description="Honorific title (English)")
    sindhi_tagline: str | None = None
    english_tagline: str | None = None
    sindhi_details: str | None = None
    english_details: str | None = None
    birth_date: str | None = Field(default=None, description="Birth date or year, as stored")
    death_date: str | None = None
    birth_place: str | None = None
    death_place: str | None = None
    period: str | None = None
    file_url: str | None = Field(default=None, description="Portrait image URL")


class PoetCreate(PoetFields):
    """
    Schema for creating a poet.

    Both names are required; the slug is derived from english_name.

    Example:
        {
            "sindhi_name": "شاهه عبداللطيف ڀٽائي",
            "english_name": "Shah Abdul Latif Bhittai",
            "tags": ["sufi", "classical"]
        }
    """

    tags: list[str] = Field(default_factory=list, description="Free-form poet tags")


class PoetUpdate(PoetFields):
    """
    Schema for updating a poet. Only fields present in the body are written.

    Example:
        {"english_tagline": "Poet of the Risalo"}
    """

    slug: str | None = None
    tags: list[str] | None = None
    is_active: bool | None = None

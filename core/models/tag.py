# =============================================================================
# core/models/tag.py - Tag Schemas
# =============================================================================
# Tags classify poets ("Poet") and topics ("Topic"). Titles live in
# tags_translations keyed by (tag_id, lang_code).
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field


class TagTranslationInput(BaseModel):
    """One language's title/detail for a tag."""

    title: str | None = Field(default=None, description="Display title")
    details: str | None = Field(default=None, description="Optional description")


class TagUpsert(BaseModel):
    """
    Schema for creating or updating a tag by slug.

    Example:
        {
            "slug": "love",
            "type": "Topic",
            "sindhi": {"title": "محبت"},
            "english": {"title": "Love", "details": "Poems about love"}
        }
    """

    model_config = ConfigDict(extra="ignore")

    slug: str | None = Field(default=None, description="Unique tag slug")
    type: str = Field(default="Topic", description="Tag type, e.g. Topic or Poet")
    sindhi: TagTranslationInput = Field(default_factory=TagTranslationInput)
    english: TagTranslationInput = Field(default_factory=TagTranslationInput)

# =============================================================================
# core/models/poetry.py - Poetry Schemas
# =============================================================================
# A poem lives in poetry_main (slug, poet, category, flags) with its titles
# in poetry_translations, one row per language (unique on poetry_id, lang).
# Couplets of the poem reference it through poetry_couplets.poetry_id.
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field

from .common import Language


class PoetryTranslationInput(BaseModel):
    """
    One language's title/info for a poem.

    Example:
        {"lang": "en", "title": "Sur Kalyan", "info": "Opening chapter"}
    """

    lang: Language = Field(..., description="Language of this translation")
    title: str = Field(..., min_length=1, max_length=200, description="Poem title")
    info: str | None = Field(default=None, description="Optional notes about the poem")


class PoetryCreate(BaseModel):
    """
    Schema for creating a poem.

    poetry_slug, poet_id and category_id are required (400 when missing).
    """

    model_config = ConfigDict(extra="ignore")

    poetry_slug: str | None = Field(default=None, description="URL slug, unique per poem")
    poet_id: str | None = Field(default=None, description="Author")
    category_id: int | str | None = Field(default=None, description="Form/genre category")
    lang: Language = Field(default=Language.SD, description="Original language of the poem")
    visibility: bool = Field(default=True, description="Shown in public listings")
    is_featured: bool = Field(default=False)
    poetry_tags: str | None = Field(default=None, description="Comma-separated tags")
    translations: list[PoetryTranslationInput] = Field(default_factory=list)


class PoetryUpdate(BaseModel):
    """Partial update; translations present in the body are upserted."""

    model_config = ConfigDict(extra="ignore")

    poetry_slug: str | None = None
    poet_id: str | None = None
    category_id: int | str | None = None
    lang: Language | None = None
    visibility: bool | None = None
    is_featured: bool | None = None
    poetry_tags: str | None = None
    translations: list[PoetryTranslationInput] | None = None

# =============================================================================
# core/models/category.py - Category Schemas
# =============================================================================
# A category is a poetic form (ghazal, nazm, wai, ...). The categories row
# holds the slug and display flags; names and descriptions live in
# category_details, one row per language (unique on cat_id, lang).
# =============================================================================

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class CategoryLocalized(BaseModel):
    """
    One language's names for a category.

    Example:
        {"name": "Ghazal", "plural": "Ghazals", "details": "Lyric form..."}
    """

    name: str = Field(default="", description="Singular display name")
    plural: str | None = Field(default=None, description="Plural display name")
    details: str | None = Field(default=None, description="Longer description")


class CategoryCreate(BaseModel):
    """
    Schema for creating a category.

    Creation is idempotent on slug: an existing category with the same slug
    is reused and its details are overwritten.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    slug: str | None = Field(default=None, description="Unique URL slug")
    english: CategoryLocalized = Field(default_factory=CategoryLocalized)
    sindhi: CategoryLocalized = Field(default_factory=CategoryLocalized)
    content_style: str = Field(default="justified", alias="contentStyle")
    gender: Literal["masculine", "feminine"] = Field(default="masculine")
    is_featured: bool = Field(default=False, alias="isFeatured")


class CategoryUpdate(BaseModel):
    """Partial update; details present in the body are upserted per language."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    slug: str | None = None
    english: CategoryLocalized | None = None
    sindhi: CategoryLocalized | None = None
    content_style: str | None = Field(default=None, alias="contentStyle")
    gender: Literal["masculine", "feminine"] | None = None
    is_featured: bool | None = Field(default=None, alias="isFeatured")

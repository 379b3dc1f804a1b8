# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - common.py: Language, pagination, sorting and list envelopes
# - poet.py / couplet.py / poetry.py: archive content schemas
# - category.py / tag.py: classification schemas
# - timeline.py: timeline period and event schemas
# - dictionary.py: hesudhar/romanizer text tool schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Common - bilingual helpers and envelopes
# -----------------------------------------------------------------------------
from .common import (
    Language,
    Pagination,
    SortOrder,
    count_only,
    paginated,
    pick,
    resolve_sort,
)

# -----------------------------------------------------------------------------
# Content Models
# -----------------------------------------------------------------------------
from .poet import PoetCreate, PoetUpdate
from .couplet import CoupletCreate, CoupletUpdate
from .poetry import PoetryCreate, PoetryTranslationInput, PoetryUpdate

# -----------------------------------------------------------------------------
# Classification Models
# -----------------------------------------------------------------------------
from .category import CategoryCreate, CategoryLocalized, CategoryUpdate
from .tag import TagTranslationInput, TagUpsert

# -----------------------------------------------------------------------------
# Timeline Models
# -----------------------------------------------------------------------------
from .timeline import EventCreate, EventUpdate, PeriodCreate, PeriodUpdate

# -----------------------------------------------------------------------------
# Text Tool Models
# -----------------------------------------------------------------------------
from .dictionary import (
    CorrectRequest,
    DictionaryKind,
    HesudharEntry,
    HesudharModeName,
    RomanWordEntry,
    SyncRequest,
    TextOperation,
    TextToolRequest,
)

__all__ = [
    # Common
    "Language",
    "Pagination",
    "SortOrder",
    "count_only",
    "paginated",
    "pick",
    "resolve_sort",
    # Content
    "PoetCreate",
    "PoetUpdate",
    "CoupletCreate",
    "CoupletUpdate",
    "PoetryCreate",
    "PoetryTranslationInput",
    "PoetryUpdate",
    # Classification
    "CategoryCreate",
    "CategoryLocalized",
    "CategoryUpdate",
    "TagTranslationInput",
    "TagUpsert",
    # Timeline
    "EventCreate",
    "EventUpdate",
    "PeriodCreate",
    "PeriodUpdate",
    # Text tools
    "CorrectRequest",
    "DictionaryKind",
    "HesudharEntry",
    "HesudharModeName",
    "RomanWordEntry",
    "SyncRequest",
    "TextOperation",
    "TextToolRequest",
]

# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .poet_service import PoetService
from .couplet_service import CoupletService
from .poetry_service import PoetryService
from .category_service import CategoryService
from .tag_service import TagService
from .timeline_service import TimelineService
from .search_service import SearchService
from .stats_service import StatsService
from .dictionary_service import DictionaryService, DICTIONARIES

__all__ = [
    "PoetService",
    "CoupletService",
    "PoetryService",
    "CategoryService",
    "TagService",
    "TimelineService",
    "SearchService",
    "StatsService",
    "DictionaryService",
    "DICTIONARIES",
]

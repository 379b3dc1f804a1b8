# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by resource:
# - health.py: Health check endpoints
# - poets.py, couplets.py, poetry.py: The archive itself
# - categories.py, tags.py: Classification
# - timeline.py: Literary periods and events
# - search.py: Site-wide quick search
# - admin.py: Text tools, dictionaries, sync and stats (admin only)
# - tasks.py: Background task status (admin only)
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import poets
from . import couplets
from . import poetry
from . import categories
from . import tags
from . import timeline
from . import search
from . import admin
from . import tasks

__all__ = [
    "health",
    "poets",
    "couplets",
    "poetry",
    "categories",
    "tags",
    "timeline",
    "search",
    "admin",
    "tasks",
]

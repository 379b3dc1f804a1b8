# =============================================================================
# core/services/stats_service.py - Admin Dashboard Statistics
# =============================================================================

import logging
from typing import Any

from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

# (response key, table, has deleted_at)
COUNTED_TABLES = (
    ("totalPoets", "poets", True),
    ("totalPoetry", "poetry_main", True),
    ("totalCouplets", "poetry_couplets", True),
    ("totalCategories", "categories", True),
    ("totalTags", "tags", False),
    ("totalPeriods", "timeline_periods", True),
    ("totalEvents", "timeline_events", True),
)


class StatsService:
    """Row counts for the admin dashboard."""

    @staticmethod
    def get_stats() -> dict[str, Any]:
        """
        Count live rows of each archive table.

        A count that fails is reported as 0 so one broken table does not
        hide the rest of the dashboard.
        """
        stats: dict[str, Any] = {"success": True}
        for key, table, soft_deleted in COUNTED_TABLES:
            try:
                stats[key] = SupabaseClient.count_rows(table, include_deleted=not soft_deleted)
            except Exception as e:
                logger.warning(f"Could not count {table}: {e}")
                stats[key] = 0
        return stats

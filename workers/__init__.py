# =============================================================================
# workers/ - Celery Background Task Workers
# =============================================================================
# Celery configuration and tasks for work too slow for a request, currently
# exporting the text-tool dictionaries to files.
#
# Usage:
#   # Start worker
#   python scripts/start_worker.py
#
#   # Submit task (from API)
#   from workers.tasks import sync_dictionary_file
#   result = sync_dictionary_file.delay("hesudhar")
# =============================================================================

from .celery_app import celery_app
from . import tasks

__all__ = [
    "celery_app",
    "tasks",
]

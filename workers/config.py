# =============================================================================
# workers/config.py - Celery Worker Configuration
# =============================================================================
# Applied to the Celery app via app.config_from_object().
# =============================================================================

from app.config import settings


class CeleryConfig:
    """Celery settings for the dictionary sync worker."""

    # Redis is both broker and result backend
    broker_url = settings.REDIS_URL
    result_backend = settings.REDIS_URL

    # -------------------------------------------------------------------------
    # Execution
    # -------------------------------------------------------------------------

    # Acknowledge after completion so a crashed export is redelivered
    task_acks_late = True
    worker_prefetch_multiplier = 1

    # Admins poll results shortly after queueing; keep them for a day
    result_expires = 86400

    # A full dictionary export pages through tens of thousands of rows
    task_time_limit = 600
    task_soft_time_limit = 540

    # Report STARTED so the status endpoint can tell queued from running
    task_track_started = True

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    task_serializer = "json"
    result_serializer = "json"
    accept_content = ["json"]

    # -------------------------------------------------------------------------
    # Routing
    # -------------------------------------------------------------------------

    task_queues = {
        "default": {"exchange": "default", "routing_key": "default"},
        "dictionary": {"exchange": "dictionary", "routing_key": "dictionary"},
    }
    task_routes = {
        "workers.tasks.sync_dictionary_file": {"queue": "dictionary"},
    }
    task_default_queue = "default"

    # -------------------------------------------------------------------------
    # Retries
    # -------------------------------------------------------------------------

    # Only used where a task calls self.retry()
    task_annotations = {
        "workers.tasks.sync_dictionary_file": {
            "max_retries": 3,
            "default_retry_delay": 30,
        }
    }

    timezone = "UTC"
    enable_utc = True

# =============================================================================
# tests/test_worker.py - Tests for the Celery dictionary sync task
# =============================================================================

from unittest.mock import patch

import pytest

from core.services.dictionary_service import DictionaryService
from workers.celery_app import celery_app
from workers.config import CeleryConfig
from workers.tasks import update_progress

TASK_NAME = "workers.tasks.sync_dictionary_file"


@pytest.fixture
def sync_task():
    return celery_app.tasks[TASK_NAME]


class TestSyncDictionaryFile:
    def test_exports_requested_dictionary(self, sync_task):
        exported = {"kind": "romanizer", "path": "/tmp/romanizer.txt", "entries": 12}
        with patch.object(DictionaryService, "export_file", return_value=exported) as export:
            result = sync_task.run("romanizer")

        assert result == {"success": True, **exported}
        assert export.call_args.args[0].value == "romanizer"
        assert export.call_args.kwargs["progress"] is update_progress

    def test_unknown_kind_is_rejected(self, sync_task):
        with pytest.raises(ValueError):
            sync_task.run("thesaurus")

    def test_write_failure_is_retried(self, sync_task):
        with patch.object(DictionaryService, "export_file", side_effect=OSError("disk full")), \
             patch.object(sync_task, "retry", return_value=RuntimeError("retrying")) as retry:
            with pytest.raises(RuntimeError, match="retrying"):
                sync_task.run("hesudhar")

        assert isinstance(retry.call_args.kwargs["exc"], OSError)

    def test_progress_outside_worker_is_noop(self):
        update_progress(50, "halfway")


class TestCeleryConfig:
    def test_sync_goes_to_dictionary_queue(self):
        assert CeleryConfig.task_routes[TASK_NAME] == {"queue": "dictionary"}

    def test_task_is_registered(self):
        assert TASK_NAME in celery_app.tasks

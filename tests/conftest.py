# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - A fake Supabase client whose query builders record calls and return
#   canned rows, so services run without a database
# - A TestClient with the admin check overridden
# =============================================================================

import os
from unittest.mock import MagicMock, patch
from uuid import uuid4

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "false")

import pytest

from lib.supabase_client import SupabaseClient

CHAIN_METHODS = (
    "select", "eq", "neq", "ilike", "is_", "in_", "or_", "gte", "lte",
    "order", "range", "limit", "single",
    "insert", "update", "upsert", "delete",
)


def make_query(data=None, count=None, responses=None, error=None):
    """
    A PostgREST request builder stand-in.

    Every filter method returns the same mock, so calls can be asserted on
    it afterwards (query.eq.assert_any_call("poet_id", ...)).

    Args:
        data: Rows returned by execute()
        count: Exact count returned by execute()
        responses: List of (data, count) for consecutive execute() calls
        error: Exception raised by execute()
    """
    query = MagicMock()
    for method in CHAIN_METHODS:
        getattr(query, method).return_value = query

    if error is not None:
        query.execute.side_effect = error
    elif responses is not None:
        query.execute.side_effect = [MagicMock(data=d, count=c) for d, c in responses]
    else:
        query.execute.return_value = MagicMock(data=data if data is not None else [], count=count)
    return query


class FakeSupabase:
    """
    Fake Supabase client: one query builder per table.

    Tables not configured with `table()` return no rows.
    """

    def __init__(self):
        self.queries: dict[str, MagicMock] = {}
        self.client = MagicMock()
        self.client.table.side_effect = self._table

    def table(self, name, data=None, count=None, responses=None, error=None) -> MagicMock:
        query = make_query(data=data, count=count, responses=responses, error=error)
        self.queries[name] = query
        return query

    def _table(self, name):
        if name not in self.queries:
            self.queries[name] = make_query()
        return self.queries[name]


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fake_db():
    """Patch the Supabase singleton with a FakeSupabase for one test."""
    fake = FakeSupabase()
    with patch.object(SupabaseClient, "get_client", return_value=fake.client):
        yield fake


@pytest.fixture(autouse=True)
def clear_dictionary_cache():
    """Dictionaries are cached per process; start every test cold."""
    from core.services.dictionary_service import DictionaryService

    DictionaryService.invalidate()
    yield
    DictionaryService.invalidate()


@pytest.fixture
def admin_user():
    from app.auth.models import AdminUser

    return AdminUser(id=uuid4(), email="editor@baakh.test", is_admin=True)


@pytest.fixture
def client():
    """TestClient without auth overrides (admin routes reject anonymous calls)."""
    from fastapi.testclient import TestClient
    from app.main import app

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def admin_client(admin_user):
    """TestClient whose requests pass the admin check."""
    from fastapi.testclient import TestClient
    from app.auth import require_admin
    from app.main import app

    app.dependency_overrides[require_admin] = lambda: admin_user
    try:
        with TestClient(app, raise_server_exceptions=False) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.pop(require_admin, None)


@pytest.fixture
def sample_poet():
    return {
        "id": "2f1b3c4d-5e6f-4a7b-8c9d-0e1f2a3b4c5d",
        "slug": "shah-abdul-latif-bhittai",
        "sindhi_name": "شاهه عبداللطيف ڀٽائي",
        "english_name": "Shah Abdul Latif Bhittai",
        "sindhi_laqab": "ڀٽ ڌڻي",
        "english_laqab": "Bhit Dhani",
        "sindhi_tagline": None,
        "english_tagline": "Poet of the Risalo",
        "file_url": "https://cdn.baakh.test/latif.jpg",
        "is_active": True,
        "created_at": "2024-01-15T10:30:00+00:00",
    }


@pytest.fixture
def sample_couplet(sample_poet):
    return {
        "id": 41,
        "couplet_text": "پهرين سٽ\n\nٻي سٽ",
        "couplet_slug": "pahrin-sat",
        "couplet_tags": "sufi, , love ",
        "lang": "sd",
        "poet_id": sample_poet["id"],
        "poets": sample_poet,
        "poetry_main": {"id": 7, "poetry_slug": "sur-kalyan", "poetry_tags": "sur"},
        "created_at": "2024-02-01T00:00:00+00:00",
    }

# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Baakh API:
# - test_utils.py / test_romanizer.py: Pure text helpers and Sindhi text tools
# - test_models.py: Pydantic models, envelopes and exceptions
# - test_supabase_client.py: Query wrapper behaviour against a fake client
# - test_services.py: Service logic with Supabase mocked
# - test_routes.py: Endpoints through the FastAPI TestClient
# - test_worker.py: The Celery dictionary sync task
#
# Run tests with: pytest
# =============================================================================

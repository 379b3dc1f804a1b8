# =============================================================================
# tests/test_models.py - Tests for request models, envelopes and errors
# =============================================================================

import pytest
from pydantic import ValidationError

from app.exceptions import (
    AdminRequiredError,
    InvalidParameterError,
    MissingFieldsError,
    ResourceNotFoundError,
)
from core.models import CategoryCreate, EventCreate, PeriodCreate
from core.models.common import (
    Language,
    Pagination,
    SortOrder,
    count_only,
    paginated,
    pick,
    resolve_sort,
)


class TestLanguage:
    @pytest.mark.parametrize("raw, expected", [
        ("sd", Language.SD),
        ("SD ", Language.SD),
        ("en", Language.EN),
        ("ur", Language.EN),
        (None, Language.EN),
    ])
    def test_parse(self, raw, expected):
        assert Language.parse(raw) is expected

    def test_pick(self):
        row = {"sindhi_name": "لطيف", "english_name": "Latif"}
        assert pick(row, "name", Language.EN) == "Latif"
        assert pick(row, "name", Language.SD) == row["sindhi_name"]


class TestSorting:
    ALLOWED = {"created_at": "created_at", "title": "poetry_slug"}
    DEFAULT = ("created_at", SortOrder.DESC)

    def test_whitelisted_column(self):
        assert resolve_sort("title", "asc", self.ALLOWED, self.DEFAULT) == ("poetry_slug", False)

    def test_unknown_column_uses_default(self):
        assert resolve_sort("deleted_at", None, self.ALLOWED, self.DEFAULT) == ("created_at", True)

    def test_bad_order_uses_default(self):
        assert resolve_sort("created_at", "sideways", self.ALLOWED, self.DEFAULT) == ("created_at", True)


class TestPagination:
    def test_range(self):
        pagination = Pagination(page=3, limit=20)
        assert (pagination.offset, pagination.end) == (40, 59)

    def test_clamp(self):
        pagination = Pagination.clamp(0, 500, default_limit=20, max_limit=100)
        assert (pagination.page, pagination.limit) == (1, 100)

    def test_clamp_default_limit(self):
        assert Pagination.clamp(None, None, default_limit=12, max_limit=48).limit == 12

    def test_total_pages(self):
        pagination = Pagination(page=1, limit=20)
        assert pagination.total_pages(0) == 0
        assert pagination.total_pages(41) == 3

    def test_navigation(self):
        block = Pagination(page=2, limit=10).to_dict(25, with_navigation=True)
        assert block == {
            "page": 2, "limit": 10, "total": 25, "totalPages": 3,
            "hasNext": True, "hasPrev": True,
        }

    def test_envelopes(self):
        envelope = paginated("poets", [{"id": 1}], 1, Pagination(page=1, limit=20))
        assert envelope == {
            "success": True, "poets": [{"id": 1}], "total": 1,
            "page": 1, "limit": 20, "totalPages": 1,
        }
        assert count_only(7) == {"success": True, "total": 7}


class TestRequestModels:
    def test_period_defaults(self):
        period = PeriodCreate(period_slug="classical", start_year=1600)
        assert period.color_code == "#3B82F6"

    def test_event_defaults(self):
        event = EventCreate(event_slug="birth", event_year=1689)
        assert event.event_type == "historical"
        assert event.importance_level == 1

    def test_event_importance_range(self):
        with pytest.raises(ValidationError):
            EventCreate(importance_level=9)

    def test_category_accepts_camel_case(self):
        category = CategoryCreate(slug="ghazal", contentStyle="centered", isFeatured=True)
        assert category.content_style == "centered"
        assert category.is_featured is True


class TestExceptions:
    def test_not_found(self):
        error = ResourceNotFoundError("Timeline event", 12)
        assert error.status_code == 404
        assert error.to_dict()["code"] == "TIMELINE_EVENT_NOT_FOUND"
        assert error.to_dict()["success"] is False

    def test_missing_fields(self):
        error = MissingFieldsError("Names required", ["sindhi_name"])
        assert error.status_code == 400
        assert error.details == {"fields": ["sindhi_name"]}

    def test_invalid_parameter_suggests_values(self):
        error = InvalidParameterError("mode", "fast", ["smart", "global"])
        assert error.suggestion == "Use one of: smart, global"

    def test_admin_required(self):
        assert AdminRequiredError("u1").status_code == 403

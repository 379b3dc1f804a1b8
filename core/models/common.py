# =============================================================================
# core/models/common.py - Bilingual Helpers, Pagination & Envelopes
# =============================================================================
# Shared building blocks for every archive resource:
# - Language: "sd" (Sindhi) or "en" (English), picked per request
# - pick(): select the sindhi_*/english_* column of a bilingual field pair
# - Pagination: page/limit -> PostgREST range
# - paginated(): the list envelope returned by every listing endpoint
# - resolve_sort(): sortBy whitelisting
#
# Envelope shape:
#   {"success": true, "<items_key>": [...], "total": 42,
#    "page": 1, "limit": 20, "totalPages": 3}
# =============================================================================

import math
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class Language(str, Enum):
    """
    Display language of a request.

    - sd: Sindhi (right-to-left, Arabic script)
    - en: English
    """
    SD = "sd"
    EN = "en"

    @classmethod
    def parse(cls, value: "str | Language | None") -> "Language":
        """Unknown or missing values fall back to English."""
        if isinstance(value, cls):
            return value
        return cls.SD if (value or "").strip().lower() == "sd" else cls.EN

    @property
    def prefix(self) -> str:
        """Column prefix of this language's half of a field pair."""
        return "sindhi" if self is Language.SD else "english"


class SortOrder(str, Enum):
    """Sort direction accepted by listing endpoints."""
    ASC = "asc"
    DESC = "desc"


def pick(row: dict[str, Any], field: str, lang: Language) -> Any:
    """
    Select the `lang` half of a bilingual field pair.

    Example:
        pick(poet, "name", Language.SD)  # poet["sindhi_name"]
    """
    return row.get(f"{lang.prefix}_{field}")


def resolve_sort(
    sort_by: str | None,
    sort_order: str | None,
    allowed: dict[str, str],
    default: tuple[str, SortOrder],
) -> tuple[str, bool]:
    """
    Map a requested sortBy/sortOrder to a real column and direction.

    Args:
        sort_by: Requested sort key (public name)
        sort_order: "asc" or "desc"
        allowed: Public sort key -> column name whitelist
        default: (column, order) used when sort_by is not whitelisted

    Returns:
        (column, descending)
    """
    column = allowed.get(sort_by or "", default[0])
    requested = (sort_order or "").strip().lower()
    order = SortOrder(requested) if requested in ("asc", "desc") else default[1]
    return column, order is SortOrder.DESC


class Pagination(BaseModel):
    """
    Page-based pagination translated to a PostgREST range.

    Example:
        p = Pagination(page=3, limit=20)
        p.offset  # 40
        p.end     # 59  (range is inclusive)
    """

    page: int = Field(default=1, ge=1, description="Page number (1-indexed)")
    limit: int = Field(default=20, ge=1, description="Items per page")

    @classmethod
    def clamp(
        cls,
        page: int | None,
        limit: int | None,
        default_limit: int,
        max_limit: int,
    ) -> "Pagination":
        """Build from raw query values, clamping instead of rejecting."""
        page = max(1, page or 1)
        limit = default_limit if limit is None else limit
        limit = min(max(1, limit), max_limit)
        return cls(page=page, limit=limit)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def end(self) -> int:
        return self.offset + self.limit - 1

    def total_pages(self, total: int) -> int:
        return math.ceil(total / self.limit) if total else 0

    def to_dict(self, total: int, with_navigation: bool = False) -> dict[str, Any]:
        """Pagination block embedded in some envelopes."""
        result: dict[str, Any] = {
            "page": self.page,
            "limit": self.limit,
            "total": total,
            "totalPages": self.total_pages(total),
        }
        if with_navigation:
            result["hasNext"] = self.page < result["totalPages"]
            result["hasPrev"] = self.page > 1
        return result


def paginated(
    items_key: str,
    items: list[Any],
    total: int,
    pagination: Pagination,
    **extra: Any,
) -> dict[str, Any]:
    """Build the standard list envelope."""
    return {
        "success": True,
        items_key: items,
        "total": total,
        "page": pagination.page,
        "limit": pagination.limit,
        "totalPages": pagination.total_pages(total),
        **extra,
    }


def count_only(total: int) -> dict[str, Any]:
    """Envelope returned when a listing is called with countOnly=true."""
    return {"success": True, "total": total}

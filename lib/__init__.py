# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper for database operations
# - romanizer.py: Sindhi text tools (hesudhar, dictionary correction, romanizer)
# - utils.py: Shared utilities (UUIDs, slugs, search-term sanitizing)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.romanizer import (
    CorrectionResult,
    HesudharResult,
    RomanizeResult,
    apply_hesudhar,
    correct_text,
    romanize,
    romanize_to_slug,
)
from lib.utils import escape_like, is_uuid, sanitize_search_term, slugify

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Text tools
    "CorrectionResult",
    "HesudharResult",
    "RomanizeResult",
    "apply_hesudhar",
    "correct_text",
    "romanize",
    "romanize_to_slug",
    # Utils
    "escape_like",
    "is_uuid",
    "sanitize_search_term",
    "slugify",
]

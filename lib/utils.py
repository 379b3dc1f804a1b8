# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application:
# - UUID detection
# - Slug generation
# - Search-term sanitizing and LIKE escaping for PostgREST filters
# - Splitting stored couplet text/tags into display lists
# =============================================================================

import re

UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

# Characters with meaning inside a PostgREST `or=(...)` filter or ilike pattern
_FILTER_META_RE = re.compile(r"[,()*%\\\"]")


# =============================================================================
# UUID Utilities
# =============================================================================

def is_uuid(value: str) -> bool:
    """True when `value` looks like a canonical UUID (any case)."""
    return bool(UUID_RE.match(str(value).strip()))


# =============================================================================
# Slugs
# =============================================================================

def slugify(text: str | None, max_length: int | None = None) -> str:
    """
    Derive an ASCII slug: lowercase, runs of non [a-z0-9] become "-",
    no leading/trailing dashes.

    Example:
        slugify("Shah Abdul Latif Bhittai")  # "shah-abdul-latif-bhittai"
    """
    if not text:
        return ""
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")
    if max_length is not None:
        slug = slug[:max_length]
    return slug


def humanize_slug(slug: str | None) -> str:
    """
    Turn a slug back into a readable title.

    Example:
        humanize_slug("shah-jo-risalo")  # "Shah Jo Risalo"
    """
    slug = (slug or "").strip()
    if not slug:
        return "Untitled"
    words = re.sub(r"[-_]+", " ", slug)
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), words)


# =============================================================================
# Search Terms
# =============================================================================

def sanitize_search_term(term: str | None, max_length: int = 100) -> str:
    """
    Make a user search term safe to embed in a PostgREST filter string.

    Commas and parentheses would split or close an `or=(...)` group, and
    `*`/`%` are wildcards; all are dropped.
    """
    if not term:
        return ""
    cleaned = _FILTER_META_RE.sub(" ", term)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    return cleaned[:max_length]


def escape_like(value: str) -> str:
    r"""
    Escape LIKE wildcards so an ilike filter matches `value` literally.

    Example:
        escape_like("sur_kalyan")  # "sur\_kalyan"
    """
    return re.sub(r"([\\%_])", r"\\\1", value)


def ilike_any(columns: list[str], term: str) -> str:
    """
    Build an `or` filter matching `term` anywhere in any of `columns`.

    Example:
        ilike_any(["english_name", "english_laqab"], "latif")
        # "english_name.ilike.%latif%,english_laqab.ilike.%latif%"
    """
    return ",".join(f"{column}.ilike.%{term}%" for column in columns)


# =============================================================================
# Couplet Text
# =============================================================================

def split_lines(text: str | None) -> list[str]:
    """Non-blank lines of a couplet, in order (original spacing kept)."""
    if not text:
        return []
    return [line for line in text.split("\n") if line.strip()]


def split_tags(tags: str | list[str] | None) -> list[str]:
    """Comma-separated tag string (or list) to a list of trimmed, non-empty tags."""
    if not tags:
        return []
    if isinstance(tags, list):
        return [str(tag).strip() for tag in tags if str(tag).strip()]
    return [tag.strip() for tag in tags.split(",") if tag.strip()]

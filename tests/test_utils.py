# =============================================================================
# tests/test_utils.py - Tests for slug, search-term and text helpers
# =============================================================================

import pytest

from lib.utils import (
    escape_like,
    humanize_slug,
    ilike_any,
    is_uuid,
    sanitize_search_term,
    slugify,
    split_lines,
    split_tags,
)


class TestSlugify:
    def test_lowercases_and_joins_words(self):
        assert slugify("Shah Abdul Latif Bhittai!!") == "shah-abdul-latif-bhittai"

    def test_empty_input(self):
        assert slugify(None) == ""
        assert slugify("") == ""

    def test_max_length_truncates(self):
        assert slugify("abc def", max_length=5) == "abc-d"

    def test_non_ascii_only_gives_empty_slug(self):
        assert slugify("سنڌ") == ""


class TestHumanizeSlug:
    def test_title_cases_words(self):
        assert humanize_slug("shah-jo-risalo") == "Shah Jo Risalo"

    def test_underscores_become_spaces(self):
        assert humanize_slug("sur_kalyan") == "Sur Kalyan"

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_is_untitled(self, value):
        assert humanize_slug(value) == "Untitled"


class TestSearchTerms:
    def test_filter_metacharacters_are_removed(self):
        assert sanitize_search_term("latif, (bhit)*%") == "latif bhit"

    def test_blank_terms(self):
        assert sanitize_search_term(None) == ""
        assert sanitize_search_term(" ,() ") == ""

    def test_length_is_capped(self):
        assert len(sanitize_search_term("a" * 500)) == 100

    def test_escape_like(self):
        assert escape_like("sur_kalyan") == "sur\\_kalyan"
        assert escape_like("100%\\") == "100\\%\\\\"
        assert escape_like("latif") == "latif"

    def test_ilike_any(self):
        assert ilike_any(["english_name", "english_laqab"], "latif") == (
            "english_name.ilike.%latif%,english_laqab.ilike.%latif%"
        )


class TestCoupletText:
    def test_split_lines_drops_blank_lines(self):
        assert split_lines("first\n  \nsecond\n") == ["first", "second"]

    def test_split_lines_empty(self):
        assert split_lines(None) == []

    def test_split_tags_from_string(self):
        assert split_tags("sufi, ,love ") == ["sufi", "love"]

    def test_split_tags_from_list(self):
        assert split_tags([" a ", "", "b"]) == ["a", "b"]


class TestUuid:
    def test_uuid_any_case(self):
        assert is_uuid("2F1B3C4D-5E6F-4A7B-8C9D-0E1F2A3B4C5D")

    def test_slug_is_not_uuid(self):
        assert not is_uuid("shah-abdul-latif-bhittai")

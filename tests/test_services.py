# =============================================================================
# tests/test_services.py - Tests for the archive services
# =============================================================================
# Services run against the FakeSupabase client from conftest.py; assertions
# check both the returned shapes and the filters applied to the queries.
# =============================================================================

from unittest.mock import MagicMock, patch

import pytest

from app.exceptions import (
    InvalidParameterError,
    MissingFieldsError,
    ResourceNotFoundError,
)
from core.models import PeriodCreate, PoetCreate, PoetryCreate, PoetUpdate, TagUpsert
from core.models.common import Language, Pagination
from core.models.dictionary import DictionaryKind, HesudharEntry, RomanWordEntry, TextToolRequest
from core.services import (
    CategoryService,
    CoupletService,
    DictionaryService,
    PoetService,
    PoetryService,
    SearchService,
    StatsService,
    TagService,
    TimelineService,
)
from core.services.tag_service import normalize_tag_type
from lib.supabase_client import SupabaseClientError

KAHRO = "ڪهڙو"
KAHRO_FIXED = "ڪھڙو"
KAR = "ڪر"

PAGE = Pagination(page=1, limit=20)


# =============================================================================
# Poets
# =============================================================================

class TestPoetService:
    def test_list_envelope(self, fake_db, sample_poet):
        fake_db.table("poets", data=[sample_poet], count=1)

        result = PoetService.list_poets(PAGE, Language.EN)

        assert result["success"] is True
        assert result["total"] == 1
        assert result["totalPages"] == 1
        assert result["poets"][0]["slug"] == "shah-abdul-latif-bhittai"
        assert result["poets"][0]["poet_id"] == sample_poet["id"]

    def test_count_only_searches_language_columns(self, fake_db):
        query = fake_db.table("poets", count=3)

        result = PoetService.list_poets(PAGE, Language.SD, search="latif", only_count=True)

        assert result == {"success": True, "total": 3}
        assert "sindhi_laqab.ilike.%latif%" in query.or_.call_args.args[0]
        query.range.assert_not_called()

    def test_display_derives_missing_slug(self):
        display = PoetService.to_display({"id": "p1", "english_name": "Sachal Sarmast"})
        assert display["slug"] == "sachal-sarmast"
        assert display["tags"] == []
        assert display["is_active"] is True

    def test_find_by_uuid(self, fake_db, sample_poet):
        query = fake_db.table("poets", data=[sample_poet])

        assert PoetService.find_poet(sample_poet["id"]) == sample_poet
        query.eq.assert_called_with("id", sample_poet["id"])

    def test_find_by_derived_slug(self, fake_db):
        sachal = {"id": "p2", "english_name": "Sachal Sarmast", "slug": None}
        fake_db.table("poets", responses=[([], None), ([], None), ([sachal], None)])

        assert PoetService.find_poet("Sachal-Sarmast") == sachal

    def test_missing_poet_is_404(self, fake_db):
        fake_db.table("poets", responses=[([], None), ([], None), ([], None)])
        with pytest.raises(ResourceNotFoundError):
            PoetService.get_poet_or_404("nobody")

    def test_detail_groups_recent_poetry_by_category(self, fake_db, sample_poet):
        sample_poet["slug"] = None
        poets = fake_db.table("poets")
        poets.execute.side_effect = [MagicMock(data=[sample_poet]), Exception("permission denied")]
        poetry = fake_db.table("poetry_main", responses=[
            ([{"category_id": 3}, {"category_id": 3}, {"category_id": 5}], None),
            ([{"id": i, "poetry_slug": f"sur-{i}"} for i in range(1, 5)], None),
            ([{"id": 9, "poetry_slug": None}], None),
        ])
        fake_db.table("categories", data=[
            {"id": 3, "slug": "ghazal", "content_style": "couplets"},
            {"id": 5, "slug": "wai", "content_style": "stanzas"},
        ])
        fake_db.table("category_details", data=[
            {"cat_id": 3, "cat_name": "Ghazal", "lang": "en"},
            {"cat_id": 3, "cat_name": "غزل", "lang": "sd"},
        ])
        fake_db.table("poetry_couplets", data=[{"id": 41, "couplet_text": "..."}])

        result = PoetService.get_poet_detail(sample_poet["id"])

        assert result["categories"][0] == {
            "id": 3, "slug": "ghazal", "content_style": "couplets",
            "english_name": "Ghazal", "sindhi_name": "غزل",
        }
        assert result["categories"][1]["english_name"] is None
        ghazal, wai = result["categoriesWithPoetry"]
        assert [p["title"] for p in ghazal["poetry"]] == ["Sur 1", "Sur 2", "Sur 3", "Sur 4"]
        assert wai["poetry"] == [{"id": 9, "poetry_slug": "", "title": "Untitled"}]
        poetry.limit.assert_any_call(4)
        assert result["poet"]["couplets"] == [{"id": 41, "couplet_text": "..."}]

        # A failed slug write does not fail the read
        poets.update.assert_called_once_with({"slug": "shah-abdul-latif-bhittai"})
        assert result["poet"]["slug"] == "shah-abdul-latif-bhittai"

    def test_detail_with_stored_slug_skips_write(self, fake_db, sample_poet):
        poets = fake_db.table("poets", data=[sample_poet])

        result = PoetService.get_poet_detail(sample_poet["id"])

        assert result["categories"] == []
        assert result["categoriesWithPoetry"] == []
        poets.update.assert_not_called()

    def test_create_requires_both_names(self, fake_db):
        with pytest.raises(MissingFieldsError) as excinfo:
            PoetService.create_poet(PoetCreate(english_name="Sachal Sarmast"))
        assert excinfo.value.details == {"fields": ["sindhi_name"]}

    def test_create_stores_slug(self, fake_db):
        query = fake_db.table("poets", data=[{"id": "p2", "english_name": "Sachal Sarmast"}])

        poet = PoetService.create_poet(PoetCreate(sindhi_name="سچل سرمست", english_name="Sachal Sarmast"))

        row = query.insert.call_args.args[0]
        assert row["slug"] == "sachal-sarmast"
        assert row["is_active"] is True
        assert poet["id"] == "p2"

    def test_update_missing_poet(self, fake_db):
        fake_db.table("poets", data=[])
        with pytest.raises(ResourceNotFoundError):
            PoetService.update_poet("p1", PoetUpdate(english_tagline="x"))

    def test_delete_missing_poet(self, fake_db):
        fake_db.table("poets", data=[])
        with pytest.raises(ResourceNotFoundError):
            PoetService.delete_poet("p1")


# =============================================================================
# Couplets
# =============================================================================

class TestCoupletService:
    def test_display(self, sample_couplet):
        display = CoupletService.to_display(sample_couplet, {"41": 2}, {"41": 9})

        assert display["lines"] == ["پهرين سٽ", "ٻي سٽ"]
        assert display["tags"] == ["sufi", "love"]
        assert display["poet"]["slug"] == "shah-abdul-latif-bhittai"
        assert display["poetry"] == {"id": 7, "slug": "sur-kalyan", "tags": "sur"}
        assert (display["likes"], display["views"]) == (2, 9)

    def test_display_without_poem(self, sample_couplet):
        sample_couplet["poetry_main"] = None
        assert CoupletService.to_display(sample_couplet)["poetry"] is None

    def test_counters(self, fake_db):
        fake_db.table("content_view_counts", data=[{"content_id": 41, "view_count": 9}])
        fake_db.table("user_likes", data=[{"likeable_id": 41}, {"likeable_id": 41}])

        likes, views = CoupletService.counters([41])

        assert likes == {"41": 2}
        assert views == {"41": 9}

    def test_counters_degrade_to_zero(self, fake_db):
        fake_db.table("content_view_counts", error=Exception("relation does not exist"))
        assert CoupletService.counters([41]) == ({}, {})

    def test_list_standalone(self, fake_db, sample_couplet):
        query = fake_db.table("poetry_couplets", data=[sample_couplet], count=1)

        result = CoupletService.list_couplets(PAGE, standalone=True)

        query.or_.assert_called_once_with("poetry_id.is.null,poetry_id.eq.0")
        assert all(call.args[0] != "lang" for call in query.eq.call_args_list)
        assert result["couplets"][0]["likes"] == 0
        assert result["total"] == 1

    def test_list_by_unknown_poet(self, fake_db):
        fake_db.table("poets", data=[])
        with pytest.raises(ResourceNotFoundError):
            CoupletService.list_by_poet("p1", PAGE)

    def test_slug_from_latin_text(self):
        assert CoupletService.derive_slug("Hello World, again") == "hello-world-again"

    def test_slug_from_sindhi_text(self):
        with patch.object(DictionaryService, "roman_words_or_empty", return_value={}):
            assert CoupletService.derive_slug(f"{KAR}\nsecond line") == "kr"

    def test_sindhi_slug_keeps_diacritics(self):
        with patch.object(DictionaryService, "roman_words_or_empty", return_value={}):
            assert CoupletService.derive_slug("ٽوڙ ڍنڍ ڻ") == "ṭwṛ-ḍhnḍh-ṇ"

    def test_sindhi_slug_is_truncated(self):
        with patch.object(DictionaryService, "roman_words_or_empty", return_value={}):
            slug = CoupletService.derive_slug(" ".join([KAR] * 30))

        assert len(slug) <= 50
        assert not slug.endswith("-")
        assert slug.startswith("kr-kr-")

    def test_create_requires_text_and_poet(self):
        from core.models import CoupletCreate

        with pytest.raises(MissingFieldsError):
            CoupletService.create_couplet(CoupletCreate(couplet_text="only text"))


# =============================================================================
# Poetry & Categories
# =============================================================================

class TestPoetryService:
    def test_unknown_category_gives_empty_page(self, fake_db):
        fake_db.table("categories", data=[])

        result = PoetryService.list_poetry(PAGE, Language.EN, category="nazm")

        assert result["poetry"] == []
        assert result["total"] == 0
        fake_db.queries["poetry_main"].range.assert_not_called()

    def test_numeric_key_is_id(self, fake_db):
        query = fake_db.table("poetry_main", data=[{"id": 7}])

        assert PoetryService.find_poem("7") == {"id": 7}
        query.eq.assert_called_with("id", 7)

    def test_detail_resolves_related_rows(self, fake_db):
        fake_db.table("poetry_main", data=[{
            "id": 7, "poetry_slug": "sur-kalyan", "poet_id": "p1", "category_id": 3,
            "poetry_tags": "sur, sufi", "is_featured": None,
        }])
        fake_db.table("poets", data=[{"id": "p1", "slug": None, "english_name": "Shah Latif"}])
        fake_db.table("categories", data=[{"id": 3, "slug": "wai"}])
        fake_db.table("category_details", data=[{"cat_id": 3, "cat_name": "Wai", "lang": "en"}])
        fake_db.table("poetry_translations", data=[
            {"poetry_id": 7, "lang": "sd", "title": "سر ڪلياڻ", "info": None},
            {"poetry_id": 7, "lang": "en", "title": "Sur Kalyan", "info": "Opening chapter"},
        ])
        couplets = fake_db.table("poetry_couplets", data=[{"id": 41, "couplet_text": "..."}])

        poem = PoetryService.get_poetry_detail("7", Language.EN)["poetry"]

        assert (poem["title"], poem["info"]) == ("Sur Kalyan", "Opening chapter")
        assert poem["poet_slug"] == "shah-latif"
        assert (poem["category"], poem["category_slug"]) == ("Wai", "wai")
        assert poem["tags"] == ["sur", "sufi"]
        assert poem["is_featured"] is False
        assert len(poem["translations"]) == 2
        assert poem["couplets"] == [{"id": 41, "couplet_text": "..."}]
        couplets.eq.assert_any_call("poetry_id", 7)

    def test_missing_poem_is_404(self, fake_db):
        fake_db.table("poetry_main", data=[])
        with pytest.raises(ResourceNotFoundError):
            PoetryService.get_poetry_detail("sur-missing", Language.EN)

    def test_create_upserts_translations(self, fake_db):
        main = fake_db.table("poetry_main", data=[{"id": 7, "poetry_slug": "sur-kalyan"}])
        translations = fake_db.table("poetry_translations", data=[{"poetry_id": 7, "lang": "en"}])

        poem = PoetryService.create_poetry(PoetryCreate(
            poetry_slug="sur-kalyan",
            poet_id="p1",
            category_id=3,
            translations=[{"lang": "en", "title": "Sur Kalyan"}, {"lang": "sd", "title": "سر ڪلياڻ"}],
        ))

        row = main.insert.call_args.args[0]
        assert "translations" not in row
        assert row["lang"] == "sd"
        translations.upsert.assert_called_once_with(
            [
                {"poetry_id": 7, "lang": "en", "title": "Sur Kalyan", "info": None},
                {"poetry_id": 7, "lang": "sd", "title": "سر ڪلياڻ", "info": None},
            ],
            on_conflict="poetry_id,lang",
        )
        assert poem["translations"] == [{"poetry_id": 7, "lang": "en"}]

    def test_create_requires_slug_poet_and_category(self, fake_db):
        with pytest.raises(MissingFieldsError) as excinfo:
            PoetryService.create_poetry(PoetryCreate(poetry_slug="sur-kalyan"))
        assert excinfo.value.details == {"fields": ["poet_id", "category_id"]}


class TestCategoryService:
    ITEMS = [
        {"slug": "en-only", "sindhiName": "", "sindhiDetails": "", "englishName": "Nazm", "englishDetails": ""},
        {"slug": "sd-name", "sindhiName": "غزل", "sindhiDetails": "", "englishName": "", "englishDetails": ""},
        {"slug": "sd-full", "sindhiName": "وائي", "sindhiDetails": "...", "englishName": "", "englishDetails": ""},
    ]
    GHAZAL = {"id": 3, "slug": "ghazal", "category_details": [{"lang": "en", "cat_name": "Ghazal"}]}

    def test_sindhi_keeps_sindhi_content_complete_first(self):
        result = CategoryService.filter_for_language(self.ITEMS, Language.SD)
        assert [i["slug"] for i in result] == ["sd-full", "sd-name"]

    def test_english_keeps_english_content(self):
        result = CategoryService.filter_for_language(self.ITEMS, Language.EN)
        assert [i["slug"] for i in result] == ["en-only"]

    def test_display_summary_falls_back_to_template(self):
        category = {
            "id": 3, "slug": "ghazal", "is_featured": None,
            "category_details": [{"lang": "en", "cat_name": "Ghazal", "cat_detail": None}],
        }
        display = CategoryService.to_display(category, 4, Language.EN)

        assert display["id"] == "3"
        assert display["languages"] == ["English"]
        assert display["summary"].startswith("Ghazal brings together")
        assert display["count"] == 4

    def test_poetry_counts(self, fake_db):
        fake_db.table("poetry_main", data=[{"category_id": 3}, {"category_id": 3}, {"category_id": 5}])
        assert CategoryService.poetry_counts([3, 5]) == {"3": 2, "5": 1}

    def test_list_clamps_limit_and_reports_navigation(self, fake_db):
        query = fake_db.table("categories", data=[self.GHAZAL], count=100)

        result = CategoryService.list_categories(2, 500, Language.EN)

        query.range.assert_called_once_with(48, 95)
        assert (result["limit"], result["totalPages"]) == (48, 3)
        assert result["pagination"]["hasNext"] is True
        assert result["pagination"]["hasPrev"] is True
        assert [i["slug"] for i in result["items"]] == ["ghazal"]

    def test_list_limit_has_a_floor_of_one(self, fake_db):
        query = fake_db.table("categories", data=[self.GHAZAL], count=1)

        result = CategoryService.list_categories(1, 0, Language.EN)

        query.range.assert_called_once_with(0, 0)
        assert result["pagination"]["hasNext"] is False
        assert result["pagination"]["hasPrev"] is False

    def test_list_all_lifts_page_size(self, fake_db):
        query = fake_db.table("categories", data=[self.GHAZAL], count=60)

        result = CategoryService.list_categories(1, 12, Language.EN, get_all=True)

        query.range.assert_called_once_with(0, 999)
        assert result["limit"] == 1000
        assert result["totalPages"] == 1


# =============================================================================
# Tags
# =============================================================================

class TestTagService:
    @pytest.mark.parametrize("raw, expected", [
        (None, "Poet"),
        ("topics", "Topic"),
        ("POET", "Poet"),
        ("Era / Tradition", "Era / Tradition"),
    ])
    def test_normalize_tag_type(self, raw, expected):
        assert normalize_tag_type(raw) == expected

    def test_display_uses_label_when_title_repeats_slug(self):
        tag = {"id": 1, "slug": "love", "label": "محبت", "tags_translations": [
            {"lang_code": "en", "title": "love", "detail": None},
        ]}
        display = TagService.to_display(tag, Language.EN)
        assert display["title"] == "محبت"
        assert display["detail"] == ""

    def test_display_adds_missing_translation(self):
        tag = {"id": 1, "slug": "love", "label": "محبت", "tags_translations": []}
        display = TagService.to_display(tag, Language.SD)
        assert display["tags_translations"] == [{"lang_code": "sd", "title": "محبت", "detail": ""}]

    def test_list_clamps_limit(self, fake_db):
        query = fake_db.table("tags", data=[])

        result = TagService.list_tags(Language.EN, "topics", limit=500, offset=-3)

        assert (result["limit"], result["offset"], result["type"]) == (100, 0, "Topic")
        query.range.assert_called_once_with(0, 99)

    def test_upsert_requires_titles(self, fake_db):
        with pytest.raises(MissingFieldsError) as excinfo:
            TagService.upsert_tag(TagUpsert(slug="love"))
        assert excinfo.value.details == {"fields": ["sindhi.title", "english.title"]}

    def test_new_tag_is_removed_when_translations_fail(self, fake_db):
        tags = fake_db.table("tags", responses=[([], None), ([{"id": 5}], None), ([], None)])
        fake_db.table("tags_translations", error=Exception("constraint violated"))

        with pytest.raises(SupabaseClientError):
            TagService.upsert_tag(TagUpsert(slug="love", sindhi={"title": "محبت"}, english={"title": "Love"}))

        tags.delete.assert_called_once()
        tags.eq.assert_called_with("id", 5)

    def test_upsert_existing_tag(self, fake_db):
        fake_db.table("tags", responses=[([{"id": 5}], None), ([{"id": 5}], None)])
        translations = fake_db.table("tags_translations", data=[])

        result = TagService.upsert_tag(
            TagUpsert(slug="love", sindhi={"title": "محبت"}, english={"title": "Love"})
        )

        assert result["created"] is False
        assert result["tag_id"] == 5
        rows = translations.upsert.call_args.args[0]
        assert [r["lang_code"] for r in rows] == ["sd", "en"]


# =============================================================================
# Timeline
# =============================================================================

class TestTimelineService:
    EVENT = {
        "id": 9,
        "event_slug": "risalo-compiled",
        "event_year": 1760,
        "english_title": "Risalo compiled",
        "sindhi_title": "رسالو مرتب ٿيو",
        "timeline_periods": {"id": 1, "period_slug": "classical", "english_name": "Classical", "color_code": "#111"},
        "poets": {"id": "p1", "slug": None, "english_name": "Shah Latif", "file_url": None},
    }

    def test_event_display(self):
        display = TimelineService.event_to_display(self.EVENT, Language.EN)

        assert display["title"] == "Risalo compiled"
        assert display["period"] == {"id": 1, "slug": "classical", "name": "Classical", "color_code": "#111"}
        assert display["poet"]["slug"] == "shah-latif"
        assert display["tags"] == []

    def test_period_display_drops_blank_characteristics(self):
        period = {"id": 1, "english_characteristics": ["Sufi", " ", None, "Oral"]}
        assert TimelineService.period_to_display(period, Language.EN)["characteristics"] == ["Sufi", "Oral"]

    def test_overview_survives_a_failing_half(self, fake_db):
        fake_db.table("timeline_periods", error=Exception("timeout"))
        fake_db.table("timeline_events", data=[self.EVENT])

        result = TimelineService.overview(Language.EN)

        assert result["periods"] == []
        assert result["total_periods"] == 0
        assert result["total_events"] == 1

    def test_list_periods_searches_language_columns(self, fake_db):
        query = fake_db.table("timeline_periods", data=[{"id": 1, "sindhi_name": "ڪلاسيڪي دور"}], count=1)

        result = TimelineService.list_periods(PAGE, Language.SD, search="dor")

        query.or_.assert_called_once_with("sindhi_name.ilike.%dor%,sindhi_description.ilike.%dor%")
        query.order.assert_called_once_with("start_year", desc=False)
        assert result["periods"][0]["name"] == "ڪلاسيڪي دور"

    def test_list_events_searches_titles_newest_first(self, fake_db):
        query = fake_db.table("timeline_events", data=[self.EVENT], count=1)

        result = TimelineService.list_events(PAGE, Language.EN, search="risalo")

        query.or_.assert_called_once_with("english_title.ilike.%risalo%,english_description.ilike.%risalo%")
        query.order.assert_called_once_with("event_year", desc=True)
        assert result["events"][0]["title"] == "Risalo compiled"

    def test_count_events(self, fake_db):
        query = fake_db.table("timeline_events", count=7)

        result = TimelineService.list_events(PAGE, Language.EN, event_type="literary", only_count=True)

        assert result == {"success": True, "total": 7}
        query.eq.assert_any_call("event_type", "literary")
        query.range.assert_not_called()
        query.order.assert_not_called()

    def test_period_by_slug_lists_its_events(self, fake_db):
        periods = fake_db.table(
            "timeline_periods", data=[{"id": 1, "period_slug": "classical", "english_name": "Classical"}]
        )
        events = fake_db.table("timeline_events", data=[self.EVENT])

        result = TimelineService.get_period_by_slug("classical", Language.EN)

        periods.eq.assert_any_call("period_slug", "classical")
        events.eq.assert_any_call("period_id", 1)
        events.order.assert_called_once_with("event_year")
        assert result["period"]["name"] == "Classical"
        assert [e["event_slug"] for e in result["events"]] == ["risalo-compiled"]

    def test_missing_period_slug_is_404(self, fake_db):
        fake_db.table("timeline_periods", data=[])
        with pytest.raises(ResourceNotFoundError):
            TimelineService.get_period_by_slug("nowhere", Language.EN)

    def test_create_period_requires_names(self):
        with pytest.raises(MissingFieldsError) as excinfo:
            TimelineService.create_period(PeriodCreate(period_slug="classical", start_year=1600))
        assert excinfo.value.details == {"fields": ["sindhi_name", "english_name"]}


# =============================================================================
# Search & Stats
# =============================================================================

class TestSearchService:
    def test_empty_query_skips_database(self, fake_db):
        assert SearchService.search(" ,() ", Language.EN) == {"success": True, "query": "", "results": []}
        fake_db.client.table.assert_not_called()

    def test_poet_laqab_match(self, fake_db, sample_poet):
        fake_db.table("poets", data=[sample_poet])

        [result] = SearchService.search_poets("dhani", Language.EN)

        assert result["title"] == "Shah Abdul Latif Bhittai (Bhit Dhani)"
        assert result["matchedField"] == "english_laqab"
        assert result["url"] == "/en/poets/shah-abdul-latif-bhittai"
        assert result["subtitle"] == "Poet"

    def test_hidden_poems_are_skipped(self, fake_db):
        fake_db.table("poetry_translations", data=[
            {"poetry_id": 1, "title": "Sur Kalyan"},
            {"poetry_id": 2, "title": "Sur Yaman"},
        ])
        fake_db.table("poetry_main", data=[
            {"id": 1, "poetry_slug": "sur-kalyan", "visibility": True, "deleted_at": None},
            {"id": 2, "poetry_slug": "sur-yaman", "visibility": False, "deleted_at": None},
        ])

        results = SearchService.search_poetry("sur", Language.EN)

        assert [r["url"] for r in results] == ["/en/poetry/sur-kalyan"]

    def test_failing_section_is_skipped(self, fake_db):
        fake_db.table("poets", error=Exception("timeout"))
        fake_db.table("poetry_couplets", data=[
            {"id": 3, "couplet_text": "first line\nsecond line", "couplet_slug": "first-line"},
        ])

        result = SearchService.search("first", Language.EN)

        assert [r["type"] for r in result["results"]] == ["couplet"]
        assert result["results"][0]["title"] == "first line"
        assert result["results"][0]["url"] == "/en/couplets/first-line"


class TestStatsService:
    def test_failing_count_reports_zero(self, fake_db):
        fake_db.table("poets", count=3)
        fake_db.table("tags", error=Exception("permission denied"))

        stats = StatsService.get_stats()

        assert stats["success"] is True
        assert stats["totalPoets"] == 3
        assert stats["totalTags"] == 0
        assert stats["totalEvents"] == 0


# =============================================================================
# Dictionaries
# =============================================================================

class TestDictionaryService:
    ROWS = [{"id": 1, "word": KAHRO, "correct": KAHRO_FIXED}]

    def test_text_is_required(self):
        with pytest.raises(MissingFieldsError):
            DictionaryService.run_text_tool(TextToolRequest(text="  "))

    def test_unknown_mode(self):
        with pytest.raises(InvalidParameterError) as excinfo:
            DictionaryService.run_text_tool(TextToolRequest(text=KAHRO, mode="fast"))
        assert excinfo.value.status_code == 400

    def test_hesudhar_operation(self):
        result = DictionaryService.run_text_tool(TextToolRequest(text=KAHRO, operation="hesudhar"))
        assert result["hesudhar"] == KAHRO_FIXED
        assert result["replacements"] == 1

    def test_load_is_cached(self, fake_db):
        fake_db.table("baakh_hesudhars", data=self.ROWS)

        DictionaryService.load(DictionaryKind.HESUDHAR)
        DictionaryService.load(DictionaryKind.HESUDHAR)

        assert fake_db.client.table.call_count == 1

    def test_correct(self, fake_db):
        fake_db.table("baakh_hesudhars", data=self.ROWS)

        result = DictionaryService.correct(f"{KAHRO} {KAR}")

        assert result["correctedText"] == f"{KAHRO_FIXED} {KAR}"
        assert result["corrections"][0]["incorrectWord"] == KAHRO

    def test_export_file(self, fake_db, tmp_path):
        fake_db.table("baakh_hesudhars", data=self.ROWS)
        progress = []

        result = DictionaryService.export_file(
            DictionaryKind.HESUDHAR,
            directory=str(tmp_path),
            progress=lambda percent, message: progress.append(percent),
        )

        assert result["entries"] == 1
        content = (tmp_path / "hesudhar.txt").read_text(encoding="utf-8")
        assert f"{KAHRO}|{KAHRO_FIXED}" in content
        assert progress == [10, 70, 100]

    def test_list_entries_reports_more_pages(self, fake_db):
        query = fake_db.table("baakh_roman_words", data=[{"id": 1}], count=45)

        first = DictionaryService.list_entries(
            DictionaryKind.ROMANIZER, Pagination(page=2, limit=20), search="sindh"
        )
        last = DictionaryService.list_entries(DictionaryKind.ROMANIZER, Pagination(page=3, limit=20))

        assert first["words"] == [{"id": 1}]
        assert first["hasMore"] is True
        assert last["hasMore"] is False
        query.or_.assert_called_once_with("word_sd.ilike.%sindh%,word_roman.ilike.%sindh%")

    def test_create_entry_reloads_dictionary(self, fake_db):
        query = fake_db.table("baakh_hesudhars", data=self.ROWS)
        DictionaryService.load(DictionaryKind.HESUDHAR)

        entry = HesudharEntry(word=f" {KAHRO} ", correct=KAHRO_FIXED)
        DictionaryService.create_entry(DictionaryKind.HESUDHAR, entry)
        DictionaryService.load(DictionaryKind.HESUDHAR)

        row = query.insert.call_args.args[0]
        assert (row["word"], row["correct"]) == (KAHRO, KAHRO_FIXED)
        assert fake_db.client.table.call_count == 3

    def test_create_entry_requires_both_columns(self, fake_db):
        with pytest.raises(MissingFieldsError) as excinfo:
            DictionaryService.create_entry(DictionaryKind.ROMANIZER, RomanWordEntry(word_sd="سنڌ"))
        assert excinfo.value.details == {"fields": ["word_roman"]}

    def test_update_entry_reloads_dictionary(self, fake_db):
        query = fake_db.table("baakh_hesudhars", data=self.ROWS)
        DictionaryService.load(DictionaryKind.HESUDHAR)

        entry = HesudharEntry(word=KAHRO, correct=KAHRO_FIXED)
        DictionaryService.update_entry(DictionaryKind.HESUDHAR, "1", entry)
        DictionaryService.load(DictionaryKind.HESUDHAR)

        query.eq.assert_any_call("id", "1")
        assert fake_db.client.table.call_count == 3

    def test_delete_entry_reloads_dictionary(self, fake_db):
        fake_db.table("baakh_hesudhars", data=self.ROWS)
        DictionaryService.load(DictionaryKind.HESUDHAR)

        DictionaryService.delete_entry(DictionaryKind.HESUDHAR, "1")
        DictionaryService.load(DictionaryKind.HESUDHAR)

        assert fake_db.client.table.call_count == 3

    def test_delete_missing_entry_keeps_cache(self, fake_db):
        fake_db.table("baakh_hesudhars", responses=[(self.ROWS, None), ([], None)])
        DictionaryService.load(DictionaryKind.HESUDHAR)

        with pytest.raises(ResourceNotFoundError):
            DictionaryService.delete_entry(DictionaryKind.HESUDHAR, "404")
        DictionaryService.load(DictionaryKind.HESUDHAR)

        assert fake_db.client.table.call_count == 2

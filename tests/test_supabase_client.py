# =============================================================================
# tests/test_supabase_client.py - Tests for the Supabase wrapper helpers
# =============================================================================

import pytest

from lib.supabase_client import SupabaseClient, SupabaseClientError


class TestFetchRow:
    def test_returns_first_row(self, fake_db):
        query = fake_db.table("poets", data=[{"id": "p1"}])

        assert SupabaseClient.fetch_row("poets", "id", "p1") == {"id": "p1"}
        query.eq.assert_called_with("id", "p1")
        query.is_.assert_called_with("deleted_at", "null")

    def test_missing_row(self, fake_db):
        fake_db.table("poets", data=[])
        assert SupabaseClient.fetch_row("poets", "id", "nope") is None

    def test_no_rows_error_is_not_found(self, fake_db):
        fake_db.table("poets", error=Exception("PGRST116: JSON object requested"))
        assert SupabaseClient.fetch_row("poets", "id", "p1") is None

    def test_case_insensitive_and_deleted(self, fake_db):
        query = fake_db.table("poets", data=[{"id": "p1"}])

        SupabaseClient.fetch_row("poets", "slug", "Latif", include_deleted=True, case_insensitive=True)

        query.ilike.assert_called_with("slug", "Latif")
        query.is_.assert_not_called()

    def test_case_insensitive_match_is_literal(self, fake_db):
        query = fake_db.table("poetry_main", data=[])

        SupabaseClient.fetch_row("poetry_main", "poetry_slug", "sur_100%", case_insensitive=True)

        query.ilike.assert_called_with("poetry_slug", "sur\\_100\\%")

    def test_other_errors_raise(self, fake_db):
        fake_db.table("poets", error=Exception("connection refused"))
        with pytest.raises(SupabaseClientError) as excinfo:
            SupabaseClient.fetch_row("poets", "id", "p1")
        assert excinfo.value.code == "FETCH_ROW_FAILED"


class TestQueries:
    def test_fetch_page_applies_range(self, fake_db):
        query = fake_db.table("poets", data=[{"id": 1}], count=41)

        rows, total = SupabaseClient.fetch_page(query, 20, 39, "list poets")

        assert rows == [{"id": 1}]
        assert total == 41
        query.range.assert_called_once_with(20, 39)

    def test_execute_wraps_errors(self, fake_db):
        query = fake_db.table("poets", error=RuntimeError("boom"))
        with pytest.raises(SupabaseClientError) as excinfo:
            SupabaseClient.execute(query, "list poets")
        assert excinfo.value.code == "QUERY_FAILED"
        assert "list poets" in excinfo.value.message

    def test_fetch_all_walks_pages(self, fake_db):
        query = fake_db.table(
            "baakh_hesudhars",
            responses=[([{"id": 1}, {"id": 2}], None), ([{"id": 3}], None)],
        )

        rows = SupabaseClient.fetch_all("baakh_hesudhars", page_size=2)

        assert [r["id"] for r in rows] == [1, 2, 3]
        assert query.range.call_args_list[1].args == (2, 3)

    def test_count_rows(self, fake_db):
        query = fake_db.table("tags", count=12)

        assert SupabaseClient.count_rows("tags", include_deleted=True) == 12
        query.is_.assert_not_called()


class TestWrites:
    def test_insert_returns_row(self, fake_db):
        fake_db.table("poets", data=[{"id": "new"}])
        assert SupabaseClient.insert_row("poets", {"english_name": "X"}) == {"id": "new"}

    def test_insert_without_data_raises(self, fake_db):
        fake_db.table("poets", data=[])
        with pytest.raises(SupabaseClientError) as excinfo:
            SupabaseClient.insert_row("poets", {})
        assert excinfo.value.code == "INSERT_NO_DATA"

    def test_update_skips_deleted_filter_when_asked(self, fake_db):
        query = fake_db.table("tags", data=[{"id": 3}])

        assert SupabaseClient.update_row("tags", 3, {"label": "x"}, include_deleted=True) == {"id": 3}
        query.is_.assert_not_called()

    def test_soft_delete_reports_missing_rows(self, fake_db):
        query = fake_db.table("poets", data=[])

        assert SupabaseClient.soft_delete("poets", "p1") is False
        assert "deleted_at" in query.update.call_args.args[0]

    def test_soft_delete_marks_row(self, fake_db):
        fake_db.table("poets", data=[{"id": "p1"}])
        assert SupabaseClient.soft_delete("poets", "p1") is True

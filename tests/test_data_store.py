"""Tests for the in-memory expense store, CSV export and settings loading."""

import json
from dataclasses import FrozenInstanceError
from datetime import date
from decimal import Decimal

import pytest

from analytics import by_category, by_month
from data_store import (
    CATEGORIES,
    CATEGORY_COLORS,
    DEFAULT_SETTINGS,
    ExpenseStore,
    export_filename,
    load_settings,
    to_csv,
    write_csv,
)


class TestAdd:
    """Tests for ExpenseStore.add."""

    def test_add_appends_matching_record(self, store):
        """A valid add grows the store by one with the given fields."""
        expense_id = store.add("12.5", "Food", "Lunch", "2024-01-01")

        records = store.list()
        assert len(records) == 1
        record = records[0]
        assert record.id == expense_id
        assert record.amount == Decimal("12.5")
        assert record.category == "Food"
        assert record.description == "Lunch"
        assert record.date == "2024-01-01"

    def test_empty_description_is_ignored(self, store):
        assert store.add("10", "Food", "", "2024-01-01") is None
        assert store.add("10", "Food", "   ", "2024-01-01") is None
        assert len(store) == 0

    def test_empty_amount_is_ignored(self, store):
        assert store.add("", "Food", "Lunch", "2024-01-01") is None
        assert store.add(None, "Food", "Lunch", "2024-01-01") is None
        assert len(store) == 0

    def test_unparseable_amount_is_ignored(self, store):
        assert store.add("abc", "Food", "Lunch") is None
        assert store.add("1.2.3", "Food", "Lunch") is None
        assert len(store) == 0

    def test_non_finite_amount_is_ignored(self, store):
        """NaN and Infinity parse as decimals but are rejected."""
        assert store.add("NaN", "Food", "Lunch") is None
        assert store.add("Infinity", "Food", "Lunch") is None
        assert store.add("-inf", "Food", "Lunch") is None
        assert len(store) == 0

    def test_unknown_category_is_ignored(self, store):
        assert store.add("5", "Groceries", "Milk") is None
        assert len(store) == 0

    def test_invalid_date_is_ignored(self, store):
        assert store.add("5", "Food", "Milk", "2024-02-30") is None
        assert store.add("5", "Food", "Milk", "15.01.2024") is None
        assert len(store) == 0

    def test_blank_date_defaults_to_today(self, store):
        store.add("5", "Food", "Milk", "")
        assert store.list()[0].date == date.today().isoformat()

    def test_comma_decimal_separator(self, store):
        store.add("12,50", "Food", "Lunch", "2024-01-01")
        assert store.list()[0].amount == Decimal("12.50")

    def test_description_is_stripped(self, store):
        store.add("1", "Other", "  Stamps  ", "2024-01-01")
        assert store.list()[0].description == "Stamps"

    def test_negative_and_zero_amounts_accepted_by_default(self, store):
        assert store.add("-4", "Other", "Refund", "2024-01-01") is not None
        assert store.add("0", "Other", "Free sample", "2024-01-01") is not None
        assert len(store) == 2

    def test_reject_negative(self):
        store = ExpenseStore(reject_negative=True)
        assert store.add("-4", "Other", "Refund", "2024-01-01") is None
        assert store.add("0", "Other", "Free sample", "2024-01-01") is not None
        assert len(store) == 1

    def test_ids_unique_within_same_millisecond(self, store):
        """A fixed clock still yields unique, increasing ids."""
        ids = [store.add("1", "Food", f"Item {i}", "2024-01-01") for i in range(5)]
        assert len(set(ids)) == 5
        assert ids == sorted(ids)
        assert ids[0] == 1_700_000_000_000

    def test_records_are_immutable(self, store):
        store.add("1", "Food", "Tea", "2024-01-01")
        with pytest.raises(FrozenInstanceError):
            store.list()[0].amount = Decimal("2")

    def test_huge_amount_is_kept_and_aggregates(self, store):
        """An amount past 28 significant digits at cent precision stays usable."""
        assert store.add("1e27", "Food", "Yacht", "2024-01-01") is not None
        assert by_category(store.list()) == {"Food": Decimal("1000000000000000000000000000.00")}
        assert by_month(store.list()) == [("2024-01", Decimal("1000000000000000000000000000.00"))]

    def test_amount_out_of_range_is_ignored(self, store):
        assert store.add("1e30", "Food", "Too much", "2024-01-01") is None
        assert store.add("-1e30", "Food", "Too much", "2024-01-01") is None
        assert store.add("1e999999", "Food", "Too much", "2024-01-01") is None
        assert len(store) == 0

    def test_every_category_is_accepted(self, store):
        for category in CATEGORIES:
            assert store.add("1", category, "x", "2024-01-01") is not None
        assert len(store) == len(CATEGORIES)


class TestRemove:
    """Tests for ExpenseStore.remove."""

    def test_remove_existing(self, store):
        first = store.add("1", "Food", "Tea", "2024-01-01")
        second = store.add("2", "Food", "Coffee", "2024-01-02")

        store.remove(first)

        assert len(store) == 1
        assert store.get(first) is None
        assert store.get(second).description == "Coffee"

    def test_remove_unknown_id_is_noop(self, store):
        store.add("1", "Food", "Tea", "2024-01-01")
        before = store.list()

        store.remove(42)

        assert store.list() == before

    def test_clear(self, store):
        store.add("1", "Food", "Tea", "2024-01-01")
        store.clear()
        assert len(store) == 0


class TestListing:
    """Tests for list and sorted_by_date."""

    def test_list_is_a_copy(self, store):
        store.add("1", "Food", "Tea", "2024-01-01")
        records = store.list()
        records.clear()
        assert len(store) == 1

    def test_sorted_by_date_most_recent_first(self, store):
        store.add("1", "Food", "Old", "2023-12-31")
        store.add("2", "Food", "New", "2024-03-01")
        store.add("3", "Food", "Mid", "2024-01-15")

        assert [r.description for r in store.sorted_by_date()] == ["New", "Mid", "Old"]

    def test_sorting_leaves_store_order_untouched(self, store):
        store.add("1", "Food", "Old", "2023-12-31")
        store.add("2", "Food", "New", "2024-03-01")

        store.sorted_by_date()

        assert [r.description for r in store.list()] == ["Old", "New"]

    def test_equal_dates_keep_insertion_order(self, store):
        store.add("1", "Food", "First", "2024-01-01")
        store.add("2", "Food", "Second", "2024-01-01")
        assert [r.description for r in store.sorted_by_date()] == ["First", "Second"]


class TestToCsv:
    """Tests for CSV serialization."""

    def test_single_record_exact_output(self, make_record):
        record = make_record(12.5, "Food", "Lunch", "2024-01-01")
        assert to_csv([record]) == "Date,Category,Description,Amount\n2024-01-01,Food,Lunch,12.5"

    def test_empty_list_is_header_only(self):
        assert to_csv([]) == "Date,Category,Description,Amount"

    def test_keeps_given_order(self, make_record):
        records = [
            make_record(1, "Food", "B", "2024-02-01"),
            make_record(2, "Rent", "A", "2024-01-01"),
        ]
        lines = to_csv(records).split("\n")
        assert lines[1].startswith("2024-02-01")
        assert lines[2].startswith("2024-01-01")

    def test_amount_plain_form(self, make_record):
        records = [
            make_record("10", date="2024-01-01"),
            make_record("10.00", date="2024-01-01"),
            make_record("0.10", date="2024-01-01"),
            make_record("7.25", date="2024-01-01"),
        ]
        amounts = [line.rsplit(",", 1)[1] for line in to_csv(records).split("\n")[1:]]
        assert amounts == ["10", "10", "0.1", "7.25"]

    def test_commas_are_not_escaped_by_default(self, make_record):
        record = make_record(3, "Food", "Bread, milk", "2024-01-01")
        assert to_csv([record]).split("\n")[1] == "2024-01-01,Food,Bread, milk,3"

    def test_negative_zero_amount(self, make_record):
        record = make_record("-0", "Other", "Nothing", "2024-01-01")
        assert to_csv([record]).split("\n")[1] == "2024-01-01,Other,Nothing,0"

    def test_huge_amount(self, make_record):
        record = make_record("1e30", "Rent", "Castle", "2024-01-01")
        assert to_csv([record]).split("\n")[1] == "2024-01-01,Rent,Castle,1" + "0" * 30

    def test_quoted_output(self, make_record):
        record = make_record(3, "Food", "Bread, milk", "2024-01-01")
        assert to_csv([record], quote=True) == (
            'Date,Category,Description,Amount\n2024-01-01,Food,"Bread, milk",3'
        )


class TestExportFile:
    """Tests for export_filename and write_csv."""

    def test_export_filename(self):
        assert export_filename(date(2024, 3, 5)) == "expenses_2024-03-05.csv"

    def test_export_filename_defaults_to_today(self):
        assert export_filename() == f"expenses_{date.today().isoformat()}.csv"

    def test_write_csv(self, tmp_path, make_record):
        path = tmp_path / "out.csv"
        count = write_csv(path, [make_record(12.5, "Food", "Lunch", "2024-01-01")])

        assert count == 1
        assert path.read_text(encoding="utf-8") == (
            "Date,Category,Description,Amount\n2024-01-01,Food,Lunch,12.5"
        )


class TestLoadSettings:
    """Tests for load_settings."""

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_settings(tmp_path / "nope.json") == DEFAULT_SETTINGS

    def test_overrides_known_keys(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"currency_symbol": "€", "quote_csv": True, "extra": 1}), encoding="utf-8")

        settings = load_settings(path)

        assert settings["currency_symbol"] == "€"
        assert settings["quote_csv"] is True
        assert settings["reject_negative"] is False
        assert "extra" not in settings

    def test_wrong_type_is_ignored(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"reject_negative": "yes"}), encoding="utf-8")
        assert load_settings(path)["reject_negative"] is False

    def test_malformed_file_gives_defaults(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("{not json", encoding="utf-8")
        assert load_settings(path) == DEFAULT_SETTINGS

    def test_non_object_gives_defaults(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("[1, 2]", encoding="utf-8")
        assert load_settings(path) == DEFAULT_SETTINGS


def test_every_category_has_a_color():
    assert set(CATEGORY_COLORS) == set(CATEGORIES)

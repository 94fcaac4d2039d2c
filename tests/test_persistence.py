"""Tests for src.filters.persistence: snapshot storage per view."""

from __future__ import annotations

import json
import logging

import pytest

from src.contracts.filter_state import FilterState
from src.filters.engine import AlertFilterEngine
from src.filters.persistence import (
    FilterPersistence,
    JsonFileStore,
    MemoryStore,
    from_snapshot,
    storage_key,
    to_snapshot,
)
from src.sources.memory import InMemoryAlertSource
from tests.conftest import make_state

KEY = storage_key("cis")


class BrokenStore:
    def get(self, key):
        raise OSError("disk gone")

    def set(self, key, value):
        raise OSError("read-only")


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


class TestStorageKey:
    def test_project_only(self):
        assert storage_key("cis") == "triggeredAlertsFilters_cis"

    def test_named_partition(self):
        assert storage_key("cis", "active") == "triggeredAlertsFilters_cis_active"

    def test_status_list_partition(self):
        assert storage_key("cis", ["firing", "pending"]) == "triggeredAlertsFilters_cis_firing-pending"

    def test_empty_partition_ignored(self):
        assert storage_key("cis", []) == storage_key("cis")

    def test_views_do_not_share_keys(self):
        assert storage_key("cis", "active") != storage_key("cis", "history")


class TestSnapshot:
    def test_camel_case_without_pagination(self):
        snap = to_snapshot(make_state(search_term="x", selected_region=("eu10",), page=4, page_size=20))
        assert snap["searchTerm"] == "x"
        assert snap["selectedRegion"] == ["eu10"]
        assert "page" not in snap and "pageSize" not in snap

    def test_partial_record_merges_over_defaults(self):
        defaults = FilterState(page_size=25, excluded_landscape=("dev",))
        state = from_snapshot({"searchTerm": "x"}, defaults)
        assert state.search_term == "x"
        assert state.excluded_landscape == ("dev",)
        assert state.page_size == 25

    def test_page_always_restarts(self):
        assert from_snapshot({"page": 7}, FilterState()).page == 1

    def test_type_mismatch_field_dropped(self, caplog):
        with caplog.at_level(logging.WARNING):
            state = from_snapshot({"selectedSeverity": "critical", "searchTerm": "ok"})
        assert state.selected_severity == ()
        assert state.search_term == "ok"
        assert "selectedSeverity" in caplog.text

    def test_non_string_items_rejected(self):
        assert from_snapshot({"excludedRegion": ["eu10", 3]}).excluded_region == ()

    def test_duplicates_collapsed(self):
        assert from_snapshot({"excludedRegion": ["a", "b", "a"]}).excluded_region == ("a", "b")

    def test_empty_date_is_none(self):
        assert from_snapshot({"startDate": ""}).start_date is None

    def test_value_in_both_sets_keeps_inclusion(self):
        state = from_snapshot({"selectedRegion": ["eu10"], "excludedRegion": ["eu10", "us10"]})
        assert state.selected_region == ("eu10",)
        assert state.excluded_region == ("us10",)


class TestFilterPersistence:
    def test_save_then_load(self, store):
        p = FilterPersistence(store)
        state = make_state(
            search_term="cpu",
            selected_severity=("critical",),
            excluded_alertname=("DiskFull",),
            start_date="2023-12-01",
            page=3,
        )
        assert p.save(KEY, state) is True
        assert p.load(KEY) == make_state(
            search_term="cpu",
            selected_severity=("critical",),
            excluded_alertname=("DiskFull",),
            start_date="2023-12-01",
        )

    def test_missing_record(self, store):
        assert FilterPersistence(store).load(KEY) is None

    def test_corrupt_json_yields_defaults(self, store, caplog):
        store.set(KEY, "{not json")
        p = FilterPersistence(store)
        with caplog.at_level(logging.WARNING):
            assert p.load(KEY) is None
        assert p.restore(KEY, FilterState(page_size=10)) == FilterState(page_size=10)
        assert "Failed to parse" in caplog.text

    def test_non_object_record(self, store):
        store.set(KEY, json.dumps(["searchTerm", "x"]))
        assert FilterPersistence(store).load(KEY) is None

    def test_store_errors_are_not_raised(self, caplog):
        p = FilterPersistence(BrokenStore())
        with caplog.at_level(logging.WARNING):
            assert p.save(KEY, make_state(search_term="x")) is False
            assert p.restore(KEY) == FilterState()
        assert "Failed to save" in caplog.text


class TestJsonFileStore:
    def test_roundtrip_on_disk(self, tmp_path):
        store = JsonFileStore(tmp_path / "filters")
        p = FilterPersistence(store)
        p.save(storage_key("cis", "active"), make_state(excluded_region=("us10",)))

        path = store.path_for(storage_key("cis", "active"))
        assert path.exists()
        assert json.loads(path.read_text(encoding="utf-8"))["excludedRegion"] == ["us10"]
        assert p.load(storage_key("cis", "active")).excluded_region == ("us10",)

    def test_undecodable_file_falls_back_to_defaults(self, tmp_path, caplog):
        store = JsonFileStore(tmp_path)
        store.path_for(KEY).write_bytes(b'{"searchTerm": "\xff\xfe"}')
        p = FilterPersistence(store)
        with caplog.at_level(logging.WARNING):
            assert p.load(KEY) is None
            assert p.restore(KEY, FilterState(page_size=10)) == FilterState(page_size=10)
        assert "Failed to read" in caplog.text

    def test_engine_starts_over_undecodable_file(self, tmp_path):
        store = JsonFileStore(tmp_path)
        store.path_for(KEY).write_bytes(b"\xff\xfe")
        engine = AlertFilterEngine("cis", InMemoryAlertSource(), store)
        assert engine.state == FilterState()

    def test_missing_file(self, tmp_path):
        assert JsonFileStore(tmp_path).get("nothing") is None

    def test_key_sanitised(self, tmp_path):
        path = JsonFileStore(tmp_path).path_for("triggeredAlertsFilters_a/b c")
        assert path.parent == tmp_path
        assert path.name == "triggeredAlertsFilters_a_b_c.json"

    def test_no_temp_files_left(self, tmp_path):
        store = JsonFileStore(tmp_path)
        store.set("k", "1")
        store.set("k", "2")
        assert [p.name for p in tmp_path.iterdir()] == ["k.json"]
        assert store.get("k") == "2"

"""Tests for src.contracts: Alert, RemoteAlertPage, FilterState data classes."""

from __future__ import annotations

import json

import pytest

from src.contracts.alert import Alert
from src.contracts.enums import AlertStatus, Dimension, ValueState
from src.contracts.filter_state import FilterState
from src.contracts.page import RemoteAlertPage
from src.filters.dimensions import value_state
from tests.conftest import make_alert

# ═══════════════════════════════════════════════════════════════════════════
#  Alert
# ═══════════════════════════════════════════════════════════════════════════


class TestAlert:
    @pytest.fixture
    def payload(self):
        return {
            "fingerprint": "abc123",
            "alertname": "HighCPU",
            "status": "firing",
            "severity": "critical",
            "landscape": "prod",
            "region": "eu10",
            "startsAt": "2026-02-26T10:00:00Z",
            "endsAt": None,
            "labels": {"component": "db", "team": "core"},
            "annotations": {"summary": "CPU above 90%"},
            "createdAt": "2026-02-26T10:00:05Z",
        }

    def test_from_dict(self, payload):
        alert = Alert.from_dict(payload)
        assert alert.fingerprint == "abc123"
        assert alert.starts_at == "2026-02-26T10:00:00Z"
        assert alert.ends_at is None
        assert alert.component == "db"
        assert alert.annotations["summary"] == "CPU above 90%"

    def test_explicit_component_wins_over_label(self, payload):
        payload["component"] = "api"
        assert Alert.from_dict(payload).component == "api"

    def test_to_dict_is_json_serialisable(self, payload):
        d = Alert.from_dict(payload).to_dict()
        assert json.loads(json.dumps(d))["startsAt"] == "2026-02-26T10:00:00Z"
        assert Alert.from_dict(d) == Alert.from_dict(payload)

    def test_missing_fields_default_to_empty(self):
        alert = Alert.from_dict({"fingerprint": "x"})
        assert alert.alertname == ""
        assert alert.display_component == "N/A"

    @pytest.mark.parametrize("status, firing", [("firing", True), ("FIRING", True), ("resolved", False)])
    def test_is_firing(self, status, firing):
        assert make_alert(status=status).is_firing is firing

    def test_status_enum_values(self):
        assert make_alert(status=AlertStatus.RESOLVED.value).is_firing is False


# ═══════════════════════════════════════════════════════════════════════════
#  RemoteAlertPage
# ═══════════════════════════════════════════════════════════════════════════


class TestRemoteAlertPage:
    def test_total_pages_derived(self):
        page = RemoteAlertPage.from_payload({"data": [], "page": 1, "pageSize": 50, "totalCount": 101})
        assert page.total_pages == 3

    def test_total_pages_from_payload(self):
        page = RemoteAlertPage.from_payload({"data": [], "pageSize": 50, "totalCount": 0, "totalPages": 0})
        assert page.total_pages == 0
        assert not page.has_next_page

    def test_empty(self):
        page = RemoteAlertPage.empty(3, 25)
        assert (page.page, page.page_size, page.total_count) == (3, 25, 0)
        assert page.alerts == []
        assert page.has_previous_page


# ═══════════════════════════════════════════════════════════════════════════
#  FilterState
# ═══════════════════════════════════════════════════════════════════════════


class TestFilterState:
    def test_defaults(self):
        state = FilterState()
        assert state.page == 1
        assert state.page_size == 50
        assert not state.has_filters
        assert not state.has_date_range

    def test_pagination_is_not_a_filter(self):
        assert not FilterState(page=3, page_size=10).has_filters

    @pytest.mark.parametrize(
        "overrides",
        [{"search_term": "x"}, {"excluded_region": ("eu10",)}, {"end_date": "2023-12-01"}],
    )
    def test_has_filters(self, overrides):
        assert FilterState(**overrides).has_filters

    def test_frozen(self):
        with pytest.raises(AttributeError):
            FilterState().page = 2  # type: ignore[misc]


class TestValueState:
    def test_three_states(self):
        state = FilterState(selected_severity=("critical",), excluded_severity=("info",))
        assert value_state(state, Dimension.SEVERITY, "critical") is ValueState.INCLUDED
        assert value_state(state, Dimension.SEVERITY, "info") is ValueState.EXCLUDED
        assert value_state(state, Dimension.SEVERITY, "warning") is ValueState.NEUTRAL

    def test_alertname_included_through_search(self):
        state = FilterState(search_term="HighCPU", excluded_alertname=("DiskFull",))
        assert value_state(state, Dimension.ALERTNAME, "HighCPU") is ValueState.INCLUDED
        assert value_state(state, Dimension.ALERTNAME, "DiskFull") is ValueState.EXCLUDED

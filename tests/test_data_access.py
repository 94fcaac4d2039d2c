"""Tests for src.dashboard.data_access."""

from __future__ import annotations

import pandas as pd

from src.dashboard.data_access import DISPLAY_COLUMNS, alerts_to_frame, severity_counts
from tests.conftest import make_alert


class TestAlertsToFrame:
    def test_empty(self):
        df = alerts_to_frame([])
        assert df.empty
        assert list(df.columns) == DISPLAY_COLUMNS

    def test_keeps_order_and_parses_times(self, sample_alerts):
        df = alerts_to_frame(sample_alerts)
        assert list(df["Fingerprint"]) == [a.fingerprint for a in sample_alerts]
        assert df["Started"].iloc[0] == pd.Timestamp("2026-02-26T10:05:00Z")
        assert pd.isna(df["Ended"].iloc[0])
        assert df["Ended"].iloc[1] == pd.Timestamp("2026-02-26T10:15:00Z")

    def test_component_fallback(self):
        df = alerts_to_frame([make_alert(component=None), make_alert(component="db")])
        assert list(df["Component"]) == ["N/A", "db"]


class TestSeverityCounts:
    def test_counts(self, sample_alerts):
        assert severity_counts(sample_alerts) == {"critical": 2, "warning": 2, "info": 1}

    def test_empty(self):
        assert severity_counts([]) == {}

"""Шар підготовки даних: alerts → pandas DataFrame для таблиці."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import pandas as pd

from src.contracts.alert import Alert

log = logging.getLogger(__name__)

# columns to display (in order)
DISPLAY_COLUMNS = [
    "Status",
    "Severity",
    "Alert",
    "Landscape",
    "Region",
    "Component",
    "Started",
    "Ended",
    "Fingerprint",
]


def alerts_to_frame(alerts: Sequence[Alert]) -> pd.DataFrame:
    """Перетворює список оповіщень на DataFrame, зберігаючи порядок.

    ``Ended`` is NaT for alerts that are still open.
    """
    if not alerts:
        return pd.DataFrame(columns=DISPLAY_COLUMNS)

    df = pd.DataFrame(
        {
            "Status": [a.status for a in alerts],
            "Severity": [a.severity for a in alerts],
            "Alert": [a.alertname for a in alerts],
            "Landscape": [a.landscape for a in alerts],
            "Region": [a.region for a in alerts],
            "Component": [a.display_component for a in alerts],
            "Started": [a.starts_at for a in alerts],
            "Ended": [a.ends_at for a in alerts],
            "Fingerprint": [a.fingerprint for a in alerts],
        }
    )
    for col in ("Started", "Ended"):
        df[col] = pd.to_datetime(df[col], utc=True, errors="coerce", format="ISO8601")
    return df[DISPLAY_COLUMNS]


def severity_counts(alerts: Sequence[Alert]) -> dict[str, int]:
    """Кількість оповіщень за severity на поточній сторінці."""
    if not alerts:
        return {}
    counts = pd.Series([a.severity for a in alerts]).value_counts()
    return {str(k): int(v) for k, v in counts.items()}

"""Canonical enumerations shared by the filter engine and its hosts."""

from __future__ import annotations

from enum import Enum


class Dimension(str, Enum):
    """Alert fields the user can filter on."""

    SEVERITY = "severity"
    STATUS = "status"
    LANDSCAPE = "landscape"
    REGION = "region"
    ALERTNAME = "alertname"


class AlertStatus(str, Enum):
    FIRING = "firing"
    RESOLVED = "resolved"


class ValueState(str, Enum):
    """Three-state view of one value within one dimension."""

    INCLUDED = "included"
    EXCLUDED = "excluded"
    NEUTRAL = "neutral"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

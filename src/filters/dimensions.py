"""Dimension table — one row per filterable alert field.

Every per-dimension behaviour (which FilterState attributes hold the
inclusion and exclusion sets, which alert field is matched, which query
parameter carries it, how chips are labelled) is looked up here instead of
being spelled out per dimension.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.contracts.enums import Dimension, ValueState
from src.contracts.filter_state import FilterState


@dataclass(frozen=True, slots=True)
class DimensionSpec:
    dimension: Dimension
    label: str  # chip / sidebar label
    alert_field: str  # attribute on Alert
    excluded_attr: str  # attribute on FilterState
    selected_attr: str | None = None  # None = no inclusion set
    remote_param: str | None = None  # RemoteQuery field for the inclusion set

    @property
    def has_inclusion(self) -> bool:
        return self.selected_attr is not None

    def selected(self, state: FilterState) -> tuple[str, ...]:
        if self.selected_attr is None:
            return ()
        return getattr(state, self.selected_attr)

    def excluded(self, state: FilterState) -> tuple[str, ...]:
        return getattr(state, self.excluded_attr)


DIMENSIONS: dict[Dimension, DimensionSpec] = {
    Dimension.SEVERITY: DimensionSpec(
        dimension=Dimension.SEVERITY,
        label="Severity",
        alert_field="severity",
        selected_attr="selected_severity",
        excluded_attr="excluded_severity",
        remote_param="severity",
    ),
    Dimension.STATUS: DimensionSpec(
        dimension=Dimension.STATUS,
        label="Status",
        alert_field="status",
        selected_attr="selected_status",
        excluded_attr="excluded_status",
        remote_param="status",
    ),
    Dimension.LANDSCAPE: DimensionSpec(
        dimension=Dimension.LANDSCAPE,
        label="Landscape",
        alert_field="landscape",
        selected_attr="selected_landscape",
        excluded_attr="excluded_landscape",
        remote_param="landscape",
    ),
    Dimension.REGION: DimensionSpec(
        dimension=Dimension.REGION,
        label="Region",
        alert_field="region",
        selected_attr="selected_region",
        excluded_attr="excluded_region",
        remote_param="region",
    ),
    # Alert names are included through the free-text search term.
    Dimension.ALERTNAME: DimensionSpec(
        dimension=Dimension.ALERTNAME,
        label="Alert",
        alert_field="alertname",
        excluded_attr="excluded_alertname",
    ),
}

# Table order drives chip order and query parameter order.
ALL_DIMENSIONS: tuple[Dimension, ...] = tuple(DIMENSIONS)
INCLUSION_DIMENSIONS: tuple[Dimension, ...] = tuple(
    d for d, spec in DIMENSIONS.items() if spec.has_inclusion
)

# FilterState attribute → persisted snapshot key
SNAPSHOT_KEYS: dict[str, str] = {
    "search_term": "searchTerm",
    "selected_severity": "selectedSeverity",
    "selected_status": "selectedStatus",
    "selected_landscape": "selectedLandscape",
    "selected_region": "selectedRegion",
    "excluded_severity": "excludedSeverity",
    "excluded_status": "excludedStatus",
    "excluded_landscape": "excludedLandscape",
    "excluded_region": "excludedRegion",
    "excluded_alertname": "excludedAlertname",
    "start_date": "startDate",
    "end_date": "endDate",
}


def visible_dimensions(*, expose_status: bool = False) -> tuple[Dimension, ...]:
    """Dimensions a hosting view shows.

    Status is a fixed partition by default and only becomes a user-facing
    dimension when the view asks for it.
    """
    if expose_status:
        return ALL_DIMENSIONS
    return tuple(d for d in ALL_DIMENSIONS if d is not Dimension.STATUS)


def value_state(state: FilterState, dimension: Dimension, value: str) -> ValueState:
    """Collapse the inclusion/exclusion pair back into one enumeration."""
    spec = DIMENSIONS[dimension]
    if spec.has_inclusion:
        if value in spec.selected(state):
            return ValueState.INCLUDED
    elif state.search_term and state.search_term == value:
        return ValueState.INCLUDED
    if value in spec.excluded(state):
        return ValueState.EXCLUDED
    return ValueState.NEUTRAL

"""Applied-Filter Summarizer — FilterState → removable chips.

Chip order is fixed so the chip row does not jump around between
reruns: search, inclusions per dimension, date range, exclusions per
dimension.
"""

from __future__ import annotations

from collections.abc import Iterable
from functools import partial
from typing import Protocol

from src.contracts.applied_filter import AppliedFilter
from src.contracts.enums import Dimension
from src.contracts.filter_state import FilterState
from src.filters.dates import format_day
from src.filters.dimensions import ALL_DIMENSIONS, DIMENSIONS


class ActionBindings(Protocol):
    def set_inclusion(self, dimension: Dimension, values: Iterable[str]) -> object: ...

    def remove_exclusion(self, dimension: Dimension, value: str) -> object: ...

    def clear_search_term(self) -> object: ...

    def clear_date_range(self) -> object: ...


def date_range_label(start_date: str | None, end_date: str | None) -> str | None:
    """Label for the date chip, or None when neither bound parses."""
    start = format_day(start_date)
    end = format_day(end_date)
    if start and end:
        return f"Date: {start} - {end}"
    if start:
        return f"Date: From {start}"
    if end:
        return f"Date: Until {end}"
    return None


def summarize(
    state: FilterState,
    actions: ActionBindings,
    dimensions: Iterable[Dimension] = ALL_DIMENSIONS,
) -> list[AppliedFilter]:
    dims = tuple(dimensions)
    chips: list[AppliedFilter] = []

    if state.search_term:
        chips.append(
            AppliedFilter(
                key="search",
                label=f'Search: "{state.search_term}"',
                on_remove=actions.clear_search_term,
            )
        )

    for dim in dims:
        spec = DIMENSIONS[dim]
        selected = spec.selected(state)
        for idx, value in enumerate(selected):
            remaining = tuple(v for v in selected if v != value)
            chips.append(
                AppliedFilter(
                    key=f"{dim.value}-{idx}",
                    label=f"{spec.label}: {value}",
                    on_remove=partial(actions.set_inclusion, dim, remaining),
                )
            )

    label = date_range_label(state.start_date, state.end_date) if state.has_date_range else None
    if label is not None:
        chips.append(
            AppliedFilter(key="dateRange", label=label, on_remove=actions.clear_date_range)
        )

    for dim in dims:
        spec = DIMENSIONS[dim]
        for idx, value in enumerate(spec.excluded(state)):
            chips.append(
                AppliedFilter(
                    key=f"excluded-{dim.value}-{idx}",
                    label=f"Not: {value}",
                    on_remove=partial(actions.remove_exclusion, dim, value),
                    is_exclusion=True,
                )
            )

    return chips

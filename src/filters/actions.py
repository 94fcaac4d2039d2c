"""FilterActions: one bound callback per reducer action.

Hosting views call these instead of building action objects by hand.
Each method dispatches exactly one action and returns the committed
state.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import date

from src.contracts.enums import Dimension
from src.contracts.filter_state import FilterState
from src.filters.dates import day_string
from src.filters.reducer import (
    ClearDateRange,
    ClearExclusions,
    ClearInclusion,
    FilterAction,
    RemoveExclusion,
    ResetAll,
    SetDateRange,
    SetEndDate,
    SetInclusion,
    SetPage,
    SetPageSize,
    SetSearchTerm,
    SetStartDate,
    ToggleExclusion,
)

Dispatch = Callable[[FilterAction], FilterState]


class FilterActions:
    def __init__(
        self,
        dispatch: Dispatch,
        get_state: Callable[[], FilterState],
        defaults: FilterState | None = None,
    ) -> None:
        self._dispatch = dispatch
        self._get_state = get_state
        self._defaults = defaults

    # -- inclusion --

    def set_inclusion(self, dimension: Dimension, values: Iterable[str]) -> FilterState:
        return self._dispatch(SetInclusion(Dimension(dimension), tuple(values)))

    def clear_inclusion(self, dimension: Dimension) -> FilterState:
        return self._dispatch(ClearInclusion(Dimension(dimension)))

    # -- exclusion --

    def toggle_exclusion(self, dimension: Dimension, value: str) -> FilterState:
        return self._dispatch(ToggleExclusion(Dimension(dimension), value))

    def remove_exclusion(self, dimension: Dimension, value: str) -> FilterState:
        return self._dispatch(RemoveExclusion(Dimension(dimension), value))

    def clear_exclusions(self, dimension: Dimension) -> FilterState:
        return self._dispatch(ClearExclusions(Dimension(dimension)))

    # -- search --

    def set_search_term(self, term: str) -> FilterState:
        return self._dispatch(SetSearchTerm(term))

    def clear_search_term(self) -> FilterState:
        return self._dispatch(SetSearchTerm(""))

    # -- dates --

    def set_date_range(self, start: str | None, end: str | None) -> FilterState:
        return self._dispatch(SetDateRange(start, end))

    def select_date_range(self, start: date | None, end: date | None) -> FilterState:
        """Date-picker variant: takes calendar days, stores ``YYYY-MM-DD``."""
        return self._dispatch(SetDateRange(day_string(start), day_string(end)))

    def set_start_date(self, value: str | None) -> FilterState:
        return self._dispatch(SetStartDate(value))

    def set_end_date(self, value: str | None) -> FilterState:
        return self._dispatch(SetEndDate(value))

    def clear_date_range(self) -> FilterState:
        return self._dispatch(ClearDateRange())

    # -- pagination --

    def set_page(self, page: int) -> FilterState:
        return self._dispatch(SetPage(page))

    def next_page(self) -> FilterState:
        return self._dispatch(SetPage(self._get_state().page + 1))

    def previous_page(self) -> FilterState:
        return self._dispatch(SetPage(max(1, self._get_state().page - 1)))

    def set_page_size(self, page_size: int) -> FilterState:
        return self._dispatch(SetPageSize(page_size))

    # -- everything --

    def reset_all(self) -> FilterState:
        return self._dispatch(ResetAll(self._defaults))

"""Filter State Reducer — pure state machine over FilterState.

``reduce(state, action)`` never mutates *state* and never raises.  The
action set is closed: every variant is a frozen dataclass defined below
and handled by exactly one function in ``_HANDLERS``.

Conflict rules
──────────────
  SetInclusion    : values newly included are dropped from the exclusion set
  ToggleExclusion : on an included value: stop including it, do NOT exclude it
  SetSearchTerm   : searching for an excluded alert name drops that exclusion

Every action except SetPage sends the cursor back to page 1.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from typing import Union

from src.contracts.enums import Dimension
from src.contracts.filter_state import MAX_PAGE_SIZE, FilterState
from src.filters.dimensions import DIMENSIONS

log = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
#  Actions
# ═══════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class SetInclusion:
    dimension: Dimension
    values: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class ClearInclusion:
    dimension: Dimension


@dataclass(frozen=True, slots=True)
class ToggleExclusion:
    dimension: Dimension
    value: str


@dataclass(frozen=True, slots=True)
class RemoveExclusion:
    dimension: Dimension
    value: str


@dataclass(frozen=True, slots=True)
class ClearExclusions:
    dimension: Dimension


@dataclass(frozen=True, slots=True)
class SetSearchTerm:
    term: str


@dataclass(frozen=True, slots=True)
class SetDateRange:
    start: str | None = None
    end: str | None = None


@dataclass(frozen=True, slots=True)
class SetStartDate:
    value: str | None


@dataclass(frozen=True, slots=True)
class SetEndDate:
    value: str | None


@dataclass(frozen=True, slots=True)
class ClearDateRange:
    pass


@dataclass(frozen=True, slots=True)
class SetPage:
    page: int


@dataclass(frozen=True, slots=True)
class SetPageSize:
    page_size: int


@dataclass(frozen=True, slots=True)
class ResetAll:
    defaults: FilterState | None = None  # None = FilterState()


FilterAction = Union[
    SetInclusion,
    ClearInclusion,
    ToggleExclusion,
    RemoveExclusion,
    ClearExclusions,
    SetSearchTerm,
    SetDateRange,
    SetStartDate,
    SetEndDate,
    ClearDateRange,
    SetPage,
    SetPageSize,
    ResetAll,
]


# ═══════════════════════════════════════════════════════════════════════════
#  Helpers
# ═══════════════════════════════════════════════════════════════════════════


def _unique(values: Iterable[str]) -> tuple[str, ...]:
    """Deduplicate while keeping first-seen order."""
    return tuple(dict.fromkeys(str(v) for v in values))


def _without(values: tuple[str, ...], drop: Iterable[str]) -> tuple[str, ...]:
    dropped = set(drop)
    return tuple(v for v in values if v not in dropped)


def _bound(value: str | None) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _clamp(value: object, low: int, high: int | None, fallback: int) -> int:
    try:
        n = int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        return fallback
    n = max(low, n)
    return min(n, high) if high is not None else n


# ═══════════════════════════════════════════════════════════════════════════
#  Handlers
# ═══════════════════════════════════════════════════════════════════════════


def _set_inclusion(state: FilterState, action: SetInclusion) -> FilterState:
    spec = DIMENSIONS[action.dimension]
    if spec.selected_attr is None:
        return replace(state, page=1)
    values = _unique(action.values)
    return replace(
        state,
        **{
            spec.selected_attr: values,
            spec.excluded_attr: _without(spec.excluded(state), values),
        },
        page=1,
    )


def _clear_inclusion(state: FilterState, action: ClearInclusion) -> FilterState:
    spec = DIMENSIONS[action.dimension]
    if spec.selected_attr is None:
        return replace(state, page=1)
    return replace(state, **{spec.selected_attr: ()}, page=1)


def _toggle_exclusion(state: FilterState, action: ToggleExclusion) -> FilterState:
    spec = DIMENSIONS[action.dimension]
    value = str(action.value)

    # Un-including is "stop caring", not "actively hide".
    if spec.selected_attr is not None and value in spec.selected(state):
        return replace(
            state,
            **{spec.selected_attr: _without(spec.selected(state), [value])},
            page=1,
        )
    if spec.selected_attr is None and state.search_term and state.search_term == value:
        return replace(state, search_term="", page=1)

    excluded = spec.excluded(state)
    if value in excluded:
        excluded = _without(excluded, [value])
    else:
        excluded = excluded + (value,)
    return replace(state, **{spec.excluded_attr: excluded}, page=1)


def _remove_exclusion(state: FilterState, action: RemoveExclusion) -> FilterState:
    spec = DIMENSIONS[action.dimension]
    return replace(
        state,
        **{spec.excluded_attr: _without(spec.excluded(state), [str(action.value)])},
        page=1,
    )


def _clear_exclusions(state: FilterState, action: ClearExclusions) -> FilterState:
    spec = DIMENSIONS[action.dimension]
    return replace(state, **{spec.excluded_attr: ()}, page=1)


def _set_search_term(state: FilterState, action: SetSearchTerm) -> FilterState:
    term = action.term or ""
    excluded = state.excluded_alertname
    if term and term in excluded:
        excluded = _without(excluded, [term])
    return replace(state, search_term=term, excluded_alertname=excluded, page=1)


def _set_date_range(state: FilterState, action: SetDateRange) -> FilterState:
    return replace(
        state,
        start_date=_bound(action.start),
        end_date=_bound(action.end),
        page=1,
    )


def _set_start_date(state: FilterState, action: SetStartDate) -> FilterState:
    return replace(state, start_date=_bound(action.value), page=1)


def _set_end_date(state: FilterState, action: SetEndDate) -> FilterState:
    return replace(state, end_date=_bound(action.value), page=1)


def _clear_date_range(state: FilterState, action: ClearDateRange) -> FilterState:
    return replace(state, start_date=None, end_date=None, page=1)


def _set_page(state: FilterState, action: SetPage) -> FilterState:
    return replace(state, page=_clamp(action.page, 1, None, state.page))


def _set_page_size(state: FilterState, action: SetPageSize) -> FilterState:
    size = _clamp(action.page_size, 1, MAX_PAGE_SIZE, state.page_size)
    return replace(state, page_size=size, page=1)


def _reset_all(state: FilterState, action: ResetAll) -> FilterState:
    defaults = action.defaults if action.defaults is not None else FilterState()
    return replace(defaults, page=1)


_HANDLERS: dict[type, Callable[[FilterState, object], FilterState]] = {
    SetInclusion: _set_inclusion,
    ClearInclusion: _clear_inclusion,
    ToggleExclusion: _toggle_exclusion,
    RemoveExclusion: _remove_exclusion,
    ClearExclusions: _clear_exclusions,
    SetSearchTerm: _set_search_term,
    SetDateRange: _set_date_range,
    SetStartDate: _set_start_date,
    SetEndDate: _set_end_date,
    ClearDateRange: _clear_date_range,
    SetPage: _set_page,
    SetPageSize: _set_page_size,
    ResetAll: _reset_all,
}


# ═══════════════════════════════════════════════════════════════════════════
#  Public API
# ═══════════════════════════════════════════════════════════════════════════


def reduce(state: FilterState, action: FilterAction) -> FilterState:
    """Apply *action* to *state* and return the next state."""
    handler = _HANDLERS.get(type(action))
    if handler is None:
        log.warning("Ignoring unknown filter action %r", action)
        return state
    return handler(state, action)

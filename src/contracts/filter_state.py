"""FilterState — the structured filter selection owned by one alerts view."""

from __future__ import annotations

from dataclasses import dataclass, fields

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100

# Fields that describe the pagination cursor rather than the filter itself.
PAGINATION_FIELDS: frozenset[str] = frozenset({"page", "page_size"})


@dataclass(frozen=True, slots=True)
class FilterState:
    """Immutable filter selection.

    Value sets are tuples of unique strings kept in insertion order, so
    chips and query parameters come out in the same order on every pass.
    Only the reducer produces new instances.
    """

    search_term: str = ""

    # ── inclusion: "show only these" ──
    selected_severity: tuple[str, ...] = ()
    selected_status: tuple[str, ...] = ()
    selected_landscape: tuple[str, ...] = ()
    selected_region: tuple[str, ...] = ()

    # ── exclusion: "hide these" ──
    excluded_severity: tuple[str, ...] = ()
    excluded_status: tuple[str, ...] = ()
    excluded_landscape: tuple[str, ...] = ()
    excluded_region: tuple[str, ...] = ()
    excluded_alertname: tuple[str, ...] = ()

    # ── time window (ISO date or datetime strings) ──
    start_date: str | None = None
    end_date: str | None = None

    # ── pagination ──
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def has_filters(self) -> bool:
        """True when anything other than pagination differs from defaults."""
        for f in fields(self):
            if f.name in PAGINATION_FIELDS:
                continue
            if getattr(self, f.name) != f.default:
                return True
        return False

    @property
    def has_date_range(self) -> bool:
        return bool(self.start_date or self.end_date)

"""Client-side post-filter and sorter.

The storage API cannot negate, so exclusion sets are applied here to the
page it returned.  The result is then put into display order: firing
alerts first, newest first inside each group, input order on ties.

``match_locally=True`` also evaluates the predicates the API normally
handles (inclusion sets, time window, free-text search) for sources that
return everything unfiltered.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Sequence

from src.contracts.alert import Alert
from src.contracts.enums import Dimension, SortDirection
from src.contracts.filter_state import FilterState
from src.contracts.page import RemoteAlertPage
from src.filters.dates import epoch, parse_bound, parse_timestamp
from src.filters.dimensions import ALL_DIMENSIONS, DIMENSIONS

log = logging.getLogger(__name__)

SEVERITY_ORDER = {"critical": 3, "warning": 2, "info": 1}

_NEG_INF = float("-inf")


# ═══════════════════════════════════════════════════════════════════════════
#  Predicates
# ═══════════════════════════════════════════════════════════════════════════


def is_excluded(
    alert: Alert,
    state: FilterState,
    dimensions: Iterable[Dimension] = ALL_DIMENSIONS,
) -> bool:
    """Exact, case-sensitive match against every exclusion set."""
    for dim in dimensions:
        spec = DIMENSIONS[dim]
        excluded = spec.excluded(state)
        if excluded and getattr(alert, spec.alert_field) in excluded:
            return True
    return False


def matches_inclusions(
    alert: Alert,
    state: FilterState,
    dimensions: Iterable[Dimension] = ALL_DIMENSIONS,
) -> bool:
    for dim in dimensions:
        spec = DIMENSIONS[dim]
        selected = spec.selected(state)
        if selected and getattr(alert, spec.alert_field) not in selected:
            return False
    return True


def matches_date_range(alert: Alert, state: FilterState) -> bool:
    """Inclusive window on ``starts_at``; unparsable bounds are ignored."""
    start = parse_bound(state.start_date)
    end = parse_bound(state.end_date, end_of_day=True)
    if start is None and end is None:
        return True
    started = parse_timestamp(alert.starts_at)
    if started is None:
        return False
    if start is not None and started < start:
        return False
    if end is not None and started > end:
        return False
    return True


def matches_search(alert: Alert, state: FilterState) -> bool:
    if not state.search_term:
        return True
    needle = state.search_term.lower()
    return any(
        needle in (value or "").lower()
        for value in (alert.alertname, alert.landscape, alert.severity, alert.status)
    )


# ═══════════════════════════════════════════════════════════════════════════
#  Ordering
# ═══════════════════════════════════════════════════════════════════════════


def _display_key(alert: Alert) -> tuple[int, float]:
    # Unparsable starts_at sorts last within its group.
    return (0 if alert.is_firing else 1, -epoch(alert.starts_at, _NEG_INF))


def sort_for_display(alerts: Iterable[Alert]) -> list[Alert]:
    return sorted(alerts, key=_display_key)


def dedupe(alerts: Iterable[Alert]) -> list[Alert]:
    """Keep the first alert per fingerprint; blank fingerprints are kept."""
    seen: set[str] = set()
    result: list[Alert] = []
    for alert in alerts:
        if alert.fingerprint:
            if alert.fingerprint in seen:
                continue
            seen.add(alert.fingerprint)
        result.append(alert)
    return result


def sort_alerts(
    alerts: Sequence[Alert],
    field: str,
    direction: SortDirection | str = SortDirection.ASC,
) -> list[Alert]:
    """Column sort for the alert table.

    An alert without ``ends_at`` is still open, so it sorts as ending now.
    Unknown *field* returns the input order.
    """
    now = time.time()
    keys = {
        "alertname": lambda a: a.alertname.lower(),
        "severity": lambda a: SEVERITY_ORDER.get(a.severity.lower(), 0),
        "startsAt": lambda a: epoch(a.starts_at, _NEG_INF),
        "endsAt": lambda a: epoch(a.ends_at, now) if a.ends_at else now,
        "status": lambda a: (a.status or "").lower(),
        "landscape": lambda a: (a.landscape or "").lower(),
        "region": lambda a: (a.region or "").lower(),
    }
    key = keys.get(field)
    if key is None:
        return list(alerts)
    reverse = SortDirection(direction) is SortDirection.DESC
    return sorted(alerts, key=key, reverse=reverse)


# ═══════════════════════════════════════════════════════════════════════════
#  Public API
# ═══════════════════════════════════════════════════════════════════════════


def apply(
    page: RemoteAlertPage | Sequence[Alert] | None,
    state: FilterState,
    *,
    dimensions: Iterable[Dimension] = ALL_DIMENSIONS,
    match_locally: bool = False,
) -> list[Alert]:
    """Filter and order one fetched page.

    Idempotent: feeding the output back in with the same state returns the
    same list.
    """
    if page is None:
        return []
    alerts = page.alerts if isinstance(page, RemoteAlertPage) else list(page)
    dims = tuple(dimensions)

    kept: list[Alert] = []
    for alert in dedupe(alerts):
        if is_excluded(alert, state, dims):
            continue
        if match_locally and not (
            matches_inclusions(alert, state, dims)
            and matches_date_range(alert, state)
            and matches_search(alert, state)
        ):
            continue
        kept.append(alert)

    if len(kept) != len(alerts):
        log.debug("Post-filter kept %d of %d alerts", len(kept), len(alerts))
    return sort_for_display(kept)

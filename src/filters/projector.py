"""Query Projector — FilterState → RemoteQuery.

Only what the alert storage API can filter on natively is projected:
inclusion lists, the alert-name search, the time window and the page
cursor.  Exclusion sets stay on the client (the API has no negation).
"""

from __future__ import annotations

from collections.abc import Sequence

from src.contracts.filter_state import FilterState
from src.contracts.query import RemoteQuery
from src.filters.dates import parse_bound, to_iso_utc
from src.filters.dimensions import DIMENSIONS


def _joined(values: Sequence[str]) -> str | None:
    return ",".join(values) if values else None


def project(
    state: FilterState,
    status_partition: Sequence[str] | None = None,
) -> RemoteQuery:
    """Map *state* onto query parameters.

    A non-empty *status_partition* (e.g. ``["firing"]`` for an "active
    alerts" view) replaces whatever status the user selected.
    """
    fields: dict[str, object] = {}
    for spec in DIMENSIONS.values():
        if spec.remote_param is None:
            continue
        fields[spec.remote_param] = _joined(spec.selected(state))

    if status_partition:
        fields["status"] = _joined(list(status_partition))

    start = parse_bound(state.start_date)
    end = parse_bound(state.end_date, end_of_day=True)

    return RemoteQuery(
        page=state.page,
        page_size=state.page_size,
        alertname=state.search_term.strip() or None,
        start_time=to_iso_utc(start) if start is not None else None,
        end_time=to_iso_utc(end) if end is not None else None,
        **fields,
    )

"""In-memory alert source with the storage API's query semantics.

Inclusion parameters are comma-separated "any of" lists, ``alertname`` is
a case-insensitive substring match, ``start_time``/``end_time`` bound
``starts_at`` inclusively.  Results come back in storage order (newest
first) and are paginated with the API defaults.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from src.contracts.alert import Alert
from src.contracts.page import RemoteAlertPage
from src.contracts.query import RemoteQuery
from src.filters.dates import epoch, parse_timestamp
from src.sources.remote import OPTION_KEYS

_LIST_PARAMS = ("severity", "status", "landscape", "region")


def _split(value: str | None) -> set[str]:
    if not value:
        return set()
    return {part.strip() for part in value.split(",") if part.strip()}


class InMemoryAlertSource:
    def __init__(self, alerts: Iterable[Alert] = ()) -> None:
        self.alerts: list[Alert] = list(alerts)
        self.queries: list[RemoteQuery] = []  # every query served, oldest first

    def _matches(self, alert: Alert, query: RemoteQuery) -> bool:
        for param in _LIST_PARAMS:
            wanted = _split(getattr(query, param))
            if wanted and getattr(alert, param) not in wanted:
                return False
        if query.alertname and query.alertname.lower() not in alert.alertname.lower():
            return False
        started = parse_timestamp(alert.starts_at)
        start = parse_timestamp(query.start_time)
        end = parse_timestamp(query.end_time)
        if (start or end) and started is None:
            return False
        if start is not None and started < start:
            return False
        if end is not None and started > end:
            return False
        return True

    async def fetch(self, query: RemoteQuery) -> RemoteAlertPage | None:
        self.queries.append(query)
        matched = [a for a in self.alerts if self._matches(a, query)]
        matched.sort(key=lambda a: epoch(a.starts_at, float("-inf")), reverse=True)

        page_size = max(1, query.page_size)
        page = max(1, query.page)
        offset = (page - 1) * page_size
        return RemoteAlertPage(
            alerts=matched[offset:offset + page_size],
            page=page,
            page_size=page_size,
            total_count=len(matched),
            total_pages=math.ceil(len(matched) / page_size),
        )

    async def fetch_filter_options(self) -> dict[str, list[str]]:
        return {
            key: sorted({getattr(a, key) for a in self.alerts if getattr(a, key)})
            for key in OPTION_KEYS
        }

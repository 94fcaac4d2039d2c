"""RemoteAlertPage: one page of alerts plus pagination metadata."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from src.contracts.alert import Alert


@dataclass(slots=True)
class RemoteAlertPage:
    alerts: list[Alert] = field(default_factory=list)
    page: int = 1
    page_size: int = 0
    total_count: int = 0
    total_pages: int = 0

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self.page > 1

    @classmethod
    def empty(cls, page: int = 1, page_size: int = 0) -> RemoteAlertPage:
        return cls(alerts=[], page=page, page_size=page_size)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> RemoteAlertPage:
        """Build a page from the storage API response body.

        ``totalPages`` is derived from ``totalCount`` when the backend
        omits it.
        """
        items = payload.get("data") or []
        alerts = [Alert.from_dict(item) for item in items if isinstance(item, dict)]
        page = int(payload.get("page") or 1)
        page_size = int(payload.get("pageSize") or len(alerts))
        total_count = int(payload.get("totalCount") or len(alerts))
        total_pages = payload.get("totalPages")
        if total_pages is None:
            total_pages = math.ceil(total_count / page_size) if page_size else 0
        return cls(
            alerts=alerts,
            page=page,
            page_size=page_size,
            total_count=total_count,
            total_pages=int(total_pages),
        )

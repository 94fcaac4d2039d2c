"""RemoteQuery — the subset of a FilterState the alert storage API understands."""

from __future__ import annotations

from dataclasses import dataclass

# wire name for each optional field, in the order the API client sends them
QUERY_PARAM_NAMES: dict[str, str] = {
    "page": "page",
    "page_size": "pageSize",
    "severity": "severity",
    "region": "region",
    "landscape": "landscape",
    "status": "status",
    "alertname": "alertname",
    "start_time": "start_time",
    "end_time": "end_time",
}


@dataclass(frozen=True, slots=True)
class RemoteQuery:
    """Hashable query projection; equal queries never trigger a refetch."""

    page: int = 1
    page_size: int = 50
    severity: str | None = None  # comma-joined
    region: str | None = None
    landscape: str | None = None
    status: str | None = None
    alertname: str | None = None  # name-contains
    start_time: str | None = None  # ISO-8601 UTC
    end_time: str | None = None

    def to_params(self) -> dict[str, str]:
        """Return the query-string parameters, skipping unset fields."""
        params: dict[str, str] = {}
        for attr, wire in QUERY_PARAM_NAMES.items():
            value = getattr(self, attr)
            if value is None or value == "":
                continue
            params[wire] = str(value)
        return params

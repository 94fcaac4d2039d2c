"""Модель спрацьованого оповіщення (Triggered Alert)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from src.contracts.enums import AlertStatus


@dataclass(slots=True)
class Alert:
    """One triggered alert as returned by the alert storage API."""

    fingerprint: str  # unique id
    alertname: str
    status: str  # firing | resolved
    severity: str  # critical | warning | info
    landscape: str
    region: str
    starts_at: str  # ISO-8601
    ends_at: str | None = None  # None = still open
    component: str | None = None
    labels: dict[str, Any] = field(default_factory=dict)
    annotations: dict[str, Any] = field(default_factory=dict)
    created_at: str = ""
    updated_at: str = ""

    @property
    def is_firing(self) -> bool:
        return self.status.lower() == AlertStatus.FIRING.value

    @property
    def display_component(self) -> str:
        return self.component or "N/A"

    # ── serialisation ─────────────────────────────────────────────────────

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Alert:
        """Build an Alert from a storage API payload (camelCase keys)."""
        labels = data.get("labels") or {}
        component = data.get("component") or labels.get("component")
        return cls(
            fingerprint=str(data.get("fingerprint", "")),
            alertname=str(data.get("alertname", "")),
            status=str(data.get("status", "")),
            severity=str(data.get("severity", "")),
            landscape=str(data.get("landscape", "")),
            region=str(data.get("region", "")),
            starts_at=str(data.get("startsAt", "")),
            ends_at=data.get("endsAt") or None,
            component=str(component) if component else None,
            labels=dict(labels),
            annotations=dict(data.get("annotations") or {}),
            created_at=str(data.get("createdAt", "")),
            updated_at=str(data.get("updatedAt", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the camelCase payload shape used by the storage API."""
        return {
            "fingerprint": self.fingerprint,
            "alertname": self.alertname,
            "status": self.status,
            "severity": self.severity,
            "landscape": self.landscape,
            "region": self.region,
            "startsAt": self.starts_at,
            "endsAt": self.ends_at,
            "component": self.component,
            "labels": dict(self.labels),
            "annotations": dict(self.annotations),
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

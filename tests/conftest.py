"""Shared fixtures for the triggered-alerts filter engine tests."""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta

import pytest

from src.contracts.alert import Alert
from src.contracts.filter_state import FilterState
from src.contracts.page import RemoteAlertPage
from src.contracts.query import RemoteQuery

# ── Helper: create Alert with sensible defaults ─────────────────────────


def make_alert(
    *,
    fingerprint: str = "fp-001",
    alertname: str = "HighCPU",
    status: str = "firing",
    severity: str = "critical",
    landscape: str = "prod",
    region: str = "eu10",
    starts_at: str = "2026-02-26T10:00:00Z",
    ends_at: str | None = None,
    component: str | None = None,
) -> Alert:
    return Alert(
        fingerprint=fingerprint,
        alertname=alertname,
        status=status,
        severity=severity,
        landscape=landscape,
        region=region,
        starts_at=starts_at,
        ends_at=ends_at,
        component=component,
    )


def make_state(**overrides) -> FilterState:
    return FilterState(**overrides)


def make_page(alerts: list[Alert], *, page: int = 1, page_size: int = 50) -> RemoteAlertPage:
    total_pages = max(1, -(-len(alerts) // page_size))
    return RemoteAlertPage(
        alerts=list(alerts),
        page=page,
        page_size=page_size,
        total_count=len(alerts),
        total_pages=total_pages,
    )


# ── Timestamp helpers ────────────────────────────────────────────────────


def ts_offset(base: str = "2026-02-26T10:00:00Z", seconds: int = 0) -> str:
    """Return an ISO-8601 timestamp offset from *base* by *seconds*."""
    dt = datetime.fromisoformat(base.replace("Z", "+00:00"))
    dt += timedelta(seconds=seconds)
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ")


# ── Fake sources ─────────────────────────────────────────────────────────


class GatedSource:
    """Alert source whose fetches stay pending until released by the test."""

    def __init__(self) -> None:
        self.calls: list[tuple[RemoteQuery, asyncio.Future]] = []

    async def fetch(self, query: RemoteQuery) -> RemoteAlertPage | None:
        fut = asyncio.get_running_loop().create_future()
        self.calls.append((query, fut))
        return await fut

    def release(self, index: int, page: RemoteAlertPage | None) -> None:
        self.calls[index][1].set_result(page)

    def fail(self, index: int, exc: Exception) -> None:
        self.calls[index][1].set_exception(exc)

    async def fetch_filter_options(self) -> dict[str, list[str]]:
        return {}


class StaticSource:
    """Returns the same page (or raises the same error) on every fetch."""

    def __init__(self, page: RemoteAlertPage | None = None, error: Exception | None = None,
                 options: dict[str, list[str]] | None = None) -> None:
        self.page = page
        self.error = error
        self.options = options or {}
        self.queries: list[RemoteQuery] = []

    async def fetch(self, query: RemoteQuery) -> RemoteAlertPage | None:
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return self.page

    async def fetch_filter_options(self) -> dict[str, list[str]]:
        if self.error is not None:
            raise self.error
        return self.options


# ── Fixtures ─────────────────────────────────────────────────────────────


@pytest.fixture
def sample_alerts() -> list[Alert]:
    """Mixed firing/resolved alerts across landscapes and regions."""
    return [
        make_alert(fingerprint="a1", alertname="HighCPU", severity="critical",
                   landscape="prod", region="eu10", starts_at=ts_offset(seconds=300)),
        make_alert(fingerprint="a2", alertname="DiskFull", severity="warning",
                   landscape="dev", region="eu10", status="resolved",
                   starts_at=ts_offset(seconds=600), ends_at=ts_offset(seconds=900)),
        make_alert(fingerprint="a3", alertname="MemoryLeak", severity="info",
                   landscape="prod", region="us10", starts_at=ts_offset(seconds=100)),
        make_alert(fingerprint="a4", alertname="HighCPU", severity="critical",
                   landscape="staging", region="us10", status="resolved",
                   starts_at=ts_offset(seconds=50), ends_at=ts_offset(seconds=70)),
        make_alert(fingerprint="a5", alertname="DBLatency", severity="warning",
                   landscape="prod", region="ap10", starts_at=ts_offset(seconds=700)),
    ]

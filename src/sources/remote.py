"""Remote Alert Source — client for the alert storage API."""

from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx

from src.contracts.alert import Alert
from src.contracts.page import RemoteAlertPage
from src.contracts.query import RemoteQuery

log = logging.getLogger(__name__)

OPTION_KEYS = ("severity", "status", "landscape", "region")


class AlertSourceError(RuntimeError):
    """A fetch failed; the caller's filter state is unaffected."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AlertSource(Protocol):
    async def fetch(self, query: RemoteQuery) -> RemoteAlertPage | None: ...

    async def fetch_filter_options(self) -> dict[str, list[str]]: ...


class HttpAlertSource:
    """Async wrapper around ``/alert-storage/alerts/{project}``."""

    def __init__(
        self,
        base_url: str,
        project: str,
        *,
        timeout: float = 15.0,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._project = project
        self._timeout = timeout
        self._token = token or ""
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._token}"} if self._token else {}

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            headers=self._headers(),
            transport=self._transport,
        )

    async def _get(self, path: str, params: dict[str, str] | None = None) -> Any:
        try:
            async with self._client() as client:
                response = await client.get(path, params=params)
                response.raise_for_status()
                if not response.content:
                    return None
                return response.json()
        except httpx.HTTPStatusError as exc:
            raise AlertSourceError(
                f"GET {path} failed with HTTP {exc.response.status_code}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise AlertSourceError(f"GET {path} failed: {exc}") from exc
        except ValueError as exc:
            raise AlertSourceError(f"GET {path} returned invalid JSON") from exc

    async def fetch(self, query: RemoteQuery) -> RemoteAlertPage | None:
        params = query.to_params()
        log.debug("Fetching alerts for %s with %s", self._project, params)
        payload = await self._get(f"/alert-storage/alerts/{self._project}", params)
        if payload is None:
            return None
        if not isinstance(payload, dict):
            raise AlertSourceError("Alert page payload is not an object")
        try:
            return RemoteAlertPage.from_payload(payload)
        except (TypeError, ValueError, AttributeError) as exc:
            raise AlertSourceError(f"Malformed alert page body: {exc}") from exc

    async def fetch_alert(self, fingerprint: str) -> Alert | None:
        payload = await self._get(f"/alert-storage/alerts/{self._project}/{fingerprint}")
        return Alert.from_dict(payload) if isinstance(payload, dict) else None

    async def fetch_filter_options(self) -> dict[str, list[str]]:
        payload = await self._get(f"/alert-storage/alerts/{self._project}/filters")
        if not isinstance(payload, dict):
            return {}
        return {key: [str(v) for v in payload.get(key) or []] for key in OPTION_KEYS}

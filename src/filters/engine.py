"""AlertFilterEngine — one alerts view's filter state, fetches and results.

Flow per user action
────────────────────
  dispatch(action)  → reduce → persist snapshot (if changed)
  await sync()      → project → fetch (if the query changed) → post-filter

Ordering of fetches
───────────────────
Each fetch takes the next request id.  A result is applied only while its
id is still the latest issued; a slower, older fetch that lands after a
newer one was started is dropped.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from src.contracts.alert import Alert
from src.contracts.applied_filter import AppliedFilter
from src.contracts.enums import Dimension
from src.contracts.filter_state import FilterState
from src.contracts.page import RemoteAlertPage
from src.contracts.query import RemoteQuery
from src.filters.actions import FilterActions
from src.filters.dimensions import visible_dimensions
from src.filters.persistence import FilterPersistence, KeyValueStore, storage_key
from src.filters.post_filter import apply
from src.filters.projector import project
from src.filters.reducer import FilterAction, reduce
from src.filters.summarizer import summarize
from src.sources.remote import AlertSource, AlertSourceError

log = logging.getLogger(__name__)


@dataclass(slots=True)
class AlertsView:
    """Everything a hosting view renders."""

    state: FilterState
    alerts: list[Alert] = field(default_factory=list)
    applied_filters: list[AppliedFilter] = field(default_factory=list)
    options: dict[str, list[str]] = field(default_factory=dict)
    is_loading: bool = False
    error: AlertSourceError | None = None
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


class AlertFilterEngine:
    def __init__(
        self,
        project_id: str,
        source: AlertSource,
        store: KeyValueStore,
        *,
        status_partition: Sequence[str] | None = None,
        partition_name: str | None = None,
        expose_status: bool = False,
        defaults: FilterState | None = None,
        match_locally: bool = False,
    ) -> None:
        if status_partition and expose_status:
            raise ValueError("status is either a fixed partition or a user filter, not both")

        self.project_id = project_id
        self.source = source
        self.status_partition = tuple(status_partition or ())
        self.dimensions: tuple[Dimension, ...] = visible_dimensions(expose_status=expose_status)
        self.match_locally = match_locally

        self._defaults = defaults if defaults is not None else FilterState()
        self._persistence = FilterPersistence(store)
        self.storage_key = storage_key(project_id, partition_name or self.status_partition)
        self._state = self._persistence.restore(self.storage_key, self._defaults)

        self.actions = FilterActions(self.dispatch, lambda: self._state, self._defaults)

        # fetch bookkeeping
        self._request_seq = 0
        self._issued_query: RemoteQuery | None = None
        self._page: RemoteAlertPage | None = None
        self._alerts: list[Alert] = []
        self._options: dict[str, list[str]] = {}
        self._in_flight = 0
        self._error: AlertSourceError | None = None

    # ── state ───────────────────────────────────────────────────────────

    @property
    def state(self) -> FilterState:
        return self._state

    def dispatch(self, action: FilterAction) -> FilterState:
        """Commit one reducer transition and snapshot it."""
        new_state = reduce(self._state, action)
        if new_state == self._state:
            return self._state
        self._state = new_state
        self._persistence.save(self.storage_key, new_state)
        # cheap re-filter of what is already on screen
        self._alerts = self._post_filter(self._page)
        return new_state

    def query(self) -> RemoteQuery:
        return project(self._state, self.status_partition)

    # ── fetching ────────────────────────────────────────────────────────

    async def sync(self, *, force: bool = False) -> AlertsView:
        """Fetch the page for the current query if it changed (or *force*)."""
        query = self.query()
        if force or query != self._issued_query:
            await self._fetch(query)
        return self.view()

    async def _fetch(self, query: RemoteQuery) -> None:
        self._request_seq += 1
        request_id = self._request_seq
        self._issued_query = query
        self._in_flight += 1
        try:
            try:
                page = await self.source.fetch(query)
            except Exception as exc:
                error = exc if isinstance(exc, AlertSourceError) else AlertSourceError(
                    f"{type(exc).__name__}: {exc}"
                )
                if request_id == self._request_seq:
                    log.warning("Alert fetch for %s failed: %s", self.project_id, error)
                    self._error = error
                    # allow the same query to be re-issued
                    self._issued_query = None
                return
            if request_id != self._request_seq:
                log.debug("Dropping stale alert page (request %d < %d)", request_id, self._request_seq)
                return
            if page is None:
                page = RemoteAlertPage.empty(query.page, query.page_size)
            self._page = page
            self._error = None
            self._alerts = self._post_filter(page)
        finally:
            self._in_flight -= 1

    async def load_options(self) -> dict[str, list[str]]:
        """Distinct values per dimension, sorted ascending."""
        try:
            raw = await self.source.fetch_filter_options()
        except AlertSourceError as exc:
            log.warning("Could not load filter options for %s: %s", self.project_id, exc)
            return self._options
        self._options = {key: sorted(values) for key, values in (raw or {}).items()}
        return self._options

    def _post_filter(self, page: RemoteAlertPage | None) -> list[Alert]:
        return apply(
            page,
            self._state,
            dimensions=self.dimensions,
            match_locally=self.match_locally,
        )

    # ── output ──────────────────────────────────────────────────────────

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    def view(self) -> AlertsView:
        page = self._page
        return AlertsView(
            state=self._state,
            alerts=list(self._alerts),
            applied_filters=summarize(self._state, self.actions, self.dimensions),
            options=dict(self._options),
            is_loading=self.is_loading,
            error=self._error,
            page=page.page if page else self._state.page,
            page_size=page.page_size if page else self._state.page_size,
            total_count=page.total_count if page else 0,
            total_pages=page.total_pages if page else 0,
        )

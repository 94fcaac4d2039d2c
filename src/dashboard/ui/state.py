"""Ініціалізація стану сесії та рушіїв фільтрів."""

from __future__ import annotations

import os

import streamlit as st

from src.contracts.filter_state import FilterState
from src.filters.engine import AlertFilterEngine
from src.filters.persistence import JsonFileStore
from src.shared.settings import Settings
from src.sources.remote import HttpAlertSource

_DEFAULTS: dict[str, object] = {
    "project_id": os.environ.get("ALERTS_PROJECT", ""),
    "view": "active",
    "sort_field": "",
    "sort_desc": False,
    "engines": {},
}


def init_state() -> None:
    """Заповнює st.session_state значеннями за замовчуванням."""
    for key, value in _DEFAULTS.items():
        if key not in st.session_state:
            st.session_state[key] = value.copy() if isinstance(value, dict) else value


def get_engine(settings: Settings, project_id: str, view: str | None) -> AlertFilterEngine:
    """Один рушій на пару (project, view) на сесію."""
    engines: dict[tuple[str, str], AlertFilterEngine] = st.session_state["engines"]
    cache_key = (project_id, view or "")
    engine = engines.get(cache_key)
    if engine is None:
        partition = settings.partition_for(view)
        engine = AlertFilterEngine(
            project_id,
            HttpAlertSource(
                settings.api_base_url,
                project_id,
                timeout=settings.request_timeout_sec,
            ),
            JsonFileStore(settings.storage_dir),
            status_partition=partition,
            partition_name=view if partition else None,
            expose_status=not partition,
            defaults=FilterState(page_size=settings.default_page_size),
        )
        engines[cache_key] = engine
    return engine

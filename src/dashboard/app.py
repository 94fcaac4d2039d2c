"""Головний файл дашборду Triggered Alerts на Streamlit."""

from __future__ import annotations

import asyncio
from pathlib import Path

import streamlit as st

# ── page config (MUST be the first Streamlit call) ───────────────────────────

st.set_page_config(
    page_title="Triggered Alerts",
    layout="wide",
    initial_sidebar_state="expanded",
)

# ── inject theme CSS ────────────────────────────────────────────────────────

_CSS_PATH = Path(__file__).resolve().parent / "styles" / "theme.css"
if _CSS_PATH.exists():
    st.markdown(f"<style>{_CSS_PATH.read_text()}</style>", unsafe_allow_html=True)

# ── local imports (after page config) ───────────────────────────────────────

from src.dashboard.data_access import severity_counts  # noqa: E402
from src.dashboard.ui.chips import render_applied_filters  # noqa: E402
from src.dashboard.ui.layout import (  # noqa: E402
    render_header,
    render_pagination,
    render_sidebar,
)
from src.dashboard.ui.state import get_engine, init_state  # noqa: E402
from src.dashboard.ui.tables import render_alert_table  # noqa: E402
from src.shared.logger import setup_logging  # noqa: E402
from src.shared.settings import load_settings  # noqa: E402

# ── settings & session state ────────────────────────────────────────────────

settings = load_settings()
setup_logging(settings.log_level)
init_state()

# ── project / view selection ────────────────────────────────────────────────

with st.sidebar:
    project_id = st.text_input("Project", key="project_id")
    view_names = list(settings.views) + ["all"]
    if st.session_state["view"] not in view_names:
        st.session_state["view"] = view_names[0]
    view_name = st.radio("View", options=view_names, horizontal=True, key="view")

if not project_id:
    st.markdown(
        '<div class="no-data-box">'
        "<strong>Select a project in the sidebar to list its alerts.</strong>"
        "</div>",
        unsafe_allow_html=True,
    )
    st.stop()

view_name = None if view_name == "all" else view_name
engine = get_engine(settings, project_id, view_name)

# ── fetch ───────────────────────────────────────────────────────────────────

if not engine.view().options:
    asyncio.run(engine.load_options())

with st.spinner("Loading alerts…"):
    view = asyncio.run(engine.sync())

# ── sidebar filters ─────────────────────────────────────────────────────────

if render_sidebar(engine, view):
    st.rerun()

# ── header + applied filters ────────────────────────────────────────────────

render_header(project_id, view_name)

if render_applied_filters(view.applied_filters, engine.actions.reset_all):
    st.rerun()

# ── errors ──────────────────────────────────────────────────────────────────

if view.error is not None:
    st.error(f"Could not load alerts: {view.error}")
    if st.button("Retry"):
        asyncio.run(engine.sync(force=True))
        st.rerun()

# ── summary + table ─────────────────────────────────────────────────────────

counts = severity_counts(view.alerts)
if counts:
    cols = st.columns(len(counts))
    for col, (severity, n) in zip(cols, sorted(counts.items())):
        col.metric(severity.capitalize(), n)

st.markdown('<p class="section-label">Alerts</p>', unsafe_allow_html=True)
render_alert_table(view.alerts)

if render_pagination(engine, view):
    st.rerun()

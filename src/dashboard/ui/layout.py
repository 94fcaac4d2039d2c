"""Page layout — sidebar controls and main-area scaffolding.

``render_sidebar`` draws the filter controls of one engine and dispatches
an action for every control the user changed.  It returns True when the
filter state changed, so the page can rerun with the new query.
"""

from __future__ import annotations

from datetime import date

import streamlit as st

from src.contracts.enums import Dimension
from src.filters.dates import parse_timestamp
from src.filters.dimensions import DIMENSIONS
from src.filters.engine import AlertFilterEngine, AlertsView

PAGE_SIZES = [25, 50, 100]


def render_header(project_id: str, view_name: str | None) -> None:
    subtitle = f"Project <code>{project_id}</code>"
    if view_name:
        subtitle += f" · view <code>{view_name}</code>"
    st.markdown(
        '<h1 class="page-title">Triggered Alerts</h1>'
        f'<p class="page-subtitle">{subtitle}</p>',
        unsafe_allow_html=True,
    )


def _day(value: str | None) -> date | None:
    dt = parse_timestamp(value)
    return dt.date() if dt is not None else None


def _with_current(options: list[str], current: tuple[str, ...]) -> list[str]:
    # keep saved values selectable even if the backend stopped reporting them
    return sorted(set(options) | set(current))


def render_sidebar(engine: AlertFilterEngine, view: AlertsView) -> bool:
    """Draw sidebar controls; returns True if any filter changed."""
    state = engine.state
    actions = engine.actions
    changed = False

    with st.sidebar:
        st.markdown('<p class="sidebar-brand">Alerts</p>', unsafe_allow_html=True)
        st.divider()

        # -- search --
        term = st.text_input("Search alert name", value=state.search_term)
        if term != state.search_term:
            actions.set_search_term(term)
            changed = True

        # -- inclusion filters --
        st.markdown("##### Show only")
        for dim in engine.dimensions:
            spec = DIMENSIONS[dim]
            if not spec.has_inclusion:
                continue
            current = spec.selected(state)
            picked = st.multiselect(
                spec.label,
                options=_with_current(view.options.get(dim.value, []), current),
                default=list(current),
            )
            if tuple(picked) != current:
                actions.set_inclusion(dim, picked)
                changed = True

        # -- exclusion filters --
        st.markdown("##### Hide")
        for dim in engine.dimensions:
            spec = DIMENSIONS[dim]
            current = spec.excluded(engine.state)
            options = view.options.get(dim.value, [])
            if dim is Dimension.ALERTNAME:
                options = sorted({a.alertname for a in view.alerts})
            picked = st.multiselect(
                f"Hide {spec.label.lower()}",
                options=_with_current(options, current),
                default=list(current),
            )
            for value in current:
                if value not in picked:
                    actions.remove_exclusion(dim, value)
                    changed = True
            for value in picked:
                if value not in current:
                    actions.toggle_exclusion(dim, value)
                    changed = True

        # -- date range --
        st.markdown("##### Time window")
        bounds = tuple(d for d in (_day(state.start_date), _day(state.end_date)) if d)
        picked_range = st.date_input("Started between", value=bounds, format="DD/MM/YYYY")
        if isinstance(picked_range, date):
            picked_range = (picked_range,)
        picked_range = tuple(picked_range)
        if picked_range != bounds:
            start = picked_range[0] if len(picked_range) > 0 else None
            end = picked_range[1] if len(picked_range) > 1 else None
            actions.select_date_range(start, end)
            changed = True

        st.divider()

        # -- page size --
        size = st.selectbox(
            "Alerts per page",
            options=PAGE_SIZES,
            index=PAGE_SIZES.index(state.page_size) if state.page_size in PAGE_SIZES else 1,
        )
        if size != state.page_size:
            actions.set_page_size(size)
            changed = True

        if st.button("Reset filters", disabled=not engine.state.has_filters):
            actions.reset_all()
            changed = True

    return changed


def render_pagination(engine: AlertFilterEngine, view: AlertsView) -> bool:
    c1, c2, c3 = st.columns([1, 3, 1])
    changed = False
    with c1:
        if st.button("← Previous", disabled=not view.has_previous_page):
            engine.actions.previous_page()
            changed = True
    with c2:
        st.caption(
            f"Page {view.page} of {max(view.total_pages, 1)} · {view.total_count} alerts"
        )
    with c3:
        if st.button("Next →", disabled=not view.has_next_page):
            engine.actions.next_page()
            changed = True
    return changed

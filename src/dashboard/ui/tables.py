"""Відображення таблиці оповіщень."""

from __future__ import annotations

import streamlit as st
from streamlit import column_config as colcfg

from src.contracts.alert import Alert
from src.dashboard.data_access import alerts_to_frame
from src.filters.post_filter import sort_alerts

SORT_FIELDS = {
    "": "Default (firing first, newest first)",
    "alertname": "Alert name",
    "severity": "Severity",
    "startsAt": "Started",
    "endsAt": "Ended",
    "status": "Status",
    "landscape": "Landscape",
    "region": "Region",
}

_COL_CONFIG = {
    "Started": colcfg.DatetimeColumn("Started", format="DD/MM/YYYY  HH:mm"),
    "Ended": colcfg.DatetimeColumn("Ended", format="DD/MM/YYYY  HH:mm"),
}


def render_alert_table(alerts: list[Alert]) -> None:
    """Render the alerts of the current page.

    Rows arrive already filtered and in display order; the sort picker
    only reorders this page.
    """
    if not alerts:
        st.info("No alerts match the current filters.")
        return

    c1, c2 = st.columns([3, 1])
    with c1:
        field = st.selectbox(
            "Sort by",
            options=list(SORT_FIELDS),
            format_func=SORT_FIELDS.get,
            key="sort_field",
        )
    with c2:
        desc = st.toggle("Descending", key="sort_desc")

    if field:
        alerts = sort_alerts(alerts, field, "desc" if desc else "asc")

    view = alerts_to_frame(alerts)
    st.dataframe(
        view,
        hide_index=True,
        use_container_width=True,
        height=min(len(view) * 36 + 42, 600),
        column_config=_COL_CONFIG,
        key="tbl_alerts",
    )

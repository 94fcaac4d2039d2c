"""Рядок застосованих фільтрів (chips) з кнопками видалення."""

from __future__ import annotations

import streamlit as st

from src.contracts.applied_filter import AppliedFilter

_PER_ROW = 6


def render_applied_filters(chips: list[AppliedFilter], on_clear_all) -> bool:
    """Draw one button per chip; returns True if a filter was removed."""
    if not chips:
        return False

    changed = False
    for start in range(0, len(chips), _PER_ROW):
        row = chips[start:start + _PER_ROW]
        cols = st.columns(_PER_ROW)
        for col, chip in zip(cols, row):
            with col:
                label = f"✕ {chip.label}"
                kind = "primary" if chip.is_exclusion else "secondary"
                if st.button(label, key=f"chip_{chip.key}", type=kind, help="Remove filter"):
                    chip.on_remove()
                    changed = True

    if len(chips) > 1 and st.button("Clear all", key="chip_clear_all"):
        on_clear_all()
        changed = True
    return changed

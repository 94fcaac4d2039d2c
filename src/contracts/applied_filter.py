"""AppliedFilter: a removable "active filter" chip derived from state."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppliedFilter:
    key: str  # unique within one summarize() pass
    label: str
    on_remove: Callable[[], object]
    is_exclusion: bool = False

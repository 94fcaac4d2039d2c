"""Persistence Adapter — save/restore filter preferences per view.

A snapshot is the JSON form of a FilterState without its pagination
cursor, stored under a key derived from the project and, for views bound
to a status partition, that partition.  Loading is forgiving: unreadable
records fall back to defaults and every field that does validate is
kept, so snapshots written before a field existed still load.
"""

from __future__ import annotations

import json
import logging
import os
import re
import tempfile
from collections.abc import Sequence
from dataclasses import asdict, replace
from pathlib import Path
from typing import Any, Protocol

from src.contracts.filter_state import PAGINATION_FIELDS, FilterState
from src.filters.dimensions import DIMENSIONS, SNAPSHOT_KEYS

log = logging.getLogger(__name__)

STORAGE_KEY_PREFIX = "triggeredAlertsFilters"

_STRING_FIELDS = {"search_term"}
_BOUND_FIELDS = {"start_date", "end_date"}


def storage_key(project_id: str, partition: str | Sequence[str] | None = None) -> str:
    """Deterministic key: ``triggeredAlertsFilters_<project>[_<partition>]``."""
    key = f"{STORAGE_KEY_PREFIX}_{project_id}"
    if not partition:
        return key
    if not isinstance(partition, str):
        partition = "-".join(partition)
    return f"{key}_{partition}"


# ═══════════════════════════════════════════════════════════════════════════
#  Stores
# ═══════════════════════════════════════════════════════════════════════════


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    """Dict-backed store (one process, e.g. a Streamlit session)."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore:
    """One ``<key>.json`` file per key inside *directory*."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        safe = re.sub(r"[^A-Za-z0-9_.-]", "_", key)
        return self.directory / f"{safe}.json"

    def get(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        _atomic_write(self.path_for(key), value)


def _atomic_write(path: Path, content: str) -> None:
    """Атомарно записує content у файл path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(content)
        os.replace(tmp, path)
    except BaseException:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise


# ═══════════════════════════════════════════════════════════════════════════
#  Snapshot codec
# ═══════════════════════════════════════════════════════════════════════════


def to_snapshot(state: FilterState) -> dict[str, Any]:
    """JSON-ready dict with camelCase keys; pagination is left out."""
    data = asdict(state)
    snapshot: dict[str, Any] = {}
    for attr, key in SNAPSHOT_KEYS.items():
        if attr in PAGINATION_FIELDS:
            continue
        value = data[attr]
        snapshot[key] = list(value) if isinstance(value, tuple) else value
    return snapshot


def _coerce(attr: str, value: Any) -> tuple[bool, Any]:
    """Validate one snapshot field; returns (ok, value)."""
    if attr in _STRING_FIELDS:
        return isinstance(value, str), value
    if attr in _BOUND_FIELDS:
        if value is None or value == "":
            return True, None
        return isinstance(value, str), value
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return True, tuple(dict.fromkeys(value))
    return False, value


def _resolve_conflicts(state: FilterState) -> FilterState:
    """A stored value in both sets keeps its inclusion."""
    changes: dict[str, tuple[str, ...]] = {}
    for spec in DIMENSIONS.values():
        selected = set(spec.selected(state))
        excluded = spec.excluded(state)
        if selected and any(v in selected for v in excluded):
            changes[spec.excluded_attr] = tuple(v for v in excluded if v not in selected)
    return replace(state, **changes) if changes else state


def from_snapshot(data: dict[str, Any], defaults: FilterState | None = None) -> FilterState:
    """Merge the valid fields of *data* over *defaults*."""
    base = defaults if defaults is not None else FilterState()
    fields: dict[str, Any] = {}
    for attr, key in SNAPSHOT_KEYS.items():
        if key not in data:
            continue
        ok, value = _coerce(attr, data[key])
        if not ok:
            log.warning("Ignoring saved filter field %s: unexpected value %r", key, data[key])
            continue
        fields[attr] = value
    return _resolve_conflicts(replace(base, **fields, page=1))


# ═══════════════════════════════════════════════════════════════════════════
#  Adapter
# ═══════════════════════════════════════════════════════════════════════════


class FilterPersistence:
    """save/load FilterState snapshots; never raises to the caller."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def save(self, key: str, state: FilterState) -> bool:
        try:
            payload = json.dumps(to_snapshot(state), ensure_ascii=False, separators=(",", ":"))
            self.store.set(key, payload)
        except (OSError, TypeError, ValueError) as exc:
            log.warning("Failed to save filters under %s: %s", key, exc)
            return False
        return True

    def load(self, key: str, defaults: FilterState | None = None) -> FilterState | None:
        """Return the saved state merged over *defaults*, or None if there
        is no usable record."""
        try:
            raw = self.store.get(key)
        except (OSError, UnicodeDecodeError) as exc:
            log.warning("Failed to read saved filters %s: %s", key, exc)
            return None
        if not raw:
            return None
        try:
            data = json.loads(raw)
        except ValueError as exc:
            log.warning("Failed to parse saved filters %s: %s", key, exc)
            return None
        if not isinstance(data, dict):
            log.warning("Saved filters %s is not an object (%s)", key, type(data).__name__)
            return None
        return from_snapshot(data, defaults)

    def restore(self, key: str, defaults: FilterState | None = None) -> FilterState:
        """Like :meth:`load` but always returns a usable state."""
        state = self.load(key, defaults)
        if state is not None:
            return state
        return defaults if defaults is not None else FilterState()

"""Dashboard settings: config/dashboard.yaml plus environment overrides."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from src.contracts.filter_state import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from src.shared.config_loader import load_yaml

log = logging.getLogger(__name__)

ROOT = Path(__file__).resolve().parent.parent.parent
DEFAULT_CONFIG_PATH = ROOT / "config" / "dashboard.yaml"


@dataclass(slots=True)
class Settings:
    api_base_url: str = "http://localhost:8080"
    request_timeout_sec: float = 15.0
    storage_dir: str = ".alert_filters"
    default_page_size: int = DEFAULT_PAGE_SIZE
    views: dict[str, list[str]] = field(default_factory=dict)  # view → status partition
    log_level: str = "INFO"

    def partition_for(self, view: str | None) -> list[str]:
        """Status partition of a named view; unknown / None → no partition."""
        if not view:
            return []
        return list(self.views.get(view, []))


_DEFAULTS = Settings()


def _from_dict(cfg: dict[str, Any]) -> Settings:
    api = cfg.get("api") or {}
    storage = cfg.get("storage") or {}
    alerts = cfg.get("alerts") or {}
    logging_cfg = cfg.get("logging") or {}

    page_size = int(alerts.get("default_page_size", DEFAULT_PAGE_SIZE))
    page_size = min(max(1, page_size), MAX_PAGE_SIZE)

    views = {
        str(name): [str(s) for s in (statuses or [])]
        for name, statuses in (alerts.get("views") or {}).items()
    }
    return Settings(
        api_base_url=str(api.get("base_url", _DEFAULTS.api_base_url)),
        request_timeout_sec=float(api.get("timeout_sec", _DEFAULTS.request_timeout_sec)),
        storage_dir=str(storage.get("dir", _DEFAULTS.storage_dir)),
        default_page_size=page_size,
        views=views,
        log_level=str(logging_cfg.get("level", _DEFAULTS.log_level)),
    )


def load_settings(path: str | Path | None = None) -> Settings:
    """Load settings; a missing file yields built-in defaults."""
    p = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    try:
        cfg = load_yaml(p)
    except FileNotFoundError:
        log.info("No config at %s, using defaults", p)
        cfg = {}
    settings = _from_dict(cfg)

    env = os.environ
    if env.get("ALERTS_API_URL"):
        settings.api_base_url = env["ALERTS_API_URL"]
    if env.get("ALERTS_STORAGE_DIR"):
        settings.storage_dir = env["ALERTS_STORAGE_DIR"]
    if env.get("ALERTS_LOG_LEVEL"):
        settings.log_level = env["ALERTS_LOG_LEVEL"]
    return settings

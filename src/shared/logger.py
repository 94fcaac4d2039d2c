"""Налаштування логування."""

from __future__ import annotations

import logging
import os
import sys

_ENV_LEVEL = "ALERTS_LOG_LEVEL"


def setup_logging(level: str | None = None) -> None:
    """Налаштовує стандартний логер з лаконічним форматом.

    Args:
        level: Рівень логування (DEBUG, INFO, WARNING, ERROR).  Якщо None,
            береться з ALERTS_LOG_LEVEL, інакше INFO.
    """
    name = level or os.environ.get(_ENV_LEVEL) or "INFO"
    numeric = getattr(logging, name.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(numeric, logging.WARNING))

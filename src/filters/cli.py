"""CLI entry-point: fetch one filtered page of triggered alerts.

Usage examples
--------------
# Critical alerts of a project, hiding the dev landscape:
python -m src.filters --project cis --severity critical --exclude-landscape dev

# Active view, starting from (and updating) the saved filters:
python -m src.filters --project cis --view active --use-saved --page 2

# Offline, against a JSON dump of the storage API:
python -m src.filters --project cis --from-json alerts.json --search db
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path

from src.contracts.alert import Alert
from src.contracts.enums import Dimension, ValueState
from src.contracts.filter_state import FilterState
from src.dashboard.data_access import alerts_to_frame
from src.filters.dimensions import INCLUSION_DIMENSIONS, value_state
from src.filters.engine import AlertFilterEngine
from src.filters.persistence import JsonFileStore, MemoryStore
from src.filters.post_filter import sort_alerts
from src.shared.logger import setup_logging
from src.shared.settings import load_settings
from src.sources.memory import InMemoryAlertSource
from src.sources.remote import HttpAlertSource

log = logging.getLogger(__name__)

_SORT_FIELDS = ["alertname", "severity", "startsAt", "endsAt", "status", "landscape", "region"]


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="alert-filters",
        description="Triggered alerts: filter, page and list alerts of a project",
    )
    p.add_argument("--project", required=True, help="Project (tenant) name.")
    p.add_argument(
        "--view",
        default=None,
        help="Named view from config (e.g. active, history). Fixes the status "
             "partition and keeps its own saved filters.",
    )
    p.add_argument("--config", default=None, help="Path to dashboard.yaml.")

    for dim in INCLUSION_DIMENSIONS:
        p.add_argument(
            f"--{dim.value}",
            default=None,
            help=f"Comma-separated {dim.value} values to include.",
        )
    for dim in Dimension:
        p.add_argument(
            f"--exclude-{dim.value}",
            default=None,
            help=f"Comma-separated {dim.value} values to hide.",
        )

    p.add_argument("--search", default=None, help="Alert name contains.")
    p.add_argument("--start", default=None, help="Start date/time (ISO-8601).")
    p.add_argument("--end", default=None, help="End date/time (ISO-8601, date = whole day).")
    p.add_argument("--page", type=int, default=None, help="Page number (1-based).")
    p.add_argument("--page-size", type=int, default=None, help="Alerts per page (max 100).")
    p.add_argument("--sort", choices=_SORT_FIELDS, default=None, help="Column to sort the page by.")
    p.add_argument("--desc", action="store_true", default=False, help="Sort descending.")
    p.add_argument(
        "--use-saved",
        action="store_true",
        default=False,
        help="Start from the saved filters of this project/view and save the result.",
    )
    p.add_argument(
        "--from-json",
        default=None,
        help="Read alerts from a JSON file (list or API page) instead of the API.",
    )
    p.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level. Default: from config.",
    )
    return p


def _split(value: str | None) -> list[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def load_alerts_json(path: str | Path) -> list[Alert]:
    """Read alerts from a JSON list or a ``{"data": [...]}`` page body."""
    with open(path, encoding="utf-8") as fh:
        payload = json.load(fh)
    items = payload.get("data", []) if isinstance(payload, dict) else payload
    alerts = [Alert.from_dict(item) for item in items or [] if isinstance(item, dict)]
    log.info("Loaded %d alerts from %s", len(alerts), path)
    return alerts


def apply_arguments(engine: AlertFilterEngine, args: argparse.Namespace) -> None:
    """Translate CLI flags into engine actions (page last, it is reset by the rest)."""
    actions = engine.actions
    for dim in INCLUSION_DIMENSIONS:
        values = _split(getattr(args, dim.value))
        if not values:
            continue
        if dim not in engine.dimensions:
            log.warning("--%s ignored: this view has a fixed status partition", dim.value)
            continue
        actions.set_inclusion(dim, values)

    for dim in Dimension:
        for value in _split(getattr(args, f"exclude_{dim.value}")):
            if value_state(engine.state, dim, value) is not ValueState.EXCLUDED:
                actions.toggle_exclusion(dim, value)

    if args.search is not None:
        actions.set_search_term(args.search)
    if args.start is not None or args.end is not None:
        actions.set_date_range(args.start, args.end)
    if args.page_size is not None:
        actions.set_page_size(args.page_size)
    if args.page is not None:
        actions.set_page(args.page)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings(args.config)
    setup_logging(args.log_level or settings.log_level)

    partition = settings.partition_for(args.view)

    if args.from_json:
        source = InMemoryAlertSource(load_alerts_json(args.from_json))
    else:
        source = HttpAlertSource(
            settings.api_base_url,
            args.project,
            timeout=settings.request_timeout_sec,
        )
    store = JsonFileStore(settings.storage_dir) if args.use_saved else MemoryStore()

    engine = AlertFilterEngine(
        args.project,
        source,
        store,
        status_partition=partition,
        partition_name=args.view,
        expose_status=not partition,
        defaults=FilterState(page_size=settings.default_page_size),
        match_locally=False,
    )
    apply_arguments(engine, args)

    view = asyncio.run(engine.sync())
    if view.error is not None:
        log.error("Could not fetch alerts: %s", view.error)
        return 1

    alerts = view.alerts
    if args.sort:
        alerts = sort_alerts(alerts, args.sort, "desc" if args.desc else "asc")

    if view.applied_filters:
        print("Filters: " + " | ".join(chip.label for chip in view.applied_filters))
    frame = alerts_to_frame(alerts)
    print(frame.to_string(index=False) if not frame.empty else "No alerts match.")
    print(f"Page {view.page}/{max(view.total_pages, 1)} | total alerts: {view.total_count}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

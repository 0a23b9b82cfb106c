"""Process metrics.

The CLI is short-lived, so instead of serving ``/metrics`` the default
registry can be dumped to a textfile (node exporter textfile collector format).
"""
from __future__ import annotations
import logging

from prometheus_client import REGISTRY, Counter, write_to_textfile

logger = logging.getLogger(__name__)

PAGES_FETCHED = Counter(
    "event_sync_pages_fetched_total", "Pages fetched from the calendar service", ["resource"]
)
SYNC_DECISIONS = Counter(
    "event_sync_sync_decisions_total", "Per source event sync decisions", ["decision"]
)
EVENTS_IMPORTED = Counter(
    "event_sync_events_imported_total", "Events created through import"
)


def write_metrics(path: str) -> None:
    write_to_textfile(path, REGISTRY)
    logger.debug("Wrote metrics to %s", path)

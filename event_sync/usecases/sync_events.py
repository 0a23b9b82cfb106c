from __future__ import annotations
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from ..domain.models import SYNC_TAG_KEY, Event, ExtendedProperties
from ..errors import MissingSourceIdError
from ..ports.calendar_provider import CalendarProvider
from ..services.metrics import SYNC_DECISIONS
from .list_events import list_events

logger = logging.getLogger(__name__)


@dataclass
class SyncEventsResult:
    created: List[Event] = field(default_factory=list)
    skipped: int = 0
    indexed: int = 0
    dry_run: bool = False


class SyncEventsUseCase:
    """One-way copy of source events missing from the destination calendar.

    Destination events are matched to source events through the sync tag in
    their shared extended properties. Already-synced events are never updated,
    so later edits to a source event are not propagated.
    """

    def __init__(self, provider: CalendarProvider):
        self.provider = provider

    def execute(
        self,
        src: str,
        dst: str,
        updated_after: Optional[datetime] = None,
        starting_after: Optional[datetime] = None,
        colour_id: Optional[str] = None,
        dry_run: bool = False,
    ) -> SyncEventsResult:
        index = self._index_destination(dst)
        result = SyncEventsResult(indexed=len(index), dry_run=dry_run)
        logger.info("Indexed %d synced events in %s", len(index), dst)

        for source in list_events(self.provider, src, updated_after, starting_after):
            if not source.id:
                raise MissingSourceIdError(src, source.summary)
            if source.status == "cancelled":
                # updatedMin listings include deletions; there is nothing to copy
                logger.debug("Skipping %s: cancelled in source", source.id)
                SYNC_DECISIONS.labels(decision="skip_cancelled").inc()
                result.skipped += 1
                continue
            if source.id in index:
                logger.debug("Skipping %s (%s): already synced", source.id, source.summary)
                SYNC_DECISIONS.labels(decision="skip").inc()
                result.skipped += 1
                continue

            event = self._build_destination_event(source, colour_id)
            verb = "Would create" if dry_run else "Creating"
            logger.info("%s event %r from %s in %s", verb, event.summary, source.id, dst)
            if dry_run:
                SYNC_DECISIONS.labels(decision="would_create").inc()
                result.created.append(event)
                continue
            result.created.append(self.provider.insert_event(dst, event))
            SYNC_DECISIONS.labels(decision="create").inc()

        logger.info(
            "Sync %s -> %s done: %d %s, %d skipped",
            src, dst, len(result.created), "planned" if dry_run else "created", result.skipped,
        )
        return result

    def _index_destination(self, dst: str) -> Dict[str, Event]:
        # Drained completely before any creation so the run sees a stable snapshot.
        index: Dict[str, Event] = {}
        for event in list_events(self.provider, dst):
            source_id = event.sync_source_id
            if source_id is not None:
                index[source_id] = event
        return index

    def _build_destination_event(self, source: Event, colour_id: Optional[str]) -> Event:
        shared = dict(source.extended_properties.shared)
        shared[SYNC_TAG_KEY] = source.id
        return Event(
            summary=source.summary,
            location=source.location,
            start=source.start,
            end=source.end,
            extended_properties=ExtendedProperties(shared=shared),
            color_id=colour_id,
        )

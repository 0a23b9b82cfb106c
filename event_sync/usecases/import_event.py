from __future__ import annotations
import logging
from datetime import datetime

from ..domain.models import Event, EventDateTime
from ..domain.timestamps import to_rfc3339
from ..ports.calendar_provider import CalendarProvider
from ..services.metrics import EVENTS_IMPORTED

logger = logging.getLogger(__name__)


class ImportEventUseCase:
    """Create one event identified by an external iCalUID.

    There is no duplicate check here; whether a second import with the same
    UID creates another event is up to the calendar service.
    """

    def __init__(self, provider: CalendarProvider):
        self.provider = provider

    def execute(self, calendar_id: str, ical_uid: str, start: datetime, end: datetime) -> Event:
        event = Event(
            ical_uid=ical_uid,
            start=EventDateTime(date_time=to_rfc3339(start)),
            end=EventDateTime(date_time=to_rfc3339(end)),
        )
        logger.info("Importing event %s into %s", ical_uid, calendar_id)
        imported = self.provider.import_event(calendar_id, event)
        EVENTS_IMPORTED.inc()
        return imported

from __future__ import annotations
from datetime import datetime
from typing import Protocol, Optional

from ..domain.models import Calendar, Event, Page


class CalendarProvider(Protocol):
    """Abstracts external calendar operations for testability."""

    def list_events(
        self,
        calendar_id: str,
        page_token: Optional[str] = None,
        updated_min: Optional[datetime] = None,
        time_min: Optional[datetime] = None,
    ) -> Page[Event]:
        """Return one page of events and the token of the next page, if any."""
        ...

    def list_calendars(self, page_token: Optional[str] = None) -> Page[Calendar]:
        """Return one page of the user's calendar list."""
        ...

    def insert_event(self, calendar_id: str, event: Event) -> Event:
        ...

    def import_event(self, calendar_id: str, event: Event) -> Event:
        """Create a private copy of an event identified by its iCalUID."""
        ...

import os, sys
from typing import Any, Dict, List, Optional

import pytest

# Make the local event_sync package importable without installation
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from event_sync.domain.models import Calendar, Event, Page  # noqa: E402
from event_sync.errors import TransportError  # noqa: E402


class FakeProvider:
    """In-memory calendar service serving fixed-size pages.

    Page tokens are the string offset of the next page.
    """

    def __init__(
        self,
        events: Optional[Dict[str, List[Dict[str, Any]]]] = None,
        calendars: Optional[List[Dict[str, Any]]] = None,
        page_size: int = 2,
        fail_insert_after: Optional[int] = None,
    ):
        self.events = {cal: [Event.from_api(e) for e in evs] for cal, evs in (events or {}).items()}
        self.calendars = [Calendar.from_api(c) for c in (calendars or [])]
        self.page_size = page_size
        self.fail_insert_after = fail_insert_after
        self.list_calls: List[Dict[str, Any]] = []
        self.inserted: List[tuple] = []
        self.imported: List[tuple] = []

    def _page(self, items, page_token):
        offset = int(page_token or 0)
        chunk = items[offset:offset + self.page_size]
        nxt = offset + self.page_size
        return Page(items=list(chunk), next_page_token=str(nxt) if nxt < len(items) else None)

    def list_events(self, calendar_id, page_token=None, updated_min=None, time_min=None):
        self.list_calls.append(
            {"calendar_id": calendar_id, "page_token": page_token, "updated_min": updated_min, "time_min": time_min}
        )
        return self._page(self.events.get(calendar_id, []), page_token)

    def list_calendars(self, page_token=None):
        return self._page(self.calendars, page_token)

    def insert_event(self, calendar_id, event):
        if self.fail_insert_after is not None and len(self.inserted) >= self.fail_insert_after:
            raise TransportError("GOOGLE_API_ERROR", f"Failed to create event in calendar {calendar_id!r}")
        created = event.model_copy(update={"id": f"created-{len(self.inserted) + 1}"})
        self.inserted.append((calendar_id, event))
        return created

    def import_event(self, calendar_id, event):
        self.imported.append((calendar_id, event))
        return event.model_copy(update={"id": f"imported-{len(self.imported)}"})


@pytest.fixture
def make_provider():
    return FakeProvider

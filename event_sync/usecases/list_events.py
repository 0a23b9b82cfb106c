from __future__ import annotations
from datetime import datetime
from operator import attrgetter
from typing import Iterator, Optional

from ..domain.models import Calendar, Event
from ..ports.calendar_provider import CalendarProvider
from ..services.page_stream import stream_items

_page_items = attrgetter("items")


def list_events(
    provider: CalendarProvider,
    calendar_id: str,
    updated_after: Optional[datetime] = None,
    starting_after: Optional[datetime] = None,
) -> Iterator[Event]:
    """Lazily iterate over every event of a calendar, page by page.

    The filters are sent unchanged with each page request. Every call starts a
    new listing from the first page.
    """

    def fetch_page(page_token: Optional[str]):
        page = provider.list_events(
            calendar_id,
            page_token=page_token,
            updated_min=updated_after,
            time_min=starting_after,
        )
        return page, page.next_page_token

    return stream_items(fetch_page, _page_items)


def list_calendars(provider: CalendarProvider) -> Iterator[Calendar]:
    def fetch_page(page_token: Optional[str]):
        page = provider.list_calendars(page_token=page_token)
        return page, page.next_page_token

    return stream_items(fetch_page, _page_items)

from __future__ import annotations
import logging
from datetime import datetime
from typing import Any, Dict, Optional

import httplib2
from google.auth.exceptions import RefreshError
from google.auth.exceptions import TransportError as GoogleTransportError
from google.oauth2.credentials import Credentials
from google_auth_httplib2 import AuthorizedHttp
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ..domain.models import Calendar, Event, Page
from ..domain.timestamps import to_rfc3339
from ..errors import AuthError, TransportError
from ..ports.calendar_provider import CalendarProvider
from ..services.metrics import PAGES_FETCHED

logger = logging.getLogger(__name__)


class GoogleCalendarProvider(CalendarProvider):
    def __init__(self, service: Any):
        self._service = service

    @classmethod
    def from_credentials(
        cls, credentials: Credentials, timeout: Optional[float] = None
    ) -> "GoogleCalendarProvider":
        http = AuthorizedHttp(credentials, http=httplib2.Http(timeout=timeout))
        return cls(build("calendar", "v3", http=http, cache_discovery=False))

    def list_events(
        self,
        calendar_id: str,
        page_token: Optional[str] = None,
        updated_min: Optional[datetime] = None,
        time_min: Optional[datetime] = None,
    ) -> Page[Event]:
        req = self._service.events().list(
            calendarId=calendar_id,
            pageToken=page_token,
            updatedMin=to_rfc3339(updated_min) if updated_min else None,
            timeMin=to_rfc3339(time_min) if time_min else None,
        )
        res = self._execute(
            req, f"Failed to list events of calendar {calendar_id!r} (page token {page_token!r})"
        )
        PAGES_FETCHED.labels(resource="events").inc()
        items = [Event.from_api(raw) for raw in res.get("items") or []]
        logger.debug("Fetched %d events from %s", len(items), calendar_id)
        return Page(items=items, next_page_token=res.get("nextPageToken"))

    def list_calendars(self, page_token: Optional[str] = None) -> Page[Calendar]:
        req = self._service.calendarList().list(pageToken=page_token)
        res = self._execute(req, f"Failed to list calendars (page token {page_token!r})")
        PAGES_FETCHED.labels(resource="calendars").inc()
        items = [Calendar.from_api(raw) for raw in res.get("items") or []]
        return Page(items=items, next_page_token=res.get("nextPageToken"))

    def insert_event(self, calendar_id: str, event: Event) -> Event:
        req = self._service.events().insert(calendarId=calendar_id, body=event.to_api())
        created = self._execute(req, f"Failed to create event in calendar {calendar_id!r}")
        return Event.from_api(created)

    def import_event(self, calendar_id: str, event: Event) -> Event:
        req = self._service.events().import_(calendarId=calendar_id, body=event.to_api())
        imported = self._execute(
            req, f"Failed to import event {event.ical_uid!r} into calendar {calendar_id!r}"
        )
        return Event.from_api(imported)

    def _execute(self, request: Any, failure: str) -> Dict[str, Any]:
        try:
            return request.execute()
        except HttpError as e:
            raise TransportError("GOOGLE_API_ERROR", f"{failure}: {e}") from e
        except RefreshError as e:
            raise AuthError("TOKEN_REFRESH_FAILED", f"{failure}: {e}") from e
        except GoogleTransportError as e:
            raise TransportError("TOKEN_REFRESH_TRANSPORT", f"{failure}: {e}") from e
        except (httplib2.HttpLib2Error, OSError) as e:
            raise TransportError("TRANSPORT_ERROR", f"{failure}: {e}") from e

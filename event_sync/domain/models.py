"""Calendar domain models.

Field aliases follow the Google Calendar v3 resource shapes so a parsed
response can be dumped back unchanged (unknown fields are kept as extras).
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

SYNC_TAG_KEY = "event-sync-src-id"

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    items: List[T] = field(default_factory=list)
    next_page_token: Optional[str] = None


class EventDateTime(BaseModel):
    date_time: Optional[str] = Field(alias="dateTime", default=None)
    date: Optional[str] = None
    time_zone: Optional[str] = Field(alias="timeZone", default=None)

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class ExtendedProperties(BaseModel):
    shared: Dict[str, str] = Field(default_factory=dict)
    private: Dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(extra="allow")


class Event(BaseModel):
    id: Optional[str] = None
    status: Optional[str] = None
    summary: Optional[str] = None
    location: Optional[str] = None
    start: Optional[EventDateTime] = None
    end: Optional[EventDateTime] = None
    extended_properties: ExtendedProperties = Field(
        alias="extendedProperties", default_factory=ExtendedProperties
    )
    color_id: Optional[str] = Field(alias="colorId", default=None)
    ical_uid: Optional[str] = Field(alias="iCalUID", default=None)

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    @property
    def sync_source_id(self) -> Optional[str]:
        """Id of the source event this event was synced from, if tagged."""
        return self.extended_properties.shared.get(SYNC_TAG_KEY)

    @classmethod
    def from_api(cls, raw: Dict[str, Any]) -> "Event":
        return cls.model_validate(raw)

    def to_api(self) -> Dict[str, Any]:
        body = self.model_dump(by_alias=True, exclude_none=True)
        props = body.get("extendedProperties", {})
        for scope in ("shared", "private"):
            if not props.get(scope):
                props.pop(scope, None)
        if not props:
            body.pop("extendedProperties", None)
        return body


class Calendar(BaseModel):
    id: str
    summary: Optional[str] = None
    time_zone: Optional[str] = Field(alias="timeZone", default=None)
    access_role: Optional[str] = Field(alias="accessRole", default=None)
    primary: Optional[bool] = None

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    @classmethod
    def from_api(cls, raw: Dict[str, Any]) -> "Calendar":
        return cls.model_validate(raw)

    def to_api(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

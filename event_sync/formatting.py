"""Rendering of listed events and calendars for the terminal."""
from __future__ import annotations
import json
from typing import Iterable, Iterator, Union

from .domain.models import Calendar, Event

STYLES = ("json", "pretty", "summary")

Item = Union[Event, Calendar]


def _when(value) -> str:
    if value is None:
        return "?"
    return value.date_time or value.date or "?"


def render(item: Item, style: str = "json") -> str:
    if style == "json":
        return json.dumps(item.to_api(), ensure_ascii=False)
    if style == "pretty":
        return json.dumps(item.to_api(), ensure_ascii=False, indent=2)
    if style == "summary":
        if isinstance(item, Calendar):
            return f"{item.id}  {item.summary or ''}"
        return f"{_when(item.start)}  {_when(item.end)}  {item.summary or ''}"
    raise ValueError(f"Unknown output style: {style}")


def render_lines(items: Iterable[Item], style: str = "json", with_index: bool = True) -> Iterator[str]:
    for index, item in enumerate(items):
        text = render(item, style)
        yield f"{index}: {text}" if with_index else text

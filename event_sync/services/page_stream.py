"""Lazy iteration over cursor-paginated listings.

A listing is described by a single ``fetch_page(cursor)`` callable returning
``(page, next_cursor)``. ``stream_pages`` threads the cursor through an
explicit ``Going``/``Done`` state and only calls ``fetch_page`` when the
consumer asks for the next page, so a consumer that stops early never causes
extra requests. Requests are strictly sequential.

If ``fetch_page`` raises, the exception propagates to the consumer once and
the iterator is finished afterwards; no further pages are requested.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Optional, Tuple, TypeVar, Union

P = TypeVar("P")
T = TypeVar("T")

FetchPage = Callable[[Optional[str]], Tuple[P, Optional[str]]]


@dataclass(frozen=True)
class Going:
    cursor: Optional[str] = None


@dataclass(frozen=True)
class Done:
    pass


PageState = Union[Going, Done]


def next_state(next_cursor: Optional[str]) -> PageState:
    # An empty token is treated like a missing one; resending it would restart the listing.
    return Going(next_cursor) if next_cursor else Done()


def stream_pages(fetch_page: FetchPage) -> Iterator[P]:
    state: PageState = Going(None)
    while isinstance(state, Going):
        page, next_cursor = fetch_page(state.cursor)
        state = next_state(next_cursor)
        yield page


def _identity(page):
    return page


def stream_items(
    fetch_page: FetchPage,
    items_of: Callable[[P], Iterable[T]] = _identity,
) -> Iterator[T]:
    """Flatten ``stream_pages`` into items, keeping page and in-page order."""
    for page in stream_pages(fetch_page):
        yield from items_of(page)

from datetime import datetime, timezone
from itertools import islice

from event_sync.usecases.list_events import list_calendars, list_events


def _events(n):
    return [{"id": f"e{i}", "summary": f"Event {i}"} for i in range(1, n + 1)]


def test_list_events_streams_all_pages_in_order(make_provider):
    provider = make_provider(events={"cal": _events(5)}, page_size=2)

    ids = [e.id for e in list_events(provider, "cal")]

    assert ids == ["e1", "e2", "e3", "e4", "e5"]
    assert [c["page_token"] for c in provider.list_calls] == [None, "2", "4"]


def test_filters_are_sent_with_every_page(make_provider):
    provider = make_provider(events={"cal": _events(3)}, page_size=1)
    updated = datetime(2024, 1, 1, tzinfo=timezone.utc)
    starting = datetime(2024, 2, 1, tzinfo=timezone.utc)

    list(list_events(provider, "cal", updated_after=updated, starting_after=starting))

    assert len(provider.list_calls) == 3
    for call in provider.list_calls:
        assert call["calendar_id"] == "cal"
        assert call["updated_min"] == updated
        assert call["time_min"] == starting


def test_each_call_restarts_from_first_page(make_provider):
    provider = make_provider(events={"cal": _events(4)}, page_size=2)

    first = list(islice(list_events(provider, "cal"), 3))
    second = list(islice(list_events(provider, "cal"), 1))

    assert [e.id for e in first] == ["e1", "e2", "e3"]
    assert [e.id for e in second] == ["e1"]
    assert [c["page_token"] for c in provider.list_calls] == [None, "2", None]


def test_listing_is_lazy(make_provider):
    provider = make_provider(events={"cal": _events(2)})

    stream = list_events(provider, "cal")

    assert provider.list_calls == []
    next(stream)
    assert len(provider.list_calls) == 1


def test_list_calendars(make_provider):
    provider = make_provider(
        calendars=[{"id": "primary", "summary": "Me", "primary": True}, {"id": "work"}, {"id": "team"}],
        page_size=2,
    )

    cals = list(list_calendars(provider))

    assert [c.id for c in cals] == ["primary", "work", "team"]
    assert cals[0].primary is True

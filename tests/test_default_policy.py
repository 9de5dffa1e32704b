from datetime import datetime, timedelta

from dateutil import tz

from phrasecal.clock import fixed_clock
from phrasecal.default_policy import DEFAULT_TITLE, default_event

UTC = tz.tzutc()


def test_default_event(clock, now):
    event = default_event(clock)

    assert event.title == DEFAULT_TITLE == "Event"
    assert event.start_date == now
    assert event.end_date == now + timedelta(hours=1)
    assert event.duration_minutes() == 60


def test_default_end_crosses_midnight():
    event = default_event(fixed_clock(datetime(2024, 12, 31, 23, 30, tzinfo=UTC)))

    assert event.end_date == datetime(2025, 1, 1, 0, 30, tzinfo=UTC)


def test_clock_read_on_every_call():
    instants = iter([
        datetime(2024, 3, 1, 9, 0, 0, tzinfo=UTC),
        datetime(2024, 3, 1, 9, 0, 1, tzinfo=UTC),
    ])

    first = default_event(lambda: next(instants))
    second = default_event(lambda: next(instants))

    assert second.start_date - first.start_date == timedelta(seconds=1)


def test_fixed_clock_strips_microseconds():
    clock = fixed_clock(datetime(2024, 3, 1, 9, 0, 0, 123456, tzinfo=UTC))

    assert clock().microsecond == 0

"""End-to-end phrases through the real dateparser, pinned to Friday 2024-03-01 09:00 UTC."""

from datetime import date, datetime

import pytest
from dateutil import tz

from phrasecal.datetime_extraction import DateparserPhraseParser
from phrasecal.event_resolver import resolve

UTC = tz.tzutc()


@pytest.fixture(scope="module")
def parser():
    return DateparserPhraseParser()


def test_meeting_time_range(clock, parser):
    event = resolve("meeting from 14:00 to 16:00", clock=clock, parser=parser)

    assert event.title == "meeting"
    assert event.start_date == datetime(2024, 3, 1, 14, 0, tzinfo=UTC)
    assert event.end_date == datetime(2024, 3, 1, 16, 0, tzinfo=UTC)


def test_lunch_tomorrow_at_noon(clock, parser):
    event = resolve("lunch tomorrow at noon", clock=clock, parser=parser)

    assert event.title == "lunch"
    assert event.start_date == datetime(2024, 3, 2, 12, 0, tzinfo=UTC)
    assert event.end_date == datetime(2024, 3, 2, 13, 0, tzinfo=UTC)


def test_lunch_until_next_friday(clock, parser):
    event = resolve("lunch from tomorrow to next friday", clock=clock, parser=parser)

    assert event.title == "lunch"
    assert event.start_date.date() == date(2024, 3, 2)
    assert event.end_date.date() == date(2024, 3, 8)
    assert not event.is_inverted()


def test_range_ending_before_current_time(clock, parser):
    event = resolve("gym monday 7:00 to 8:00", clock=clock, parser=parser)

    assert event.title == "gym"
    assert event.start_date == datetime(2024, 3, 4, 7, 0, tzinfo=UTC)
    assert event.end_date == datetime(2024, 3, 4, 8, 0, tzinfo=UTC)
    assert not event.is_inverted()


def test_from_with_meridiem_time(clock, parser):
    event = resolve("workshop from 10am to 12pm", clock=clock, parser=parser)

    assert event.title == "workshop"
    assert event.start_date == datetime(2024, 3, 1, 10, 0, tzinfo=UTC)
    assert event.end_date == datetime(2024, 3, 1, 12, 0, tzinfo=UTC)


def test_plain_text_has_no_date(clock, now, parser):
    event = resolve("hello world", clock=clock, parser=parser)

    assert event.title == "hello world"
    assert event.start_date == now

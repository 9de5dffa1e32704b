from datetime import datetime

from dateutil import tz

from phrasecal.event_models import Event
from phrasecal.formatting import (
    creation_summary,
    event_date_string,
    format_date,
    format_date_and_time,
    format_time,
    same_day,
    section_subtitle,
)

UTC = tz.tzutc()


def dt(*args):
    return datetime(*args, tzinfo=UTC)


def test_same_day_reflexive_and_symmetric():
    a = dt(2024, 3, 1, 8, 0)
    b = dt(2024, 3, 1, 22, 15)

    assert same_day(a, a)
    assert same_day(a, b) and same_day(b, a)


def test_same_day_false_across_midnight():
    assert not same_day(dt(2024, 3, 1, 23, 59, 59), dt(2024, 3, 2, 0, 0, 1))


def test_same_day_checks_month_and_year():
    assert not same_day(dt(2024, 3, 1), dt(2024, 4, 1))
    assert not same_day(dt(2024, 3, 1), dt(2025, 3, 1))


def test_minutes_padded_hours_not():
    assert format_time(dt(2024, 3, 1, 9, 5)) == "9:05"
    assert format_time(dt(2024, 3, 1, 0, 0)) == "0:00"
    assert format_date(dt(2024, 3, 1)) == "1/3"
    assert format_date_and_time(dt(2024, 12, 25, 18, 30)) == "25/12 18:30"


def test_single_day_range():
    assert event_date_string(dt(2024, 3, 1, 14, 0), dt(2024, 3, 1, 16, 0)) == "14:00 - 16:00"


def test_multi_day_range():
    assert event_date_string(dt(2024, 3, 1, 23, 30), dt(2024, 3, 2, 0, 30)) == "1/3 23:30 - 2/3 0:30"


def test_section_subtitle():
    single = Event("meeting", dt(2024, 3, 1, 14, 0), dt(2024, 3, 1, 16, 0))
    multi = Event("trip", dt(2024, 3, 1, 14, 0), dt(2024, 3, 4, 16, 0))

    assert section_subtitle(single) == "1 March"
    assert section_subtitle(multi) == ""


def test_creation_summary():
    event = Event("lunch", dt(2024, 3, 2, 12, 0), dt(2024, 3, 2, 13, 0))

    assert creation_summary(event) == ("lunch created", "From: 2/3 12:00 \nTo: 2/3 13:00")

"""
Display formatting for resolved events.
Hours, days and months are not zero-padded; minutes always are.
"""

from datetime import datetime
from typing import Tuple

from phrasecal.event_models import Event

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def same_day(first: datetime, second: datetime) -> bool:
    """True if both datetimes fall on the same day, month and year."""
    return (
        first.day == second.day
        and first.month == second.month
        and first.year == second.year
    )


def format_time(value: datetime) -> str:
    """'H:MM', e.g. '9:05'."""
    return f"{value.hour}:{value.minute:02d}"


def format_date(value: datetime) -> str:
    """'D/M', e.g. '1/3'."""
    return f"{value.day}/{value.month}"


def format_date_and_time(value: datetime) -> str:
    """'D/M H:MM'."""
    return f"{format_date(value)} {format_time(value)}"


def event_date_string(start: datetime, end: datetime) -> str:
    """
    Date range shown next to the event title.

    Returns:
        'H:MM - H:MM' when start and end share a day, otherwise 'D/M H:MM - D/M H:MM'
    """
    if same_day(start, end):
        return f"{format_time(start)} - {format_time(end)}"
    return f"{format_date_and_time(start)} - {format_date_and_time(end)}"


def section_subtitle(event: Event) -> str:
    # Only single-day events get a day label, e.g. "1 March"
    if not same_day(event.start_date, event.end_date):
        return ""
    return f"{event.start_date.day} {MONTH_NAMES[event.start_date.month - 1]}"


def creation_summary(event: Event) -> Tuple[str, str]:
    """Title and body of the confirmation shown after an event is created."""
    title = f"{event.title} created"
    body = f"From: {format_date_and_time(event.start_date)} \nTo: {format_date_and_time(event.end_date)}"
    return title, body

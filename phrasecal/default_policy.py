"""
Fallback values for events whose title, start or end is missing from the input.
"""

from datetime import timedelta

from phrasecal.clock import Clock, system_clock
from phrasecal.event_models import Event

DEFAULT_TITLE = "Event"
DEFAULT_DURATION = timedelta(hours=1)


def default_end(start):
    """End of an event that only has a start: one wall-clock hour later."""
    return start + DEFAULT_DURATION


def default_event(clock: Clock = system_clock) -> Event:
    """
    Create a default event:
    - Title: "Event"
    - Start: the clock's current time
    - End: one hour after the start

    Args:
        clock: Time source; evaluated on every call

    Returns:
        A new default Event
    """
    start = clock()
    return Event(title=DEFAULT_TITLE, start_date=start, end_date=default_end(start))

"""
Time sources for the resolver.
A clock is any zero-argument callable returning the current local datetime.
"""

from datetime import datetime
from typing import Callable

from dateutil import tz as dateutil_tz

Clock = Callable[[], datetime]


def system_clock() -> datetime:
    """Current wall-clock time in the system timezone, seconds precision."""
    return datetime.now(dateutil_tz.tzlocal()).replace(microsecond=0)


def fixed_clock(instant: datetime) -> Clock:
    """Clock that always returns `instant` (naive values get the system timezone)."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=dateutil_tz.tzlocal())
    instant = instant.replace(microsecond=0)

    def _now() -> datetime:
        return instant

    return _now

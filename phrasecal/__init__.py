"""PhraseCal: create calendar events from natural language."""

from phrasecal.event_models import DateTimeSpan, Event, EventValidationError, ExternalParserError
from phrasecal.event_resolver import resolve

__version__ = "0.1.0"

__all__ = [
    "DateTimeSpan",
    "Event",
    "EventValidationError",
    "ExternalParserError",
    "resolve",
]

"""
Event data models for natural-language event resolution.
Defines Event (the resolved calendar event) and DateTimeSpan (parser output).
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


class PhraseCalError(Exception):
    """Base class for PhraseCal errors."""


class ExternalParserError(PhraseCalError):
    """The underlying date/time phrase parser raised while reading the input."""

    def __init__(self, text: str, cause: BaseException):
        super().__init__(f"Date parser failed on {text!r}: {cause}")
        self.text = text
        self.cause = cause


class EventValidationError(PhraseCalError):
    """A resolved event violates end_date >= start_date."""

    def __init__(self, start_date: datetime, end_date: datetime):
        super().__init__(f"Event ends ({end_date.isoformat()}) before it starts ({start_date.isoformat()})")
        self.start_date = start_date
        self.end_date = end_date


@dataclass(frozen=True)
class Event:
    """
    Calendar event produced by the resolver.
    A new instance is built for every resolution; use dataclasses.replace to derive one.
    """
    title: str
    start_date: datetime
    end_date: datetime

    def duration_minutes(self) -> int:
        """Get event duration in minutes."""
        delta = self.end_date - self.start_date
        return int(delta.total_seconds() / 60)

    def is_inverted(self) -> bool:
        """True if the event ends before it starts."""
        return self.end_date < self.start_date


@dataclass(frozen=True)
class DateTimeSpan:
    """
    Date/time expression located in the input text.
    start_index/end_index are offsets of matched_text in the original input.
    """
    matched_text: str
    start: datetime
    end: Optional[datetime] = None
    start_index: int = 0
    end_index: int = 0

"""
Event resolver: turns a free-text phrase into a complete Event.
Combines date/time extraction, title cleanup and the default policy.
"""

from dataclasses import replace
from typing import Optional

from phrasecal.clock import Clock, system_clock
from phrasecal.datetime_extraction import PhraseParser, extract_span
from phrasecal.default_policy import DEFAULT_TITLE, default_end, default_event
from phrasecal.event_models import Event, EventValidationError
from phrasecal.logging_helper import Log
from phrasecal.title_extraction import extract_title


def resolve(
    text: str,
    clock: Clock = system_clock,
    parser: Optional[PhraseParser] = None,
    reject_inverted: bool = False,
) -> Event:
    """
    Resolve an event from natural language. Missing fields are filled with defaults:
    - Missing title: "Event"
    - Missing start: the clock's current time
    - Missing end: one hour after the start

    When no date/time is found the whole input becomes the title, verbatim.
    When one is found the title is the input minus the date phrase, cleaned up.

    Args:
        text: Event described in natural language (may be empty)
        clock: Time source for defaults and relative dates
        parser: Phrase parser override, mostly for tests
        reject_inverted: Raise instead of returning an event that ends before it starts

    Returns:
        A new Event

    Raises:
        ExternalParserError: the date parser itself failed
        EventValidationError: reject_inverted is set and end < start
    """
    event = default_event(clock)
    if not text:
        return event

    span = extract_span(text, clock=clock, parser=parser)
    if span is None:
        # Freeform title; deliberately not trimmed or defaulted
        return replace(event, title=text)

    end = span.end if span.end is not None else default_end(span.start)
    event = Event(
        title=extract_title(text, span.matched_text) or DEFAULT_TITLE,
        start_date=span.start,
        end_date=end,
    )

    if event.is_inverted():
        Log.warn(f"Resolved event ends before it starts: {event.start_date} -> {event.end_date}")
        if reject_inverted:
            raise EventValidationError(event.start_date, event.end_date)

    return event

"""
DateTime extraction: locates the first date/time span in free text.
Wraps dateparser's search_dates and joins "<date> to <date>" pairs into ranges.
"""

import re
from datetime import datetime, timedelta
from typing import List, Optional, Protocol, Sequence, Tuple

from dateparser.search import search_dates

from phrasecal.clock import Clock, system_clock
from phrasecal.event_models import DateTimeSpan, ExternalParserError
from phrasecal.logging_helper import Log

RawMatch = Tuple[str, datetime]
Located = Tuple[int, int, datetime, str]

# Text allowed between the two halves of a range, e.g. "tomorrow to friday", "14:00-16:00", "8:00 to at 9"
_RANGE_CONNECTOR = re.compile(r"^\s*(?:to|until|till|through|thru|-|–)\s*(?:(?:on|at)\s+)?$", re.IGNORECASE)

# Range keyword hidden from the parser ("from 10am" reads as a month otherwise)
_RANGE_KEYWORD = re.compile(r"\bfrom\b", re.IGNORECASE)

# Relative modifier the parser leaves out of its match ("next friday" -> "friday")
_RELATIVE_MODIFIER = re.compile(r"\b(?:next|this|last|coming)\s+$", re.IGNORECASE)

# Match carrying a time of day but no date: "16:00", "at 8", "12pm", "noon"
_TIME_ONLY = re.compile(
    r"^\s*(?:at\s+)?(?:\d{1,2}(?:[:.]\d{2})?\s*(?:[ap]\.?m\.?)?|noon|midnight)\s*$",
    re.IGNORECASE,
)


class PhraseParser(Protocol):
    """External natural-language date parser: (substring, datetime) pairs in text order."""

    def search(self, text: str, relative_base: datetime) -> List[RawMatch]:
        ...


class DateparserPhraseParser:
    """PhraseParser backed by dateparser.search.search_dates."""

    def __init__(self, languages: Optional[Sequence[str]] = None):
        self.languages = list(languages) if languages else ["en"]

    def search(self, text: str, relative_base: datetime) -> List[RawMatch]:
        settings = {
            # dateparser expects a naive relative base; results are localized by the caller
            "RELATIVE_BASE": relative_base.replace(tzinfo=None),
            "PREFER_DATES_FROM": "future",
            "RETURN_AS_TIMEZONE_AWARE": False,
        }
        results = search_dates(text, languages=self.languages, settings=settings)
        return list(results or [])


def mask_range_keyword(text: str) -> str:
    """Replace each "from" with spaces of the same length, keeping offsets intact."""
    return _RANGE_KEYWORD.sub(lambda m: " " * len(m.group(0)), text)


def _locate(text: str, matches: List[RawMatch]) -> List[Located]:
    """
    Attach source offsets to raw matches by scanning the text left to right.
    A relative modifier right before a match ("next" in "next friday") is pulled into it.
    """
    located = []
    cursor = 0
    for substring, value in matches:
        if not substring:
            continue
        index = text.find(substring, cursor)
        if index < 0:
            # Parser normalized the substring or reordered matches; retry from the beginning
            index = text.find(substring)
        if index < 0:
            Log.warn(f"Parser match {substring!r} not found in input, skipping")
            continue
        start = index
        if index >= cursor:
            modifier = _RELATIVE_MODIFIER.search(text[cursor:index])
            if modifier:
                start = cursor + modifier.start()
        located.append((start, index + len(substring), value, substring))
        cursor = index + len(substring)
    return located


def _localize(value: datetime, now: datetime) -> datetime:
    if value.tzinfo is None:
        value = value.replace(tzinfo=now.tzinfo)
    return value.replace(microsecond=0)


def _anchor_end(start: datetime, end: datetime, end_text: str) -> datetime:
    """
    A time-only end ("tomorrow 14:00 to 16:00") belongs to the start's calendar
    day, or to the day after for overnight ranges ("22:00 to 01:00").
    Ends that name a date are returned untouched.
    """
    if not _TIME_ONLY.match(end_text):
        return end
    anchored = end.replace(year=start.year, month=start.month, day=start.day)
    if anchored < start:
        anchored += timedelta(days=1)
    return anchored


def _join_ranges(text: str, located: List[Located], now: datetime) -> List[DateTimeSpan]:
    spans = []
    i = 0
    while i < len(located):
        start_index, end_index, start_value, _ = located[i]
        start_value = _localize(start_value, now)
        if i + 1 < len(located):
            next_start, next_end, next_value, next_text = located[i + 1]
            if next_start >= end_index and _RANGE_CONNECTOR.match(text[end_index:next_start]):
                end_value = _anchor_end(start_value, _localize(next_value, now), next_text)
                spans.append(DateTimeSpan(
                    matched_text=text[start_index:next_end],
                    start=start_value,
                    end=end_value,
                    start_index=start_index,
                    end_index=next_end,
                ))
                i += 2
                continue
        spans.append(DateTimeSpan(
            matched_text=text[start_index:end_index],
            start=start_value,
            end=None,
            start_index=start_index,
            end_index=end_index,
        ))
        i += 1
    return spans


def find_spans(
    text: str,
    clock: Clock = system_clock,
    parser: Optional[PhraseParser] = None,
) -> List[DateTimeSpan]:
    """
    Find every date/time span in `text`, in order of occurrence.

    Raises:
        ExternalParserError: the parser failed for reasons other than malformed input
    """
    if not text:
        return []

    parser = parser or DateparserPhraseParser()
    now = clock()
    masked = mask_range_keyword(text)
    try:
        matches = parser.search(masked, now)
    except (ValueError, OverflowError) as err:
        # Out-of-range or otherwise unparseable values: treat as no date found
        Log.warn(f"Date parser rejected input: {err}")
        return []
    except Exception as err:
        raise ExternalParserError(text, err) from err

    Log.debug(f"Raw parser matches for {masked!r}: {matches}")
    # Offsets are shared between masked and original text, spans quote the original
    return _join_ranges(text, _locate(masked, matches), now)


def extract_span(
    text: str,
    clock: Clock = system_clock,
    parser: Optional[PhraseParser] = None,
) -> Optional[DateTimeSpan]:
    """
    Return the first date/time span found in `text`, or None.

    Args:
        text: Raw user input, possibly empty
        clock: Time source used as the parser's relative base
        parser: Phrase parser; defaults to DateparserPhraseParser

    Returns:
        The earliest span, or None when nothing was found
    """
    spans = find_spans(text, clock=clock, parser=parser)
    if not spans:
        return None
    span = spans[0]
    Log.kv({
        "stage": "extract",
        "matched": repr(span.matched_text),
        "start": span.start.isoformat(),
        "end": span.end.isoformat() if span.end else None,
        "candidates": len(spans),
    })
    return span

"""
Event draft: the presentation state between the user's text and the calendar.
Re-resolves on every input change and hands the confirmed event to the connector.
"""

from typing import Callable, Optional, Sequence

from phrasecal import notifications, settings_manager
from phrasecal.calendar_connector import create_calendar_event
from phrasecal.clock import Clock, system_clock
from phrasecal.datetime_extraction import DateparserPhraseParser, PhraseParser
from phrasecal.event_models import Event, EventValidationError, ExternalParserError
from phrasecal.event_resolver import resolve
from phrasecal.formatting import creation_summary, event_date_string, section_subtitle
from phrasecal.logging_helper import Log


class EventDraft:
    """
    Holds the event currently shown to the user.

    A failed resolution leaves the previous event in place and notifies the user.
    """

    def __init__(
        self,
        clock: Clock = system_clock,
        parser: Optional[PhraseParser] = None,
        languages: Optional[Sequence[str]] = None,
        calendar_preference: Optional[str] = None,
        calendar_name: str = "",
        reject_inverted: bool = False,
        create_event: Callable[..., bool] = create_calendar_event,
    ):
        self.clock = clock
        self.parser = parser or DateparserPhraseParser(languages)
        self.calendar_preference = calendar_preference
        self.calendar_name = calendar_name
        self.reject_inverted = reject_inverted
        self._create_event = create_event
        self.text = ""
        self.event: Event = self._resolve("")

    @classmethod
    def from_settings(cls, **kwargs) -> "EventDraft":
        """Build a draft configured from the persisted user settings."""
        kwargs.setdefault("languages", settings_manager.get_languages())
        kwargs.setdefault("calendar_preference", settings_manager.get_preferred_calendar())
        kwargs.setdefault("calendar_name", settings_manager.get_calendar_name())
        kwargs.setdefault("reject_inverted", settings_manager.get_reject_inverted_intervals())
        return cls(**kwargs)

    def _resolve(self, text: str) -> Event:
        return resolve(text, clock=self.clock, parser=self.parser, reject_inverted=self.reject_inverted)

    def update(self, text: str) -> bool:
        """
        Re-resolve the draft from new input text.

        Returns:
            True if the event was replaced, False if resolution failed
        """
        try:
            event = self._resolve(text)
        except (ExternalParserError, EventValidationError) as e:
            Log.error(f"parsing error: {e}")
            Log.kv({"stage": "draft", "result": "parse_failed", "text": repr(text)})
            notifications.notify_parse_failed(e)
            return False

        self.text = text
        self.event = event
        return True

    @property
    def subtitle(self) -> str:
        return section_subtitle(self.event)

    @property
    def item_subtitle(self) -> str:
        return event_date_string(self.event.start_date, self.event.end_date)

    def confirm(self) -> bool:
        """
        Send the current event to the calendar.

        On success the user is notified and the draft starts over with a default event.
        """
        event = self.event
        Log.section("Create Event")
        Log.kv({
            "stage": "draft",
            "action": "confirm",
            "event_title": event.title,
            "start": event.start_date.isoformat(),
            "end": event.end_date.isoformat(),
        })

        created = self._create_event(
            event,
            calendar_preference=self.calendar_preference,
            calendar_name=self.calendar_name,
        )
        if not created:
            Log.error("Failed to create calendar event")
            notifications.notify_creation_failed(event.title)
            return False

        title, message = creation_summary(event)
        notifications.notify_event_created(title, message)
        self.text = ""
        self.event = self._resolve("")
        return True

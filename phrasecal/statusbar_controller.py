"""
Status bar controller for menu bar app interface.
Handles the "New Event" prompt, calendar selection and quit.
"""

import rumps  # type: ignore  # rumps is provided by the 'rumps' package, ensure it is installed

from phrasecal import settings_manager
from phrasecal.event_draft import EventDraft
from phrasecal.logging_helper import Log

CALENDAR_LABELS = {
    "apple": "Apple Calendar",
    "google": "Google Calendar",
}


class StatusBarController(rumps.App):
    """
    Menu bar app controller using rumps.
    Provides menu items for creating an event, picking a calendar, and quit.
    """

    def __init__(self):
        """Initialize the status bar app."""
        super(StatusBarController, self).__init__(
            "PhraseCal",
            title="📆",
            icon=None,
            quit_button=None  # We'll add quit manually
        )

        self.draft = EventDraft.from_settings()

        self.calendar_items = {
            key: rumps.MenuItem(label, callback=self.calendar_menu_item)
            for key, label in CALENDAR_LABELS.items()
        }
        calendar_menu = rumps.MenuItem("Calendar")
        for item in self.calendar_items.values():
            calendar_menu.add(item)
        self._refresh_calendar_state()

        # Set up menu items: "New Event…", "Calendar" submenu, separator, "Quit"
        self.menu = [
            rumps.MenuItem("New Event…", callback=self.new_event_menu_item, key="n"),
            calendar_menu,
            None,  # Separator
            rumps.MenuItem("Quit", callback=self.quit_menu_item)
        ]

        Log.section("StatusBar Controller")
        Log.info("Initializing menu bar app")

    def _refresh_calendar_state(self):
        preferred = self.draft.calendar_preference or "apple"
        for key, item in self.calendar_items.items():
            item.state = 1 if key == preferred else 0

    def new_event_menu_item(self, _):
        """Prompt for an event phrase, preview the result, and create it on confirmation."""
        Log.section("New Event Menu Item Clicked")

        window = rumps.Window(
            message='Describe your event, e.g. "lunch from tomorrow to next friday"',
            title="New Event",
            default_text=self.draft.text,
            ok="Preview",
            cancel="Cancel",
            dimensions=(320, 24),
        )
        response = window.run()
        if not response.clicked:
            Log.info("User cancelled event entry")
            return

        if not self.draft.update(response.text):
            # Previous draft stays in place; user was notified
            return

        event = self.draft.event
        heading = self.draft.subtitle or "New Event"
        choice = rumps.alert(
            title=event.title,
            message=f"{heading}\n{self.draft.item_subtitle}",
            ok="Create Event",
            cancel="Cancel",
        )
        if choice != 1:
            Log.info("User dismissed event preview")
            return

        self.draft.confirm()

    def calendar_menu_item(self, sender):
        """Switch between Apple and Google Calendar."""
        for key, item in self.calendar_items.items():
            if item is sender:
                settings_manager.set_preferred_calendar(key)
                self.draft.calendar_preference = key
        self._refresh_calendar_state()

    def quit_menu_item(self, _):
        """Handle quit button click."""
        Log.section("Quit Menu Item Clicked")
        Log.info("User clicked Quit - exiting app")
        rumps.quit_application()

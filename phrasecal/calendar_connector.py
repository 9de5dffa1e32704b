"""
Calendar Connector for creating calendar events in multiple calendar systems.
Supports Apple Calendar (via AppleScript) and Google Calendar (via browser URLs).

Event fields are handed over as data: AppleScript receives them as run-handler
arguments and the Google URL receives them percent-encoded. User text is never
spliced into script source.
"""

import os
import subprocess
from datetime import datetime
from typing import List, Optional
from urllib.parse import quote

from dateutil import tz as dateutil_tz
import tzlocal

from phrasecal.event_models import Event
from phrasecal.logging_helper import Log

GOOGLE_CALENDAR_URL = "https://calendar.google.com/calendar/r/eventedit"

# Arguments: title, 6 start components, 6 end components, calendar name ("" = first calendar)
APPLE_CALENDAR_SCRIPT = """
on run argv
    set eventTitle to item 1 of argv
    set startDate to my makeDate(items 2 thru 7 of argv)
    set endDate to my makeDate(items 8 thru 13 of argv)
    set calendarName to item 14 of argv
    tell application "Calendar"
        if calendarName is "" then
            set targetCalendar to first calendar
        else
            set targetCalendar to first calendar whose name is calendarName
        end if
        tell targetCalendar
            make new event at end with properties {summary:eventTitle, start date:startDate, end date:endDate}
        end tell
    end tell
end run

on makeDate(parts)
    set theDate to current date
    set day of theDate to 1
    set year of theDate to (item 1 of parts) as integer
    set month of theDate to (item 2 of parts) as integer
    set day of theDate to (item 3 of parts) as integer
    set time of theDate to ((item 4 of parts) as integer) * hours + ((item 5 of parts) as integer) * minutes + ((item 6 of parts) as integer)
    return theDate
end makeDate
"""


def _tzinfo_to_iana(tzinfo) -> Optional[str]:
    """
    Attempt to extract an IANA timezone identifier from a tzinfo object.
    """
    if tzinfo is None:
        return None

    # Common attributes exposed by zoneinfo.ZoneInfo or pytz timezones
    for attr in ("key", "zone", "name"):
        value = getattr(tzinfo, attr, None)
        if isinstance(value, str) and value:
            # IANA identifiers typically contain '/' but "UTC" is also valid
            if "/" in value or value.upper() == "UTC":
                return value

    return None


def _resolve_iana_timezone(event: Event) -> Optional[str]:
    """
    Resolve an IANA timezone identifier for use with Google Calendar URLs.

    Prefers timezone information from the event. Falls back to the
    system timezone via tzlocal.
    """
    for dt in (event.start_date, event.end_date):
        iana = _tzinfo_to_iana(dt.tzinfo)
        if iana:
            return iana

    try:
        iana = tzlocal.get_localzone_name()
        if isinstance(iana, str) and iana:
            return iana
    except Exception as tz_err:
        # tzlocal raises a variety of errors on misconfigured systems
        Log.warn(f"Failed to determine system IANA timezone: {tz_err}")

    return None


def _as_aware(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        # If no timezone, assume it's local time (system timezone)
        system_tz = dateutil_tz.tzlocal()
        Log.warn(f"Datetime missing timezone info, assuming system timezone: {system_tz}")
        return dt.replace(tzinfo=system_tz)
    return dt


def _format_google_calendar_datetime(dt: datetime) -> str:
    """
    Format datetime to Google Calendar URL format (UTC).

    Args:
        dt: datetime object (in system timezone or UTC)

    Returns:
        Formatted datetime string (YYYYMMDDTHHMMSSZ)
    """
    dt_utc = _as_aware(dt).astimezone(dateutil_tz.tzutc())
    return dt_utc.strftime('%Y%m%dT%H%M%SZ')


def generate_google_calendar_url(event: Event) -> str:
    """
    Generate a Google Calendar URL with pre-filled event details.

    Args:
        event: Resolved Event

    Returns:
        Google Calendar URL string
    """
    start_str = _format_google_calendar_datetime(event.start_date)
    end_str = _format_google_calendar_datetime(event.end_date)
    Log.info(f"Google Calendar URL datetime strings - Start: {start_str}, End: {end_str}")

    # Format: ...eventedit?action=TEMPLATE&dates=START%2FEND&text=TITLE&ctz=ZONE
    url = f"{GOOGLE_CALENDAR_URL}?action=TEMPLATE&dates={start_str}%2F{end_str}&text={quote(event.title, safe='')}"

    iana_timezone = _resolve_iana_timezone(event)
    if iana_timezone:
        Log.info(f"Using IANA timezone for Google Calendar URL: {iana_timezone}")
        url += f"&ctz={quote(iana_timezone, safe='')}"
    else:
        Log.warn("Unable to determine IANA timezone for Google Calendar URL; defaulting to Google account settings")

    return url


def _date_components(dt: datetime) -> List[str]:
    # AppleScript dates are local wall-clock values
    local = _as_aware(dt).astimezone()
    return [str(part) for part in (local.year, local.month, local.day, local.hour, local.minute, local.second)]


def build_osascript_command(event: Event, calendar_name: str = "") -> List[str]:
    """
    Build the osascript invocation that creates `event` in Apple Calendar.
    The script is read from stdin ("-"), so everything after it is argv even
    when the title starts with a dash.
    """
    return [
        "osascript", "-",
        event.title,
        *_date_components(event.start_date),
        *_date_components(event.end_date),
        calendar_name or "",
    ]


def _create_apple_calendar_event(event: Event, calendar_name: str = "") -> bool:
    Log.info(f"Creating Apple Calendar event for: {event.title}")
    try:
        result = subprocess.run(
            build_osascript_command(event, calendar_name),
            input=APPLE_CALENDAR_SCRIPT,
            capture_output=True,
            text=True,
        )
    except OSError as e:
        Log.error(f"Failed to execute AppleScript: {e}")
        Log.kv({"stage": "calendar", "result": "failed", "calendar_type": "apple", "error": str(e)})
        return False

    if result.returncode != 0:
        Log.warn(f"Failed to create Calendar event: {result.stderr.strip()}")
        Log.kv({"stage": "calendar", "result": "failed", "calendar_type": "apple", "code": result.returncode})
        return False

    Log.kv({
        "stage": "calendar",
        "result": "success",
        "calendar_type": "apple",
        "event_title": event.title,
    })
    return True


def _open_google_calendar(event: Event) -> bool:
    Log.info(f"Creating Google Calendar event for: {event.title}")
    url = generate_google_calendar_url(event)
    try:
        subprocess.run(['open', url], check=True)
    except (OSError, subprocess.CalledProcessError) as e:
        Log.warn(f"Failed to open Google Calendar URL: {e}")
        Log.kv({"stage": "calendar", "result": "failed", "calendar_type": "google", "error": str(e)})
        return False

    Log.info(f"Opened Google Calendar URL in browser: {url[:100]}...")
    Log.kv({
        "stage": "calendar",
        "result": "success",
        "calendar_type": "google",
        "event_title": event.title,
    })
    return True


def create_calendar_event(
    event: Event,
    calendar_preference: Optional[str] = None,
    calendar_name: Optional[str] = None,
) -> bool:
    """
    Create a calendar event in the user's preferred calendar system.
    Without an explicit preference, the USE_GOOGLE_CALENDAR environment
    variable selects Google Calendar.

    - Google: generates a Google Calendar URL and opens it in the browser
    - Apple: creates the event in macOS Calendar through AppleScript

    Args:
        event: Resolved Event
        calendar_preference: "apple" or "google"
        calendar_name: Apple Calendar to use; empty means the first calendar

    Returns:
        True if the event was handed to the calendar, False on failure
    """
    Log.section("Calendar Connector")

    if calendar_preference is None:
        use_google_calendar = os.environ.get('USE_GOOGLE_CALENDAR', '').lower() in ('1', 'true', 'yes')
    else:
        use_google_calendar = calendar_preference == "google"

    if use_google_calendar:
        return _open_google_calendar(event)
    return _create_apple_calendar_event(event, calendar_name or "")

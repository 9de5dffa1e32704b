"""
Notification helper for showing macOS notifications to the user.
Uses rumps' notification center bridge; without rumps (non-macOS) messages are only logged.
"""

from phrasecal.logging_helper import Log

try:
    import rumps  # type: ignore
    RUMPS_AVAILABLE = True
except ImportError:
    RUMPS_AVAILABLE = False


APP_NAME = "PhraseCal"


def show_notification(title: str, subtitle: str = "", message: str = "") -> bool:
    """
    Show a user notification.

    Args:
        title: Notification title
        subtitle: Secondary line
        message: Body text

    Returns:
        True if a notification was posted, False if it was only logged
    """
    Log.kv({"stage": "notify", "title": title, "subtitle": subtitle, "message": message.replace("\n", " ")})

    if not RUMPS_AVAILABLE:
        Log.info("rumps not available - notification logged only")
        return False

    try:
        rumps.notification(title, subtitle, message)
        return True
    except RuntimeError as e:
        # rumps raises RuntimeError when the app bundle has no Info.plist
        Log.warn(f"Failed to show notification: {e}")
        return False


def notify_event_created(title: str, message: str) -> bool:
    return show_notification(title, "", message)


def notify_creation_failed(event_title: str) -> bool:
    return show_notification(APP_NAME, "Could not create event", event_title)


def notify_parse_failed(error: Exception) -> bool:
    return show_notification(APP_NAME, "Could not parse the string", str(error))

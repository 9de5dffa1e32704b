import os
import tempfile
from datetime import datetime

# Keep logs and settings out of the user's Library during tests
_TMP_ROOT = tempfile.mkdtemp(prefix="phrasecal-tests-")
os.environ["PHRASECAL_LOG_DIR"] = os.path.join(_TMP_ROOT, "logs")
os.environ["PHRASECAL_SETTINGS_DIR"] = os.path.join(_TMP_ROOT, "settings")

import pytest
from dateutil import tz

from phrasecal import notifications, settings_manager
from phrasecal.clock import fixed_clock
from phrasecal.datetime_extraction import mask_range_keyword

UTC = tz.tzutc()


class ScriptedParser:
    """
    PhraseParser returning canned (substring, datetime) matches per input text.
    Keys are written as the user typed them; the parser sees "from" blanked out.
    """

    def __init__(self, results=None, error=None):
        self.results = results or {}
        self.error = error
        self.calls = []

    def search(self, text, relative_base):
        self.calls.append((text, relative_base))
        if self.error is not None:
            raise self.error
        for key, matches in self.results.items():
            if key == text or mask_range_keyword(key) == text:
                return list(matches)
        return []


@pytest.fixture()
def now():
    return datetime(2024, 3, 1, 9, 0, 0, tzinfo=UTC)


@pytest.fixture()
def clock(now):
    return fixed_clock(now)


@pytest.fixture()
def make_parser():
    return ScriptedParser


@pytest.fixture()
def settings_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(settings_manager, "SETTINGS_DIR", tmp_path)
    monkeypatch.setattr(settings_manager, "SETTINGS_FILE", tmp_path / "settings.json")
    return tmp_path


@pytest.fixture()
def notified(monkeypatch):
    sent = []

    def fake_show(title, subtitle="", message=""):
        sent.append((title, subtitle, message))
        return True

    monkeypatch.setattr(notifications, "show_notification", fake_show)
    return sent

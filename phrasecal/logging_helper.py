"""
Logging helper module for terminal-first logging.
All output goes to stdout with formatted prefixes, and also to a log file.
"""

import os
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO

_log_file_path: Optional[Path] = None
_log_file: Optional[TextIO] = None
_log_file_failed = False


def _log_dir() -> Path:
    override = os.environ.get("PHRASECAL_LOG_DIR")
    if override:
        return Path(override)
    return Path.home() / "Library" / "Logs" / "PhraseCal"


def _open_log_file() -> Optional[TextIO]:
    """Open the session log file on first use. Falls back to stdout-only."""
    global _log_file, _log_file_path, _log_file_failed

    if _log_file is not None or _log_file_failed:
        return _log_file

    try:
        log_dir = _log_dir()
        log_dir.mkdir(parents=True, exist_ok=True)
        _log_file_path = log_dir / f"phrasecal_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
        _log_file = open(_log_file_path, 'a', encoding='utf-8')
    except OSError as err:
        _log_file_failed = True
        print(f"[WARN] Log file unavailable, logging to stdout only: {err}")
    return _log_file


def _log(message: str):
    """Write message to both stdout and log file."""
    print(message)
    log_file = _open_log_file()
    if log_file is not None:
        log_file.write(message + '\n')
        log_file.flush()


class Log:
    """Simple logging class that outputs to stdout and log file with formatted prefixes."""

    @staticmethod
    def section(title: str):
        """Print a section header: blank line + '===== TITLE ====='"""
        _log("")
        _log(f"===== {title} =====")

    @staticmethod
    def info(message: str):
        """Print an info message: '[INFO] message'"""
        _log(f"[INFO] {message}")

    @staticmethod
    def debug(message: str):
        """Print a debug message when PHRASECAL_DEBUG is set: '[DEBUG] message'"""
        if os.environ.get("PHRASECAL_DEBUG", "").lower() in ("1", "true", "yes"):
            _log(f"[DEBUG] {message}")

    @staticmethod
    def warn(message: str):
        """Print a warning message: '[WARN] message'"""
        _log(f"[WARN] {message}")

    @staticmethod
    def error(message: str):
        """Print an error message: '[ERROR] message'"""
        _log(f"[ERROR] {message}")

    @staticmethod
    def kv(pairs: dict):
        """
        Print key-value pairs: '[KV] key=value | key2=value2'

        Args:
            pairs: Dictionary of key-value pairs to print
        """
        kv_string = " | ".join([f"{k}={v}" for k, v in pairs.items()])
        _log(f"[KV] {kv_string}")

    @staticmethod
    def get_log_path() -> str:
        """Get the path to the current log file."""
        _open_log_file()
        return str(_log_file_path) if _log_file_path is not None else ""

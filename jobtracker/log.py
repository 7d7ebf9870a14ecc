"""Logging setup: console on stdout, plus a dated file once an entry point asks.

Modules call ``get_logger(__name__)``; the first call attaches the console
handler. ``configure_logging()`` is called by entry scripts after settings are
loaded and points the daily ``jobtracker_YYYY-MM-DD.log`` at ``log_dir``.
"""
from __future__ import annotations

import logging
import os
import sys
from datetime import date
from pathlib import Path

_ROOT_DIR = Path(__file__).resolve().parent.parent
DEFAULT_LOG_DIR = "logs"
_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"
_DATE_FMT = "%Y-%m-%d %H:%M:%S"

_console: logging.Handler | None = None
_file_handler: logging.Handler | None = None
_started = False


def _level(name: str | None = None) -> int:
    name = (name or os.environ.get("LOG_LEVEL") or "INFO").upper()
    return getattr(logging, name, logging.INFO)


def _formatter() -> logging.Formatter:
    return logging.Formatter(_FORMAT, datefmt=_DATE_FMT)


def get_logger(name: str) -> logging.Logger:
    """Return a named logger; attaches the console handler on first call."""
    global _console, _started
    if not _started:
        _started = True
        root = logging.getLogger()
        root.setLevel(_level())
        # Leave handlers alone when the host process already set logging up
        if not root.handlers:
            _console = logging.StreamHandler(sys.stdout)
            _console.setLevel(_level())
            _console.setFormatter(_formatter())
            root.addHandler(_console)
    return logging.getLogger(name)


def configure_logging(log_dir: str | Path | None = DEFAULT_LOG_DIR, level: str | None = None) -> Path | None:
    """Set the level and (re)point the daily file handler.

    Relative ``log_dir`` values resolve against the project root. ``None``
    turns file logging off. Returns the log file path, or None.
    """
    global _file_handler
    get_logger(__name__)
    root = logging.getLogger()
    root.setLevel(_level(level))
    if _console is not None:
        _console.setLevel(_level(level))

    if _file_handler is not None:
        root.removeHandler(_file_handler)
        _file_handler.close()
        _file_handler = None
    if not log_dir:
        return None

    path = Path(log_dir)
    if not path.is_absolute():
        path = _ROOT_DIR / path
    log_file = path / f"jobtracker_{date.today():%Y-%m-%d}.log"
    try:
        path.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file, encoding="utf-8")
    except OSError as exc:
        root.warning("File logging disabled: %s", exc)
        return None
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(_formatter())
    root.addHandler(fh)
    _file_handler = fh
    return log_file

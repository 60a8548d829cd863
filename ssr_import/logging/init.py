from __future__ import annotations

import logging
import sys
from typing import TextIO

"""Console logging for ssr-import.

Lines look like ``INFO Parsing data/publichealth.xlsx`` or
``SUMMARY file=... sections=...``: one label word, a space, the message.
Scripts wrapping the importer grep for the label, so no timestamps or logger
names are added. Module loggers under ``ssr_import.*`` feed the app logger.
"""

__all__ = [
    "APP_LOGGER_NAME",
    "SUMMARY_LEVEL",
    "LabeledFormatter",
    "setup_logging",
    "get_logger",
    "set_debug",
    "log_summary",
    "reset_logging",
]

APP_LOGGER_NAME = "ssr_import"

# sits between INFO (20) and WARNING (30) so it survives a quiet INFO setup
SUMMARY_LEVEL = 25

_LABELS = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    SUMMARY_LEVEL: "SUMMARY",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "CRITICAL",
}

_app_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """``<LABEL> <message>``; unknown levels fall back to the level name."""

    def format(self, record: logging.LogRecord) -> str:
        label = _LABELS.get(record.levelno, record.levelname)
        return f"{label} {record.getMessage()}"


def _console_handler(stream: TextIO) -> logging.Handler:
    h = logging.StreamHandler(stream)
    h.setLevel(logging.INFO)
    h.setFormatter(LabeledFormatter())
    return h


def setup_logging() -> logging.Logger:
    """Attach the stdout handler to the app logger; repeated calls are no-ops.

    The stream is bound at call time, so tests that swap ``sys.stdout`` must
    call ``reset_logging`` first.
    """
    global _app_logger
    if _app_logger is not None:
        return _app_logger

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
    app = logging.getLogger(APP_LOGGER_NAME)
    for old in list(app.handlers):
        app.removeHandler(old)
    app.addHandler(_console_handler(sys.stdout))
    app.setLevel(logging.INFO)
    app.propagate = False  # root handlers would print every line twice

    _app_logger = app
    return app


def get_logger() -> logging.Logger:
    return _app_logger if _app_logger is not None else setup_logging()


def set_debug(logger: logging.Logger) -> None:
    """--debug: let DEBUG records through the logger and all its handlers."""
    logger.setLevel(logging.DEBUG)
    for h in logger.handlers:
        h.setLevel(logging.DEBUG)
    logger.debug("debug mode enabled")


def log_summary(message: str) -> None:
    get_logger().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Detach the handler and forget the configured logger (tests)."""
    global _app_logger
    if _app_logger is not None:
        for h in list(_app_logger.handlers):
            _app_logger.removeHandler(h)
        _app_logger.propagate = True
        _app_logger = None

"""Logging bootstrap for the astrowheel command line.

Library modules only create ``logging.getLogger(__name__)`` loggers and
never install handlers. :func:`configure_logging` attaches one stderr
handler to the ``astrowheel`` package logger, so embedding applications
keep control of the root logger.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

__all__ = ["LEVEL_ENV_VARS", "PACKAGE_LOGGER", "configure_logging", "resolve_level"]

PACKAGE_LOGGER = "astrowheel"
# Checked in order; the package specific variable wins over the generic one.
LEVEL_ENV_VARS = ("ASTROWHEEL_LOG_LEVEL", "LOG_LEVEL")
DEFAULT_LEVEL = logging.WARNING

_FORMAT = "%(levelname)s %(name)s: %(message)s"
_HANDLER_MARK = "_astrowheel_handler"


def _parse_level(value: str | int | None) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = value.strip()
    if not text:
        return None
    if text.isdigit():
        return int(text)
    resolved = logging.getLevelName(text.upper())
    return resolved if isinstance(resolved, int) else None


def resolve_level(level: str | int | None = None) -> int:
    """Return the level to apply.

    An explicit ``level`` wins, then the first parseable value among
    :data:`LEVEL_ENV_VARS`, then ``WARNING``. Unrecognised names are
    skipped rather than raising.
    """

    parsed = _parse_level(level)
    if parsed is not None:
        return parsed
    for name in LEVEL_ENV_VARS:
        parsed = _parse_level(os.environ.get(name))
        if parsed is not None:
            return parsed
    return DEFAULT_LEVEL


def configure_logging(
    level: str | int | None = None, *, stream: IO[str] | None = None
) -> logging.Logger:
    """Route ``astrowheel.*`` records to ``stream`` (stderr by default).

    Calling it again replaces the handler installed by the previous call,
    so repeated CLI invocations in one process do not duplicate output.
    """

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_MARK, False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    setattr(handler, _HANDLER_MARK, True)
    logger.addHandler(handler)
    logger.setLevel(resolve_level(level))
    logger.propagate = False
    return logger

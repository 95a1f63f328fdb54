"""Logging setup for the command line tool.

The library modules only create module-level loggers; nothing is printed
unless an application configures logging.  :func:`configure_logging` is
that hook for ``smf-decode``.  It installs a single stderr handler on the
``smf_decoder`` logger and is safe to call repeatedly (tests do).

``SMF_DECODER_LOG_LEVEL``
    Level name (``debug``, ``info``, ``warning``, ...) used when no level
    is passed explicitly.  Defaults to ``warning``.
"""

from __future__ import annotations

import logging
import os
import sys

_LOG_LEVEL_ENV = "SMF_DECODER_LOG_LEVEL"
_DEFAULT_LEVEL = "warning"
_HANDLER_TAG = "_smf_decoder_logging_handler"
_LOGGER_NAME = "smf_decoder"

LEVEL_NAMES = ("debug", "info", "warning", "error", "critical")


def resolve_level(level: str | None = None) -> int:
    """Map a level name (or the environment default) to a logging level."""
    name = (level or os.environ.get(_LOG_LEVEL_ENV) or _DEFAULT_LEVEL).strip().lower()
    if name not in LEVEL_NAMES:
        raise ValueError(f"unknown log level {name!r}; expected one of {', '.join(LEVEL_NAMES)}")
    return getattr(logging, name.upper())


def configure_logging(level: str | None = None) -> logging.Logger:
    """Attach the package's stderr handler and set its level."""
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(resolve_level(level))

    for handler in logger.handlers:
        if getattr(handler, _HANDLER_TAG, False):
            return logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    setattr(handler, _HANDLER_TAG, True)
    logger.addHandler(handler)
    return logger

"""
Structured logging helpers for the polyrelay SDK.

The SDK logs through the standard library ``logging`` module under the
``polyrelay`` namespace. A NullHandler keeps the library silent until the
application configures logging. Structured fields are passed through
``extra={...}`` and rendered by ``configure_logging``'s formatter.

Example:
    >>> from polyrelay.utils.logging import configure_logging, get_logger
    >>> configure_logging("DEBUG")
    >>> log = get_logger(__name__)
    >>> log.info("Submitting transaction", extra={"type": "SAFE"})
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, Union

ROOT_LOGGER_NAME = "polyrelay"

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s%(context)s"

# Attributes present on every LogRecord; anything else came from ``extra``.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None)).keys()
) | {"message", "asctime", "context"}

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


class ContextFormatter(logging.Formatter):
    """Formatter that appends ``extra`` fields as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        fields = {
            key: value
            for key, value in vars(record).items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        }
        record.context = (
            " " + " ".join(f"{key}={value}" for key, value in sorted(fields.items()))
            if fields
            else ""
        )
        return super().format(record)


def get_logger(name: str) -> logging.Logger:
    """
    Return a logger inside the ``polyrelay`` namespace.

    Args:
        name: Module name, usually ``__name__``.

    Returns:
        Standard library logger.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(
    level: Union[int, str] = logging.INFO,
    fmt: Optional[str] = None,
    stream=None,
) -> logging.Handler:
    """
    Attach a stream handler to the ``polyrelay`` logger.

    Calling it again replaces the handler installed by a previous call.

    Args:
        level: Log level name or number.
        fmt: Format string; ``%(context)s`` expands to the extra fields.
        stream: Output stream (defaults to stderr).

    Returns:
        The installed handler.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        if getattr(handler, "_polyrelay_handler", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(ContextFormatter(fmt or DEFAULT_FORMAT))
    handler._polyrelay_handler = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    set_level(level)
    return handler


def set_level(level: Union[int, str]) -> None:
    """Set the level of the ``polyrelay`` logger."""
    if isinstance(level, str):
        level = level.upper()
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(level)


def enable_debug() -> None:
    """Shortcut for ``configure_logging(logging.DEBUG)``."""
    configure_logging(logging.DEBUG)


def disable_logging() -> None:
    """Silence all SDK log output."""
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(logging.CRITICAL + 1)

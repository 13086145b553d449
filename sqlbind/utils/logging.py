"""Logging helpers for sqlbind.

Library modules obtain loggers under the ``sqlbind`` namespace through
:func:`get_logger` and never install handlers themselves. Dispatch records
carry an ``extra_fields`` mapping: the operation and bound parameter count from
prepared statements (plus the positional SQL when
:attr:`~sqlbind.config.BindConfig.log_statements` is set), and the dialect and
row counts from the bundled drivers. Bound values are never logged.

:func:`configure_logging` attaches a :class:`StatementFormatter` handler for
applications and examples that want to see those records.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, TYPE_CHECKING, Any, Final

from sqlbind._serialization import encode_json

if TYPE_CHECKING:
    from logging import LogRecord

__all__ = ("NAMESPACE", "StatementFormatter", "configure_logging", "get_logger")

NAMESPACE: Final[str] = "sqlbind"


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger under the ``sqlbind`` namespace.

    Args:
        name: Logger name, prefixed with ``sqlbind.`` unless already inside the namespace.

    Returns:
        The namespace root logger when ``name`` is omitted, otherwise the child logger.
    """
    if name is None or name == NAMESPACE:
        return logging.getLogger(NAMESPACE)
    if not name.startswith(f"{NAMESPACE}."):
        name = f"{NAMESPACE}.{name}"
    return logging.getLogger(name)


class StatementFormatter(logging.Formatter):
    """Render records with their ``extra_fields`` merged in.

    Args:
        structured: Emit one JSON object per record. When ``False`` the fields
            are appended to a plain text line as ``key=value`` pairs.
    """

    def __init__(self, structured: bool = True) -> None:
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")
        self.structured = structured

    @staticmethod
    def fields(record: LogRecord) -> dict[str, Any]:
        return dict(getattr(record, "extra_fields", None) or {})

    def format(self, record: LogRecord) -> str:
        fields = self.fields(record)
        if not self.structured:
            line = super().format(record)
            if not fields:
                return line
            first, newline, rest = line.partition("\n")
            pairs = " ".join(f"{key}={value!r}" for key, value in fields.items())
            return f"{first} {pairs}{newline}{rest}"

        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **fields,
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return encode_json(entry)


def configure_logging(
    level: int | str = logging.INFO, *, structured: bool = True, stream: IO[str] | None = None
) -> logging.Logger:
    """Send ``sqlbind`` records to ``stream`` through a :class:`StatementFormatter`.

    Calling it again replaces the handler it installed before. Records stop
    propagating to the root logger.

    Args:
        level: Level for the ``sqlbind`` logger; ``"DEBUG"`` shows every dispatch.
        structured: JSON output when ``True``, ``key=value`` text otherwise.
        stream: Destination, ``sys.stderr`` by default.

    Returns:
        The configured ``sqlbind`` logger.
    """
    logger = get_logger()
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    for existing in [h for h in logger.handlers if isinstance(h.formatter, StatementFormatter)]:
        logger.removeHandler(existing)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(StatementFormatter(structured=structured))
    logger.addHandler(handler)
    logger.propagate = False
    return logger

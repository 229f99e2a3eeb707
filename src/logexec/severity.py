from __future__ import annotations

import logging
from enum import Enum

TRACE = 5


class Severity(Enum):
    TRACE = "trace"
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @property
    def logging_level(self) -> int:
        return _LOGGING_LEVELS[self]

    @classmethod
    def parse(cls, name: str | Severity) -> Severity:
        """Resolve a severity from its name (case-insensitive, WARNING allowed)."""
        if isinstance(name, cls):
            return name
        key = str(name).strip().upper()
        if key == "WARNING":
            key = "WARN"
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Invalid severity: {name!r}") from None


_LOGGING_LEVELS: dict[Severity, int] = {
    Severity.TRACE: TRACE,
    Severity.DEBUG: logging.DEBUG,
    Severity.INFO: logging.INFO,
    Severity.WARN: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}

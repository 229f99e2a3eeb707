"""Logging constants: level colors and ANSI codes."""

from __future__ import annotations

import logging

RESET = "\033[0m"
DIM = "\033[2m"
DEFAULT_COLOR = "\033[37m"

LEVEL_COLORS: dict[str, str] = {
    "TRACE":    "\033[90m",
    "DEBUG":    "\033[37m",
    "INFO":     "\033[97m",
    "WARNING":  "\033[93m",
    "ERROR":    "\033[91m",
    "CRITICAL": "\033[91;1m",
}

LOG_FILE = "logexec.log"
ERROR_LOG_FILE = "logexec_error.log"

# (file name, minimum level) for each file sink; None keeps every record
LOG_FILES: tuple[tuple[str, int | None], ...] = (
    (LOG_FILE, None),
    (ERROR_LOG_FILE, logging.ERROR),
)


def module_key(name: str) -> str:
    """Extract last dotted segment: 'app.services.billing' -> 'billing'."""
    return name.rsplit(".", 1)[-1]


def module_abbrev(name: str) -> str:
    """Three-letter tag for a logger name: 'app.billing' -> 'BIL'."""
    return module_key(name)[:3].upper()

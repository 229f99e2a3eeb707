"""Log formatters: colored console, plain file."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from logexec.constants import (
    DEFAULT_COLOR, DIM, LEVEL_COLORS, RESET, module_abbrev, module_key,
)


def _with_traceback(formatter: logging.Formatter, record: logging.LogRecord, line: str) -> str:
    if record.exc_info and not record.exc_text:
        record.exc_text = formatter.formatException(record.exc_info)
    if record.exc_text:
        line += "\n" + record.exc_text
    return line


class SmartFormatter(logging.Formatter):
    """Console formatter: ``HH:MM:SS.mmm  LEVEL [ABR|module] msg`` with colors."""

    def format(self, record: logging.LogRecord) -> str:
        ts = self.formatTime(record, "%H:%M:%S")
        ms = int(record.created * 1000) % 1000
        timestamp = f"{ts}.{ms:03d}"

        mod = module_key(record.name)
        abbrev = module_abbrev(record.name)
        level_color = LEVEL_COLORS.get(record.levelname, "")

        line = (
            f"{DIM}{timestamp}{RESET}  "
            f"{level_color}{record.levelname:<5}{RESET} "
            f"[{DEFAULT_COLOR}{abbrev}{RESET}|{DEFAULT_COLOR}{mod:<10}{RESET}] "
            f"{record.getMessage()}"
        )
        return _with_traceback(self, record, line)


class PlainFormatter(logging.Formatter):
    """File formatter: no ANSI codes, full date."""

    def format(self, record: logging.LogRecord) -> str:
        dt = datetime.fromtimestamp(record.created, tz=timezone.utc).astimezone()
        timestamp = dt.strftime("%Y-%m-%d %H:%M:%S.") + f"{int(record.created * 1000) % 1000:03d}"

        mod = module_key(record.name)
        line = f"{timestamp} {record.levelname:<8} [{mod}] {record.getMessage()}"
        return _with_traceback(self, record, line)

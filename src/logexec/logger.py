"""ExecLogger wrapper: five severity-specific write operations."""

from __future__ import annotations

import logging
import sys

from logexec.severity import TRACE

logging.addLevelName(TRACE, "TRACE")


class ExecLogger:
    """Thin wrapper over a stdlib Logger adding a TRACE write operation."""

    __slots__ = ("_logger",)

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    @property
    def name(self) -> str:
        return self._logger.name

    def _log(self, level: int, msg: str, args: tuple, exc_info=None) -> None:
        if not self._logger.isEnabledFor(level):
            return
        if exc_info is True:
            exc_info = sys.exc_info()
        elif isinstance(exc_info, BaseException):
            exc_info = (type(exc_info), exc_info, exc_info.__traceback__)
        record = self._logger.makeRecord(
            self._logger.name, level, "", 0, msg, args, exc_info=exc_info,
        )
        self._logger.handle(record)

    def trace(self, msg: str, *args, exc_info=None) -> None:
        self._log(TRACE, msg, args, exc_info)

    def debug(self, msg: str, *args, exc_info=None) -> None:
        self._log(logging.DEBUG, msg, args, exc_info)

    def info(self, msg: str, *args, exc_info=None) -> None:
        self._log(logging.INFO, msg, args, exc_info)

    def warning(self, msg: str, *args, exc_info=None) -> None:
        self._log(logging.WARNING, msg, args, exc_info)

    def error(self, msg: str, *args, exc_info=None) -> None:
        self._log(logging.ERROR, msg, args, exc_info)

    def exception(self, msg: str, *args, exc_info=True) -> None:
        self._log(logging.ERROR, msg, args, exc_info)

    def isEnabledFor(self, level: int) -> bool:
        return self._logger.isEnabledFor(level)


_loggers: dict[str, ExecLogger] = {}


def get_logger(name: str) -> ExecLogger:
    """Get or create an ExecLogger for the given module name."""
    if name not in _loggers:
        _loggers[name] = ExecLogger(logging.getLogger(name))
    return _loggers[name]

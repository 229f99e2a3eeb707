"""Logging setup: configure root logger with console + optional queued file sinks."""

from __future__ import annotations

import atexit
import logging
import os
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path
from queue import Queue

from logexec.constants import LOG_FILES
from logexec.formatters import PlainFormatter, SmartFormatter

_listeners: list[QueueListener] = []


def resolve_level(name: str) -> int:
    """Numeric level for a name such as 'TRACE' or 'warning'; INFO if unknown."""
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def _file_sink(
    path: Path,
    level: int | None,
    max_bytes: int,
    backup_count: int,
) -> tuple[QueueHandler, QueueListener]:
    """Rotating plain-text file sink fed through a queue."""
    file_handler = RotatingFileHandler(
        path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8",
    )
    file_handler.setFormatter(PlainFormatter())
    if level is not None:
        file_handler.setLevel(level)
    queue: Queue = Queue(-1)
    listener = QueueListener(queue, file_handler, respect_handler_level=True)
    return QueueHandler(queue), listener


def setup_logging(
    level: str | None = None,
    log_dir: str | None = None,
) -> None:
    """Configure root logger. Call once at startup.

    Level resolution: explicit arg > LOG_LEVEL env > config default.
    File sinks (one per entry in ``LOG_FILES``) are only attached when a
    log directory is configured.
    """
    from logexec.config import settings

    resolved = level or os.environ.get("LOG_LEVEL") or settings.log_level
    log_dir = log_dir or os.environ.get("LOG_DIR") or settings.log_dir
    root = logging.getLogger()
    root.setLevel(resolve_level(resolved))

    # Remove existing handlers to avoid duplicates on re-init
    root.handlers.clear()
    _shutdown_listeners()

    console = logging.StreamHandler()
    console.setFormatter(SmartFormatter())
    root.addHandler(console)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        for file_name, file_level in LOG_FILES:
            handler, listener = _file_sink(
                log_path / file_name, file_level,
                settings.log_max_bytes, settings.log_backup_count,
            )
            root.addHandler(handler)
            listener.start()
            _listeners.append(listener)

    atexit.register(_shutdown_listeners)


def _shutdown_listeners() -> None:
    for listener in _listeners:
        try:
            listener.stop()
        except Exception:
            # already stopped
            pass
    _listeners.clear()

"""logexec: declarative entry/exit logging with execution time.

Public API:
    log_exec_time      — Marker decorator for classes and functions
    Severity           — TRACE, DEBUG, INFO, WARN, ERROR
    LoggingInterceptor — Wraps marked callables; namespace filter, registration
    Registration       — Explicit {target, severity} pair
    get_interceptor    — Process-wide interceptor built from settings
    set_interceptor    — Replace the process-wide interceptor
    install_from_settings — Register targets listed in settings
    get_logger         — Get an ExecLogger for a module
    setup_logging      — Configure root logger (call once at startup)
    Stopwatch, Marker, ExecLogger, SmartFormatter, PlainFormatter
"""

from logexec.severity import Severity
from logexec.marker import Marker, get_marker, mark
from logexec.stopwatch import Stopwatch
from logexec.logger import ExecLogger, get_logger
from logexec.interceptor import (
    LoggingInterceptor,
    Registration,
    get_interceptor,
    install_from_settings,
    set_interceptor,
)
from logexec.decorator import log_exec_time
from logexec.formatters import SmartFormatter, PlainFormatter
from logexec.setup import setup_logging

__all__ = [
    "log_exec_time",
    "Severity",
    "Marker",
    "get_marker",
    "mark",
    "LoggingInterceptor",
    "Registration",
    "get_interceptor",
    "set_interceptor",
    "install_from_settings",
    "get_logger",
    "setup_logging",
    "Stopwatch",
    "ExecLogger",
    "SmartFormatter",
    "PlainFormatter",
]

"""@log_exec_time marker decorator for classes and functions."""

from __future__ import annotations

import inspect
from typing import Any

from logexec.interceptor import get_interceptor, unwrap
from logexec.marker import mark
from logexec.severity import Severity


def log_exec_time(target: Any = None, *, level: Severity | str = Severity.INFO):
    """Mark a class or function for entry/exit logging with execution time.

    Usable bare (``@log_exec_time``), called (``@log_exec_time()``), or with a
    level given positionally or by keyword. On a class, every method the
    class itself declares is logged unless it carries its own marker.

    Args:
        level: Severity of the entry/exit messages (default INFO).
    """
    if isinstance(target, (Severity, str)):
        target, level = None, target
    level = Severity.parse(level)

    def decorator(obj):
        if not (inspect.isclass(obj) or callable(obj)
                or isinstance(obj, (staticmethod, classmethod))):
            raise TypeError(
                f"@log_exec_time only supports classes and callables, got {obj!r}"
            )
        mark(obj if inspect.isclass(obj) else unwrap(obj), level)
        return get_interceptor().weave(obj)

    if target is None:
        return decorator
    return decorator(target)

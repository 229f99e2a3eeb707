"""LoggingInterceptor: wraps marked callables with entry/exit logging and timing.

A call qualifies when the function carries a marker itself, or when it is
declared on a marked class whose module falls under one of the configured
root namespaces. Method-level markers take precedence over class-level ones
and every function is wrapped at most once.
"""

from __future__ import annotations

import functools
import importlib
import inspect
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from logexec.logger import ExecLogger, get_logger
from logexec.marker import get_marker, mark
from logexec.severity import Severity
from logexec.stopwatch import MILLISECONDS, Stopwatch

log = get_logger(__name__)

WARNING_MESSAGE = "Exception occured while reading the message signature.."
PRE_MESSAGE = "Entering method - {name} of {owner}"
POST_MESSAGE = "{message}: Total time taken - {elapsed} {unit}"

_WRAPPED_ATTR = "__log_exec_wrapped__"

Sink = Callable[[ExecLogger, str], None]

SINKS: Mapping[Severity, Sink] = MappingProxyType({
    Severity.TRACE: ExecLogger.trace,
    Severity.DEBUG: ExecLogger.debug,
    Severity.INFO: ExecLogger.info,
    Severity.WARN: ExecLogger.warning,
    Severity.ERROR: ExecLogger.error,
})


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def is_wrapped(func: Any) -> bool:
    """True if *func* is a wrapper produced by a LoggingInterceptor."""
    if isinstance(func, (staticmethod, classmethod)):
        func = func.__func__
    original = getattr(func, _WRAPPED_ATTR, None)
    return original is not None and getattr(func, "__wrapped__", None) is original


def unwrap(func: Any) -> Any:
    """Return the original function behind an interceptor wrapper."""
    if isinstance(func, (staticmethod, classmethod)):
        func = func.__func__
    return getattr(func, _WRAPPED_ATTR) if is_wrapped(func) else func


def declaring_type(func: Any, owner: str | None = None) -> str:
    """Simple name of the type declaring *func*, or its module name."""
    if owner:
        return owner
    parts = func.__qualname__.split(".")
    if len(parts) > 1 and parts[-2] != "<locals>":
        return parts[-2]
    return func.__module__


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def _lookup_raw(owner: Any, name: str) -> tuple[Any, Any]:
    """Find *name* without binding it: (declaring namespace, raw attribute).

    Classes are searched along the MRO so inherited staticmethod and
    classmethod descriptors come back intact.
    """
    namespaces = owner.__mro__ if inspect.isclass(owner) else (owner,)
    for ns in namespaces:
        if name in vars(ns):
            return ns, vars(ns)[name]
    raise AttributeError(f"{owner!r} has no attribute {name!r}")


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Registration:
    """An explicit ``{target, severity}`` pair, target as ``module:Qual.name``."""

    target: str
    level: Severity = Severity.INFO

    @classmethod
    def parse(cls, text: str) -> Registration:
        """Parse ``"pkg.module:Qual.name"`` with an optional ``=LEVEL`` suffix."""
        target, sep, level = text.partition("=")
        target = target.strip()
        module_name, colon, qualname = target.partition(":")
        if not colon or not module_name or not qualname:
            raise ValueError(f"Invalid registration target: {text!r}")
        return cls(target, Severity.parse(level) if sep else Severity.INFO)


# ---------------------------------------------------------------------------
# Interceptor
# ---------------------------------------------------------------------------

class LoggingInterceptor:
    """Applies entry/exit logging and execution timing to marked callables.

    Args:
        root_namespaces: Module prefixes a marked class must fall under for
            its methods to be wrapped. Empty means every module qualifies.
        swallow_errors: Legacy failure policy. Any exception raised while
            wrapping, including one from the wrapped body, is logged as a
            warning and the caller receives ``None``.
    """

    def __init__(
        self,
        root_namespaces: Iterable[str] = (),
        swallow_errors: bool = False,
    ) -> None:
        self._root_namespaces = tuple(ns.strip(".") for ns in root_namespaces if ns)
        self._swallow_errors = swallow_errors

    @property
    def root_namespaces(self) -> tuple[str, ...]:
        return self._root_namespaces

    @property
    def swallow_errors(self) -> bool:
        return self._swallow_errors

    # -- matching ----------------------------------------------------------

    def matches(self, cls: type) -> bool:
        """Whether a marked class falls under the root namespace filter."""
        if not self._root_namespaces:
            return True
        module = getattr(cls, "__module__", None) or ""
        return any(
            module == ns or module.startswith(ns + ".")
            for ns in self._root_namespaces
        )

    def weave(self, target: Any) -> Any:
        """Wrap *target* according to the marker it carries, if any."""
        if inspect.isclass(target):
            marker = get_marker(target)
            if marker is None:
                return target
            return self.weave_class(target, marker.level)
        marker = get_marker(unwrap(target))
        if marker is None:
            return target
        return self.intercept(target, marker.level)

    def weave_class(self, cls: type, level: Severity | str = Severity.INFO) -> type:
        """Wrap every method declared on *cls* that has no marker of its own."""
        if not self.matches(cls):
            log.debug(f"Skipping {cls.__qualname__}: outside root namespaces")
            return cls
        for name, attr in list(vars(cls).items()):
            if _is_dunder(name):
                continue
            func = attr.__func__ if isinstance(attr, (staticmethod, classmethod)) else attr
            if not inspect.isfunction(func):
                continue
            own = get_marker(unwrap(func))
            if own is not None:
                # Method-level marker overrides the class-level one
                if not is_wrapped(func):
                    setattr(cls, name, self.intercept(attr, own.level, owner=cls.__name__))
                continue
            setattr(cls, name, self.intercept(attr, level, owner=cls.__name__))
        return cls

    def register(self, registrations: Iterable[Registration | str]) -> list[str]:
        """Mark and weave each registered target, rebinding it on its owner.

        Returns the targets that were actually woven.
        """
        woven: list[str] = []
        for reg in registrations:
            if isinstance(reg, str):
                reg = Registration.parse(reg)
            module_name, _, qualname = reg.target.partition(":")
            owner: Any = importlib.import_module(module_name)
            *path, attr_name = qualname.split(".")
            for part in path:
                owner = getattr(owner, part)
            declaring, attr = _lookup_raw(owner, attr_name)

            if inspect.isclass(attr):
                if not self.matches(attr):
                    log.debug(f"Skipping {reg.target}: outside root namespaces")
                    continue
                mark(attr, reg.level)
                self.weave_class(attr, reg.level)
            else:
                mark(unwrap(attr), reg.level)
                type_name = declaring.__name__ if inspect.isclass(declaring) else None
                setattr(owner, attr_name, self.intercept(attr, reg.level, owner=type_name))
            woven.append(reg.target)
        return woven

    # -- wrapping ----------------------------------------------------------

    def intercept(
        self,
        func: Any,
        level: Severity | str = Severity.INFO,
        owner: str | None = None,
    ) -> Any:
        """Return *func* wrapped with entry/exit logging at *level*.

        Re-intercepting an existing wrapper replaces it rather than nesting.
        """
        if isinstance(func, (staticmethod, classmethod)):
            return type(func)(self.intercept(func.__func__, level, owner))
        if not callable(func):
            raise TypeError(f"Cannot intercept non-callable: {func!r}")
        if isinstance(level, str):
            level = Severity.parse(level)
        func = unwrap(func)
        logger = get_logger(getattr(func, "__module__", None) or __name__)

        if inspect.iscoroutinefunction(func):
            wrapper = self._wrap_async(func, level, owner, logger)
        else:
            wrapper = self._wrap_sync(func, level, owner, logger)
        setattr(wrapper, _WRAPPED_ATTR, func)
        return wrapper

    def _wrap_sync(self, func, level, owner, logger: ExecLogger):
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                sink, message = self._enter(func, level, owner, logger)
            except Exception as e:
                self._warn(e)
                if self._swallow_errors:
                    return None
                return func(*args, **kwargs)

            stopwatch = Stopwatch.create_started()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                if self._swallow_errors:
                    self._warn(e)
                    return None
                raise
            finally:
                stopwatch.stop()
            self._exit(sink, logger, message, stopwatch)
            return result

        return wrapper

    def _wrap_async(self, func, level, owner, logger: ExecLogger):
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                sink, message = self._enter(func, level, owner, logger)
            except Exception as e:
                self._warn(e)
                if self._swallow_errors:
                    return None
                return await func(*args, **kwargs)

            stopwatch = Stopwatch.create_started()
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                if self._swallow_errors:
                    self._warn(e)
                    return None
                raise
            finally:
                stopwatch.stop()
            self._exit(sink, logger, message, stopwatch)
            return result

        return wrapper

    @staticmethod
    def _enter(func, level, owner, logger: ExecLogger) -> tuple[Sink, str]:
        try:
            sink = SINKS[level]
        except (KeyError, TypeError):
            raise LookupError(f"No log sink for severity: {level!r}") from None
        message = PRE_MESSAGE.format(
            name=func.__name__, owner=declaring_type(func, owner),
        )
        sink(logger, message)
        return sink, message

    def _exit(self, sink: Sink, logger: ExecLogger, message: str, stopwatch: Stopwatch) -> None:
        try:
            sink(logger, POST_MESSAGE.format(
                message=message, elapsed=stopwatch.elapsed_ms(), unit=MILLISECONDS,
            ))
        except Exception as e:
            self._warn(e)

    @staticmethod
    def _warn(error: BaseException) -> None:
        log.warning(f"{WARNING_MESSAGE} {error!r}", exc_info=error)


# ---------------------------------------------------------------------------
# Default interceptor
# ---------------------------------------------------------------------------

_default: LoggingInterceptor | None = None


def get_interceptor() -> LoggingInterceptor:
    """Return the process-wide interceptor, built from settings on first use."""
    global _default
    if _default is None:
        from logexec.config import settings

        _default = LoggingInterceptor(
            root_namespaces=settings.root_namespaces,
            swallow_errors=settings.swallow_errors,
        )
    return _default


def set_interceptor(interceptor: LoggingInterceptor | None) -> None:
    """Replace the process-wide interceptor. ``None`` rebuilds it from settings."""
    global _default
    _default = interceptor


def install_from_settings() -> list[str]:
    """Register every target listed in ``settings.targets``."""
    from logexec.config import settings

    return get_interceptor().register(settings.targets)

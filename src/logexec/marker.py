"""Marker metadata attached to logged classes and functions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from logexec.severity import Severity

MARKER_ATTR = "__log_exec_time__"


@dataclass(frozen=True)
class Marker:
    level: Severity = Severity.INFO


def _target(obj: Any) -> Any:
    # staticmethod/classmethod keep the marker on the underlying function
    if isinstance(obj, (staticmethod, classmethod)):
        return obj.__func__
    return obj


def get_marker(obj: Any) -> Marker | None:
    """Return the marker declared on *obj* itself, never an inherited one."""
    try:
        own = vars(_target(obj))
    except TypeError:
        return None
    marker = own.get(MARKER_ATTR)
    return marker if isinstance(marker, Marker) else None


def mark(obj: Any, level: Severity | str = Severity.INFO) -> Any:
    """Attach a marker to *obj* and return it unchanged."""
    marker = Marker(Severity.parse(level))
    try:
        setattr(_target(obj), MARKER_ATTR, marker)
    except AttributeError:
        raise TypeError(f"Cannot mark {obj!r}: it has no attribute dictionary") from None
    return obj

import os

import pytest

from logexec.interceptor import LoggingInterceptor, set_interceptor

# Keep Settings() deterministic regardless of the developer's environment.
for _key in [k for k in os.environ if k.startswith("LOGEXEC_")]:
    del os.environ[_key]


@pytest.fixture(autouse=True)
def default_interceptor():
    """Fresh process-wide interceptor with no namespace filter per test."""
    interceptor = LoggingInterceptor()
    set_interceptor(interceptor)
    yield interceptor
    set_interceptor(None)


ENTRY_PREFIX = "Entering method - "


def exec_lines(caplog) -> list[tuple[int, str]]:
    """(levelno, message) for entry/exit lines only; other loggers are ignored."""
    return [
        (r.levelno, r.getMessage())
        for r in caplog.records
        if r.name != "logexec.interceptor" and r.getMessage().startswith(ENTRY_PREFIX)
    ]


def warning_lines(caplog) -> list[str]:
    return [
        r.getMessage()
        for r in caplog.records
        if r.name == "logexec.interceptor" and r.levelname == "WARNING"
    ]

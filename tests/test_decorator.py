"""Tests for the @log_exec_time marker decorator."""

import logging
import time

import pytest

from conftest import exec_lines, warning_lines
from logexec import LoggingInterceptor, Severity, get_interceptor, get_marker, log_exec_time, set_interceptor
from logexec.config import settings
from logexec.interceptor import is_wrapped
from logexec.severity import TRACE

INFO = logging.INFO


def _messages(caplog):
    return [msg for _, msg in exec_lines(caplog)]


class TestDecoratorForms:
    def test_bare(self, caplog):
        class Bar:
            @log_exec_time
            def foo(self):
                return 1

        with caplog.at_level(TRACE):
            assert Bar().foo() == 1
        lines = exec_lines(caplog)
        assert lines[0] == (INFO, "Entering method - foo of Bar")
        assert lines[1][0] == INFO
        assert lines[1][1].startswith("Entering method - foo of Bar: Total time taken - ")
        assert lines[1][1].endswith(" MILLISECONDS")

    def test_called_without_arguments(self, caplog):
        @log_exec_time()
        def foo():
            return 2

        with caplog.at_level(TRACE):
            assert foo() == 2
        assert [level for level, _ in exec_lines(caplog)] == [INFO, INFO]

    def test_positional_severity(self, caplog):
        @log_exec_time(Severity.DEBUG)
        def foo():
            pass

        with caplog.at_level(TRACE):
            foo()
        assert [level for level, _ in exec_lines(caplog)] == [logging.DEBUG] * 2

    def test_keyword_string_level(self, caplog):
        @log_exec_time(level="trace")
        def foo():
            pass

        with caplog.at_level(TRACE):
            foo()
        assert [level for level, _ in exec_lines(caplog)] == [TRACE] * 2

    def test_invalid_level_rejected_at_definition(self):
        with pytest.raises(ValueError):
            log_exec_time(level="loud")

    def test_non_callable_rejected(self):
        with pytest.raises(TypeError, match="only supports classes and callables"):
            log_exec_time(42)

    def test_builtin_rejected(self):
        with pytest.raises(TypeError, match="no attribute dictionary"):
            log_exec_time(len)

    def test_marker_exposed(self):
        @log_exec_time(level=Severity.WARN)
        def foo():
            pass

        assert get_marker(foo).level is Severity.WARN
        assert is_wrapped(foo)

    def test_stacked_markers_wrap_once(self, caplog):
        @log_exec_time(Severity.ERROR)
        @log_exec_time
        def foo():
            pass

        with caplog.at_level(TRACE):
            foo()
        assert [level for level, _ in exec_lines(caplog)] == [logging.ERROR] * 2

    def test_scenario_foo_of_bar(self, caplog):
        class Bar:
            @log_exec_time
            def foo(self):
                time.sleep(0.05)
                return "value"

        with caplog.at_level(TRACE):
            assert Bar().foo() == "value"
        entry, exit_ = _messages(caplog)
        assert entry == "Entering method - foo of Bar"
        prefix = "Entering method - foo of Bar: Total time taken - "
        assert exit_.startswith(prefix)
        assert int(exit_[len(prefix):].split()[0]) >= 45


class TestStaticAndClassMethods:
    def test_decorator_above_staticmethod(self, caplog):
        class Calc:
            @log_exec_time
            @staticmethod
            def add(a, b):
                return a + b

        with caplog.at_level(TRACE):
            assert Calc.add(1, 2) == 3
        assert _messages(caplog)[0] == "Entering method - add of Calc"

    def test_decorator_below_classmethod(self, caplog):
        class Calc:
            base = 10

            @classmethod
            @log_exec_time
            def plus(cls, n):
                return cls.base + n

        with caplog.at_level(TRACE):
            assert Calc.plus(1) == 11
        assert _messages(caplog)[0] == "Entering method - plus of Calc"


class TestClassMarker:
    def test_all_declared_methods_logged(self, caplog):
        @log_exec_time(level=Severity.DEBUG)
        class Service:
            def __init__(self):
                self.calls = 0

            def place(self, n):
                self.calls += 1
                return n * 2

            def _helper(self):
                return "h"

            @staticmethod
            def tool():
                return "t"

            @classmethod
            def build(cls):
                return cls()

        with caplog.at_level(TRACE):
            svc = Service.build()
            assert svc.place(4) == 8
            assert svc._helper() == "h"
            assert Service.tool() == "t"

        entries = [m for m in _messages(caplog) if ":" not in m]
        assert entries == [
            "Entering method - build of Service",
            "Entering method - place of Service",
            "Entering method - _helper of Service",
            "Entering method - tool of Service",
        ]
        assert {level for level, _ in exec_lines(caplog)} == {logging.DEBUG}

    def test_dunder_methods_not_wrapped(self, caplog):
        @log_exec_time
        class Plain:
            def __init__(self):
                pass

            def __repr__(self):
                return "Plain()"

        with caplog.at_level(TRACE):
            repr(Plain())
        assert exec_lines(caplog) == []

    def test_method_marker_overrides_class_marker(self, caplog):
        @log_exec_time(level=Severity.INFO)
        class Service:
            @log_exec_time(level=Severity.ERROR)
            def risky(self):
                return "r"

            def normal(self):
                return "n"

        with caplog.at_level(TRACE):
            Service().risky()
        assert [level for level, _ in exec_lines(caplog)] == [logging.ERROR, logging.ERROR]

        caplog.clear()
        with caplog.at_level(TRACE):
            Service().normal()
        assert [level for level, _ in exec_lines(caplog)] == [INFO, INFO]

    def test_class_marker_not_inherited(self, caplog):
        @log_exec_time
        class Base:
            def inherited(self):
                return 1

        class Child(Base):
            def own(self):
                return 2

        with caplog.at_level(TRACE):
            child = Child()
            child.own()
            child.inherited()
        assert _messages(caplog)[0] == "Entering method - inherited of Base"
        assert len(exec_lines(caplog)) == 2
        assert get_marker(Child) is None

    def test_weaving_twice_is_idempotent(self, caplog):
        @log_exec_time
        class Service:
            def run(self):
                return 1

        get_interceptor().weave(Service)
        with caplog.at_level(TRACE):
            Service().run()
        assert len(exec_lines(caplog)) == 2

    async def test_async_method(self, caplog):
        @log_exec_time
        class Client:
            async def fetch(self):
                return "data"

        with caplog.at_level(TRACE):
            assert await Client().fetch() == "data"
        entry, exit_ = _messages(caplog)
        assert entry == "Entering method - fetch of Client"
        assert exit_.startswith(entry + ": Total time taken - ")


class TestNamespaceFilter:
    def test_class_outside_namespace_not_wrapped(self, caplog):
        set_interceptor(LoggingInterceptor(root_namespaces=["somewhere.else"]))

        @log_exec_time
        class Service:
            def run(self):
                return 1

        with caplog.at_level(TRACE):
            assert Service().run() == 1
        assert exec_lines(caplog) == []
        assert not is_wrapped(Service.__dict__["run"])

    def test_method_marker_ignores_namespace(self, caplog):
        set_interceptor(LoggingInterceptor(root_namespaces=["somewhere.else"]))

        class Service:
            @log_exec_time
            def run(self):
                return 1

        with caplog.at_level(TRACE):
            Service().run()
        assert len(exec_lines(caplog)) == 2

    def test_class_inside_namespace_wrapped(self, caplog):
        set_interceptor(LoggingInterceptor(root_namespaces=[__name__]))

        @log_exec_time
        class Service:
            def run(self):
                return 1

        with caplog.at_level(TRACE):
            Service().run()
        assert len(exec_lines(caplog)) == 2


class TestDefaultInterceptor:
    def test_built_from_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "swallow_errors", True)
        monkeypatch.setattr(settings, "root_namespaces", ["app"])
        set_interceptor(None)
        interceptor = get_interceptor()
        assert interceptor.swallow_errors
        assert interceptor.root_namespaces == ("app",)
        assert get_interceptor() is interceptor

    def test_swallow_policy_applies_to_decorated(self, caplog):
        set_interceptor(LoggingInterceptor(swallow_errors=True))

        @log_exec_time
        def fail():
            raise ValueError("boom")

        with caplog.at_level(TRACE):
            assert fail() is None
        assert len(warning_lines(caplog)) == 1

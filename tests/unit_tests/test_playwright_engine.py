"""Unit tests for the Playwright engine's status mapping, using a fake page."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from mathjax_bridge.domain.errors import (
    ClassMissingError,
    ConversionUnknownError,
    FunctionMissingError,
    ModuleMissingError,
    RuntimeCreationError,
)
from mathjax_bridge.domain.interfaces import IScriptEngine
from mathjax_bridge.infrastructure.engine import playwright_engine as module
from mathjax_bridge.infrastructure.engine.playwright_engine import PlaywrightScriptEngine
from mathjax_bridge.types import (
    EngineBundle,
    FunctionLocator,
    MarshaledArgument,
    OutputFormat,
    RuntimeConfig,
)

LOCATOR = FunctionLocator("mml", "MathMLConverter", "tex2mml")


class _Page:
    def __init__(self, record: Any) -> None:
        self.record = record
        self.evaluated: list[tuple[str, dict]] = []
        self.scripts: list[str] = []

    def evaluate(self, script: str, arg: dict) -> Any:
        self.evaluated.append((script, arg))
        return self.record

    def add_script_tag(self, content: str) -> None:
        self.scripts.append(content)


class _Installer:
    def __init__(self, diagnostic: str = "") -> None:
        self.diagnostic = diagnostic

    def check_and_install(self) -> bool:
        return True

    def diagnose(self) -> str:
        return self.diagnostic

    def log_manual_install_instructions(self) -> None:
        pass


@pytest.fixture
def reports() -> list:
    return []


def _engine(reports: list, record: Any) -> tuple[PlaywrightScriptEngine, _Page]:
    engine = PlaywrightScriptEngine(RuntimeConfig(), reports.append, installer=_Installer())
    page = _Page(record)
    engine._page = page
    return engine, page


def test_engine_satisfies_protocol(reports) -> None:
    engine, _ = _engine(reports, None)
    assert isinstance(engine, IScriptEngine)


def test_call_sends_wire_arguments_and_returns_value(reports) -> None:
    engine, page = _engine(reports, {"status": "ok", "value": "<math></math>"})
    arguments = [MarshaledArgument("scalar", "x"), MarshaledArgument("options", "{}")]

    assert engine.call(LOCATOR, arguments) == "<math></math>"
    _, arg = page.evaluated[0]
    assert arg == {
        "module": "mml",
        "cls": "MathMLConverter",
        "fn": "tex2mml",
        "args": [{"kind": "scalar", "value": "x"}, {"kind": "options", "value": "{}"}],
    }


def test_lookup_sends_no_arguments(reports) -> None:
    engine, page = _engine(reports, {"status": "ok", "value": None})
    engine.lookup(LOCATOR)
    assert page.evaluated[0][1]["args"] is None


@pytest.mark.parametrize(
    ("status", "error", "name"),
    [
        ("missing-module", ModuleMissingError, "mml"),
        ("missing-class", ClassMissingError, "MathMLConverter"),
        ("missing-function", FunctionMissingError, "tex2mml"),
    ],
)
def test_lookup_failures(reports, status, error, name) -> None:
    engine, _ = _engine(reports, {"status": status})
    with pytest.raises(error) as excinfo:
        engine.lookup(LOCATOR)
    assert excinfo.value.name == name


def test_thrown_exception_is_reported_then_raised(reports) -> None:
    engine, _ = _engine(reports, {"status": "exception", "message": "TypeError: boom"})
    with pytest.raises(ConversionUnknownError) as excinfo:
        engine.call(LOCATOR, [])
    assert excinfo.value.detail == "TypeError: boom"
    assert reports == ["TypeError: boom"]


def test_load_injects_bundle_source(reports) -> None:
    engine, page = _engine(reports, None)
    engine.load(EngineBundle(OutputFormat.MML, Path("mml.bundle.js"), "var mml = {};"))
    assert page.scripts == ["var mml = {};"]


def test_calls_before_start_fail(reports) -> None:
    engine = PlaywrightScriptEngine(RuntimeConfig(), reports.append, installer=_Installer())
    with pytest.raises(RuntimeCreationError):
        engine.lookup(LOCATOR)


def test_start_failure_carries_dependency_diagnostic(monkeypatch, reports) -> None:
    def broken():
        raise OSError("libnspr4.so: cannot open shared object file")

    monkeypatch.setattr(module, "sync_playwright", broken)
    engine = PlaywrightScriptEngine(
        RuntimeConfig(), reports.append, installer=_Installer("缺失系统库: libnspr4.so")
    )
    with pytest.raises(RuntimeCreationError, match="libnspr4.so"):
        engine.start()

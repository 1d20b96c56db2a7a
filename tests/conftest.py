"""Shared pytest configuration, marker assignment and the fake script engine."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, Callable, Optional, Sequence

import pytest

from mathjax_bridge.application.function_registry import functions_for
from mathjax_bridge.domain.errors import (
    BundleMissingError,
    ClassMissingError,
    FunctionMissingError,
    ModuleMissingError,
)
from mathjax_bridge.types import (
    EngineBundle,
    FunctionLocator,
    MarshaledArgument,
    OutputFormat,
    RuntimeConfig,
)

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Attach suite markers based on test file path."""
    del config
    for item in items:
        parts = set(Path(str(item.fspath)).parts)
        if "integration_tests" in parts:
            item.add_marker(pytest.mark.integration)
        elif "unit_tests" in parts:
            item.add_marker(pytest.mark.unit)


class FakeBundleStore:
    """Serves in-memory bundles and records every read."""

    def __init__(self, missing: Sequence[OutputFormat] = ()) -> None:
        self.missing = set(missing)
        self.reads: list[OutputFormat] = []

    def read(self, format: OutputFormat) -> EngineBundle:
        self.reads.append(format)
        path = Path(f"/bundles/{format.value}.bundle.js")
        if format in self.missing:
            raise BundleMissingError(str(path))
        return EngineBundle(format=format, path=path, source=f"// {format.value}")


Handler = Callable[[FunctionLocator, list[MarshaledArgument]], Any]


class FakeEngine:
    """In-process stand-in for the browser page.

    Loading a bundle exposes every function name in ``exports[format]``;
    calls are answered by ``handler`` (default: echo the input argument).
    """

    def __init__(
        self,
        config: RuntimeConfig,
        on_exception: Callable[[Optional[str]], None],
        handler: Optional[Handler] = None,
        exports: Optional[dict[OutputFormat, set[str]]] = None,
    ) -> None:
        self.config = config
        self.on_exception = on_exception
        self.handler = handler or (lambda locator, args: args[0].value)
        self.exports = exports
        self.started = False
        self.closed = False
        self.loaded: list[OutputFormat] = []
        self.calls: list[tuple[FunctionLocator, list[MarshaledArgument]]] = []
        self.threads: set[int] = set()

    def _touch(self) -> None:
        self.threads.add(threading.get_ident())

    def start(self) -> None:
        self._touch()
        self.started = True

    def load(self, bundle: EngineBundle) -> None:
        self._touch()
        self.loaded.append(bundle.format)

    def _namespace(self, locator: FunctionLocator) -> set[str]:
        loaded_modules = {fmt.module_name: fmt for fmt in self.loaded}
        if locator.module_name not in loaded_modules:
            raise ModuleMissingError(locator.module_name)
        fmt = loaded_modules[locator.module_name]
        if locator.class_name != fmt.class_name:
            raise ClassMissingError(locator.class_name)
        if self.exports is None:
            return {loc.function_name for loc in functions_for(fmt)}
        return self.exports.get(fmt, set())

    def lookup(self, locator: FunctionLocator) -> None:
        self._touch()
        if locator.function_name not in self._namespace(locator):
            raise FunctionMissingError(locator.function_name)

    def call(
        self, locator: FunctionLocator, arguments: Sequence[MarshaledArgument]
    ) -> Any:
        self._touch()
        self.lookup(locator)
        args = list(arguments)
        self.calls.append((locator, args))
        return self.handler(locator, args)

    def close(self) -> None:
        self._touch()
        self.closed = True


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def bundle_store() -> FakeBundleStore:
    return FakeBundleStore()


@pytest.fixture
def engines() -> list[FakeEngine]:
    """Every fake engine created through ``engine_factory``."""
    return []


@pytest.fixture
def engine_options() -> dict[str, Any]:
    """Keyword arguments for the next fake engine (handler, exports)."""
    return {}


@pytest.fixture
def engine_factory(engines: list[FakeEngine], engine_options: dict[str, Any]):
    def factory(config, on_exception):
        engine = FakeEngine(config, on_exception, **engine_options)
        engines.append(engine)
        return engine

    return factory

"""Unit tests for the invoker: marshaling, value checks and parsing."""

from __future__ import annotations

import json

import pytest

from mathjax_bridge.application import Invoker, RuntimeManager, marshal
from mathjax_bridge.domain.errors import (
    ConversionError,
    ConversionFailedError,
    ConversionInvalidFormatError,
    ConversionUnknownError,
    ErrorCode,
)
from mathjax_bridge.options import (
    ContainerOptions,
    DocumentOptions,
    TeXInputOptions,
)
from mathjax_bridge.types import Conversion, MarshaledArgument, OutputFormat

MML_ARGS = ("x", False, ContainerOptions(), TeXInputOptions(), DocumentOptions())


@pytest.fixture
def runtime(engine_factory, bundle_store):
    manager = RuntimeManager(engine_factory=engine_factory, bundle_store=bundle_store)
    yield manager
    manager.close()


def test_marshal_options_as_text() -> None:
    record = ContainerOptions(em=12)
    argument = marshal(record)
    assert argument.kind == MarshaledArgument.OPTIONS
    assert json.loads(argument.value) == record.to_dict()


def test_marshal_scalars_pass_through() -> None:
    assert marshal("\\alpha") == MarshaledArgument("scalar", "\\alpha")
    assert marshal(True).to_wire() == {"kind": "scalar", "value": True}


def test_invoke_loads_bundle_and_passes_arguments_in_order(
    runtime, engines, bundle_store
) -> None:
    output = Invoker().invoke(runtime, Conversion.TEX2MML, MML_ARGS)

    assert output == "x"
    assert bundle_store.reads == [OutputFormat.MML]
    locator, arguments = engines[0].calls[0]
    assert str(locator) == "mml.MathMLConverter.tex2mml"
    assert [arg.kind for arg in arguments] == [
        "scalar",
        "scalar",
        "options",
        "options",
        "options",
    ]
    assert json.loads(arguments[3].value)["loadPackages"] == ["base"]


def test_none_result_is_conversion_failed(runtime, engines) -> None:
    engines[0].handler = lambda locator, args: None
    with pytest.raises(ConversionFailedError) as excinfo:
        Invoker().invoke(runtime, Conversion.TEX2MML, MML_ARGS)
    assert excinfo.value.function == "tex2mml"
    assert excinfo.value.code is ErrorCode.CONVERSION_FAILED


def test_non_text_result_is_invalid_format(runtime, engines) -> None:
    engines[0].handler = lambda locator, args: 42
    with pytest.raises(ConversionInvalidFormatError) as excinfo:
        Invoker().invoke(runtime, Conversion.TEX2MML, MML_ARGS)
    assert excinfo.value.function == "tex2mml"


def test_content_error_is_raised_by_parser(runtime, engines, fixtures_dir) -> None:
    error_output = (fixtures_dir / "mml_error.xml").read_text(encoding="utf-8")
    engines[0].handler = lambda locator, args: error_output

    with pytest.raises(ConversionError, match="Missing close brace"):
        Invoker().invoke(runtime, Conversion.TEX2MML, MML_ARGS)

    assert Invoker().invoke_unchecked(runtime, Conversion.TEX2MML, MML_ARGS) == error_output


def test_unexpected_engine_failure_is_unknown_error(runtime, engines) -> None:
    def explode(locator, args):
        raise RuntimeError("page crashed")

    engines[0].handler = explode
    with pytest.raises(ConversionUnknownError) as excinfo:
        Invoker().invoke(runtime, Conversion.TEX2MML, MML_ARGS)
    assert excinfo.value.detail == "page crashed"

"""Unit tests for the static function registry."""

from __future__ import annotations

import pytest

from mathjax_bridge.application.function_registry import (
    FUNCTION_REGISTRY,
    functions_for,
    resolve,
)
from mathjax_bridge.infrastructure.validator import HTML_PARSER, MML_PARSER, SVG_PARSER
from mathjax_bridge.options import (
    AMInputOptions,
    CHTMLOutputOptions,
    ContainerOptions,
    DocumentOptions,
    MMLInputOptions,
    SVGContainerOptions,
    SVGOutputOptions,
    TeXInputOptions,
)
from mathjax_bridge.types import Conversion, FunctionLocator, InputKind, OutputFormat


def test_registry_is_total() -> None:
    assert set(FUNCTION_REGISTRY) == set(Conversion)


@pytest.mark.parametrize(
    ("conversion", "module", "cls", "fmt", "kind", "parser"),
    [
        (Conversion.TEX2CHTML, "chtml", "CommonHTMLConverter", OutputFormat.CHTML, InputKind.TEX, HTML_PARSER),
        (Conversion.TEX2MML, "mml", "MathMLConverter", OutputFormat.MML, InputKind.TEX, MML_PARSER),
        (Conversion.TEX2SVG, "svg", "SVGConverter", OutputFormat.SVG, InputKind.TEX, SVG_PARSER),
        (Conversion.MML2CHTML, "chtml", "CommonHTMLConverter", OutputFormat.CHTML, InputKind.MATHML, HTML_PARSER),
        (Conversion.MML2SVG, "svg", "SVGConverter", OutputFormat.SVG, InputKind.MATHML, SVG_PARSER),
        (Conversion.AM2CHTML, "chtml", "CommonHTMLConverter", OutputFormat.CHTML, InputKind.ASCIIMATH, HTML_PARSER),
        (Conversion.AM2MML, "mml", "MathMLConverter", OutputFormat.MML, InputKind.ASCIIMATH, MML_PARSER),
    ],
)
def test_entries(conversion, module, cls, fmt, kind, parser) -> None:
    spec = resolve(conversion)
    assert spec.locator == FunctionLocator(module, cls, conversion.value)
    assert spec.output_format is fmt
    assert spec.input_kind is kind
    assert spec.parser is parser


def test_option_types_follow_argument_order() -> None:
    assert resolve(Conversion.TEX2CHTML).option_types == (
        ContainerOptions,
        TeXInputOptions,
        CHTMLOutputOptions,
        DocumentOptions,
    )
    assert resolve(Conversion.MML2SVG).option_types == (
        SVGContainerOptions,
        MMLInputOptions,
        SVGOutputOptions,
        DocumentOptions,
    )
    assert resolve(Conversion.AM2MML).option_types == (
        ContainerOptions,
        AMInputOptions,
        DocumentOptions,
    )


def test_mathml_output_has_no_output_options() -> None:
    for spec in FUNCTION_REGISTRY.values():
        assert spec.has_output_options is (spec.output_format is not OutputFormat.MML)


def test_functions_for_format() -> None:
    names = {locator.function_name for locator in functions_for(OutputFormat.CHTML)}
    assert names == {"tex2chtml", "mml2chtml", "am2chtml"}
    assert {str(loc) for loc in functions_for(OutputFormat.MML)} == {
        "mml.MathMLConverter.tex2mml",
        "mml.MathMLConverter.am2mml",
    }
    assert len(functions_for(OutputFormat.SVG)) == 2

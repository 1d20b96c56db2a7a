"""
函数注册表
每个转换操作对应的引擎函数、输出格式、输入类型、解析器与配置组类型
"""
from dataclasses import dataclass
from typing import Dict, Tuple

from ..domain.interfaces import IOutputParser
from ..infrastructure.validator import HTML_PARSER, MML_PARSER, SVG_PARSER
from ..options import (
    AMInputOptions,
    CHTMLOutputOptions,
    ContainerOptions,
    DocumentOptions,
    MMLInputOptions,
    SVGContainerOptions,
    SVGOutputOptions,
    TeXInputOptions,
)
from ..types import Conversion, FunctionLocator, InputKind, OutputFormat


@dataclass(frozen=True)
class FunctionSpec:
    """注册表条目

    option_types 按引擎参数顺序排列：
    容器配置、输入配置、[输出配置]、文档配置，MathML 输出没有输出配置
    """

    conversion: Conversion
    output_format: OutputFormat
    input_kind: InputKind
    parser: IOutputParser
    option_types: Tuple[type, ...]

    @property
    def locator(self) -> FunctionLocator:
        return FunctionLocator(
            module_name=self.output_format.module_name,
            class_name=self.output_format.class_name,
            function_name=self.conversion.value,
        )

    @property
    def has_output_options(self) -> bool:
        return len(self.option_types) == 4


_INPUT_OPTIONS = {
    InputKind.TEX: TeXInputOptions,
    InputKind.MATHML: MMLInputOptions,
    InputKind.ASCIIMATH: AMInputOptions,
}

_FORMAT_OPTIONS = {
    OutputFormat.CHTML: (HTML_PARSER, ContainerOptions, CHTMLOutputOptions),
    OutputFormat.MML: (MML_PARSER, ContainerOptions, None),
    OutputFormat.SVG: (SVG_PARSER, SVGContainerOptions, SVGOutputOptions),
}


def _spec(
    conversion: Conversion, input_kind: InputKind, output_format: OutputFormat
) -> FunctionSpec:
    parser, container_type, output_type = _FORMAT_OPTIONS[output_format]
    option_types = (container_type, _INPUT_OPTIONS[input_kind])
    if output_type is not None:
        option_types += (output_type,)
    option_types += (DocumentOptions,)
    return FunctionSpec(
        conversion=conversion,
        output_format=output_format,
        input_kind=input_kind,
        parser=parser,
        option_types=option_types,
    )


FUNCTION_REGISTRY: Dict[Conversion, FunctionSpec] = {
    spec.conversion: spec
    for spec in (
        _spec(Conversion.TEX2CHTML, InputKind.TEX, OutputFormat.CHTML),
        _spec(Conversion.TEX2MML, InputKind.TEX, OutputFormat.MML),
        _spec(Conversion.TEX2SVG, InputKind.TEX, OutputFormat.SVG),
        _spec(Conversion.MML2CHTML, InputKind.MATHML, OutputFormat.CHTML),
        _spec(Conversion.MML2SVG, InputKind.MATHML, OutputFormat.SVG),
        _spec(Conversion.AM2CHTML, InputKind.ASCIIMATH, OutputFormat.CHTML),
        _spec(Conversion.AM2MML, InputKind.ASCIIMATH, OutputFormat.MML),
    )
}


def resolve(conversion: Conversion) -> FunctionSpec:
    """查询转换操作的注册表条目"""
    return FUNCTION_REGISTRY[conversion]


def functions_for(output_format: OutputFormat) -> Tuple[FunctionLocator, ...]:
    """引擎包必须提供的全部函数"""
    return tuple(
        spec.locator
        for spec in FUNCTION_REGISTRY.values()
        if spec.output_format is output_format
    )

"""
基础设施层 - 输出校验模块
"""
from .output_validator import (
    OutputParser,
    HTMLOutputParser,
    MMLOutputParser,
    SVGOutputParser,
    HTML_PARSER,
    MML_PARSER,
    SVG_PARSER,
)

__all__ = [
    "OutputParser",
    "HTMLOutputParser",
    "MMLOutputParser",
    "SVGOutputParser",
    "HTML_PARSER",
    "MML_PARSER",
    "SVG_PARSER",
]

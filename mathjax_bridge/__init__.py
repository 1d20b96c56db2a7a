"""
MathJaxBridge
在嵌入式脚本执行环境中运行 MathJax 3，提供 TeX / MathML / AsciiMath
到 CommonHTML / MathML / SVG 的类型化转换
"""
from .constants import EXPECTED_MATHJAX_VERSION
from .domain import (
    ErrorCode,
    MathJaxError,
    RuntimeCreationError,
    BundleMissingError,
    ModuleMissingError,
    ClassMissingError,
    FunctionMissingError,
    PackageFileMissingError,
    DependencyInfoMissingError,
    UnexpectedVersionError,
    ConversionFailedError,
    ConversionInvalidFormatError,
    ConversionUnknownError,
    ConversionError,
    RuntimeClosedError,
)
from .services import MathJax
from .types import (
    Conversion,
    ConversionResult,
    InputKind,
    OutputFormat,
    PackageMetadata,
    RuntimeConfig,
)

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "EXPECTED_MATHJAX_VERSION",
    "MathJax",
    "Conversion",
    "ConversionResult",
    "InputKind",
    "OutputFormat",
    "PackageMetadata",
    "RuntimeConfig",
    "ErrorCode",
    "MathJaxError",
    "RuntimeCreationError",
    "BundleMissingError",
    "ModuleMissingError",
    "ClassMissingError",
    "FunctionMissingError",
    "PackageFileMissingError",
    "DependencyInfoMissingError",
    "UnexpectedVersionError",
    "ConversionFailedError",
    "ConversionInvalidFormatError",
    "ConversionUnknownError",
    "ConversionError",
    "RuntimeClosedError",
]

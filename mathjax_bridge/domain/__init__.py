"""
领域层 - 核心接口和错误定义
"""

from .interfaces import (
    ExceptionSink,
    IScriptEngine,
    IOutputParser,
    IBundleStore,
)
from .errors import (
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

__all__ = [
    "ExceptionSink",
    "IScriptEngine",
    "IOutputParser",
    "IBundleStore",
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

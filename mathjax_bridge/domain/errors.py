"""
领域层 - 错误类型定义
"""

from enum import Enum
from typing import Optional


class ErrorCode(Enum):
    """错误代码枚举"""

    # 环境错误
    RUNTIME_CREATION_FAILED = "RUNTIME_CREATION_FAILED"
    BUNDLE_MISSING = "BUNDLE_MISSING"
    MODULE_MISSING = "MODULE_MISSING"
    CLASS_MISSING = "CLASS_MISSING"
    FUNCTION_MISSING = "FUNCTION_MISSING"

    # 元数据错误
    PACKAGE_FILE_MISSING = "PACKAGE_FILE_MISSING"
    DEPENDENCY_INFO_MISSING = "DEPENDENCY_INFO_MISSING"
    UNEXPECTED_VERSION = "UNEXPECTED_VERSION"

    # 调用错误
    CONVERSION_FAILED = "CONVERSION_FAILED"
    CONVERSION_INVALID_FORMAT = "CONVERSION_INVALID_FORMAT"
    CONVERSION_UNKNOWN_ERROR = "CONVERSION_UNKNOWN_ERROR"

    # 内容错误
    CONVERSION_ERROR = "CONVERSION_ERROR"

    # 内部错误
    DEALLOCATED_SELF = "DEALLOCATED_SELF"


class MathJaxError(Exception):
    """MathJaxBridge 错误基类"""

    def __init__(self, message: str, code: ErrorCode = None):
        super().__init__(message)
        self.code = code


class RuntimeCreationError(MathJaxError):
    """脚本执行环境无法创建"""

    def __init__(self, message: str = "无法创建脚本执行环境"):
        super().__init__(message, code=ErrorCode.RUNTIME_CREATION_FAILED)


class BundleMissingError(MathJaxError):
    """引擎包缺失或不可读"""

    def __init__(self, location: str):
        super().__init__(
            f"引擎包 {location} 缺失或不可读", code=ErrorCode.BUNDLE_MISSING
        )
        self.location = location


class ModuleMissingError(MathJaxError):
    """引擎中找不到转换模块"""

    def __init__(self, name: str):
        super().__init__(f"模块 {name} 缺失或不可访问", code=ErrorCode.MODULE_MISSING)
        self.name = name


class ClassMissingError(MathJaxError):
    """转换模块中找不到转换器类"""

    def __init__(self, name: str):
        super().__init__(f"类 {name} 缺失或不可访问", code=ErrorCode.CLASS_MISSING)
        self.name = name


class FunctionMissingError(MathJaxError):
    """转换器中找不到函数，或该成员不可调用"""

    def __init__(self, name: str):
        super().__init__(
            f"函数 {name} 缺失或不可调用", code=ErrorCode.FUNCTION_MISSING
        )
        self.name = name


class PackageFileMissingError(MathJaxError):
    """package-lock 文件缺失或无法解析"""

    def __init__(self, location: str):
        super().__init__(
            f"npm package-lock 文件 {location} 缺失或不可读",
            code=ErrorCode.PACKAGE_FILE_MISSING,
        )
        self.location = location


class DependencyInfoMissingError(MathJaxError):
    """package-lock 中缺少依赖条目"""

    def __init__(self, name: str):
        super().__init__(
            f"package-lock 中缺少 {name} 的元数据",
            code=ErrorCode.DEPENDENCY_INFO_MISSING,
        )
        self.name = name


class UnexpectedVersionError(MathJaxError):
    """引擎版本与绑定版本不一致"""

    def __init__(self, found: str, expected: str):
        super().__init__(
            f"MathJax 版本 ({found}) 与预期版本 ({expected}) 不一致",
            code=ErrorCode.UNEXPECTED_VERSION,
        )
        self.found = found
        self.expected = expected


class ConversionFailedError(MathJaxError):
    """引擎函数没有返回值"""

    def __init__(self, function: str):
        super().__init__(
            f"函数 {function} 未能转换输入", code=ErrorCode.CONVERSION_FAILED
        )
        self.function = function


class ConversionInvalidFormatError(MathJaxError):
    """返回值无法转换为文本"""

    def __init__(self, function: str, value_type: str = ""):
        detail = f" ({value_type})" if value_type else ""
        super().__init__(
            f"函数 {function} 的返回值不是文本{detail}",
            code=ErrorCode.CONVERSION_INVALID_FORMAT,
        )
        self.function = function


class ConversionUnknownError(MathJaxError):
    """无法归类的转换错误"""

    def __init__(self, detail: Optional[str] = None):
        message = "转换因未知原因失败"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, code=ErrorCode.CONVERSION_UNKNOWN_ERROR)
        self.detail = detail


class ConversionError(MathJaxError):
    """引擎在输出中嵌入了错误节点

    消息即引擎自身的诊断文本，原样透传
    """

    def __init__(self, message: str):
        super().__init__(message, code=ErrorCode.CONVERSION_ERROR)
        self.message = message

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConversionError):
            return NotImplemented
        return self.message == other.message

    def __hash__(self) -> int:
        return hash((ConversionError, self.message))


class RuntimeClosedError(MathJaxError):
    """运行时已关闭后仍被调用"""

    def __init__(self):
        super().__init__("运行时已关闭", code=ErrorCode.DEALLOCATED_SELF)

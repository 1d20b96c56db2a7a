"""
调用器
编排一次完整的转换调用

Pipeline:
arguments ──► marshal ──► engine call ──► value check ──► parse ──► text

1. 确保输出格式的引擎包已加载 (runtime_manager)
2. 查询注册表 (function_registry)
3. 配置组在调用前序列化为 JSON 文本，其余参数原样传递
4. 检查返回值是文本
5. 解析器检查输出中的错误节点 (output_validator)
"""
import traceback
from typing import Any, Sequence

from ..domain.errors import (
    ConversionFailedError,
    ConversionInvalidFormatError,
    ConversionUnknownError,
    MathJaxError,
)
from ..options import OptionsRecord
from ..types import Conversion, MarshaledArgument
from ..utils.log import logger
from .function_registry import resolve
from .runtime_manager import RuntimeManager


def marshal(argument: Any) -> MarshaledArgument:
    """把一个参数转换为跨边界形式"""
    if isinstance(argument, OptionsRecord):
        return MarshaledArgument(MarshaledArgument.OPTIONS, argument.to_json())
    return MarshaledArgument(MarshaledArgument.SCALAR, argument)


class Invoker:
    """调用器 - 注册表查询、参数编组、返回值检查与输出解析"""

    def invoke(
        self, runtime: RuntimeManager, conversion: Conversion, arguments: Sequence[Any]
    ) -> str:
        """调用并校验输出

        Raises:
            ConversionError: 输出中包含错误节点
            ConversionFailedError / ConversionInvalidFormatError /
            ConversionUnknownError: 调用失败
        """
        output = self.invoke_unchecked(runtime, conversion, arguments)
        return resolve(conversion).parser.validate(output)

    def invoke_unchecked(
        self, runtime: RuntimeManager, conversion: Conversion, arguments: Sequence[Any]
    ) -> str:
        """调用但不校验输出，返回原始文本"""
        spec = resolve(conversion)
        try:
            runtime.ensure_loaded(spec.output_format)
            marshaled = [marshal(argument) for argument in arguments]
            value = runtime.call(spec.locator, marshaled)
        except MathJaxError:
            raise
        except Exception as e:
            logger.error(f"[MathJaxBridge] {spec.locator} 调用失败: {type(e).__name__}: {e}")
            logger.debug(f"[MathJaxBridge] 堆栈信息:\n{traceback.format_exc()}")
            raise ConversionUnknownError(str(e)) from e

        if value is None:
            raise ConversionFailedError(conversion.value)
        if not isinstance(value, str):
            raise ConversionInvalidFormatError(conversion.value, type(value).__name__)

        logger.debug(f"[MathJaxBridge] {spec.locator} 输出长度: {len(value)}")
        return value

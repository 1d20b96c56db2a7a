"""
领域层 - 核心接口定义
遵循依赖倒置原则(DIP)，定义抽象接口
"""

from typing import Any, Callable, Optional, Protocol, Sequence, runtime_checkable

from ..types import EngineBundle, FunctionLocator, MarshaledArgument, OutputFormat

# 引擎未捕获异常的回调，参数为原始诊断文本（可能为空）
ExceptionSink = Callable[[Optional[str]], None]


@runtime_checkable
class IScriptEngine(Protocol):
    """嵌入式脚本执行环境接口

    同一实例的所有方法都必须在同一个线程上调用
    """

    def start(self) -> None:
        """创建执行环境"""
        ...

    def load(self, bundle: EngineBundle) -> None:
        """执行引擎包源码"""
        ...

    def lookup(self, locator: FunctionLocator) -> None:
        """确认函数存在且可调用

        Raises:
            ModuleMissingError / ClassMissingError / FunctionMissingError
        """
        ...

    def call(self, locator: FunctionLocator, arguments: Sequence[MarshaledArgument]) -> Any:
        """调用函数，返回原始返回值（无返回值时为 None）"""
        ...

    def close(self) -> None:
        """释放执行环境"""
        ...


@runtime_checkable
class IOutputParser(Protocol):
    """输出校验器接口"""

    def validate(self, output: str) -> str:
        """校验输出中没有错误节点

        Returns:
            原样返回输入

        Raises:
            ConversionError: 找到错误节点
        """
        ...


@runtime_checkable
class IBundleStore(Protocol):
    """引擎包读取接口"""

    def read(self, format: OutputFormat) -> EngineBundle:
        """读取输出格式对应的引擎包"""
        ...

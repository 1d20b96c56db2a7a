"""
MathJax 转换服务
对外提供 TeX / MathML / AsciiMath 到 CommonHTML / MathML / SVG 的转换

每个转换操作有三种形式：
- 同步形式 tex2chtml(...)：返回文本或抛出异常
- 协程形式 tex2chtml_async(...)：在运行时的派发队列上执行
- 带错误的形式 tex2chtml_safe(...)（仅 TeX 输入）：返回 ConversionResult，不抛出 MathJaxError

输入为 list 时按顺序逐个转换，任意一个失败则整批失败
"""
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Union

from ..application import Invoker, RuntimeManager, resolve
from ..application.runtime_manager import EngineFactory
from ..constants import DEFAULT_PACKAGE_LOCK, EXPECTED_MATHJAX_VERSION
from ..domain.errors import ConversionError, MathJaxError, UnexpectedVersionError
from ..domain.interfaces import ExceptionSink, IBundleStore
from ..infrastructure.metadata import PackageLockReader
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
from ..types import (
    Conversion,
    ConversionResult,
    OutputFormat,
    PackageMetadata,
    RuntimeConfig,
)
from ..utils.decorators import log_execution
from ..utils.log import logger

Input = Union[str, List[str]]
Output = Union[str, List[str]]


class MathJax:
    """MathJax 转换服务

    每个实例独占一个运行时，多个实例之间互不影响，可以并行转换

    Example:
        with MathJax() as mathjax:
            mml = mathjax.tex2mml(r"\\frac{2}{3}")
    """

    def __init__(
        self,
        preferred_output_formats: Iterable[OutputFormat] = tuple(OutputFormat),
        exception_sink: Optional[ExceptionSink] = None,
        config: Union[RuntimeConfig, Mapping[str, Any], None] = None,
        engine_factory: Optional[EngineFactory] = None,
        bundle_store: Optional[IBundleStore] = None,
    ):
        """
        Args:
            preferred_output_formats: 构造时预先加载的输出格式，为空时全部按需加载
            exception_sink: 接收引擎未捕获异常的回调
            config: RuntimeConfig 或普通配置字典
            engine_factory: 创建脚本执行环境的工厂，默认使用 Playwright

        Raises:
            RuntimeCreationError: 执行环境无法创建
            BundleMissingError: 首选输出格式的引擎包缺失
            UnexpectedVersionError: 开启 strict_version 且版本不一致
        """
        if isinstance(config, Mapping):
            config = RuntimeConfig.from_mapping(config)
        self._config = config or RuntimeConfig()
        self._verify_version()

        self._invoker = Invoker()
        self._runtime = RuntimeManager(
            preferred_output_formats=preferred_output_formats,
            exception_sink=exception_sink,
            config=self._config,
            engine_factory=engine_factory,
            bundle_store=bundle_store,
        )

    @property
    def runtime(self) -> RuntimeManager:
        return self._runtime

    @property
    def config(self) -> RuntimeConfig:
        return self._config

    def close(self) -> None:
        """释放运行时"""
        self._runtime.close()

    def __enter__(self) -> "MathJax":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # 元数据
    # ------------------------------------------------------------------

    @staticmethod
    def metadata(package_lock: Optional[Path] = None) -> PackageMetadata:
        """读取打包的 mathjax-full 元数据

        Raises:
            PackageFileMissingError / DependencyInfoMissingError
        """
        return PackageLockReader(package_lock or DEFAULT_PACKAGE_LOCK).read()

    @staticmethod
    def check_version(
        package_lock: Optional[Path] = None,
        expected: str = EXPECTED_MATHJAX_VERSION,
    ) -> PackageMetadata:
        """确认打包的 mathjax-full 版本与预期一致

        Raises:
            UnexpectedVersionError: 版本不一致
        """
        metadata = MathJax.metadata(package_lock)
        if metadata.version != expected:
            raise UnexpectedVersionError(metadata.version, expected)
        return metadata

    def _verify_version(self) -> None:
        try:
            metadata = self.check_version(
                self._config.package_lock, self._config.expected_version
            )
        except MathJaxError as e:
            if self._config.strict_version:
                raise
            logger.warning(f"[MathJaxBridge] 版本检查未通过: {e}")
            return
        logger.debug(f"[MathJaxBridge] mathjax-full 版本: {metadata.version}")

    # ------------------------------------------------------------------
    # 内部实现
    # ------------------------------------------------------------------

    def _arguments(
        self, conversion: Conversion, inline: bool, options: Sequence[Any]
    ) -> tuple:
        """检查配置组类型，缺省的配置组使用默认值"""
        spec = resolve(conversion)
        records = []
        for expected, value in zip(spec.option_types, options):
            if value is None:
                value = expected()
            elif not isinstance(value, expected):
                raise TypeError(
                    f"{conversion.value} 需要 {expected.__name__}，"
                    f"得到 {type(value).__name__}"
                )
            records.append(value)
        return (bool(inline), *records)

    @staticmethod
    def _items(conversion: Conversion, input: Input) -> List[str]:
        items = [input] if isinstance(input, str) else input
        if not isinstance(items, list) or not all(isinstance(i, str) for i in items):
            raise TypeError(f"{conversion.value} 的输入必须是 str 或 list[str]")
        return items

    def _job(self, conversion: Conversion, input: Input, arguments: tuple):
        items = self._items(conversion, input)

        def job() -> Output:
            outputs = [
                self._invoker.invoke(self._runtime, conversion, (item, *arguments))
                for item in items
            ]
            return outputs[0] if isinstance(input, str) else outputs

        return job

    @log_execution
    def _convert(
        self, conversion: Conversion, input: Input, inline: bool, *options: Any
    ) -> Output:
        arguments = self._arguments(conversion, inline, options)
        return self._runtime.run(self._job(conversion, input, arguments))

    @log_execution
    async def _convert_async(
        self, conversion: Conversion, input: Input, inline: bool, *options: Any
    ) -> Output:
        arguments = self._arguments(conversion, inline, options)
        return await self._runtime.run_async(self._job(conversion, input, arguments))

    def _convert_safe(
        self, conversion: Conversion, input: str, inline: bool, *options: Any
    ) -> ConversionResult:
        if not isinstance(input, str):
            raise TypeError(f"{conversion.value} 的输入必须是 str")
        arguments = self._arguments(conversion, inline, options)

        try:
            output = self._runtime.run(
                lambda: self._invoker.invoke_unchecked(
                    self._runtime, conversion, (input, *arguments)
                )
            )
        except MathJaxError as e:
            return ConversionResult(error=e)

        try:
            resolve(conversion).parser.validate(output)
        except ConversionError as e:
            return ConversionResult(value=output, error=e)
        return ConversionResult(value=output)

    # ------------------------------------------------------------------
    # TeX 输入
    # ------------------------------------------------------------------

    def tex2chtml(
        self,
        input: Input,
        inline: bool = False,
        container_options: Optional[ContainerOptions] = None,
        input_options: Optional[TeXInputOptions] = None,
        output_options: Optional[CHTMLOutputOptions] = None,
        document_options: Optional[DocumentOptions] = None,
    ) -> Output:
        """TeX 转换为 CommonHTML

        Args:
            input: TeX 公式，或按顺序转换的一组公式
            inline: 行内公式（否则为行间公式）
            container_options: 容器配置
            input_options: TeX 输入处理器配置
            output_options: CommonHTML 输出处理器配置
            document_options: 文档配置

        Returns:
            CommonHTML 文本，输入为列表时返回同样顺序的列表

        Raises:
            ConversionError: 公式有错误，消息为引擎的诊断文本
            TypeError: 输入或配置组类型不正确
        """
        return self._convert(
            Conversion.TEX2CHTML,
            input,
            inline,
            container_options,
            input_options,
            output_options,
            document_options,
        )

    async def tex2chtml_async(
        self,
        input: Input,
        inline: bool = False,
        container_options: Optional[ContainerOptions] = None,
        input_options: Optional[TeXInputOptions] = None,
        output_options: Optional[CHTMLOutputOptions] = None,
        document_options: Optional[DocumentOptions] = None,
    ) -> Output:
        return await self._convert_async(
            Conversion.TEX2CHTML,
            input,
            inline,
            container_options,
            input_options,
            output_options,
            document_options,
        )

    def tex2chtml_safe(
        self,
        input: str,
        inline: bool = False,
        container_options: Optional[ContainerOptions] = None,
        input_options: Optional[TeXInputOptions] = None,
        output_options: Optional[CHTMLOutputOptions] = None,
        document_options: Optional[DocumentOptions] = None,
    ) -> ConversionResult:
        """TeX 转换为 CommonHTML，错误通过 ConversionResult.error 返回"""
        return self._convert_safe(
            Conversion.TEX2CHTML,
            input,
            inline,
            container_options,
            input_options,
            output_options,
            document_options,
        )

    def tex2mml(
        self,
        input: Input,
        inline: bool = False,
        container_options: Optional[ContainerOptions] = None,
        input_options: Optional[TeXInputOptions] = None,
        document_options: Optional[DocumentOptions] = None,
    ) -> Output:
        """TeX 转换为 MathML"""
        return self._convert(
            Conversion.TEX2MML,
            input,
            inline,
            container_options,
            input_options,
            document_options,
        )

    async def tex2mml_async(
        self,
        input: Input,
        inline: bool = False,
        container_options: Optional[ContainerOptions] = None,
        input_options: Optional[TeXInputOptions] = None,
        document_options: Optional[DocumentOptions] = None,
    ) -> Output:
        return await self._convert_async(
            Conversion.TEX2MML,
            input,
            inline,
            container_options,
            input_options,
            document_options,
        )

    def tex2mml_safe(
        self,
        input: str,
        inline: bool = False,
        container_options: Optional[ContainerOptions] = None,
        input_options: Optional[TeXInputOptions] = None,
        document_options: Optional[DocumentOptions] = None,
    ) -> ConversionResult:
        return self._convert_safe(
            Conversion.TEX2MML,
            input,
            inline,
            container_options,
            input_options,
            document_options,
        )

    def tex2svg(
        self,
        input: Input,
        inline: bool = False,
        container_options: Optional[SVGContainerOptions] = None,
        input_options: Optional[TeXInputOptions] = None,
        output_options: Optional[SVGOutputOptions] = None,
        document_options: Optional[DocumentOptions] = None,
    ) -> Output:
        """TeX 转换为 SVG"""
        return self._convert(
            Conversion.TEX2SVG,
            input,
            inline,
            container_options,
            input_options,
            output_options,
            document_options,
        )

    async def tex2svg_async(
        self,
        input: Input,
        inline: bool = False,
        container_options: Optional[SVGContainerOptions] = None,
        input_options: Optional[TeXInputOptions] = None,
        output_options: Optional[SVGOutputOptions] = None,
        document_options: Optional[DocumentOptions] = None,
    ) -> Output:
        return await self._convert_async(
            Conversion.TEX2SVG,
            input,
            inline,
            container_options,
            input_options,
            output_options,
            document_options,
        )

    def tex2svg_safe(
        self,
        input: str,
        inline: bool = False,
        container_options: Optional[SVGContainerOptions] = None,
        input_options: Optional[TeXInputOptions] = None,
        output_options: Optional[SVGOutputOptions] = None,
        document_options: Optional[DocumentOptions] = None,
    ) -> ConversionResult:
        return self._convert_safe(
            Conversion.TEX2SVG,
            input,
            inline,
            container_options,
            input_options,
            output_options,
            document_options,
        )

    # ------------------------------------------------------------------
    # MathML 输入
    # ------------------------------------------------------------------

    def mml2chtml(
        self,
        input: Input,
        inline: bool = False,
        container_options: Optional[ContainerOptions] = None,
        input_options: Optional[MMLInputOptions] = None,
        output_options: Optional[CHTMLOutputOptions] = None,
        document_options: Optional[DocumentOptions] = None,
    ) -> Output:
        """MathML 转换为 CommonHTML"""
        return self._convert(
            Conversion.MML2CHTML,
            input,
            inline,
            container_options,
            input_options,
            output_options,
            document_options,
        )

    async def mml2chtml_async(
        self,
        input: Input,
        inline: bool = False,
        container_options: Optional[ContainerOptions] = None,
        input_options: Optional[MMLInputOptions] = None,
        output_options: Optional[CHTMLOutputOptions] = None,
        document_options: Optional[DocumentOptions] = None,
    ) -> Output:
        return await self._convert_async(
            Conversion.MML2CHTML,
            input,
            inline,
            container_options,
            input_options,
            output_options,
            document_options,
        )

    def mml2svg(
        self,
        input: Input,
        inline: bool = False,
        container_options: Optional[SVGContainerOptions] = None,
        input_options: Optional[MMLInputOptions] = None,
        output_options: Optional[SVGOutputOptions] = None,
        document_options: Optional[DocumentOptions] = None,
    ) -> Output:
        """MathML 转换为 SVG"""
        return self._convert(
            Conversion.MML2SVG,
            input,
            inline,
            container_options,
            input_options,
            output_options,
            document_options,
        )

    async def mml2svg_async(
        self,
        input: Input,
        inline: bool = False,
        container_options: Optional[SVGContainerOptions] = None,
        input_options: Optional[MMLInputOptions] = None,
        output_options: Optional[SVGOutputOptions] = None,
        document_options: Optional[DocumentOptions] = None,
    ) -> Output:
        return await self._convert_async(
            Conversion.MML2SVG,
            input,
            inline,
            container_options,
            input_options,
            output_options,
            document_options,
        )

    # ------------------------------------------------------------------
    # AsciiMath 输入
    # ------------------------------------------------------------------

    def am2chtml(
        self,
        input: Input,
        inline: bool = False,
        container_options: Optional[ContainerOptions] = None,
        input_options: Optional[AMInputOptions] = None,
        output_options: Optional[CHTMLOutputOptions] = None,
        document_options: Optional[DocumentOptions] = None,
    ) -> Output:
        """AsciiMath 转换为 CommonHTML"""
        return self._convert(
            Conversion.AM2CHTML,
            input,
            inline,
            container_options,
            input_options,
            output_options,
            document_options,
        )

    async def am2chtml_async(
        self,
        input: Input,
        inline: bool = False,
        container_options: Optional[ContainerOptions] = None,
        input_options: Optional[AMInputOptions] = None,
        output_options: Optional[CHTMLOutputOptions] = None,
        document_options: Optional[DocumentOptions] = None,
    ) -> Output:
        return await self._convert_async(
            Conversion.AM2CHTML,
            input,
            inline,
            container_options,
            input_options,
            output_options,
            document_options,
        )

    def am2mml(
        self,
        input: Input,
        inline: bool = False,
        container_options: Optional[ContainerOptions] = None,
        input_options: Optional[AMInputOptions] = None,
        document_options: Optional[DocumentOptions] = None,
    ) -> Output:
        """AsciiMath 转换为 MathML"""
        return self._convert(
            Conversion.AM2MML,
            input,
            inline,
            container_options,
            input_options,
            document_options,
        )

    async def am2mml_async(
        self,
        input: Input,
        inline: bool = False,
        container_options: Optional[ContainerOptions] = None,
        input_options: Optional[AMInputOptions] = None,
        document_options: Optional[DocumentOptions] = None,
    ) -> Output:
        return await self._convert_async(
            Conversion.AM2MML,
            input,
            inline,
            container_options,
            input_options,
            document_options,
        )

"""
MathJaxBridge 类型定义
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional

from .constants import (
    CHTML_CONVERTER_CLASS,
    CHTML_MODULE,
    DEFAULT_BUNDLE_DIR,
    DEFAULT_PACKAGE_LOCK,
    EXPECTED_MATHJAX_VERSION,
    MML_CONVERTER_CLASS,
    MML_MODULE,
    SVG_CONVERTER_CLASS,
    SVG_MODULE,
)


class OutputFormat(Enum):
    """输出格式，决定加载哪个引擎包以及使用哪个解析器"""

    CHTML = "chtml"  # CommonHTML
    MML = "mml"  # MathML
    SVG = "svg"

    @property
    def module_name(self) -> str:
        return {
            OutputFormat.CHTML: CHTML_MODULE,
            OutputFormat.MML: MML_MODULE,
            OutputFormat.SVG: SVG_MODULE,
        }[self]

    @property
    def class_name(self) -> str:
        return {
            OutputFormat.CHTML: CHTML_CONVERTER_CLASS,
            OutputFormat.MML: MML_CONVERTER_CLASS,
            OutputFormat.SVG: SVG_CONVERTER_CLASS,
        }[self]


class InputKind(Enum):
    """输入类型"""

    TEX = "tex"
    MATHML = "mathml"
    ASCIIMATH = "asciimath"


class Conversion(Enum):
    """转换操作，值即引擎中的函数名"""

    TEX2CHTML = "tex2chtml"
    TEX2MML = "tex2mml"
    TEX2SVG = "tex2svg"
    MML2CHTML = "mml2chtml"
    MML2SVG = "mml2svg"
    AM2CHTML = "am2chtml"
    AM2MML = "am2mml"


@dataclass(frozen=True)
class FunctionLocator:
    """引擎函数定位：globalThis[module][class][function]"""

    module_name: str
    class_name: str
    function_name: str

    def __str__(self) -> str:
        return f"{self.module_name}.{self.class_name}.{self.function_name}"


@dataclass(frozen=True)
class EngineBundle:
    """已读取的引擎包（不可变）"""

    format: OutputFormat
    path: Path
    source: str = field(repr=False)


@dataclass(frozen=True)
class MarshaledArgument:
    """跨越引擎边界的参数

    kind 为 "scalar" 时原样传递，为 "options" 时 value 是配置组的 JSON 文本，
    由引擎侧 JSON.parse 还原
    """

    kind: str
    value: Any

    SCALAR = "scalar"
    OPTIONS = "options"

    def to_wire(self) -> dict:
        return {"kind": self.kind, "value": self.value}


@dataclass(frozen=True)
class PackageMetadata:
    """package-lock.json 中 mathjax-full 的元数据"""

    version: str
    resolved: Optional[str] = None
    integrity: Optional[str] = None


@dataclass
class ConversionResult:
    """带错误的转换结果

    出现内容错误时 value 仍保存引擎的原始输出
    """

    value: str = ""
    error: Optional[Exception] = None

    @property
    def success(self) -> bool:
        return self.error is None


DEFAULT_LAUNCH_ARGS = (
    "--disable-web-security",
    "--allow-file-access-from-files",
    "--disable-features=VizDisplayCompositor",
)


@dataclass(frozen=True)
class RuntimeConfig:
    """运行时配置（不可变）"""

    bundle_dir: Path = DEFAULT_BUNDLE_DIR
    package_lock: Path = DEFAULT_PACKAGE_LOCK
    browser: str = "chromium"
    headless: bool = True
    launch_args: tuple[str, ...] = DEFAULT_LAUNCH_ARGS
    expected_version: str = EXPECTED_MATHJAX_VERSION
    strict_version: bool = False
    auto_install_deps: bool = False

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> "RuntimeConfig":
        """从普通字典读取配置，缺省键使用默认值"""
        defaults = cls()
        return cls(
            bundle_dir=Path(config.get("bundle_dir", defaults.bundle_dir)),
            package_lock=Path(config.get("package_lock", defaults.package_lock)),
            browser=config.get("browser", defaults.browser),
            headless=bool(config.get("headless", defaults.headless)),
            launch_args=tuple(config.get("launch_args", defaults.launch_args)),
            expected_version=config.get("expected_version", defaults.expected_version),
            strict_version=bool(config.get("strict_version", defaults.strict_version)),
            auto_install_deps=bool(
                config.get("auto_install_deps", defaults.auto_install_deps)
            ),
        )

"""
容器配置组
描述输出所在容器的尺寸，引擎据此换算 em/ex 与自动换行宽度
"""
from dataclasses import dataclass, field

from .base import OptionsRecord


@dataclass(frozen=True)
class ContainerOptions(OptionsRecord):
    """CommonHTML / MathML 输出使用的容器配置"""

    em: float = 16  # 1em 对应的像素数
    ex: float = 8  # 1ex 对应的像素数
    width: float = 80 * 16  # 容器宽度（像素）
    line_width: float = 100000
    scale: float = 1
    css: bool = False  # 输出 CSS 而不是公式
    assistive_mml: bool = False  # 附带隐藏的 MathML 供读屏软件使用


@dataclass(frozen=True)
class SVGContainerOptions(OptionsRecord):
    """SVG 输出使用的容器配置"""

    base: ContainerOptions = field(
        default_factory=ContainerOptions, metadata={"flatten": True}
    )
    styles: bool = True  # 输出包含 SVG 样式表
    container: bool = True  # 用 mjx-container 元素包裹输出

"""
输出处理器配置组
公共字段放在 OutputOptions 中，按值嵌入各输出格式的配置组
"""
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .base import FrozenMap, OptionsRecord

DEFAULT_FONT_URL = "https://cdn.jsdelivr.net/npm/mathjax@3/es5/output/chtml/fonts/woff-v2"


@dataclass(frozen=True)
class OutputOptions(OptionsRecord):
    """输出处理器公共配置"""

    scale: float = 1
    min_scale: float = 0.5
    mtext_inherit_font: bool = False
    merror_inherit_font: bool = False
    mtext_font: str = ""
    merror_font: str = "serif"
    unknown_family: str = "serif"
    mathml_spacing: bool = False
    skip_attributes: Mapping[str, bool] = field(default_factory=FrozenMap)
    ex_factor: float = 0.5
    display_align: str = "center"  # left / center / right
    display_indent: float = 0


@dataclass(frozen=True)
class CHTMLOutputOptions(OptionsRecord):
    """CommonHTML 输出处理器配置"""

    common: OutputOptions = field(
        default_factory=OutputOptions, metadata={"flatten": True}
    )
    match_font_height: bool = True
    font_url: str = field(default=DEFAULT_FONT_URL, metadata={"key": "fontURL"})
    adaptive_css: bool = field(default=True, metadata={"key": "adaptiveCSS"})


@dataclass(frozen=True)
class SVGOutputOptions(OptionsRecord):
    """SVG 输出处理器配置"""

    common: OutputOptions = field(
        default_factory=OutputOptions, metadata={"flatten": True}
    )
    font_cache: str = "local"  # none / local / global
    internal_speech_titles: bool = True
    local_id: Optional[str] = field(default=None, metadata={"key": "localID"})
    title_id: int = field(default=0, metadata={"key": "titleID"})

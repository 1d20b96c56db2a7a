"""
文档配置组
包含无障碍、语音规则引擎、菜单与安全扩展的配置
"""
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .base import FrozenMap, OptionsRecord


@dataclass(frozen=True)
class A11yOptions(OptionsRecord):
    """无障碍配置"""

    speech: bool = True
    braille: bool = True
    subtitles: bool = True
    view_braille: bool = False
    background_color: str = "Blue"
    background_opacity: float = 0.2
    foreground_color: str = "Black"
    foreground_opacity: float = 1.0
    highlight: str = "None"  # None / Flame / Hover
    flame: bool = False
    hover: bool = False
    tree_coloring: bool = False
    magnification: str = "None"  # None / Mouse / Keyboard
    magnify: str = "400%"
    key_magnifier: bool = False
    mouse_magnifier: bool = False
    align: str = "top"
    info_type: bool = False
    info_role: bool = False
    info_prefix: bool = False


@dataclass(frozen=True)
class SREOptions(OptionsRecord):
    """语音规则引擎（Speech Rule Engine）配置"""

    domain: str = "mathspeak"
    style: str = "default"
    locale: str = "en"
    subiso: str = ""
    markup: str = "none"
    modality: str = "speech"
    speech: str = "none"
    pprint: bool = True
    structure: Optional[str] = None
    json: Optional[str] = None
    xpath: Optional[str] = None
    rate: float = 1.0
    strict: bool = False
    mode: str = "async"


@dataclass(frozen=True)
class MenuSettings(OptionsRecord):
    tex_hints: bool = True
    semantics: bool = False
    zoom: str = "NoZoom"
    zscale: str = "200%"
    renderer: str = "CHTML"
    alt: bool = False
    cmd: bool = False
    ctrl: bool = False
    shift: bool = False
    scale: float = 1.0
    in_tab_order: bool = True
    assistive_mml: bool = True
    collapsible: bool = False
    explorer: bool = False


@dataclass(frozen=True)
class MenuOptions(OptionsRecord):
    settings: MenuSettings = field(default_factory=MenuSettings)


# ============================================================================
# 安全扩展
# ============================================================================

# AllowOptions 的取值
ALLOW_ALL = "all"
ALLOW_SAFE = "safe"
ALLOW_NONE = "none"


@dataclass(frozen=True)
class AllowOptions(OptionsRecord):
    urls: str = field(default=ALLOW_SAFE, metadata={"key": "URLs"})
    classes: str = ALLOW_SAFE
    css_ids: str = field(default=ALLOW_SAFE, metadata={"key": "cssIDs"})
    styles: str = ALLOW_SAFE


@dataclass(frozen=True)
class SafeProtocols(OptionsRecord):
    http: bool = True
    https: bool = True
    file: bool = True
    javascript: bool = False
    data: bool = False


@dataclass(frozen=True)
class SafeStyles(OptionsRecord):
    color: bool = True
    background_color: bool = True
    border: bool = True
    cursor: bool = True
    margin: bool = True
    padding: bool = True
    text_shadow: bool = True
    font_family: bool = True
    font_size: bool = True
    font_style: bool = True
    font_weight: bool = True
    opacity: bool = True
    outline: bool = True


@dataclass(frozen=True)
class SafeOptions(OptionsRecord):
    """安全扩展配置：过滤输入中的链接、类名、样式等"""

    allow: AllowOptions = field(default_factory=AllowOptions)
    length_max: int = 3
    scriptsizemultiplier_range: tuple[float, float] = (0.6, 1)
    scriptlevel_range: tuple[float, float] = (-2, 2)
    class_pattern: str = "^mjx-[-a-zA-Z0-9_.]+$"
    id_pattern: str = "^mjx-[-a-zA-Z0-9_.]+$"
    data_pattern: str = "^data-mjx-"
    safe_protocols: SafeProtocols = field(default_factory=SafeProtocols)
    safe_styles: SafeStyles = field(default_factory=SafeStyles)


# ============================================================================
# 文档配置
# ============================================================================


def _default_annotation_types() -> FrozenMap:
    return FrozenMap(
        {
            "TeX": ("TeX", "LaTeX", "application/x-tex"),
            "StarMath": ("StarMath 5.0",),
            "Maple": ("Maple",),
            "ContentMathML": ("MathML-Content", "application/mathml-content+xml"),
            "OpenMath": ("OpenMath",),
        }
    )


@dataclass(frozen=True)
class DocumentOptions(OptionsRecord):
    """文档配置"""

    skip_html_tags: tuple[str, ...] = (
        "script",
        "noscript",
        "style",
        "textarea",
        "pre",
        "code",
        "annotation",
        "annotation-xml",
    )
    include_html_tags: Mapping[str, str] = field(
        default_factory=lambda: FrozenMap({"br": "\n", "wbr": "", "#comment": ""})
    )
    ignore_html_class: str = "tex2jax_ignore"
    process_html_class: str = "tex2jax_process"
    enable_enrichment: bool = True
    enable_complexity: bool = True
    make_collapsible: bool = True
    enable_explorer: bool = True
    enable_assistive_mml: bool = False
    enable_menu: bool = True
    annotation_types: Mapping[str, tuple[str, ...]] = field(
        default_factory=_default_annotation_types
    )
    a11y: A11yOptions = field(default_factory=A11yOptions)
    sre: SREOptions = field(default_factory=SREOptions)
    menu_options: MenuOptions = field(default_factory=MenuOptions)
    safe_options: SafeOptions = field(default_factory=SafeOptions)

"""
配置组模块
"""
from .base import FrozenMap, OptionsRecord, engine_key
from .container import ContainerOptions, SVGContainerOptions
from .document import (
    ALLOW_ALL,
    ALLOW_NONE,
    ALLOW_SAFE,
    A11yOptions,
    AllowOptions,
    DocumentOptions,
    MenuOptions,
    MenuSettings,
    SafeOptions,
    SafeProtocols,
    SafeStyles,
    SREOptions,
)
from .input import (
    TAGS_ALL,
    TAGS_AMS,
    TAGS_NONE,
    TEX_PACKAGES,
    AMInputOptions,
    AMSCDOptions,
    AMSOptions,
    AutoloadOptions,
    ColorOptions,
    MathtoolsOptions,
    MMLInputOptions,
    NoundefinedOptions,
    RequireOptions,
    SetOptionsOptions,
    TeXInputOptions,
    VerifyOptions,
)
from .output import (
    DEFAULT_FONT_URL,
    CHTMLOutputOptions,
    OutputOptions,
    SVGOutputOptions,
)

__all__ = [
    "FrozenMap",
    "OptionsRecord",
    "engine_key",
    # 容器
    "ContainerOptions",
    "SVGContainerOptions",
    # 输入
    "TEX_PACKAGES",
    "TAGS_NONE",
    "TAGS_AMS",
    "TAGS_ALL",
    "TeXInputOptions",
    "AMSOptions",
    "AMSCDOptions",
    "AutoloadOptions",
    "ColorOptions",
    "MathtoolsOptions",
    "NoundefinedOptions",
    "RequireOptions",
    "SetOptionsOptions",
    "MMLInputOptions",
    "VerifyOptions",
    "AMInputOptions",
    # 输出
    "DEFAULT_FONT_URL",
    "OutputOptions",
    "CHTMLOutputOptions",
    "SVGOutputOptions",
    # 文档
    "DocumentOptions",
    "A11yOptions",
    "SREOptions",
    "MenuOptions",
    "MenuSettings",
    "SafeOptions",
    "AllowOptions",
    "SafeProtocols",
    "SafeStyles",
    "ALLOW_ALL",
    "ALLOW_SAFE",
    "ALLOW_NONE",
]

"""
输入处理器配置组
TeX / MathML / AsciiMath 三种输入各自的配置，TeX 还包含各扩展包的配置
"""
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .base import FrozenMap, OptionsRecord

# 可通过 load_packages 加载的 TeX 扩展包
TEX_PACKAGES = (
    "action",
    "ams",
    "amscd",
    "base",
    "bbox",
    "boldsymbol",
    "braket",
    "bussproofs",
    "cancel",
    "cases",
    "centernot",
    "color",
    "colortbl",
    "configmacros",
    "empheq",
    "enclose",
    "extpfeil",
    "gensymb",
    "html",
    "mathtools",
    "mhchem",
    "newcommand",
    "noerrors",
    "noundefined",
    "tagformat",
    "textcomp",
    "textmacros",
    "unicode",
    "upgreek",
    "verb",
)

# tags 的取值
TAGS_NONE = "none"
TAGS_AMS = "ams"
TAGS_ALL = "all"


# ============================================================================
# TeX 扩展包配置
# ============================================================================


@dataclass(frozen=True)
class AMSOptions(OptionsRecord):
    multline_width: str = "100%"
    multline_indent: str = "1em"


@dataclass(frozen=True)
class AMSCDOptions(OptionsRecord):
    colspace: str = ""
    rowspace: str = ""
    harrowsize: str = ""
    varrowsize: str = ""
    hide_horizontal_labels: bool = False


@dataclass(frozen=True)
class AutoloadOptions(OptionsRecord):
    """按需加载：宏名出现时自动加载对应扩展包"""

    action: tuple[str, ...] = ("toggle", "mathtip", "texttip")
    amscd: tuple[tuple[str, ...], ...] = ((), ("CD",))
    bbox: tuple[str, ...] = ("bbox",)
    boldsymbol: tuple[str, ...] = ("boldsymbol",)
    braket: tuple[str, ...] = (
        "bra",
        "ket",
        "braket",
        "set",
        "Bra",
        "Ket",
        "Braket",
        "Set",
        "ketbra",
        "Ketbra",
    )
    cancel: tuple[str, ...] = ("cancel", "bcancel", "xcancel", "cancelto")
    color: tuple[str, ...] = (
        "color",
        "definecolor",
        "textcolor",
        "colorbox",
        "fcolorbox",
    )
    enclose: tuple[str, ...] = ("enclose",)
    extpfeil: tuple[str, ...] = (
        "xtwoheadrightarrow",
        "xtwoheadleftarrow",
        "xmapsto",
        "xlongequal",
        "xtofrom",
        "Newextarrow",
    )
    html: tuple[str, ...] = ("href", "class", "style", "cssId")
    mhchem: tuple[str, ...] = ("ce", "pu")
    newcommand: tuple[str, ...] = (
        "newcommand",
        "renewcommand",
        "newenvironment",
        "renewenvironment",
        "def",
        "let",
    )
    unicode: tuple[str, ...] = ("unicode",)
    verb: tuple[str, ...] = ("verb",)


@dataclass(frozen=True)
class ColorOptions(OptionsRecord):
    padding: str = "5px"
    border_width: str = "2px"


@dataclass(frozen=True)
class MathtoolsOptions(OptionsRecord):
    """mathtools 扩展包的键名使用连字符"""

    multlinegap: str = "1em"
    multlined_pos: str = field(default="c", metadata={"key": "multlined-pos"})
    firstline_afterskip: str = field(
        default="", metadata={"key": "firstline-afterskip"}
    )
    lastline_preskip: str = field(default="", metadata={"key": "lastline-preskip"})
    smallmatrix_align: str = field(default="c", metadata={"key": "smallmatrix-align"})
    shortvdotsadjustabove: str = ".2em"
    shortvdotsadjustbelow: str = ".2em"
    centercolon: bool = False
    centercolon_offset: str = field(
        default=".04em", metadata={"key": "centercolon-offset"}
    )
    thincolon_dx: str = field(default="-.04em", metadata={"key": "thincolon-dx"})
    thincolon_dw: str = field(default="-.04em", metadata={"key": "thincolon-dw"})
    use_unicode: bool = field(default=False, metadata={"key": "use-unicode"})
    prescript_sub_format: str = field(
        default="", metadata={"key": "prescript-sub-format"}
    )
    prescript_sup_format: str = field(
        default="", metadata={"key": "prescript-sup-format"}
    )
    prescript_arg_format: str = field(
        default="", metadata={"key": "prescript-arg-format"}
    )
    allow_mathtoolsset: bool = field(
        default=True, metadata={"key": "allow-mathtoolsset"}
    )
    paired_delimiters: Mapping[str, tuple[str, ...]] = field(default_factory=FrozenMap)
    tagforms: Mapping[str, tuple[str, ...]] = field(default_factory=FrozenMap)


@dataclass(frozen=True)
class NoundefinedOptions(OptionsRecord):
    color: str = "red"
    background: str = ""
    size: str = ""


@dataclass(frozen=True)
class RequireOptions(OptionsRecord):
    allow: Mapping[str, bool] = field(
        default_factory=lambda: FrozenMap({"base": False, "all-packages": False})
    )
    default_allow: bool = True


@dataclass(frozen=True)
class SetOptionsOptions(OptionsRecord):
    """\\setOptions 宏的权限配置"""

    allow_package_default: bool = True
    allow_option_default: bool = True


# ============================================================================
# 输入处理器配置
# ============================================================================


@dataclass(frozen=True)
class TeXInputOptions(OptionsRecord):
    """TeX 输入处理器配置

    load_packages 只接受 TEX_PACKAGES 中的包名，base 总是会被加载
    """

    load_packages: tuple[str, ...] = ("base",)
    inline_math: tuple[tuple[str, str], ...] = (("\\(", "\\)"),)
    display_math: tuple[tuple[str, str], ...] = (("$$", "$$"), ("\\[", "\\]"))
    process_escapes: bool = False
    process_refs: bool = True
    process_environments: bool = True
    digits: str = "^(?:[0-9]+(?:{,}[0-9]{3})*(?:.[0-9]*)?|.[0-9]+)"
    tags: str = TAGS_NONE
    tag_side: str = "right"
    tag_indent: str = "0.8em"
    use_label_ids: bool = True
    max_macros: int = 10000
    max_buffer: int = 5 * 1024
    base_url: Optional[str] = field(default=None, metadata={"key": "baseURL"})
    allow_tex_html: bool = field(default=True, metadata={"key": "allowTexHTML"})
    ams: AMSOptions = field(default_factory=AMSOptions)
    amscd: AMSCDOptions = field(default_factory=AMSCDOptions)
    autoload: AutoloadOptions = field(default_factory=AutoloadOptions)
    color: ColorOptions = field(default_factory=ColorOptions)
    mathtools: MathtoolsOptions = field(default_factory=MathtoolsOptions)
    noundefined: NoundefinedOptions = field(default_factory=NoundefinedOptions)
    require: RequireOptions = field(default_factory=RequireOptions)
    setoptions: SetOptionsOptions = field(default_factory=SetOptionsOptions)


@dataclass(frozen=True)
class VerifyOptions(OptionsRecord):
    """MathML 结构校验"""

    check_arity: bool = True
    check_attributes: bool = False
    full_errors: bool = False
    fix_mmultiscripts: bool = True
    fix_mtables: bool = True


@dataclass(frozen=True)
class MMLInputOptions(OptionsRecord):
    """MathML 输入处理器配置"""

    parse_as: str = "html"  # html 或 xml
    force_reparse: bool = False
    verify: VerifyOptions = field(default_factory=VerifyOptions)


@dataclass(frozen=True)
class AMInputOptions(OptionsRecord):
    """AsciiMath 输入处理器配置"""

    fixphi: bool = True
    displaystyle: bool = True
    decimalsign: str = "."

"""
基础设施层
"""
from .engine import (
    ChromiumDependencyInstaller,
    FileBundleStore,
    PlaywrightScriptEngine,
)
from .metadata import PackageLockReader
from .validator import (
    OutputParser,
    HTMLOutputParser,
    MMLOutputParser,
    SVGOutputParser,
    HTML_PARSER,
    MML_PARSER,
    SVG_PARSER,
)

__all__ = [
    "ChromiumDependencyInstaller",
    "FileBundleStore",
    "PlaywrightScriptEngine",
    "PackageLockReader",
    "OutputParser",
    "HTMLOutputParser",
    "MMLOutputParser",
    "SVGOutputParser",
    "HTML_PARSER",
    "MML_PARSER",
    "SVG_PARSER",
]

"""
基础设施层 - 脚本执行环境模块
"""
from .dependency_installer import ChromiumDependencyInstaller
from .bundle_store import FileBundleStore
from .playwright_engine import PlaywrightScriptEngine

__all__ = [
    "ChromiumDependencyInstaller",
    "FileBundleStore",
    "PlaywrightScriptEngine",
]

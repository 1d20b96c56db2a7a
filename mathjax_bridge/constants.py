"""
MathJaxBridge 常量
引擎版本、JS 模块名、资源路径集中定义
"""

from pathlib import Path

# 绑定所针对的 mathjax-full 版本
EXPECTED_MATHJAX_VERSION = "3.2.2"

# package-lock.json 中 mathjax-full 的条目
MATHJAX_DEPENDENCY_KEY = "node_modules/mathjax-full"

# 打包后每个输出格式对应的全局变量（webpack library 名）
CHTML_MODULE = "chtml"
MML_MODULE = "mml"
SVG_MODULE = "svg"

# 转换器类名
CHTML_CONVERTER_CLASS = "CommonHTMLConverter"
MML_CONVERTER_CLASS = "MathMLConverter"
SVG_CONVERTER_CLASS = "SVGConverter"

# 资源目录
RESOURCES_DIR = Path(__file__).resolve().parent / "resources" / "mjn"
DEFAULT_BUNDLE_DIR = RESOURCES_DIR / "dist"
DEFAULT_PACKAGE_LOCK = RESOURCES_DIR / "package-lock.json"
BUNDLE_FILE_SUFFIX = ".bundle.js"

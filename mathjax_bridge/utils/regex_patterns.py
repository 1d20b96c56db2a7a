"""
正则表达式模式集中管理模块

本模块集中定义和预编译所有正则表达式。
所有正则表达式按功能分组，使用全大写+下划线命名。
"""

import re
from typing import Pattern

# ============================================================================
# 输出校验器相关正则 (output_validator.py)
# ============================================================================

# 标签内部：引号外的任意字符，或完整的带引号属性值（值中可能出现 ">"）
_TAG_BODY = r"(?:[^>\"]|\"[^\"]*\")*"

# CommonHTML 错误节点：<mjx-merror ... data-mjx-error="..." ...>
CHTML_ERROR_NODE: Pattern[str] = re.compile(
    r"<mjx-merror\b" + _TAG_BODY + r"\bdata-mjx-error=\"[^\"]*\"" + _TAG_BODY + r">"
)

# MathML 错误节点：<merror ... data-mjx-error="..." ...>
MML_ERROR_NODE: Pattern[str] = re.compile(
    r"<merror\b" + _TAG_BODY + r"\bdata-mjx-error=\"[^\"]*\"" + _TAG_BODY + r">"
)

# SVG 错误节点：同一元素上同时带有 data-mml-node="merror" 与 data-mjx-error，顺序不限
SVG_ERROR_NODE: Pattern[str] = re.compile(
    r"<[\w:-]+"
    r"(?=" + _TAG_BODY + r"\sdata-mml-node=\"merror\")"
    r"(?=" + _TAG_BODY + r"\sdata-mjx-error=\")"
    + _TAG_BODY
    + r">"
)

# 错误节点中的诊断属性
ERROR_ATTRIBUTE: Pattern[str] = re.compile(r"\bdata-mjx-error=\"([^\"]*)\"")


# ============================================================================
# 配置组相关正则 (options/base.py)
# ============================================================================

# snake_case 中的 "_x"，用于转换为 camelCase
SNAKE_SEGMENT: Pattern[str] = re.compile(r"_([a-z0-9])")

"""
工具层 - 日志
整个包共用同一个 logger，调用方自行配置 handler
"""

import logging

logger = logging.getLogger("mathjax_bridge")
logger.addHandler(logging.NullHandler())

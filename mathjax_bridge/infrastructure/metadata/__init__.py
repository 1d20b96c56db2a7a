"""
基础设施层 - 依赖元数据模块
"""
from .package_lock import PackageLockReader

__all__ = ["PackageLockReader"]

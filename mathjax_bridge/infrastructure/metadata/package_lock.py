"""
npm package-lock 读取
从 package-lock.json 中取出 mathjax-full 的版本信息
"""
import json
from pathlib import Path

from ...constants import MATHJAX_DEPENDENCY_KEY
from ...domain.errors import DependencyInfoMissingError, PackageFileMissingError
from ...types import PackageMetadata


class PackageLockReader:
    """package-lock.json 读取器"""

    def __init__(self, path: Path, dependency: str = MATHJAX_DEPENDENCY_KEY):
        self._path = Path(path)
        self._dependency = dependency

    def read(self) -> PackageMetadata:
        """读取依赖元数据

        Raises:
            PackageFileMissingError: 文件不存在、不可读或不是合法 JSON
            DependencyInfoMissingError: packages 中没有该依赖的条目
        """
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                lock = json.load(f)
        except (OSError, ValueError) as e:
            raise PackageFileMissingError(str(self._path)) from e

        packages = lock.get("packages") if isinstance(lock, dict) else None
        entry = packages.get(self._dependency) if isinstance(packages, dict) else None
        if not isinstance(entry, dict) or "version" not in entry:
            raise DependencyInfoMissingError(self._dependency)

        return PackageMetadata(
            version=entry["version"],
            resolved=entry.get("resolved"),
            integrity=entry.get("integrity"),
        )

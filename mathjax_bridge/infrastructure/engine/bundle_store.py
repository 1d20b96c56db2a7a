"""
引擎包读取
每个输出格式对应 <bundle_dir>/<format>.bundle.js
"""
from pathlib import Path

from ...constants import BUNDLE_FILE_SUFFIX
from ...domain.errors import BundleMissingError
from ...types import EngineBundle, OutputFormat
from ...utils.log import logger


class FileBundleStore:
    """从目录读取已构建的引擎包"""

    def __init__(self, bundle_dir: Path):
        self._bundle_dir = Path(bundle_dir)

    def path_for(self, format: OutputFormat) -> Path:
        return self._bundle_dir / f"{format.value}{BUNDLE_FILE_SUFFIX}"

    def read(self, format: OutputFormat) -> EngineBundle:
        """读取引擎包

        Raises:
            BundleMissingError: 文件不存在或不可读
        """
        path = self.path_for(format)
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"[MathJaxBridge] 引擎包读取失败: {path}: {e}")
            raise BundleMissingError(str(path)) from e

        logger.debug(f"[MathJaxBridge] 已读取引擎包 {path} ({len(source)} 字符)")
        return EngineBundle(format=format, path=path, source=source)

"""
Chromium 依赖检测与安装
解决 libnspr4.so 等系统库缺失导致浏览器无法启动的问题
"""

import ctypes
import platform
import subprocess
import sys
from typing import Optional

from ...utils.log import logger


class ChromiumDependencyInstaller:
    """
    Chromium 系统依赖检测器

    依赖处理策略:
    1. 检测方法 - 尝试加载关键 .so 文件 (ctypes.CDLL)
    2. 自动安装 - 仅在 auto_install 开启时执行
       playwright install chromium / playwright install-deps chromium
    3. 降级处理 - 未开启或安装失败时记录手动安装命令
    4. 缓存结果 - 检测结果只计算一次
    """

    REQUIRED_LIBS = [
        "libnspr4.so",
        "libnss3.so",
        "libatk-1.0.so.0",
        "libatk-bridge-2.0.so.0",
        "libdrm.so.2",
        "libxkbcommon.so.0",
        "libatspi.so.0",
        "libXcomposite.so.1",
        "libXdamage.so.1",
        "libXfixes.so.3",
        "libXrandr.so.2",
        "libgbm.so.1",
        "libpango-1.0.so.0",
        "libcairo.so.2",
        "libasound.so.2",
    ]

    INSTALL_TIMEOUT = 300

    def __init__(self, auto_install: bool = False, browser: str = "chromium"):
        self._auto_install = auto_install
        self._browser = browser
        self._missing: Optional[list[str]] = None
        self._install_attempted = False

    def missing_libs(self) -> list[str]:
        """缺失的系统库，Windows 与 macOS 不检测"""
        if self._missing is None:
            if platform.system() in ("Windows", "Darwin"):
                self._missing = []
            else:
                self._missing = [
                    lib for lib in self.REQUIRED_LIBS if not self._can_load_lib(lib)
                ]
                if self._missing:
                    logger.warning(
                        f"[MathJaxBridge] 检测到缺失的系统库: {self._missing[:3]}..."
                    )
        return self._missing

    def is_installed(self) -> bool:
        return not self.missing_libs()

    def _can_load_lib(self, lib_name: str) -> bool:
        try:
            ctypes.CDLL(lib_name)
            return True
        except OSError:
            return False

    def check_and_install(self) -> bool:
        """检查并（在允许时）安装依赖

        Returns:
            依赖是否可用
        """
        if self.is_installed():
            return True

        if not self._auto_install or self._install_attempted:
            self.log_manual_install_instructions()
            return False

        logger.info("[MathJaxBridge] 正在安装浏览器及系统依赖...")
        self._install_attempted = True

        if self._run_playwright("install", self._browser) and self._run_playwright(
            "install-deps", self._browser
        ):
            logger.info("[MathJaxBridge] 浏览器依赖安装成功")
            self._missing = None
            return self.is_installed()

        logger.error("[MathJaxBridge] 浏览器依赖安装失败")
        self.log_manual_install_instructions()
        return False

    def _run_playwright(self, *args: str) -> bool:
        """执行 playwright 命令行"""
        command = [sys.executable, "-m", "playwright", *args]
        try:
            completed = subprocess.run(
                command,
                capture_output=True,
                timeout=self.INSTALL_TIMEOUT,
                check=False,
            )
        except subprocess.TimeoutExpired:
            logger.error(
                f"[MathJaxBridge] {' '.join(args)} 超时({self.INSTALL_TIMEOUT}s)"
            )
            return False
        except OSError as e:
            logger.error(f"[MathJaxBridge] 无法执行 playwright: {e}")
            return False

        if completed.returncode != 0:
            logger.warning(
                f"[MathJaxBridge] playwright {' '.join(args)} 失败: "
                f"{completed.stderr.decode(errors='replace')}"
            )
            return False
        return True

    def diagnose(self) -> str:
        """浏览器启动失败时附加到错误信息中的诊断"""
        missing = self.missing_libs()
        if not missing:
            return ""
        return f"缺失系统库: {', '.join(missing)}"

    def log_manual_install_instructions(self) -> None:
        logger.error(
            "[MathJaxBridge] 浏览器依赖不可用，请手动安装:\n"
            f"    python -m playwright install {self._browser}\n"
            f"    python -m playwright install-deps {self._browser}\n"
            "  或在 Debian/Ubuntu 上:\n"
            "    sudo apt-get install -y libnss3 libnspr4 libatk1.0-0 "
            "libatk-bridge2.0-0 libdrm2 libxkbcommon0 libatspi2.0-0 "
            "libxcomposite1 libxdamage1 libxfixes3 libxrandr2 libgbm1 "
            "libpango-1.0-0 libcairo2 libasound2"
        )

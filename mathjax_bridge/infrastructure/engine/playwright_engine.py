"""
Playwright 脚本执行环境
每个实例拥有独立的 Playwright 驱动、浏览器进程和一个空白页面，
引擎包以 <script> 注入页面，函数通过 page.evaluate 调用

使用同步 API，实例的全部方法必须在创建它的线程上调用
"""
import traceback
from typing import Any, Optional, Sequence

from playwright.sync_api import Browser, Error, Page, Playwright, sync_playwright

from ...domain.errors import (
    ClassMissingError,
    ConversionUnknownError,
    FunctionMissingError,
    ModuleMissingError,
    RuntimeCreationError,
)
from ...domain.interfaces import ExceptionSink
from ...types import EngineBundle, FunctionLocator, MarshaledArgument, RuntimeConfig
from ...utils.decorators import log_execution
from ...utils.log import logger
from .dependency_installer import ChromiumDependencyInstaller

# 查找并（可选地）调用 globalThis[module][cls][fn]，结果以状态记录返回
_CALL_SCRIPT = """
({ module, cls, fn, args }) => {
    const namespace = globalThis[module];
    if (namespace === undefined || namespace === null) {
        return { status: "missing-module" };
    }
    const target = namespace[cls];
    if (target === undefined || target === null) {
        return { status: "missing-class" };
    }
    const func = target[fn];
    if (typeof func !== "function") {
        return { status: "missing-function" };
    }
    if (args === null) {
        return { status: "ok", value: null };
    }
    const decoded = args.map((arg) =>
        arg.kind === "options" ? JSON.parse(arg.value) : arg.value
    );
    try {
        const value = func.apply(target, decoded);
        return { status: "ok", value: value === undefined ? null : value };
    } catch (e) {
        let message = null;
        if (e !== undefined && e !== null) {
            message = e.message !== undefined ? String(e.message) : String(e);
        }
        return { status: "exception", message };
    }
}
"""


class PlaywrightScriptEngine:
    """基于 Playwright 页面的脚本执行环境"""

    def __init__(
        self,
        config: RuntimeConfig,
        on_exception: ExceptionSink,
        installer: Optional[ChromiumDependencyInstaller] = None,
    ):
        self._config = config
        self._on_exception = on_exception
        self._installer = installer or ChromiumDependencyInstaller(
            auto_install=config.auto_install_deps, browser=config.browser
        )
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._page: Optional[Page] = None

    @log_execution
    def start(self) -> None:
        """启动驱动和浏览器，打开空白页面

        Raises:
            RuntimeCreationError: 浏览器无法启动
        """
        if self._config.auto_install_deps:
            self._installer.check_and_install()

        try:
            logger.info(f"[MathJaxBridge] 正在启动 {self._config.browser}...")
            self._playwright = sync_playwright().start()
            browser_type = getattr(self._playwright, self._config.browser)
            self._browser = browser_type.launch(
                headless=self._config.headless,
                args=list(self._config.launch_args),
            )
            self._page = self._browser.new_page()
            self._page.on("pageerror", self._handle_page_error)
            self._page.on(
                "console",
                lambda msg: logger.debug(f"[Browser] {msg.type}: {msg.text}"),
            )
            logger.info("[MathJaxBridge] 脚本执行环境已创建")
        except Exception as e:
            logger.error(f"[MathJaxBridge] 浏览器启动失败: {type(e).__name__}: {e}")
            logger.debug(f"[MathJaxBridge] 堆栈信息:\n{traceback.format_exc()}")
            self.close()
            diagnostic = self._installer.diagnose()
            if diagnostic:
                self._installer.log_manual_install_instructions()
            message = f"浏览器启动失败: {e}"
            if diagnostic:
                message = f"{message} ({diagnostic})"
            raise RuntimeCreationError(message) from e

    def _handle_page_error(self, error: Error) -> None:
        self._on_exception(getattr(error, "message", None) or str(error))

    def _require_page(self) -> Page:
        if self._page is None:
            raise RuntimeCreationError("脚本执行环境未启动")
        return self._page

    @log_execution
    def load(self, bundle: EngineBundle) -> None:
        """以经典脚本的方式执行引擎包"""
        page = self._require_page()
        try:
            page.add_script_tag(content=bundle.source)
        except Error as e:
            logger.error(f"[MathJaxBridge] 引擎包执行失败: {bundle.path}: {e}")
            raise RuntimeCreationError(f"引擎包 {bundle.path} 执行失败: {e}") from e
        logger.info(f"[MathJaxBridge] 已加载引擎包: {bundle.format.value}")

    def lookup(self, locator: FunctionLocator) -> None:
        """确认函数存在且可调用"""
        self._evaluate(locator, None)

    def call(
        self, locator: FunctionLocator, arguments: Sequence[MarshaledArgument]
    ) -> Any:
        """调用函数，返回原始返回值"""
        return self._evaluate(locator, [arg.to_wire() for arg in arguments])

    def _evaluate(self, locator: FunctionLocator, args: Optional[list]) -> Any:
        page = self._require_page()
        try:
            record = page.evaluate(
                _CALL_SCRIPT,
                {
                    "module": locator.module_name,
                    "cls": locator.class_name,
                    "fn": locator.function_name,
                    "args": args,
                },
            )
        except Error as e:
            logger.error(f"[MathJaxBridge] 调用 {locator} 失败: {e}")
            raise ConversionUnknownError(str(e)) from e

        status = record.get("status")
        if status == "ok":
            return record.get("value")
        if status == "missing-module":
            raise ModuleMissingError(locator.module_name)
        if status == "missing-class":
            raise ClassMissingError(locator.class_name)
        if status == "missing-function":
            raise FunctionMissingError(locator.function_name)

        message = record.get("message")
        logger.debug(f"[MathJaxBridge] {locator} 抛出异常: {message}")
        self._on_exception(message)
        raise ConversionUnknownError(message)

    def close(self) -> None:
        """关闭浏览器和驱动"""
        if self._browser:
            try:
                self._browser.close()
            except Exception as e:
                logger.warning(f"[MathJaxBridge] 关闭浏览器时出错: {e}")
            finally:
                self._browser = None
                self._page = None

        if self._playwright:
            try:
                self._playwright.stop()
            except Exception as e:
                logger.warning(f"[MathJaxBridge] 关闭Playwright时出错: {e}")
            finally:
                self._playwright = None

        logger.info("[MathJaxBridge] 脚本执行环境已释放")

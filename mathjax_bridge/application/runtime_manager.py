"""
运行时管理器
拥有一个脚本执行环境和一条派发队列，负责引擎包的按需加载

Pipeline:
caller ──► dispatch queue (1 worker thread) ──► script engine

1. 构造时在工作线程上启动执行环境，并预先加载首选输出格式
2. 其余输出格式在第一次使用时加载 (ensure_loaded)
3. 所有对执行环境的访问都排队到工作线程上按提交顺序执行
4. 关闭后任何调用都抛出 RuntimeClosedError
"""
import asyncio
import threading
import traceback
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Iterable, Optional, Sequence, TypeVar

from ..domain.errors import MathJaxError, RuntimeClosedError, RuntimeCreationError
from ..domain.interfaces import ExceptionSink, IBundleStore, IScriptEngine
from ..infrastructure.engine import FileBundleStore, PlaywrightScriptEngine
from ..types import FunctionLocator, MarshaledArgument, OutputFormat, RuntimeConfig
from ..utils.log import logger
from .function_registry import functions_for

T = TypeVar("T")

# (config, on_exception) -> IScriptEngine
EngineFactory = Callable[[RuntimeConfig, ExceptionSink], IScriptEngine]


class RuntimeManager:
    """运行时管理器 - 独占一个脚本执行环境"""

    def __init__(
        self,
        preferred_output_formats: Iterable[OutputFormat] = (),
        exception_sink: Optional[ExceptionSink] = None,
        config: Optional[RuntimeConfig] = None,
        engine_factory: Optional[EngineFactory] = None,
        bundle_store: Optional[IBundleStore] = None,
    ):
        self._config = config or RuntimeConfig()
        self._exception_sink = exception_sink
        self._engine_factory = engine_factory or PlaywrightScriptEngine
        self._bundle_store = bundle_store or FileBundleStore(self._config.bundle_dir)

        # 以下状态只在工作线程上读写
        self._engine: Optional[IScriptEngine] = None
        self._injected: set[OutputFormat] = set()
        self._loaded: set[OutputFormat] = set()

        self._worker_ident: Optional[int] = None
        self._lock = threading.Lock()
        self._closed = False
        self._executor = ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix="mathjax-bridge",
            initializer=self._mark_worker,
        )

        try:
            self.run(self._start)
            for output_format in preferred_output_formats:
                self.ensure_loaded(output_format)
        except BaseException:
            self.close()
            raise

    # ------------------------------------------------------------------
    # 派发队列
    # ------------------------------------------------------------------

    def _mark_worker(self) -> None:
        self._worker_ident = threading.get_ident()

    def _on_worker(self) -> bool:
        return threading.get_ident() == self._worker_ident

    def _submit(self, job: Callable[[], T]) -> "Future[T]":
        with self._lock:
            if self._closed:
                raise RuntimeClosedError()
            return self._executor.submit(job)

    def run(self, job: Callable[[], T]) -> T:
        """在派发队列上执行任务并等待结果

        在工作线程内部调用时直接执行，避免自我等待
        """
        if self._on_worker():
            return job()
        return self._submit(job).result()

    async def run_async(self, job: Callable[[], T]) -> T:
        """在派发队列上执行任务，以协程形式等待结果

        取消等待不会中断已派发的任务
        """
        if self._on_worker():
            return job()
        future = self._submit(job)
        return await asyncio.shield(
            asyncio.wrap_future(future, loop=asyncio.get_running_loop())
        )

    # ------------------------------------------------------------------
    # 执行环境
    # ------------------------------------------------------------------

    def _start(self) -> None:
        try:
            engine = self._engine_factory(self._config, self._report_exception)
            engine.start()
        except MathJaxError:
            raise
        except Exception as e:
            logger.error(f"[MathJaxBridge] 执行环境创建失败: {type(e).__name__}: {e}")
            logger.debug(f"[MathJaxBridge] 堆栈信息:\n{traceback.format_exc()}")
            raise RuntimeCreationError(f"执行环境创建失败: {e}") from e
        self._engine = engine

    def _require_engine(self) -> IScriptEngine:
        if self._engine is None:
            raise RuntimeClosedError()
        return self._engine

    def _report_exception(self, message: Optional[str]) -> None:
        """转发引擎报告的未捕获异常，回调失败只记录日志"""
        logger.warning(f"[MathJaxBridge] 引擎报告未捕获异常: {message}")
        if self._exception_sink is None:
            return
        try:
            self._exception_sink(message)
        except Exception as e:
            logger.warning(f"[MathJaxBridge] 异常回调执行失败: {type(e).__name__}: {e}")

    def ensure_loaded(self, output_format: OutputFormat) -> None:
        """确保输出格式对应的引擎包已加载（幂等）

        Raises:
            BundleMissingError: 引擎包缺失
            ModuleMissingError / ClassMissingError / FunctionMissingError:
                引擎包没有提供注册表中的函数
        """
        self.run(lambda: self._load(output_format))

    def _load(self, output_format: OutputFormat) -> None:
        if output_format in self._loaded:
            return

        engine = self._require_engine()
        if output_format not in self._injected:
            bundle = self._bundle_store.read(output_format)
            engine.load(bundle)
            self._injected.add(output_format)

        for locator in functions_for(output_format):
            engine.lookup(locator)

        self._loaded.add(output_format)
        logger.info(f"[MathJaxBridge] 输出格式 {output_format.value} 已就绪")

    def is_loaded(self, output_format: OutputFormat) -> bool:
        return output_format in self._loaded

    def call(
        self, locator: FunctionLocator, arguments: Sequence[MarshaledArgument]
    ) -> Any:
        """调用引擎函数，返回原始返回值"""
        return self.run(lambda: self._require_engine().call(locator, arguments))

    # ------------------------------------------------------------------
    # 生命周期
    # ------------------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._closed

    def _stop(self) -> None:
        engine, self._engine = self._engine, None
        if engine is None:
            return
        try:
            engine.close()
        except Exception as e:
            logger.warning(f"[MathJaxBridge] 关闭执行环境时出错: {e}")

    def close(self) -> None:
        """释放执行环境，已排队的任务先执行完"""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            if self._on_worker():
                future = None
            else:
                future = self._executor.submit(self._stop)

        if future is None:
            self._stop()
            self._executor.shutdown(wait=False)
        else:
            try:
                future.result()
            finally:
                self._executor.shutdown(wait=True)
        logger.info("[MathJaxBridge] 运行时已关闭")

    def __enter__(self) -> "RuntimeManager":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

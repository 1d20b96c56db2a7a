"""
工具层 - AOP装饰器
记录一次调用的开始、结束和耗时
"""

import functools
import inspect
import time
from contextlib import contextmanager
from typing import Callable, Iterator, TypeVar

from ..domain.errors import MathJaxError
from .log import logger

T = TypeVar("T")


@contextmanager
def _timed(name: str) -> Iterator[None]:
    """计时上下文，MathJaxError 记 debug 并带错误码，其他异常记 warning"""
    logger.debug(f"[MathJaxBridge] {name} 开始执行")
    started = time.perf_counter()
    try:
        yield
    except MathJaxError as e:
        code = e.code.value if e.code else "-"
        logger.debug(
            f"[MathJaxBridge] {name} 执行失败 [{code}]，"
            f"耗时: {time.perf_counter() - started:.3f}s"
        )
        raise
    except Exception as e:
        logger.warning(
            f"[MathJaxBridge] {name} 执行失败，耗时: {time.perf_counter() - started:.3f}s, "
            f"错误: {type(e).__name__}: {e}"
        )
        raise
    logger.debug(
        f"[MathJaxBridge] {name} 执行完成，耗时: {time.perf_counter() - started:.3f}s"
    )


def log_execution(func: Callable[..., T]) -> Callable[..., T]:
    """日志装饰器 - 同步函数和协程函数都适用"""
    name = func.__qualname__

    if inspect.iscoroutinefunction(func):

        @functools.wraps(func)
        async def run_async(*args, **kwargs):
            with _timed(name):
                return await func(*args, **kwargs)

        return run_async

    @functools.wraps(func)
    def run(*args, **kwargs):
        with _timed(name):
            return func(*args, **kwargs)

    return run

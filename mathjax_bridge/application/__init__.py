"""
应用层
"""
from .function_registry import FUNCTION_REGISTRY, FunctionSpec, functions_for, resolve
from .runtime_manager import EngineFactory, RuntimeManager
from .invoker import Invoker, marshal

__all__ = [
    "FUNCTION_REGISTRY",
    "FunctionSpec",
    "functions_for",
    "resolve",
    "EngineFactory",
    "RuntimeManager",
    "Invoker",
    "marshal",
]

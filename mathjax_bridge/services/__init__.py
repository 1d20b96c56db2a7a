"""
服务层
"""
from .mathjax import MathJax

__all__ = ["MathJax"]

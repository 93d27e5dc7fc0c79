"""
流水线模块 - 出图编排与执行

子模块：
- executor: 出图执行器
"""

from .executor import PlotExecutor

__all__ = [
    "PlotExecutor",
]

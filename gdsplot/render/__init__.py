"""
渲染模块 - 样式解析/结构预处理/坐标变换/分层绘制

子模块：
- resolver: 图层样式合并
- preparer: 单元预处理（过滤/分层/范围）
- transform: 出图变换与画布尺寸
- renderer: 填充→描边两遍绘制
- canvas: cairo 画布（按需导入，依赖系统 cairo 库）
"""

from .preparer import StructPreparer
from .renderer import LayeredRenderer
from .resolver import StyleResolver
from .transform import PlotGeometry, compute_plot_transform, round_half_up

__all__ = [
    "StyleResolver",
    "StructPreparer",
    "PlotGeometry",
    "compute_plot_transform",
    "round_half_up",
    "LayeredRenderer",
]

"""
数据模型层 - 定义系统核心数据结构

所有模块通过这些模型交互，实现解耦：
- Context: 样式表折叠后的渲染上下文
- LayerClass: 层叠样式类
- PreparedStruct: 预处理后的单元（图层/多边形/范围）
- Transform: 物理坐标→像素坐标的仿射变换
- PlotResult: 单个单元的出图结果
"""

from .context import Context, ResolutionScale, ScaleMode, SizeScale, parse_layer_id
from .geometry import Extents, Point, Rect, Transform, Vector
from .prepared import Boundary, Layer, PreparedStruct
from .result import PlotResult, PlotStatus
from .style import (
    ColorRgb,
    FillPattern,
    FillStyle,
    LayerClass,
    LayerClassSheet,
    StrokeStyle,
)

__all__ = [
    "Context",
    "ScaleMode",
    "ResolutionScale",
    "SizeScale",
    "parse_layer_id",
    "ColorRgb",
    "FillPattern",
    "FillStyle",
    "StrokeStyle",
    "LayerClass",
    "LayerClassSheet",
    "Point",
    "Vector",
    "Rect",
    "Extents",
    "Transform",
    "Layer",
    "Boundary",
    "PreparedStruct",
    "PlotResult",
    "PlotStatus",
]

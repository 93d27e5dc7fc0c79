"""
坐标变换与比例计算 - 物理坐标(米) → 像素坐标

流程：
1. 平移 -min，使几何以原点为起点
2. 按比例模式缩放
   - resolution: 按像素/米等比缩放
   - size: 取 宽/高 两个缩放因子中较小者等比缩放（保持长宽比，适配到框内）
3. 翻转Y轴（版图Y向上，光栅行向下）并平移出图高度
4. 平移边距，画布尺寸两侧各加 margin

测试要点：
- test_resolution_mode: 分辨率模式尺寸
- test_size_mode_aspect: 尺寸模式保持长宽比
- test_flip_y / test_margin: Y翻转与边距
- test_empty_extents: 空范围报错
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..interfaces import DegenerateGeometryError
from ..models import Extents, ResolutionScale, ScaleMode, SizeScale, Transform


@dataclass(frozen=True)
class PlotGeometry:
    """出图变换与画布尺寸（含边距）"""
    transform: Transform
    width: int
    height: int


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_plot_transform(extents: Extents, scale: ScaleMode, margin: int = 0) -> PlotGeometry:
    """
    计算出图变换

    Raises:
        DegenerateGeometryError: 范围为空或宽/高为零
    """
    if extents.empty:
        raise DegenerateGeometryError("没有可见几何")

    rect = extents.rect
    phys = rect.size
    if phys.x <= 0 or phys.y <= 0:
        raise DegenerateGeometryError(f"可见几何面积为零: {phys.x} x {phys.y}")

    tx = Transform.identity().translated(-rect.min.x, -rect.min.y)

    if isinstance(scale, ResolutionScale):
        ppm = scale.pixels_per_meter
        tx = tx.scaled(ppm, ppm)
        sz = tx.apply_vector(phys)
        plot_w, plot_h = round_half_up(sz.x), round_half_up(sz.y)
    elif isinstance(scale, SizeScale):
        fw = scale.width / phys.x
        fh = scale.height / phys.y
        if fw < fh:
            tx = tx.scaled(fw, fw)
            plot_w, plot_h = scale.width, round_half_up(phys.y * fw)
        else:
            tx = tx.scaled(fh, fh)
            plot_w, plot_h = round_half_up(phys.x * fh), scale.height
    else:
        raise TypeError(f"未知比例模式: {scale!r}")

    tx = tx.scaled(1.0, -1.0).translated(0.0, float(plot_h))
    tx = tx.translated(float(margin), float(margin))

    return PlotGeometry(
        transform=tx,
        width=plot_w + 2 * margin,
        height=plot_h + 2 * margin,
    )

"""
分层渲染器 - 按 order 两遍绘制（先全部填充，再全部描边）

绘制顺序契约：
1. 背景（若配置）
2. 填充：按 order 升序，每个图层在隔离合成组内填充，再按 alpha 合成到画布
   （同层重叠多边形不会相互叠加透明度）
3. 描边：按 order 升序，直接以 rgba 描边，可选虚线

测试要点：
- test_fill_before_stroke: 所有填充完成后才开始描边
- test_layer_order: 图层按 order 升序绘制
- test_fill_uses_group_and_alpha: 填充使用合成组与 alpha
- test_stroke_state: 描边颜色、虚线与线宽
"""

from __future__ import annotations

import logging

from ..interfaces import ICanvas, IRenderer
from ..models import Boundary, ColorRgb, PreparedStruct, Transform

logger = logging.getLogger(__name__)


class LayeredRenderer(IRenderer):
    """分层渲染器实现"""

    def __init__(self, canvas: ICanvas):
        self.canvas = canvas

    def render(
        self,
        prepared: PreparedStruct,
        transform: Transform,
        bg_color: ColorRgb | None = None,
    ) -> None:
        cr = self.canvas

        if bg_color is not None:
            cr.set_source_rgb(*bg_color.as_tuple())
            cr.paint()

        self._fill_pass(prepared, transform)
        self._stroke_pass(prepared, transform)

    def _fill_pass(self, prepared: PreparedStruct, transform: Transform) -> None:
        cr = self.canvas
        for layer in prepared.layers:
            fs = layer.style.get_fill_style()
            if fs is None:
                continue
            cr.push_group()
            cr.set_source_rgb(*fs.color.as_tuple())
            for b in prepared.boundaries_on(layer):
                self._add_path(b, transform)
                cr.fill()
            cr.pop_group_to_source()
            cr.paint_with_alpha(fs.alpha)

    def _stroke_pass(self, prepared: PreparedStruct, transform: Transform) -> None:
        cr = self.canvas
        for layer in prepared.layers:
            ss = layer.style.get_stroke_style()
            if ss is None:
                continue
            cr.save()
            cr.set_source_rgba(*ss.color.as_tuple(), ss.alpha)
            if ss.dashes:
                cr.set_dash(ss.dashes, 0.0)
            cr.set_line_width(ss.width)
            for b in prepared.boundaries_on(layer):
                self._add_path(b, transform)
                cr.stroke()
            cr.restore()

    def _add_path(self, boundary: Boundary, transform: Transform) -> None:
        """添加闭合路径（最后一点后回到第一点）"""
        if not boundary.points:
            return
        cr = self.canvas
        first, *rest = boundary.points
        p = transform.apply(first)
        cr.move_to(p.x, p.y)
        for pt in rest:
            p = transform.apply(pt)
            cr.line_to(p.x, p.y)
        cr.close_path()

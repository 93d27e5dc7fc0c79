"""
Cairo 画布 - ICanvas 的 cairo 实现

依赖：
- cairocffi: cairo 绑定（ARGB32 图像表面，奇偶填充规则）
"""

from __future__ import annotations

from pathlib import Path

import cairocffi as cairo

from ..interfaces import ICanvas, RenderError


class CairoCanvas(ICanvas):
    """cairo 图像画布（每个出图目标独占一个）"""

    def __init__(self, surface: cairo.ImageSurface):
        self.surface = surface
        self.cr = cairo.Context(surface)
        self.cr.set_fill_rule(cairo.FILL_RULE_EVEN_ODD)

    @classmethod
    def create(cls, width: int, height: int) -> CairoCanvas:
        if width <= 0 or height <= 0:
            raise RenderError(f"画布尺寸无效: {width} x {height}")
        return cls(cairo.ImageSurface(cairo.FORMAT_ARGB32, width, height))

    @property
    def width(self) -> int:
        return self.surface.get_width()

    @property
    def height(self) -> int:
        return self.surface.get_height()

    def move_to(self, x: float, y: float) -> None:
        self.cr.move_to(x, y)

    def line_to(self, x: float, y: float) -> None:
        self.cr.line_to(x, y)

    def close_path(self) -> None:
        self.cr.close_path()

    def fill(self) -> None:
        self.cr.fill()

    def stroke(self) -> None:
        self.cr.stroke()

    def paint(self) -> None:
        self.cr.paint()

    def paint_with_alpha(self, alpha: float) -> None:
        self.cr.paint_with_alpha(alpha)

    def set_source_rgb(self, r: float, g: float, b: float) -> None:
        self.cr.set_source_rgb(r, g, b)

    def set_source_rgba(self, r: float, g: float, b: float, a: float) -> None:
        self.cr.set_source_rgba(r, g, b, a)

    def set_line_width(self, width: float) -> None:
        self.cr.set_line_width(width)

    def set_dash(self, dashes: list[float], offset: float = 0.0) -> None:
        self.cr.set_dash(dashes, offset)

    def save(self) -> None:
        self.cr.save()

    def restore(self) -> None:
        self.cr.restore()

    def push_group(self) -> None:
        self.cr.push_group()

    def pop_group_to_source(self) -> None:
        self.cr.pop_group_to_source()

    def write_png(self, path: Path) -> None:
        self.surface.flush()
        try:
            self.surface.write_to_png(str(path))
        except (OSError, cairo.CairoError) as e:
            raise RenderError(f"PNG写入失败: {path}: {e}") from e

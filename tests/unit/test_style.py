"""
样式合并与图层样式解析单元测试

每个模块完成后必须运行：pytest tests/unit/test_style.py -v
"""

import logging

import pytest

from gdsplot.config import ContextBuilder
from gdsplot.models import (
    ColorRgb,
    Context,
    FillPattern,
    LayerClass,
    LayerClassSheet,
)
from gdsplot.render import StyleResolver

RED = ColorRgb.parse("#ff0000")
BLUE = ColorRgb.parse("#0000ff")


def build(*lines: str) -> Context:
    builder = ContextBuilder(lib_units_per_meter=1e-9)
    builder.feed_lines(lines)
    return builder.build()


class TestSheetMerge:
    """样式子表合并测试"""

    def test_other_wins_when_set(self):
        a = LayerClassSheet(color=RED, alpha=0.5)
        b = LayerClassSheet(color=BLUE)
        merged = a.merge(b)
        assert merged.color == BLUE
        assert merged.alpha == 0.5

    def test_unset_keeps_base(self):
        a = LayerClassSheet(width=2.0, dashes=[1.0, 2.0])
        merged = a.merge(LayerClassSheet())
        assert merged == a

    def test_merge_is_pure(self):
        a = LayerClassSheet(color=RED)
        a.merge(LayerClassSheet(color=BLUE, alpha=0.1))
        assert a.color == RED
        assert a.alpha is None

    def test_sheets_merge_independently(self):
        a = LayerClass(fill=LayerClassSheet(color=RED))
        b = LayerClass(stroke=LayerClassSheet(color=BLUE))
        merged = a.merge(b)
        assert merged.fill.color == RED
        assert merged.stroke.color == BLUE
        assert merged.general.is_empty()


class TestStyleGate:
    """可绘制样式判定测试"""

    def test_fill_requires_pattern(self):
        """有color/alpha但无pattern时不填充，有width也不行"""
        cls = LayerClass(general=LayerClassSheet(color=RED, alpha=0.3))
        assert cls.get_fill_style() is None
        cls = LayerClass(general=LayerClassSheet(color=RED, alpha=0.3, width=1.0))
        assert cls.get_fill_style() is None

    def test_fill_style(self):
        cls = LayerClass(
            general=LayerClassSheet(color=RED, alpha=0.3),
            fill=LayerClassSheet(pattern=FillPattern.SOLID),
        )
        fs = cls.get_fill_style()
        assert fs is not None
        assert fs.color == RED
        assert fs.alpha == 0.3
        assert fs.pattern == FillPattern.SOLID

    def test_fill_sheet_overrides_general(self):
        cls = LayerClass(
            general=LayerClassSheet(color=RED),
            fill=LayerClassSheet(color=BLUE, pattern=FillPattern.SOLID),
        )
        assert cls.get_fill_style().color == BLUE

    def test_default_alpha(self):
        cls = LayerClass(fill=LayerClassSheet(color=RED, pattern=FillPattern.SOLID))
        assert cls.get_fill_style().alpha == 1.0

    def test_stroke_requires_width(self):
        cls = LayerClass(general=LayerClassSheet(color=RED, pattern=FillPattern.SOLID))
        assert cls.get_stroke_style() is None
        assert cls.get_fill_style() is not None

    def test_stroke_style(self):
        cls = LayerClass(
            general=LayerClassSheet(color=RED, alpha=0.8),
            stroke=LayerClassSheet(width=1.5, dashes=[4.0, 2.0]),
        )
        ss = cls.get_stroke_style()
        assert ss.width == 1.5
        assert ss.alpha == 0.8
        assert ss.dashes == [4.0, 2.0]

    def test_stroke_without_color(self):
        cls = LayerClass(stroke=LayerClassSheet(width=1.0))
        assert cls.get_stroke_style() is None


class TestStyleResolver:
    """图层样式解析测试"""

    def test_unassigned_layer_is_empty(self, sample_context: Context):
        style = StyleResolver(sample_context).resolve(42)
        assert style == LayerClass()
        assert style.get_fill_style() is None
        assert style.get_stroke_style() is None

    def test_precedence_later_wins(self):
        """[A, B]：仅A设置的属性保留，两者都设置时取B"""
        ctx = build(
            "alias 1 m1 A B",
            "general A color #ff0000 alpha 0.2",
            "general B color #0000ff",
        )
        style = StyleResolver(ctx).resolve(1)
        assert style.general.color == BLUE
        assert style.general.alpha == 0.2

    def test_left_to_right_fold(self):
        ctx = build(
            "alias 1 m1 A B C",
            "fill A color #ff0000 alpha 0.1",
            "fill B alpha 0.2 pattern solid",
            "fill C color #0000ff",
        )
        resolver = StyleResolver(ctx)
        expected = ctx.classes["A"].merge(ctx.classes["B"]).merge(ctx.classes["C"])
        assert resolver.resolve(1) == expected
        assert resolver.resolve(1).fill.alpha == 0.2

    def test_sample_sheet(self, sample_context: Context):
        resolver = StyleResolver(sample_context)
        m1 = resolver.resolve(1)
        fs = m1.get_fill_style()
        assert fs.color == BLUE
        assert fs.alpha == 0.5
        ss = m1.get_stroke_style()
        assert ss.color == ColorRgb.parse("#808080")
        assert ss.dashes == [4.0, 2.0]

        poly = resolver.resolve(3)
        assert poly.get_fill_style().color == RED
        assert poly.get_stroke_style() is None

    def test_cached(self, sample_context: Context):
        resolver = StyleResolver(sample_context)
        assert resolver.resolve(1) is resolver.resolve(1)

    def test_undefined_class_skipped(self, caplog: pytest.LogCaptureFixture):
        ctx = build("alias 1 m1 missing A", "fill A color #ff0000 pattern solid")
        with caplog.at_level(logging.WARNING):
            style = StyleResolver(ctx).resolve(1)
        assert style.get_fill_style().color == RED
        assert "missing" in caplog.text

    def test_order_of(self):
        ctx = build("order 5 -2")
        resolver = StyleResolver(ctx)
        assert resolver.order_of(5) == -2
        assert resolver.order_of(6) == 6

"""
分层渲染单元测试

每个模块完成后必须运行：pytest tests/unit/test_renderer.py -v
"""

import pytest

from gdsplot.models import (
    Boundary,
    ColorRgb,
    Extents,
    FillPattern,
    Layer,
    LayerClass,
    LayerClassSheet,
    Point,
    PreparedStruct,
    Transform,
)
from gdsplot.render import LayeredRenderer

RED = ColorRgb.parse("#ff0000")
BLUE = ColorRgb.parse("#0000ff")

FILL_ONLY = LayerClass(fill=LayerClassSheet(color=RED, alpha=0.4, pattern=FillPattern.SOLID))
STROKE_ONLY = LayerClass(stroke=LayerClassSheet(color=BLUE, width=2.0, dashes=[3.0, 1.0]))
BOTH = FILL_ONLY.merge(STROKE_ONLY)
SQUARE = [Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)]


def make_struct(*layers: Layer) -> PreparedStruct:
    boundaries = [Boundary(layer=l, points=list(SQUARE)) for l in layers]
    return PreparedStruct(name="T", layers=list(layers), boundaries=boundaries, extents=Extents())


class TestLayeredRenderer:
    """分层渲染测试"""

    def test_fill_uses_group_and_alpha(self, recording_canvas):
        struct = make_struct(Layer(id=1, order=1, style=FILL_ONLY))
        LayeredRenderer(recording_canvas).render(struct, Transform.identity())
        assert recording_canvas.names() == [
            "push_group",
            "set_source_rgb",
            "move_to", "line_to", "line_to", "line_to", "close_path",
            "fill",
            "pop_group_to_source",
            "paint_with_alpha",
        ]
        assert ("set_source_rgb", 1.0, 0.0, 0.0) in recording_canvas.calls
        assert recording_canvas.calls[-1] == ("paint_with_alpha", 0.4)

    def test_stroke_state(self, recording_canvas):
        struct = make_struct(Layer(id=1, order=1, style=STROKE_ONLY))
        LayeredRenderer(recording_canvas).render(struct, Transform.identity())
        names = recording_canvas.names()
        assert names[0] == "save"
        assert names[-1] == "restore"
        assert ("set_source_rgba", 0.0, 0.0, 1.0, 1.0) in recording_canvas.calls
        assert ("set_dash", [3.0, 1.0], 0.0) in recording_canvas.calls
        assert ("set_line_width", 2.0) in recording_canvas.calls
        assert "push_group" not in names
        assert "stroke" in names

    def test_no_dashes_no_set_dash(self, recording_canvas):
        style = LayerClass(stroke=LayerClassSheet(color=BLUE, width=1.0))
        LayeredRenderer(recording_canvas).render(
            make_struct(Layer(id=1, order=1, style=style)), Transform.identity()
        )
        assert "set_dash" not in recording_canvas.names()

    def test_fill_before_stroke(self, recording_canvas):
        """所有填充完成后才开始描边"""
        struct = make_struct(
            Layer(id=1, order=1, style=BOTH),
            Layer(id=2, order=2, style=BOTH),
        )
        LayeredRenderer(recording_canvas).render(struct, Transform.identity())
        names = recording_canvas.names()
        last_fill = max(i for i, n in enumerate(names) if n == "paint_with_alpha")
        first_stroke = names.index("save")
        assert last_fill < first_stroke
        assert names.count("fill") == 2
        assert names.count("stroke") == 2

    def test_layer_order(self, recording_canvas):
        """填充按图层列表顺序（order升序）"""
        styles = {
            1: LayerClass(fill=LayerClassSheet(color=ColorRgb.parse("#010000"), pattern=FillPattern.SOLID)),
            3: LayerClass(fill=LayerClassSheet(color=ColorRgb.parse("#030000"), pattern=FillPattern.SOLID)),
            5: LayerClass(fill=LayerClassSheet(color=ColorRgb.parse("#050000"), pattern=FillPattern.SOLID)),
        }
        layers = [Layer(id=i, order=i, style=styles[i]) for i in (1, 3, 5)]
        LayeredRenderer(recording_canvas).render(make_struct(*layers), Transform.identity())
        reds = [c[1] for c in recording_canvas.calls if c[0] == "set_source_rgb"]
        assert reds == pytest.approx([1 / 255, 3 / 255, 5 / 255])

    def test_unstyled_layer_skipped(self, recording_canvas):
        struct = make_struct(Layer(id=1, order=1, style=LayerClass()))
        LayeredRenderer(recording_canvas).render(struct, Transform.identity())
        assert recording_canvas.calls == []

    def test_background_first(self, recording_canvas):
        struct = make_struct(Layer(id=1, order=1, style=FILL_ONLY))
        LayeredRenderer(recording_canvas).render(
            struct, Transform.identity(), bg_color=ColorRgb.parse("#ffffff")
        )
        assert recording_canvas.calls[0] == ("set_source_rgb", 1.0, 1.0, 1.0)
        assert recording_canvas.calls[1] == ("paint",)
        assert recording_canvas.names().count("paint") == 1

    def test_transform_applied(self, recording_canvas):
        struct = make_struct(Layer(id=1, order=1, style=FILL_ONLY))
        tx = Transform.identity().scaled(10, -10).translated(0, 10)
        LayeredRenderer(recording_canvas).render(struct, tx)
        path = [c for c in recording_canvas.calls if c[0] in ("move_to", "line_to")]
        assert path == [
            ("move_to", 0, 10),
            ("line_to", 10, 10),
            ("line_to", 10, 0),
            ("line_to", 0, 0),
        ]

    def test_only_own_boundaries(self, recording_canvas):
        a = Layer(id=1, order=1, style=FILL_ONLY)
        b = Layer(id=2, order=2, style=LayerClass())
        struct = PreparedStruct(
            name="T",
            layers=[a, b],
            boundaries=[Boundary(layer=b, points=list(SQUARE)), Boundary(layer=a, points=list(SQUARE))],
        )
        LayeredRenderer(recording_canvas).render(struct, Transform.identity())
        assert recording_canvas.names().count("move_to") == 1

"""
pytest 配置与公共 fixtures

使用方式：
    def test_something(sample_library, recording_canvas):
        assert sample_library.find_struct("TOP") is not None
"""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Generator

import pytest

from gdsplot.config import ContextBuilder, RuntimeConfig
from gdsplot.interfaces import ICanvas
from gdsplot.layout import ElemKind, LayoutElem, LayoutLibrary, LayoutStruct, LayoutUnits
from gdsplot.models import Context


# ============================================================================
# 画布 Fixtures
# ============================================================================

class RecordingCanvas(ICanvas):
    """记录全部绘制调用的假画布"""

    def __init__(self, width: int = 0, height: int = 0):
        self.width = width
        self.height = height
        self.calls: list[tuple] = []
        self.written: list[Path] = []

    def _rec(self, name: str, *args) -> None:
        self.calls.append((name, *args))

    def move_to(self, x, y): self._rec("move_to", x, y)
    def line_to(self, x, y): self._rec("line_to", x, y)
    def close_path(self): self._rec("close_path")
    def fill(self): self._rec("fill")
    def stroke(self): self._rec("stroke")
    def paint(self): self._rec("paint")
    def paint_with_alpha(self, alpha): self._rec("paint_with_alpha", alpha)
    def set_source_rgb(self, r, g, b): self._rec("set_source_rgb", r, g, b)
    def set_source_rgba(self, r, g, b, a): self._rec("set_source_rgba", r, g, b, a)
    def set_line_width(self, width): self._rec("set_line_width", width)
    def set_dash(self, dashes, offset=0.0): self._rec("set_dash", list(dashes), offset)
    def save(self): self._rec("save")
    def restore(self): self._rec("restore")
    def push_group(self): self._rec("push_group")
    def pop_group_to_source(self): self._rec("pop_group_to_source")

    def write_png(self, path):
        self.written.append(Path(path))

    def names(self) -> list[str]:
        return [c[0] for c in self.calls]


@pytest.fixture
def recording_canvas() -> RecordingCanvas:
    return RecordingCanvas()


@pytest.fixture
def canvas_factory() -> Generator:
    """返回 (工厂函数, 已创建画布列表)"""
    created: list[RecordingCanvas] = []

    def factory(width: int, height: int) -> RecordingCanvas:
        canvas = RecordingCanvas(width, height)
        created.append(canvas)
        return canvas

    yield factory, created


# ============================================================================
# 版图 Fixtures
# ============================================================================

def rect_elem(layer: int, x0: int, y0: int, x1: int, y1: int, kind=ElemKind.BOUNDARY) -> LayoutElem:
    """矩形边界元素"""
    return LayoutElem(kind=kind, layer=layer, xy=((x0, y0), (x1, y0), (x1, y1), (x0, y1)))


@pytest.fixture
def sample_struct() -> LayoutStruct:
    """两个图层的示例单元（数据库单位）"""
    return LayoutStruct(
        name="TOP",
        elems=[
            rect_elem(3, 0, 0, 100, 50),
            rect_elem(1, 10, 10, 200, 100),
            rect_elem(3, 50, 20, 80, 40),
            LayoutElem(kind=ElemKind.TEXT, layer=5, xy=((500, 500),), text="label"),
        ],
    )


@pytest.fixture
def sample_library(sample_struct: LayoutStruct) -> LayoutLibrary:
    """示例版图库（1 dbu = 1nm）"""
    empty = LayoutStruct(name="EMPTY", elems=[])
    text_only = LayoutStruct(
        name="TEXT_ONLY",
        elems=[LayoutElem(kind=ElemKind.TEXT, layer=5, xy=((0, 0),), text="x")],
    )
    return LayoutLibrary(
        name="LIB",
        units=LayoutUnits(dbu_in_uu=1e-3, dbu_in_m=1e-9),
        structs=[sample_struct, empty, text_only],
    )


# ============================================================================
# 配置 Fixtures
# ============================================================================

STYLE_TEXT = """\
// 示例样式表
alias 1 metal1 base m1
alias 3 poly base poly   // 多晶硅
general base color #808080 alpha 0.5
fill base pattern solid
fill m1 color #0000ff
stroke m1 width 1.5 dashes 4 2
general poly color #ff0000
bgcolor #ffffff
margin 4
"""


@pytest.fixture
def builder() -> ContextBuilder:
    return ContextBuilder(lib_units_per_meter=1e-9)


@pytest.fixture
def sample_context(builder: ContextBuilder) -> Context:
    """示例样式上下文"""
    builder.feed_lines(STYLE_TEXT.splitlines())
    return builder.build()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """临时目录"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_stylesheet(temp_dir: Path) -> Path:
    """示例样式表文件"""
    path = temp_dir / "default.style"
    path.write_text(STYLE_TEXT, encoding="utf-8")
    return path


@pytest.fixture
def runtime_config(temp_dir: Path) -> RuntimeConfig:
    """输出到临时目录的运行期配置"""
    config = RuntimeConfig()
    config.output.output_dir = temp_dir / "out"
    return config

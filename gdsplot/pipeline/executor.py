"""
出图执行器 - 编排 打开版图→加载样式→逐单元出图

职责：
1. 打开版图文件（失败则整体中止）
2. 按顺序加载默认样式表与指定样式表（失败则整体中止）
3. 逐单元：查找→预处理→计算变换→绘制→写PNG
4. 失败隔离（单个单元失败不影响其他单元）

测试要点：
- test_plot_cells: 正常出图
- test_missing_cell_isolated: 单元不存在只影响自身
- test_degenerate_cell_isolated: 无可见几何只影响自身
- test_stylesheet_error_aborts: 样式表错误整体中止
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from ..config import RuntimeConfig, get_config, load_context
from ..interfaces import CellNotFoundError, GdsPlotError, ICanvas, ILayoutSource
from ..layout import open_library
from ..models import Context, PlotResult
from ..render import LayeredRenderer, StructPreparer, compute_plot_transform

logger = logging.getLogger(__name__)

CanvasFactory = Callable[[int, int], ICanvas]
LibraryOpener = Callable[[Path], ILayoutSource]


def _cairo_canvas(width: int, height: int) -> ICanvas:
    from ..render.canvas import CairoCanvas

    return CairoCanvas.create(width, height)


class PlotExecutor:
    """出图执行器"""

    def __init__(
        self,
        config: RuntimeConfig | None = None,
        canvas_factory: CanvasFactory | None = None,
        library_opener: LibraryOpener | None = None,
    ):
        self.config = config or get_config()
        self.canvas_factory = canvas_factory or _cairo_canvas
        self.library_opener = library_opener or open_library

    def run(
        self,
        layout_path: str | Path,
        cell_names: Sequence[str],
        stylesheets: Iterable[str | Path] = (),
    ) -> list[PlotResult]:
        """
        执行出图

        Raises:
            SourceError: 版图无法打开
            StylesheetError: 样式表有误
        """
        library = self.library_opener(Path(layout_path))
        ctx = self.load_context(library, stylesheets)
        self.config.ensure_dirs()

        workers = min(self.config.concurrency.max_workers, len(cell_names))
        if workers > 1:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                results = list(pool.map(lambda n: self._plot_isolated(library, ctx, n), cell_names))
        else:
            results = [self._plot_isolated(library, ctx, name) for name in cell_names]

        failed = sum(1 for r in results if not r.ok)
        logger.info(f"出图完成: {len(results) - failed}个成功, {failed}个失败")
        return results

    def load_context(
        self,
        library: ILayoutSource,
        stylesheets: Iterable[str | Path] = (),
    ) -> Context:
        """默认样式表在前，指定样式表在后"""
        paths = [*self.config.style.default_stylesheets, *stylesheets]
        return load_context(paths, library.units_in_m())

    def plot_cell(self, library: ILayoutSource, ctx: Context, name: str) -> PlotResult:
        """
        绘制单个单元并写出PNG

        Raises:
            CellNotFoundError: 单元不存在
            DegenerateGeometryError: 无可见几何
            RenderError: 写文件失败
        """
        struct = library.find_struct(name)
        if struct is None:
            raise CellNotFoundError(name)

        prepared = StructPreparer(ctx).prepare(struct)
        geometry = compute_plot_transform(prepared.extents, ctx.scale, ctx.margin)
        logger.info(f"绘制单元 {name}: {geometry.width} x {geometry.height}")

        canvas = self.canvas_factory(geometry.width, geometry.height)
        LayeredRenderer(canvas).render(prepared, geometry.transform, ctx.bg_color)

        output_path = self.config.get_output_path(prepared.name)
        canvas.write_png(output_path)

        return PlotResult(
            cell_name=name,
            output_path=output_path,
            width=geometry.width,
            height=geometry.height,
        )

    def _plot_isolated(self, library: ILayoutSource, ctx: Context, name: str) -> PlotResult:
        try:
            return self.plot_cell(library, ctx, name)
        except GdsPlotError as e:
            logger.warning(f"单元出图失败: {name}: {e}")
            return PlotResult.failed(name, str(e))
        except Exception as e:
            logger.exception(f"单元出图异常: {name}")
            return PlotResult.failed(name, f"{type(e).__name__}: {e}")

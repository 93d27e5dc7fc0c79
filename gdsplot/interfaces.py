"""
模块接口契约 - 定义各模块的抽象接口

设计原则：
1. 模块间通过接口通信，不直接依赖具体实现
2. 每个接口定义清晰的输入输出类型
3. 便于单元测试和mock替换

使用方式：
    from gdsplot.interfaces import ICanvas

    class RecordingCanvas(ICanvas):
        def move_to(self, x: float, y: float) -> None:
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .layout import LayoutStruct, LayoutUnits
    from .models import ColorRgb, PreparedStruct, Transform


# ============================================================================
# 版图数据源接口
# ============================================================================

class ILayoutSource(ABC):
    """版图库接口 - 只读的结构/元素对象图"""

    @abstractmethod
    def struct_count(self) -> int:
        """结构（单元）数量"""
        ...

    @abstractmethod
    def get_struct(self, idx: int) -> LayoutStruct:
        """
        按序号获取结构

        Raises:
            IndexError: 序号越界
        """
        ...

    @abstractmethod
    def find_struct(self, name: str) -> LayoutStruct | None:
        """
        按名称查找结构（线性扫描）

        Returns:
            找不到时返回None，而不是抛出异常
        """
        ...

    @abstractmethod
    def get_units(self) -> LayoutUnits:
        """数据库单位换算系数"""
        ...

    def structs(self) -> Iterator[LayoutStruct]:
        """遍历全部结构"""
        for idx in range(self.struct_count()):
            yield self.get_struct(idx)

    def units_in_m(self) -> float:
        """每个数据库单位对应的米数"""
        return self.get_units().dbu_in_m

    def units_in_uu(self) -> float:
        """每个数据库单位对应的用户单位数"""
        return self.get_units().dbu_in_uu


# ============================================================================
# 光栅画布接口
# ============================================================================

class ICanvas(ABC):
    """光栅画布接口 - 路径构造/填充描边/分组合成"""

    # --- 路径 ---

    @abstractmethod
    def move_to(self, x: float, y: float) -> None: ...

    @abstractmethod
    def line_to(self, x: float, y: float) -> None: ...

    @abstractmethod
    def close_path(self) -> None: ...

    # --- 绘制 ---

    @abstractmethod
    def fill(self) -> None:
        """按奇偶规则填充当前路径"""
        ...

    @abstractmethod
    def stroke(self) -> None: ...

    @abstractmethod
    def paint(self) -> None:
        """用当前源铺满整个画布"""
        ...

    @abstractmethod
    def paint_with_alpha(self, alpha: float) -> None: ...

    # --- 画笔状态 ---

    @abstractmethod
    def set_source_rgb(self, r: float, g: float, b: float) -> None: ...

    @abstractmethod
    def set_source_rgba(self, r: float, g: float, b: float, a: float) -> None: ...

    @abstractmethod
    def set_line_width(self, width: float) -> None: ...

    @abstractmethod
    def set_dash(self, dashes: list[float], offset: float = 0.0) -> None: ...

    @abstractmethod
    def save(self) -> None: ...

    @abstractmethod
    def restore(self) -> None: ...

    # --- 分组合成 ---

    @abstractmethod
    def push_group(self) -> None:
        """开始隔离合成组"""
        ...

    @abstractmethod
    def pop_group_to_source(self) -> None:
        """结束合成组并将其设为当前源"""
        ...

    # --- 输出 ---

    @abstractmethod
    def write_png(self, path: Path) -> None:
        """
        保存为PNG

        Raises:
            RenderError: 写文件失败
        """
        ...


class IRenderer(ABC):
    """分层渲染器接口"""

    @abstractmethod
    def render(
        self,
        prepared: PreparedStruct,
        transform: Transform,
        bg_color: ColorRgb | None = None,
    ) -> None:
        """
        将预处理后的结构绘制到画布

        Args:
            prepared: 预处理结构（图层已按order排序）
            transform: 物理坐标→像素坐标的仿射变换
            bg_color: 背景色（可选）
        """
        ...


# ============================================================================
# 异常定义
# ============================================================================

class GdsPlotError(Exception):
    """基础异常"""
    pass


class StylesheetError(GdsPlotError):
    """样式表错误（语法/字面量/未知指令）"""

    def __init__(
        self,
        message: str,
        filename: str | None = None,
        line_no: int | None = None,
        directive: str | None = None,
    ):
        self.message = message
        self.filename = filename
        self.line_no = line_no
        self.directive = directive
        super().__init__(self._format())

    def _format(self) -> str:
        location = self.filename or "<stylesheet>"
        if self.line_no is not None:
            location = f"{location}:{self.line_no}"
        if self.directive:
            return f"{location}: `{self.directive}`: {self.message}"
        return f"{location}: {self.message}"


class SourceError(GdsPlotError):
    """版图文件无法打开或格式错误"""
    pass


class CellNotFoundError(GdsPlotError):
    """找不到指定单元"""

    def __init__(self, cell_name: str):
        self.cell_name = cell_name
        super().__init__(f"找不到单元: {cell_name}")


class DegenerateGeometryError(GdsPlotError):
    """可见几何为空或面积为零，无法计算缩放"""
    pass


class RenderError(GdsPlotError):
    """绘制或输出失败"""
    pass

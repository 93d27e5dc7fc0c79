"""
预处理结构模型 - 单元准备好后交给渲染器的数据

所有权：
- PreparedStruct 独占其创建的 Layer
- Boundary 共享引用所在 Layer（同一id只有一个Layer实例）
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from .geometry import Extents, Point
from .style import LayerClass


@dataclass(eq=False)
class Layer:
    """运行期图层（相等性只看id）"""
    id: int
    order: int
    style: LayerClass

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Layer):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


@dataclass
class Boundary:
    """闭合多边形（最后一点之后回到第一点）"""
    layer: Layer
    points: list[Point]


@dataclass
class PreparedStruct:
    """预处理后的单元"""
    name: str
    layers: list[Layer] = field(default_factory=list)
    boundaries: list[Boundary] = field(default_factory=list)
    extents: Extents = field(default_factory=Extents)

    def boundaries_on(self, layer: Layer) -> Iterator[Boundary]:
        """某图层上的全部多边形（保持发现顺序）"""
        for b in self.boundaries:
            if b.layer == layer:
                yield b

"""
结构预处理器 - 将版图单元整理为可渲染的 PreparedStruct

流程：
1. 按 only_layers 过滤元素
2. 每个图层号只创建一个 Layer（首次出现时解析样式与顺序）
3. BOUNDARY 元素转换为物理坐标多边形，其余类型忽略
4. 汇总包围范围
5. 图层按 order 稳定排序（相同 order 保持发现顺序）

测试要点：
- test_layer_dedup: 同一图层只有一个 Layer 实例
- test_only_layers: 过滤掉的图层不影响图层列表/范围
- test_extents: 包围范围计算
- test_order_sort: 按 order 排序
"""

from __future__ import annotations

import logging

from ..layout import ElemKind, LayoutStruct
from ..models import Boundary, Context, Extents, Layer, Point, PreparedStruct
from .resolver import StyleResolver

logger = logging.getLogger(__name__)


class StructPreparer:
    """结构预处理器"""

    def __init__(self, ctx: Context, resolver: StyleResolver | None = None):
        self.ctx = ctx
        self.resolver = resolver or StyleResolver(ctx)

    def prepare(self, struct: LayoutStruct) -> PreparedStruct:
        """预处理单个单元"""
        layers: dict[int, Layer] = {}
        boundaries: list[Boundary] = []
        units = self.ctx.lib_units_per_meter

        for elem in struct.elems:
            if not self.ctx.is_layer_visible(elem.layer):
                continue

            layer = layers.get(elem.layer)
            if layer is None:
                layer = Layer(
                    id=elem.layer,
                    order=self.resolver.order_of(elem.layer),
                    style=self.resolver.resolve(elem.layer),
                )
                layers[elem.layer] = layer

            if elem.kind == ElemKind.BOUNDARY:
                points = [Point(x * units, y * units) for x, y in elem.xy]
                boundaries.append(Boundary(layer=layer, points=points))

        extents = Extents()
        for b in boundaries:
            extents.add_points(b.points)

        # sorted() 是稳定排序，dict 保持插入顺序
        ordered = sorted(layers.values(), key=lambda l: l.order)

        logger.debug(
            f"单元 {struct.name}: {len(ordered)}个图层, {len(boundaries)}个多边形"
        )
        return PreparedStruct(
            name=struct.name,
            layers=ordered,
            boundaries=boundaries,
            extents=extents,
        )

"""
图层样式解析器 - 按分配顺序合并样式类

规则：
- 无分配的图层得到空样式类（不绘制）
- 分配列表按顺序合并，后者按属性覆盖前者
- 未定义的样式类名跳过（仅告警一次）
"""

from __future__ import annotations

import logging

from ..models import Context, LayerClass

logger = logging.getLogger(__name__)


class StyleResolver:
    """图层样式解析器（结果按图层号缓存）"""

    def __init__(self, ctx: Context):
        self.ctx = ctx
        self._cache: dict[int, LayerClass] = {}
        self._missing_reported: set[str] = set()

    def resolve(self, layer_id: int) -> LayerClass:
        """计算图层的最终样式类"""
        if layer_id not in self._cache:
            self._cache[layer_id] = self._merge(layer_id)
        return self._cache[layer_id]

    def order_of(self, layer_id: int) -> int:
        return self.ctx.get_order(layer_id)

    def _merge(self, layer_id: int) -> LayerClass:
        style = LayerClass()
        for name in self.ctx.assignments.get(layer_id, []):
            cls = self.ctx.classes.get(name)
            if cls is None:
                if name not in self._missing_reported:
                    self._missing_reported.add(name)
                    logger.warning(f"样式类未定义: {name} (图层 {layer_id})")
                continue
            style = style.merge(cls)
        return style

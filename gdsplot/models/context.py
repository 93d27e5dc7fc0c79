"""
渲染上下文 - 样式表加载后的只读配置

由 ContextBuilder 按样式表指令折叠生成，构建后不可修改。
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from .style import ColorRgb, LayerClass


class ResolutionScale(BaseModel):
    """按分辨率出图（像素/米）"""
    kind: Literal["resolution"] = "resolution"
    pixels_per_meter: float

    model_config = {"frozen": True}


class SizeScale(BaseModel):
    """按目标尺寸出图（保持长宽比，适配到框内）"""
    kind: Literal["size"] = "size"
    width: int
    height: int

    model_config = {"frozen": True}


ScaleMode = Annotated[Union[ResolutionScale, SizeScale], Field(discriminator="kind")]


class Context(BaseModel):
    """渲染上下文（进程级，只读）"""
    lib_units_per_meter: float = Field(..., description="数据库单位→米")
    scale: ScaleMode = Field(default_factory=lambda: SizeScale(width=512, height=512))
    aliases: dict[str, int] = Field(default_factory=dict, description="图层别名")
    only_layers: frozenset[int] = Field(default_factory=frozenset, description="为空表示全部图层")
    assignments: dict[int, list[str]] = Field(default_factory=dict, description="图层→样式类（按优先级）")
    classes: dict[str, LayerClass] = Field(default_factory=dict, description="样式类定义")
    orders: dict[int, int] = Field(default_factory=dict, description="绘制顺序覆盖")
    bg_color: ColorRgb | None = None
    margin: int = 0

    model_config = {"frozen": True}

    def get_order(self, layer_id: int) -> int:
        """绘制顺序，默认等于图层号"""
        return self.orders.get(layer_id, layer_id)

    def is_layer_visible(self, layer_id: int) -> bool:
        return not self.only_layers or layer_id in self.only_layers


def parse_layer_id(token: str) -> int | None:
    """解析16位无符号图层号"""
    if not (token.isascii() and token.isdigit()):
        return None
    value = int(token)
    if value > 0xFFFF:
        return None
    return value

"""
图层样式模型 - 样式类/样式表/填充与描边样式

层叠规则：
- 属性为None表示"未设置"，合并时由后续样式类决定
- A.merge(B)：B设置了的属性覆盖A，未设置的保留A
- general/fill/stroke 三个子表相互独立合并
"""

from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, Field

_COLOR_RE = re.compile(r"^#[0-9a-fA-F]{6}$")


class ColorRgb(BaseModel):
    """RGB颜色（分量归一化到[0,1]）"""
    r: float
    g: float
    b: float

    model_config = {"frozen": True}

    @classmethod
    def parse(cls, text: str) -> ColorRgb:
        """
        解析 #RRGGBB 颜色字面量（大小写不敏感）

        Raises:
            ValueError: 不是以#开头或长度不为7
        """
        if not _COLOR_RE.match(text):
            raise ValueError(f"无效颜色: {text}")
        return cls(
            r=int(text[1:3], 16) / 255.0,
            g=int(text[3:5], 16) / 255.0,
            b=int(text[5:7], 16) / 255.0,
        )

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.r, self.g, self.b)


class FillPattern(str, Enum):
    """填充图案"""
    SOLID = "solid"


class LayerClassSheet(BaseModel):
    """样式子表（所有属性可选）"""
    color: ColorRgb | None = None
    alpha: float | None = Field(None, ge=0.0, le=1.0)
    width: float | None = None
    pattern: FillPattern | None = None
    dashes: list[float] | None = None

    def merge(self, other: LayerClassSheet) -> LayerClassSheet:
        """合并：other已设置的属性覆盖当前值"""
        return self.model_copy(update=other._defined())

    def is_empty(self) -> bool:
        return not self._defined()

    def _defined(self) -> dict[str, object]:
        return {
            name: getattr(self, name)
            for name in type(self).model_fields
            if getattr(self, name) is not None
        }


class FillStyle(BaseModel):
    """可绘制的填充样式"""
    color: ColorRgb
    alpha: float = 1.0
    pattern: FillPattern


class StrokeStyle(BaseModel):
    """可绘制的描边样式"""
    color: ColorRgb
    alpha: float = 1.0
    width: float
    dashes: list[float] | None = None


class LayerClass(BaseModel):
    """样式类（general + fill + stroke）"""
    general: LayerClassSheet = Field(default_factory=LayerClassSheet)
    fill: LayerClassSheet = Field(default_factory=LayerClassSheet)
    stroke: LayerClassSheet = Field(default_factory=LayerClassSheet)

    def merge(self, other: LayerClass) -> LayerClass:
        """逐子表合并，返回新对象"""
        return LayerClass(
            general=self.general.merge(other.general),
            fill=self.fill.merge(other.fill),
            stroke=self.stroke.merge(other.stroke),
        )

    def get_fill_style(self) -> FillStyle | None:
        """general叠加fill；缺color或pattern时不可填充"""
        combined = self.general.merge(self.fill)
        if combined.color is None or combined.pattern is None:
            return None
        return FillStyle(
            color=combined.color,
            alpha=1.0 if combined.alpha is None else combined.alpha,
            pattern=combined.pattern,
        )

    def get_stroke_style(self) -> StrokeStyle | None:
        """general叠加stroke；缺color或width时不可描边"""
        combined = self.general.merge(self.stroke)
        if combined.color is None or combined.width is None:
            return None
        return StrokeStyle(
            color=combined.color,
            alpha=1.0 if combined.alpha is None else combined.alpha,
            width=combined.width,
            dashes=list(combined.dashes) if combined.dashes is not None else None,
        )

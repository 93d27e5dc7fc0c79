"""
版图对象模型 - 只读的 库/结构/元素 对象图

元素类型编号与 GDSII 元素记录一致：
BOUNDARY=1, PATH=2, SREF=3, AREF=4, TEXT=5, NODE=6, BOX=7
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from ..interfaces import ILayoutSource


class ElemKind(IntEnum):
    """元素类型"""
    BOUNDARY = 1
    PATH = 2
    SREF = 3
    AREF = 4
    TEXT = 5
    NODE = 6
    BOX = 7


@dataclass(frozen=True)
class STrans:
    """引用/文本的变换（反射标志/放大倍数/角度）"""
    flags: int = 0
    mag: float = 1.0
    angle: float = 0.0


@dataclass(frozen=True)
class LayoutElem:
    """版图元素（坐标为整数数据库单位）"""
    kind: ElemKind
    layer: int
    datatype: int = 0
    xy: tuple[tuple[int, int], ...] = ()
    strans: STrans | None = None
    sname: str | None = None
    text: str | None = None


@dataclass
class LayoutStruct:
    """版图结构（单元）"""
    name: str
    elems: list[LayoutElem] = field(default_factory=list)

    def __iter__(self):
        return iter(self.elems)

    def __len__(self) -> int:
        return len(self.elems)


@dataclass(frozen=True)
class LayoutUnits:
    """单位换算"""
    dbu_in_uu: float
    dbu_in_m: float


class LayoutLibrary(ILayoutSource):
    """内存中的版图库"""

    def __init__(
        self,
        name: str,
        units: LayoutUnits,
        structs: list[LayoutStruct] | None = None,
    ):
        self.name = name
        self.units = units
        self._structs = list(structs or [])

    def struct_count(self) -> int:
        return len(self._structs)

    def get_struct(self, idx: int) -> LayoutStruct:
        return self._structs[idx]

    def find_struct(self, name: str) -> LayoutStruct | None:
        for s in self.structs():
            if s.name == name:
                return s
        return None

    def get_units(self) -> LayoutUnits:
        return self.units

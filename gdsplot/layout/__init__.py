"""
版图数据源 - GDSII读取与只读对象图

子模块：
- elements: 库/结构/元素模型
- gds_reader: 基于 gdstk 的 GDSII 读取
"""

from .elements import (
    ElemKind,
    LayoutElem,
    LayoutLibrary,
    LayoutStruct,
    LayoutUnits,
    STrans,
)
from .gds_reader import open_library

__all__ = [
    "ElemKind",
    "STrans",
    "LayoutElem",
    "LayoutStruct",
    "LayoutUnits",
    "LayoutLibrary",
    "open_library",
]

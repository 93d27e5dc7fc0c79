"""
GDSII 读取器 - 基于 gdstk 读取版图并转换为只读对象图

职责：
1. 打开并解析 GDSII 流文件
2. 将多边形/路径/文本/引用转换为 LayoutElem（整数数据库单位）
3. 提取单位换算系数

依赖：
- gdstk: GDSII 解析

说明：
- gdstk 读入的坐标为用户单位，这里按 unit/precision 还原为数据库单位
- gdstk 不保留元素原始交错顺序，每个结构内按 多边形→路径→文本→引用 排列
- 多边形不重复闭合点

测试要点：
- test_open_missing_file: 文件不存在
- test_read_boundary: 多边形坐标还原为数据库单位
- test_units: 单位换算
"""

from __future__ import annotations

import logging
import math
from pathlib import Path

import gdstk

from ..interfaces import SourceError
from .elements import (
    ElemKind,
    LayoutElem,
    LayoutLibrary,
    LayoutStruct,
    LayoutUnits,
    STrans,
)

logger = logging.getLogger(__name__)

REFLECTION_FLAG = 0x8000


def open_library(path: str | Path) -> LayoutLibrary:
    """
    读取GDSII文件

    Raises:
        SourceError: 文件不存在/不可读/格式错误
    """
    path = Path(path)
    if not path.exists():
        raise SourceError(f"GDS文件不存在: {path}")

    try:
        lib = gdstk.read_gds(str(path))
    except Exception as e:
        raise SourceError(f"GDS解析失败: {path}: {e}") from e

    if lib.unit <= 0 or lib.precision <= 0:
        raise SourceError(f"GDS单位无效: {path}")

    to_dbu = lib.unit / lib.precision
    units = LayoutUnits(dbu_in_uu=lib.precision / lib.unit, dbu_in_m=lib.precision)
    structs = [_convert_cell(cell, to_dbu) for cell in lib.cells]

    logger.info(f"已读取GDS: {path} ({len(structs)}个单元)")
    return LayoutLibrary(name=lib.name, units=units, structs=structs)


def _convert_cell(cell, to_dbu: float) -> LayoutStruct:
    """转换单个单元"""
    elems: list[LayoutElem] = []

    for poly in cell.polygons:
        xy = _to_dbu(poly.points, to_dbu)
        if len(xy) > 1 and xy[0] == xy[-1]:
            xy = xy[:-1]
        elems.append(LayoutElem(
            kind=ElemKind.BOUNDARY,
            layer=poly.layer,
            datatype=poly.datatype,
            xy=xy,
        ))

    for path in cell.paths:
        spine = _to_dbu(path.spine(), to_dbu)
        for layer, datatype in zip(path.layers, path.datatypes):
            elems.append(LayoutElem(
                kind=ElemKind.PATH,
                layer=layer,
                datatype=datatype,
                xy=spine,
            ))

    for label in cell.labels:
        elems.append(LayoutElem(
            kind=ElemKind.TEXT,
            layer=label.layer,
            datatype=label.texttype,
            xy=_to_dbu([label.origin], to_dbu),
            strans=_strans(label.x_reflection, label.magnification, label.rotation),
            text=label.text,
        ))

    for ref in cell.references:
        repetition = ref.repetition
        repeated = repetition is not None and repetition.size > 1
        target = ref.cell
        elems.append(LayoutElem(
            kind=ElemKind.AREF if repeated else ElemKind.SREF,
            layer=0,
            xy=_to_dbu([ref.origin], to_dbu),
            strans=_strans(ref.x_reflection, ref.magnification, ref.rotation),
            sname=target if isinstance(target, str) else target.name,
        ))

    return LayoutStruct(name=cell.name, elems=elems)


def _to_dbu(points, to_dbu: float) -> tuple[tuple[int, int], ...]:
    return tuple(
        (int(round(float(x) * to_dbu)), int(round(float(y) * to_dbu))) for x, y in points
    )


def _strans(x_reflection: bool, magnification: float, rotation: float) -> STrans:
    return STrans(
        flags=REFLECTION_FLAG if x_reflection else 0,
        mag=magnification,
        angle=math.degrees(rotation),
    )

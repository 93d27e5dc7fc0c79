"""
几何模型 - 点/向量/矩形/包围范围/仿射变换

坐标单位：
- Point/Rect/Extents：物理单位（米）
- Transform 输出：像素
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Vector:
    """二维向量"""
    x: float
    y: float


@dataclass(frozen=True)
class Point:
    """二维点"""
    x: float
    y: float

    def __sub__(self, other: Point) -> Vector:
        return Vector(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Rect:
    """轴对齐矩形"""
    min: Point
    max: Point

    @property
    def size(self) -> Vector:
        return self.max - self.min


ZERO_POINT = Point(0.0, 0.0)
ZERO_VECTOR = Vector(0.0, 0.0)
ZERO_RECT = Rect(ZERO_POINT, ZERO_POINT)


@dataclass
class Extents:
    """可见几何的包围范围（初始为空）"""
    rect: Rect = ZERO_RECT
    empty: bool = True

    def add_point(self, p: Point) -> None:
        if self.empty:
            self.rect = Rect(p, p)
            self.empty = False
            return
        r = self.rect
        self.rect = Rect(
            Point(min(r.min.x, p.x), min(r.min.y, p.y)),
            Point(max(r.max.x, p.x), max(r.max.y, p.y)),
        )

    def add_points(self, points) -> None:
        for p in points:
            self.add_point(p)


@dataclass(frozen=True)
class Transform:
    """
    仿射变换 (x, y) → (va.x·x + vb.x·y + vt.x, va.y·x + vb.y·y + vt.y)

    scaled/translated 均作用在已有变换之后（按调用顺序累积，不可交换）。
    """
    va: Vector
    vb: Vector
    vt: Vector

    @classmethod
    def identity(cls) -> Transform:
        return cls(Vector(1.0, 0.0), Vector(0.0, 1.0), ZERO_VECTOR)

    def scaled(self, sx: float, sy: float) -> Transform:
        return Transform(
            Vector(self.va.x * sx, self.va.y * sy),
            Vector(self.vb.x * sx, self.vb.y * sy),
            Vector(self.vt.x * sx, self.vt.y * sy),
        )

    def translated(self, tx: float, ty: float) -> Transform:
        return Transform(self.va, self.vb, Vector(self.vt.x + tx, self.vt.y + ty))

    def apply(self, p: Point) -> Point:
        return Point(
            self.va.x * p.x + self.vb.x * p.y + self.vt.x,
            self.va.y * p.x + self.vb.y * p.y + self.vt.y,
        )

    def apply_vector(self, v: Vector) -> Vector:
        """变换向量（不含平移）"""
        return Vector(
            self.va.x * v.x + self.vb.x * v.y,
            self.va.y * v.x + self.vb.y * v.y,
        )

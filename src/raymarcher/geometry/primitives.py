"""Primitive distance fields: the leaves of a shape tree.

Example:
    >>> from raymarcher.core.vec import Point3
    >>> Sphere(2.0).value_at(Point3(0.0, 3.0, 0.0)).distance
    1.0
    >>> Cube(2.0).value_at(Point3(0.0, 0.0, 0.0)).distance
    -1.0
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence

from raymarcher.core.vec import Point3, Vec3
from raymarcher.geometry.sdf import Sdf, SdfValue, as_point3, as_vec3
from raymarcher.materials.material import MaterialIndex

_ZERO = Vec3(0.0, 0.0, 0.0)


class Sphere(Sdf):
    """Sphere of *radius* around *center*: ``|p - c| - r``."""

    def __init__(
        self,
        radius: float = 1.0,
        center: Point3 | Sequence[float] = Point3.ORIGIN,
    ) -> None:
        self.radius = float(radius)
        self.center = as_point3(center)

    def value_at(self, p: Point3) -> SdfValue:
        return SdfValue((p - self.center).length() - self.radius)

    def __repr__(self) -> str:
        return f"Sphere(radius={self.radius}, center={self.center})"


class Box(Sdf):
    """Axis-aligned box with the given half extents.

    Exact inside and outside: the inside distance is the (negative) largest
    componentwise overshoot, and the outside distance is the length of the
    positive part of that overshoot.
    """

    def __init__(
        self,
        half_extents: Vec3 | Sequence[float],
        center: Point3 | Sequence[float] = Point3.ORIGIN,
    ) -> None:
        self.half_extents = as_vec3(half_extents)
        self.center = as_point3(center)

    def value_at(self, p: Point3) -> SdfValue:
        d = (p - self.center).abs() - self.half_extents
        inside = min(d.max_component(), 0.0)
        outside = d.max(_ZERO).length()
        return SdfValue(inside + outside)

    def __repr__(self) -> str:
        return f"Box(half_extents={self.half_extents}, center={self.center})"


class Cube(Box):
    """Axis-aligned cube with edge length *side*."""

    def __init__(
        self,
        side: float = 2.0,
        center: Point3 | Sequence[float] = Point3.ORIGIN,
    ) -> None:
        half = side / 2.0
        super().__init__(Vec3(half, half, half), center)

    @classmethod
    def from_half_side(
        cls,
        half_side: float,
        center: Point3 | Sequence[float] = Point3.ORIGIN,
    ) -> Cube:
        return cls(2.0 * half_side, center)

    @property
    def side(self) -> float:
        return 2.0 * self.half_extents.x

    def __repr__(self) -> str:
        return f"Cube(side={self.side}, center={self.center})"


class HalfSpace(Sdf):
    """Everything below the plane ``dot(p, n) = offset``.

    The normal points out of the solid and is normalized at construction.

    Raises:
        ValueError: If *normal* has zero length.
    """

    def __init__(self, normal: Vec3 | Sequence[float], offset: float = 0.0) -> None:
        try:
            self.normal = as_vec3(normal).unit()
        except ValueError as e:
            raise ValueError(f"HalfSpace normal must be non-zero, got {normal!r}") from e
        self.offset = float(offset)

    def value_at(self, p: Point3) -> SdfValue:
        return SdfValue(p.vec.dot(self.normal) - self.offset)

    def __repr__(self) -> str:
        return f"HalfSpace(normal={self.normal}, offset={self.offset})"


class NegY(HalfSpace):
    """The half space ``y <= 0``; its distance is simply ``p.y``."""

    def __init__(self) -> None:
        super().__init__(Vec3(0.0, 1.0, 0.0), 0.0)

    def value_at(self, p: Point3) -> SdfValue:
        return SdfValue(p.y)

    def __repr__(self) -> str:
        return "NegY()"


DistanceFunction = Callable[[Point3], "float | tuple[float, MaterialIndex | None]"]


class Arbitrary(Sdf):
    """Wrap a user-supplied function as a distance field.

    The function may return either a bare distance or a
    ``(distance, material)`` pair. It is the caller's job to keep the
    function Lipschitz-1 (dividing by the gradient bound is the usual fix).

    Example:
        >>> import math
        >>> waves = Arbitrary(lambda p: (p.y - (math.sin(p.x) + math.sin(p.z))) / 2.0)
    """

    def __init__(self, fn: DistanceFunction) -> None:
        if not callable(fn):
            raise TypeError(f"Arbitrary expects a callable, got {type(fn).__name__}")
        self.fn = fn

    def value_at(self, p: Point3) -> SdfValue:
        result = self.fn(p)
        if isinstance(result, tuple):
            distance, material = result
            return SdfValue(float(distance), material)
        return SdfValue(float(result))

    def __repr__(self) -> str:
        name = getattr(self.fn, "__name__", type(self.fn).__name__)
        return f"Arbitrary({name})"


UNIT_SPHERE = Sphere(1.0)
UNIT_CUBE = Cube.from_half_side(1.0)


def sine_floor(p: Point3) -> float:
    """Wavy floor ``y = sin(x) + sin(z)``, scaled to stay Lipschitz-1."""
    return (p.y - (math.sin(p.x) + math.sin(p.z))) / 2.0

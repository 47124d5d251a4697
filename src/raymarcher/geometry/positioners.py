"""Rigid placement of distance fields: translation, uniform scale and rotation.

Each positioner applies the inverse transform to the query point and asks
its child. Only uniform scaling is offered because non-uniform scaling does
not preserve distances.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from raymarcher.core.quaternion import Quaternion
from raymarcher.core.vec import Point3, Vec3
from raymarcher.geometry.sdf import Sdf, SdfValue, as_vec3


class Translate(Sdf):
    """Shift the child by *offset*."""

    def __init__(self, child: Sdf, offset: Vec3 | Sequence[float]) -> None:
        self.child = child
        self.offset = as_vec3(offset)

    def value_at(self, p: Point3) -> SdfValue:
        return self.child.value_at(p - self.offset)

    def __repr__(self) -> str:
        return f"Translate({self.child!r}, {self.offset})"


class ScaleUniform(Sdf):
    """Scale the child by *factor* about the origin.

    The child is queried at ``p / factor`` and its distance multiplied by
    ``|factor|``. A negative factor mirrors the child through the origin.

    Raises:
        ValueError: If *factor* is zero or not finite.
    """

    def __init__(self, child: Sdf, factor: float) -> None:
        if factor == 0.0 or not math.isfinite(factor):
            raise ValueError(f"Scale factor must be finite and non-zero, got {factor}")
        self.child = child
        self.factor = float(factor)

    def value_at(self, p: Point3) -> SdfValue:
        f = self.factor
        distance, material = self.child.value_at(Point3(p.x / f, p.y / f, p.z / f))
        return SdfValue(distance * abs(f), material)

    def __repr__(self) -> str:
        return f"ScaleUniform({self.child!r}, {self.factor})"


class Rotate(Sdf):
    """Rotate the child by *angle* radians about *axis* through the origin.

    The query point is rotated by the opposite angle before it is handed to
    the child.

    Raises:
        ValueError: If *axis* has zero length.
    """

    def __init__(self, child: Sdf, angle: float, axis: Vec3 | Sequence[float]) -> None:
        try:
            unit_axis = as_vec3(axis).unit()
        except ValueError as e:
            raise ValueError(f"Rotation axis must be non-zero, got {axis!r}") from e
        self.child = child
        self.angle = float(angle)
        self.axis = unit_axis
        self._q = Quaternion.for_rotation(-self.angle, unit_axis)

    @classmethod
    def degrees(cls, child: Sdf, angle: float, axis: Vec3 | Sequence[float]) -> Rotate:
        """Like the constructor, with *angle* in degrees."""
        return cls(child, math.radians(angle), axis)

    def value_at(self, p: Point3) -> SdfValue:
        return self.child.value_at(Point3.from_vec(self._q.rotate(p.vec)))

    def __repr__(self) -> str:
        return f"Rotate({self.child!r}, angle={self.angle}, axis={self.axis})"

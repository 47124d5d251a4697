"""Quaternions for rotating query points.

Only the handful of operations needed by the Rotate positioner are
provided: construction from an angle/axis pair, the Hamilton product,
the conjugate, and the sandwich product ``q v q*`` that rotates a vector.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from raymarcher.core.vec import UnitVec3, Vec3


@dataclass(frozen=True, slots=True)
class Quaternion:
    """A quaternion ``a + v`` with scalar part *a* and vector part *v*."""

    a: float
    v: Vec3

    @classmethod
    def for_rotation(cls, angle: float, axis: UnitVec3) -> Quaternion:
        """Build the unit quaternion rotating by *angle* radians about *axis*."""
        half = angle / 2.0
        return cls(math.cos(half), axis * math.sin(half))

    def conjugate(self) -> Quaternion:
        return Quaternion(self.a, -self.v)

    def __mul__(self, rhs: Quaternion) -> Quaternion:
        return Quaternion(
            self.a * rhs.a - self.v.dot(rhs.v),
            rhs.v * self.a + self.v * rhs.a + self.v.cross(rhs.v),
        )

    def rotate(self, v: Vec3) -> Vec3:
        """Rotate *v* by this (unit) quaternion."""
        return (self * Quaternion(0.0, v) * self.conjugate()).v

"""Vector, point and color value types for the ray marcher.

This module provides the small immutable value types that every other part
of the renderer is built on:

- Vec3: a free 3-component vector with the usual algebra
- UnitVec3: a Vec3 known to have unit length (ray directions, normals)
- Point3: a position in world space (points and vectors do not mix freely)
- Color: an unbounded RGB triple, clamped only when quantized for output

The distinction between points and vectors is enforced by the operators:
subtracting two points yields a Vec3, and a point plus a vector yields a
Point3. Adding two points is a TypeError.

Example:
    >>> from raymarcher.core.vec import Point3, Vec3
    >>> origin = Point3(0.0, 0.0, 0.0)
    >>> target = Point3(0.0, 0.0, -2.0)
    >>> direction = (target - origin).unit()
    >>> direction.z
    -1.0
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass
from typing import ClassVar

# =============================================================================
# Free Vectors
# =============================================================================


@dataclass(frozen=True, slots=True)
class Vec3:
    """A free 3-component floating-point vector.

    Attributes:
        x: The x component.
        y: The y component.
        z: The z component.
    """

    ZERO: ClassVar[Vec3]

    x: float
    y: float
    z: float

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, k: float) -> Vec3:
        if isinstance(k, (Vec3, Point3, Color)):
            return NotImplemented
        return Vec3(self.x * k, self.y * k, self.z * k)

    def __rmul__(self, k: float) -> Vec3:
        return self.__mul__(k)

    def __truediv__(self, k: float) -> Vec3:
        return Vec3(self.x / k, self.y / k, self.z / k)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def dot(self, other: Vec3) -> float:
        """Compute the dot product of two vectors."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        """Compute the cross product self x other."""
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length_squared(self) -> float:
        """Compute the squared length.

        Cheaper than length() when only comparing magnitudes.
        """
        return self.dot(self)

    def length(self) -> float:
        """Compute the Euclidean length (magnitude) of the vector."""
        return math.sqrt(self.length_squared())

    def unit(self) -> UnitVec3:
        """Normalize the vector to unit length.

        Returns:
            A UnitVec3 pointing in the same direction.

        Raises:
            ValueError: If the vector has zero (or non-finite) length, since
                it has no direction to preserve.
        """
        length = self.length()
        if length == 0.0 or not math.isfinite(length):
            raise ValueError(f"Cannot normalize vector of length {length}: {self}")
        return UnitVec3(self.x / length, self.y / length, self.z / length)

    def abs(self) -> Vec3:
        """Return the componentwise absolute value."""
        return Vec3(abs(self.x), abs(self.y), abs(self.z))

    def max_component(self) -> float:
        """Return the largest of the three components."""
        return max(self.x, self.y, self.z)

    def max(self, other: Vec3) -> Vec3:
        """Return the componentwise maximum of two vectors."""
        return Vec3(max(self.x, other.x), max(self.y, other.y), max(self.z, other.z))

    def reflect(self, normal: UnitVec3) -> Vec3:
        """Reflect this vector about a unit normal.

        Computes ``v - 2 (v . n) n``. The incident vector points toward the
        surface; the result points away from it.

        Args:
            normal: The surface normal (must be unit length).

        Returns:
            The reflected vector, with the same length as this one.
        """
        k = 2.0 * self.dot(normal)
        return Vec3(self.x - normal.x * k, self.y - normal.y * k, self.z - normal.z * k)

    def is_close(self, other: Vec3, tol: float = 1e-9) -> bool:
        """Check componentwise closeness within an absolute tolerance."""
        return (
            abs(self.x - other.x) <= tol
            and abs(self.y - other.y) <= tol
            and abs(self.z - other.z) <= tol
        )


Vec3.ZERO = Vec3(0.0, 0.0, 0.0)


@dataclass(frozen=True, slots=True)
class UnitVec3(Vec3):
    """A vector with length 1 (within floating-point tolerance).

    Instances come from Vec3.unit() or from reflecting a unit vector about a
    unit normal. Arithmetic on a UnitVec3 returns a plain Vec3, since sums and
    scaled copies are no longer guaranteed to be unit length.
    """

    @classmethod
    def from_vec(cls, v: Vec3) -> UnitVec3:
        """Normalize an arbitrary vector."""
        return v.unit()

    def reflect(self, normal: UnitVec3) -> UnitVec3:
        """Reflect about a unit normal; the result stays unit length."""
        r = Vec3.reflect(self, normal)
        return UnitVec3(r.x, r.y, r.z)


# =============================================================================
# Points
# =============================================================================


@dataclass(frozen=True, slots=True)
class Point3:
    """A position in world space.

    Points are never normalized. The supported operations are:
        Point3 - Point3 -> Vec3
        Point3 + Vec3   -> Point3
        Point3 - Vec3   -> Point3
    """

    ORIGIN: ClassVar[Point3]

    x: float
    y: float
    z: float

    @classmethod
    def from_vec(cls, v: Vec3) -> Point3:
        """Interpret a vector as a displacement from the origin."""
        return cls(v.x, v.y, v.z)

    @property
    def vec(self) -> Vec3:
        """The displacement of this point from the origin."""
        return Vec3(self.x, self.y, self.z)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, v: Vec3) -> Point3:
        if not isinstance(v, Vec3):
            return NotImplemented
        return Point3(self.x + v.x, self.y + v.y, self.z + v.z)

    def __sub__(self, other: Point3 | Vec3) -> Vec3 | Point3:
        if isinstance(other, Point3):
            # Difference between points makes a Vector.
            return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)
        if isinstance(other, Vec3):
            return Point3(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented

    def distance_to(self, other: Point3) -> float:
        """Euclidean distance between two points."""
        return (self - other).length()

    def is_close(self, other: Point3, tol: float = 1e-9) -> bool:
        """Check componentwise closeness within an absolute tolerance."""
        return self.vec.is_close(other.vec, tol)


Point3.ORIGIN = Point3(0.0, 0.0, 0.0)


# =============================================================================
# Colors
# =============================================================================


@dataclass(frozen=True, slots=True)
class Color:
    """An RGB color in unbounded floating-point range.

    Channels may transiently leave [0, 1] while light contributions are
    summed; they are clamped only when quantized for output.

    Multiplying by a scalar scales every channel. Multiplying by another
    Color is the componentwise (Hadamard) product used to filter light by a
    surface reflectance.
    """

    r: float
    g: float
    b: float

    @classmethod
    def white(cls) -> Color:
        return cls(1.0, 1.0, 1.0)

    @classmethod
    def black(cls) -> Color:
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def magenta(cls) -> Color:
        return cls(1.0, 0.0, 1.0)

    purple = magenta

    @classmethod
    def from_vec(cls, v: Vec3) -> Color:
        """Reinterpret vector components as color channels."""
        return cls(v.x, v.y, v.z)

    def __iter__(self) -> Iterator[float]:
        yield self.r
        yield self.g
        yield self.b

    def __add__(self, other: Color) -> Color:
        if not isinstance(other, Color):
            return NotImplemented
        return Color(self.r + other.r, self.g + other.g, self.b + other.b)

    def __mul__(self, other: Color | float) -> Color:
        if isinstance(other, Color):
            return Color(self.r * other.r, self.g * other.g, self.b * other.b)
        if isinstance(other, (Vec3, Point3)):
            return NotImplemented
        return Color(self.r * other, self.g * other, self.b * other)

    def __rmul__(self, other: float) -> Color:
        return self.__mul__(other)

    def __truediv__(self, k: float) -> Color:
        return Color(self.r / k, self.g / k, self.b / k)

    def is_close(self, other: Color, tol: float = 1e-9) -> bool:
        """Check channelwise closeness within an absolute tolerance."""
        return (
            abs(self.r - other.r) <= tol
            and abs(self.g - other.g) <= tol
            and abs(self.b - other.b) <= tol
        )

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.r, self.g, self.b)

"""Base interface for signed distance fields.

A signed distance field (SDF) maps a point in space to the signed distance to
the nearest surface: negative inside a solid, zero on its boundary, positive
outside. Every node in this package also reports an optional material tag,
so the distance query returns an SdfValue ``(distance, material)``.

Nodes compose into an immutable tree. Primitives (spheres, boxes, half
spaces, user functions) sit at the leaves; combinators (union, intersection,
difference) and positioners (translate, scale, rotate) wrap children.

For sphere tracing to be sound, every node must be Lipschitz-1:
``|value_at(p) - value_at(q)| <= |p - q|``.

Example:
    >>> from raymarcher.core.vec import Point3, Vec3
    >>> from raymarcher.geometry.primitives import Box, Sphere
    >>> shape = (Sphere(1.0) | Box((0.5, 0.5, 0.5))).translate(Vec3(0.0, 1.0, 0.0))
    >>> round(shape.value_at(Point3(0.0, 3.0, 0.0)).distance, 6)
    1.0
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING, NamedTuple

from raymarcher.config import NORMAL_EPSILON
from raymarcher.core.vec import Point3, UnitVec3, Vec3
from raymarcher.materials.material import MaterialIndex

if TYPE_CHECKING:
    from raymarcher.geometry.combinators import Difference, Intersection, Union
    from raymarcher.geometry.positioners import Rotate, ScaleUniform, Translate

# Returned when the field has no usable gradient at the query point
_FALLBACK_NORMAL = UnitVec3(0.0, 1.0, 0.0)


class SdfValue(NamedTuple):
    """Result of querying a distance field at a point."""

    distance: float
    material: MaterialIndex | None = None


class Sdf(ABC):
    """Abstract base class for all distance field nodes."""

    @abstractmethod
    def value_at(self, p: Point3) -> SdfValue:
        """Return the signed distance and material tag at *p*."""
        raise NotImplementedError

    def distance_at(self, p: Point3) -> float:
        """Return only the signed distance at *p*."""
        return self.value_at(p).distance

    def estimate_normal(self, p: Point3, epsilon: float = NORMAL_EPSILON) -> UnitVec3:
        """Estimate the surface normal at *p* from the field gradient.

        Uses a 6-point central difference along each axis. The estimate is
        only meaningful near the surface, so callers should only use it once
        the field value at *p* is below the hit threshold.

        Args:
            p: A point on (or very near) the surface.
            epsilon: Offset along each axis for the finite differences.

        Returns:
            The normalized gradient. If the gradient vanishes (for example
            at the centre of a sphere), +Y is returned.
        """
        x, y, z = p.x, p.y, p.z
        dx = self.distance_at(Point3(x + epsilon, y, z)) - self.distance_at(Point3(x - epsilon, y, z))
        dy = self.distance_at(Point3(x, y + epsilon, z)) - self.distance_at(Point3(x, y - epsilon, z))
        dz = self.distance_at(Point3(x, y, z + epsilon)) - self.distance_at(Point3(x, y, z - epsilon))
        gradient = Vec3(dx, dy, dz)
        if gradient.length_squared() == 0.0:
            return _FALLBACK_NORMAL
        return gradient.unit()

    # ------------------------------------------------------------------
    # Boolean operations
    # ------------------------------------------------------------------

    def __or__(self, other: Sdf) -> Union:
        from raymarcher.geometry.combinators import Union

        return Union(self, other)

    def __and__(self, other: Sdf) -> Intersection:
        from raymarcher.geometry.combinators import Intersection

        return Intersection(self, other)

    def __sub__(self, other: Sdf) -> Difference:
        from raymarcher.geometry.combinators import Difference

        return Difference(self, other)

    # ------------------------------------------------------------------
    # Positioning
    # ------------------------------------------------------------------

    def translate(self, v: Vec3 | Sequence[float]) -> Translate:
        """Move the shape by *v*."""
        from raymarcher.geometry.positioners import Translate

        return Translate(self, v)

    def scale(self, factor: float) -> ScaleUniform:
        """Uniformly scale the shape about the origin."""
        from raymarcher.geometry.positioners import ScaleUniform

        return ScaleUniform(self, factor)

    def rotate(self, angle: float, axis: Vec3 | Sequence[float]) -> Rotate:
        """Rotate the shape by *angle* radians about *axis* through the origin."""
        from raymarcher.geometry.positioners import Rotate

        return Rotate(self, angle, axis)

    def rotate_degrees(self, angle: float, axis: Vec3 | Sequence[float]) -> Rotate:
        """Rotate the shape by *angle* degrees about *axis* through the origin."""
        from raymarcher.geometry.positioners import Rotate

        return Rotate.degrees(self, angle, axis)

    def with_material(self, material: MaterialIndex) -> WithMaterial:
        """Tag every point of the shape with *material*."""
        return WithMaterial(self, material)


class WithMaterial(Sdf):
    """Attach (or replace) the material tag of a child without touching distance."""

    def __init__(self, child: Sdf, material: MaterialIndex) -> None:
        self.child = child
        self.material = material

    def value_at(self, p: Point3) -> SdfValue:
        return SdfValue(self.child.value_at(p).distance, self.material)

    def __repr__(self) -> str:
        return f"WithMaterial({self.child!r}, {self.material!r})"


def as_vec3(v: Vec3 | Sequence[float]) -> Vec3:
    """Coerce a 3-sequence (tuple, list, array) into a Vec3."""
    if isinstance(v, Vec3):
        return v
    if not hasattr(v, "__len__"):
        raise ValueError(f"Expected 3 components, got {v!r}")
    if len(v) != 3:
        raise ValueError(f"Expected 3 components, got {len(v)}: {v!r}")
    return Vec3(float(v[0]), float(v[1]), float(v[2]))


def as_point3(p: Point3 | Sequence[float]) -> Point3:
    """Coerce a 3-sequence (tuple, list, array) into a Point3."""
    if isinstance(p, Point3):
        return p
    return Point3.from_vec(as_vec3(p))

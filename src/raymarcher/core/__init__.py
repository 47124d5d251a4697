"""Core rendering module.

This module contains the fundamental building blocks of the renderer:

Components:
    vec: Vec3, UnitVec3, Point3 and Color value types
    quaternion: Quaternions used by the Rotate positioner
    ray: Ray data structure and the sphere-tracing procedures
    integrator: Per-pixel shading with reflections and the frame scan
    frame: Buffered frame renderer with progress reporting

Everything here is plain Python: the marcher is a lazy generator and the frame
is produced one pixel at a time.
"""

from .quaternion import Quaternion
from .ray import Hit, MarchStep, Ray, find_target, march, soft_shadow
from .vec import Color, Point3, UnitVec3, Vec3

# Note: integrator and frame are NOT imported here to avoid circular imports.
# Import directly from raymarcher.core.integrator or raymarcher.core.frame.

__all__ = [
    "Vec3",
    "UnitVec3",
    "Point3",
    "Color",
    "Quaternion",
    "Ray",
    "MarchStep",
    "Hit",
    "march",
    "find_target",
    "soft_shadow",
]

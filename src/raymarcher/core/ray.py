"""Rays and the sphere-tracing procedures that walk them through a distance field.

Sphere tracing advances a ray by the distance the field reports at the current
sample. Because that distance is a lower bound on the distance to the nearest
surface, the step can never overshoot. The walk is exposed as a lazy, infinite
generator (march) so that the stopping rules live with the consumers:

    find_target:  first sample closer than epsilon (hit), or a miss once the
                  ray travels past t_max or runs out of steps
    soft_shadow:  minimum of ``hardness * distance / total_depth`` along the
                  segment between a surface point and a light

Example:
    >>> from raymarcher.config import RenderSettings
    >>> from raymarcher.core.vec import Point3, Vec3
    >>> from raymarcher.geometry.primitives import Sphere
    >>> ray = Ray.towards(Point3(-10.0, 0.0, 0.0), Vec3(1.0, 0.0, 0.0))
    >>> hit = find_target(ray, Sphere(1.0), RenderSettings())
    >>> round(hit.point.x, 5)
    -1.0
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from itertools import islice, takewhile
from typing import TYPE_CHECKING

from raymarcher.core.vec import Point3, UnitVec3, Vec3

if TYPE_CHECKING:
    from raymarcher.config import RenderSettings
    from raymarcher.geometry.sdf import Sdf
    from raymarcher.materials.material import MaterialIndex


@dataclass(frozen=True, slots=True)
class Ray:
    """A half-line with an origin point and a unit direction.

    Attributes:
        origin: The starting point of the ray.
        direction: The unit direction of travel.
    """

    origin: Point3
    direction: UnitVec3

    @classmethod
    def towards(cls, origin: Point3, direction: Vec3) -> Ray:
        """Create a ray, normalizing *direction*.

        Raises:
            ValueError: If *direction* has zero length.
        """
        return cls(origin, direction.unit())

    def at(self, t: float) -> Point3:
        """Compute the point ``origin + t * direction``."""
        return self.origin + self.direction * t


@dataclass(frozen=True, slots=True)
class MarchStep:
    """One sample of a ray march.

    Attributes:
        point: Where the field was evaluated.
        distance: Signed field value at that point.
        material: Material tag reported by the field, if any.
        total_depth: Ray parameter of the sample.
        step: 1-based index of the sample.
    """

    point: Point3
    distance: float
    material: MaterialIndex | None
    total_depth: float
    step: int


@dataclass(frozen=True, slots=True)
class Hit:
    """Result of a successful find_target."""

    point: Point3
    material: MaterialIndex | None
    total_depth: float
    steps: int


def march(ray: Ray, sdf: Sdf, t_min: float) -> Iterator[MarchStep]:
    """Walk *ray* through *sdf*, yielding one MarchStep per field evaluation.

    The first sample is taken at ``t_min``. Each following sample advances
    the ray parameter by the raw signed distance of the previous one, so the
    march slows down as it approaches a surface.

    The generator never terminates on its own. Each sample is computed only
    when requested, so callers bound it with islice/takewhile/next.
    """
    total_depth = t_min
    step = 0
    while True:
        step += 1
        point = ray.at(total_depth)
        distance, material = sdf.value_at(point)
        yield MarchStep(point, distance, material, total_depth, step)
        total_depth += distance


def find_target(ray: Ray, sdf: Sdf, settings: RenderSettings) -> Hit | None:
    """Sphere-trace *ray* and return the first surface hit.

    A sample whose distance is below ``settings.epsilon`` is a hit. The ray
    misses once its parameter reaches ``settings.t_max`` or after
    ``settings.max_marching_steps`` evaluations.

    Returns:
        The Hit, or None on a miss.
    """
    steps = islice(march(ray, sdf, settings.t_min), settings.max_marching_steps)
    in_range = takewhile(lambda s: s.total_depth < settings.t_max, steps)
    found = next((s for s in in_range if s.distance < settings.epsilon), None)
    if found is None:
        return None
    return Hit(found.point, found.material, found.total_depth, found.step)


def soft_shadow(
    ray: Ray,
    sdf: Sdf,
    settings: RenderSettings,
    hardness: float,
    target_distance: float,
) -> float:
    """Compute the penumbra factor along *ray* up to *target_distance*.

    The march stops slightly short of the target, at
    ``target_distance * (1 - shadow_correction * epsilon)``, so that the
    surface of the light's own geometry (if any) does not count as an
    occluder.

    Args:
        ray: Ray from the shaded point toward the light.
        sdf: The scene's distance field.
        settings: Marching tolerances.
        hardness: Penumbra sharpness; larger values give harder edges.
        target_distance: Distance from the ray origin to the light.

    Returns:
        0.0 when the segment is blocked, 1.0 when it is fully clear, and a
        value in between for rays grazing an occluder.
    """
    corrected = target_distance * (1.0 - settings.shadow_correction * settings.epsilon)
    steps = islice(march(ray, sdf, settings.t_min), settings.max_marching_steps)
    light = 1.0
    for s in takewhile(lambda s: s.total_depth < corrected, steps):
        if s.distance < settings.epsilon:
            return 0.0
        if s.total_depth > 0.0:
            light = min(light, hardness * s.distance / s.total_depth)
    return max(0.0, min(1.0, light))

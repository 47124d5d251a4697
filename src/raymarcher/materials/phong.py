"""Phong local illumination with soft shadows.

For a surface point p with normal n seen from an eye position, the color is

    ambient_light * material.ambient
    + sum over lights of strength * shadow * (diffuse + specular)

where, with l the unit vector toward the light, v the unit vector toward the
eye and r = 2 (l.n) n - l:

    diffuse  = material.diffuse * light.diffuse * (l.n)          if l.n > 0
    specular = material.specular * light.specular * (r.v)^shininess  if r.v > 0

Lights behind the surface contribute nothing and cost no shadow march.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from raymarcher.core.ray import Ray, soft_shadow
from raymarcher.core.vec import Color, Point3, UnitVec3

if TYPE_CHECKING:
    from raymarcher.config import RenderSettings
    from raymarcher.materials.material import Material
    from raymarcher.scene.lights import Light
    from raymarcher.scene.scene import SceneMap


def normal_color(normal: UnitVec3) -> Color:
    """Map a unit normal from [-1, 1]^3 into [0, 1]^3 for debug views."""
    return (Color.white() + Color.from_vec(normal)) * 0.5


def light_contribution(
    light: Light,
    material: Material,
    point: Point3,
    normal: UnitVec3,
    to_eye: UnitVec3,
    scene_map: SceneMap,
    settings: RenderSettings,
) -> Color:
    """Shadowed diffuse and specular contribution of a single light."""
    to_light = light.location - point
    distance = to_light.length()
    if distance == 0.0:
        return Color.black()
    direction = to_light.unit()
    ln = direction.dot(normal)
    if ln <= 0.0:
        return Color.black()

    color = material.diffuse * light.diffuse * ln
    r = normal * (2.0 * ln) - direction
    rv = r.dot(to_eye)
    if rv > 0.0:
        color = color + material.specular * light.specular * (rv**material.shininess)

    shadow = soft_shadow(
        Ray(point, direction),
        scene_map.sdf,
        settings,
        light.shadow_hardness,
        distance,
    )
    return color * (light.strength * shadow)


def phong(
    material: Material,
    point: Point3,
    normal: UnitVec3,
    eye: Point3,
    scene_map: SceneMap,
    settings: RenderSettings,
) -> Color:
    """Evaluate the Phong model at a surface point.

    Args:
        material: Reflectances of the surface.
        point: The shaded point.
        normal: Unit surface normal at *point*.
        eye: Position the surface is viewed from.
        scene_map: Geometry (for shadows) and lights.
        settings: Marching tolerances for the shadow rays.

    Returns:
        The unclamped local color.
    """
    color = scene_map.ambient_light.color * material.ambient
    to_eye_vec = eye - point
    if to_eye_vec.length_squared() == 0.0:
        to_eye = normal
    else:
        to_eye = to_eye_vec.unit()
    for light in scene_map.lights:
        color = color + light_contribution(
            light, material, point, normal, to_eye, scene_map, settings
        )
    return color

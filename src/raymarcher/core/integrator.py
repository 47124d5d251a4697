"""Whitted-style integrator: per-pixel shading and the frame scan.

Each pixel gets exactly one camera ray. The ray is sphere-traced through the
scene's distance field; a miss shows the background, and a hit is shaded with
the Phong model. Reflective materials add a mirrored child ray, bounded by
``RenderSettings.max_light_recursions``.

The frame is produced lazily: render() is a generator yielding one Color per
pixel, rows from top to bottom and columns from left to right, so a consumer
can stream pixels to disk without holding the frame in memory.

Example:
    >>> from raymarcher.config import Config, ImageSettings
    >>> from raymarcher.core.integrator import render
    >>> from raymarcher.scene.demo import create_demo_scene
    >>>
    >>> config = Config(ImageSettings(width=32, height=18))
    >>> scene = create_demo_scene(config.aspect_ratio)
    >>> colors = list(render(config, scene))
    >>> len(colors)
    576
"""

from __future__ import annotations

from collections.abc import Iterator
from itertools import product
from typing import TYPE_CHECKING

from raymarcher.config import MaterialOverride
from raymarcher.core.ray import Ray, find_target
from raymarcher.core.vec import Color
from raymarcher.materials.phong import normal_color, phong

if TYPE_CHECKING:
    from raymarcher.config import Config, RenderSettings
    from raymarcher.scene.scene import Scene

# Reflection rays start this many epsilons off the surface, along the normal
REFLECTION_BIAS = 2.0


def shade(ray: Ray, settings: RenderSettings, scene: Scene, remaining_depth: int) -> Color:
    """Compute the color seen along *ray*.

    Specular highlights are computed toward the origin of *ray*, so reflected
    rays use their reflection point as the eye rather than the camera.

    Args:
        ray: The ray to trace.
        settings: Marching tolerances and debug overrides.
        scene: The scene to render.
        remaining_depth: How many more reflection bounces may be spawned.

    Returns:
        The background color on a miss, otherwise the shaded surface color.
    """
    scene_map = scene.scene_map
    hit = find_target(ray, scene_map.sdf, settings)
    if hit is None:
        return scene.background(ray)

    normal = scene_map.sdf.estimate_normal(hit.point, settings.normal_epsilon)
    if settings.material_override is MaterialOverride.NORMAL:
        return normal_color(normal)

    material = scene_map.materials.resolve(hit.material)
    color = phong(material, hit.point, normal, ray.origin, scene_map, settings)

    if material.reflectivity > 0.0 and remaining_depth > 0:
        origin = hit.point + normal * (REFLECTION_BIAS * settings.epsilon)
        reflected = Ray(origin, ray.direction.reflect(normal))
        child = shade(reflected, settings, scene, remaining_depth - 1)
        color = color + child * material.reflectivity

    return color


def generate_pixel(ray: Ray, settings: RenderSettings, scene: Scene) -> Color:
    """Shade a camera ray with the full reflection budget."""
    return shade(ray, settings, scene, settings.max_light_recursions)


def _normalized(index: int, size: int) -> float:
    # A single row or column looks through the middle of the viewport
    if size == 1:
        return 0.5
    return index / (size - 1)


def render_pixels(config: Config, scene: Scene) -> Iterator[tuple[tuple[int, int], Color]]:
    """Render the frame, yielding ``((row, col), color)`` in scan order.

    Row 0 is the top of the image. Pixels are produced on demand.
    """
    width = config.image.width
    height = config.image.height
    camera = scene.camera
    for j, i in product(reversed(range(height)), range(width)):
        ray = camera.get_ray(_normalized(i, width), _normalized(j, height))
        yield (height - 1 - j, i), generate_pixel(ray, config.render, scene)


def render(config: Config, scene: Scene) -> Iterator[Color]:
    """Render the frame, yielding one Color per pixel.

    Rows run from the top of the image to the bottom and columns from left
    to right, which is the order PPM expects. The sequence is finite,
    holds ``width * height`` colors, and is computed lazily.
    """
    for _, color in render_pixels(config, scene):
        yield color

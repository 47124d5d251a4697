"""Sphere-tracing renderer for scenes built from signed distance fields.

Scenes are composed from distance-field primitives (spheres, boxes, half
spaces, arbitrary functions), combined with boolean operators and placed with
translations, rotations and uniform scales. Each pixel is sphere-traced once
and shaded with the Phong model, with soft shadows and bounded recursive
reflections.

Subpackages:
    core: Vector types, ray marching, shading integrator and frame renderer
    geometry: Distance-field primitives, combinators and positioners
    materials: Material records, registry and the Phong evaluator
    camera: Pinhole camera with look-at positioning
    scene: Scene containers, lights, backgrounds, scene manager, demo scene
    preview: PPM/PNG export and Matplotlib preview

Example:
    >>> from raymarcher import Config, ImageSettings, render
    >>> from raymarcher.preview.export import write_ppm
    >>> from raymarcher.scene.demo import create_demo_scene
    >>> config = Config(ImageSettings(width=160, height=90))
    >>> write_ppm("image.ppm", 160, 90, render(config, create_demo_scene(config.aspect_ratio)))
"""

from raymarcher.config import Config, ImageSettings, MaterialOverride, RenderSettings
from raymarcher.core.integrator import render, render_pixels
from raymarcher.core.vec import Color, Point3, UnitVec3, Vec3

__version__ = "0.1.0"

__all__ = [
    "render",
    "render_pixels",
    "Config",
    "ImageSettings",
    "RenderSettings",
    "MaterialOverride",
    "Color",
    "Point3",
    "Vec3",
    "UnitVec3",
]

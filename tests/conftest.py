"""Pytest configuration for raymarcher tests.

This module provides shared fixtures for all test modules: default render
settings, a seeded random generator for property-style checks, and a small
single-sphere scene that renders quickly.
"""

import numpy as np
import pytest


@pytest.fixture
def settings():
    """Default render settings."""
    from raymarcher.config import RenderSettings

    return RenderSettings()


@pytest.fixture
def rng():
    """Seeded NumPy generator so property checks are reproducible."""
    return np.random.default_rng(42)


@pytest.fixture
def make_sphere_scene():
    """Factory for a unit sphere at the origin seen from +z.

    The sphere is tagged with a gray material unless ``material`` is None,
    the background is a constant dark blue and there is one white light
    behind the camera.
    """
    from raymarcher.camera.pinhole import Camera
    from raymarcher.core.vec import Color, Point3, Vec3
    from raymarcher.geometry.primitives import Sphere
    from raymarcher.materials.material import Material, MaterialList
    from raymarcher.scene.background import ConstantBackground
    from raymarcher.scene.lights import AmbientLight, Light
    from raymarcher.scene.scene import Scene, SceneMap

    default = object()

    def _make(
        material=default,
        lights=None,
        ambient=Color(0.2, 0.2, 0.2),
        background=Color(0.0, 0.0, 0.25),
        aspect_ratio=1.0,
    ):
        materials = MaterialList()
        shape = Sphere(1.0)
        if material is default:
            material = Material.single_color(Color(0.5, 0.5, 0.5), shininess=8.0)
        if material is not None:
            shape = shape.with_material(materials.insert(material))
        if lights is None:
            lights = (Light.white(Point3(0.0, 0.0, 5.0)),)
        camera = Camera.new(
            Point3(0.0, 0.0, 3.0),
            Point3(0.0, 0.0, 0.0),
            Vec3(0.0, 1.0, 0.0),
            60.0,
            aspect_ratio,
        )
        scene_map = SceneMap(
            sdf=shape,
            materials=materials,
            ambient_light=AmbientLight(ambient),
            lights=tuple(lights),
        )
        return Scene(camera=camera, scene_map=scene_map, background=ConstantBackground(background))

    return _make


@pytest.fixture
def sphere_scene(make_sphere_scene):
    """The default single-sphere scene."""
    return make_sphere_scene()

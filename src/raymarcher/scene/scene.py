"""Scene containers handed to the renderer.

A SceneMap holds everything needed to shade a point (geometry, materials,
lights). A Scene adds the camera and the background. Both are built once
and only read while rendering.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from raymarcher.camera.pinhole import Camera
from raymarcher.core.vec import Color
from raymarcher.geometry.sdf import Sdf
from raymarcher.materials.material import MaterialList
from raymarcher.scene.background import BackgroundFn, sky_gradient
from raymarcher.scene.lights import AmbientLight, Light


@dataclass(frozen=True)
class SceneMap:
    """Geometry, materials and lighting of a scene."""

    sdf: Sdf
    materials: MaterialList
    ambient_light: AmbientLight = AmbientLight(Color(0.5, 0.5, 0.5))
    lights: Sequence[Light] = field(default_factory=tuple)


@dataclass(frozen=True)
class Scene:
    """A SceneMap viewed through a camera against a background."""

    camera: Camera
    scene_map: SceneMap
    background: BackgroundFn = field(default_factory=sky_gradient)

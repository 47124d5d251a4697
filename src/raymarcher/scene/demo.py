"""Demo scene: a red cube and a sphere cap over a wavy floor.

The scene contains:
- A red unit cube at the origin
- A white sphere cap (a unit sphere cut by a scaled copy of the floor),
  lifted above the cube
- A wavy floor ``y = sin(x) + sin(z)`` scaled down by 10, trimmed to a
  100 x 100 x 100 cube
- Three point lights: a dim white key light behind the camera, a green-tinted
  light overhead and a blue light to the right
- A vertical gradient sky from white to light blue

Example:
    >>> from raymarcher.scene.demo import DemoSceneParams, create_demo_scene
    >>> scene = create_demo_scene(16.0 / 9.0)
    >>> glossy = create_demo_scene(16.0 / 9.0, DemoSceneParams(sphere_reflectivity=0.5))
"""

from __future__ import annotations

from dataclasses import dataclass

from raymarcher.camera.pinhole import PinholeCamera
from raymarcher.core.vec import Color, Vec3
from raymarcher.geometry.primitives import UNIT_CUBE, UNIT_SPHERE, Arbitrary, sine_floor
from raymarcher.scene.background import VerticalGradientBackground
from raymarcher.scene.manager import SceneManager
from raymarcher.scene.scene import Scene

# =============================================================================
# Demo Scene Parameters
# =============================================================================


@dataclass
class DemoSceneParams:
    """Parameters for configuring the demo scene.

    Attributes:
        cube_color: RGB reflectance of the cube.
        sphere_color: RGB reflectance of the sphere cap.
        floor_color: RGB reflectance of the floor.
        sphere_reflectivity: Mirror fraction of the sphere cap.
        floor_scale: Scale applied to the wave pattern of the floor.
        vfov: Vertical field of view of the camera in degrees.
    """

    cube_color: tuple[float, float, float] = (0.9, 0.1, 0.1)
    sphere_color: tuple[float, float, float] = (0.9, 0.9, 0.9)
    floor_color: tuple[float, float, float] = (0.6, 0.6, 0.6)
    sphere_reflectivity: float = 0.25
    floor_scale: float = 0.1
    vfov: float = 60.0


# =============================================================================
# Demo Scene Constants
# =============================================================================

CUBE_SHININESS = 5.0
SPHERE_SHININESS = 10.0
FLOOR_SHININESS = 2.0

# Half side of the cube that bounds the otherwise infinite floor
FLOOR_EXTENT = 50.0

SKY_START = (1.0, 1.0, 1.0)
SKY_END = (0.5, 0.7, 1.0)


def create_demo_manager(params: DemoSceneParams | None = None) -> SceneManager:
    """Populate a SceneManager with the demo scene.

    Returns:
        The manager, ready for build().
    """
    if params is None:
        params = DemoSceneParams()

    manager = SceneManager()

    # =========================================================================
    # Materials
    # =========================================================================

    white = manager.add_material(
        params.sphere_color,
        shininess=SPHERE_SHININESS,
        reflectivity=params.sphere_reflectivity,
        name="white",
    )
    red = manager.add_material(params.cube_color, shininess=CUBE_SHININESS, name="red")
    floor_material = manager.add_material(
        params.floor_color, shininess=FLOOR_SHININESS, name="floor"
    )

    # =========================================================================
    # Shapes
    # =========================================================================

    infinite_floor = Arbitrary(sine_floor).scale(params.floor_scale)
    floor = (infinite_floor & UNIT_CUBE.scale(FLOOR_EXTENT)).with_material(floor_material)

    # Sphere with its lower part cut off by a coarser copy of the floor
    cap = (
        UNIT_SPHERE.with_material(white)
        & infinite_floor.scale(2.0).translate(Vec3(0.0, 0.5, 0.0))
    ).translate(Vec3(0.0, 1.5, 0.0))

    manager.set_shape(UNIT_CUBE.with_material(red) | cap | floor)

    # =========================================================================
    # Lights
    # =========================================================================

    manager.set_ambient_light((0.5, 0.5, 0.5))
    manager.add_light((0.0, 2.0, 10.0), diffuse=(0.4, 0.4, 0.4), specular=(0.4, 0.4, 0.4))
    manager.add_light((0.0, 5.0, 0.0), diffuse=(0.4, 0.4, 0.4), specular=(0.4, 0.9, 0.4))
    manager.add_light((3.0, 2.0, 0.0), diffuse=(0.1, 0.1, 0.9), specular=(0.1, 0.1, 0.1))

    manager.set_background(VerticalGradientBackground(Color(*SKY_START), Color(*SKY_END)))

    # =========================================================================
    # Camera
    # =========================================================================

    manager.set_camera(
        PinholeCamera(
            lookfrom=(0.0, 1.5, 5.0),
            lookat=(0.0, 0.0, 0.0),
            vup=(0.0, 1.0, 0.0),
            vfov=params.vfov,
        )
    )
    return manager


def create_demo_scene(
    aspect_ratio: float = 16.0 / 9.0,
    params: DemoSceneParams | None = None,
) -> Scene:
    """Build the demo scene for the given image aspect ratio."""
    return create_demo_manager(params).build(aspect_ratio)

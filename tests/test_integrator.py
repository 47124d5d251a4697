"""Tests for per-pixel shading and the frame scan.

Tests cover:
- Background on a miss
- The normal debug override and the missing-material fallback
- Reflection depth bookkeeping
- Scan order, pixel coordinates and laziness of render_pixels
"""

import pytest

from raymarcher.core.vec import Color, Point3, Vec3


class CountingCamera:
    """Wraps a camera and records every get_ray call."""

    def __init__(self, camera):
        self.camera = camera
        self.calls = []

    def get_ray(self, s, t):
        self.calls.append((s, t))
        return self.camera.get_ray(s, t)


def looking_down_z(origin_z=3.0):
    from raymarcher.core.ray import Ray

    return Ray.towards(Point3(0.0, 0.0, origin_z), Vec3(0.0, 0.0, -1.0))


def mirror_scene(reflectivity, ambient=Color(0.0, 0.0, 0.0)):
    """A reflective unit sphere with no point lights."""
    from raymarcher.camera.pinhole import Camera
    from raymarcher.geometry.primitives import Sphere
    from raymarcher.materials.material import Material, MaterialList
    from raymarcher.scene.background import ConstantBackground
    from raymarcher.scene.lights import AmbientLight
    from raymarcher.scene.scene import Scene, SceneMap

    materials = MaterialList()
    mirror = materials.insert(Material.single_color(Color(0.3, 0.3, 0.3), reflectivity=reflectivity))
    camera = Camera.new(Point3(0.0, 0.0, 3.0), Point3(0.0, 0.0, 0.0), Vec3(0.0, 1.0, 0.0), 60.0, 1.0)
    return Scene(
        camera=camera,
        scene_map=SceneMap(
            sdf=Sphere(1.0).with_material(mirror),
            materials=materials,
            ambient_light=AmbientLight(ambient),
        ),
        background=ConstantBackground(Color(0.0, 0.0, 1.0)),
    )


class TestShade:
    """Tests for shading a single ray."""

    def test_miss_shows_background(self, sphere_scene, settings):
        """Test that a ray pointing away from the sphere sees the background."""
        from raymarcher.core.integrator import shade
        from raymarcher.core.ray import Ray

        ray = Ray.towards(Point3(0.0, 0.0, 3.0), Vec3(0.0, 0.0, 1.0))
        color = shade(ray, settings, sphere_scene, settings.max_light_recursions)
        assert color == Color(0.0, 0.0, 0.25)

    def test_hit_is_lit(self, sphere_scene, settings):
        """Test that the sphere facing the light is brighter than ambient."""
        from raymarcher.core.integrator import generate_pixel

        color = generate_pixel(looking_down_z(), settings, sphere_scene)
        ambient_only = 0.2 * 0.5
        assert color.r > ambient_only
        assert color.r == pytest.approx(color.g) == pytest.approx(color.b)

    def test_normal_override(self, sphere_scene):
        """Test that the normal debug mode paints (n + 1) / 2."""
        from raymarcher.config import MaterialOverride, RenderSettings
        from raymarcher.core.integrator import generate_pixel

        settings = RenderSettings(material_override=MaterialOverride.NORMAL)
        color = generate_pixel(looking_down_z(), settings, sphere_scene)
        assert color.is_close(Color(0.5, 0.5, 1.0), tol=1e-4)

    def test_missing_material_is_magenta(self, make_sphere_scene, settings):
        """Test that an untagged shape falls back to the default material."""
        from raymarcher.core.integrator import generate_pixel

        scene = make_sphere_scene(material=None, lights=(), ambient=Color.white())
        color = generate_pixel(looking_down_z(), settings, scene)
        assert color == Color.magenta()

    def test_reflection_adds_reflected_background(self, settings):
        """Test that one bounce adds reflectivity times the reflected color."""
        from raymarcher.core.integrator import shade

        scene = mirror_scene(reflectivity=0.5)
        without = shade(looking_down_z(), settings, scene, 0)
        with_bounce = shade(looking_down_z(), settings, scene, 1)

        assert without.is_close(Color(0.0, 0.0, 0.0))
        # The head-on ray bounces straight back into the background
        assert with_bounce.is_close(Color(0.0, 0.0, 0.5), tol=1e-6)

    def test_specular_is_seen_from_ray_origin(self, settings):
        """Test that the highlight is computed toward the ray origin, not the camera."""
        from raymarcher.camera.pinhole import Camera
        from raymarcher.core.integrator import shade
        from raymarcher.core.ray import Ray
        from raymarcher.geometry.primitives import NegY
        from raymarcher.materials.material import Material, MaterialList
        from raymarcher.scene.background import ConstantBackground
        from raymarcher.scene.lights import AmbientLight, Light
        from raymarcher.scene.scene import Scene, SceneMap

        materials = MaterialList()
        gray = materials.insert(Material.single_color(Color(0.5, 0.5, 0.5), shininess=4.0))
        # Seen from the camera, the highlight would point away (diffuse only, 0.45)
        camera = Camera.new(Point3(5.0, 1.0, 0.0), Point3(0.0, 0.0, 0.0), Vec3(0.0, 1.0, 0.0), 60.0, 1.0)
        scene = Scene(
            camera=camera,
            scene_map=SceneMap(
                sdf=NegY().with_material(gray),
                materials=materials,
                ambient_light=AmbientLight(Color(0.1, 0.1, 0.1)),
                lights=(Light.white(Point3(3.0, 4.0, 0.0)),),
            ),
            background=ConstantBackground(Color(0.0, 0.0, 0.0)),
        )

        ray = Ray.towards(Point3(0.0, 5.0, 0.0), Vec3(0.0, -1.0, 0.0))
        color = shade(ray, settings, scene, 0)
        expected = 0.05 + 0.5 * 0.8 + 0.5 * 0.8**4
        assert color.is_close(Color(expected, expected, expected), tol=1e-6)

    def test_matte_surface_spawns_no_reflection(self, settings):
        """Test that reflectivity 0 ignores the remaining depth."""
        from raymarcher.core.integrator import shade

        scene = mirror_scene(reflectivity=0.0)
        assert shade(looking_down_z(), settings, scene, 3).is_close(Color(0.0, 0.0, 0.0))

    def test_facing_mirrors_stop_at_recursion_limit(self):
        """Test the geometric series between two parallel mirrors."""
        from raymarcher.camera.pinhole import Camera
        from raymarcher.config import RenderSettings
        from raymarcher.core.integrator import generate_pixel
        from raymarcher.core.ray import Ray
        from raymarcher.geometry.primitives import HalfSpace
        from raymarcher.materials.material import Material, MaterialList
        from raymarcher.scene.background import ConstantBackground
        from raymarcher.scene.lights import AmbientLight
        from raymarcher.scene.scene import Scene, SceneMap

        c = Color(0.2, 0.4, 0.6)
        materials = MaterialList()
        mirror = materials.insert(Material.single_color(c, reflectivity=0.5))
        # Solid below z = -1 and above z = 1
        walls = HalfSpace((0.0, 0.0, 1.0), -1.0) | HalfSpace((0.0, 0.0, -1.0), -1.0)
        scene = Scene(
            camera=Camera.new(Point3(0.0, 0.0, 0.0), Point3(0.0, 0.0, -1.0), Vec3(0.0, 1.0, 0.0), 60.0, 1.0),
            scene_map=SceneMap(
                sdf=walls.with_material(mirror),
                materials=materials,
                ambient_light=AmbientLight(Color.white()),
            ),
            background=ConstantBackground(Color(9.0, 9.0, 9.0)),
        )
        settings = RenderSettings(max_light_recursions=3)
        ray = Ray.towards(Point3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))

        color = generate_pixel(ray, settings, scene)
        assert color.is_close(c * 1.875, tol=1e-9)


class TestRenderPixels:
    """Tests for the frame scan."""

    def test_scan_order_for_3x2(self, sphere_scene):
        """Test row-major order from the top row down."""
        from raymarcher.config import Config, ImageSettings
        from raymarcher.core.integrator import render_pixels

        config = Config(ImageSettings(width=3, height=2))
        coords = [rc for rc, _ in render_pixels(config, sphere_scene)]
        assert coords == [(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2)]

    def test_corner_coordinates(self, sphere_scene):
        """Test that the first pixel is top left and the last is bottom right."""
        from dataclasses import replace

        from raymarcher.config import Config, ImageSettings
        from raymarcher.core.integrator import render_pixels

        camera = CountingCamera(sphere_scene.camera)
        scene = replace(sphere_scene, camera=camera)
        list(render_pixels(Config(ImageSettings(width=3, height=2)), scene))

        assert camera.calls[0] == (0.0, 1.0)
        assert camera.calls[2] == (1.0, 1.0)
        assert camera.calls[-1] == (1.0, 0.0)
        assert camera.calls[4] == (0.5, 0.0)

    def test_single_pixel_looks_through_center(self, sphere_scene):
        """Test that a 1x1 image samples the middle of the viewport."""
        from dataclasses import replace

        from raymarcher.config import Config, ImageSettings
        from raymarcher.core.integrator import render

        camera = CountingCamera(sphere_scene.camera)
        colors = list(render(Config(ImageSettings(width=1, height=1)), replace(sphere_scene, camera=camera)))

        assert len(colors) == 1
        assert camera.calls == [(0.5, 0.5)]

    def test_render_is_lazy(self, sphere_scene):
        """Test that pixels are only computed on demand."""
        from dataclasses import replace

        from raymarcher.config import Config, ImageSettings
        from raymarcher.core.integrator import render

        camera = CountingCamera(sphere_scene.camera)
        pixels = render(Config(ImageSettings(width=8, height=8)), replace(sphere_scene, camera=camera))
        assert camera.calls == []

        next(pixels)
        next(pixels)
        assert len(camera.calls) == 2

    def test_render_yields_every_pixel(self, sphere_scene):
        """Test that render produces width * height colors."""
        from raymarcher.config import Config, ImageSettings
        from raymarcher.core.integrator import render

        colors = list(render(Config(ImageSettings(width=5, height=4)), sphere_scene))
        assert len(colors) == 20
        assert all(isinstance(c, Color) for c in colors)

    def test_center_pixel_hits_sphere(self, sphere_scene):
        """Test that the middle of a 3x3 frame sees the sphere, the corners do not."""
        from raymarcher.config import Config, ImageSettings
        from raymarcher.core.integrator import render

        colors = list(render(Config(ImageSettings(width=3, height=3)), sphere_scene))
        background = Color(0.0, 0.0, 0.25)
        assert colors[0] == background
        assert colors[4] != background

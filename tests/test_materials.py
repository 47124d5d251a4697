"""Tests for materials, the material registry and Phong shading.

The shading tests use a floor (NegY) lit from straight above and viewed
from straight above, where every term of the Phong model is easy to
compute by hand:

    ambient  = 0.1 * 0.5         = 0.05
    diffuse  = 0.5 * 1.0 * 1.0   = 0.5
    specular = 0.5 * 1.0 * 1.0^s = 0.5
"""

import pytest

from raymarcher.core.vec import Color, Point3, UnitVec3, Vec3

GRAY = Color(0.5, 0.5, 0.5)
UP = UnitVec3(0.0, 1.0, 0.0)


def floor_scene_map(sdf=None, lights=None):
    from raymarcher.geometry.primitives import NegY
    from raymarcher.materials.material import MaterialList
    from raymarcher.scene.lights import AmbientLight, Light
    from raymarcher.scene.scene import SceneMap

    if lights is None:
        lights = (Light.white(Point3(0.0, 10.0, 0.0)),)
    return SceneMap(
        sdf=NegY() if sdf is None else sdf,
        materials=MaterialList(),
        ambient_light=AmbientLight(Color(0.1, 0.1, 0.1)),
        lights=tuple(lights),
    )


def shade_floor(scene_map, settings, material=None):
    from raymarcher.materials.material import Material
    from raymarcher.materials.phong import phong

    if material is None:
        material = Material.single_color(GRAY, shininess=4.0)
    return phong(
        material,
        Point3(0.0, 0.0, 0.0),
        UP,
        Point3(0.0, 5.0, 0.0),
        scene_map,
        settings,
    )


class TestMaterial:
    """Tests for Material validation and construction."""

    def test_single_color(self):
        """Test that single_color uses one color for all reflectances."""
        from raymarcher.materials.material import Material

        m = Material.single_color(GRAY, shininess=3.0, reflectivity=0.2)
        assert m.ambient == m.diffuse == m.specular == GRAY
        assert m.shininess == 3.0
        assert m.reflectivity == 0.2

    @pytest.mark.parametrize("reflectivity", [-0.1, 1.5])
    def test_rejects_reflectivity_outside_unit_interval(self, reflectivity):
        """Test that reflectivity must be in [0, 1]."""
        from raymarcher.materials.material import Material

        with pytest.raises(ValueError, match="Reflectivity"):
            Material.single_color(GRAY, reflectivity=reflectivity)

    def test_rejects_negative_shininess(self):
        """Test that the specular exponent cannot be negative."""
        from raymarcher.materials.material import Material

        with pytest.raises(ValueError, match="Shininess"):
            Material.single_color(GRAY, shininess=-1.0)


class TestMaterialList:
    """Tests for the material registry."""

    def test_insert_returns_sequential_handles(self):
        """Test that handles count up from zero in insertion order."""
        from raymarcher.materials.material import Material, MaterialIndex, MaterialList

        materials = MaterialList()
        a = materials.insert(Material.single_color(Color.white()))
        b = materials.insert(Material.single_color(GRAY))
        assert (a, b) == (MaterialIndex(0), MaterialIndex(1))
        assert len(materials) == 2
        assert materials.get(b).diffuse == GRAY
        assert [m.diffuse for m in materials] == [Color.white(), GRAY]

    def test_unknown_handles(self):
        """Test that get returns None and resolve falls back to magenta."""
        from raymarcher.materials.material import (
            DEFAULT_MATERIAL,
            MaterialIndex,
            MaterialList,
        )

        materials = MaterialList()
        assert materials.get(None) is None
        assert materials.get(MaterialIndex(7)) is None
        assert materials.resolve(MaterialIndex(7)) is DEFAULT_MATERIAL
        assert DEFAULT_MATERIAL.diffuse == Color.magenta()

    def test_same_material_shared_by_many_shapes(self):
        """Test that one handle can tag several shapes."""
        from raymarcher.geometry.primitives import Box, Sphere
        from raymarcher.materials.material import Material, MaterialList

        materials = MaterialList()
        red = materials.insert(Material.single_color(Color(1.0, 0.0, 0.0)))
        shape = Sphere(1.0).with_material(red) | Box((1.0, 1.0, 1.0), (5.0, 0.0, 0.0)).with_material(red)
        assert shape.value_at(Point3(0.0, 0.0, 0.0)).material == red
        assert shape.value_at(Point3(5.0, 0.0, 0.0)).material == red


class TestPhong:
    """Tests for Phong shading with soft shadows."""

    def test_light_straight_above(self, settings):
        """Test ambient + diffuse + specular on a lit, unoccluded floor."""
        color = shade_floor(floor_scene_map(), settings)
        assert color.is_close(Color(1.05, 1.05, 1.05), tol=1e-9)

    def test_light_below_surface_contributes_nothing(self, settings):
        """Test that a light behind the surface leaves only ambient."""
        from raymarcher.scene.lights import Light

        scene_map = floor_scene_map(lights=(Light.white(Point3(0.0, -10.0, 0.0)),))
        color = shade_floor(scene_map, settings)
        assert color.is_close(Color(0.05, 0.05, 0.05), tol=1e-12)

    def test_strength_scales_contribution(self, settings):
        """Test that light strength multiplies diffuse and specular."""
        from raymarcher.scene.lights import Light

        scene_map = floor_scene_map(
            lights=(Light.white(Point3(0.0, 10.0, 0.0), strength=0.5),)
        )
        color = shade_floor(scene_map, settings)
        assert color.is_close(Color(0.55, 0.55, 0.55), tol=1e-9)

    def test_occluded_light_leaves_ambient(self, settings):
        """Test that a sphere between the floor and the light blocks it."""
        from raymarcher.geometry.primitives import NegY, Sphere

        scene_map = floor_scene_map(sdf=NegY() | Sphere(1.0, (0.0, 5.0, 0.0)))
        color = shade_floor(scene_map, settings)
        assert color.is_close(Color(0.05, 0.05, 0.05), tol=1e-12)

    def test_lights_add_up(self, settings):
        """Test that two identical lights give twice the direct term."""
        from raymarcher.scene.lights import Light

        light = Light.white(Point3(0.0, 10.0, 0.0))
        color = shade_floor(floor_scene_map(lights=(light, light)), settings)
        assert color.is_close(Color(2.05, 2.05, 2.05), tol=1e-9)

    def test_light_colors_tint_terms(self, settings):
        """Test that diffuse and specular light colors apply separately."""
        from raymarcher.scene.lights import Light

        light = Light(
            Point3(0.0, 10.0, 0.0),
            diffuse=Color(1.0, 0.0, 0.0),
            specular=Color(0.0, 0.0, 1.0),
        )
        color = shade_floor(floor_scene_map(lights=(light,)), settings)
        assert color.is_close(Color(0.55, 0.05, 0.55), tol=1e-9)

    def test_specular_exponent_off_axis(self, settings):
        """Test (r.v)^shininess with the light at 3-4-5 off the normal."""
        from raymarcher.materials.material import Material
        from raymarcher.materials.phong import phong
        from raymarcher.scene.lights import Light

        # l = (0.6, 0.8, 0), r = (-0.6, 0.8, 0), v = (0, 1, 0): l.n = r.v = 0.8
        scene_map = floor_scene_map(lights=(Light.white(Point3(3.0, 4.0, 0.0)),))
        color = phong(
            Material.single_color(GRAY, shininess=4.0),
            Point3(0.0, 0.0, 0.0),
            UP,
            Point3(0.0, 5.0, 0.0),
            scene_map,
            settings,
        )
        expected = 0.05 + 0.5 * 0.8 + 0.5 * 0.8**4
        assert color.is_close(Color(expected, expected, expected), tol=1e-9)

    def test_highlight_facing_away_from_eye_is_diffuse_only(self, settings):
        """Test that r.v <= 0 drops the specular term while l.n > 0 keeps diffuse."""
        from raymarcher.materials.material import Material
        from raymarcher.materials.phong import phong
        from raymarcher.scene.lights import Light

        # r = (-0.6, 0.8, 0) points away from an eye low on the light's side
        scene_map = floor_scene_map(lights=(Light.white(Point3(3.0, 4.0, 0.0)),))
        color = phong(
            Material.single_color(GRAY, shininess=4.0),
            Point3(0.0, 0.0, 0.0),
            UP,
            Point3(5.0, 1.0, 0.0),
            scene_map,
            settings,
        )
        expected = 0.05 + 0.5 * 0.8
        assert color.is_close(Color(expected, expected, expected), tol=1e-9)

    def test_no_lights_is_ambient_only(self, settings):
        """Test a scene with only ambient light."""
        color = shade_floor(floor_scene_map(lights=()), settings)
        assert color.is_close(Color(0.05, 0.05, 0.05), tol=1e-12)

    def test_rejects_non_positive_shadow_hardness(self):
        """Test that penumbra hardness must be positive."""
        from raymarcher.scene.lights import Light

        with pytest.raises(ValueError, match="shadow_hardness"):
            Light.white(Point3(0.0, 1.0, 0.0), shadow_hardness=0.0)


class TestNormalColor:
    """Tests for the debug normal coloring."""

    def test_axis_normals(self):
        """Test that normals map from [-1, 1] into [0, 1]."""
        from raymarcher.materials.phong import normal_color

        assert normal_color(UP) == Color(0.5, 1.0, 0.5)
        assert normal_color(Vec3(0.0, 0.0, -1.0).unit()) == Color(0.5, 0.5, 0.0)

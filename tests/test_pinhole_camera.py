"""Tests for the pinhole camera."""

import math

import pytest

from raymarcher.core.vec import Point3, Vec3


def make_camera(**overrides):
    from raymarcher.camera.pinhole import Camera

    params = dict(
        look_from=Point3(0.0, 0.0, 3.0),
        look_at=Point3(0.0, 0.0, 0.0),
        up=Vec3(0.0, 1.0, 0.0),
        vfov=60.0,
        aspect_ratio=16.0 / 9.0,
    )
    params.update(overrides)
    return Camera.new(**params)


class TestCameraBasis:
    """Tests for the camera's orthonormal frame."""

    def test_basis_is_orthonormal(self):
        """Test that u, v and w are unit length and mutually orthogonal."""
        camera = make_camera(look_from=Point3(2.0, 3.0, 4.0), look_at=Point3(-1.0, 0.5, 0.0))
        for axis in (camera.u, camera.v, camera.w):
            assert axis.length() == pytest.approx(1.0)
        assert camera.u.dot(camera.v) == pytest.approx(0.0, abs=1e-12)
        assert camera.v.dot(camera.w) == pytest.approx(0.0, abs=1e-12)
        assert camera.w.dot(camera.u) == pytest.approx(0.0, abs=1e-12)

    def test_looking_down_negative_z(self):
        """Test the canonical orientation."""
        camera = make_camera()
        assert camera.w.is_close(Vec3(0.0, 0.0, 1.0))
        assert camera.u.is_close(Vec3(1.0, 0.0, 0.0))
        assert camera.v.is_close(Vec3(0.0, 1.0, 0.0))

    def test_viewport_size(self):
        """Test viewport height from vfov and width from the aspect ratio."""
        camera = make_camera(vfov=90.0, aspect_ratio=2.0)
        assert camera.vertical.length() == pytest.approx(2.0)
        assert camera.horizontal.length() == pytest.approx(4.0)

    def test_get_info(self):
        """Test the debugging dictionary."""
        info = make_camera().get_info()
        assert set(info) == {"origin", "u", "v", "w", "horizontal", "vertical", "lower_left"}
        assert info["origin"] == (0.0, 0.0, 3.0)


class TestGetRay:
    """Tests for primary ray generation."""

    def test_center_ray_points_at_target(self):
        """Test that (0.5, 0.5) looks straight at look_at."""
        ray = make_camera().get_ray(0.5, 0.5)
        assert ray.origin == Point3(0.0, 0.0, 3.0)
        assert ray.direction.is_close(Vec3(0.0, 0.0, -1.0), tol=1e-12)

    def test_corner_rays(self):
        """Test that (0, 0) is bottom left and (1, 1) is top right."""
        camera = make_camera()
        bottom_left = camera.get_ray(0.0, 0.0).direction
        top_right = camera.get_ray(1.0, 1.0).direction
        assert bottom_left.x < 0.0 and bottom_left.y < 0.0
        assert top_right.x > 0.0 and top_right.y > 0.0

    def test_vertical_field_of_view(self):
        """Test that top and bottom center rays span vfov."""
        camera = make_camera(vfov=60.0)
        top = camera.get_ray(0.5, 1.0).direction
        bottom = camera.get_ray(0.5, 0.0).direction
        assert math.degrees(math.acos(top.dot(bottom))) == pytest.approx(60.0)

    def test_rays_are_unit_length(self, rng):
        """Test that every generated direction is normalized."""
        camera = make_camera()
        for s, t in rng.uniform(0.0, 1.0, size=(50, 2)):
            assert camera.get_ray(float(s), float(t)).direction.length() == pytest.approx(1.0)


class TestDegenerateCameras:
    """Tests for rejected view parameters."""

    @pytest.mark.parametrize("vfov", [0.0, 180.0, -10.0, 200.0])
    def test_rejects_bad_vfov(self, vfov):
        """Test that vfov must be strictly between 0 and 180 degrees."""
        with pytest.raises(ValueError, match="vfov"):
            make_camera(vfov=vfov)

    def test_rejects_bad_aspect_ratio(self):
        """Test that the aspect ratio must be positive."""
        with pytest.raises(ValueError, match="aspect_ratio"):
            make_camera(aspect_ratio=0.0)

    def test_rejects_coincident_points(self):
        """Test that the camera must not sit on its target."""
        with pytest.raises(ValueError, match="must differ"):
            make_camera(look_at=Point3(0.0, 0.0, 3.0))

    @pytest.mark.parametrize("up", [Vec3(0.0, 0.0, 1.0), Vec3(0.0, 0.0, 0.0)])
    def test_rejects_degenerate_up(self, up):
        """Test that up must not be zero or parallel to the view direction."""
        with pytest.raises(ValueError, match="up vector"):
            make_camera(up=up)


class TestFromConfig:
    """Tests for building a camera from a PinholeCamera record."""

    def test_from_config(self):
        """Test that the record and Camera.new agree."""
        from raymarcher.camera.pinhole import Camera, PinholeCamera

        camera = Camera.from_config(PinholeCamera(lookfrom=(0.0, 0.0, 3.0), lookat=(0.0, 0.0, 0.0)))
        assert camera == make_camera()

    def test_aspect_ratio_override(self):
        """Test that an explicit aspect ratio replaces the record's."""
        from raymarcher.camera.pinhole import Camera, PinholeCamera

        config = PinholeCamera(lookfrom=(0, 0, 3), lookat=(0, 0, 0), aspect_ratio=1.0)
        camera = Camera.from_config(config, aspect_ratio=2.0)
        assert camera.horizontal.length() == pytest.approx(2.0 * camera.vertical.length())

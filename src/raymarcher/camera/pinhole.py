"""Pinhole camera model for perspective projection ray generation.

This module implements a pinhole camera that generates primary rays for rendering.
The camera supports:
- Look-at positioning (lookfrom, lookat, vup)
- Vertical field of view in degrees
- Arbitrary aspect ratios

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points from lookat toward lookfrom (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

Example:
    >>> from raymarcher.camera.pinhole import Camera, PinholeCamera
    >>>
    >>> # Create camera looking at origin from z=3
    >>> camera = Camera.from_config(PinholeCamera(
    ...     lookfrom=(0.0, 0.0, 3.0),
    ...     lookat=(0.0, 0.0, 0.0),
    ...     vup=(0.0, 1.0, 0.0),
    ...     vfov=60.0,
    ...     aspect_ratio=16.0/9.0
    ... ))
    >>>
    >>> # Ray through image center
    >>> ray = camera.get_ray(0.5, 0.5)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from raymarcher.core.ray import Ray
from raymarcher.core.vec import Point3, UnitVec3, Vec3

# =============================================================================
# Camera Configuration
# =============================================================================


@dataclass
class PinholeCamera:
    """Configuration for a pinhole (perspective) camera.

    A pinhole camera produces perfect perspective projection with no
    depth of field effects.

    Attributes:
        lookfrom: Camera position in world space (x, y, z).
        lookat: Point the camera is looking at in world space (x, y, z).
        vup: Up direction vector for camera orientation (typically (0, 1, 0)).
        vfov: Vertical field of view in degrees (typically 40-90).
        aspect_ratio: Width divided by height of the output image.
    """

    lookfrom: tuple[float, float, float]
    lookat: tuple[float, float, float]
    vup: tuple[float, float, float] = (0.0, 1.0, 0.0)
    vfov: float = 60.0
    aspect_ratio: float = 16.0 / 9.0


# =============================================================================
# Camera
# =============================================================================


@dataclass(frozen=True)
class Camera:
    """Precomputed viewport geometry for ray generation.

    The viewport is a virtual image plane at unit distance in front of the
    camera. ``lower_left + s * horizontal + t * vertical`` sweeps it for
    ``s, t`` in [0, 1].
    """

    origin: Point3
    lower_left: Point3
    horizontal: Vec3
    vertical: Vec3
    u: UnitVec3
    v: UnitVec3
    w: UnitVec3

    @classmethod
    def new(
        cls,
        look_from: Point3,
        look_at: Point3,
        up: Vec3,
        vfov: float,
        aspect_ratio: float,
    ) -> Camera:
        """Build a camera from look-at parameters.

        Args:
            look_from: Camera position.
            look_at: Point the camera is aimed at.
            up: Approximate up direction; must not be parallel to the view.
            vfov: Vertical field of view in degrees, in (0, 180).
            aspect_ratio: Viewport width divided by height.

        Raises:
            ValueError: If the view parameters do not define a proper basis.
        """
        if not 0.0 < vfov < 180.0:
            raise ValueError(f"vfov must be in (0, 180) degrees, got {vfov}")
        if not (aspect_ratio > 0.0 and math.isfinite(aspect_ratio)):
            raise ValueError(f"aspect_ratio must be positive and finite, got {aspect_ratio}")

        # Convert FOV from degrees to radians
        theta = math.radians(vfov)
        h = math.tan(theta / 2.0)

        # Viewport dimensions at unit distance
        viewport_height = 2.0 * h
        viewport_width = aspect_ratio * viewport_height

        # w points from lookat toward lookfrom (backward)
        try:
            w = (look_from - look_at).unit()
        except ValueError as e:
            raise ValueError(
                f"look_from and look_at must differ, both are {look_from}"
            ) from e

        # u points right (perpendicular to w and vup)
        try:
            u = up.cross(w).unit()
        except ValueError as e:
            raise ValueError(
                f"up vector {up} is zero or parallel to the view direction"
            ) from e

        # v points up in the camera's frame
        v = w.cross(u).unit()

        horizontal = u * viewport_width
        vertical = v * viewport_height

        # Origin - w (move forward) - horizontal/2 (left) - vertical/2 (down)
        lower_left = look_from - horizontal / 2.0 - vertical / 2.0 - w

        return cls(
            origin=look_from,
            lower_left=lower_left,
            horizontal=horizontal,
            vertical=vertical,
            u=u,
            v=v,
            w=w,
        )

    @classmethod
    def from_config(cls, config: PinholeCamera, aspect_ratio: float | None = None) -> Camera:
        """Build a camera from a PinholeCamera record.

        Args:
            config: The camera configuration.
            aspect_ratio: Overrides ``config.aspect_ratio`` when given, so the
                viewport can follow the output image size.
        """
        return cls.new(
            Point3(*map(float, config.lookfrom)),
            Point3(*map(float, config.lookat)),
            Vec3(*map(float, config.vup)),
            config.vfov,
            config.aspect_ratio if aspect_ratio is None else aspect_ratio,
        )

    def get_ray(self, s: float, t: float) -> Ray:
        """Generate a ray through normalized image coordinates (s, t).

        The coordinates are normalized:
        - s = 0: left edge of image, s = 1: right edge
        - t = 0: bottom edge of image, t = 1: top edge

        Returns:
            A Ray with origin at the camera position and direction toward
            the specified point on the image plane.
        """
        target = self.lower_left + self.horizontal * s + self.vertical * t
        return Ray.towards(self.origin, target - self.origin)

    def get_info(self) -> dict[str, tuple[float, float, float]]:
        """Get camera vectors for debugging.

        Returns:
            Dictionary with origin, u, v, w, horizontal, vertical, lower_left.
        """
        return {
            "origin": tuple(self.origin),
            "u": tuple(self.u),
            "v": tuple(self.v),
            "w": tuple(self.w),
            "horizontal": tuple(self.horizontal),
            "vertical": tuple(self.vertical),
            "lower_left": tuple(self.lower_left),
        }

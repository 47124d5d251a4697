"""Backgrounds: the color seen by rays that hit nothing.

A scene accepts any callable taking a Ray and returning a Color. The classes
here are callable and also expose value_at for symmetry with the distance
fields.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from raymarcher.core.ray import Ray
from raymarcher.core.vec import Color

BackgroundFn = Callable[[Ray], Color]


@dataclass(frozen=True)
class VerticalGradientBackground:
    """Blend from *start* (looking straight down) to *end* (straight up).

    The blend factor is ``0.5 * (direction.y + 1)``.
    """

    start: Color
    end: Color

    def value_at(self, ray: Ray) -> Color:
        t = 0.5 * (ray.direction.y + 1.0)
        return self.start * (1.0 - t) + self.end * t

    def __call__(self, ray: Ray) -> Color:
        return self.value_at(ray)


@dataclass(frozen=True)
class ConstantBackground:
    """The same color in every direction."""

    color: Color

    def value_at(self, ray: Ray) -> Color:
        return self.color

    def __call__(self, ray: Ray) -> Color:
        return self.value_at(ray)


def sky_gradient() -> VerticalGradientBackground:
    """White at the horizon fading to light blue overhead."""
    return VerticalGradientBackground(Color.white(), Color(0.5, 0.7, 1.0))

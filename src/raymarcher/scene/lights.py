"""Light sources for Phong shading."""

from __future__ import annotations

from dataclasses import dataclass

from raymarcher.config import DEFAULT_SHADOW_HARDNESS
from raymarcher.core.vec import Color, Point3


@dataclass(frozen=True)
class AmbientLight:
    """Uniform light reaching every surface regardless of occlusion."""

    color: Color


@dataclass(frozen=True)
class Light:
    """A point light.

    Attributes:
        location: Position of the light in world space.
        diffuse: Color used for the diffuse term.
        specular: Color used for the specular highlight.
        strength: Multiplier applied to this light's contribution.
        shadow_hardness: Penumbra sharpness passed to the soft shadow march.
    """

    location: Point3
    diffuse: Color
    specular: Color
    strength: float = 1.0
    shadow_hardness: float = DEFAULT_SHADOW_HARDNESS

    def __post_init__(self) -> None:
        if self.shadow_hardness <= 0.0:
            raise ValueError(f"shadow_hardness must be positive, got {self.shadow_hardness}")

    @classmethod
    def white(
        cls,
        location: Point3,
        strength: float = 1.0,
        shadow_hardness: float = DEFAULT_SHADOW_HARDNESS,
    ) -> Light:
        """A light with white diffuse and specular colors."""
        return cls(location, Color.white(), Color.white(), strength, shadow_hardness)

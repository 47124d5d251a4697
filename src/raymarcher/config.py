"""Render configuration: image size, marching tolerances and debug overrides.

All numerical tolerances used by the marcher and the shading code live here
as named, independently tunable settings rather than literals scattered
through the engine.

Example:
    >>> from raymarcher.config import Config, ImageSettings, RenderSettings
    >>> config = Config(
    ...     image=ImageSettings(width=320, height=180),
    ...     render=RenderSettings(max_light_recursions=2),
    ... )
    >>> config.aspect_ratio
    1.7777777777777777
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum

# =============================================================================
# Rendering Constants
# =============================================================================

# Ray parameter where marching starts (keeps secondary rays off their surface)
T_MIN = 0.001

# Marching stops and reports a miss beyond this distance
T_MAX = 1000.0

# A sample closer than this to a surface counts as a hit
EPSILON = 1e-5

# Step budget per ray; running out counts as a miss
MAX_MARCHING_STEPS = 1000

# Reflection bounce cap
MAX_LIGHT_RECURSIONS = 3

# Offset for the central-difference normal estimate
NORMAL_EPSILON = 1e-5

# Shadow rays stop short of the light by a factor of (1 - SHADOW_CORRECTION * epsilon)
SHADOW_CORRECTION = 3.0

# Default penumbra sharpness for point lights
DEFAULT_SHADOW_HARDNESS = 16.0


class MaterialOverride(IntEnum):
    """Debug shading modes that bypass material lookup."""

    NORMAL = 0


# =============================================================================
# Settings
# =============================================================================


@dataclass(frozen=True)
class ImageSettings:
    """Output image dimensions in pixels.

    Raises:
        ValueError: If either dimension is smaller than 1.
    """

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError(
                f"Image dimensions must be at least 1x1, got {self.width}x{self.height}"
            )

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


@dataclass(frozen=True)
class RenderSettings:
    """Settings for marching, shadowing and shading.

    Attributes:
        t_min: Ray parameter at which marching starts.
        t_max: Distance beyond which a ray is considered to have missed.
        epsilon: Hit threshold for the distance returned by the field.
        max_marching_steps: Maximum field evaluations per ray.
        max_light_recursions: Maximum number of reflection bounces.
        material_override: Optional debug mode replacing material shading.
        normal_epsilon: Offset used by the finite-difference normal estimate.
        shadow_correction: Shadow rays stop ``shadow_correction * epsilon``
            (relative) short of the light so the light-facing surface does
            not occlude itself.

    Raises:
        ValueError: If any tolerance or budget is out of range.
    """

    t_min: float = T_MIN
    t_max: float = T_MAX
    epsilon: float = EPSILON
    max_marching_steps: int = MAX_MARCHING_STEPS
    max_light_recursions: int = MAX_LIGHT_RECURSIONS
    material_override: MaterialOverride | None = None
    normal_epsilon: float = NORMAL_EPSILON
    shadow_correction: float = SHADOW_CORRECTION

    def __post_init__(self) -> None:
        if not (self.epsilon > 0.0 and math.isfinite(self.epsilon)):
            raise ValueError(f"epsilon must be a positive finite number, got {self.epsilon}")
        if self.t_min < 0.0:
            raise ValueError(f"t_min must be non-negative, got {self.t_min}")
        if not self.t_max > self.t_min:
            raise ValueError(
                f"t_max ({self.t_max}) must be greater than t_min ({self.t_min})"
            )
        if self.max_marching_steps < 1:
            raise ValueError(
                f"max_marching_steps must be at least 1, got {self.max_marching_steps}"
            )
        if self.max_light_recursions < 0:
            raise ValueError(
                f"max_light_recursions must be non-negative, got {self.max_light_recursions}"
            )
        if not self.normal_epsilon > 0.0:
            raise ValueError(f"normal_epsilon must be positive, got {self.normal_epsilon}")
        if self.shadow_correction < 0.0:
            raise ValueError(
                f"shadow_correction must be non-negative, got {self.shadow_correction}"
            )


@dataclass(frozen=True)
class Config:
    """Everything the engine needs besides the scene itself."""

    image: ImageSettings
    render: RenderSettings = field(default_factory=RenderSettings)

    @property
    def aspect_ratio(self) -> float:
        return self.image.aspect_ratio

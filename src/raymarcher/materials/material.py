"""Material records and the material registry.

Shapes do not own their materials. A distance field node carries an opaque
MaterialIndex, and the renderer resolves it against a MaterialList when a
hit needs shading. The same material can therefore be reused by any number
of shapes without shared ownership between geometry and materials.

Example:
    >>> from raymarcher.core.vec import Color
    >>> from raymarcher.materials.material import Material, MaterialList
    >>> materials = MaterialList()
    >>> red = materials.insert(Material.single_color(Color(0.9, 0.1, 0.1), shininess=5.0))
    >>> materials.get(red).shininess
    5.0
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from raymarcher.core.vec import Color


@dataclass(frozen=True, slots=True)
class MaterialIndex:
    """Opaque handle to a material stored in a MaterialList."""

    index: int


@dataclass(frozen=True)
class Material:
    """Phong material properties.

    Attributes:
        ambient: Reflectance for the ambient light term.
        diffuse: Reflectance for the Lambertian term.
        specular: Reflectance for the specular highlight.
        shininess: Specular exponent. Larger values give tighter highlights.
        reflectivity: Fraction of mirror-reflected light added on top of the
            local shading, in [0, 1]. 0 disables reflection rays.

    Raises:
        ValueError: If reflectivity is outside [0, 1] or shininess is negative.
    """

    ambient: Color
    diffuse: Color
    specular: Color
    shininess: float = 1.0
    reflectivity: float = 0.0

    def __post_init__(self) -> None:
        if self.reflectivity < 0.0 or self.reflectivity > 1.0:
            raise ValueError(
                f"Reflectivity = {self.reflectivity} is outside [0, 1]. "
                "Reflectivity must be between 0 (matte) and 1 (perfect mirror)."
            )
        if self.shininess < 0.0:
            raise ValueError(f"Shininess must be non-negative, got {self.shininess}")

    @classmethod
    def single_color(
        cls,
        color: Color,
        shininess: float = 1.0,
        reflectivity: float = 0.0,
    ) -> Material:
        """Material using the same color for all three reflectances."""
        return cls(
            ambient=color,
            diffuse=color,
            specular=color,
            shininess=shininess,
            reflectivity=reflectivity,
        )


# Hits without a resolvable material are painted magenta so that scene
# construction mistakes are obvious in the output.
DEFAULT_MATERIAL = Material.single_color(Color.magenta(), shininess=1.0)


class MaterialList:
    """Insertion-ordered, append-only material registry."""

    def __init__(self) -> None:
        self._materials: list[Material] = []

    def insert(self, material: Material) -> MaterialIndex:
        """Append a material and return its handle."""
        self._materials.append(material)
        return MaterialIndex(len(self._materials) - 1)

    def get(self, index: MaterialIndex | None) -> Material | None:
        """Look up a material, returning None for missing or unknown handles."""
        if index is None or not 0 <= index.index < len(self._materials):
            return None
        return self._materials[index.index]

    def resolve(self, index: MaterialIndex | None) -> Material:
        """Look up a material, falling back to DEFAULT_MATERIAL."""
        material = self.get(index)
        return DEFAULT_MATERIAL if material is None else material

    def copy(self) -> MaterialList:
        """Return an independent registry holding the same materials."""
        other = MaterialList()
        other._materials = list(self._materials)
        return other

    def __len__(self) -> int:
        return len(self._materials)

    def __iter__(self) -> Iterator[Material]:
        return iter(self._materials)

    def __repr__(self) -> str:
        return f"MaterialList(count={len(self)})"

"""Materials module for Phong shading.

Components:
    material: Material records, MaterialIndex handles and the MaterialList registry
    phong: Phong evaluator with soft shadows

Shapes carry only a MaterialIndex. The renderer resolves it against the
scene's MaterialList, falling back to DEFAULT_MATERIAL (magenta) when the
tag is missing or unknown.
"""

from .material import DEFAULT_MATERIAL, Material, MaterialIndex, MaterialList
from .phong import light_contribution, normal_color, phong

__all__ = [
    "Material",
    "MaterialIndex",
    "MaterialList",
    "DEFAULT_MATERIAL",
    "phong",
    "light_contribution",
    "normal_color",
]

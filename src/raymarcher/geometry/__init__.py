"""Geometry module: signed distance fields and their algebra.

Components:
    sdf: Sdf base class, SdfValue, normal estimation and WithMaterial
    primitives: Sphere, Box, Cube, HalfSpace, NegY and Arbitrary
    combinators: Union, Intersection and Difference
    positioners: Translate, ScaleUniform and Rotate

Every node answers value_at(point) with an SdfValue (distance, material).
Nodes compose with operators and fluent methods:

    shape = (Sphere(1.0) | Cube(1.5)) - Sphere(0.5).translate((0.0, 1.0, 0.0))
"""

from .combinators import Difference, Intersection, Union
from .positioners import Rotate, ScaleUniform, Translate
from .primitives import (
    UNIT_CUBE,
    UNIT_SPHERE,
    Arbitrary,
    Box,
    Cube,
    HalfSpace,
    NegY,
    Sphere,
    sine_floor,
)
from .sdf import Sdf, SdfValue, WithMaterial

__all__ = [
    "Sdf",
    "SdfValue",
    "WithMaterial",
    "Sphere",
    "Box",
    "Cube",
    "HalfSpace",
    "NegY",
    "Arbitrary",
    "UNIT_SPHERE",
    "UNIT_CUBE",
    "sine_floor",
    "Union",
    "Intersection",
    "Difference",
    "Translate",
    "ScaleUniform",
    "Rotate",
]

"""Boolean combinations of distance fields.

The material tag follows the child that decides the distance, so a union of
a red sphere and a blue box is red where the sphere is the nearer surface
and blue elsewhere.
"""

from __future__ import annotations

from functools import reduce

from raymarcher.core.vec import Point3
from raymarcher.geometry.sdf import Sdf, SdfValue


def _nearer(a: SdfValue, b: SdfValue) -> SdfValue:
    return a if a.distance < b.distance else b


def _farther(a: SdfValue, b: SdfValue) -> SdfValue:
    return a if a.distance > b.distance else b


class _Combinator(Sdf):
    """A node over two or more children."""

    def __init__(self, *children: Sdf) -> None:
        if len(children) < 2:
            raise ValueError(
                f"{type(self).__name__} needs at least two children, got {len(children)}"
            )
        self.children = children

    def __repr__(self) -> str:
        inner = ", ".join(repr(c) for c in self.children)
        return f"{type(self).__name__}({inner})"


class Union(_Combinator):
    """Points inside any child: the minimum distance wins.

    On a tie the later child wins.
    """

    def value_at(self, p: Point3) -> SdfValue:
        return reduce(_nearer, (c.value_at(p) for c in self.children))


class Intersection(_Combinator):
    """Points inside every child: the maximum distance wins.

    On a tie the later child wins.
    """

    def value_at(self, p: Point3) -> SdfValue:
        return reduce(_farther, (c.value_at(p) for c in self.children))


class Difference(Sdf):
    """Points inside *base* but outside *cutter*.

    Where the cutter decides the distance, the surface is the inside of the
    cutter, so the cutter's material shows on the carved face.
    """

    def __init__(self, base: Sdf, cutter: Sdf) -> None:
        self.base = base
        self.cutter = cutter

    def value_at(self, p: Point3) -> SdfValue:
        a = self.base.value_at(p)
        b = self.cutter.value_at(p)
        if a.distance > -b.distance:
            return a
        return SdfValue(-b.distance, b.material)

    def __repr__(self) -> str:
        return f"Difference({self.base!r}, {self.cutter!r})"

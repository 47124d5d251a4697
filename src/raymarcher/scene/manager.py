"""Scene manager for assembling shapes, materials, lights and a camera.

This module provides a high-level scene building API on top of the engine's
immutable Scene. The SceneManager collects:
- Materials in a MaterialList, optionally under a name
- Point lights and the ambient light
- The root distance field and the background
- A PinholeCamera configuration

and turns them into a Scene with build(). Scenes can also be described as
plain data (for example JSON files), where shapes are nested dictionaries:

    {"type": "union", "children": [
        {"type": "sphere", "radius": 1.0, "material": "white"},
        {"type": "translate", "offset": [0, -1, 0],
         "child": {"type": "half_space", "normal": [0, 1, 0]}}
    ]}

Example:
    >>> from raymarcher.camera.pinhole import PinholeCamera
    >>> from raymarcher.geometry.primitives import Sphere
    >>> from raymarcher.scene.manager import SceneManager
    >>> manager = SceneManager()
    >>> red = manager.add_material((0.9, 0.1, 0.1), shininess=5.0, name="red")
    >>> manager.add_light(location=(0.0, 5.0, 5.0))
    0
    >>> manager.set_shape(Sphere(1.0).with_material(red))
    >>> manager.set_camera(PinholeCamera(lookfrom=(0.0, 0.0, 4.0), lookat=(0.0, 0.0, 0.0)))
    >>> scene = manager.build(aspect_ratio=16.0 / 9.0)
"""

from __future__ import annotations

import json
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from os import PathLike
from typing import Any

from raymarcher.camera.pinhole import Camera, PinholeCamera
from raymarcher.config import DEFAULT_SHADOW_HARDNESS
from raymarcher.core.vec import Color, Point3, Vec3
from raymarcher.geometry.combinators import Difference, Intersection, Union
from raymarcher.geometry.positioners import Rotate, ScaleUniform, Translate
from raymarcher.geometry.primitives import (
    Arbitrary,
    Box,
    Cube,
    HalfSpace,
    Sphere,
    sine_floor,
)
from raymarcher.geometry.sdf import Sdf, WithMaterial, as_point3, as_vec3
from raymarcher.materials.material import Material, MaterialIndex, MaterialList
from raymarcher.scene.background import (
    BackgroundFn,
    ConstantBackground,
    VerticalGradientBackground,
    sky_gradient,
)
from raymarcher.scene.lights import AmbientLight, Light
from raymarcher.scene.scene import Scene, SceneMap

RGB = tuple[float, float, float]

DEFAULT_AMBIENT = (0.5, 0.5, 0.5)


def _color(value: Color | Sequence[float]) -> Color:
    if isinstance(value, Color):
        return value
    return Color.from_vec(as_vec3(value))


def _vec(value: Sequence[float]) -> Vec3:
    return as_vec3(value)


def _point(value: Point3 | Sequence[float]) -> Point3:
    return as_point3(value)


@dataclass
class MaterialInfo:
    """Information about a registered material.

    Attributes:
        index: The handle returned by add_material.
        name: Optional name used by data-driven scenes.
        material: The material itself.
    """

    index: MaterialIndex
    name: str | None
    material: Material


@dataclass
class SceneConfig:
    """Plain-data description of a scene.

    Attributes:
        materials: Material configurations. Each has an optional "name" and
            either "color" or "ambient"/"diffuse"/"specular", plus optional
            "shininess" and "reflectivity".
        lights: Light configurations with "location" and optional
            "diffuse", "specular", "strength" and "shadow_hardness".
        ambient_light: RGB ambient light color.
        background: {"type": "gradient", "start": ..., "end": ...} or
            {"type": "constant", "color": ...}.
        camera: PinholeCamera fields ("lookfrom", "lookat", "vup", "vfov").
        shape: Nested shape description (see build_shape).
    """

    materials: list[dict[str, Any]] = field(default_factory=list)
    lights: list[dict[str, Any]] = field(default_factory=list)
    ambient_light: list[float] | None = None
    background: dict[str, Any] | None = None
    camera: dict[str, Any] | None = None
    shape: dict[str, Any] | None = None


class SceneManager:
    """Mutable builder producing immutable Scenes.

    Attributes:
        materials: The material registry shared by every built scene.
        material_infos: List of MaterialInfo for all registered materials.
        lights: The point lights added so far.

    Example:
        >>> manager = SceneManager()
        >>> white = manager.add_material((0.9, 0.9, 0.9), shininess=10.0)
        >>> mirror = manager.add_material((0.2, 0.2, 0.2), reflectivity=0.8)
        >>> manager.set_ambient_light((0.3, 0.3, 0.3))
    """

    def __init__(self) -> None:
        """Initialize an empty scene."""
        self.materials = MaterialList()
        self.material_infos: list[MaterialInfo] = []
        self.lights: list[Light] = []
        self._names: dict[str, MaterialIndex] = {}
        self._clear_all()

    def _clear_all(self) -> None:
        self.materials = MaterialList()
        self.material_infos.clear()
        self.lights.clear()
        self._names.clear()
        self.ambient_light = AmbientLight(_color(DEFAULT_AMBIENT))
        self.background: BackgroundFn = sky_gradient()
        self.shape: Sdf | None = None
        self.camera: PinholeCamera | None = None

    def clear(self) -> None:
        """Clear the entire scene (materials, lights, shape and camera)."""
        self._clear_all()

    # =========================================================================
    # Material Management
    # =========================================================================

    def add_material(
        self,
        color: Color | Sequence[float] | None = None,
        *,
        ambient: Color | Sequence[float] | None = None,
        diffuse: Color | Sequence[float] | None = None,
        specular: Color | Sequence[float] | None = None,
        shininess: float = 1.0,
        reflectivity: float = 0.0,
        name: str | None = None,
    ) -> MaterialIndex:
        """Add a Phong material to the scene.

        Args:
            color: Reflectance used for any of ambient, diffuse and specular
                that is not given explicitly.
            ambient: Reflectance for the ambient term.
            diffuse: Reflectance for the diffuse term.
            specular: Reflectance for the specular term.
            shininess: Specular exponent.
            reflectivity: Mirror reflection fraction in [0, 1].
            name: Optional name for lookup from scene descriptions.

        Returns:
            The handle of the new material.

        Raises:
            ValueError: If a reflectance is missing, if the material
                parameters are invalid, or if the name is already taken.
        """
        if name is not None and name in self._names:
            raise ValueError(f"Material name '{name}' is already in use")

        def pick(value: Color | Sequence[float] | None, term: str) -> Color:
            chosen = value if value is not None else color
            if chosen is None:
                raise ValueError(f"Material needs a {term} color (or a shared color)")
            return _color(chosen)

        material = Material(
            ambient=pick(ambient, "ambient"),
            diffuse=pick(diffuse, "diffuse"),
            specular=pick(specular, "specular"),
            shininess=shininess,
            reflectivity=reflectivity,
        )
        index = self.materials.insert(material)
        self.material_infos.append(MaterialInfo(index=index, name=name, material=material))
        if name is not None:
            self._names[name] = index
        return index

    def get_material_count(self) -> int:
        """Get the total number of registered materials."""
        return len(self.materials)

    def get_material_index(self, name: str) -> MaterialIndex:
        """Look up a material by name.

        Raises:
            KeyError: If no material has that name.
        """
        try:
            return self._names[name]
        except KeyError:
            raise KeyError(f"Unknown material name: {name}") from None

    def resolve_material(self, ref: str | int) -> MaterialIndex:
        """Turn a material name or numeric index into a MaterialIndex.

        Raises:
            ValueError: If the reference does not match a registered material.
        """
        if isinstance(ref, str):
            if ref not in self._names:
                raise ValueError(f"Unknown material name: {ref}")
            return self._names[ref]
        if isinstance(ref, int) and not isinstance(ref, bool) and 0 <= ref < len(self.materials):
            return MaterialIndex(ref)
        raise ValueError(f"Invalid material reference: {ref!r}")

    # =========================================================================
    # Lights, Background, Shape and Camera
    # =========================================================================

    def add_light(
        self,
        location: Point3 | Sequence[float],
        diffuse: Color | Sequence[float] = (1.0, 1.0, 1.0),
        specular: Color | Sequence[float] = (1.0, 1.0, 1.0),
        strength: float = 1.0,
        shadow_hardness: float = DEFAULT_SHADOW_HARDNESS,
    ) -> int:
        """Add a point light.

        Returns:
            The index of the light in ``self.lights``.
        """
        self.lights.append(
            Light(
                location=_point(location),
                diffuse=_color(diffuse),
                specular=_color(specular),
                strength=strength,
                shadow_hardness=shadow_hardness,
            )
        )
        return len(self.lights) - 1

    def set_ambient_light(self, color: Color | Sequence[float]) -> None:
        self.ambient_light = AmbientLight(_color(color))

    def set_background(self, background: BackgroundFn) -> None:
        """Set the background: any callable mapping a Ray to a Color."""
        if not callable(background):
            raise TypeError(f"Background must be callable, got {type(background).__name__}")
        self.background = background

    def set_shape(self, shape: Sdf) -> None:
        """Set the root distance field of the scene."""
        self.shape = shape

    def set_camera(self, camera: PinholeCamera) -> None:
        self.camera = camera

    def build(self, aspect_ratio: float | None = None) -> Scene:
        """Assemble an immutable Scene.

        The scene gets its own copy of the material registry, so materials
        added afterwards do not reach scenes that were already built.

        Args:
            aspect_ratio: Overrides the camera's aspect ratio, typically with
                the output image's width / height.

        Raises:
            RuntimeError: If no shape or no camera has been set.
            ValueError: If the camera parameters are degenerate.
        """
        if self.shape is None:
            raise RuntimeError("Scene has no shape, call set_shape() before build()")
        if self.camera is None:
            raise RuntimeError("Scene has no camera, call set_camera() before build()")
        scene_map = SceneMap(
            sdf=self.shape,
            materials=self.materials.copy(),
            ambient_light=self.ambient_light,
            lights=tuple(self.lights),
        )
        return Scene(
            camera=Camera.from_config(self.camera, aspect_ratio),
            scene_map=scene_map,
            background=self.background,
        )

    # =========================================================================
    # Data-driven Scenes
    # =========================================================================

    def build_shape(self, node: dict[str, Any]) -> Sdf:
        """Build a distance field from a nested shape description.

        Supported node types and their keys:
            sphere: radius (1.0), center ([0, 0, 0])
            box: half_extents, center ([0, 0, 0])
            cube: side (2.0), center ([0, 0, 0])
            half_space: normal ([0, 1, 0]), offset (0.0)
            sine_floor: no keys
            union, intersection: children (two or more)
            difference: base, cutter
            translate: offset, child
            scale: factor, child
            rotate: angle_degrees, axis, child
            material: material (name or index), child

        Any node may also carry a "material" key, which tags the node.

        Raises:
            ValueError: On an unknown type, a missing key or an unknown material.
        """
        if not isinstance(node, dict):
            raise ValueError(f"Shape node must be a mapping, got {type(node).__name__}")
        kind = str(node.get("type", "")).lower()
        builder = self._shape_builders().get(kind)
        if builder is None:
            raise ValueError(f"Unknown shape type: {kind!r}")
        try:
            shape = builder(node)
        except KeyError as e:
            raise ValueError(f"Shape of type {kind!r} is missing key {e}") from e
        except TypeError as e:
            raise ValueError(f"Shape of type {kind!r} has a malformed value: {e}") from e
        if kind != "material" and "material" in node:
            shape = WithMaterial(shape, self.resolve_material(node["material"]))
        return shape

    def _shape_builders(self) -> dict[str, Callable[[dict[str, Any]], Sdf]]:
        return {
            "sphere": lambda n: Sphere(n.get("radius", 1.0), _point(n.get("center", (0, 0, 0)))),
            "box": lambda n: Box(_vec(n["half_extents"]), _point(n.get("center", (0, 0, 0)))),
            "cube": lambda n: Cube(n.get("side", 2.0), _point(n.get("center", (0, 0, 0)))),
            "half_space": lambda n: HalfSpace(_vec(n.get("normal", (0, 1, 0))), n.get("offset", 0.0)),
            "sine_floor": lambda n: Arbitrary(sine_floor),
            "union": lambda n: Union(*(self.build_shape(c) for c in n["children"])),
            "intersection": lambda n: Intersection(*(self.build_shape(c) for c in n["children"])),
            "difference": lambda n: Difference(self.build_shape(n["base"]), self.build_shape(n["cutter"])),
            "translate": lambda n: Translate(self.build_shape(n["child"]), _vec(n["offset"])),
            "scale": lambda n: ScaleUniform(self.build_shape(n["child"]), float(n["factor"])),
            "rotate": lambda n: Rotate.degrees(
                self.build_shape(n["child"]), float(n["angle_degrees"]), _vec(n["axis"])
            ),
            "material": lambda n: WithMaterial(
                self.build_shape(n["child"]), self.resolve_material(n["material"])
            ),
        }

    def from_config(self, config: SceneConfig) -> None:
        """Load a scene from a configuration object.

        Clears the current scene and loads the configuration. Materials are
        loaded first so that shapes can refer to them.

        Raises:
            ValueError: If the configuration contains invalid data.
        """
        self.clear()

        for mat_config in config.materials:
            self.add_material(
                mat_config.get("color"),
                ambient=mat_config.get("ambient"),
                diffuse=mat_config.get("diffuse"),
                specular=mat_config.get("specular"),
                shininess=mat_config.get("shininess", 1.0),
                reflectivity=mat_config.get("reflectivity", 0.0),
                name=mat_config.get("name"),
            )

        for light_config in config.lights:
            if "location" not in light_config:
                raise ValueError(f"Light is missing 'location': {light_config}")
            color = light_config.get("color", (1.0, 1.0, 1.0))
            self.add_light(
                light_config["location"],
                diffuse=light_config.get("diffuse", color),
                specular=light_config.get("specular", color),
                strength=light_config.get("strength", 1.0),
                shadow_hardness=light_config.get("shadow_hardness", DEFAULT_SHADOW_HARDNESS),
            )

        if config.ambient_light is not None:
            self.set_ambient_light(config.ambient_light)

        if config.background is not None:
            self.set_background(_background_from_dict(config.background))

        if config.camera is not None:
            cam = config.camera
            try:
                self.set_camera(
                    PinholeCamera(
                        lookfrom=tuple(cam["lookfrom"]),
                        lookat=tuple(cam["lookat"]),
                        vup=tuple(cam.get("vup", (0.0, 1.0, 0.0))),
                        vfov=float(cam.get("vfov", 60.0)),
                        aspect_ratio=float(cam.get("aspect_ratio", 16.0 / 9.0)),
                    )
                )
            except KeyError as e:
                raise ValueError(f"Camera is missing key {e}") from e

        if config.shape is not None:
            self.set_shape(self.build_shape(config.shape))

    def from_dict(self, data: dict[str, Any]) -> None:
        """Load a scene from a dictionary (for example parsed JSON).

        Args:
            data: Dictionary with 'materials', 'lights', 'ambient_light',
                'background', 'camera' and 'shape' keys, all optional.
        """
        config = SceneConfig(
            materials=data.get("materials", []),
            lights=data.get("lights", []),
            ambient_light=data.get("ambient_light"),
            background=data.get("background"),
            camera=data.get("camera"),
            shape=data.get("shape"),
        )
        self.from_config(config)

    def __repr__(self) -> str:
        return (
            f"SceneManager(materials={len(self.materials)}, lights={len(self.lights)}, "
            f"shape={'set' if self.shape is not None else 'unset'})"
        )


def _background_from_dict(data: dict[str, Any]) -> BackgroundFn:
    kind = str(data.get("type", "")).lower()
    if kind == "gradient":
        return VerticalGradientBackground(
            _color(data.get("start", (1.0, 1.0, 1.0))),
            _color(data.get("end", (0.5, 0.7, 1.0))),
        )
    if kind == "constant":
        return ConstantBackground(_color(data.get("color", (0.0, 0.0, 0.0))))
    raise ValueError(f"Unknown background type: {kind!r}")


def load_scene_file(path: str | PathLike[str]) -> SceneManager:
    """Read a JSON scene description into a new SceneManager."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    manager = SceneManager()
    manager.from_dict(data)
    return manager

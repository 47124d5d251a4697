"""Scene module for scene containers and scene construction.

Components:
    lights: AmbientLight and point Light
    background: Vertical gradient and constant backgrounds
    scene: SceneMap and Scene containers read by the renderer
    manager: SceneManager builder and JSON scene loading
    demo: The demo scene (red cube, sphere cap, wavy floor)
"""

from .background import ConstantBackground, VerticalGradientBackground, sky_gradient
from .demo import DemoSceneParams, create_demo_manager, create_demo_scene
from .lights import AmbientLight, Light
from .manager import MaterialInfo, SceneConfig, SceneManager, load_scene_file
from .scene import Scene, SceneMap

__all__ = [
    "AmbientLight",
    "Light",
    "VerticalGradientBackground",
    "ConstantBackground",
    "sky_gradient",
    "Scene",
    "SceneMap",
    "SceneManager",
    "SceneConfig",
    "MaterialInfo",
    "load_scene_file",
    "DemoSceneParams",
    "create_demo_manager",
    "create_demo_scene",
]

"""
Demo Scenes

Scenes used by the command line demos: every primitive, a point cloud and
a text label, plus the animations that drive them.
"""

import math
import time
from typing import Callable, List, Optional, Tuple

import numpy as np

from meshcat_client.constants import DemoConstants
from meshcat_client.protocol.properties import Property
from meshcat_client.scene import transforms
from meshcat_client.scene.geometry import (
    BoxGeometry,
    BufferGeometry,
    CircleGeometry,
    ConeGeometry,
    CylinderGeometry,
    DodecahedronGeometry,
    Geometry,
    GeometryKind,
    IcosahedronGeometry,
    OctahedronGeometry,
    PlaneGeometry,
    RingGeometry,
    SphereGeometry,
    TetrahedronGeometry,
    TorusGeometry,
)
from meshcat_client.scene.material import Material
from meshcat_client.scene.objects import LumpedObject, Object, ObjectType
from meshcat_client.utils.meshes import scene_text

FrameCallback = Callable[[int, int], None]


def point_cloud(count: int = DemoConstants.POINT_CLOUD_SIZE, seed: Optional[int] = None) -> LumpedObject:
    """Random points in the unit cube, colored by position."""
    rng = np.random.default_rng(seed)
    points = rng.random((3, count))
    return LumpedObject(
        geometries=[Geometry(BufferGeometry.from_points(points, colors=points))],
        material=Material.points(DemoConstants.POINT_SIZE, vertex_colors=True),
        obj=Object(origin=transforms.translation(2.0, -2.0, 0.0), object_type=ObjectType.POINTS),
    )


def _primitive(kind: GeometryKind, xyz: Tuple[float, float, float], color: Optional[int] = None) -> LumpedObject:
    material = Material(color=color) if color is not None else Material()
    return LumpedObject(
        geometries=[Geometry(kind)],
        material=material,
        obj=Object(origin=transforms.translation(*xyz)),
    )


def primitives() -> List[Tuple[str, LumpedObject]]:
    """One object per primitive geometry, laid out on the ground plane."""
    return [
        ("/torus", _primitive(TorusGeometry(radius=0.5, tube=0.2), (0.0, 2.0, 0.0), 0x00ff00)),
        ("/tetrahedron", _primitive(TetrahedronGeometry(radius=0.5), (1.0, 0.0, 0.0), 0xff0000)),
        ("/ring", _primitive(RingGeometry(inner_radius=0.5, outer_radius=1.0), (2.0, 2.0, 0.0), 0x0000ff)),
        ("/plane", _primitive(PlaneGeometry(width=0.25, height=0.25), (2.0, 2.0, 0.0))),
        ("/octahedron", _primitive(OctahedronGeometry(radius=0.5), (-1.0, -1.0, 0.0))),
        ("/icosahedron", _primitive(IcosahedronGeometry(radius=0.5), (-2.0, -2.0, 0.0))),
        ("/dodecahedron", _primitive(DodecahedronGeometry(radius=0.5), (-3.0, -3.0, 0.0))),
        ("/cylinder", _primitive(
            CylinderGeometry(radius_top=0.5, radius_bottom=0.5, height=1.0), (0.0, -1.0, 0.0), 0x00ffff)),
        ("/circle", _primitive(CircleGeometry(radius=0.5), (0.0, -2.0, 0.0))),
        ("/cone", _primitive(ConeGeometry(radius=0.5, height=1.0), (0.0, -3.0, 0.0), 0x00ffff)),
        ("/sphere", _primitive(
            SphereGeometry(radius=0.5, width_segments=12, height_segments=12), (-2.0, 2.0, 0.0), 0x0000ff)),
        ("/box", _primitive(BoxGeometry(width=0.5, height=0.5, depth=0.5), (0.0, 1.0, 0.0), 0xff00ff)),
    ]


def demo_scene(point_count: int = DemoConstants.POINT_CLOUD_SIZE) -> List[Tuple[str, LumpedObject]]:
    """Everything the 'demo' command publishes, in publish order."""
    scene = [
        ("/boxes", _primitive(BoxGeometry(width=0.3, height=0.3, depth=0.3), (0.0, 0.0, 0.0), 0xffaa00)),
        ("/boxes/child", _primitive(BoxGeometry(width=0.2, height=0.2, depth=0.2), (0.0, 0.0, 0.0), 0x00aaff)),
        ("/point_cloud", point_cloud(point_count)),
        ("/text", scene_text("Hello, meshcat!")),
    ]
    scene.extend(primitives())
    return scene


def _sleep(delay: float):
    if delay > 0:
        time.sleep(delay)


def run_demo(
    meshcat,
    frames: int = DemoConstants.DEFAULT_FRAMES,
    frame_delay: float = DemoConstants.DEFAULT_FRAME_DELAY,
    point_count: int = DemoConstants.POINT_CLOUD_SIZE,
    on_frame: Optional[FrameCallback] = None,
):
    """
    Publish the demo scene and spin the nested boxes.

    The child box is offset from and rotates with its parent, so it orbits.
    """
    for path, lumped_object in demo_scene(point_count):
        meshcat.set_object(path, lumped_object)
    meshcat.set_transform("/boxes/child", transforms.translation(1.0, 1.0, 0.0))

    angle = 0.0
    for frame in range(frames):
        angle += DemoConstants.DELTA_ANGLE
        meshcat.set_transform("/boxes", transforms.isometry(rpy=(0.0, 0.0, angle)))
        meshcat.set_transform("/boxes/child", transforms.isometry((1.0, 1.0, 0.0), (0.0, 0.0, angle)))
        if on_frame:
            on_frame(frame + 1, frames)
        _sleep(frame_delay)


def run_properties_demo(
    meshcat,
    frames: int = DemoConstants.DEFAULT_FRAMES,
    frame_delay: float = DemoConstants.DEFAULT_FRAME_DELAY,
    on_frame: Optional[FrameCallback] = None,
):
    """Pulse a torus through scale, position, rotation and color properties."""
    meshcat.set_object("/torus", _primitive(TorusGeometry(radius=0.5, tube=0.2), (0.0, 0.0, 0.0), 0x00ff00))

    meshcat.set_property("/Axes", Property.visible(False))
    meshcat.set_property("/Background", Property.top_color((0.5, 0.8, 0.5)))
    meshcat.set_property("/Background", Property.bottom_color((0.6, 0.0, 0.5)))

    angle = 0.0
    for frame in range(frames):
        angle += DemoConstants.DELTA_ANGLE
        pulse = 1.0 + math.sin(angle) ** 2
        meshcat.set_property("/torus", Property.scale((pulse, pulse, pulse)))
        meshcat.set_property("/torus", Property.position((0.0, 0.0, math.sin(angle))))
        meshcat.set_property("/torus", Property.quaternion(transforms.quaternion_from_euler(0.0, angle, 0.0)))
        meshcat.set_property("/torus", Property.color((0.5, 0.8, 0.5, 0.5)))
        if on_frame:
            on_frame(frame + 1, frames)
        _sleep(frame_delay)

"""
URDF Publishing

Reads a robot description and mirrors its visual geometry into the viewer.
Each link lives under the joint that attaches it to its parent:

    /<root link>/<joint>/<child link>/<joint>/<child link> ...

so setting a joint's transform moves its whole kinematic subtree.

Usage:
    robot = read_urdf("panda.urdf")
    paths = load_urdf(meshcat, "panda.urdf")
    meshcat.set_transform(paths["panda_joint1"], transforms.isometry(rpy=(0, 0, 0.5)))
"""

from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple
import xml.etree.ElementTree as ET

import numpy as np

from meshcat_client.errors import UnsupportedGeometryError, UrdfError
from meshcat_client.scene import transforms
from meshcat_client.scene.geometry import (
    BoxGeometry,
    CylinderGeometry,
    Geometry,
    GeometryKind,
    SphereGeometry,
)
from meshcat_client.scene.material import Material
from meshcat_client.scene.objects import LumpedObject
from meshcat_client.utils.meshes import load_mesh


@dataclass
class Origin:
    xyz: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    rpy: Tuple[float, float, float] = (0.0, 0.0, 0.0)

    def to_matrix(self) -> np.ndarray:
        return transforms.isometry(self.xyz, self.rpy)


@dataclass
class Shape:
    """Raw URDF <geometry> child: tag ('box', 'mesh', ...) and its attributes."""
    kind: str
    attributes: Dict[str, str] = field(default_factory=dict)


@dataclass
class Visual:
    """A <visual> or <collision> element."""
    shape: Shape
    origin: Origin = field(default_factory=Origin)
    rgba: Optional[Tuple[float, float, float, float]] = None


@dataclass
class Link:
    name: str
    visuals: List[Visual] = field(default_factory=list)
    collisions: List[Visual] = field(default_factory=list)


@dataclass
class Joint:
    name: str
    parent: str
    child: str
    joint_type: str = "fixed"
    origin: Origin = field(default_factory=Origin)


@dataclass
class Robot:
    name: str
    links: List[Link] = field(default_factory=list)
    joints: List[Joint] = field(default_factory=list)
    base_dir: Path = field(default_factory=Path.cwd)


def _floats(text: Optional[str], count: int, default: Tuple[float, ...]) -> Tuple[float, ...]:
    if text is None:
        return default
    try:
        values = tuple(float(v) for v in text.split())
    except ValueError as e:
        raise UrdfError(f"Expected {count} numbers, got '{text}'") from e
    if len(values) != count:
        raise UrdfError(f"Expected {count} numbers, got '{text}'")
    return values


def _number(attributes: Dict[str, str], name: str, kind: str) -> float:
    if name not in attributes:
        raise UrdfError(f"<{kind}> is missing the '{name}' attribute")
    try:
        return float(attributes[name])
    except ValueError as e:
        raise UrdfError(f"<{kind}> {name}='{attributes[name]}' is not a number") from e


def _joint_link(joint: ET.Element, tag: str) -> str:
    element = joint.find(tag)
    if element is None or element.get("link") is None:
        raise UrdfError(f"Joint '{joint.get('name')}' has no <{tag} link=...>")
    return element.get("link")


def _parse_origin(element: Optional[ET.Element]) -> Origin:
    if element is None:
        return Origin()
    return Origin(
        xyz=_floats(element.get("xyz"), 3, (0.0, 0.0, 0.0)),
        rpy=_floats(element.get("rpy"), 3, (0.0, 0.0, 0.0)),
    )


def _parse_visual(element: ET.Element, materials: Dict[str, Tuple[float, ...]]) -> Optional[Visual]:
    geometry = element.find("geometry")
    if geometry is None or len(geometry) == 0:
        return None
    shape_element = geometry[0]

    rgba = None
    material = element.find("material")
    if material is not None:
        color = material.find("color")
        if color is not None:
            rgba = _floats(color.get("rgba"), 4, (1.0, 1.0, 1.0, 1.0))
        else:
            rgba = materials.get(material.get("name", ""))

    return Visual(
        shape=Shape(kind=shape_element.tag, attributes=dict(shape_element.attrib)),
        origin=_parse_origin(element.find("origin")),
        rgba=rgba,
    )


def read_urdf(source: str | Path, base_dir: str | Path | None = None) -> Robot:
    """
    Parse a URDF file or XML string.

    Args:
        source: Path to a .urdf file, or the XML text itself
        base_dir: Directory mesh filenames are resolved against
                  (default: the file's directory, or the working directory for strings)

    Returns:
        Robot with its links and joints

    Raises:
        UrdfError: If the XML is malformed or not a <robot> description
        OSError: If the file cannot be read
    """
    text = str(source)
    try:
        if text.lstrip().startswith("<"):
            root = ET.fromstring(text)
            directory = Path(base_dir) if base_dir else Path.cwd()
        else:
            path = Path(source)
            root = ET.parse(path).getroot()
            directory = Path(base_dir) if base_dir else path.resolve().parent
    except ET.ParseError as e:
        raise UrdfError(f"Malformed URDF: {e}") from e

    if root.tag != "robot":
        raise UrdfError(f"Expected a <robot> element, got <{root.tag}>")

    # Named top-level materials can be referenced from visuals
    materials = {}
    for material in root.findall("material"):
        color = material.find("color")
        if color is not None:
            materials[material.get("name", "")] = _floats(color.get("rgba"), 4, (1.0, 1.0, 1.0, 1.0))

    links = []
    for element in root.findall("link"):
        link = Link(name=element.get("name"))
        for visual in element.findall("visual"):
            parsed = _parse_visual(visual, materials)
            if parsed is not None:
                link.visuals.append(parsed)
        for collision in element.findall("collision"):
            parsed = _parse_visual(collision, materials)
            if parsed is not None:
                link.collisions.append(parsed)
        links.append(link)

    joints = []
    for element in root.findall("joint"):
        joints.append(Joint(
            name=element.get("name"),
            parent=_joint_link(element, "parent"),
            child=_joint_link(element, "child"),
            joint_type=element.get("type", "fixed"),
            origin=_parse_origin(element.find("origin")),
        ))

    return Robot(name=root.get("name", ""), links=links, joints=joints, base_dir=directory)


def resolve_mesh_path(filename: str, base_dir: Path) -> Path:
    """
    Locate a mesh referenced from a URDF.

    'package://pkg/meshes/a.obj' is looked up as 'pkg/meshes/a.obj' in
    base_dir and its parents; 'file://' prefixes are stripped.
    """
    if filename.startswith("file://"):
        return Path(filename[len("file://"):])

    if filename.startswith("package://"):
        relative = Path(filename[len("package://"):])
        for directory in [base_dir] + list(base_dir.parents):
            candidate = directory / relative
            if candidate.exists():
                return candidate
            # Package root may be base_dir itself
            candidate = directory / Path(*relative.parts[1:])
            if len(relative.parts) > 1 and candidate.exists():
                return candidate
        raise FileNotFoundError(f"Cannot resolve mesh '{filename}' from {base_dir}")

    path = Path(filename)
    return path if path.is_absolute() else base_dir / path


def geometry_from_urdf(shape: Shape, base_dir: Path | None = None) -> GeometryKind:
    """
    Convert a URDF shape to a meshcat geometry.

    A mesh's scale attribute is not part of the geometry; see shape_scale.

    Raises:
        UnsupportedGeometryError: For capsules and unknown shapes
        UrdfError: For missing or malformed attributes
    """
    attributes = shape.attributes

    if shape.kind == "box":
        width, height, depth = _floats(attributes.get("size"), 3, (1.0, 1.0, 1.0))
        return BoxGeometry(width=width, height=height, depth=depth)

    if shape.kind == "cylinder":
        radius = _number(attributes, "radius", shape.kind)
        length = _number(attributes, "length", shape.kind)
        return CylinderGeometry(radius_top=radius, radius_bottom=radius, height=length)

    if shape.kind == "sphere":
        return SphereGeometry(radius=_number(attributes, "radius", shape.kind))

    if shape.kind == "mesh":
        if "filename" not in attributes:
            raise UrdfError("<mesh> is missing the 'filename' attribute")
        path = resolve_mesh_path(attributes["filename"], base_dir or Path.cwd())
        return load_mesh(path)

    if shape.kind == "capsule":
        raise UnsupportedGeometryError("Capsule geometry is not supported by Meshcat.")

    raise UnsupportedGeometryError(f"Unknown URDF geometry '{shape.kind}'")


def shape_scale(shape: Shape) -> np.ndarray:
    """
    4x4 scaling matrix for a mesh's scale attribute (identity otherwise).

    URDF allows one factor or one per axis.
    """
    if shape.kind != "mesh" or "scale" not in shape.attributes:
        return transforms.identity()
    text = shape.attributes["scale"]
    if len(text.split()) == 1:
        factors = _floats(text, 1, (1.0,)) * 3
    else:
        factors = _floats(text, 3, (1.0, 1.0, 1.0))
    return np.diag([*factors, 1.0])


def scene_paths(robot: Robot) -> Dict[str, str]:
    """
    Full scene path of every link and joint.

    Returns:
        {link or joint name: path}
    """
    children_of: Dict[str, List[Joint]] = {}
    child_links = set()
    for joint in robot.joints:
        children_of.setdefault(joint.parent, []).append(joint)
        child_links.add(joint.child)

    link_names = [link.name for link in robot.links]
    for joint in robot.joints:
        for name in (joint.parent, joint.child):
            if name not in link_names:
                link_names.append(name)

    names: Dict[str, str] = {}
    queue = deque()
    for name in link_names:
        if name not in child_links:
            names[name] = "/" + name
            queue.append(name)

    while queue:
        parent = queue.popleft()
        for joint in children_of.get(parent, []):
            joint_path = names[parent] + "/" + joint.name
            names[joint.name] = joint_path
            if joint.child not in names:
                names[joint.child] = joint_path + "/" + joint.child
                queue.append(joint.child)

    return names


def _link_material(link: Link) -> Material:
    for visual in link.visuals:
        if visual.rgba is not None:
            r, g, b, a = visual.rgba
            color = (int(round(r * 255)) << 16) | (int(round(g * 255)) << 8) | int(round(b * 255))
            if a < 1.0:
                return Material(color=color, opacity=a, transparent=True)
            return Material(color=color)
    return Material()


def link_object(link: Link, base_dir: Path | None = None, collision: bool = False) -> LumpedObject:
    """All visual (or collision) geometry of a link as one object."""
    elements = link.collisions if collision else link.visuals
    geometries = [
        Geometry(
            geometry_from_urdf(element.shape, base_dir),
            origin=element.origin.to_matrix() @ shape_scale(element.shape),
        )
        for element in elements
    ]
    return LumpedObject(geometries=geometries, material=_link_material(link))


def load_urdf(meshcat, source: str | Path, collision: bool = False) -> Dict[str, str]:
    """
    Publish a robot to the viewer.

    Every link object is built before anything is sent, so a malformed
    description leaves the viewer untouched. Old paths are then deleted,
    every link with geometry is sent and every joint's origin is applied.

    Args:
        meshcat: Meshcat visualizer
        source: URDF file path or XML text
        collision: Publish collision geometry instead of visuals

    Returns:
        {link or joint name: scene path}
    """
    robot = read_urdf(source)
    names = scene_paths(robot)

    objects = []
    for link in robot.links:
        elements = link.collisions if collision else link.visuals
        if elements:
            objects.append((names[link.name], link_object(link, robot.base_dir, collision)))

    for path in names.values():
        meshcat.delete(path)

    for path, lumped_object in objects:
        meshcat.set_object(path, lumped_object)

    for joint in robot.joints:
        meshcat.set_transform(names[joint.name], joint.origin.to_matrix())

    return names

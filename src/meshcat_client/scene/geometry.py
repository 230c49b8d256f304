"""
Geometry Types

three.js geometry descriptions sent inside set_object payloads.
Field names are snake_case in Python and camelCase on the wire
(radial_segments -> radialSegments).

Reference: https://threejs.org/docs/#api/en/geometries/
"""

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Dict, Optional
import uuid as uuidlib

import numpy as np

from meshcat_client.constants import GeometryDefaults, ProtocolConstants
from meshcat_client.scene import transforms


def _camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


class GeometryKind:
    """Base for geometry kinds. Subclasses are dataclasses with a TYPE tag."""

    TYPE: ClassVar[str] = ""

    def to_dict(self) -> Dict[str, Any]:
        data = {"type": self.TYPE}
        for f in fields(self):
            data[_camel_case(f.name)] = getattr(self, f.name)
        return data


@dataclass
class BoxGeometry(GeometryKind):
    TYPE: ClassVar[str] = "BoxGeometry"

    width: float
    height: float
    depth: float


@dataclass
class CircleGeometry(GeometryKind):
    TYPE: ClassVar[str] = "CircleGeometry"

    radius: float
    segments: int = GeometryDefaults.CIRCLE_SEGMENTS
    theta_start: float = 0.0
    theta_length: float = GeometryDefaults.FULL_CIRCLE


@dataclass
class ConeGeometry(GeometryKind):
    TYPE: ClassVar[str] = "ConeGeometry"

    radius: float
    height: float
    radial_segments: int = GeometryDefaults.CYLINDER_RADIAL_SEGMENTS
    height_segments: int = GeometryDefaults.CYLINDER_HEIGHT_SEGMENTS
    theta_start: float = 0.0
    theta_length: float = GeometryDefaults.FULL_CIRCLE


@dataclass
class CylinderGeometry(GeometryKind):
    """Cylinder along the y axis (three.js convention)."""

    TYPE: ClassVar[str] = "CylinderGeometry"

    radius_top: float
    radius_bottom: float
    height: float
    radial_segments: int = GeometryDefaults.CYLINDER_RADIAL_SEGMENTS
    height_segments: int = GeometryDefaults.CYLINDER_HEIGHT_SEGMENTS
    theta_start: float = 0.0
    theta_length: float = GeometryDefaults.FULL_CIRCLE


@dataclass
class DodecahedronGeometry(GeometryKind):
    TYPE: ClassVar[str] = "DodecahedronGeometry"

    radius: float
    detail: int = 0


@dataclass
class IcosahedronGeometry(GeometryKind):
    TYPE: ClassVar[str] = "IcosahedronGeometry"

    radius: float
    detail: int = 0


@dataclass
class OctahedronGeometry(GeometryKind):
    TYPE: ClassVar[str] = "OctahedronGeometry"

    radius: float
    detail: int = 0


@dataclass
class TetrahedronGeometry(GeometryKind):
    TYPE: ClassVar[str] = "TetrahedronGeometry"

    radius: float
    detail: int = 0


@dataclass
class PlaneGeometry(GeometryKind):
    TYPE: ClassVar[str] = "PlaneGeometry"

    width: float
    height: float
    width_segments: int = GeometryDefaults.PLANE_SEGMENTS
    height_segments: int = GeometryDefaults.PLANE_SEGMENTS


@dataclass
class RingGeometry(GeometryKind):
    TYPE: ClassVar[str] = "RingGeometry"

    inner_radius: float
    outer_radius: float
    theta_segments: int = GeometryDefaults.RING_THETA_SEGMENTS
    phi_segments: int = GeometryDefaults.RING_PHI_SEGMENTS
    theta_start: float = 0.0
    theta_length: float = GeometryDefaults.FULL_CIRCLE


@dataclass
class SphereGeometry(GeometryKind):
    TYPE: ClassVar[str] = "SphereGeometry"

    radius: float
    width_segments: int = GeometryDefaults.SPHERE_WIDTH_SEGMENTS
    height_segments: int = GeometryDefaults.SPHERE_HEIGHT_SEGMENTS


@dataclass
class TorusGeometry(GeometryKind):
    TYPE: ClassVar[str] = "TorusGeometry"

    radius: float
    tube: float
    radial_segments: int = GeometryDefaults.TORUS_RADIAL_SEGMENTS
    tubular_segments: int = GeometryDefaults.TORUS_TUBULAR_SEGMENTS


@dataclass
class MeshFileGeometry(GeometryKind):
    """
    Raw mesh file contents, parsed by the viewer.

    format is the file extension ('obj', 'dae', 'stl'), data the file text.
    """

    TYPE: ClassVar[str] = ProtocolConstants.MESHFILE_GEOMETRY

    format: str
    data: str


@dataclass
class BufferAttribute:
    """
    Per-vertex attribute of a BufferGeometry.

    array is item_size x N (one column per vertex) and is sent column by
    column: [x0, y0, z0, x1, y1, z1, ...].
    """
    array: np.ndarray
    item_size: int = GeometryDefaults.ITEM_SIZE
    attribute_type: str = GeometryDefaults.FLOAT32_ARRAY
    normalized: bool = False

    def __post_init__(self):
        self.array = np.asarray(self.array, dtype=float)
        if self.array.ndim != 2 or self.array.shape[0] != self.item_size:
            raise ValueError(
                f"Buffer attribute must be {self.item_size} x N, got shape {self.array.shape}"
            )

    @property
    def count(self) -> int:
        return self.array.shape[1]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "itemSize": self.item_size,
            "type": self.attribute_type,
            "array": self.array.flatten(order="F").tolist(),
            "normalized": self.normalized,
        }


@dataclass
class BufferGeometry(GeometryKind):
    """Point clouds and raw vertex data."""

    TYPE: ClassVar[str] = "BufferGeometry"

    position: BufferAttribute
    color: BufferAttribute
    normal: Optional[BufferAttribute] = None
    uv: Optional[BufferAttribute] = None

    @classmethod
    def from_points(cls, points, colors=None) -> "BufferGeometry":
        """
        Build a point cloud geometry.

        Args:
            points: 3 x N vertex positions
            colors: 3 x N RGB colors in [0, 1] (defaults to white)
        """
        points = np.asarray(points, dtype=float)
        if colors is None:
            colors = np.ones_like(points)
        return cls(position=BufferAttribute(points), color=BufferAttribute(colors))

    def to_dict(self) -> Dict[str, Any]:
        attributes = {
            "position": self.position.to_dict(),
            "color": self.color.to_dict(),
        }
        if self.normal is not None:
            attributes["normal"] = self.normal.to_dict()
        if self.uv is not None:
            attributes["uv"] = self.uv.to_dict()
        return {"type": self.TYPE, "data": {"attributes": attributes}}


@dataclass
class Geometry:
    """
    A geometry kind with its uuid.

    origin places the geometry inside a multi-geometry object; it is used
    when the object's children are assembled and never sent on its own.
    """
    kind: GeometryKind
    origin: np.ndarray = field(default_factory=transforms.identity)
    uuid: str = field(default_factory=lambda: str(uuidlib.uuid4()))

    def __post_init__(self):
        self.origin = transforms.as_matrix(self.origin)

    def to_dict(self) -> Dict[str, Any]:
        data = {"uuid": self.uuid}
        data.update(self.kind.to_dict())
        return data

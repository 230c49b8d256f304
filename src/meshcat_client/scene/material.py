"""
Materials

Reference: https://threejs.org/docs/index.html#api/en/materials/Material
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional
import uuid as uuidlib

from meshcat_client.constants import MaterialConstants


class MaterialType(Enum):
    """three.js material classes supported by meshcat."""
    MESH_BASIC = "MeshBasicMaterial"
    MESH_PHONG = "MeshPhongMaterial"
    MESH_LAMBERT = "MeshLambertMaterial"
    MESH_TOON = "MeshToonMaterial"
    LINE_BASIC = "LineBasicMaterial"
    POINTS = "PointsMaterial"


# Optional fields and their wire names; None values are left out of the payload
_OPTIONAL_FIELDS = (
    ("color", "color"),
    ("linewidth", "linewidth"),
    ("opacity", "opacity"),
    ("reflectivity", "reflectivity"),
    ("side", "side"),
    ("transparent", "transparent"),
    ("vertex_colors", "vertexColors"),
    ("wireframe", "wireframe"),
    ("wireframe_line_width", "wireframeLineWidth"),
    ("map", "map"),
)


@dataclass
class Material:
    """
    Material shared by every geometry of an object.

    color is a 24-bit RGB integer (0xff0000 is red). size only applies to
    PointsMaterial. map is the texture uuid and is filled in when the object
    is assembled.
    """
    material_type: MaterialType = MaterialType.MESH_PHONG
    color: Optional[int] = None
    size: Optional[float] = None
    linewidth: Optional[float] = None
    opacity: Optional[float] = None
    reflectivity: Optional[float] = None
    side: Optional[int] = MaterialConstants.DOUBLE_SIDE
    transparent: Optional[bool] = None
    vertex_colors: Optional[bool] = None
    wireframe: Optional[bool] = None
    wireframe_line_width: Optional[float] = None
    map: Optional[str] = field(default=None, init=False)
    uuid: str = field(default_factory=lambda: str(uuidlib.uuid4()), init=False)

    def __post_init__(self):
        if self.color is not None and not 0 <= self.color <= 0xFFFFFF:
            raise ValueError(f"color must be a 24-bit RGB value, got {self.color:#x}")
        if self.material_type is MaterialType.POINTS and self.size is None:
            raise ValueError("PointsMaterial requires a point size")

    @classmethod
    def points(cls, size: float, **kwargs) -> "Material":
        """Material for point clouds."""
        return cls(material_type=MaterialType.POINTS, size=size, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "uuid": self.uuid,
            "type": self.material_type.value,
        }
        if self.material_type is MaterialType.POINTS:
            data["size"] = self.size
        for attr, key in _OPTIONAL_FIELDS:
            value = getattr(self, attr)
            if value is not None:
                data[key] = value
        return data

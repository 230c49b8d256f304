"""
Scene Objects

A LumpedObject is the complete payload of one set_object command, in the
three.js JSON Object Scene format 4:

    {
        "metadata":   {"type": "Object", "version": 4.5},
        "textures":   [texture]        (only with a texture)
        "images":     [image]          (only with an image)
        "geometries": [geometry, ...],
        "materials":  [material],
        "object":     {root object, one child per geometry}
    }

Reference: https://github.com/mrdoob/three.js/wiki/JSON-Object-Scene-format-4
"""

from dataclasses import dataclass, field
from enum import Enum
import copy
from typing import Any, Dict, List, Optional
import uuid as uuidlib

import numpy as np

from meshcat_client.constants import GeometryDefaults, ProtocolConstants
from meshcat_client.scene import transforms
from meshcat_client.scene.geometry import CylinderGeometry, Geometry
from meshcat_client.scene.material import Material
from meshcat_client.scene.texture import Image, ImageTexture, Texture


class ObjectType(Enum):
    """How the viewer draws an object's geometry."""
    MESH = "Mesh"
    POINTS = "Points"
    LINE_SEGMENTS = "LineSegments"


@dataclass
class Object:
    """
    Node of the three.js object tree.

    material and geometry hold uuids; both are filled in by LumpedObject.
    """
    origin: np.ndarray = field(default_factory=transforms.identity)
    object_type: ObjectType = ObjectType.MESH
    material: Optional[str] = None
    geometry: Optional[str] = None
    children: List["Object"] = field(default_factory=list)
    uuid: str = field(default_factory=lambda: str(uuidlib.uuid4()))

    def __post_init__(self):
        self.origin = transforms.as_matrix(self.origin)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "uuid": self.uuid,
            "material": self.material,
        }
        if self.geometry is not None:
            data["geometry"] = self.geometry
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        data["matrix"] = transforms.to_column_major(self.origin)
        data["type"] = self.object_type.value
        return data


@dataclass(frozen=True)
class Metadata:
    type: str = ProtocolConstants.METADATA_TYPE
    version: float = ProtocolConstants.METADATA_VERSION

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "version": self.version}


class LumpedObject:
    """
    Geometries, one material, an optional texture/image and the object tree,
    linked together by uuid.

    Usage:
        box = LumpedObject(
            geometries=[Geometry(BoxGeometry(0.5, 0.5, 0.5))],
            material=Material(color=0xff00ff),
            obj=Object(origin=transforms.translation(0.0, 1.0, 0.0)),
        )
        meshcat.set_object("/box", box)
    """

    def __init__(
        self,
        geometries: List[Geometry] | None = None,
        material: Material | None = None,
        obj: Object | None = None,
        texture: Texture | None = None,
        image: Image | None = None,
        metadata: Metadata | None = None,
    ):
        """
        Assemble a set_object payload.

        Args:
            geometries: Geometries the object is composed of
            material: Material shared by all geometries (default: Phong)
            obj: Root object carrying the pose and object type
            texture: Optional texture, becomes the material's map
            image: Optional image, referenced by an image texture
            metadata: Format metadata

        material, obj and texture are copied (uuids kept) before linking,
        so the same instances can be reused for several objects.
        """
        self.geometries = list(geometries) if geometries else []
        self.material = copy.copy(material) if material is not None else Material()
        self.object = copy.copy(obj) if obj is not None else Object()
        self.texture = None
        if texture is not None:
            self.texture = copy.copy(texture)
            self.texture.texture_type = copy.copy(texture.texture_type)
        self.image = image
        self.metadata = metadata if metadata is not None else Metadata()

        self._link()

    @classmethod
    def from_geometry(cls, geometry: Geometry, **kwargs) -> "LumpedObject":
        """Single-geometry convenience constructor."""
        return cls(geometries=[geometry], **kwargs)

    def _link(self):
        """Wire image -> texture -> material -> object and build the children."""
        if self.image is not None and self.texture is not None:
            if isinstance(self.texture.texture_type, ImageTexture):
                self.texture.texture_type.image = self.image.uuid

        if self.texture is not None:
            self.material.map = self.texture.uuid

        self.object.material = self.material.uuid

        cylinder_correction = transforms.isometry(
            rpy=GeometryDefaults.CYLINDER_AXIS_CORRECTION_RPY
        )
        children = []
        for geometry in self.geometries:
            pose = geometry.origin
            if isinstance(geometry.kind, CylinderGeometry):
                pose = pose @ cylinder_correction
            children.append(Object(
                origin=pose,
                object_type=self.object.object_type,
                material=self.material.uuid,
                geometry=geometry.uuid,
            ))
        self.object.children = children

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"metadata": self.metadata.to_dict()}
        if self.texture is not None:
            data["textures"] = [self.texture.to_dict()]
        if self.image is not None:
            data["images"] = [self.image.to_dict()]
        data["geometries"] = [geometry.to_dict() for geometry in self.geometries]
        data["materials"] = [self.material.to_dict()]
        data["object"] = self.object.to_dict()
        return data

    def __repr__(self) -> str:
        kinds = ", ".join(type(g.kind).__name__ for g in self.geometries)
        return f"LumpedObject(geometries=[{kinds}], material={self.material.material_type.value})"

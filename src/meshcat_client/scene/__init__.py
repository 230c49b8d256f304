"""
Scene Graph Model

Geometries, materials, textures and objects that make up set_object
payloads, plus the local mirror of the server's scene tree.
"""

from .geometry import (
    GeometryKind,
    BoxGeometry,
    CircleGeometry,
    ConeGeometry,
    CylinderGeometry,
    DodecahedronGeometry,
    IcosahedronGeometry,
    OctahedronGeometry,
    TetrahedronGeometry,
    PlaneGeometry,
    RingGeometry,
    SphereGeometry,
    TorusGeometry,
    MeshFileGeometry,
    BufferAttribute,
    BufferGeometry,
    Geometry,
)
from .material import Material, MaterialType
from .texture import Texture, TextTexture, ImageTexture, Image
from .objects import Object, ObjectType, LumpedObject, Metadata
from .tree import SceneTree, SceneNode, normalize_path, join_path

__all__ = [
    'GeometryKind',
    'BoxGeometry',
    'CircleGeometry',
    'ConeGeometry',
    'CylinderGeometry',
    'DodecahedronGeometry',
    'IcosahedronGeometry',
    'OctahedronGeometry',
    'TetrahedronGeometry',
    'PlaneGeometry',
    'RingGeometry',
    'SphereGeometry',
    'TorusGeometry',
    'MeshFileGeometry',
    'BufferAttribute',
    'BufferGeometry',
    'Geometry',
    'Material',
    'MaterialType',
    'Texture',
    'TextTexture',
    'ImageTexture',
    'Image',
    'Object',
    'ObjectType',
    'LumpedObject',
    'Metadata',
    'SceneTree',
    'SceneNode',
    'normalize_path',
    'join_path',
]

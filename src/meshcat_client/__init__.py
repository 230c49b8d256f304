"""
Meshcat Client

Sends scene-graph commands to a meshcat visualization server.

Architecture:
    meshcat_client/
    ├── visualizer.py      - Meshcat (high-level client)
    ├── scene/             - Scene graph model
    │   ├── geometry.py    - three.js geometries
    │   ├── material.py    - Materials
    │   ├── texture.py     - Text and image textures
    │   ├── objects.py     - Object tree, LumpedObject payloads
    │   ├── transforms.py  - 4x4 pose helpers
    │   └── tree.py        - SceneTree (local mirror)
    ├── protocol/          - Command encoder
    │   ├── commands.py    - set_object, set_transform, set_property, delete
    │   ├── properties.py  - Property values
    │   └── codec.py       - msgpack multipart frames
    ├── transport/         - Transport client
    │   └── zmq_channel.py - REQ/REP channel to meshcat-server
    └── urdf.py            - Robot descriptions

Usage:
    from meshcat_client import Meshcat, LumpedObject, Geometry, BoxGeometry, transforms

    meshcat = Meshcat("tcp://127.0.0.1:6000")
    meshcat.set_object("/box", LumpedObject.from_geometry(Geometry(BoxGeometry(1, 1, 1))))
    meshcat.set_transform("/box", transforms.translation(0.0, 0.0, 1.0))
    meshcat.close()

Public API:
- Meshcat: Client for a running meshcat-server
- Scene types: Geometry kinds, Material, Texture, Image, Object, LumpedObject
- Property: Values for set_property
"""

from .visualizer import Meshcat
from .scene import (
    transforms,
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
    Material,
    MaterialType,
    Texture,
    Image,
    Object,
    ObjectType,
    LumpedObject,
    SceneTree,
)
from .protocol import Property
from .errors import (
    MeshcatError,
    InvalidPathError,
    EncodingError,
    UnsupportedGeometryError,
    UrdfError,
    UnsupportedImageError,
    TransportError,
    CommandTimeoutError,
    ChannelClosedError,
)

__version__ = "0.1.0"

__all__ = [
    'Meshcat',
    'transforms',
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
    'Image',
    'Object',
    'ObjectType',
    'LumpedObject',
    'SceneTree',
    'Property',
    'MeshcatError',
    'InvalidPathError',
    'EncodingError',
    'UnsupportedGeometryError',
    'UrdfError',
    'UnsupportedImageError',
    'TransportError',
    'CommandTimeoutError',
    'ChannelClosedError',
]

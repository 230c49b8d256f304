"""
Meshcat Client Constants

Protocol strings, three.js defaults and transport settings.
Following clean code principles: NO MAGIC NUMBERS!
"""

import math


class ProtocolConstants:
    """Command names and payload metadata understood by meshcat-server."""

    SET_OBJECT = "set_object"
    SET_TRANSFORM = "set_transform"
    SET_PROPERTY = "set_property"
    DELETE = "delete"

    # three.js JSON Object Scene format
    METADATA_TYPE = "Object"
    METADATA_VERSION = 4.5

    # Geometry type used by meshcat for raw mesh files (obj, dae, stl)
    MESHFILE_GEOMETRY = "_meshfile_geometry"
    TEXT_TEXTURE = "_text"

    ENCODING = "utf-8"


class GeometryDefaults:
    """Default tessellation for primitives (three.js / URDF conventions)."""

    FULL_CIRCLE = 2.0 * math.pi

    CYLINDER_RADIAL_SEGMENTS = 32
    CYLINDER_HEIGHT_SEGMENTS = 1

    SPHERE_WIDTH_SEGMENTS = 32
    SPHERE_HEIGHT_SEGMENTS = 16

    CIRCLE_SEGMENTS = 32
    RING_THETA_SEGMENTS = 32
    RING_PHI_SEGMENTS = 1

    TORUS_RADIAL_SEGMENTS = 12
    TORUS_TUBULAR_SEGMENTS = 48

    PLANE_SEGMENTS = 1

    # Buffer attributes
    ITEM_SIZE = 3
    FLOAT32_ARRAY = "Float32Array"

    # meshcat cylinders have their long axis in y
    CYLINDER_AXIS_CORRECTION_RPY = (math.pi / 2.0, 0.0, 0.0)


class MaterialConstants:
    """Material and texture defaults."""

    DOUBLE_SIDE = 2

    # three.js RepeatWrapping
    REPEAT_WRAPPING = 1001
    TEXTURE_REPEAT = (1, 1)
    TEXTURE_WRAP = (REPEAT_WRAPPING, REPEAT_WRAPPING)

    DEFAULT_FONT_SIZE = 100
    DEFAULT_FONT_FACE = "sans-serif"

    # Size of the plane text is drawn on
    TEXT_PLANE_SIZE = 10.0


class TransportConstants:
    """Defaults for the ZMQ command channel."""

    DEFAULT_ENDPOINT = "tcp://127.0.0.1:6000"
    DEFAULT_TIMEOUT_MS = 5000
    DEFAULT_RETRIES = 3
    DEFAULT_LINGER_MS = 0


class DemoConstants:
    """Constants for the command line demos."""

    DEFAULT_FRAMES = 100
    DEFAULT_FRAME_DELAY = 0.1  # seconds
    DELTA_ANGLE = 0.1  # radians per frame
    POINT_CLOUD_SIZE = 100000
    POINT_SIZE = 0.001


# Convenience exports
__all__ = [
    'ProtocolConstants',
    'GeometryDefaults',
    'MaterialConstants',
    'TransportConstants',
    'DemoConstants',
]

"""
Rigid-body transform helpers.

All poses are 4x4 homogeneous matrices (numpy float64). Euler angles follow
the roll/pitch/yaw convention used by URDF: R = Rz(yaw) @ Ry(pitch) @ Rx(roll).
"""

from typing import List, Sequence, Tuple
import numpy as np


def identity() -> np.ndarray:
    """4x4 identity pose."""
    return np.eye(4)


def translation(x: float, y: float, z: float) -> np.ndarray:
    """Pure translation pose."""
    matrix = np.eye(4)
    matrix[:3, 3] = (x, y, z)
    return matrix


def rotation_from_euler(roll: float, pitch: float, yaw: float) -> np.ndarray:
    """
    Rotation matrix from roll/pitch/yaw.

    Args:
        roll: Rotation about x (radians)
        pitch: Rotation about y (radians)
        yaw: Rotation about z (radians)

    Returns:
        3x3 rotation matrix
    """
    cr, sr = np.cos(roll), np.sin(roll)
    cp, sp = np.cos(pitch), np.sin(pitch)
    cy, sy = np.cos(yaw), np.sin(yaw)

    rx = np.array([[1.0, 0.0, 0.0], [0.0, cr, -sr], [0.0, sr, cr]])
    ry = np.array([[cp, 0.0, sp], [0.0, 1.0, 0.0], [-sp, 0.0, cp]])
    rz = np.array([[cy, -sy, 0.0], [sy, cy, 0.0], [0.0, 0.0, 1.0]])

    return rz @ ry @ rx


def quaternion_from_euler(roll: float, pitch: float, yaw: float) -> Tuple[float, float, float, float]:
    """
    Unit quaternion from roll/pitch/yaw.

    Returns:
        (x, y, z, w), the component order three.js expects
    """
    cr, sr = np.cos(roll / 2.0), np.sin(roll / 2.0)
    cp, sp = np.cos(pitch / 2.0), np.sin(pitch / 2.0)
    cy, sy = np.cos(yaw / 2.0), np.sin(yaw / 2.0)

    w = cr * cp * cy + sr * sp * sy
    x = sr * cp * cy - cr * sp * sy
    y = cr * sp * cy + sr * cp * sy
    z = cr * cp * sy - sr * sp * cy

    return (float(x), float(y), float(z), float(w))


def isometry(
    xyz: Sequence[float] = (0.0, 0.0, 0.0),
    rpy: Sequence[float] = (0.0, 0.0, 0.0),
) -> np.ndarray:
    """
    Pose from a translation and roll/pitch/yaw angles.

    Args:
        xyz: Translation (x, y, z)
        rpy: Rotation (roll, pitch, yaw) in radians

    Returns:
        4x4 homogeneous matrix
    """
    matrix = translation(*xyz)
    matrix[:3, :3] = rotation_from_euler(*rpy)
    return matrix


def as_matrix(matrix) -> np.ndarray:
    """Validate and convert a pose to a 4x4 float array."""
    array = np.asarray(matrix, dtype=float)
    if array.shape != (4, 4):
        raise ValueError(f"Expected a 4x4 homogeneous matrix, got shape {array.shape}")
    return array


def to_column_major(matrix) -> List[float]:
    """
    Flatten a pose the way three.js Matrix4.fromArray reads it.

    Args:
        matrix: 4x4 homogeneous matrix

    Returns:
        16 floats, column by column
    """
    return as_matrix(matrix).flatten(order="F").tolist()

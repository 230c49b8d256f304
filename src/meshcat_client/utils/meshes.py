"""
Mesh and text helpers.
"""

from pathlib import Path

from meshcat_client.constants import MaterialConstants
from meshcat_client.scene.geometry import Geometry, MeshFileGeometry, PlaneGeometry
from meshcat_client.scene.material import Material, MaterialType
from meshcat_client.scene.objects import LumpedObject
from meshcat_client.scene.texture import Texture


def file_extension(path: str | Path) -> str:
    """
    Extension of a file name without the dot, lower-cased.

    Raises:
        ValueError: If the name has no extension
    """
    suffix = Path(path).suffix
    if not suffix or suffix == ".":
        raise ValueError(f"Invalid file extension: {path}")
    return suffix[1:].lower()


def load_mesh(path: str | Path) -> MeshFileGeometry:
    """
    Read a mesh file for the viewer to parse.

    Args:
        path: .obj, .dae or .stl (ASCII) file

    Returns:
        MeshFileGeometry with the file text
    """
    path = Path(path)
    return MeshFileGeometry(format=file_extension(path), data=path.read_text())


def scene_text(
    text: str,
    font_size: int = MaterialConstants.DEFAULT_FONT_SIZE,
    font_face: str = MaterialConstants.DEFAULT_FONT_FACE,
) -> LumpedObject:
    """Text drawn on a transparent plane."""
    size = MaterialConstants.TEXT_PLANE_SIZE
    return LumpedObject(
        geometries=[Geometry(PlaneGeometry(width=size, height=size))],
        material=Material(material_type=MaterialType.MESH_PHONG, transparent=True),
        texture=Texture.text(text, font_size, font_face),
    )

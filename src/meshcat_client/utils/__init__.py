"""
Utilities: mesh files, scene text and terminal output.
"""

from .meshes import file_extension, load_mesh, scene_text

__all__ = [
    'file_extension',
    'load_mesh',
    'scene_text',
]

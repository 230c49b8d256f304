"""
Textures and Images

A texture is either drawn text or a reference to an embedded image.
Images are embedded in the payload as base64 data URLs.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple
import base64
import uuid as uuidlib

from meshcat_client.constants import MaterialConstants, ProtocolConstants
from meshcat_client.errors import UnsupportedImageError


def _new_uuid() -> str:
    return str(uuidlib.uuid4())


@dataclass
class TextTexture:
    """Text rendered onto a canvas by the viewer."""
    text: str
    font_size: int = MaterialConstants.DEFAULT_FONT_SIZE
    font_face: str = MaterialConstants.DEFAULT_FONT_FACE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": ProtocolConstants.TEXT_TEXTURE,
            "text": self.text,
            "font_size": self.font_size,
            "font_face": self.font_face,
        }


@dataclass
class ImageTexture:
    """Texture backed by an Image; image is linked when the object is assembled."""
    image: Optional[str] = None
    repeat: Tuple[int, int] = MaterialConstants.TEXTURE_REPEAT
    wrap: Tuple[int, int] = MaterialConstants.TEXTURE_WRAP

    def to_dict(self) -> Dict[str, Any]:
        return {
            "image": self.image,
            "repeat": list(self.repeat),
            "wrap": list(self.wrap),
        }


@dataclass
class Texture:
    """A texture with its uuid."""
    texture_type: Any  # TextTexture | ImageTexture
    uuid: str = field(default_factory=_new_uuid)

    @classmethod
    def text(cls, text: str, font_size: int = MaterialConstants.DEFAULT_FONT_SIZE,
             font_face: str = MaterialConstants.DEFAULT_FONT_FACE) -> "Texture":
        return cls(TextTexture(text, font_size, font_face))

    @classmethod
    def image(cls) -> "Texture":
        return cls(ImageTexture())

    def to_dict(self) -> Dict[str, Any]:
        data = {"uuid": self.uuid}
        data.update(self.texture_type.to_dict())
        return data


# Supported image types and their MIME prefix
_IMAGE_MIME_TYPES = {
    "png": "data:image/png;base64,",
}


@dataclass
class Image:
    """Image embedded as a data URL."""
    url: str
    uuid: str = field(default_factory=_new_uuid)

    @classmethod
    def from_file(cls, path: str | Path) -> "Image":
        """
        Load an image file as a data URL.

        Args:
            path: Path to a PNG file

        Returns:
            Image with the file contents base64 encoded

        Raises:
            UnsupportedImageError: If the file type is not PNG
            OSError: If the file cannot be read
        """
        path = Path(path)
        extension = path.suffix.lstrip(".").lower()
        prefix = _IMAGE_MIME_TYPES.get(extension)
        if prefix is None:
            raise UnsupportedImageError(
                f"Unsupported image type '{extension}' for {path} (supported: "
                f"{', '.join(sorted(_IMAGE_MIME_TYPES))})"
            )

        encoded = base64.b64encode(path.read_bytes()).decode("ascii")
        return cls(url=prefix + encoded)

    def to_dict(self) -> Dict[str, Any]:
        return {"uuid": self.uuid, "url": self.url}

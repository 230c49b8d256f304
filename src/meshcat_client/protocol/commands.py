"""
Meshcat Command Types

Defines the structure of the commands sent to meshcat-server. Every command
carries its type tag and the scene path it applies to.
"""

from dataclasses import dataclass, field
from typing import Any, Dict

import numpy as np

from meshcat_client.constants import ProtocolConstants
from meshcat_client.protocol.properties import Property
from meshcat_client.scene import transforms
from meshcat_client.scene.objects import LumpedObject


@dataclass
class Command:
    """Base command: a type tag and a scene path."""
    path: str

    TYPE = ""

    @property
    def command_type(self) -> str:
        return self.TYPE

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "type": self.TYPE}


@dataclass
class SetObject(Command):
    """
    Replace the object at a path.

    Sent from client to server with the full three.js object payload.
    """
    object: LumpedObject = None

    TYPE = ProtocolConstants.SET_OBJECT

    def __post_init__(self):
        if self.object is None:
            raise ValueError("SetObject requires an object")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "object": self.object.to_dict(),
            "path": self.path,
            "type": self.TYPE,
        }


@dataclass
class SetTransform(Command):
    """Set the pose of a path relative to its parent."""
    matrix: np.ndarray = field(default_factory=transforms.identity)

    TYPE = ProtocolConstants.SET_TRANSFORM

    def __post_init__(self):
        self.matrix = transforms.as_matrix(self.matrix)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "matrix": transforms.to_column_major(self.matrix),
            "path": self.path,
            "type": self.TYPE,
        }


@dataclass
class SetProperty(Command):
    """Set a single property (visibility, color, ...) of a path."""
    property: Property = None

    TYPE = ProtocolConstants.SET_PROPERTY

    def __post_init__(self):
        if self.property is None:
            raise ValueError("SetProperty requires a property")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "type": self.TYPE,
            "property": self.property.wire_name,
            "value": self.property.value,
        }


@dataclass
class Delete(Command):
    """Delete a path and everything below it."""

    TYPE = ProtocolConstants.DELETE

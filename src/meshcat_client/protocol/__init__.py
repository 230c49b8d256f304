"""
Command Encoder

Commands (set_object, set_transform, set_property, delete) and their
msgpack multipart wire format.
"""

from .commands import Command, SetObject, SetTransform, SetProperty, Delete
from .properties import Property, PropertyName
from .codec import encode, decode, pack, unpack

__all__ = [
    "Command",
    "SetObject",
    "SetTransform",
    "SetProperty",
    "Delete",
    "Property",
    "PropertyName",
    "encode",
    "decode",
    "pack",
    "unpack",
]

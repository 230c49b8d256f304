"""
Scene Properties

Values accepted by set_property. Each property has a fixed value shape:

    visible            bool
    position           (x, y, z)
    quaternion         (x, y, z, w)
    scale              (x, y, z)
    color              (r, g, b, a)   components in [0, 1]
    opacity            float
    modulated_opacity  float
    top_color          (r, g, b)      background gradient
    bottom_color       (r, g, b)
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence, Union

import numpy as np


class PropertyName(Enum):
    """Property name on the wire and the number of components it takes (0 = scalar)."""

    VISIBLE = ("visible", 0)
    POSITION = ("position", 3)
    QUATERNION = ("quaternion", 4)
    SCALE = ("scale", 3)
    COLOR = ("color", 4)
    OPACITY = ("opacity", 0)
    MODULATED_OPACITY = ("modulated_opacity", 0)
    TOP_COLOR = ("top_color", 3)
    BOTTOM_COLOR = ("bottom_color", 3)

    def __init__(self, wire_name: str, arity: int):
        self.wire_name = wire_name
        self.arity = arity


PropertyValue = Union[bool, float, List[float]]


def _vector(name: PropertyName, value: Sequence[float]) -> List[float]:
    array = np.asarray(value, dtype=float).ravel()
    if array.shape != (name.arity,):
        raise ValueError(
            f"Property '{name.wire_name}' takes {name.arity} components, got {array.size}"
        )
    return array.tolist()


@dataclass(frozen=True)
class Property:
    """
    A validated property name/value pair.

    Usage:
        Property.visible(False)
        Property.position((0.0, 0.0, 1.0))
        Property.top_color((0.5, 0.8, 0.5))
    """
    name: PropertyName
    value: PropertyValue

    @classmethod
    def create(cls, name: PropertyName, value) -> "Property":
        """Validate value against the property's shape."""
        if name is PropertyName.VISIBLE:
            if not isinstance(value, (bool, np.bool_)):
                raise ValueError(f"Property 'visible' takes a bool, got {type(value).__name__}")
            return cls(name, bool(value))
        if name.arity == 0:
            if isinstance(value, bool) or not isinstance(value, (int, float, np.number)):
                raise ValueError(f"Property '{name.wire_name}' takes a number, got {value!r}")
            return cls(name, float(value))
        return cls(name, _vector(name, value))

    @classmethod
    def from_wire_name(cls, wire_name: str, value) -> "Property":
        for name in PropertyName:
            if name.wire_name == wire_name:
                return cls.create(name, value)
        raise ValueError(f"Unknown property '{wire_name}'")

    @classmethod
    def visible(cls, value: bool) -> "Property":
        return cls.create(PropertyName.VISIBLE, value)

    @classmethod
    def position(cls, value: Sequence[float]) -> "Property":
        return cls.create(PropertyName.POSITION, value)

    @classmethod
    def quaternion(cls, value: Sequence[float]) -> "Property":
        return cls.create(PropertyName.QUATERNION, value)

    @classmethod
    def scale(cls, value: Sequence[float]) -> "Property":
        return cls.create(PropertyName.SCALE, value)

    @classmethod
    def color(cls, value: Sequence[float]) -> "Property":
        return cls.create(PropertyName.COLOR, value)

    @classmethod
    def opacity(cls, value: float) -> "Property":
        return cls.create(PropertyName.OPACITY, value)

    @classmethod
    def modulated_opacity(cls, value: float) -> "Property":
        return cls.create(PropertyName.MODULATED_OPACITY, value)

    @classmethod
    def top_color(cls, value: Sequence[float]) -> "Property":
        return cls.create(PropertyName.TOP_COLOR, value)

    @classmethod
    def bottom_color(cls, value: Sequence[float]) -> "Property":
        return cls.create(PropertyName.BOTTOM_COLOR, value)

    @property
    def wire_name(self) -> str:
        return self.name.wire_name

"""
Scene Tree

Local mirror of the scene graph held by the meshcat server. Nodes are
addressed by absolute '/'-separated paths and exist only because a client
call created them: writing to a path creates any missing ancestors, and
deleting a path removes its whole subtree.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

import numpy as np

from meshcat_client.errors import InvalidPathError
from meshcat_client.scene import transforms
from meshcat_client.scene.objects import LumpedObject

ROOT = "/"


def normalize_path(path: str) -> str:
    """
    Canonical form of a scene path.

    '/a//b/' -> '/a/b', '/' -> '/'

    Raises:
        InvalidPathError: If the path is empty or not absolute
    """
    if not isinstance(path, str) or not path:
        raise InvalidPathError(str(path), "scene paths must be non-empty strings")
    if not path.startswith("/"):
        raise InvalidPathError(path)

    segments = [segment for segment in path.split("/") if segment]
    return ROOT + "/".join(segments)


def split_path(path: str) -> List[str]:
    """Path segments, root first excluded: '/a/b' -> ['a', 'b']."""
    return [segment for segment in normalize_path(path).split("/") if segment]


def join_path(*parts: str) -> str:
    """Join path pieces into a normalized absolute path."""
    return normalize_path(ROOT + "/".join(part.strip("/") for part in parts if part.strip("/")))


@dataclass
class SceneNode:
    """One node of the mirrored scene."""
    name: str
    path: str
    transform: np.ndarray = field(default_factory=transforms.identity)
    object: Optional[LumpedObject] = None
    properties: Dict[str, Any] = field(default_factory=dict)
    children: Dict[str, "SceneNode"] = field(default_factory=dict)

    def child(self, name: str) -> "SceneNode":
        """Get or create a direct child."""
        node = self.children.get(name)
        if node is None:
            path = self.path.rstrip("/") + "/" + name
            node = SceneNode(name=name, path=path)
            self.children[name] = node
        return node

    def walk(self) -> Iterator["SceneNode"]:
        """Depth-first iteration over this node and its descendants."""
        yield self
        for child in self.children.values():
            yield from child.walk()


class SceneTree:
    """
    Path-addressed scene mirror.

    Usage:
        tree = SceneTree()
        tree.set_object("/robot/base", base_object)
        tree.set_transform("/robot", transforms.translation(1.0, 0.0, 0.0))
        tree.delete("/robot")
    """

    def __init__(self):
        self.root = SceneNode(name="", path=ROOT)

    def _find(self, path: str) -> Optional[SceneNode]:
        node = self.root
        for segment in split_path(path):
            node = node.children.get(segment)
            if node is None:
                return None
        return node

    def _ensure(self, path: str) -> SceneNode:
        node = self.root
        for segment in split_path(path):
            node = node.child(segment)
        return node

    def get(self, path: str) -> Optional[SceneNode]:
        """Node at path, or None."""
        return self._find(path)

    def __contains__(self, path: str) -> bool:
        return self._find(path) is not None

    def __len__(self) -> int:
        return sum(1 for _ in self.root.walk()) - 1

    def set_object(self, path: str, lumped_object: LumpedObject) -> SceneNode:
        node = self._ensure(path)
        node.object = lumped_object
        return node

    def set_transform(self, path: str, matrix) -> SceneNode:
        node = self._ensure(path)
        node.transform = transforms.as_matrix(matrix).copy()
        return node

    def set_property(self, path: str, name: str, value: Any) -> SceneNode:
        node = self._ensure(path)
        node.properties[name] = value
        return node

    def delete(self, path: str) -> bool:
        """
        Remove a node and its subtree.

        Deleting the root clears the scene but keeps the root node.

        Returns:
            True if something was removed
        """
        segments = split_path(path)
        if not segments:
            removed = bool(self.root.children)
            self.root.children.clear()
            return removed

        parent = self._find(ROOT + "/".join(segments[:-1]))
        if parent is None:
            return False
        return parent.children.pop(segments[-1], None) is not None

    def clear(self):
        self.root.children.clear()

    def walk(self) -> Iterator[SceneNode]:
        """All nodes below the root, depth first."""
        for child in self.root.children.values():
            yield from child.walk()

    def paths(self) -> List[str]:
        return [node.path for node in self.walk()]

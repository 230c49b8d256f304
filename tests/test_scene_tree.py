"""
tests/test_scene_tree.py - Path handling and the local scene mirror
"""

import numpy as np
import pytest

from meshcat_client.errors import InvalidPathError
from meshcat_client.scene import transforms
from meshcat_client.scene.geometry import BoxGeometry, Geometry
from meshcat_client.scene.objects import LumpedObject
from meshcat_client.scene.tree import SceneTree, join_path, normalize_path, split_path


class TestPaths:

    @pytest.mark.parametrize("raw,expected", [
        ("/", "/"),
        ("//", "/"),
        ("/a", "/a"),
        ("/a/", "/a"),
        ("/a//b", "/a/b"),
        ("/robot/base_link/", "/robot/base_link"),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_path(raw) == expected

    @pytest.mark.parametrize("raw", ["", "a/b", "robot", None])
    def test_invalid(self, raw):
        with pytest.raises(InvalidPathError):
            normalize_path(raw)

    def test_invalid_path_is_a_value_error(self):
        with pytest.raises(ValueError):
            normalize_path("relative")

    def test_split_and_join(self):
        assert split_path("/") == []
        assert split_path("/a/b") == ["a", "b"]
        assert join_path("/robot", "link/", "/joint") == "/robot/link/joint"
        assert join_path() == "/"


@pytest.fixture
def box():
    return LumpedObject.from_geometry(Geometry(BoxGeometry(1, 1, 1)))


class TestSceneTree:

    def test_empty(self):
        tree = SceneTree()
        assert len(tree) == 0
        assert "/" in tree
        assert tree.get("/") is tree.root

    def test_set_object_creates_ancestors(self, box):
        tree = SceneTree()
        tree.set_object("/robot/arm/hand", box)

        assert tree.paths() == ["/robot", "/robot/arm", "/robot/arm/hand"]
        assert tree.get("/robot/arm/hand").object is box
        assert tree.get("/robot").object is None

    def test_set_transform_copies_matrix(self):
        tree = SceneTree()
        matrix = transforms.translation(1.0, 0.0, 0.0)
        tree.set_transform("/a", matrix)
        matrix[0, 3] = 5.0
        np.testing.assert_allclose(tree.get("/a").transform[:3, 3], [1.0, 0.0, 0.0])

    def test_new_nodes_start_at_identity(self, box):
        tree = SceneTree()
        tree.set_object("/a/b", box)
        np.testing.assert_allclose(tree.get("/a").transform, np.eye(4))

    def test_set_property(self):
        tree = SceneTree()
        tree.set_property("/Axes", "visible", False)
        assert tree.get("/Axes").properties == {"visible": False}

    def test_delete_removes_subtree(self, box):
        tree = SceneTree()
        tree.set_object("/a/b/c", box)
        tree.set_object("/a/d", box)

        assert tree.delete("/a/b") is True
        assert tree.paths() == ["/a", "/a/d"]
        assert "/a/b/c" not in tree

    def test_delete_missing_path_is_noop(self, box):
        tree = SceneTree()
        tree.set_object("/a", box)
        assert tree.delete("/x/y") is False
        assert tree.delete("/a/missing") is False
        assert tree.paths() == ["/a"]

    def test_delete_root_clears_scene(self, box):
        tree = SceneTree()
        tree.set_object("/a", box)
        tree.set_object("/b", box)

        assert tree.delete("/") is True
        assert len(tree) == 0
        assert tree.delete("/") is False

    def test_paths_are_normalized(self, box):
        tree = SceneTree()
        tree.set_object("//a//b/", box)
        assert "/a/b" in tree
        assert tree.get("/a/b").path == "/a/b"

    def test_invalid_path(self, box):
        tree = SceneTree()
        with pytest.raises(InvalidPathError):
            tree.set_object("a", box)

"""
tests/test_visualizer.py - Meshcat client and its scene mirror
"""

import numpy as np
import pytest

from meshcat_client.config import MeshcatConfig
from meshcat_client.errors import CommandTimeoutError, InvalidPathError
from meshcat_client.protocol.properties import Property
from meshcat_client.scene import transforms
from meshcat_client.scene.geometry import BoxGeometry, Geometry
from meshcat_client.scene.objects import LumpedObject
from meshcat_client.visualizer import Meshcat
from conftest import RecordingChannel


@pytest.fixture
def box():
    return LumpedObject.from_geometry(Geometry(BoxGeometry(1, 1, 1)))


class TestCommands:

    def test_set_object(self, recording_channel, box):
        meshcat = Meshcat(channel=recording_channel)

        assert meshcat.set_object("/robot/base/", box) == "ok"

        (command,) = recording_channel.commands
        assert command["type"] == "set_object"
        assert command["path"] == "/robot/base"
        assert command["object"]["object"]["uuid"] == box.object.uuid
        assert meshcat.scene.get("/robot/base").object is box

    def test_set_transform(self, recording_channel):
        meshcat = Meshcat(channel=recording_channel)
        meshcat.set_transform("/a", transforms.translation(0.0, 0.0, 3.0))

        assert recording_channel.commands[0]["matrix"][14] == 3.0
        np.testing.assert_allclose(meshcat.scene.get("/a").transform[:3, 3], [0.0, 0.0, 3.0])

    def test_set_property(self, recording_channel):
        meshcat = Meshcat(channel=recording_channel)
        meshcat.set_property("/Axes", Property.visible(False))

        assert recording_channel.commands[0] == {
            "path": "/Axes",
            "type": "set_property",
            "property": "visible",
            "value": False,
        }
        assert meshcat.scene.get("/Axes").properties["visible"] is False

    def test_delete(self, recording_channel, box):
        meshcat = Meshcat(channel=recording_channel)
        meshcat.set_object("/a/b", box)
        meshcat.delete("/a")

        assert recording_channel.commands[-1] == {"path": "/a", "type": "delete"}
        assert len(meshcat.scene) == 0

    def test_commands_keep_call_order(self, recording_channel, box):
        meshcat = Meshcat(channel=recording_channel)
        meshcat.set_object("/a", box)
        meshcat.set_transform("/a", transforms.identity())
        meshcat.set_property("/a", Property.opacity(0.5))
        meshcat.delete("/a")

        assert [c["type"] for c in recording_channel.commands] == [
            "set_object", "set_transform", "set_property", "delete",
        ]

    def test_invalid_path_sends_nothing(self, recording_channel, box):
        meshcat = Meshcat(channel=recording_channel)
        with pytest.raises(InvalidPathError):
            meshcat.set_object("box", box)
        assert recording_channel.frames == []


class TestMirror:

    def test_failed_send_leaves_mirror_untouched(self, box):
        channel = RecordingChannel(error=CommandTimeoutError("tcp://127.0.0.1:6000", "set_object", 4))
        meshcat = Meshcat(channel=channel)

        with pytest.raises(CommandTimeoutError):
            meshcat.set_object("/box", box)
        assert "/box" not in meshcat.scene

    def test_failed_delete_keeps_node(self, box):
        channel = RecordingChannel()
        meshcat = Meshcat(channel=channel)
        meshcat.set_object("/box", box)

        channel.error = CommandTimeoutError("tcp://127.0.0.1:6000", "delete", 1)
        with pytest.raises(CommandTimeoutError):
            meshcat.delete("/box")
        assert "/box" in meshcat.scene


class TestLifecycle:

    def test_context_manager_closes_channel(self, recording_channel):
        with Meshcat(channel=recording_channel) as meshcat:
            assert meshcat.is_connected()
        assert recording_channel.closed

    def test_repr(self, recording_channel, box):
        meshcat = Meshcat(endpoint="tcp://127.0.0.1:7000", channel=recording_channel)
        meshcat.set_object("/a/b", box)
        assert repr(meshcat) == "Meshcat(endpoint='tcp://127.0.0.1:7000', nodes=2)"

    def test_against_server(self, fake_server, box):
        config = MeshcatConfig(endpoint=fake_server.endpoint, timeout_ms=2000)
        with Meshcat(config=config) as meshcat:
            meshcat.set_object("/box", box)
            meshcat.set_transform("/box", transforms.translation(1.0, 0.0, 0.0))

        assert [c["type"] for c in fake_server.commands] == ["set_object", "set_transform"]
        assert fake_server.received[0][:2] == [b"set_object", b"/box"]

    def test_endpoint_argument_overrides_config(self, fake_server):
        config = MeshcatConfig(endpoint="tcp://127.0.0.1:1", timeout_ms=2000)
        with Meshcat(fake_server.endpoint, config=config) as meshcat:
            assert meshcat.delete("/") == "ok"

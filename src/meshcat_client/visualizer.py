"""
Meshcat Visualizer

High-level wrapper that drives a meshcat viewer with a single, simple
interface. Encapsulates path handling, command encoding, the transport and a
local mirror of the scene.

This is the highest level of abstraction - what scripts and simulations use.
"""

from typing import Optional

from meshcat_client.config import MeshcatConfig
from meshcat_client.protocol import codec
from meshcat_client.protocol.commands import Command, Delete, SetObject, SetProperty, SetTransform
from meshcat_client.protocol.properties import Property
from meshcat_client.scene.objects import LumpedObject
from meshcat_client.scene.tree import SceneTree, normalize_path
from meshcat_client.transport.base import ICommandChannel
from meshcat_client.transport.zmq_channel import ZMQCommandChannel


class Meshcat:
    """
    Client for a running meshcat-server.

    Usage:
        # Start the viewer first: meshcat-server --open
        meshcat = Meshcat("tcp://127.0.0.1:6000")

        meshcat.set_object("/box", LumpedObject.from_geometry(Geometry(BoxGeometry(1, 1, 1))))
        meshcat.set_transform("/box", transforms.translation(0.0, 1.0, 0.0))
        meshcat.set_property("/Axes", Property.visible(False))
        meshcat.delete("/box")

        meshcat.close()

    The local `scene` mirror is updated only after the server has
    acknowledged a command, so it reflects what the viewer holds.
    """

    def __init__(
        self,
        endpoint: Optional[str] = None,
        channel: Optional[ICommandChannel] = None,
        config: Optional[MeshcatConfig] = None,
    ):
        """
        Initialize the visualizer.

        Args:
            endpoint: ZMQ URL of meshcat-server (overrides config)
            channel: Ready-made channel (skips creating a ZMQ channel)
            config: Connection settings (default: MeshcatConfig())
        """
        self.config = config if config is not None else MeshcatConfig()
        self.endpoint = endpoint if endpoint is not None else self.config.endpoint
        self.verbose = self.config.verbose

        if channel is not None:
            self._channel = channel
        else:
            self._channel = ZMQCommandChannel(
                endpoint=self.endpoint,
                timeout_ms=self.config.timeout_ms,
                retries=self.config.retries,
                linger_ms=self.config.linger_ms,
                verbose=self.verbose,
            )

        self.scene = SceneTree()

    @property
    def channel(self) -> ICommandChannel:
        return self._channel

    def _send(self, command: Command) -> str:
        reply = self._channel.send(codec.encode(command))
        if self.verbose:
            print(f"[Meshcat] {command.command_type} {command.path} -> {reply}")
        return reply

    def set_object(self, path: str, lumped_object: LumpedObject) -> str:
        """
        Create or replace the object at a path.

        Args:
            path: Scene path, e.g. "/robot/base"
            lumped_object: Geometry, material and object tree

        Returns:
            Server reply
        """
        path = normalize_path(path)
        reply = self._send(SetObject(path=path, object=lumped_object))
        self.scene.set_object(path, lumped_object)
        return reply

    def set_transform(self, path: str, matrix) -> str:
        """
        Set the pose of a path relative to its parent.

        Args:
            path: Scene path
            matrix: 4x4 homogeneous matrix

        Returns:
            Server reply
        """
        path = normalize_path(path)
        command = SetTransform(path=path, matrix=matrix)
        reply = self._send(command)
        self.scene.set_transform(path, command.matrix)
        return reply

    def set_property(self, path: str, prop: Property) -> str:
        """
        Set one property of a path, e.g. Property.visible(False).

        Returns:
            Server reply
        """
        path = normalize_path(path)
        reply = self._send(SetProperty(path=path, property=prop))
        self.scene.set_property(path, prop.wire_name, prop.value)
        return reply

    def delete(self, path: str) -> str:
        """
        Delete a path and everything below it.

        Returns:
            Server reply
        """
        path = normalize_path(path)
        reply = self._send(Delete(path=path))
        self.scene.delete(path)
        return reply

    def is_connected(self) -> bool:
        return self._channel.is_connected()

    def close(self):
        """Close the connection to the server."""
        self._channel.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self) -> str:
        return f"Meshcat(endpoint={self.endpoint!r}, nodes={len(self.scene)})"

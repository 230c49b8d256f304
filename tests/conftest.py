"""
Meshcat Client Test Configuration and Fixtures

Provides a fake meshcat-server (ZMQ ROUTER on a random port) and a
recording channel for tests that do not need a socket.
"""

import threading
from typing import List, Sequence

import pytest
import zmq

from meshcat_client.protocol import codec
from meshcat_client.transport.base import ICommandChannel


class FakeMeshcatServer:
    """
    Stand-in for meshcat-server.

    Replies "ok" to every request after the first `drop_first`, which are
    swallowed to simulate a server that stalls.
    """

    def __init__(self, drop_first: int = 0, reply: bytes = b"ok"):
        self.context = zmq.Context()
        self.socket = self.context.socket(zmq.ROUTER)
        port = self.socket.bind_to_random_port("tcp://127.0.0.1")
        self.endpoint = f"tcp://127.0.0.1:{port}"

        self.drop_first = drop_first
        self.reply = reply
        self.received: List[List[bytes]] = []
        self.dropped = 0

        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._serve, daemon=True)

    def start(self) -> "FakeMeshcatServer":
        self._thread.start()
        return self

    def _serve(self):
        poller = zmq.Poller()
        poller.register(self.socket, zmq.POLLIN)
        while not self._stop.is_set():
            if not dict(poller.poll(20)):
                continue
            identity, _empty, *frames = self.socket.recv_multipart()
            if self.dropped < self.drop_first:
                self.dropped += 1
                continue
            self.received.append(frames)
            self.socket.send_multipart([identity, b"", self.reply])

    @property
    def commands(self) -> List[dict]:
        """Decoded payloads in arrival order."""
        return [codec.decode(frames) for frames in self.received]

    def stop(self):
        self._stop.set()
        self._thread.join(timeout=2.0)
        self.socket.close(linger=0)
        self.context.term()


class RecordingChannel(ICommandChannel):
    """In-memory channel that records frames; optionally fails every send."""

    def __init__(self, error: Exception | None = None):
        self.frames: List[List[bytes]] = []
        self.error = error
        self.closed = False

    def send(self, frames: Sequence[bytes]) -> str:
        if self.error is not None:
            raise self.error
        self.frames.append(list(frames))
        return "ok"

    @property
    def commands(self) -> List[dict]:
        return [codec.decode(frames) for frames in self.frames]

    def close(self) -> None:
        self.closed = True

    def is_connected(self) -> bool:
        return not self.closed

    def get_stats(self) -> dict:
        return {'commands_sent': len(self.frames), 'retries': 0, 'timeouts': 0}


@pytest.fixture
def fake_server():
    """Running fake meshcat-server that acknowledges everything."""
    server = FakeMeshcatServer().start()
    yield server
    server.stop()


@pytest.fixture
def stalled_server():
    """Fake meshcat-server that never replies."""
    server = FakeMeshcatServer(drop_first=10_000).start()
    yield server
    server.stop()


@pytest.fixture
def recording_channel():
    return RecordingChannel()

"""
ZMQ Command Channel

REQ client for meshcat-server. Each command is sent as a multipart message
and the server answers with a short string once it has applied it.

REQ/REP allows exactly one request in flight, so commands reach the viewer
in the order they are sent. A lock extends that guarantee to callers on
different threads.

Usage:
    channel = ZMQCommandChannel("tcp://127.0.0.1:6000")
    reply = channel.send(encode(command))
    channel.close()
"""

import threading
from typing import Any, Dict, Optional, Sequence

import zmq

from meshcat_client.constants import ProtocolConstants, TransportConstants
from meshcat_client.errors import ChannelClosedError, CommandTimeoutError, TransportError
from meshcat_client.transport.base import ICommandChannel


class ZMQCommandChannel(ICommandChannel):
    """
    Request/reply channel to meshcat-server.

    A REQ socket that missed a reply cannot send again, so on timeout the
    socket is dropped, reconnected and the request resent ("lazy pirate").
    """

    def __init__(
        self,
        endpoint: str = TransportConstants.DEFAULT_ENDPOINT,
        context: Optional[zmq.Context] = None,
        timeout_ms: int = TransportConstants.DEFAULT_TIMEOUT_MS,
        retries: int = TransportConstants.DEFAULT_RETRIES,
        linger_ms: int = TransportConstants.DEFAULT_LINGER_MS,
        verbose: bool = False,
    ):
        """
        Initialize the channel and connect.

        Args:
            endpoint: ZMQ URL of meshcat-server (its --zmq-url)
            context: ZMQ context (optional, will create if not provided)
            timeout_ms: Time to wait for each reply, in milliseconds
            retries: Resend attempts after a timeout
            linger_ms: Time pending messages may linger on close
            verbose: Print every request/reply
        """
        if timeout_ms <= 0:
            raise ValueError(f"timeout_ms must be positive, got {timeout_ms}")
        if retries < 0:
            raise ValueError(f"retries must be >= 0, got {retries}")

        self.endpoint = endpoint
        self.timeout_ms = timeout_ms
        self.retries = retries
        self.linger_ms = linger_ms
        self.verbose = verbose

        # Create or use provided context
        self.context = context if context else zmq.Context()
        self.owns_context = context is None

        self.lock = threading.Lock()
        self.socket: Optional[zmq.Socket] = None
        self._closed = False

        # Stats
        self.sent_count = 0
        self.retry_count = 0
        self.timeout_count = 0

        try:
            self._connect()
        except TransportError:
            if self.owns_context:
                self.context.term()
            raise

    def _connect(self):
        """Create the REQ socket and connect it to the server."""
        self.socket = self.context.socket(zmq.REQ)
        self.socket.setsockopt(zmq.RCVTIMEO, self.timeout_ms)
        self.socket.setsockopt(zmq.LINGER, self.linger_ms)
        try:
            self.socket.connect(self.endpoint)
        except zmq.ZMQError as e:
            self.socket.close()
            self.socket = None
            raise TransportError(f"Failed to connect to meshcat server '{self.endpoint}': {e}") from e

        if self.verbose:
            print(f"[Channel] ✓ Connected to {self.endpoint}")

    def _reconnect(self):
        """Drop a socket stuck waiting for a reply and open a fresh one."""
        if self.socket is not None:
            self.socket.setsockopt(zmq.LINGER, 0)
            self.socket.close()
            self.socket = None
        self._connect()

    def send(self, frames: Sequence[bytes]) -> str:
        """
        Send one command and wait for the server's reply.

        Args:
            frames: Multipart frames [type, path, payload]

        Returns:
            Reply string from the server

        Raises:
            ChannelClosedError: If the channel was closed
            CommandTimeoutError: If no reply arrived after all retries
            TransportError: On any other ZMQ failure
        """
        command = frames[0].decode(ProtocolConstants.ENCODING, errors="replace") if frames else "?"
        attempts = self.retries + 1

        with self.lock:
            if self._closed:
                raise ChannelClosedError(f"Channel to {self.endpoint} is closed")

            for attempt in range(1, attempts + 1):
                try:
                    self.socket.send_multipart(list(frames))
                    reply = self.socket.recv_string()
                except zmq.Again:
                    self.timeout_count += 1
                    print(f"[Channel] ✗ No reply for '{command}' "
                          f"(attempt {attempt}/{attempts}, {self.timeout_ms}ms)")
                    self._reconnect()
                    if attempt < attempts:
                        self.retry_count += 1
                    continue
                except zmq.ZMQError as e:
                    raise TransportError(f"Error sending '{command}' to {self.endpoint}: {e}") from e

                self.sent_count += 1
                if self.verbose:
                    print(f"[Channel] Received reply {self.sent_count} {reply}")
                return reply

        raise CommandTimeoutError(self.endpoint, command, attempts)

    def is_connected(self) -> bool:
        """True while the channel is open."""
        return not self._closed and self.socket is not None

    def close(self):
        """Close the channel and cleanup resources."""
        with self.lock:
            if self._closed:
                return
            self._closed = True

            if self.socket is not None:
                self.socket.close()
                self.socket = None
            if self.owns_context and self.context:
                self.context.term()

        if self.verbose:
            print(f"[Channel] Closed connection to {self.endpoint}")

    def get_stats(self) -> Dict[str, Any]:
        """Get channel statistics."""
        return {
            'endpoint': self.endpoint,
            'commands_sent': self.sent_count,
            'retries': self.retry_count,
            'timeouts': self.timeout_count,
        }

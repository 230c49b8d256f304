"""
Meshcat Client Errors

Every exception raised by the library derives from MeshcatError, so callers
can catch the whole family at once.
"""


class MeshcatError(Exception):
    """Base class for all meshcat client errors."""


class InvalidPathError(MeshcatError, ValueError):
    """Scene path is empty or not absolute."""

    def __init__(self, path: str, reason: str = "scene paths must start with '/'"):
        self.path = path
        super().__init__(f"Invalid scene path {path!r}: {reason}")


class EncodingError(MeshcatError):
    """Command payload could not be packed for the wire."""


class UnsupportedGeometryError(MeshcatError, ValueError):
    """Geometry kind has no meshcat counterpart (e.g. URDF capsules)."""


class UnsupportedImageError(MeshcatError, ValueError):
    """Image file type cannot be embedded as a texture."""


class TransportError(MeshcatError, RuntimeError):
    """Failure talking to the meshcat server."""


class CommandTimeoutError(TransportError):
    """Server did not reply within the timeout, after all retries."""

    def __init__(self, endpoint: str, command: str, attempts: int):
        self.endpoint = endpoint
        self.command = command
        self.attempts = attempts
        super().__init__(
            f"No reply from meshcat server at {endpoint} for '{command}' "
            f"after {attempts} attempt(s). Is meshcat-server running?"
        )


class ChannelClosedError(TransportError):
    """Command sent on a channel that was already closed."""


class UrdfError(MeshcatError, ValueError):
    """Robot description is malformed or missing required elements."""

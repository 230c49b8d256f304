"""
Command Channel Interface

Abstract interface for delivering encoded commands to the viewer.
Allows swapping the ZMQ channel for a recording one in tests.
"""

from abc import ABC, abstractmethod
from typing import Sequence


class ICommandChannel(ABC):
    """
    Abstract interface for command delivery.

    Implementations: ZMQ (meshcat-server), Mock (for testing)
    """

    @abstractmethod
    def send(self, frames: Sequence[bytes]) -> str:
        """
        Deliver one encoded command and wait for the acknowledgement.

        Args:
            frames: Multipart frames [type, path, payload]

        Returns:
            Server reply
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Close channel and cleanup resources."""
        pass

    @abstractmethod
    def is_connected(self) -> bool:
        """Check if channel is open and ready."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

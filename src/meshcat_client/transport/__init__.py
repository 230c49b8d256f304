"""
Transport Client

Connection to meshcat-server and ordered, acknowledged command delivery.

Public API:
    - ICommandChannel: Abstract channel interface
    - ZMQCommandChannel: REQ/REP channel to meshcat-server
"""

from .base import ICommandChannel
from .zmq_channel import ZMQCommandChannel

__all__ = [
    "ICommandChannel",
    "ZMQCommandChannel",
]

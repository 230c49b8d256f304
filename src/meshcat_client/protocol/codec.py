"""
Wire Codec

meshcat-server expects each command as a three-frame multipart message:

    [command type, scene path, msgpack(command dict)]

The first two frames are UTF-8 strings so the server can route without
unpacking; the payload is a msgpack map keyed by field name.
"""

from typing import Any, Dict, List, Sequence

import msgpack
import numpy as np

from meshcat_client.constants import ProtocolConstants
from meshcat_client.errors import EncodingError
from meshcat_client.protocol.commands import Command


def _pack_default(value: Any) -> Any:
    """Convert numpy values msgpack does not know about."""
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, tuple):
        return list(value)
    raise TypeError(f"Cannot serialize object of type {type(value).__name__}")


def pack(data: Dict[str, Any]) -> bytes:
    """
    Pack a command dict with msgpack.

    Raises:
        EncodingError: If the dict holds values msgpack cannot encode
    """
    try:
        return msgpack.packb(data, use_bin_type=True, default=_pack_default)
    except (TypeError, ValueError, OverflowError) as e:
        raise EncodingError(f"Failed to encode command payload: {e}") from e


def unpack(payload: bytes) -> Dict[str, Any]:
    """Unpack a msgpack payload back into a dict."""
    try:
        return msgpack.unpackb(payload, raw=False)
    except (msgpack.ExtraData, msgpack.FormatError, msgpack.StackError, ValueError) as e:
        raise EncodingError(f"Failed to decode command payload: {e}") from e


def encode(command: Command) -> List[bytes]:
    """
    Encode a command into its multipart frames.

    Args:
        command: Command to send

    Returns:
        [type, path, payload] frames
    """
    data = command.to_dict()
    return [
        command.command_type.encode(ProtocolConstants.ENCODING),
        command.path.encode(ProtocolConstants.ENCODING),
        pack(data),
    ]


def decode(frames: Sequence[bytes]) -> Dict[str, Any]:
    """
    Decode multipart frames into the command dict.

    Raises:
        EncodingError: If the frames are malformed or disagree with the payload
    """
    if len(frames) != 3:
        raise EncodingError(f"Expected 3 frames, got {len(frames)}")

    command_type = frames[0].decode(ProtocolConstants.ENCODING)
    path = frames[1].decode(ProtocolConstants.ENCODING)
    data = unpack(frames[2])
    if not isinstance(data, dict):
        raise EncodingError(f"Payload must be a map, got {type(data).__name__}")

    if data.get("type") != command_type or data.get("path") != path:
        raise EncodingError(
            f"Frame header ({command_type}, {path}) does not match payload "
            f"({data.get('type')}, {data.get('path')})"
        )
    return data

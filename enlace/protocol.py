"""Wire format shared by every node: an operation code, a length and a payload."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum

INT = struct.Struct("<i")
HEADER = struct.Struct("<ii")


class OpCode(IntEnum):
    """Kind of frame carried on a connection."""

    MESSAGE = 0
    PACKET = 1


class ProtocolError(Exception):
    """Raised when received bytes do not follow the wire format."""


def _to_bytes(value: str | bytes) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8") + b"\0"
    return bytes(value)


def _c_string(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("utf-8", errors="replace")


@dataclass
class Packet:
    """A frame under construction: an operation code and its payload."""

    op_code: OpCode = OpCode.PACKET
    payload: bytearray = field(default_factory=bytearray)

    def add(self, value: str | bytes) -> None:
        """Append a length-prefixed value; text is sent NUL-terminated."""
        data = _to_bytes(value)
        self.payload += INT.pack(len(data))
        self.payload += data

    def serialize(self) -> bytes:
        """Return the frame as it is sent on the wire."""
        return HEADER.pack(int(self.op_code), len(self.payload)) + bytes(self.payload)

    @classmethod
    def message(cls, text: str) -> "Packet":
        """Build a single-message frame holding ``text``."""
        return cls(OpCode.MESSAGE, bytearray(_to_bytes(text)))


def encode_message(text: str) -> bytes:
    """Serialize ``text`` as a message frame."""
    return Packet.message(text).serialize()


def decode_message(payload: bytes) -> str:
    """Return the text of a message payload, up to its terminating NUL."""
    return _c_string(payload)


def decode_values(payload: bytes) -> list[str]:
    """Split a packet payload into its length-prefixed values."""
    values: list[str] = []
    offset = 0
    while offset < len(payload):
        if offset + INT.size > len(payload):
            raise ProtocolError("truncated value length")
        (size,) = INT.unpack_from(payload, offset)
        offset += INT.size
        if size < 0 or offset + size > len(payload):
            raise ProtocolError(f"invalid value length {size}")
        values.append(_c_string(payload[offset:offset + size]))
        offset += size
    return values
"""System Exclusive message model: decode a framed message and encode it back.

Message layout::

    +-----------+-------------------------+-------------------+------------+
    | Initiator | Manufacturer identifier |      Payload      | Terminator |
    | 0xF0      | 1 or 3 bytes            |  variable length  | 0xF7       |
    +-----------+-------------------------+-------------------+------------+

- Identifier: 1 byte for standard and universal IDs, ``00 b1 b2`` for extended
- Payload: every byte between identifier and terminator, kept verbatim
  (realtime bytes such as 0xF8 are not filtered out)

For universal messages the first two payload bytes are the sub-IDs.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

from .errors import MalformedFraming
from .manufacturers import (
    ManufacturerId,
    UniversalNonRealTime,
    UniversalRealTime,
    manufacturer_name,
    parse_identifier,
)

INITIATOR = 0xF0
TERMINATOR = 0xF7


@dataclass(frozen=True)
class Message:
    """A decoded System Exclusive message."""

    manufacturer: ManufacturerId
    payload: bytes = b""

    def __post_init__(self) -> None:
        # Accept any bytes-like payload but store immutable bytes
        try:
            payload = memoryview(self.payload).tobytes()
        except TypeError:
            raise TypeError(
                f"Payload must be bytes-like, got {type(self.payload).__name__}"
            ) from None
        object.__setattr__(self, "payload", payload)

    @classmethod
    def from_bytes(cls, data: bytes) -> Message:
        """Decode exactly one framed message.

        Args:
            data: ``F0 <identifier> <payload> F7``.

        Raises:
            MalformedFraming: If the initiator or terminator is missing.
            TruncatedIdentifier: If the identifier is incomplete.
        """
        data = bytes(data)
        if not data:
            raise MalformedFraming("Empty data is not a System Exclusive message")
        if data[0] != INITIATOR:
            raise MalformedFraming(
                f"Message must start with 0xF0, got 0x{data[0]:02X}"
            )
        if len(data) < 2 or data[-1] != TERMINATOR:
            raise MalformedFraming(
                f"Message must end with 0xF7, got 0x{data[-1]:02X}"
            )

        body = data[:-1]
        manufacturer, consumed = parse_identifier(body, 1)
        return cls(manufacturer=manufacturer, payload=body[1 + consumed :])

    def to_bytes(self) -> bytes:
        """Encode back to ``F0 <identifier> <payload> F7``."""
        return (
            bytes([INITIATOR])
            + self.manufacturer.to_bytes()
            + self.payload
            + bytes([TERMINATOR])
        )

    @property
    def is_universal(self) -> bool:
        return isinstance(self.manufacturer, (UniversalNonRealTime, UniversalRealTime))

    @property
    def universal_kind(self) -> str | None:
        """``"Non-Real-time"``, ``"Real-time"``, or ``None`` for manufacturer messages."""
        if isinstance(self.manufacturer, UniversalNonRealTime):
            return "Non-Real-time"
        if isinstance(self.manufacturer, UniversalRealTime):
            return "Real-time"
        return None

    @property
    def sub_id1(self) -> int | None:
        if self.is_universal and len(self.payload) >= 1:
            return self.payload[0]
        return None

    @property
    def sub_id2(self) -> int | None:
        if self.is_universal and len(self.payload) >= 2:
            return self.payload[1]
        return None

    @property
    def manufacturer_name(self) -> str:
        return manufacturer_name(self.manufacturer)

    def digest(self) -> str:
        """MD5 hex digest of the encoded message."""
        return hashlib.md5(self.to_bytes()).hexdigest()

    def __repr__(self) -> str:
        return (
            f"Message(manufacturer={self.manufacturer!s} ({self.manufacturer_name}), "
            f"payload={self.payload.hex(' ') if self.payload else '(empty)'})"
        )


def decode_message(data: bytes) -> Message:
    """Decode one framed message. See :meth:`Message.from_bytes`."""
    return Message.from_bytes(data)


def encode_message(message: Message) -> bytes:
    """Encode a message to its wire bytes. See :meth:`Message.to_bytes`."""
    return message.to_bytes()

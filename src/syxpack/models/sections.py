"""Section layout of a single SysEx message.

Offsets are relative to the message start (the 0xF0 byte)::

    000000: System Exclusive Initiator (Message initiator, 1 bytes)
    000001: Manufacturer (Manufacturer identifier, 3 bytes)
    000004: Message Payload (Message payload, 12 bytes)
    000010: System Exclusive Terminator (Message terminator, 1 bytes)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..protocol.message import Message


class SectionKind(Enum):
    INITIATOR = "Message initiator"
    MANUFACTURER = "Manufacturer identifier"
    UNIVERSAL = "Universal message identifier"
    PAYLOAD = "Message payload"
    TERMINATOR = "Message terminator"


@dataclass
class MessageSection:
    """A contiguous byte range of a message."""

    kind: SectionKind
    name: str
    offset: int
    length: int

    def __str__(self) -> str:
        return f"{self.offset:06X}: {self.name} ({self.kind.value}, {self.length} bytes)"

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.name.lower(),
            "name": self.name,
            "offset": self.offset,
            "length": self.length,
        }


def message_sections(message: Message) -> list[MessageSection]:
    """Break a message into initiator, identifier, payload and terminator.

    For universal messages the identifier section also covers the two
    sub-ID bytes (when present), and the payload section the rest.
    """
    sections = [
        MessageSection(SectionKind.INITIATOR, "System Exclusive Initiator", 0, 1)
    ]
    offset = 1
    id_length = len(message.manufacturer.to_bytes())
    payload_length = len(message.payload)

    if message.is_universal:
        sub_ids = min(2, payload_length)
        sections.append(
            MessageSection(SectionKind.UNIVERSAL, "Universal", offset, id_length + sub_ids)
        )
        offset += id_length + sub_ids
        payload_length -= sub_ids
    else:
        sections.append(
            MessageSection(SectionKind.MANUFACTURER, "Manufacturer", offset, id_length)
        )
        offset += id_length

    if payload_length:
        sections.append(
            MessageSection(SectionKind.PAYLOAD, "Message Payload", offset, payload_length)
        )
        offset += payload_length

    sections.append(
        MessageSection(SectionKind.TERMINATOR, "System Exclusive Terminator", offset, 1)
    )
    return sections


def format_sections(sections: list[MessageSection]) -> str:
    """Render sections one per line."""
    return "\n".join(str(section) for section in sections)

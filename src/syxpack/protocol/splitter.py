"""Split a buffer of concatenated SysEx messages into single messages."""

from __future__ import annotations

from .errors import MalformedFraming, SplitBoundaryMismatch
from .message import INITIATOR, TERMINATOR, Message


def message_count(data: bytes) -> int:
    """Return the number of 0xF7 terminators in ``data``."""
    return bytes(data).count(TERMINATOR)


def split_messages(data: bytes) -> list[bytes]:
    """Split ``data`` into one segment per terminator, in input order.

    Each segment runs from just after the previous terminator (or the
    buffer start) up to and including its own terminator.

    Raises:
        SplitBoundaryMismatch: If a segment does not start with 0xF0, or if
            non-terminated bytes follow the last terminator.
    """
    data = bytes(data)
    segments: list[bytes] = []
    start = 0
    while start < len(data):
        end = data.find(TERMINATOR, start)
        if end == -1:
            raise SplitBoundaryMismatch(
                f"{len(data) - start} unterminated byte(s) at offset {start}",
                index=len(segments),
                offset=start,
            )
        segment = data[start : end + 1]
        if segment[0] != INITIATOR:
            raise SplitBoundaryMismatch(
                f"Segment {len(segments)} at offset {start} starts with "
                f"0x{segment[0]:02X} instead of 0xF0",
                index=len(segments),
                offset=start,
            )
        segments.append(segment)
        start = end + 1
    return segments


def parse_messages(data: bytes) -> list[Message]:
    """Decode every message in ``data``, preserving input order.

    A buffer with a single terminator is decoded directly; otherwise it is
    split first and each segment decoded in turn.

    Raises:
        MalformedFraming: If non-empty ``data`` holds no terminator at all.
        SplitBoundaryMismatch: See :func:`split_messages`.
        TruncatedIdentifier: If a message has an incomplete identifier.
    """
    data = bytes(data)
    count = message_count(data)
    if count == 0:
        if data:
            raise MalformedFraming(
                f"No 0xF7 terminator found in {len(data)} byte(s)"
            )
        return []
    if count == 1:
        return [Message.from_bytes(data)]
    return [Message.from_bytes(segment) for segment in split_messages(data)]

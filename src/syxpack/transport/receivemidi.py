"""Convert ReceiveMIDI text output into framed SysEx captures.

ReceiveMIDI prints one MIDI message per line, for example::

    system-exclusive hex 43 10 4C 00 00 7E 00 dev "IAC Driver Bus 1"

The bytes between the delimiters follow the base word (``hex`` or ``dec``);
0xF0 and 0xF7 are not printed and have to be added back.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Iterable

from ..protocol.message import INITIATOR, TERMINATOR
from ..models.file_formats import SPLIT_NAME_DIGITS, SYX_SUFFIX

logger = logging.getLogger(__name__)

SYSEX_KEYWORD = "system-exclusive"
DEVICE_KEYWORD = "dev"


def parse_receivemidi_line(line: str) -> bytes | None:
    """Parse one ReceiveMIDI line into a framed SysEx message.

    Returns:
        ``F0 <data> F7``, or ``None`` if the line is not a SysEx message.
        Tokens that are not 7-bit data bytes in the given base are skipped,
        and the trailing ``dev "<port>"`` suffix is ignored.
    """
    parts = line.split()
    # Need at least "system-exclusive", the base, and one byte
    if len(parts) < 3 or parts[0] != SYSEX_KEYWORD:
        return None

    base = 16 if parts[1] == "hex" else 10
    data = bytearray([INITIATOR])
    for part in parts[2:]:
        # Everything from "dev" on names the input port
        if part == DEVICE_KEYWORD:
            break
        try:
            value = int(part, base)
        except ValueError:
            continue
        if 0 <= value <= 0x7F:
            data.append(value)
    data.append(TERMINATOR)
    return bytes(data)


def parse_receivemidi(lines: Iterable[str]) -> list[bytes]:
    """Collect the SysEx messages from ReceiveMIDI output, in order."""
    messages = []
    for line in lines:
        message = parse_receivemidi_line(line)
        if message is not None:
            messages.append(message)
    return messages


def save_capture(
    messages: list[bytes],
    output_dir: str | Path = ".",
    timestamp: int | None = None,
) -> list[Path]:
    """Write captured messages as ``<epoch>.syx`` files.

    A single message is written as ``<epoch>.syx``; several messages get a
    ``-001``, ``-002``... suffix so they do not overwrite each other.

    Returns:
        The paths written, in message order.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    if timestamp is None:
        timestamp = int(time.time())

    paths: list[Path] = []
    for i, message in enumerate(messages, start=1):
        if len(messages) == 1:
            name = f"{timestamp}{SYX_SUFFIX}"
        else:
            name = f"{timestamp}-{i:0{SPLIT_NAME_DIGITS}d}{SYX_SUFFIX}"
        path = output_dir / name
        path.write_bytes(message)
        logger.info("Received %d bytes of System Exclusive data -> %s", len(message), path)
        paths.append(path)
    return paths

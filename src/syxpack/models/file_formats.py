"""File handlers for ``.syx`` System Exclusive dumps.

A ``.syx`` file is raw MIDI data: one or more complete SysEx messages
concatenated with nothing in between.

- split: ``dump.syx`` -> ``dump-001.syx``, ``dump-002.syx``, ...
- extract: the payload of a single-message file, without delimiters or
  manufacturer identifier
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..protocol.errors import MultipleMessagesError
from ..protocol.message import Message
from ..protocol.splitter import message_count, parse_messages, split_messages

logger = logging.getLogger(__name__)

SYX_SUFFIX = ".syx"
SPLIT_NAME_DIGITS = 3


def read_syx(path: str | Path) -> bytes:
    """Read the raw bytes of a SysEx file."""
    return Path(path).read_bytes()


def load_messages(path: str | Path) -> list[Message]:
    """Read and decode every message in a SysEx file, in file order."""
    return parse_messages(read_syx(path))


def load_message(path: str | Path) -> Message:
    """Read a file that must hold exactly one message.

    Raises:
        MultipleMessagesError: If the file holds more than one message.
    """
    data = read_syx(path)
    count = message_count(data)
    if count > 1:
        raise MultipleMessagesError(count)
    return Message.from_bytes(data)


def split_file_name(path: str | Path, number: int) -> str:
    """Name of the ``number``-th (1-based) message split out of ``path``."""
    path = Path(path)
    suffix = path.suffix or SYX_SUFFIX
    return f"{path.stem}-{number:0{SPLIT_NAME_DIGITS}d}{suffix}"


def split_file(
    path: str | Path,
    output_dir: str | Path | None = None,
) -> list[Path]:
    """Write each message of a multi-message file to its own file.

    Args:
        path: Input ``.syx`` file.
        output_dir: Target directory; defaults to the input's directory.

    Returns:
        The paths written, in message order. Empty if the file holds fewer
        than two messages, since there is nothing to split.
    """
    path = Path(path)
    output_dir = Path(output_dir) if output_dir is not None else path.parent
    data = read_syx(path)

    count = message_count(data)
    logger.info("Found %d message(s) in %s", count, path)
    if count < 2:
        return []

    output_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for number, segment in enumerate(split_messages(data), start=1):
        out_path = output_dir / split_file_name(path, number)
        logger.info("Writing %s", out_path)
        out_path.write_bytes(segment)
        written.append(out_path)
    return written


def extract_payload(path: str | Path, output_path: str | Path) -> Path:
    """Write the payload of a single-message file to ``output_path``.

    For ``F0 42 30 28 54 02 ... 5C F7`` the output is ``30 28 54 02 ... 5C``.

    Raises:
        MultipleMessagesError: If the file holds more than one message.
    """
    message = load_message(path)
    output_path = Path(output_path)
    output_path.write_bytes(message.payload)
    logger.info("Wrote %d payload bytes to %s", len(message.payload), output_path)
    return output_path


def write_messages(messages: list[Message], path: str | Path) -> Path:
    """Write messages back-to-back into one SysEx file."""
    path = Path(path)
    path.write_bytes(b"".join(message.to_bytes() for message in messages))
    return path

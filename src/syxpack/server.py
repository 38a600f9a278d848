"""MCP server entry point for syxpack.

Exposes tools, resources, and prompts for inspecting and rearranging MIDI
System Exclusive dumps via the Model Context Protocol, using the official
Python MCP SDK with stdio transport.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from mcp.server.fastmcp import FastMCP

from .protocol.errors import SysExError
from .protocol.manufacturers import (
    MANUFACTURERS,
    DEVELOPMENT,
    EXTENDED_MARKER,
    NON_REAL_TIME,
    REAL_TIME,
    find_manufacturer,
    get_manufacturer,
)
from .protocol.message import INITIATOR, TERMINATOR, Message
from .protocol.splitter import message_count, parse_messages
from .models.file_formats import (
    extract_payload as extract_payload_file,
    load_message,
    read_syx,
    split_file as split_syx_file,
)
from .models.sections import format_sections, message_sections
from .transport.receivemidi import parse_receivemidi, save_capture

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "syxpack",
    instructions="Inspect, split and extract MIDI System Exclusive (.syx) dumps",
)


def _describe(message: Message, number: int, count: int) -> dict[str, Any]:
    """Summarize one message the way the identify tools report it."""
    result: dict[str, Any] = {
        "number": number,
        "of": count,
        "manufacturer_id": str(message.manufacturer),
        "manufacturer": message.manufacturer_name,
        "payload_length": len(message.payload),
        "md5": message.digest(),
    }
    entry = get_manufacturer(message.manufacturer)
    if entry is not None:
        result["group"] = entry.group.value
    if message.is_universal:
        result["universal"] = {
            "kind": message.universal_kind,
            "sub_id1": message.sub_id1,
            "sub_id2": message.sub_id2,
        }
    return result


def _identify_bytes(data: bytes) -> dict[str, Any]:
    try:
        messages = parse_messages(data)
    except SysExError as e:
        logger.warning("Could not parse SysEx data: %s", e)
        return {"error": str(e)}
    count = len(messages)
    return {
        "count": count,
        "messages": [
            _describe(message, number, count)
            for number, message in enumerate(messages, start=1)
        ],
    }


# ─── IDENTIFY TOOLS ──────────────────────────────────────────────────

@mcp.tool()
def identify_file(file_path: str) -> dict[str, Any]:
    """Identify every System Exclusive message in a .syx file.

    Reports the manufacturer, universal kind and sub-IDs, payload size
    and MD5 digest of each message, in file order.

    Args:
        file_path: Path to the .syx file.
    """
    path = Path(file_path)
    if not path.exists():
        return {"error": f"File not found: {file_path}"}

    result = _identify_bytes(read_syx(path))
    result["file"] = str(path)
    return result


@mcp.tool()
def identify_hex(data: str) -> dict[str, Any]:
    """Identify SysEx messages given as hex text, e.g. "F0 43 10 4C F7".

    Args:
        data: Hex bytes, separated by spaces or not.
    """
    try:
        raw = bytes.fromhex(data)
    except ValueError as e:
        return {"error": f"Invalid hex data: {e}"}
    return _identify_bytes(raw)


@mcp.tool()
def describe_sections(file_path: str) -> dict[str, Any]:
    """List the sections of a single-message .syx file with byte offsets.

    Args:
        file_path: Path to a .syx file holding exactly one message.
    """
    path = Path(file_path)
    if not path.exists():
        return {"error": f"File not found: {file_path}"}

    try:
        message = load_message(path)
    except SysExError as e:
        return {"error": str(e)}

    sections = message_sections(message)
    return {
        "file": str(path),
        "sections": [section.to_dict() for section in sections],
        "text": format_sections(sections),
    }


# ─── FILE TOOLS ──────────────────────────────────────────────────────

@mcp.tool()
def split_file(file_path: str, output_dir: str | None = None) -> dict[str, Any]:
    """Split a multi-message .syx file into one file per message.

    Output files are named <stem>-001.syx, <stem>-002.syx, ...

    Args:
        file_path: Path to the .syx file.
        output_dir: Directory for the output files (default: next to the input).
    """
    path = Path(file_path)
    if not path.exists():
        return {"error": f"File not found: {file_path}"}

    try:
        written = split_syx_file(path, output_dir)
    except SysExError as e:
        return {"error": str(e)}

    if not written:
        count = message_count(read_syx(path))
        return {"split": False, "count": count, "message": "Nothing to split"}

    return {
        "split": True,
        "count": len(written),
        "files": [str(p) for p in written],
    }


@mcp.tool()
def extract_payload(file_path: str, output_path: str) -> dict[str, Any]:
    """Write the payload of a single-message .syx file to another file.

    The SysEx delimiters and the manufacturer identifier are stripped.

    Args:
        file_path: Path to a .syx file holding exactly one message.
        output_path: Where to write the payload bytes.
    """
    path = Path(file_path)
    if not path.exists():
        return {"error": f"File not found: {file_path}"}

    try:
        out = extract_payload_file(path, output_path)
    except SysExError as e:
        return {"error": str(e)}

    return {
        "extracted": True,
        "output_path": str(out),
        "payload_length": out.stat().st_size,
    }


@mcp.tool()
def capture_receivemidi(text: str, output_dir: str = ".") -> dict[str, Any]:
    """Save the SysEx messages in ReceiveMIDI output as .syx files.

    Lines other than "system-exclusive hex|dec ..." are ignored.

    Args:
        text: ReceiveMIDI output, one message per line.
        output_dir: Directory for the captured files.
    """
    messages = parse_receivemidi(text.splitlines())
    if not messages:
        return {"captured": 0, "files": []}
    paths = save_capture(messages, output_dir)
    return {"captured": len(paths), "files": [str(p) for p in paths]}


# ─── MANUFACTURER TOOLS ──────────────────────────────────────────────

@mcp.tool()
def lookup_manufacturer(name: str) -> dict[str, Any]:
    """Find the SysEx identifier of a manufacturer by name.

    Args:
        name: Display or full company name, e.g. "Roland" or "Korg Inc.".
    """
    try:
        ident = find_manufacturer(name)
    except SysExError as e:
        return {"error": str(e)}
    return MANUFACTURERS[ident].to_dict()


# ─── MCP RESOURCES ───────────────────────────────────────────────────

@mcp.resource("syxpack://manufacturers")
def resource_manufacturers() -> str:
    """All registered manufacturers with their identifiers."""
    entries = [entry.to_dict() for entry in MANUFACTURERS.values()]
    return json.dumps({"manufacturers": entries, "count": len(entries)})


@mcp.resource("syxpack://constants")
def resource_constants() -> str:
    """Reserved SysEx byte values."""
    return json.dumps({
        "initiator": f"0x{INITIATOR:02X}",
        "terminator": f"0x{TERMINATOR:02X}",
        "extended_marker": f"0x{EXTENDED_MARKER:02X}",
        "development": f"0x{DEVELOPMENT:02X}",
        "universal_non_real_time": f"0x{NON_REAL_TIME:02X}",
        "universal_real_time": f"0x{REAL_TIME:02X}",
    })


# ─── MCP PROMPTS ─────────────────────────────────────────────────────

@mcp.prompt()
def analyze_dump(file_path: str) -> str:
    """Guide the AI through inspecting an unknown SysEx dump.

    Args:
        file_path: Path to the .syx file.
    """
    return f"""Inspect the System Exclusive dump at {file_path}.
Steps:
- Use identify_file to list the messages and their manufacturers
- If there is more than one message, use split_file to separate them
- Use describe_sections on a single message to see its layout
- Use extract_payload to get the manufacturer-specific data

Report the manufacturer, message count, and payload sizes.
Do not guess the meaning of manufacturer-specific payload bytes."""


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    logging.basicConfig(level=logging.INFO)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()

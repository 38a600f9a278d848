"""Tests for the MCP server tools."""

from __future__ import annotations

import json
import sys
from unittest.mock import MagicMock, patch

KORG = bytes([0xF0, 0x42, 0x30, 0x28, 0x54, 0xF7])
UNIVERSAL = bytes([0xF0, 0x7E, 0x7F, 0x06, 0x01, 0xF7])


def _get_server_module():
    """Import server module with FastMCP mocked to avoid init issues."""
    mock_fastmcp_cls = MagicMock()
    mock_fastmcp_instance = MagicMock()
    # Make the @mcp.tool() decorator a no-op that returns the function unchanged
    mock_fastmcp_instance.tool.return_value = lambda fn: fn
    mock_fastmcp_instance.resource.return_value = lambda fn: fn
    mock_fastmcp_instance.prompt.return_value = lambda fn: fn
    mock_fastmcp_cls.return_value = mock_fastmcp_instance

    with patch("mcp.server.fastmcp.FastMCP", mock_fastmcp_cls):
        # Remove cached server module so it re-imports with our mock
        sys.modules.pop("syxpack.server", None)
        import syxpack.server as server_mod

    return server_mod


def test_identify_file(tmp_path):
    server = _get_server_module()
    path = tmp_path / "dump.syx"
    path.write_bytes(KORG + UNIVERSAL)

    result = server.identify_file(str(path))
    assert result["count"] == 2
    first, second = result["messages"]
    assert first["manufacturer"] == "KORG"
    assert first["manufacturer_id"] == "42"
    assert first["payload_length"] == 3
    assert first["group"] == "Japanese"
    assert "universal" not in first
    assert second["universal"] == {
        "kind": "Non-Real-time",
        "sub_id1": 0x7F,
        "sub_id2": 0x06,
    }
    assert second["number"] == 2
    assert second["of"] == 2


def test_identify_file_missing(tmp_path):
    server = _get_server_module()
    result = server.identify_file(str(tmp_path / "nope.syx"))
    assert "error" in result


def test_identify_hex():
    server = _get_server_module()
    result = server.identify_hex("F0 00 20 29 01 F7")
    assert result["count"] == 1
    assert result["messages"][0]["manufacturer"] == "Novation"


def test_identify_hex_malformed():
    """Malformed data is reported, not raised."""
    server = _get_server_module()
    assert "error" in server.identify_hex("41 F7")
    assert "error" in server.identify_hex("F0 00 20 F7")
    assert "error" in server.identify_hex("not hex")


def test_describe_sections(tmp_path):
    server = _get_server_module()
    path = tmp_path / "one.syx"
    path.write_bytes(KORG)
    result = server.describe_sections(str(path))
    kinds = [s["kind"] for s in result["sections"]]
    assert kinds == ["initiator", "manufacturer", "payload", "terminator"]
    assert "000005: System Exclusive Terminator" in result["text"]


def test_describe_sections_multiple(tmp_path):
    server = _get_server_module()
    path = tmp_path / "two.syx"
    path.write_bytes(KORG + KORG)
    assert "error" in server.describe_sections(str(path))


def test_split_file(tmp_path):
    server = _get_server_module()
    path = tmp_path / "dump.syx"
    path.write_bytes(KORG + UNIVERSAL)
    result = server.split_file(str(path), str(tmp_path / "out"))
    assert result["split"] is True
    assert result["count"] == 2
    assert result["files"][0].endswith("dump-001.syx")


def test_split_file_nothing_to_split(tmp_path):
    server = _get_server_module()
    path = tmp_path / "one.syx"
    path.write_bytes(KORG)
    result = server.split_file(str(path))
    assert result["split"] is False
    assert result["count"] == 1


def test_extract_payload(tmp_path):
    server = _get_server_module()
    path = tmp_path / "one.syx"
    path.write_bytes(KORG)
    result = server.extract_payload(str(path), str(tmp_path / "one.bin"))
    assert result["extracted"] is True
    assert result["payload_length"] == 3
    assert (tmp_path / "one.bin").read_bytes() == bytes([0x30, 0x28, 0x54])


def test_capture_receivemidi(tmp_path):
    server = _get_server_module()
    text = "clock\nsystem-exclusive hex 41 10 42\n"
    result = server.capture_receivemidi(text, str(tmp_path))
    assert result["captured"] == 1
    assert len(list(tmp_path.glob("*.syx"))) == 1


def test_capture_receivemidi_nothing(tmp_path):
    server = _get_server_module()
    assert server.capture_receivemidi("note-on 1 60 100", str(tmp_path)) == {
        "captured": 0,
        "files": [],
    }


def test_lookup_manufacturer():
    server = _get_server_module()
    result = server.lookup_manufacturer("Alesis")
    assert result["id"] == "00 00 0E"
    assert result["extended"] is True
    assert "error" in server.lookup_manufacturer("Nobody")


def test_resources():
    server = _get_server_module()
    manufacturers = json.loads(server.resource_manufacturers())
    assert manufacturers["count"] == len(manufacturers["manufacturers"])
    constants = json.loads(server.resource_constants())
    assert constants["initiator"] == "0xF0"
    assert constants["terminator"] == "0xF7"


def test_analyze_dump_prompt():
    server = _get_server_module()
    assert "identify_file" in server.analyze_dump("dump.syx")

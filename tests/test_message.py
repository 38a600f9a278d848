"""Tests for message decoding and encoding."""

import hashlib

import pytest

from syxpack.protocol.errors import MalformedFraming, TruncatedIdentifier
from syxpack.protocol.manufacturers import (
    Extended,
    Standard,
    UniversalNonRealTime,
    UniversalRealTime,
)
from syxpack.protocol.message import (
    INITIATOR,
    TERMINATOR,
    Message,
    decode_message,
    encode_message,
)


def test_decode_standard():
    """F0 43 01 02 F7 is a Yamaha message with a 2-byte payload."""
    message = Message.from_bytes(bytes([0xF0, 0x43, 0x01, 0x02, 0xF7]))
    assert message == Message(manufacturer=Standard(0x43), payload=b"\x01\x02")


def test_decode_extended():
    message = Message.from_bytes(bytes([0xF0, 0x00, 0x20, 0x29, 0x01, 0xF7]))
    assert message.manufacturer == Extended(0x00, 0x20, 0x29)
    assert message.payload == b"\x01"


def test_decode_kawai_dump_request():
    data = bytes([0xF0, 0x40, 0x00, 0x20, 0x00, 0x04, 0x00, 0x3F, 0xF7])
    message = Message.from_bytes(data)
    assert message.manufacturer == Standard(0x40)
    assert message.manufacturer_name == "Kawai"
    assert message.payload == bytes([0x00, 0x20, 0x00, 0x04, 0x00, 0x3F])


def test_decode_universal():
    """Identity request: F0 7E 7F 06 01 F7."""
    message = Message.from_bytes(bytes([0xF0, 0x7E, 0x7F, 0x06, 0x01, 0xF7]))
    assert message.manufacturer == UniversalNonRealTime()
    assert message.is_universal
    assert message.universal_kind == "Non-Real-time"
    assert message.sub_id1 == 0x7F
    assert message.sub_id2 == 0x06
    assert message.payload == b"\x7F\x06\x01"


def test_decode_universal_realtime():
    message = Message.from_bytes(bytes([0xF0, 0x7F, 0x7F, 0x04, 0x01, 0x00, 0x40, 0xF7]))
    assert message.manufacturer == UniversalRealTime()
    assert message.universal_kind == "Real-time"


def test_manufacturer_message_has_no_sub_ids():
    message = Message(Standard(0x41), b"\x10\x42")
    assert not message.is_universal
    assert message.universal_kind is None
    assert message.sub_id1 is None
    assert message.sub_id2 is None


def test_empty_payload():
    message = Message.from_bytes(bytes([0xF0, 0x43, 0xF7]))
    assert message.payload == b""
    assert message.to_bytes() == bytes([0xF0, 0x43, 0xF7])


def test_encode_standard():
    message = Message(
        Standard(0x40),
        bytes([0x00, 0x20, 0x00, 0x04, 0x00, 0x3F]),
    )
    assert message.to_bytes() == bytes([0xF0, 0x40, 0x00, 0x20, 0x00, 0x04, 0x00, 0x3F, 0xF7])


def test_encode_extended():
    message = Message(Extended(0x00, 0x00, 0x01))
    assert message.to_bytes() == bytes([0xF0, 0x00, 0x00, 0x01, 0xF7])


def test_encode_development():
    assert Message(Standard(0x7D)).to_bytes() == bytes([0xF0, 0x7D, 0xF7])


def test_roundtrip_bytes():
    """Encoding a decoded message reproduces the input exactly."""
    samples = [
        bytes([0xF0, 0x43, 0x01, 0x02, 0xF7]),
        bytes([0xF0, 0x00, 0x00, 0x0E, 0x00, 0x41, 0x63, 0x00, 0x5D, 0xF7]),
        bytes([0xF0, 0x7E, 0x00, 0x09, 0x01, 0xF7]),
        bytes([0xF0, 0x70, 0xF7]),
    ]
    for data in samples:
        assert Message.from_bytes(data).to_bytes() == data


def test_roundtrip_message():
    message = Message(Extended(0x00, 0x20, 0x33), bytes(range(0x40)))
    assert Message.from_bytes(message.to_bytes()) == message


def test_realtime_bytes_are_payload():
    """Timing clock and active sensing inside the body are kept verbatim."""
    data = bytes([0xF0, 0x41, 0x10, 0xF8, 0x20, 0xFE, 0xF7])
    message = Message.from_bytes(data)
    assert message.payload == bytes([0x10, 0xF8, 0x20, 0xFE])
    assert message.to_bytes() == data


def test_missing_initiator():
    with pytest.raises(MalformedFraming):
        Message.from_bytes(bytes([0x41, 0xF7]))


def test_missing_terminator():
    with pytest.raises(MalformedFraming):
        Message.from_bytes(bytes([0xF0, 0x41, 0x01]))


def test_empty_data():
    with pytest.raises(MalformedFraming):
        Message.from_bytes(b"")


def test_lone_initiator():
    with pytest.raises(MalformedFraming):
        Message.from_bytes(b"\xF0")


def test_truncated_extended():
    """Only one byte follows the extended marker before the terminator."""
    with pytest.raises(TruncatedIdentifier):
        Message.from_bytes(bytes([0xF0, 0x00, 0x20, 0xF7]))


def test_no_identifier():
    with pytest.raises(TruncatedIdentifier):
        Message.from_bytes(bytes([0xF0, 0xF7]))


def test_payload_stored_as_bytes():
    message = Message(Standard(0x43), bytearray([1, 2]))
    assert isinstance(message.payload, bytes)
    assert message == Message(Standard(0x43), b"\x01\x02")


def test_message_is_immutable():
    message = Message(Standard(0x43))
    with pytest.raises(AttributeError):
        message.payload = b"\x01"


def test_digest():
    data = bytes([0xF0, 0x43, 0x01, 0x02, 0xF7])
    assert Message.from_bytes(data).digest() == hashlib.md5(data).hexdigest()


def test_module_aliases():
    data = bytes([INITIATOR, 0x42, 0x30, TERMINATOR])
    assert encode_message(decode_message(data)) == data


def test_repr():
    r = repr(Message(Standard(0x43), b"\x01"))
    assert "Yamaha" in r
    assert "01" in r
    assert "(empty)" in repr(Message(Standard(0x43)))


def test_int_payload_rejected():
    """An int is not a payload; bytes(3) would silently give three zeros."""
    with pytest.raises(TypeError):
        Message(Standard(0x43), 3)


def test_memoryview_payload():
    message = Message(Standard(0x43), memoryview(b"\x01\x02"))
    assert message.payload == b"\x01\x02"

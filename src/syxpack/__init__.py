"""Helpers for processing MIDI System Exclusive messages."""

from .protocol import (
    Message,
    ManufacturerId,
    Standard,
    Extended,
    UniversalNonRealTime,
    UniversalRealTime,
    message_count,
    split_messages,
    parse_messages,
)

__version__ = "0.1.0"

"""Exceptions raised while framing and identifying SysEx messages."""

from __future__ import annotations


class SysExError(ValueError):
    """Base class for malformed System Exclusive input."""


class MalformedFraming(SysExError):
    """Data does not start with 0xF0 or does not end with 0xF7."""


class TruncatedIdentifier(SysExError):
    """Fewer bytes remain than the manufacturer identifier requires."""


class SplitBoundaryMismatch(SysExError):
    """A split segment does not begin with 0xF0.

    Attributes:
        index: Zero-based position of the offending segment.
        offset: Byte offset of the segment within the original buffer.
    """

    def __init__(self, message: str, index: int, offset: int) -> None:
        super().__init__(message)
        self.index = index
        self.offset = offset


class ManufacturerNotFound(SysExError, LookupError):
    """No registered manufacturer matches the requested name."""


class MultipleMessagesError(SysExError):
    """A single-message operation received more than one message."""

    def __init__(self, count: int) -> None:
        super().__init__(
            f"Expected one System Exclusive message, found {count}; "
            f"split the data first"
        )
        self.count = count

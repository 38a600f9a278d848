"""Protocol layer: manufacturer identifiers, message framing, and buffer splitting."""

from .errors import (
    SysExError,
    MalformedFraming,
    TruncatedIdentifier,
    SplitBoundaryMismatch,
    ManufacturerNotFound,
    MultipleMessagesError,
)
from .manufacturers import (
    Standard,
    Extended,
    UniversalNonRealTime,
    UniversalRealTime,
    ManufacturerId,
    Manufacturer,
    MANUFACTURERS,
    find_manufacturer,
    manufacturer_name,
)
from .message import Message, decode_message, encode_message
from .splitter import message_count, split_messages, parse_messages

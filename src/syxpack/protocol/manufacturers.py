"""Manufacturer identifiers and the manufacturer registry.

Identifier layout (first byte after the 0xF0 initiator)::

    +-----------+------------------------+-------------------------------+
    | 0x00      | Extended               | 3 bytes: 0x00 b1 b2           |
    | 0x01-0x7D | Standard               | 1 byte                        |
    | 0x7E      | Universal non-realtime | 1 byte                        |
    | 0x7F      | Universal realtime     | 1 byte                        |
    +-----------+------------------------+-------------------------------+

The registry is a read-only table keyed by identifier. Identifiers missing
from it are still valid wire data; they just have no name.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import ClassVar, Mapping, Union

from .errors import MalformedFraming, ManufacturerNotFound, TruncatedIdentifier

EXTENDED_MARKER = 0x00
DEVELOPMENT = 0x7D
NON_REAL_TIME = 0x7E
REAL_TIME = 0x7F

UNKNOWN_MANUFACTURER = "(unknown)"


def _check_data_byte(value: int, what: str) -> None:
    if not 0 <= value <= 0x7F:
        raise ValueError(f"{what} must be a 7-bit data byte, got 0x{value:02X}")


@dataclass(frozen=True)
class Standard:
    """One-byte manufacturer identifier."""

    value: int

    def __post_init__(self) -> None:
        if not 0x01 <= self.value <= DEVELOPMENT:
            raise ValueError(
                f"Standard identifier must be 0x01-0x7D, got 0x{self.value:02X}"
            )

    def to_bytes(self) -> bytes:
        return bytes([self.value])

    def __str__(self) -> str:
        return f"{self.value:02X}"


@dataclass(frozen=True)
class Extended:
    """Three-byte manufacturer identifier, always starting with 0x00."""

    b0: int
    b1: int
    b2: int

    def __post_init__(self) -> None:
        if self.b0 != EXTENDED_MARKER:
            raise ValueError(
                f"Extended identifier must start with 0x00, got 0x{self.b0:02X}"
            )
        _check_data_byte(self.b1, "Extended identifier byte 1")
        _check_data_byte(self.b2, "Extended identifier byte 2")

    def to_bytes(self) -> bytes:
        return bytes([self.b0, self.b1, self.b2])

    def __str__(self) -> str:
        return f"{self.b0:02X} {self.b1:02X} {self.b2:02X}"


@dataclass(frozen=True)
class UniversalNonRealTime:
    """Reserved identifier 0x7E."""

    VALUE: ClassVar[int] = NON_REAL_TIME

    def to_bytes(self) -> bytes:
        return bytes([self.VALUE])

    def __str__(self) -> str:
        return f"{self.VALUE:02X}"


@dataclass(frozen=True)
class UniversalRealTime:
    """Reserved identifier 0x7F."""

    VALUE: ClassVar[int] = REAL_TIME

    def to_bytes(self) -> bytes:
        return bytes([self.VALUE])

    def __str__(self) -> str:
        return f"{self.VALUE:02X}"


ManufacturerId = Union[Standard, Extended, UniversalNonRealTime, UniversalRealTime]


class IdentifierForm(Enum):
    """Identifier variant selected by the first byte after 0xF0."""

    STANDARD = "standard"
    EXTENDED = "extended"
    UNIVERSAL_NON_REAL_TIME = "universal-non-realtime"
    UNIVERSAL_REAL_TIME = "universal-realtime"

    @property
    def length(self) -> int:
        """Number of identifier bytes this form consumes."""
        return 3 if self is IdentifierForm.EXTENDED else 1


def classify_identifier(first_byte: int) -> IdentifierForm:
    """Tell how many identifier bytes follow the initiator.

    Raises:
        MalformedFraming: If ``first_byte`` is a status byte (high bit set).
    """
    if first_byte & 0x80:
        raise MalformedFraming(
            f"Expected a manufacturer identifier, got status byte 0x{first_byte:02X}"
        )
    if first_byte == EXTENDED_MARKER:
        return IdentifierForm.EXTENDED
    if first_byte == NON_REAL_TIME:
        return IdentifierForm.UNIVERSAL_NON_REAL_TIME
    if first_byte == REAL_TIME:
        return IdentifierForm.UNIVERSAL_REAL_TIME
    return IdentifierForm.STANDARD


def parse_identifier(data: bytes, offset: int = 1) -> tuple[ManufacturerId, int]:
    """Read the manufacturer identifier starting at ``offset``.

    ``data`` must not include the 0xF7 terminator, so that an identifier
    cannot borrow the terminator as one of its bytes.

    Returns:
        The identifier and the number of bytes consumed (1 or 3).

    Raises:
        TruncatedIdentifier: If the identifier runs past the end of ``data``.
    """
    if offset >= len(data):
        raise TruncatedIdentifier("Message ends before the manufacturer identifier")

    form = classify_identifier(data[offset])
    if form is IdentifierForm.UNIVERSAL_NON_REAL_TIME:
        return UniversalNonRealTime(), form.length
    if form is IdentifierForm.UNIVERSAL_REAL_TIME:
        return UniversalRealTime(), form.length
    if form is IdentifierForm.STANDARD:
        return Standard(data[offset]), form.length

    remaining = len(data) - offset - 1
    if remaining < form.length - 1:
        raise TruncatedIdentifier(
            f"Extended identifier needs {form.length - 1} bytes after 0x00, "
            f"got {remaining}"
        )
    b1, b2 = data[offset + 1], data[offset + 2]
    for b in (b1, b2):
        if b & 0x80:
            raise MalformedFraming(
                f"Extended identifier contains status byte 0x{b:02X}"
            )
    return Extended(EXTENDED_MARKER, b1, b2), form.length


class ManufacturerGroup(Enum):
    """Regional group of a manufacturer identifier."""

    AMERICAN = "American"
    EUROPEAN_OR_OTHER = "European or other"
    JAPANESE = "Japanese"
    NOT_APPLICABLE = "n/a"


@dataclass(frozen=True)
class Manufacturer:
    """A registry entry."""

    id: ManufacturerId
    display_name: str
    canonical_name: str
    group: ManufacturerGroup

    @property
    def extended(self) -> bool:
        return isinstance(self.id, Extended)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "display_name": self.display_name,
            "canonical_name": self.canonical_name,
            "group": self.group.value,
            "extended": self.extended,
        }


_A = ManufacturerGroup.AMERICAN
_E = ManufacturerGroup.EUROPEAN_OR_OTHER
_J = ManufacturerGroup.JAPANESE
_N = ManufacturerGroup.NOT_APPLICABLE

# (identifier bytes, display name, canonical name, group)
# The full list is published by the MIDI Association; this covers the common ones.
_ENTRIES: list[tuple[bytes, str, str, ManufacturerGroup]] = [
    (b"\x01", "Sequential Circuits", "Sequential Circuits", _A),
    (b"\x02", "IDP", "IDP", _A),
    (b"\x03", "Voyetra", "Voyetra Turtle Beach, Inc.", _A),
    (b"\x04", "Moog", "Moog Music", _A),
    (b"\x05", "Passport Designs", "Passport Designs", _A),
    (b"\x06", "Lexicon", "Lexicon Inc.", _A),
    (b"\x07", "Kurzweil", "Kurzweil / Young Chang", _A),
    (b"\x08", "Fender", "Fender", _A),
    (b"\x09", "MIDI9", "MIDI9", _A),
    (b"\x0A", "AKG", "AKG Acoustics", _A),
    (b"\x0B", "Voyce Music", "Voyce Music", _A),
    (b"\x0C", "WaveFrame", "WaveFrame", _A),
    (b"\x0D", "ADA", "ADA Signal Processors, Inc.", _A),
    (b"\x0E", "Garfield", "Garfield Electronics", _A),
    (b"\x0F", "Ensoniq", "Ensoniq", _A),
    (b"\x10", "Oberheim", "Oberheim / Gibson Labs", _A),
    (b"\x11", "Apple", "Apple", _A),
    (b"\x12", "Grey Matter", "Grey Matter Response", _A),
    (b"\x13", "Digidesign", "Digidesign Inc.", _A),
    (b"\x14", "Palmtree", "Palmtree Instruments", _A),
    (b"\x15", "JLCooper", "JLCooper Electronics", _A),
    (b"\x16", "Lowrey", "Lowrey Organ Company", _A),
    (b"\x17", "Adams-Smith", "Adams-Smith", _A),
    (b"\x18", "E-mu", "E-mu", _A),
    (b"\x19", "Harmony Systems", "Harmony Systems", _A),
    (b"\x1A", "ART", "ART", _A),
    (b"\x1B", "Baldwin", "Baldwin", _A),
    (b"\x1C", "Eventide", "Eventide", _A),
    (b"\x1D", "Inventronics", "Inventronics", _A),
    (b"\x1E", "Key Concepts", "Key Concepts", _A),
    (b"\x1F", "Clarity", "Clarity", _A),
    (b"\x20", "Passac", "Passac", _E),
    (b"\x21", "Proel Labs", "Proel Labs (SIEL)", _E),
    (b"\x22", "Synthaxe", "Synthaxe (UK)", _E),
    (b"\x23", "Stepp", "Stepp", _E),
    (b"\x24", "Hohner", "Hohner", _E),
    (b"\x25", "Twister", "Twister", _E),
    (b"\x26", "Ketron", "Ketron s.r.l.", _E),
    (b"\x27", "Jellinghaus", "Jellinghaus MS", _E),
    (b"\x28", "Southworth", "Southworth Music Systems", _E),
    (b"\x29", "PPG", "PPG Wave", _E),
    (b"\x2A", "JEN", "JEN", _E),
    (b"\x2B", "SSL", "Solid State Logic Organ Systems", _E),
    (b"\x2C", "Audio Veritrieb", "Audio Veritrieb-P. Struven", _E),
    (b"\x2D", "Neve", "Neve", _E),
    (b"\x2E", "Soundtracs", "Soundtracs Ltd.", _E),
    (b"\x2F", "Elka", "Elka", _E),
    (b"\x30", "Dynacord", "Dynacord", _E),
    (b"\x31", "Viscount", "Viscount International Spa", _E),
    (b"\x32", "Drawmer", "Drawmer", _E),
    (b"\x33", "Clavia", "Clavia Digital Instruments", _E),
    (b"\x34", "Audio Architecture", "Audio Architecture", _E),
    (b"\x35", "Generalmusic", "Generalmusic Corp SpA", _E),
    (b"\x36", "Cheetah", "Cheetah Marketing", _E),
    (b"\x37", "C.T.M.", "C.T.M.", _E),
    (b"\x38", "Simmons", "Simmons UK", _E),
    (b"\x39", "Soundcraft", "Soundcraft Electronics", _E),
    (b"\x3A", "Steinberg", "Steinberg Media Technologies GmbH", _E),
    (b"\x3B", "Wersi", "Wersi Gmbh", _E),
    (b"\x3C", "AVAB", "AVAB Niethammer AB", _E),
    (b"\x3D", "Digigram", "Digigram", _E),
    (b"\x3E", "Waldorf", "Waldorf Electronics GmbH", _E),
    (b"\x3F", "Quasimidi", "Quasimidi", _E),
    (b"\x40", "Kawai", "Kawai Musical Instruments MFG. CO. Ltd", _J),
    (b"\x41", "Roland", "Roland Corporation", _J),
    (b"\x42", "KORG", "Korg Inc.", _J),
    (b"\x43", "Yamaha", "Yamaha Corporation", _J),
    (b"\x44", "Casio", "Casio Computer Co. Ltd", _J),
    (b"\x46", "Kamiya", "Kamiya Studio Co. Ltd", _J),
    (b"\x47", "Akai", "Akai Electric Co. Ltd.", _J),
    (b"\x48", "Victor", "Victor Company of Japan, Ltd.", _J),
    (b"\x4B", "Fujitsu", "Fujitsu Limited", _J),
    (b"\x4C", "Sony", "Sony Corporation", _J),
    (b"\x4E", "Teac", "Teac Corporation", _J),
    (b"\x50", "Matsushita Electric", "Matsushita Electric Industrial Co., Ltd", _J),
    (b"\x51", "Fostex", "Fostex Corporation", _J),
    (b"\x52", "Zoom", "Zoom Corporation", _J),
    (b"\x54", "Matsushita Communication", "Matsushita Communication Industrial Co., Ltd.", _J),
    (b"\x55", "Suzuki", "Suzuki Musical Instruments MFG. Co., Ltd.", _J),
    (b"\x56", "Fuji Sound", "Fuji Sound Corporation Ltd.", _J),
    (b"\x57", "Acoustic Technical Laboratory", "Acoustic Technical Laboratory, Inc.", _J),
    (b"\x7D", "Development/Non-commercial", "Development/Non-commercial", _N),
    (b"\x7E", "Universal Non-Real-time", "Universal Non-Real-time System Exclusive", _N),
    (b"\x7F", "Universal Real-time", "Universal Real-time System Exclusive", _N),
    (b"\x00\x00\x01", "Time/Warner Interactive", "Time/Warner Interactive", _A),
    (b"\x00\x00\x0E", "Alesis", "Alesis Studio Electronics", _A),
    (b"\x00\x00\x3B", "MOTU", "Mark of the Unicorn", _A),
    (b"\x00\x20\x1F", "TC Electronic", "TC Electronic", _E),
    (b"\x00\x20\x29", "Novation", "Focusrite/Novation", _E),
    (b"\x00\x20\x32", "Behringer", "Behringer GmbH", _E),
    (b"\x00\x20\x33", "Access", "Access Music Electronics GmbH", _E),
    (b"\x00\x20\x3C", "Elektron", "Elektron ESI AB", _E),
    (b"\x00\x20\x6B", "Arturia", "Arturia", _E),
]


def identifier_from_bytes(raw: bytes) -> ManufacturerId:
    """Build an identifier from exactly its raw bytes (1 or 3)."""
    ident, consumed = parse_identifier(raw, 0)
    if consumed != len(raw):
        raise ValueError(
            f"Identifier is {consumed} byte(s) long, got {len(raw)}: {raw.hex(' ')}"
        )
    return ident


def _build_registry() -> Mapping[ManufacturerId, Manufacturer]:
    table: dict[ManufacturerId, Manufacturer] = {}
    for raw, display_name, canonical_name, group in _ENTRIES:
        ident = identifier_from_bytes(raw)
        table[ident] = Manufacturer(ident, display_name, canonical_name, group)
    return MappingProxyType(table)


MANUFACTURERS = _build_registry()


def get_manufacturer(ident: ManufacturerId) -> Manufacturer | None:
    """Return the registry entry for ``ident``, or ``None`` if unregistered."""
    return MANUFACTURERS.get(ident)


def manufacturer_name(ident: ManufacturerId) -> str:
    """Return the display name, or ``UNKNOWN_MANUFACTURER`` if unregistered."""
    entry = MANUFACTURERS.get(ident)
    return entry.display_name if entry else UNKNOWN_MANUFACTURER


def find_manufacturer(name: str) -> ManufacturerId:
    """Look up an identifier by display or canonical name (case-insensitive).

    Raises:
        ManufacturerNotFound: If no registry entry has that name.
    """
    wanted = name.strip().casefold()
    for entry in MANUFACTURERS.values():
        if wanted in (entry.display_name.casefold(), entry.canonical_name.casefold()):
            return entry.id
    raise ManufacturerNotFound(f"No manufacturer named {name!r}")

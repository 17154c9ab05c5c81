"""
EDID (Extended Display Identification Data) decoder.

Decodes the 128-byte base block defined by VESA EDID 1.3/1.4:

    0-7    header 00 FF FF FF FF FF FF 00
    8-9    manufacturer ID, three 5-bit letters, big-endian
    10-11  product code, little-endian
    12-15  serial number, little-endian
    16     week of manufacture
    17     year of manufacture - 1990
    18-19  EDID version, revision
    20     video input definition (bit 7: digital)
    21-22  maximum image size, cm
    54-125 four 18-byte descriptor blocks
    126    extension block count
    127    checksum

A buffer shorter than the base block is rejected as a whole; descriptor
blocks of unknown type are skipped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Union

from ..errors import MalformedEdid

logger = logging.getLogger(__name__)

# =============================================================================
# BASE BLOCK LAYOUT
# =============================================================================

EDID_BLOCK_LENGTH = 128
EDID_HEADER = bytes.fromhex('00ffffffffffff00')

MANUFACTURER_OFFSET = 8
PRODUCT_CODE_OFFSET = 10
SERIAL_OFFSET = 12
WEEK_OFFSET = 16
YEAR_OFFSET = 17
VERSION_OFFSET = 18
REVISION_OFFSET = 19
VIDEO_INPUT_OFFSET = 20
WIDTH_OFFSET = 21
HEIGHT_OFFSET = 22
EXTENSION_COUNT_OFFSET = 126

YEAR_BASE = 1990
DIGITAL_INPUT_MASK = 0x80

# =============================================================================
# DESCRIPTOR BLOCKS
# =============================================================================

DESCRIPTOR_OFFSET = 54
DESCRIPTOR_LENGTH = 18
DESCRIPTOR_COUNT = 4
DESCRIPTOR_TEXT_OFFSET = 4

DESCRIPTOR_SERIAL = 0xFF
DESCRIPTOR_COMMENT = 0xFE
DESCRIPTOR_RANGE_LIMITS = 0xFD
DESCRIPTOR_NAME = 0xFC
DESCRIPTOR_WHITE_POINT = 0xFB
DESCRIPTOR_STANDARD_TIMING = 0xFA

# Characters trimmed from descriptor text (ASCII control characters and space)
_TEXT_TRIM = ''.join(chr(c) for c in range(0x21))

BytesLike = Union[bytes, bytearray, memoryview]


@dataclass(frozen=True)
class RangeLimits:
    """Monitor range limits from a 0xFD descriptor block."""
    min_vertical_hz: int
    max_vertical_hz: int
    min_horizontal_khz: int
    max_horizontal_khz: int
    max_pixel_clock_mhz: int

    def to_dict(self) -> dict:
        return {
            'min_vertical_hz': self.min_vertical_hz,
            'max_vertical_hz': self.max_vertical_hz,
            'min_horizontal_khz': self.min_horizontal_khz,
            'max_horizontal_khz': self.max_horizontal_khz,
            'max_pixel_clock_mhz': self.max_pixel_clock_mhz,
        }


@dataclass(frozen=True, eq=False)
class DisplayDescriptor:
    """
    One monitor as described by its EDID.

    Two descriptors are equal when their raw EDID bytes are equal.

    Attributes:
        edid: The raw EDID bytes, kept verbatim (extension blocks included).
        edid_version: 'major.minor', e.g. '1.3'.
        manufacturer: Three-letter PNP vendor code, e.g. 'DEL'.
        model: Product code as unpadded lowercase hex.
        serial_number: Serial from the 0xFF descriptor if present, else
            derived from bytes 12-15.
        digital: Digital (True) or analog (False) input.
        manufacture_week: Week of manufacture (0 if unspecified).
        manufacture_year: Year of manufacture.
        screen_width: Maximum image width in cm.
        screen_height: Maximum image height in cm.
        name: Display name from the 0xFC descriptor.
        comment: Free text from the 0xFE descriptor.
        range_limits: Range limits from the 0xFD descriptor.
    """
    edid: bytes = field(repr=False)
    edid_version: str
    manufacturer: str
    model: str
    serial_number: str
    digital: bool
    manufacture_week: int
    manufacture_year: int
    screen_width: int
    screen_height: int
    name: Optional[str] = None
    comment: Optional[str] = None
    range_limits: Optional[RangeLimits] = None

    @classmethod
    def from_bytes(cls, data: BytesLike) -> DisplayDescriptor:
        """Decode a display from raw EDID bytes. See decode_edid()."""
        return decode_edid(data)

    @property
    def manufacture_date(self) -> date:
        """Monday of the week of manufacture (1 January if the week is unknown)."""
        if 1 <= self.manufacture_week <= 53:
            try:
                return date.fromisocalendar(self.manufacture_year, self.manufacture_week, 1)
            except ValueError:
                pass
        return date(self.manufacture_year, 1, 1)

    @property
    def has_valid_header(self) -> bool:
        return self.edid[:len(EDID_HEADER)] == EDID_HEADER

    @property
    def checksum_valid(self) -> bool:
        """The base block bytes sum to 0 modulo 256."""
        return sum(self.edid[:EDID_BLOCK_LENGTH]) % 256 == 0

    @property
    def extension_count(self) -> int:
        return self.edid[EXTENSION_COUNT_OFFSET]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DisplayDescriptor):
            return NotImplemented
        return self.edid == other.edid

    def __hash__(self) -> int:
        return hash(self.edid)

    def __str__(self) -> str:
        return self.name or f"{self.manufacturer} {self.model}"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'edid': self.edid.hex(),
            'edid_version': self.edid_version,
            'manufacturer': self.manufacturer,
            'model': self.model,
            'serial_number': self.serial_number,
            'digital': self.digital,
            'manufacture_week': self.manufacture_week,
            'manufacture_year': self.manufacture_year,
            'manufacture_date': self.manufacture_date.isoformat(),
            'screen_width': self.screen_width,
            'screen_height': self.screen_height,
            'name': self.name,
            'comment': self.comment,
            'range_limits': self.range_limits.to_dict() if self.range_limits else None,
            'checksum_valid': self.checksum_valid,
        }


def decode_manufacturer_id(high: int, low: int) -> str:
    """
    Decode the packed PNP manufacturer ID.

    Bits 14-10, 9-5 and 4-0 of the big-endian word each hold a letter,
    1 = 'A'. Zero fields (unused filler) are dropped.

    >>> decode_manufacturer_id(0x10, 0xAC)
    'DEL'
    """
    value = (high << 8) | low
    letters = ((value >> 10) & 0x1F, (value >> 5) & 0x1F, value & 0x1F)
    return ''.join(chr(ord('A') + letter - 1) for letter in letters if 1 <= letter <= 26)


def encode_manufacturer_id(code: str) -> bytes:
    """
    Pack a three-letter manufacturer code into its two EDID bytes.

    Raises:
        ValueError: If code is not three letters A-Z.
    """
    code = code.upper()
    if len(code) != 3 or not all('A' <= c <= 'Z' for c in code):
        raise ValueError(f"Manufacturer code must be three letters A-Z: {code!r}")

    value = 0
    for char in code:
        value = (value << 5) | (ord(char) - ord('A') + 1)
    return value.to_bytes(2, 'big')


def _alphanumeric_or_hex(byte: int) -> str:
    char = chr(byte)
    if char.isascii() and char.isalnum():
        return char
    return f"{byte:02X}"


def _descriptor_text(block: bytes) -> str:
    text = block[DESCRIPTOR_TEXT_OFFSET:].decode('latin-1')
    # Text is terminated by a line feed and padded with spaces
    return text.split('\n', 1)[0].strip(_TEXT_TRIM)


def _range_limits(block: bytes) -> RangeLimits:
    return RangeLimits(
        min_vertical_hz=block[5],
        max_vertical_hz=block[6],
        min_horizontal_khz=block[7],
        max_horizontal_khz=block[8],
        max_pixel_clock_mhz=block[9] * 10,
    )


def descriptor_blocks(edid: bytes) -> list[bytes]:
    """The four 18-byte descriptor blocks of the base block."""
    return [
        edid[DESCRIPTOR_OFFSET + i * DESCRIPTOR_LENGTH:DESCRIPTOR_OFFSET + (i + 1) * DESCRIPTOR_LENGTH]
        for i in range(DESCRIPTOR_COUNT)
    ]


def descriptor_type(block: bytes) -> int:
    """The descriptor tag: the first four bytes as a big-endian integer."""
    return int.from_bytes(block[:4], 'big')


def decode_edid(data: BytesLike) -> DisplayDescriptor:
    """
    Decode an EDID base block.

    Args:
        data: At least 128 bytes of EDID. Extension blocks may follow and
            are kept in DisplayDescriptor.edid without being decoded.

    Returns:
        The decoded DisplayDescriptor.

    Raises:
        MalformedEdid: If fewer than 128 bytes are supplied.
    """
    edid = bytes(data)
    if len(edid) < EDID_BLOCK_LENGTH:
        raise MalformedEdid(EDID_BLOCK_LENGTH, len(edid))

    serial_number = ''.join(
        _alphanumeric_or_hex(b) for b in reversed(edid[SERIAL_OFFSET:SERIAL_OFFSET + 4])
    )
    name = None
    comment = None
    range_limits = None

    for block in descriptor_blocks(edid):
        tag = descriptor_type(block)
        if tag == DESCRIPTOR_SERIAL:
            serial_number = _descriptor_text(block)
        elif tag == DESCRIPTOR_COMMENT:
            comment = _descriptor_text(block)
        elif tag == DESCRIPTOR_RANGE_LIMITS:
            range_limits = _range_limits(block)
        elif tag == DESCRIPTOR_NAME:
            name = _descriptor_text(block)
        elif tag in (DESCRIPTOR_WHITE_POINT, DESCRIPTOR_STANDARD_TIMING):
            pass
        else:
            # Detailed timing or manufacturer-specific data
            logger.debug(f"Skipping EDID descriptor type 0x{tag:08x}")

    model_code = int.from_bytes(edid[PRODUCT_CODE_OFFSET:PRODUCT_CODE_OFFSET + 2], 'little')

    return DisplayDescriptor(
        edid=edid,
        edid_version=f"{edid[VERSION_OFFSET]}.{edid[REVISION_OFFSET]}",
        manufacturer=decode_manufacturer_id(edid[MANUFACTURER_OFFSET], edid[MANUFACTURER_OFFSET + 1]),
        model=f"{model_code:x}",
        serial_number=serial_number,
        digital=bool(edid[VIDEO_INPUT_OFFSET] & DIGITAL_INPUT_MASK),
        manufacture_week=edid[WEEK_OFFSET],
        manufacture_year=edid[YEAR_OFFSET] + YEAR_BASE,
        screen_width=edid[WIDTH_OFFSET],
        screen_height=edid[HEIGHT_OFFSET],
        name=name,
        comment=comment,
        range_limits=range_limits,
    )

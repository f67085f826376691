"""
Constants for the GZIP member format.

Reference: https://www.rfc-editor.org/rfc/rfc1952
"""

from __future__ import annotations

# ===========================================================================
# Signature
# ===========================================================================

MAGIC: bytes = b"\x1f\x8b"
"""The two identification bytes ID1, ID2 that start every GZIP member."""

# ===========================================================================
# Record Sizes
# ===========================================================================
#
# Every member is laid out as:
#
#   [fixed header: 10][optional fields...][compressed blocks...][footer: 8]

FIXED_HEADER_SIZE: int = 10
"""Size of the fixed prologue.

    +---+---+---+---+---+---+---+---+---+---+
    |ID1|ID2|CM |FLG|     MTIME     |XFL|OS |
    +---+---+---+---+---+---+---+---+---+---+
"""

FOOTER_SIZE: int = 8
"""Size of the trailer: CRC32 (4 bytes) then ISIZE (4 bytes)."""

EXTRA_LENGTH_SIZE: int = 2
"""Size of the XLEN prefix in front of the extra field."""

HEADER_CRC_SIZE: int = 2
"""Size of the CRC16 that follows the optional fields when FHCRC is set."""

SUBFIELD_HEADER_SIZE: int = 4
"""Size of a subfield prefix inside the extra field: SI1, SI2, LEN (u16)."""

MAX_EXTRA_LENGTH: int = 0xFFFF
"""Largest extra field expressible by the 16-bit XLEN prefix."""

NUL: int = 0x00
"""Terminator of the original filename and the comment."""

# ===========================================================================
# Fixed Header Offsets
# ===========================================================================

OFFSET_METHOD: int = 2
OFFSET_FLAGS: int = 3
OFFSET_MTIME: int = 4
OFFSET_EXTRA_FLAGS: int = 8
OFFSET_OS: int = 9

# ===========================================================================
# Flag Bits (FLG byte)
# ===========================================================================
#
#   bit 0   FTEXT
#   bit 1   FHCRC
#   bit 2   FEXTRA
#   bit 3   FNAME
#   bit 4   FCOMMENT
#   bit 5-7 reserved

FTEXT: int = 0x01
"""Hint that the payload is probably ASCII text."""

FHCRC: int = 0x02
"""A CRC16 of the header bytes follows the optional fields."""

FEXTRA: int = 0x04
"""A length-prefixed extra field follows the fixed header."""

FNAME: int = 0x08
"""A NUL-terminated original filename is present."""

FCOMMENT: int = 0x10
"""A NUL-terminated comment is present."""

RESERVED_FLAGS_MASK: int = 0xE0
"""Bits 5-7. Preserved verbatim, never acted upon."""

# ===========================================================================
# Compression Method
# ===========================================================================

METHOD_DEFLATE: int = 8
"""The only compression method defined by the format (CM = 8)."""

UINT32_MODULUS: int = 1 << 32
"""ISIZE holds the uncompressed size modulo 2^32."""

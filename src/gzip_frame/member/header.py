"""
GZIP header parsing.

The header of a member is a fixed 10-byte prologue followed by up to four
optional fields whose presence is controlled by the FLG byte.


HEADER LAYOUT
-------------
::

    +---+---+---+---+---+---+---+---+---+---+
    |ID1|ID2|CM |FLG|     MTIME     |XFL|OS |   fixed, always present
    +---+---+---+---+---+---+---+---+---+---+

    (if FEXTRA)   +---+---+=================================+
                  | XLEN  |...XLEN bytes of "extra field"...|
                  +---+---+=================================+

    (if FNAME)    +=========================================+
                  |...original file name, zero-terminated...|
                  +=========================================+

    (if FCOMMENT) +===================================+
                  |...file comment, zero-terminated...|
                  +===================================+

    (if FHCRC)    +---+---+
                  | CRC16 |
                  +---+---+

The order is fixed by the format. A clear flag bit means the field occupies
zero bytes, so the parser is a straight pipeline of conditional reads.

Every reader takes the buffer and a position and returns the decoded value
together with the position just past it.


Reference: https://www.rfc-editor.org/rfc/rfc1952#section-2.3
"""

from __future__ import annotations

import logging
from typing import NamedTuple

from ..types import GzipMagicError, GzipTruncatedError, Uint8, Uint16, Uint32
from .constants import (
    EXTRA_LENGTH_SIZE,
    FCOMMENT,
    FEXTRA,
    FHCRC,
    FIXED_HEADER_SIZE,
    FNAME,
    HEADER_CRC_SIZE,
    MAGIC,
    NUL,
    OFFSET_EXTRA_FLAGS,
    OFFSET_FLAGS,
    OFFSET_METHOD,
    OFFSET_MTIME,
    OFFSET_OS,
)
from .containers import GzipHeader

logger = logging.getLogger(__name__)

Buffer = bytes | bytearray | memoryview
"""Any contiguous byte buffer accepted by the parsers."""


class FixedHeader(NamedTuple):
    """The five values of the fixed prologue."""

    method: Uint8
    flags: Uint8
    mtime: Uint32
    extra_flags: Uint8
    os: Uint8


def _take(data: Buffer, pos: int, size: int, field: str) -> bytes:
    """Return exactly `size` bytes at `pos`, or fail with a truncation error."""
    available = max(len(data) - pos, 0)
    if size > available:
        raise GzipTruncatedError(field, offset=pos, needed=size, available=available)
    return bytes(data[pos : pos + size])


def read_fixed_header(data: Buffer) -> tuple[FixedHeader, int]:
    """
    Read the 10-byte prologue at the start of `data`.

    Returns:
        The decoded fixed fields and the position after them (always 10).

    Raises:
        GzipTruncatedError: If fewer than 10 bytes are available.
        GzipMagicError: If the stream does not start with 1f 8b.
    """
    # Check the signature as soon as two bytes exist, so a short non-gzip input
    # is reported as "not gzip" rather than "too short".
    if len(data) >= len(MAGIC) and bytes(data[: len(MAGIC)]) != MAGIC:
        raise GzipMagicError(bytes(data[: len(MAGIC)]))

    raw = _take(data, 0, FIXED_HEADER_SIZE, "fixed header")

    fixed = FixedHeader(
        method=Uint8(raw[OFFSET_METHOD]),
        flags=Uint8(raw[OFFSET_FLAGS]),
        mtime=Uint32.from_le_bytes(raw[OFFSET_MTIME:OFFSET_EXTRA_FLAGS]),
        extra_flags=Uint8(raw[OFFSET_EXTRA_FLAGS]),
        os=Uint8(raw[OFFSET_OS]),
    )
    return fixed, FIXED_HEADER_SIZE


def read_extra_field(data: Buffer, pos: int) -> tuple[bytes, int]:
    """
    Read a length-prefixed extra field at `pos`.

    Layout: [XLEN: u16 LE][XLEN bytes]

    Raises:
        GzipTruncatedError: If the prefix or the payload is cut short.
    """
    length = Uint16.from_le_bytes(_take(data, pos, EXTRA_LENGTH_SIZE, "extra field length"))
    pos += EXTRA_LENGTH_SIZE
    return _take(data, pos, length, "extra field"), pos + length


def read_terminated(data: Buffer, pos: int, field: str) -> tuple[bytes, int]:
    """
    Read a NUL-terminated byte string at `pos`.

    The terminator is consumed but not returned.

    Raises:
        GzipTruncatedError: If no NUL byte occurs before the end of `data`.
    """
    if isinstance(data, memoryview):
        # memoryview has no find(), search a copy of the tail.
        end = bytes(data[pos:]).find(NUL)
        end = pos + end if end >= 0 else -1
    else:
        end = data.find(NUL, pos)
    if end < 0:
        raise GzipTruncatedError(field, offset=pos, available=max(len(data) - pos, 0))
    return bytes(data[pos:end]), end + 1


def read_header_crc(data: Buffer, pos: int) -> tuple[Uint16, int]:
    """
    Read the 2-byte header CRC at `pos`.

    Raises:
        GzipTruncatedError: If fewer than 2 bytes remain.
    """
    crc = Uint16.from_le_bytes(_take(data, pos, HEADER_CRC_SIZE, "header crc16"))
    return crc, pos + HEADER_CRC_SIZE


def parse_header(data: Buffer) -> tuple[GzipHeader, int]:
    """
    Parse one GZIP header from the start of `data`.

    Bytes after the header (compressed blocks, footer, anything else) are
    ignored, so a caller may pass just a prefix of a large file.

    Args:
        data: Buffer starting with a GZIP member.

    Returns:
        The header and the number of bytes it occupies. The second value is
        the offset at which the compressed blocks start.

    Raises:
        GzipDecodeError: If the input is not a complete GZIP header.
            `GzipMagicError` and `GzipTruncatedError` tell the two cases apart.
    """
    # Step 1: Fixed prologue.
    fixed, pos = read_fixed_header(data)
    method, flags, mtime, extra_flags, os = fixed

    # Steps 2-5: Optional fields, in format order.
    #
    # Reserved flag bits (5-7) are kept in `flags` but select nothing here.
    extra_field = None
    if flags & FEXTRA:
        extra_field, pos = read_extra_field(data, pos)

    filename = None
    if flags & FNAME:
        filename, pos = read_terminated(data, pos, "filename")

    comment = None
    if flags & FCOMMENT:
        comment, pos = read_terminated(data, pos, "comment")

    header_crc16 = None
    if flags & FHCRC:
        header_crc16, pos = read_header_crc(data, pos)

    header = GzipHeader(
        compression_method=method,
        flags=flags,
        modification_time=mtime,
        extra_flags=extra_flags,
        os=os,
        extra_field=extra_field,
        filename=filename,
        comment=comment,
        header_crc16=header_crc16,
    )
    logger.debug("Parsed gzip header: flags=%#04x, %d bytes", flags, pos)
    return header, pos

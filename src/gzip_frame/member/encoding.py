"""
Serialization of GZIP headers and footers.

These are the exact inverses of `parse_header` and `parse_footer`: for any
header the parser produces, `encode_header(header)` returns the bytes it was
parsed from.

The module also holds the header CRC16 helpers. The parsers expose the stored
CRC16 but never check it; callers that want the check opt in here.
"""

from __future__ import annotations

import zlib

from ..types import GzipEncodeError, Uint16
from .constants import HEADER_CRC_SIZE, MAGIC, MAX_EXTRA_LENGTH, NUL
from .containers import GzipFooter, GzipHeader
from .header import Buffer, parse_header


def _encode_terminated(value: bytes, field: str) -> bytes:
    """Append the NUL terminator, rejecting values that already contain one."""
    if NUL in value:
        raise GzipEncodeError(field, "contains a NUL byte")
    return value + bytes((NUL,))


def encode_header_prefix(header: GzipHeader) -> bytes:
    """
    Encode every header byte that precedes the CRC16 field.

    This is the input of the header CRC16.
    """
    output = bytearray(MAGIC)
    output.append(header.compression_method)
    output.append(header.flags)
    output.extend(header.modification_time.to_bytes())
    output.append(header.extra_flags)
    output.append(header.os)

    if header.extra_field is not None:
        if len(header.extra_field) > MAX_EXTRA_LENGTH:
            raise GzipEncodeError(
                "extra field", f"{len(header.extra_field)} bytes exceed {MAX_EXTRA_LENGTH}"
            )
        output.extend(Uint16(len(header.extra_field)).to_bytes())
        output.extend(header.extra_field)

    if header.filename is not None:
        output.extend(_encode_terminated(header.filename, "filename"))

    if header.comment is not None:
        output.extend(_encode_terminated(header.comment, "comment"))

    return bytes(output)


def encode_header(header: GzipHeader) -> bytes:
    """
    Encode a header to its wire form.

    The stored `header_crc16` is written as-is, it is not recomputed. Use
    `with_header_crc16` to obtain a header carrying the correct value.

    Raises:
        GzipEncodeError: If the filename or comment contains NUL, or the extra
            field is longer than 65535 bytes.
    """
    output = encode_header_prefix(header)
    if header.header_crc16 is not None:
        output += header.header_crc16.to_bytes()
    return output


def encode_footer(footer: GzipFooter) -> bytes:
    """Encode a footer to its 8-byte wire form."""
    return footer.crc32.to_bytes() + footer.uncompressed_size.to_bytes()


def compute_header_crc16(prefix: Buffer) -> Uint16:
    """
    Compute the CRC16 of the header bytes preceding the CRC16 field.

    Per RFC 1952 this is the two least significant bytes of the CRC-32 of
    those bytes.
    """
    return Uint16(zlib.crc32(prefix) & 0xFFFF)


def with_header_crc16(header: GzipHeader) -> GzipHeader:
    """Return a copy of `header` whose `header_crc16` matches its contents."""
    if header.header_crc16 is None:
        return header
    return header.copy(header_crc16=compute_header_crc16(encode_header_prefix(header)))


def header_crc16_matches(data: Buffer) -> bool | None:
    """
    Check the stored header CRC16 of the member at the start of `data`.

    Returns:
        None if FHCRC is not set, otherwise whether the stored CRC16 matches
        the header bytes.

    Raises:
        GzipDecodeError: If the header itself cannot be parsed.
    """
    header, consumed = parse_header(data)
    if header.header_crc16 is None:
        return None
    return compute_header_crc16(data[: consumed - HEADER_CRC_SIZE]) == header.header_crc16

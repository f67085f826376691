"""
Subfields of the GZIP extra field.

When FEXTRA is set, the extra field is by convention a sequence of subfields::

    +---+---+---+---+==================================+
    |SI1|SI2|  LEN  |... LEN bytes of subfield data ...|
    +---+---+---+---+==================================+

SI1 and SI2 identify the subfield, typically two ASCII letters ("Ap" for
Apollo file type information, "BC" for BGZF block size). LEN is little-endian.

The header parser keeps the extra field opaque. Decoding it is optional and
only happens on request.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..types import GzipEncodeError, GzipTruncatedError, Uint8, Uint16
from .constants import MAX_EXTRA_LENGTH, SUBFIELD_HEADER_SIZE
from .containers import SubField


def parse_subfields(extra: bytes) -> list[SubField]:
    """
    Decode an extra field into its subfields, in order.

    Raises:
        GzipTruncatedError: If a subfield header or its data runs past the end.
    """
    subfields = []
    pos = 0
    while pos < len(extra):
        available = len(extra) - pos
        if available < SUBFIELD_HEADER_SIZE:
            raise GzipTruncatedError(
                "extra subfield header",
                offset=pos,
                needed=SUBFIELD_HEADER_SIZE,
                available=available,
            )

        length = Uint16.from_le_bytes(extra[pos + 2 : pos + 4])
        start = pos + SUBFIELD_HEADER_SIZE
        if start + length > len(extra):
            raise GzipTruncatedError(
                "extra subfield data",
                offset=start,
                needed=length,
                available=len(extra) - start,
            )

        subfields.append(
            SubField(
                id1=Uint8(extra[pos]),
                id2=Uint8(extra[pos + 1]),
                data=bytes(extra[start : start + length]),
            )
        )
        pos = start + length

    return subfields


def encode_subfields(subfields: Iterable[SubField]) -> bytes:
    """
    Encode subfields into an extra field payload (without XLEN).

    Raises:
        GzipEncodeError: If a subfield or the whole payload is too long.
    """
    output = bytearray()
    for subfield in subfields:
        if len(subfield.data) > MAX_EXTRA_LENGTH:
            raise GzipEncodeError(
                "extra subfield", f"{len(subfield.data)} bytes exceed {MAX_EXTRA_LENGTH}"
            )
        output.append(subfield.id1)
        output.append(subfield.id2)
        output.extend(Uint16(len(subfield.data)).to_bytes())
        output.extend(subfield.data)

    if len(output) > MAX_EXTRA_LENGTH:
        raise GzipEncodeError("extra field", f"{len(output)} bytes exceed {MAX_EXTRA_LENGTH}")
    return bytes(output)

"""
GZIP footer parsing.

The footer closes every member::

    +---+---+---+---+---+---+---+---+
    |     CRC32     |     ISIZE     |
    +---+---+---+---+---+---+---+---+

Both fields are little-endian. ISIZE is the uncompressed size modulo 2^32,
so a 5 GiB payload reports 1 GiB. That truncation is part of the format and
is kept as-is.
"""

from __future__ import annotations

from ..types import GzipTruncatedError, Uint32
from .constants import FOOTER_SIZE
from .containers import GzipFooter
from .header import Buffer


def parse_footer(data: Buffer) -> GzipFooter:
    """
    Parse the 8-byte footer at the start of `data`.

    Callers normally pass the last 8 bytes of a stream. Only bytes 0-7 are
    read; anything after them is ignored. Callers that require the footer
    to end the input exactly check `len(data) == 8` before calling.

    Raises:
        GzipTruncatedError: If fewer than 8 bytes are supplied.
    """
    if len(data) < FOOTER_SIZE:
        raise GzipTruncatedError("footer", offset=0, needed=FOOTER_SIZE, available=len(data))

    raw = bytes(data[:FOOTER_SIZE])
    return GzipFooter(
        crc32=Uint32.from_le_bytes(raw[:4]),
        uncompressed_size=Uint32.from_le_bytes(raw[4:]),
    )

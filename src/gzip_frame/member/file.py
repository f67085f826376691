"""
Whole-stream parsing for buffers held entirely in memory.

Callers with a seekable file should prefer `parse_header` on the start of the
file and `parse_footer` on its last 8 bytes: that skips the compressed blocks
instead of copying them.


SINGLE MEMBER ASSUMPTION
------------------------
RFC 1952 allows a stream to be several members back to back. In practice the
gzip and 7z tools treat such a file as one member: they show the header of the
first member with the footer of the last.

This parser does the same. The footer is always the final 8 bytes of the
input, and everything between the first header and that footer is reported as
the compressed block, including any inner footers and headers.
"""

from __future__ import annotations

import logging

from ..types import GzipTruncatedError
from .constants import FOOTER_SIZE, MAGIC
from .containers import GzipFile
from .footer import parse_footer
from .header import Buffer, parse_header

logger = logging.getLogger(__name__)


def parse_file(data: Buffer) -> GzipFile:
    """
    Split a complete single-member GZIP stream into header, block and footer.

    Args:
        data: The entire stream, from the first header byte to EOF.

    Returns:
        The parsed header and footer with a copy of the compressed block.

    Raises:
        GzipDecodeError: If the header is malformed, or fewer than 8 bytes
            remain after it for the footer.
    """
    # Step 1: Header at offset 0.
    header, consumed = parse_header(data)

    # Step 2: Locate the footer.
    #
    # The block length is len - consumed - 8. Check it before slicing so a
    # short stream is reported as a truncation, never as a negative length.
    remaining = len(data) - consumed
    if remaining < FOOTER_SIZE:
        raise GzipTruncatedError(
            "compressed block", offset=consumed, needed=FOOTER_SIZE, available=remaining
        )
    block_end = len(data) - FOOTER_SIZE

    footer = parse_footer(data[block_end:])
    block = bytes(data[consumed:block_end])

    if logger.isEnabledFor(logging.DEBUG) and MAGIC in block:
        # Not conclusive, the signature may occur inside DEFLATE output.
        logger.debug("Compressed block contains a gzip signature; stream may hold several members")
    logger.debug("Parsed gzip file: block [%d, %d)", consumed, block_end)

    return GzipFile(
        header=header,
        compressed_start=consumed,
        compressed_end=block_end,
        compressed_block=block,
        footer=footer,
    )

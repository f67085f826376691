"""
Structural parsing of a single GZIP member (RFC 1952).

Usage::

    from gzip_frame.member import parse_file, parse_footer, parse_header

    # Whole stream in memory
    gz = parse_file(data)

    # Seekable file: read the header, then jump straight to the footer
    header, offset = parse_header(f.read(65536))
    f.seek(-8, os.SEEK_END)
    footer = parse_footer(f.read(8))

Nothing here decompresses the payload or verifies checksums.
"""

from __future__ import annotations

from .containers import (
    CompressionMethod,
    ExtraFlags,
    GzipFile,
    GzipFooter,
    GzipHeader,
    HeaderFlags,
    OperatingSystem,
    SubField,
)
from .encoding import (
    compute_header_crc16,
    encode_footer,
    encode_header,
    header_crc16_matches,
    with_header_crc16,
)
from .extra import encode_subfields, parse_subfields
from .file import parse_file
from .footer import parse_footer
from .header import parse_header

__all__ = [
    # Parsers
    "parse_header",
    "parse_footer",
    "parse_file",
    "parse_subfields",
    # Serializers
    "encode_header",
    "encode_footer",
    "encode_subfields",
    # Header CRC16
    "compute_header_crc16",
    "header_crc16_matches",
    "with_header_crc16",
    # Records
    "GzipHeader",
    "GzipFooter",
    "GzipFile",
    "SubField",
    # Enumerations
    "CompressionMethod",
    "ExtraFlags",
    "HeaderFlags",
    "OperatingSystem",
]

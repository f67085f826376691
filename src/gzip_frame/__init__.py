"""
Header and footer parsing for GZIP streams.

Extracts the structure of a GZIP member without decompressing it: the header
fields, the byte range of the compressed blocks, and the CRC32/size footer.

Usage::

    from gzip_frame import parse_file

    gz = parse_file(data)
    gz.header.decoded_filename()
    gz.footer.uncompressed_size

The format is specified in RFC 1952:
https://www.rfc-editor.org/rfc/rfc1952
"""

from .member import (
    CompressionMethod,
    ExtraFlags,
    GzipFile,
    GzipFooter,
    GzipHeader,
    HeaderFlags,
    OperatingSystem,
    SubField,
    compute_header_crc16,
    encode_footer,
    encode_header,
    encode_subfields,
    header_crc16_matches,
    parse_file,
    parse_footer,
    parse_header,
    parse_subfields,
    with_header_crc16,
)
from .types import (
    GzipDecodeError,
    GzipEncodeError,
    GzipError,
    GzipMagicError,
    GzipTruncatedError,
)

__all__ = [
    # Core API
    "parse_header",
    "parse_footer",
    "parse_file",
    # Extras
    "parse_subfields",
    "encode_subfields",
    "encode_header",
    "encode_footer",
    "compute_header_crc16",
    "header_crc16_matches",
    "with_header_crc16",
    # Records
    "GzipHeader",
    "GzipFooter",
    "GzipFile",
    "SubField",
    "CompressionMethod",
    "ExtraFlags",
    "HeaderFlags",
    "OperatingSystem",
    # Exceptions
    "GzipError",
    "GzipDecodeError",
    "GzipTruncatedError",
    "GzipMagicError",
    "GzipEncodeError",
]

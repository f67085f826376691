"""
GZIP structure inspector.

Print the header and footer of GZIP files without decompressing them.

Usage::

    python -m gzip_frame archive.tar.gz
    python -m gzip_frame --json logs/*.gz
    python -m gzip_frame --verify backup.gz

Options:
    --json      Print one JSON object per file instead of a text summary
    --verify    Inflate the payload and compare it with the footer CRC32 and size
    -v          Enable debug logging

Files are read the cheap way: the header from the start of the file, then a
seek to the last 8 bytes for the footer. Only --verify reads the middle.

--verify assumes a single member: on a concatenated file it inflates the first
member only, compares it with the final footer and reports FAILED.

Environment:
    GZIP_FRAME_LOG_LEVEL    Log level when -v is not given (default: WARNING)
    GZIP_FRAME_READ_SIZE    Initial header read size in bytes (default: 65536)
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
import zlib
from pathlib import Path
from typing import BinaryIO

from gzip_frame import config
from gzip_frame.member import GzipFooter, GzipHeader, HeaderFlags, parse_footer, parse_header
from gzip_frame.member.constants import FOOTER_SIZE, METHOD_DEFLATE, UINT32_MODULUS
from gzip_frame.types import GzipDecodeError, GzipError, GzipTruncatedError, StrictBaseModel

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 1 << 16


class MemberSummary(StrictBaseModel):
    """What the inspector reports for one file."""

    path: str
    header: GzipHeader
    compressed_start: int
    compressed_end: int
    footer: GzipFooter


class VerifyResult(StrictBaseModel):
    """Outcome of inflating a payload and comparing it with the footer."""

    crc32: int
    uncompressed_size: int
    crc32_ok: bool
    size_ok: bool

    @property
    def ok(self) -> bool:
        """True when both the CRC-32 and the size agree with the footer."""
        return self.crc32_ok and self.size_ok


def read_header(f: BinaryIO, read_size: int = config.READ_SIZE) -> tuple[GzipHeader, int]:
    """
    Parse the header at the start of `f`, reading only as much as needed.

    A header longer than `read_size` (huge filename or extra field) is retried
    with a doubled buffer until it parses or the file ends.
    """
    f.seek(0)
    buffer = f.read(read_size)
    while True:
        try:
            return parse_header(buffer)
        except GzipTruncatedError:
            more = f.read(max(len(buffer), read_size))
            if not more:
                raise
            logger.debug("Header longer than %d bytes, reading more", len(buffer))
            buffer += more


def read_footer(f: BinaryIO) -> tuple[GzipFooter, int]:
    """
    Parse the footer from the last 8 bytes of `f`.

    Returns:
        The footer and the total size of the file.
    """
    size = f.seek(0, os.SEEK_END)
    if size < FOOTER_SIZE:
        raise GzipTruncatedError("footer", offset=0, needed=FOOTER_SIZE, available=size)
    f.seek(size - FOOTER_SIZE)
    return parse_footer(f.read(FOOTER_SIZE)), size


def inspect_file(path: Path, read_size: int = config.READ_SIZE) -> MemberSummary:
    """
    Read the header and footer of the GZIP file at `path`.

    The file is treated as a single member running to EOF.

    Raises:
        GzipDecodeError: If the file is not a well-formed GZIP member.
        OSError: If the file cannot be read.
    """
    with path.open("rb") as f:
        header, consumed = read_header(f, read_size)
        footer, size = read_footer(f)

    if size - consumed < FOOTER_SIZE:
        raise GzipTruncatedError(
            "compressed block", offset=consumed, needed=FOOTER_SIZE, available=size - consumed
        )

    return MemberSummary(
        path=str(path),
        header=header,
        compressed_start=consumed,
        compressed_end=size - FOOTER_SIZE,
        footer=footer,
    )


def verify_file(path: Path, summary: MemberSummary) -> VerifyResult:
    """
    Inflate the compressed block and compare it against the footer.

    Raises:
        GzipDecodeError: If the method is not DEFLATE or the block is not
            valid DEFLATE data, or the stream ends without its final block.
    """
    if summary.header.compression_method != METHOD_DEFLATE:
        raise GzipDecodeError(
            "compression method",
            f"cannot verify method {summary.header.compression_method}",
            offset=2,
        )

    decompressor = zlib.decompressobj(-zlib.MAX_WBITS)
    crc = 0
    size = 0
    remaining = summary.compressed_end - summary.compressed_start

    with path.open("rb") as f:
        f.seek(summary.compressed_start)
        try:
            while remaining > 0:
                chunk = f.read(min(_CHUNK_SIZE, remaining))
                if not chunk:
                    break
                remaining -= len(chunk)
                out = decompressor.decompress(chunk)
                crc = zlib.crc32(out, crc)
                size += len(out)
            out = decompressor.flush()
        except zlib.error as e:
            raise GzipDecodeError(
                "compressed block", str(e), offset=summary.compressed_start
            ) from e

    if not decompressor.eof:
        raise GzipDecodeError(
            "compressed block", "DEFLATE stream is incomplete", offset=summary.compressed_start
        )

    crc = zlib.crc32(out, crc)
    size += len(out)

    if decompressor.unused_data:
        # Only the first member is inflated; its CRC is compared with the last footer.
        logger.warning(
            "%s: %d bytes follow the first DEFLATE stream; "
            "the file may hold several members and cannot be verified as one",
            path,
            len(decompressor.unused_data),
        )

    return VerifyResult(
        crc32=crc,
        uncompressed_size=size,
        crc32_ok=crc == summary.footer.crc32,
        size_ok=size % UINT32_MODULUS == summary.footer.uncompressed_size,
    )


def format_summary(summary: MemberSummary) -> str:
    """Render a summary as human-readable text."""
    header = summary.header
    method = header.method.name if header.method is not None else "unknown"
    os_name = header.operating_system.name if header.operating_system is not None else "unknown"
    flags = "|".join(flag.name for flag in HeaderFlags if flag in header.flag_set) or "-"

    lines = [
        f"{summary.path}:",
        f"  method:            {method} ({header.compression_method})",
        f"  flags:             {flags} ({header.flags:#04x})",
        f"  modified:          {header.modified_at.isoformat() if header.modified_at else '-'}",
        f"  extra flags:       {header.extra_flags}",
        f"  os:                {os_name} ({header.os})",
    ]
    if header.extra_field is not None:
        lines.append(f"  extra field:       {len(header.extra_field)} bytes")
    if header.filename is not None:
        lines.append(f"  filename:          {header.decoded_filename()}")
    if header.comment is not None:
        lines.append(f"  comment:           {header.decoded_comment()}")
    if header.header_crc16 is not None:
        lines.append(f"  header crc16:      {header.header_crc16:#06x}")
    lines += [
        f"  compressed block:  [{summary.compressed_start}, {summary.compressed_end})",
        f"  crc32:             {summary.footer.crc32:#010x}",
        f"  size (mod 2^32):   {summary.footer.uncompressed_size}",
    ]
    return "\n".join(lines)


def setup_logging(verbose: bool = False) -> None:
    """Configure root logging for the CLI."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else config.LOG_LEVEL_NUMBER,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns the process exit status."""
    parser = argparse.ArgumentParser(
        prog="gzip-frame",
        description="Inspect the header and footer of GZIP files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "files",
        nargs="+",
        type=Path,
        help="GZIP files to inspect",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print one JSON object per file",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Inflate the payload and check the footer CRC32 and size",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    status = 0
    for path in args.files:
        try:
            summary = inspect_file(path)
            result = verify_file(path, summary) if args.verify else None
        except (GzipError, OSError) as e:
            logger.error("%s: %s", path, e)
            status = 1
            continue

        if args.json:
            document = summary.model_dump(mode="json", by_alias=True)
            if result is not None:
                document["verify"] = result.model_dump(mode="json", by_alias=True)
            print(json.dumps(document))
        else:
            print(format_summary(summary))

        if result is not None:
            if not args.json:
                print(f"  verify:            {'ok' if result.ok else 'FAILED'}")
            if not result.ok:
                logger.warning(
                    "%s: payload does not match footer (crc32 %#010x, size %d)",
                    path,
                    result.crc32,
                    result.uncompressed_size,
                )
                status = 1

    return status


if __name__ == "__main__":
    sys.exit(main())

"""
Records produced by the GZIP member parsers.

Every record is a frozen pydantic model. Raw byte values are always kept
verbatim; the enumerations below are views over them and never replace them,
so reserved or unknown values survive a parse/encode cycle untouched.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import IntEnum, IntFlag
from typing import TypeVar

from pydantic import model_validator

from ..types import StrictBaseModel, Uint8, Uint16, Uint32
from .constants import (
    FCOMMENT,
    FEXTRA,
    FHCRC,
    FNAME,
    FTEXT,
    RESERVED_FLAGS_MASK,
)

# =============================================================================
# Enumerations
# =============================================================================


E = TypeVar("E", bound=IntEnum)


class CompressionMethod(IntEnum):
    """
    Values of the CM byte.

    Only DEFLATE is defined. 0-7 are reserved by the format.
    """

    RESERVED_0 = 0
    RESERVED_1 = 1
    RESERVED_2 = 2
    RESERVED_3 = 3
    RESERVED_4 = 4
    RESERVED_5 = 5
    RESERVED_6 = 6
    RESERVED_7 = 7
    DEFLATE = 8
    """The DEFLATE algorithm (RFC 1951). Used by every real-world compressor."""


class HeaderFlags(IntFlag):
    """
    Bits of the FLG byte.

    IntFlag keeps undefined bits, so `HeaderFlags(0xE8)` still carries the
    reserved bits 5-7 alongside FNAME.
    """

    FTEXT = 0x01
    """The payload is probably ASCII text. Purely a hint."""

    FHCRC = 0x02
    """A CRC16 of the header is present."""

    FEXTRA = 0x04
    """An extra field is present."""

    FNAME = 0x08
    """An original filename is present."""

    FCOMMENT = 0x10
    """A comment is present."""


class ExtraFlags(IntEnum):
    """Values of the XFL byte that are meaningful for DEFLATE."""

    MAXIMUM_COMPRESSION = 2
    """Compressor used maximum compression, slowest algorithm."""

    FASTEST_ALGORITHM = 4
    """Compressor used the fastest algorithm."""


class OperatingSystem(IntEnum):
    """File system on which compression took place (OS byte)."""

    FAT = 0
    AMIGA = 1
    VMS = 2
    UNIX = 3
    VM_CMS = 4
    ATARI_TOS = 5
    HPFS = 6
    MACINTOSH = 7
    Z_SYSTEM = 8
    CPM = 9
    TOPS_20 = 10
    NTFS = 11
    QDOS = 12
    ACORN_RISCOS = 13
    UNKNOWN = 255
    """Explicitly "unknown". Python's own gzip module writes this value."""


def _lookup(enum_cls: type[E], value: int) -> E | None:
    """Map a raw byte to an enum member, or None if the value is not listed."""
    try:
        return enum_cls(value)
    except ValueError:
        return None


# =============================================================================
# Records
# =============================================================================


class SubField(StrictBaseModel):
    """
    One entry of the extra field.

    Layout::

        +---+---+---+---+==================================+
        |SI1|SI2|  LEN  |... LEN bytes of subfield data ...|
        +---+---+---+---+==================================+
    """

    id1: Uint8
    id2: Uint8
    data: bytes

    @property
    def identifier(self) -> bytes:
        """The two identifier bytes, e.g. `b"Ap"` for Apollo file type info."""
        return bytes((self.id1, self.id2))


class GzipHeader(StrictBaseModel):
    """
    The fixed prologue of a member plus its flag-gated optional fields.

    Optional fields are None exactly when their flag bit is clear. A field
    whose flag is set may still be empty (e.g. `filename == b""`).
    """

    compression_method: Uint8
    """Raw CM byte. See `method` for the enumerated view."""

    flags: Uint8
    """Raw FLG byte, reserved bits included."""

    modification_time: Uint32
    """MTIME in POSIX seconds. 0 means no timestamp is available."""

    extra_flags: Uint8
    """Raw XFL byte. Compressor specific."""

    os: Uint8
    """Raw OS byte. See `operating_system` for the enumerated view."""

    extra_field: bytes | None = None
    """Payload of the extra field, without its XLEN prefix."""

    filename: bytes | None = None
    """Original filename, without the NUL terminator. Latin-1 per the RFC."""

    comment: bytes | None = None
    """File comment, without the NUL terminator. Latin-1 per the RFC."""

    header_crc16: Uint16 | None = None
    """Stored header CRC16. Never verified by the parser."""

    @model_validator(mode="after")
    def check_flag_consistency(self) -> GzipHeader:
        """Reject optional fields whose presence disagrees with `flags`."""
        for bit, name in (
            (FEXTRA, "extra_field"),
            (FNAME, "filename"),
            (FCOMMENT, "comment"),
            (FHCRC, "header_crc16"),
        ):
            flagged = bool(self.flags & bit)
            present = getattr(self, name) is not None
            if flagged != present:
                state = "set" if flagged else "clear"
                raise ValueError(f"{name} presence does not match its flag bit ({state})")
        return self

    @property
    def method(self) -> CompressionMethod | None:
        """Enumerated compression method, or None for values above 8."""
        return _lookup(CompressionMethod, self.compression_method)

    @property
    def flag_set(self) -> HeaderFlags:
        """The FLG byte as a flag set (reserved bits kept)."""
        return HeaderFlags(self.flags)

    @property
    def is_text(self) -> bool:
        """Whether FTEXT is set. A hint only, never acted upon."""
        return bool(self.flags & FTEXT)

    @property
    def reserved_flags(self) -> int:
        """Bits 5-7 of FLG, in place."""
        return self.flags & RESERVED_FLAGS_MASK

    @property
    def extra_flags_hint(self) -> ExtraFlags | None:
        """Enumerated XFL value, or None for values with no defined meaning."""
        return _lookup(ExtraFlags, self.extra_flags)

    @property
    def operating_system(self) -> OperatingSystem | None:
        """Enumerated OS, or None for values not in the RFC table."""
        return _lookup(OperatingSystem, self.os)

    @property
    def modified_at(self) -> datetime | None:
        """MTIME as an aware UTC datetime, or None when it is 0."""
        if self.modification_time == 0:
            return None
        return datetime.fromtimestamp(self.modification_time, tz=timezone.utc)

    def decoded_filename(self) -> str | None:
        """Filename decoded as Latin-1. Lossless for any byte sequence."""
        return None if self.filename is None else self.filename.decode("latin-1")

    def decoded_comment(self) -> str | None:
        """Comment decoded as Latin-1."""
        return None if self.comment is None else self.comment.decode("latin-1")

    def subfields(self) -> list[SubField]:
        """
        Decode the extra field into its subfields.

        Returns an empty list when FEXTRA is not set.

        Raises:
            GzipDecodeError: If the extra field is not a valid subfield sequence.
        """
        # Deferred: extra imports this module for SubField.
        from .extra import parse_subfields

        if self.extra_field is None:
            return []
        return parse_subfields(self.extra_field)


class GzipFooter(StrictBaseModel):
    """The 8-byte trailer of a member."""

    crc32: Uint32
    """CRC-32 of the uncompressed data. Never verified by the parser."""

    uncompressed_size: Uint32
    """Size of the uncompressed data modulo 2^32 (ISIZE)."""


class GzipFile(StrictBaseModel):
    """
    A whole single-member stream, split into its three parts.

    `compressed_block` is an independent copy of `source[compressed_start:compressed_end]`,
    so the record does not keep the source buffer alive.
    """

    header: GzipHeader
    compressed_start: int
    compressed_end: int
    compressed_block: bytes
    footer: GzipFooter

    @model_validator(mode="after")
    def check_block_range(self) -> GzipFile:
        """The recorded range must describe `compressed_block` exactly."""
        if not 0 <= self.compressed_start <= self.compressed_end:
            raise ValueError(
                f"invalid compressed range [{self.compressed_start}, {self.compressed_end})"
            )
        if self.compressed_end - self.compressed_start != len(self.compressed_block):
            raise ValueError("compressed_block length does not match its range")
        return self

    @property
    def compressed_range(self) -> range:
        """Half-open byte range of the compressed block in the source buffer."""
        return range(self.compressed_start, self.compressed_end)

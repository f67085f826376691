"""Tests for GZIP header parsing."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from gzip_frame import GzipDecodeError, GzipMagicError, GzipTruncatedError, parse_header
from gzip_frame.member.header import (
    read_extra_field,
    read_fixed_header,
    read_header_crc,
    read_terminated,
)
from tests.gzip_frame.helpers import (
    ALL_FLAG_COMBINATIONS,
    FCOMMENT,
    FEXTRA,
    FHCRC,
    FNAME,
    FTEXT,
    SAMPLE_MTIME,
    build_header,
    gzip_member,
)

# Byte strings that never contain NUL, for filename and comment values.
no_nul_bytes = st.binary(max_size=64).map(lambda b: b.replace(b"\x00", b"\x01"))


class TestFixedHeader:
    """Tests for the 10-byte prologue."""

    def test_minimal_header_consumes_ten_bytes(self) -> None:
        """A 10-byte input with no optional flags parses completely."""
        data = build_header()
        assert len(data) == 10

        header, consumed = parse_header(data)

        assert consumed == 10
        assert header.flags == 0
        assert header.extra_field is None
        assert header.filename is None
        assert header.comment is None
        assert header.header_crc16 is None

    def test_fixed_fields_decoded(self) -> None:
        """Method, mtime, extra flags and OS are read from their offsets."""
        data = build_header(method=8, mtime=SAMPLE_MTIME, extra_flags=2, os=3)

        header, _ = parse_header(data)

        assert header.compression_method == 8
        assert header.modification_time == SAMPLE_MTIME
        assert header.extra_flags == 2
        assert header.os == 3

    def test_mtime_little_endian(self) -> None:
        """MTIME is stored least significant byte first."""
        data = b"\x1f\x8b\x08\x00" + b"\x78\x56\x34\x12" + b"\x00\x03"
        header, _ = parse_header(data)
        assert header.modification_time == 0x12345678

    def test_trailing_bytes_ignored(self) -> None:
        """Compressed data after the header is not consumed."""
        data = build_header() + b"\x03\x00" + b"\x00" * 8
        _, consumed = parse_header(data)
        assert consumed == 10

    @pytest.mark.parametrize("length", range(10))
    def test_short_input_is_truncated(self, length: int) -> None:
        """Fewer than 10 bytes fails as a truncation."""
        data = build_header()[:length]
        with pytest.raises(GzipTruncatedError) as excinfo:
            parse_header(data)
        assert excinfo.value.field == "fixed header"
        assert excinfo.value.needed == 10
        assert excinfo.value.available == length

    def test_flipped_magic_bit_rejected(self) -> None:
        """Magic 1f 8c is not a gzip stream."""
        data = b"\x1f\x8c" + build_header()[2:]
        with pytest.raises(GzipMagicError) as excinfo:
            parse_header(data)
        assert excinfo.value.found == b"\x1f\x8c"
        assert isinstance(excinfo.value, GzipDecodeError)

    def test_short_non_gzip_reported_as_magic(self) -> None:
        """A short input with the wrong signature is "not gzip", not "too short"."""
        with pytest.raises(GzipMagicError):
            parse_header(b"hello")

    def test_reserved_flag_bits_preserved(self) -> None:
        """Bits 5-7 are kept and select no optional field."""
        data = build_header(flags=0xE0)

        header, consumed = parse_header(data)

        assert consumed == 10
        assert header.flags == 0xE0
        assert header.reserved_flags == 0xE0

    @pytest.mark.parametrize("method", [0, 7, 9, 0x63, 0xFF])
    def test_unknown_method_preserved(self, method: int) -> None:
        """Non-DEFLATE methods are reported verbatim, not rejected."""
        header, _ = parse_header(build_header(method=method))
        assert header.compression_method == method

    @pytest.mark.parametrize("os", [14, 0x80, 0xFE])
    def test_unknown_os_preserved(self, os: int) -> None:
        """OS values outside the RFC table are reported verbatim."""
        header, _ = parse_header(build_header(os=os))
        assert header.os == os
        assert header.operating_system is None

    def test_read_fixed_header_returns_named_fields(self) -> None:
        """The fixed reader exposes the five values by name."""
        fixed, pos = read_fixed_header(build_header(FNAME, mtime=7, extra_flags=4, os=11))
        assert pos == 10
        assert fixed.method == 8
        assert fixed.flags == FNAME
        assert fixed.mtime == 7
        assert fixed.extra_flags == 4
        assert fixed.os == 11


class TestOptionalFields:
    """Tests for the flag-gated variable section."""

    @pytest.mark.parametrize("flags", ALL_FLAG_COMBINATIONS)
    def test_presence_follows_flags(self, flags: int) -> None:
        """Each optional field is present exactly when its bit is set."""
        data = build_header(
            flags,
            extra=b"XY\x02\x00ok",
            filename=b"name.txt",
            comment=b"a comment",
            crc16=0xBEEF,
        )

        header, consumed = parse_header(data + b"payload")

        assert consumed == len(data)
        assert header.flags == flags
        assert header.is_text == bool(flags & FTEXT)
        assert (header.extra_field == b"XY\x02\x00ok") == bool(flags & FEXTRA)
        assert (header.filename == b"name.txt") == bool(flags & FNAME)
        assert (header.comment == b"a comment") == bool(flags & FCOMMENT)
        assert (header.header_crc16 == 0xBEEF) == bool(flags & FHCRC)
        if not flags & FEXTRA:
            assert header.extra_field is None
        if not flags & FNAME:
            assert header.filename is None

    def test_empty_values_are_present_not_absent(self) -> None:
        """A flagged field may be empty; it is then b"" rather than None."""
        data = build_header(FEXTRA | FNAME | FCOMMENT)

        header, consumed = parse_header(data)

        assert header.extra_field == b""
        assert header.filename == b""
        assert header.comment == b""
        assert consumed == 10 + 2 + 1 + 1

    def test_field_order(self) -> None:
        """Extra, filename, comment, CRC16 follow each other in that order."""
        data = (
            build_header()[:3]
            + bytes((FEXTRA | FNAME | FCOMMENT | FHCRC,))
            + build_header()[4:]
            + b"\x01\x00E"
            + b"file\x00"
            + b"note\x00"
            + b"\x34\x12"
        )

        header, consumed = parse_header(data)

        assert header.extra_field == b"E"
        assert header.filename == b"file"
        assert header.comment == b"note"
        assert header.header_crc16 == 0x1234
        assert consumed == len(data)

    def test_latin1_filename(self) -> None:
        """Filenames are kept as raw bytes and decode as Latin-1."""
        header, _ = parse_header(build_header(FNAME, filename=b"caf\xe9.txt"))
        assert header.filename == b"caf\xe9.txt"
        assert header.decoded_filename() == "café.txt"

    @pytest.mark.parametrize("filler", [0, 1, 100, 10_000])
    def test_filename_without_terminator(self, filler: int) -> None:
        """A filename with no NUL fails no matter how much data follows."""
        data = build_header()[:3] + bytes((FNAME,)) + build_header()[4:] + b"a" * filler

        with pytest.raises(GzipTruncatedError) as excinfo:
            parse_header(data)

        assert excinfo.value.field == "filename"
        assert excinfo.value.offset == 10
        assert excinfo.value.available == filler
        assert excinfo.value.needed is None

    @pytest.mark.parametrize("filler", [0, 1, 100, 10_000])
    def test_comment_without_terminator(self, filler: int) -> None:
        """A comment with no NUL fails no matter how much data follows."""
        data = build_header(FNAME, filename=b"x") + b"\xff" * filler
        data = data[:3] + bytes((FNAME | FCOMMENT,)) + data[4:]

        with pytest.raises(GzipTruncatedError) as excinfo:
            parse_header(data)

        assert excinfo.value.field == "comment"
        assert excinfo.value.offset == 12

    def test_truncated_extra_length(self) -> None:
        """A single byte where XLEN should be is a truncation."""
        data = build_header(FEXTRA)[:11]
        with pytest.raises(GzipTruncatedError) as excinfo:
            parse_header(data)
        assert excinfo.value.field == "extra field length"
        assert excinfo.value.needed == 2
        assert excinfo.value.available == 1

    def test_truncated_extra_payload(self) -> None:
        """XLEN larger than the remaining input is a truncation."""
        data = build_header(FEXTRA, extra=b"0123456789")[:-5]
        with pytest.raises(GzipTruncatedError) as excinfo:
            parse_header(data)
        assert excinfo.value.field == "extra field"
        assert excinfo.value.needed == 10
        assert excinfo.value.available == 5

    def test_truncated_header_crc(self) -> None:
        """One byte of CRC16 is not enough."""
        data = build_header(FHCRC)[:-1]
        with pytest.raises(GzipTruncatedError) as excinfo:
            parse_header(data)
        assert excinfo.value.field == "header crc16"

    def test_nul_inside_extra_field_is_data(self) -> None:
        """The extra field is length-prefixed, so NUL bytes in it do not terminate anything."""
        data = build_header(FEXTRA | FNAME, extra=b"\x00\x00\x00", filename=b"n")
        header, consumed = parse_header(data)
        assert header.extra_field == b"\x00\x00\x00"
        assert header.filename == b"n"
        assert consumed == len(data)

    @pytest.mark.parametrize("wrap", [bytes, bytearray, memoryview])
    def test_buffer_types(self, wrap: type) -> None:
        """bytes, bytearray and memoryview inputs give the same result."""
        data = build_header(FNAME | FCOMMENT, filename=b"f", comment=b"c") + b"rest"
        expected = parse_header(data)
        assert parse_header(wrap(data)) == expected

    @given(
        flags=st.integers(min_value=0, max_value=0xFF),
        mtime=st.integers(min_value=0, max_value=2**32 - 1),
        extra=st.binary(max_size=300),
        filename=no_nul_bytes,
        comment=no_nul_bytes,
        crc16=st.integers(min_value=0, max_value=0xFFFF),
    )
    def test_arbitrary_headers(
        self, flags: int, mtime: int, extra: bytes, filename: bytes, comment: bytes, crc16: int
    ) -> None:
        """Any well-formed header is consumed exactly and reproduces its values."""
        data = build_header(
            flags, mtime=mtime, extra=extra, filename=filename, comment=comment, crc16=crc16
        )

        header, consumed = parse_header(data + b"\x00\x01\x02")

        assert consumed == len(data)
        assert header.modification_time == mtime
        assert header.extra_field == (extra if flags & FEXTRA else None)
        assert header.filename == (filename if flags & FNAME else None)
        assert header.comment == (comment if flags & FCOMMENT else None)
        assert header.header_crc16 == (crc16 if flags & FHCRC else None)


class TestFieldReaders:
    """Tests for the individual pipeline steps."""

    def test_read_terminated(self) -> None:
        """The terminator is consumed but not returned."""
        assert read_terminated(b"abc\x00rest", 0, "filename") == (b"abc", 4)

    def test_read_terminated_at_offset(self) -> None:
        """Reading starts at the given position."""
        assert read_terminated(b"xx\x00abc\x00", 3, "comment") == (b"abc", 7)

    def test_read_terminated_memoryview(self) -> None:
        """memoryview inputs report positions in the original buffer."""
        assert read_terminated(memoryview(b"xx\x00abc\x00"), 3, "comment") == (b"abc", 7)

    def test_read_terminated_empty(self) -> None:
        """An immediate NUL gives an empty value."""
        assert read_terminated(b"\x00", 0, "filename") == (b"", 1)

    def test_read_extra_field(self) -> None:
        """XLEN is little-endian and excluded from the value."""
        assert read_extra_field(b"..\x03\x00abcd", 2) == (b"abc", 7)

    def test_read_header_crc(self) -> None:
        """CRC16 is little-endian."""
        crc, pos = read_header_crc(b"\xcd\xab", 0)
        assert crc == 0xABCD
        assert pos == 2


class TestRealMembers:
    """Tests against headers written by the standard library."""

    def test_gzip_compress_header(self) -> None:
        """gzip.compress writes a bare 10-byte header."""
        header, consumed = parse_header(gzip_member(b"data"))
        assert consumed == 10
        assert header.flags == 0
        assert header.compression_method == 8

    def test_gzip_file_with_name(self) -> None:
        """GzipFile records the original filename and mtime."""
        data = gzip_member(b"hello" * 100, filename="sample.txt", mtime=SAMPLE_MTIME)

        header, consumed = parse_header(data)

        assert header.flags == FNAME
        assert header.filename == b"sample.txt"
        assert header.modification_time == SAMPLE_MTIME
        assert consumed == 10 + len(b"sample.txt") + 1

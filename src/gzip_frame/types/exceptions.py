"""Exception hierarchy for GZIP frame parsing."""

from __future__ import annotations


class GzipError(Exception):
    """
    Base exception for all GZIP framing errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class GzipDecodeError(GzipError):
    """
    Raised when input bytes are not a well-formed GZIP member.

    This is the single "malformed input" condition of the parsers.

    Attributes:
        field: The field being read when the error occurred.
        detail: Description of what went wrong.
        offset: The byte offset where the field starts (if known).
        needed: Number of bytes the field required (if a truncation).
        available: Number of bytes that were left (if a truncation).
    """

    def __init__(
        self,
        field: str,
        detail: str,
        *,
        offset: int | None = None,
        needed: int | None = None,
        available: int | None = None,
    ) -> None:
        self.field = field
        self.detail = detail
        self.offset = offset
        self.needed = needed
        self.available = available

        msg = f"Malformed {field}: {detail}"
        if offset is not None:
            msg = f"{msg} (at byte offset {offset})"

        super().__init__(msg)


class GzipTruncatedError(GzipDecodeError):
    """
    Raised when the input ends before a fixed or flagged field completes.

    For NUL-terminated fields `needed` is None: the terminator was never found.
    """

    def __init__(
        self,
        field: str,
        *,
        offset: int,
        available: int,
        needed: int | None = None,
    ) -> None:
        if needed is not None:
            detail = f"needed {needed} bytes, only {available} available"
        else:
            detail = f"no NUL terminator in the remaining {available} bytes"
        super().__init__(field, detail, offset=offset, needed=needed, available=available)


class GzipMagicError(GzipDecodeError):
    """
    Raised when the stream does not start with the GZIP signature.

    Attributes:
        found: The two bytes found where the magic was expected.
    """

    def __init__(self, found: bytes) -> None:
        self.found = found
        super().__init__("magic", f"expected 1f8b, found {found.hex()}", offset=0)


class GzipEncodeError(GzipError):
    """
    Raised when a record cannot be serialized to GZIP bytes.

    Attributes:
        field: The offending field.
        detail: Why it cannot be encoded.
    """

    def __init__(self, field: str, detail: str) -> None:
        self.field = field
        self.detail = detail
        super().__init__(f"Cannot encode {field}: {detail}")

"""Reusable type definitions for GZIP frame records."""

from .base import CamelModel, StrictBaseModel
from .exceptions import (
    GzipDecodeError,
    GzipEncodeError,
    GzipError,
    GzipMagicError,
    GzipTruncatedError,
)
from .uint import BaseUint, Uint8, Uint16, Uint32

__all__ = [
    # Core types
    "BaseUint",
    "Uint8",
    "Uint16",
    "Uint32",
    "CamelModel",
    "StrictBaseModel",
    # Exceptions
    "GzipError",
    "GzipDecodeError",
    "GzipTruncatedError",
    "GzipMagicError",
    "GzipEncodeError",
]

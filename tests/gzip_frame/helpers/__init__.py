"""Test helpers for gzip_frame unit tests."""

from __future__ import annotations

from .builders import (
    ALL_FLAG_COMBINATIONS,
    FCOMMENT,
    FEXTRA,
    FHCRC,
    FNAME,
    FTEXT,
    build_footer,
    build_header,
    build_subfield,
    gzip_member,
)

SAMPLE_MTIME = 0x599E86E7
"""Modification time of the sample member used across tests."""

__all__ = [
    "ALL_FLAG_COMBINATIONS",
    "FCOMMENT",
    "FEXTRA",
    "FHCRC",
    "FNAME",
    "FTEXT",
    "SAMPLE_MTIME",
    "build_footer",
    "build_header",
    "build_subfield",
    "gzip_member",
]

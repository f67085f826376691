"""
Global configuration for the gzip_frame command line tool.

The parsers themselves read no configuration; these settings only shape how
the CLI reads files and logs.
"""

import logging
import os

_SUPPORTED_LOG_LEVELS: list[str] = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _positive_int(name: str, default: int) -> int:
    """Read a positive integer from the environment variable `name`."""
    raw = os.environ.get(name, str(default))
    message = f"Invalid {name} environment variable: '{raw}'. Expected a positive integer"
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(message) from e
    if value <= 0:
        raise ValueError(message)
    return value


LOG_LEVEL = os.environ.get("GZIP_FRAME_LOG_LEVEL", "WARNING").upper()
"""Root log level for the CLI ('DEBUG' ... 'CRITICAL'). Defaults to 'WARNING'."""

if LOG_LEVEL not in _SUPPORTED_LOG_LEVELS:
    raise ValueError(
        f"Invalid GZIP_FRAME_LOG_LEVEL environment variable: '{LOG_LEVEL}'. "
        f"Supported values: {_SUPPORTED_LOG_LEVELS}"
    )

LOG_LEVEL_NUMBER: int = logging.getLevelNamesMapping()[LOG_LEVEL]
"""LOG_LEVEL as a `logging` level number."""

READ_SIZE: int = _positive_int("GZIP_FRAME_READ_SIZE", 65536)
"""Initial number of bytes the CLI reads when looking for a header.

Doubled each time the header turns out to be longer, until EOF.
"""

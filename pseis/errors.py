"""Exceptions raised by pseis.

Mismatches found by the comparator are not errors, see
:mod:`pseis.data_types`.
"""

__all__ = [
    "PseisError",
    "ConfigurationError",
    "StreamOpenError",
    "SUFormatError",
    "StreamReadError",
]


class PseisError(Exception):
    """Base class of all pseis errors."""


class ConfigurationError(PseisError):
    """Bad or unknown parameter."""


class StreamOpenError(PseisError, OSError):
    """Input file can not be opened for reading."""

    def __init__(self, path, reason=None):
        self.path = path
        self.reason = reason
        msg = f"unable to open {path}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class SUFormatError(PseisError):
    """Trace record is truncated or inconsistent."""


class StreamReadError(PseisError, OSError):
    """Reading an open trace file failed."""

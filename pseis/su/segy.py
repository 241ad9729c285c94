"""CWP/SU trace header layout.

An SU trace is a 240 byte SEG-Y style trace header followed by ``ns``
32-bit floats. Header fields are overloaded between formats, so the
header is mostly handled as an opaque block; only the fields below are
known here.
"""
import struct
from typing import Dict, Tuple

import numpy as np

__all__ = [
    "HDRBYTES",
    "SU_NFLTS",
    "NS_OFFSET",
    "HEADER_FIELDS",
    "ENDIANNESS",
    "byteorder",
    "sample_dtype",
    "new_header",
    "get_ns",
    "get_field",
]


HDRBYTES = 240

# max number of samples per trace
SU_NFLTS = 32767

# name -> (byte offset, struct format)
HEADER_FIELDS: Dict[str, Tuple[int, str]] = {
    "tracl": (0, "i"),
    "tracr": (4, "i"),
    "fldr": (8, "i"),
    "tracf": (12, "i"),
    "cdp": (20, "i"),
    "cdpt": (24, "i"),
    "trid": (28, "h"),
    "offset": (36, "i"),
    "ns": (114, "H"),
    "dt": (116, "H"),
}

NS_OFFSET = HEADER_FIELDS["ns"][0]

ENDIANNESS = {
    "native": "=",
    "=": "=",
    "little": "<",
    "lsb": "<",
    "<": "<",
    "big": ">",
    "msb": ">",
    ">": ">",
}


def byteorder(endian: str) -> str:
    """Convert endian alias to struct/numpy byte order prefix."""
    try:
        return ENDIANNESS[endian.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown endian: {endian}, should be one of {list(ENDIANNESS)}"
        ) from None


def sample_dtype(endian: str = "=") -> np.dtype:
    return np.dtype(byteorder(endian) + "f4")


def get_field(header: bytes, name: str, endian: str = "=") -> int:
    offset, fmt = HEADER_FIELDS[name]
    return struct.unpack_from(byteorder(endian) + fmt, header, offset)[0]


def get_ns(header: bytes, endian: str = "=") -> int:
    """Number of samples declared in trace header."""
    return get_field(header, "ns", endian)


def new_header(ns: int, endian: str = "=", **fields) -> bytes:
    """Create a zeroed trace header with ``ns`` and optional key fields set.

    Example:
        >>> header = new_header(100, tracl=1, dt=4000)
        >>> get_ns(header)
        100
    """
    assert 0 < ns <= SU_NFLTS, f"Bad ns: {ns}"
    buf = bytearray(HDRBYTES)
    fields["ns"] = ns
    order = byteorder(endian)
    for name, value in fields.items():
        if name not in HEADER_FIELDS:
            raise KeyError(f"Unknown header field: {name}")
        offset, fmt = HEADER_FIELDS[name]
        struct.pack_into(order + fmt, buf, offset, value)
    return bytes(buf)

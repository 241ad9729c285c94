"""Read and write SU trace records, like fgettr/fputtr in CWP/SU."""
import logging
from collections.abc import Iterator
from typing import BinaryIO, Iterable, List, Optional, Tuple

from pseis.data_types import TraceRecord
from pseis.errors import StreamOpenError, StreamReadError, SUFormatError
from pseis.su.segy import HDRBYTES, SU_NFLTS, byteorder, get_ns, sample_dtype

import numpy as np

__all__ = [
    "TraceReader",
    "TraceWriter",
    "open_trace_file",
    "as_reader",
    "load_su",
    "save_su",
]

logger = logging.getLogger(__name__)


def open_trace_file(path: str, mode: str = "rb") -> BinaryIO:
    """Open trace file, raise StreamOpenError if failed."""
    assert "b" in mode, "trace files should be opened in binary mode"
    try:
        return open(path, mode)
    except OSError as e:
        raise StreamOpenError(path, e.strerror) from e


class TraceReader(Iterator):
    """Read traces one by one from an open binary stream.

    The first trace fixes the number of samples of the stream, later traces
    declaring another ``ns`` are rejected.

    Args:
        fid: binary stream positioned at the start of a trace.
        endian: byte order of the stream, host order by default.
        name: stream name used in messages, default is ``fid.name``.
    """

    def __init__(self, fid: BinaryIO, endian: str = "=", name: str = None):
        self._fid = fid
        self._endian = byteorder(endian)
        self._dtype = sample_dtype(self._endian)
        self._ns = None
        self._cur = 0
        self._eof = False
        if name is None:
            name = getattr(fid, "name", "<stream>")
        self.name = str(name)

    @property
    def idx(self) -> int:
        """Number of traces read so far."""
        return self._cur

    @property
    def eof(self) -> bool:
        return self._eof

    @property
    def ns(self) -> Optional[int]:
        return self._ns

    def _read(self, size: int) -> bytes:
        try:
            return self._fid.read(size)
        except OSError as e:
            raise StreamReadError(
                f"{self.name}: read error after trace {self._cur}: {e}"
            ) from e

    def read(self) -> Tuple[Optional[TraceRecord], int]:
        """Read next trace.

        Returns:
            (trace, nbytes). At end of data trace is None and nbytes is 0.

        Raises:
            SUFormatError: trace is truncated or has a bad ``ns``.
            StreamReadError: the stream raised an OSError.
        """
        header = self._read(HDRBYTES)
        if not header:
            self._eof = True
            logger.debug(f"{self.name}: end of data after {self._cur} traces")
            return None, 0
        tracno = self._cur + 1
        if len(header) < HDRBYTES:
            raise SUFormatError(
                f"{self.name}: EOF in header of trace {tracno} "
                f"(read {len(header)} of {HDRBYTES} bytes)"
            )

        ns = get_ns(header, self._endian)
        if ns == 0 or ns > SU_NFLTS:
            raise SUFormatError(
                f"{self.name}: bad number of samples {ns} on trace {tracno}, "
                f"wrong endian?"
            )
        if self._ns is None:
            self._ns = ns
        elif ns != self._ns:
            raise SUFormatError(
                f"{self.name}: on trace {tracno} number of samples in header "
                f"({ns}) differs from number for first trace ({self._ns})"
            )

        databytes = ns * self._dtype.itemsize
        data = self._read(databytes)
        if len(data) < databytes:
            raise SUFormatError(
                f"{self.name}: EOF in data of trace {tracno} "
                f"(read {len(data)} of {databytes} bytes)"
            )
        samples = np.frombuffer(data, dtype=self._dtype).astype(np.float32)
        self._cur = tracno
        return TraceRecord(header, samples, self._endian), HDRBYTES + databytes

    def __next__(self) -> TraceRecord:
        trace, _ = self.read()
        if trace is None:
            raise StopIteration
        return trace

    next = __next__


class TraceWriter:
    """Write traces to an open binary stream."""

    def __init__(self, fid: BinaryIO, endian: str = "="):
        self._fid = fid
        self._endian = byteorder(endian)
        self._dtype = sample_dtype(self._endian)
        self._cur = 0

    def write(self, trace: TraceRecord) -> int:
        """Write one trace, return number of bytes written."""
        ns = get_ns(trace.header, self._endian)
        if ns != trace.data.size:
            raise SUFormatError(
                f"ns in header ({ns}) differs from data size ({trace.data.size})"
            )
        data = trace.data.astype(self._dtype).tobytes()
        self._fid.write(trace.header)
        self._fid.write(data)
        self._cur += 1
        return HDRBYTES + len(data)

    def __len__(self):
        return self._cur


def as_reader(stream, endian: str = "=") -> TraceReader:
    """Wrap raw binary stream as TraceReader, readers are returned as is."""
    if isinstance(stream, TraceReader):
        return stream
    return TraceReader(stream, endian=endian)


def load_su(path: str, endian: str = "=") -> List[TraceRecord]:
    """Load all traces in su file."""
    with open_trace_file(path) as fid:
        return list(TraceReader(fid, endian=endian))


def save_su(path: str, traces: Iterable[TraceRecord], endian: str = "=") -> int:
    """Save traces to su file, return number of traces written."""
    with open(path, "wb") as fid:
        writer = TraceWriter(fid, endian=endian)
        for trace in traces:
            writer.write(trace)
    return len(writer)

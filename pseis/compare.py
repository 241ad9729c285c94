"""Compare two seismic data sets, the seismic equivalent of cmp(1).

Unlike cmp(1), small numerical differences are accepted. Two files are the
same when they have

    - the same number of traces,
    - the same number of samples per trace,
    - bit-for-bit identical trace headers,
    - sample values within a fractional ``limit`` of each other.

Trace headers are compared as opaque blocks since header fields are
overloaded between formats.

Comparison stops at the first difference.

Example:
    >>> with open("tst1.su", "rb") as fa, open("ref/tst1.su", "rb") as fb:
    ...     result = compare(fa, fb, tolerance=1e-4)
    >>> result.matched
    True
"""
import logging
from enum import Enum

from pseis.data_types import (
    ComparisonResult,
    HeaderMismatch,
    Match,
    Result,
    SampleMismatch,
    TraceCountMismatch,
)
from pseis.su.io import as_reader

import numpy as np

__all__ = ["DEFAULT_LIMIT", "STATUS", "Comparator", "compare", "first_mismatch"]

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 1.0e-4


class STATUS(Enum):

    RUNNING = "running"
    DONE = "done"


def _bounds(limit: float):
    # rounded to single precision like the sample values
    lower = np.float32(1.0 - float(np.float32(limit)))
    upper = np.float32(1.0 + float(np.float32(limit)))
    return lower, upper


def first_mismatch(a: np.ndarray, b: np.ndarray, limit: float) -> int:
    """Index of first sample of ``a`` out of tolerance, -1 if none.

    The test is relative to ``b`` and depends on the sign of ``a``:

        A > 0: A < B*(1-limit) or A > B*(1+limit)
        A < 0: A > B*(1-limit) or A < B*(1+limit)

    A == 0 is never a mismatch, whatever B is. This is kept for
    compatibility with existing reference data, although B should probably
    be bounded near zero as well.
    """
    a = np.asarray(a, dtype=np.float32)
    b = np.asarray(b, dtype=np.float32)
    assert a.shape == b.shape, f"shape mismatch ({a.shape} vs {b.shape})"
    lower, upper = _bounds(limit)
    with np.errstate(over="ignore", invalid="ignore"):
        lo = b * lower
        hi = b * upper
        bad = ((a > 0) & ((a < lo) | (a > hi))) | (
            (a < 0) & ((a > lo) | (a < hi))
        )
    idx = np.flatnonzero(bad)
    if idx.size == 0:
        return -1
    return int(idx[0])


class Comparator:
    """Lockstep trace comparator.

    A comparator is used once: it is RUNNING until :meth:`run` returns,
    then DONE and holding the result.

    Args:
        tolerance: fractional difference limit, non-negative. Checking it
            is up to the caller.
        endian: byte order of raw input streams.
    """

    def __init__(self, tolerance: float = DEFAULT_LIMIT, endian: str = "="):
        if tolerance is None:
            tolerance = DEFAULT_LIMIT
        self.tolerance = float(tolerance)
        self.endian = endian
        self._status = STATUS.RUNNING
        self._result = None

    @property
    def status(self) -> STATUS:
        return self._status

    @property
    def result(self) -> ComparisonResult:
        assert self._status == STATUS.DONE, "please call `run` first."
        return self._result

    def _done(self, result: ComparisonResult) -> ComparisonResult:
        self._status = STATUS.DONE
        self._result = result
        if result.matched:
            logger.debug(result.message)
        else:
            logger.info(result.message)
        return result

    def run(self, stream_a, stream_b, name_a=None, name_b=None) -> Result:
        """Compare two streams of traces.

        Args:
            stream_a, stream_b: binary streams or TraceReader, positioned at
                the first trace. They are not closed.
            name_a, name_b: file names used in result, default to reader names.

        Returns:
            ComparisonResult, first difference found or Match.
        """
        assert self._status == STATUS.RUNNING, "comparator is already done."
        reader_a = as_reader(stream_a, self.endian)
        reader_b = as_reader(stream_b, self.endian)
        name_a = reader_a.name if name_a is None else str(name_a)
        name_b = reader_b.name if name_b is None else str(name_b)

        j = 0
        while not (reader_a.eof or reader_b.eof):
            trace_a, n_a = reader_a.read()
            trace_b, n_b = reader_b.read()
            j += 1

            if n_a != n_b:
                return self._done(TraceCountMismatch(name_a, name_b, trace=j))
            if trace_a is None:
                break
            if trace_a.header != trace_b.header:
                return self._done(HeaderMismatch(name_a, name_b, trace=j))

            nt = trace_a.ns
            a = trace_a.data[:nt]
            b = trace_b.data[:nt]
            i = first_mismatch(a, b, self.tolerance)
            if i >= 0:
                return self._done(
                    SampleMismatch(
                        name_a,
                        name_b,
                        trace=j,
                        sample=i,
                        value_a=float(a[i]),
                        value_b=float(b[i]),
                    )
                )
            logger.debug(f"trace {j}: {nt} samples match")

        return self._done(Match(name_a, name_b, traces=max(j - 1, 0)))


def compare(
    stream_a,
    stream_b,
    tolerance: float = DEFAULT_LIMIT,
    endian: str = "=",
    name_a: str = None,
    name_b: str = None,
) -> Result:
    """Compare two streams of SU traces, see :class:`Comparator`."""
    return Comparator(tolerance, endian=endian).run(
        stream_a, stream_b, name_a=name_a, name_b=name_b
    )

from dataclasses import dataclass
from typing import Union

from pseis.su.segy import HDRBYTES, get_ns, new_header

import numpy as np

__all__ = [
    "TraceRecord",
    "ComparisonResult",
    "Match",
    "TraceCountMismatch",
    "HeaderMismatch",
    "SampleMismatch",
    "Result",
]


@dataclass
class TraceRecord:
    """One SU trace: opaque header block plus float32 samples."""

    header: bytes
    data: np.ndarray
    endian: str = "="

    def __post_init__(self):  # type: ignore
        assert (
            len(self.header) == HDRBYTES
        ), f"Bad header size ({len(self.header)} != {HDRBYTES})"
        self.data = np.asarray(self.data, dtype=np.float32)
        assert self.data.ndim == 1, f"Bad data ndim ({self.data.ndim} != 1)"

    @classmethod
    def from_samples(cls, data, endian: str = "=", **fields):
        """Create a trace from samples, ``ns`` is set from ``len(data)``.

        Other key header fields (``tracl``, ``dt``, ...) can be given as
        keyword args.
        """
        data = np.asarray(data, dtype=np.float32).ravel()
        header = new_header(data.size, endian=endian, **fields)
        return cls(header, data, endian)

    @property
    def ns(self) -> int:
        return get_ns(self.header, self.endian)

    @property
    def nbytes(self) -> int:
        return HDRBYTES + self.data.size * 4


@dataclass(frozen=True)
class ComparisonResult:
    """Outcome of comparing two trace files.

    Subclasses are the possible outcomes, exactly one is produced for each
    comparison. Only :class:`Match` means the files are the same.
    """

    file_a: str
    file_b: str

    @property
    def matched(self) -> bool:
        return False

    @property
    def message(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class Match(ComparisonResult):

    traces: int = 0

    @property
    def matched(self) -> bool:
        return True

    @property
    def message(self) -> str:
        return f"Files {self.file_a} & {self.file_b} match ({self.traces} traces)"


@dataclass(frozen=True)
class TraceCountMismatch(ComparisonResult):
    """Files differ in number of traces, or in trace length."""

    trace: int = 0

    @property
    def message(self) -> str:
        return f"Files {self.file_a} & {self.file_b} differ at trace {self.trace}"


@dataclass(frozen=True)
class HeaderMismatch(ComparisonResult):

    trace: int = 0

    @property
    def message(self) -> str:
        return (
            f"Files {self.file_a} & {self.file_b} differ in headers "
            f"at trace {self.trace}"
        )


@dataclass(frozen=True)
class SampleMismatch(ComparisonResult):
    """First sample out of tolerance. ``sample`` is 0-based."""

    trace: int = 0
    sample: int = 0
    value_a: float = 0.0
    value_b: float = 0.0

    @property
    def message(self) -> str:
        return (
            f"Files {self.file_a} & {self.file_b} differ at"
            f" Trace: {self.trace} Sample: {self.sample}\n"
            f"   A: {self.value_a:15g}   B: {self.value_b:15g}"
        )


Result = Union[Match, TraceCountMismatch, HeaderMismatch, SampleMismatch]

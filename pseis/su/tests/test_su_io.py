import errno
import io
import os
import struct

from pseis.data_types import TraceRecord
from pseis.errors import StreamOpenError, StreamReadError, SUFormatError
from pseis.su.io import TraceReader, TraceWriter, load_su, open_trace_file, save_su
from pseis.su.segy import HDRBYTES, get_field, get_ns, new_header

import numpy as np
import pytest


def trace_bytes(ns, fill=1.0, **fields):
    trace = TraceRecord.from_samples(np.full(ns, fill), **fields)
    return trace.header + trace.data.tobytes()


def test_new_header():
    header = new_header(100, tracl=7, dt=4000, offset=-25)
    assert len(header) == HDRBYTES
    assert get_ns(header) == 100
    assert get_field(header, "tracl") == 7
    assert get_field(header, "dt") == 4000
    assert get_field(header, "offset") == -25
    with pytest.raises(KeyError):
        new_header(10, foo=1)


def test_save_and_load(tmpdir):
    data = np.random.rand(3, 20).astype(np.float32)
    traces = [TraceRecord.from_samples(d, tracl=i + 1) for i, d in enumerate(data)]
    su_file = os.path.join(tmpdir, "test.su")
    assert save_su(su_file, traces) == 3
    assert os.path.getsize(su_file) == 3 * (HDRBYTES + 20 * 4)

    loaded = load_su(su_file)
    assert len(loaded) == 3
    for trace, expected in zip(loaded, data):
        assert trace.ns == 20
        np.testing.assert_equal(trace.data, expected)
    assert get_field(loaded[2].header, "tracl") == 3


def test_big_endian(tmpdir):
    su_file = os.path.join(tmpdir, "big.su")
    trace = TraceRecord.from_samples([1.5, -2.0], endian="big", tracl=1)
    save_su(su_file, [trace], endian="big")
    with open(su_file, "rb") as fid:
        raw = fid.read()
    assert struct.unpack_from(">H", raw, 114)[0] == 2
    assert struct.unpack_from(">f", raw, HDRBYTES)[0] == 1.5

    loaded = load_su(su_file, endian="msb")
    assert loaded[0].ns == 2
    np.testing.assert_equal(loaded[0].data, [1.5, -2.0])


def test_read_count():
    reader = TraceReader(io.BytesIO(trace_bytes(5) * 2), name="x.su")
    trace, nbytes = reader.read()
    assert nbytes == HDRBYTES + 5 * 4
    assert trace.nbytes == nbytes
    assert reader.idx == 1
    assert reader.ns == 5
    reader.read()
    trace, nbytes = reader.read()
    assert trace is None
    assert nbytes == 0
    assert reader.eof
    assert reader.idx == 2


def test_iterate():
    reader = TraceReader(io.BytesIO(trace_bytes(5) * 3))
    assert len(list(reader)) == 3


def test_truncated_header():
    raw = trace_bytes(5) + b"\x00" * 100
    reader = TraceReader(io.BytesIO(raw), name="x.su")
    reader.read()
    with pytest.raises(SUFormatError, match="EOF in header of trace 2"):
        reader.read()


def test_truncated_data():
    raw = trace_bytes(5)[:-3]
    with pytest.raises(SUFormatError, match="EOF in data of trace 1"):
        TraceReader(io.BytesIO(raw)).read()


def test_ns_varies():
    raw = trace_bytes(5) + trace_bytes(6)
    reader = TraceReader(io.BytesIO(raw))
    reader.read()
    with pytest.raises(SUFormatError, match="differs from number for first trace"):
        reader.read()


def test_bad_ns():
    raw = bytes(HDRBYTES) + bytes(16)
    with pytest.raises(SUFormatError, match="bad number of samples 0"):
        TraceReader(io.BytesIO(raw)).read()


def test_writer_rejects_bad_ns():
    trace = TraceRecord.from_samples([1.0, 2.0])
    trace.data = np.zeros(3, dtype=np.float32)
    with pytest.raises(SUFormatError):
        TraceWriter(io.BytesIO()).write(trace)


def test_open_missing_file(tmpdir):
    missing = os.path.join(tmpdir, "missing.su")
    with pytest.raises(StreamOpenError, match="unable to open"):
        open_trace_file(missing)


def test_unknown_endian():
    with pytest.raises(ValueError):
        TraceReader(io.BytesIO(), endian="middle")


class BrokenStream(io.BytesIO):
    def read(self, size=-1):
        raise OSError(errno.EIO, "Input/output error")


def test_read_error():
    reader = TraceReader(BrokenStream(), name="x.su")
    with pytest.raises(StreamReadError, match="x.su: read error after trace 0"):
        reader.read()

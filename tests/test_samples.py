from __future__ import annotations

import pytest

from shapecodec.core.encoded import (
    ByteCursor,
    MalformedStream,
    decode7_sample,
    decode7_samples,
    encode7_sample,
    encode7_samples,
)


def test_encode7_sample_appends():
    out = bytearray()
    encode7_sample(0, out)
    encode7_sample(-1, out)
    encode7_sample(64, out)
    assert bytes(out) == b"\x00\x01\x80\x01"


def test_decode7_sample_folds_into_previous():
    cursor = ByteCursor(b"\x02\x01")
    assert decode7_sample(cursor, 10) == 11
    assert decode7_sample(cursor, 11) == 10
    assert cursor.empty()


def test_samples_are_delta_coded():
    # scaled 0, 15, 10 -> deltas 0, 15, -5 -> zigzag 0, 30, 9
    assert encode7_samples([0.0, 1.5, 1.0], 10) == b"\x00\x1e\x09"


def test_samples_round_trip():
    elevations = [12.4, 15.0, 33.75, 120.5, 98.25, -3.5, 0.0, 2228.0]
    got = decode7_samples(encode7_samples(elevations, 100), 0.01)
    assert got == pytest.approx(elevations, abs=0.005)


def test_empty_samples():
    assert encode7_samples([]) == b""
    assert decode7_samples(b"") == []


def test_truncated_samples_are_malformed():
    with pytest.raises(MalformedStream):
        decode7_samples(b"\x00\x80\x80")

from __future__ import annotations

import pytest
from fastapi import HTTPException

from shapecodec.core.contracts import SamplesDecodeRequest, ShapeDecodeRequest
from shapecodec.services.shapes import Shapes, b64_decode, b64_encode


@pytest.fixture()
def shapes():
    return Shapes(default_digits=6, max_encoded_bytes=1000, max_points=2, key_version="shape.v1")


def test_decode_enforces_point_limit(shapes):
    # three zero points in six bytes, well under the byte limit
    with pytest.raises(HTTPException) as exc:
        shapes.decode(ShapeDecodeRequest(encoded="??????"))
    assert exc.value.status_code == 400
    assert exc.value.detail["code"] == "shape_too_large"

    assert len(shapes.decode(ShapeDecodeRequest(encoded="????")).points) == 2


def test_decode_samples_enforces_value_limit(shapes):
    with pytest.raises(HTTPException) as exc:
        shapes.decode_samples(SamplesDecodeRequest(encoded=b64_encode(b"\x00\x00\x00")))
    assert exc.value.status_code == 400
    assert exc.value.detail["code"] == "samples_too_large"


def test_b64_decode_is_strict():
    assert b64_decode(b64_encode(b"\x01\x80\x01")) == b"\x01\x80\x01"
    assert b64_decode("") == b""
    for bad in ("!!!!", "AA==", "A A", "AB+/"):
        with pytest.raises(ValueError):
            b64_decode(bad)

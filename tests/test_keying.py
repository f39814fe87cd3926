from __future__ import annotations

from shapecodec.core.keying import shape_key


def test_shape_key_deterministic():
    a = shape_key("polyline5", 6, b"_p~iF~ps|U", "shape.v1")
    b = shape_key("polyline5", 6, b"_p~iF~ps|U", "shape.v1")
    assert a == b
    assert "=" not in a


def test_shape_key_depends_on_every_field():
    base = shape_key("polyline5", 6, b"_p~iF~ps|U", "shape.v1")
    assert shape_key("varint7", 6, b"_p~iF~ps|U", "shape.v1") != base
    assert shape_key("polyline5", 5, b"_p~iF~ps|U", "shape.v1") != base
    assert shape_key("polyline5", 6, b"_p~iF~ps|V", "shape.v1") != base
    assert shape_key("polyline5", 6, b"_p~iF~ps|U", "shape.v2") != base

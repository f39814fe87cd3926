from __future__ import annotations

import orjson
import pytest

from scripts.shape_tool import main


def test_encode_inline(capsys):
    assert main(["encode", "[[-120.2, 38.5]]", "--digits", "5"]) == 0
    assert capsys.readouterr().out == "_p~iF~ps|U\n"


def test_decode_inline(capsys):
    assert main(["decode", "_p~iF~ps|U", "--digits", "5"]) == 0
    pts = orjson.loads(capsys.readouterr().out)
    assert pts == [pytest.approx([-120.2, 38.5])]


def test_varint7_round_trip(capsys):
    assert main(["encode", "[[1.5, 2.25]]", "--format", "varint7"]) == 0
    encoded = capsys.readouterr().out.strip()

    assert main(["decode", encoded, "--format", "varint7"]) == 0
    assert orjson.loads(capsys.readouterr().out) == [pytest.approx([1.5, 2.25])]


def test_malformed_input_exits_2(capsys):
    assert main(["decode", "_"]) == 2
    assert "Bad encoded polyline" in capsys.readouterr().err


@pytest.mark.parametrize("points", ["[1, 2]", "[[1.0]]", '{"lng": 1}', "[[1e400, 0]]", "not json"])
def test_encode_bad_points_exits_2(capsys, points):
    assert main(["encode", points]) == 2
    assert capsys.readouterr().err.startswith("ERROR:")


@pytest.mark.parametrize("command,payload", [("encode", "[[1.0, 2.0]]"), ("decode", "??")])
def test_bad_digits_exits_2(capsys, command, payload):
    assert main([command, payload, "--digits", "11"]) == 2
    assert capsys.readouterr().err.startswith("ERROR:")


def test_decode_bad_base64_exits_2(capsys):
    assert main(["decode", "!!!!", "--format", "varint7"]) == 2
    assert "base64url" in capsys.readouterr().err

#!/usr/bin/env python3
"""
scripts/shape_tool.py

Encode / decode shapes from the command line.

  echo '[[-120.2, 38.5], [-120.95, 40.7]]' | python scripts/shape_tool.py encode --digits 5
  python scripts/shape_tool.py decode --digits 5 '_p~iF~ps|U_ulLnnqC'

Points are JSON [[lng, lat], ...].  varint7 payloads are read and written
as base64url.  Exit status 2 on malformed input.
"""

from __future__ import annotations

import argparse
import sys

import orjson

from shapecodec.core.encoded import (
    DIGITS_PRECISION,
    decode,
    decode7,
    encode,
    encode7,
    precision_for_digits,
)
from shapecodec.services.shapes import b64_decode, b64_encode


def _read_input(arg: str | None) -> str:
    if arg is not None:
        return arg
    return sys.stdin.read().strip()


def cmd_encode(args: argparse.Namespace) -> int:
    try:
        enc_prec, _ = precision_for_digits(args.digits)
        points = orjson.loads(_read_input(args.input))
    except ValueError as e:
        # bad --digits, or orjson.JSONDecodeError
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    try:
        if args.format == "varint7":
            out = b64_encode(encode7(points, enc_prec))
        else:
            out = encode(points, enc_prec)
    except (TypeError, IndexError, ValueError, OverflowError) as e:
        print(f"ERROR: points must be JSON [[lng, lat], ...]: {e}", file=sys.stderr)
        return 2

    print(out)
    return 0


def cmd_decode(args: argparse.Namespace) -> int:
    text = _read_input(args.input)
    try:
        _, dec_prec = precision_for_digits(args.digits)
        if args.format == "varint7":
            points = decode7(b64_decode(text), dec_prec)
        else:
            points = decode(text, dec_prec)
    except ValueError as e:
        # bad --digits, MalformedStream, or bad base64 for varint7
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    sys.stdout.write(orjson.dumps([[p.lng, p.lat] for p in points]).decode("utf-8") + "\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Encode/decode shapes (polyline5 or varint7)")
    sub = parser.add_subparsers(dest="command", required=True)

    for name, fn in (("encode", cmd_encode), ("decode", cmd_decode)):
        p = sub.add_parser(name)
        p.add_argument("input", nargs="?", help="Inline input (default: read stdin)")
        p.add_argument("--format", choices=["polyline5", "varint7"], default="polyline5")
        p.add_argument("--digits", type=int, default=DIGITS_PRECISION, help="Decimal digits of precision")
        p.set_defaults(func=fn)

    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())

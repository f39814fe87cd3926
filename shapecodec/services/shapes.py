from __future__ import annotations

import base64
import binascii
import logging
import math
import re
from typing import List

from shapecodec.core.contracts import (
    SamplesDecoded,
    SamplesDecodeRequest,
    SamplesEncoded,
    SamplesEncodeRequest,
    ShapeDecoded,
    ShapeDecodeRequest,
    ShapeEncoded,
    ShapeEncodeRequest,
)
from shapecodec.core.encoded import (
    MalformedStream,
    decode,
    decode7,
    decode7_samples,
    encode,
    encode7,
    encode7_samples,
    precision_for_digits,
)
from shapecodec.core.errors import bad_request
from shapecodec.core.geometry import PointLL, bbox_from_points
from shapecodec.core.keying import shape_key

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────────────────────
# Transport helpers
# ──────────────────────────────────────────────────────────────

def b64_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


_B64URL_RE = re.compile(r"[A-Za-z0-9_-]*")


def b64_decode(text: str) -> bytes:
    # urlsafe_b64decode silently drops characters outside the alphabet
    if not _B64URL_RE.fullmatch(text):
        raise ValueError("characters outside the base64url alphabet")
    return base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))


def _b64_payload(text: str) -> bytes:
    try:
        return b64_decode(text)
    except (binascii.Error, ValueError) as e:
        bad_request("bad_base64", f"encoded payload is not valid base64url: {e}")


def _check_points(points: List[List[float]]) -> List[PointLL]:
    out: List[PointLL] = []
    for i, p in enumerate(points):
        if len(p) != 2:
            bad_request("bad_shape_request", f"point {i} must be [lng, lat], got {len(p)} values")
        lng, lat = p
        if not (-180.0 <= lng <= 180.0 and -90.0 <= lat <= 90.0):
            bad_request("bad_coordinate", f"point {i} out of range: [{lng}, {lat}]")
        out.append(PointLL(lng, lat))
    return out


# ──────────────────────────────────────────────────────────────
# Shapes service
# ──────────────────────────────────────────────────────────────

class Shapes:
    def __init__(
        self,
        *,
        default_digits: int,
        max_encoded_bytes: int,
        max_points: int,
        key_version: str,
    ):
        self.default_digits = default_digits
        self.max_encoded_bytes = max_encoded_bytes
        self.max_points = max_points
        self.key_version = key_version

    def _digits(self, requested: int | None) -> int:
        return self.default_digits if requested is None else requested

    def encode(self, req: ShapeEncodeRequest) -> ShapeEncoded:
        if len(req.points) > self.max_points:
            bad_request("shape_too_large", f"at most {self.max_points} points per request")

        digits = self._digits(req.precision_digits)
        enc_prec, _ = precision_for_digits(digits)
        pts = _check_points(req.points)

        if req.format == "varint7":
            payload = encode7(pts, enc_prec)
            text = b64_encode(payload)
        else:
            text = encode(pts, enc_prec)
            payload = text.encode("ascii")

        logger.info(
            "shape_encode format=%s digits=%d points=%d bytes=%d",
            req.format, digits, len(pts), len(payload),
        )
        return ShapeEncoded(
            format=req.format,
            precision_digits=digits,
            num_points=len(pts),
            encoded=text,
            shape_key=shape_key(req.format, digits, payload, self.key_version),
        )

    def decode(self, req: ShapeDecodeRequest) -> ShapeDecoded:
        if len(req.encoded) > self.max_encoded_bytes:
            bad_request("shape_too_large", f"encoded shape exceeds {self.max_encoded_bytes} bytes")

        digits = self._digits(req.precision_digits)
        _, dec_prec = precision_for_digits(digits)

        try:
            if req.format == "varint7":
                pts = decode7(_b64_payload(req.encoded), dec_prec)
            else:
                pts = decode(req.encoded, dec_prec)
        except MalformedStream as e:
            logger.warning("shape_decode_malformed format=%s position=%d", req.format, e.position)
            bad_request("bad_encoded_shape", str(e))

        if len(pts) > self.max_points:
            bad_request("shape_too_large", f"decoded shape exceeds {self.max_points} points")

        logger.info("shape_decode format=%s digits=%d points=%d", req.format, digits, len(pts))
        return ShapeDecoded(
            format=req.format,
            precision_digits=digits,
            points=[[p.lng, p.lat] for p in pts],
            bbox=bbox_from_points(pts),
        )

    def encode_samples(self, req: SamplesEncodeRequest) -> SamplesEncoded:
        if len(req.values) > self.max_points:
            bad_request("samples_too_large", f"at most {self.max_points} values per request")

        for i, v in enumerate(req.values):
            if not math.isfinite(v):
                bad_request("bad_sample", f"value {i} is not a finite number: {v}")

        digits = self._digits(req.precision_digits)
        enc_prec, _ = precision_for_digits(digits)
        payload = encode7_samples(req.values, enc_prec)

        logger.info("samples_encode digits=%d values=%d bytes=%d", digits, len(req.values), len(payload))
        return SamplesEncoded(
            precision_digits=digits,
            num_values=len(req.values),
            encoded=b64_encode(payload),
        )

    def decode_samples(self, req: SamplesDecodeRequest) -> SamplesDecoded:
        if len(req.encoded) > self.max_encoded_bytes:
            bad_request("samples_too_large", f"encoded samples exceed {self.max_encoded_bytes} bytes")

        digits = self._digits(req.precision_digits)
        _, dec_prec = precision_for_digits(digits)

        try:
            values = decode7_samples(_b64_payload(req.encoded), dec_prec)
        except MalformedStream as e:
            logger.warning("samples_decode_malformed position=%d", e.position)
            bad_request("bad_encoded_samples", str(e))

        if len(values) > self.max_points:
            bad_request("samples_too_large", f"decoded series exceeds {self.max_points} values")

        return SamplesDecoded(precision_digits=digits, values=values)

from __future__ import annotations

import base64
import hashlib
from typing import Any

import orjson


def _orjson_dumps(obj: Any) -> bytes:
    return orjson.dumps(
        obj,
        option=orjson.OPT_SORT_KEYS | orjson.OPT_NON_STR_KEYS,
    )


def sha256_b64(data: bytes) -> str:
    h = hashlib.sha256(data).digest()
    return base64.urlsafe_b64encode(h).decode("ascii").rstrip("=")


def shape_key(fmt: str, precision_digits: int, payload: bytes, key_version: str) -> str:
    """
    Deterministic key for an encoded shape.

    Same points, format and precision always give the same key, so callers
    can cache or dedupe shapes without decoding them.
    """
    descriptor = {
        "key_version": key_version,
        "format": fmt,
        "precision_digits": int(precision_digits),
        "payload_sha256": hashlib.sha256(payload).hexdigest(),
        "payload_len": len(payload),
    }
    return sha256_b64(_orjson_dumps(descriptor))

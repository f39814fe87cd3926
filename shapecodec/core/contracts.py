from __future__ import annotations

from typing import List, Literal, Optional
from pydantic import BaseModel, Field


# ──────────────────────────────────────────────────────────────
# Shared
# ──────────────────────────────────────────────────────────────

ShapeFormat = Literal["polyline5", "varint7"]


class BBox4(BaseModel):
    minLng: float
    minLat: float
    maxLng: float
    maxLat: float


# ──────────────────────────────────────────────────────────────
# Shapes (point sequences)
# ──────────────────────────────────────────────────────────────

class ShapeEncodeRequest(BaseModel):
    points: List[List[float]]           # [[lng, lat], ...]
    format: ShapeFormat = "polyline5"
    precision_digits: Optional[int] = Field(default=None, ge=0, le=10)


class ShapeEncoded(BaseModel):
    format: ShapeFormat
    precision_digits: int
    num_points: int
    encoded: str                        # polyline text, or base64url for varint7
    shape_key: str


class ShapeDecodeRequest(BaseModel):
    encoded: str
    format: ShapeFormat = "polyline5"
    precision_digits: Optional[int] = Field(default=None, ge=0, le=10)


class ShapeDecoded(BaseModel):
    format: ShapeFormat
    precision_digits: int
    points: List[List[float]]           # [[lng, lat], ...]
    bbox: BBox4


# ──────────────────────────────────────────────────────────────
# Sample series (elevation profiles etc.)
# ──────────────────────────────────────────────────────────────

class SamplesEncodeRequest(BaseModel):
    values: List[float]
    precision_digits: Optional[int] = Field(default=None, ge=0, le=10)


class SamplesEncoded(BaseModel):
    precision_digits: int
    num_values: int
    encoded: str                        # base64url, varint7


class SamplesDecodeRequest(BaseModel):
    encoded: str
    precision_digits: Optional[int] = Field(default=None, ge=0, le=10)


class SamplesDecoded(BaseModel):
    precision_digits: int
    values: List[float]


# ──────────────────────────────────────────────────────────────
# Health
# ──────────────────────────────────────────────────────────────

class Health(BaseModel):
    ok: bool = True
    digits_precision: int

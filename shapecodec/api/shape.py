from __future__ import annotations

from fastapi import APIRouter, Depends

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
from shapecodec.core.encoded import DIGITS_PRECISION
from shapecodec.core.settings import settings
from shapecodec.services.shapes import Shapes

router = APIRouter()


def get_shapes_service() -> Shapes:
    return Shapes(
        default_digits=DIGITS_PRECISION,
        max_encoded_bytes=settings.max_encoded_bytes,
        max_points=settings.max_points,
        key_version=settings.key_version,
    )


@router.post("/shape/encode", response_model=ShapeEncoded)
def shape_encode(
    req: ShapeEncodeRequest,
    svc: Shapes = Depends(get_shapes_service),
) -> ShapeEncoded:
    return svc.encode(req)


@router.post("/shape/decode", response_model=ShapeDecoded)
def shape_decode(
    req: ShapeDecodeRequest,
    svc: Shapes = Depends(get_shapes_service),
) -> ShapeDecoded:
    return svc.decode(req)


# ──────────────────────────────────────────────────────────────
# Sample series
# ──────────────────────────────────────────────────────────────

@router.post("/samples/encode", response_model=SamplesEncoded)
def samples_encode(
    req: SamplesEncodeRequest,
    svc: Shapes = Depends(get_shapes_service),
) -> SamplesEncoded:
    return svc.encode_samples(req)


@router.post("/samples/decode", response_model=SamplesDecoded)
def samples_decode(
    req: SamplesDecodeRequest,
    svc: Shapes = Depends(get_shapes_service),
) -> SamplesDecoded:
    return svc.decode_samples(req)

from __future__ import annotations

from fastapi import APIRouter

from shapecodec.core.contracts import Health
from shapecodec.core.encoded import DIGITS_PRECISION

router = APIRouter()


@router.get("/health", response_model=Health)
def health() -> Health:
    return Health(ok=True, digits_precision=DIGITS_PRECISION)

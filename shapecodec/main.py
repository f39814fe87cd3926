# shapecodec/main.py
from __future__ import annotations

import logging
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from starlette.middleware.gzip import GZipMiddleware

# Load <repo>/.env (main.py is <repo>/shapecodec/main.py) before settings are read
BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")

from shapecodec.api import api_router
from shapecodec.core.encoded import DIGITS_PRECISION

logger = logging.getLogger(__name__)

app = FastAPI(title="Shape Codec", version="1.0.0")

# ── Compression ──
app.add_middleware(GZipMiddleware, minimum_size=1000)

# Routes
app.include_router(api_router)


@app.on_event("startup")
def startup():
    logger.info("[app] Shape codec ready, default precision %d digits", DIGITS_PRECISION)

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    # Precision
    # Shapes are stored with 6 digits; switching to 7 is a breaking wire change.
    use_7digits_default: bool = Field(default=False, alias="USE_7DIGITS_DEFAULT")

    # Request limits (HTTP surface only, the codec itself is unbounded)
    max_encoded_bytes: int = Field(default=4_000_000, alias="SHAPE_MAX_ENCODED_BYTES")
    max_points: int = Field(default=1_000_000, alias="SHAPE_MAX_POINTS")

    # Versioning
    key_version: str = Field(default="shape.v1", alias="SHAPE_KEY_VERSION")


settings = Settings()

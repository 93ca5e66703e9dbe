"""
Settings for the intake service.

All environment variables are prefixed with EDI_INTAKE_.
Example: EDI_INTAKE_LEGACY_ENCODING=cp1252
"""

import codecs
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .rules import DEFAULT_LEGACY_ENCODING


class IntakeSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="EDI_INTAKE_",
        env_file=".env",
        extra="ignore",
    )

    legacy_encoding: str = Field(
        DEFAULT_LEGACY_ENCODING,
        description="Single-byte code page used when no other detection step matches",
    )
    strict: bool = Field(
        False,
        description="Re-raise parser failures instead of only recording them",
    )
    log_level: str = Field(
        "INFO",
        description="Logging level for the service",
    )

    @field_validator("legacy_encoding")
    @classmethod
    def validate_legacy_encoding(cls, v: str) -> str:
        try:
            return codecs.lookup(v).name
        except LookupError:
            raise ValueError(f"unknown encoding: {v}")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"invalid log level: {v}")
        return level


@lru_cache
def get_settings() -> IntakeSettings:
    return IntakeSettings()

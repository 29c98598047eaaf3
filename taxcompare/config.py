from __future__ import annotations

import logging
import os
from decimal import Decimal, InvalidOperation
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taxcompare.core.jurisdiction import DEFAULT_JURISDICTION, list_jurisdictions

ENV_BOOL_TRUE = {"1", "true", "yes", "on"}
DEFAULT_EXPENSE_DRAW = Decimal("100000")


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in ENV_BOOL_TRUE


def _env_decimal(name: str, default: Decimal) -> Decimal:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return Decimal(raw.strip().replace(",", "").replace("$", ""))
    except InvalidOperation as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


class Settings(BaseModel):
    default_expense_draw: Decimal = Field(
        default_factory=lambda: _env_decimal("DEFAULT_EXPENSE_DRAW", DEFAULT_EXPENSE_DRAW)
    )
    jurisdiction: str = Field(default_factory=lambda: os.getenv("TAX_JURISDICTION", DEFAULT_JURISDICTION))
    build_version: str = Field(default_factory=lambda: os.getenv("BUILD_VERSION", "dev"))
    build_sha: str = Field(default_factory=lambda: os.getenv("BUILD_SHA", "local"))
    log_dir: str = Field(default_factory=lambda: os.getenv("LOG_DIR", "logs"))
    telemetry_log_enabled: bool = Field(default_factory=lambda: _env_bool("TELEMETRY_LOG_ENABLED", False))
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    model_config = ConfigDict(frozen=True, validate_default=True)

    @field_validator("default_expense_draw")
    @classmethod
    def _validate_draw(cls, value: Decimal) -> Decimal:
        if value < 0:
            raise ValueError("DEFAULT_EXPENSE_DRAW must not be negative")
        return value

    @field_validator("jurisdiction", mode="before")
    @classmethod
    def _normalize_jurisdiction(cls, value: str | None) -> str:
        code = (value or DEFAULT_JURISDICTION).strip().upper()
        if code not in list_jurisdictions():
            raise ValueError(f"TAX_JURISDICTION must be one of {list_jurisdictions()}, got {code}")
        return code

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, value: str | None) -> str:
        level = (value or "INFO").strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"LOG_LEVEL must be a logging level name, got {level}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()

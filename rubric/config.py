"""Configuration utilities for the Rubric Questionnaire Service.

This module loads application configuration with the following rules:
- Primary source: `rubric_config.json` at the project root.
- Overrides: environment variables, then optional text files under `config/`.
- Validation: Pydantic models enforce required fields and value constraints.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator, model_validator


CONFIG_DIR = Path("config")
ROOT_CONFIG = Path("rubric_config.json")
logger = logging.getLogger(__name__)


def _read_config_file(rel_path: str) -> Optional[str]:
    path = CONFIG_DIR / rel_path
    try:
        if path.exists():
            return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read override %s: %s", path, e)
        return None
    return None


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(key, default)


class DatabaseConfig(BaseModel):
    dsn: str

    @field_validator("dsn")
    @classmethod
    def dsn_must_be_non_empty(cls, v: str) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("database.dsn must be a non-empty string")
        return v


class ScoresConfig(BaseModel):
    """Score bounds applied to questionnaires created without explicit bounds."""

    default_min: int = Field(default=0, ge=0)
    default_max: int = Field(default=5)

    @model_validator(mode="after")
    def max_not_below_min(self) -> "ScoresConfig":
        if self.default_max < self.default_min:
            raise ValueError("scores.default_max must be >= scores.default_min")
        return self


class LoggingConfig(BaseModel):
    level: str = "INFO"

    @field_validator("level")
    @classmethod
    def level_must_be_known(cls, v: str) -> str:
        name = str(v).strip().upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"logging.level must be a standard level name, got {v!r}")
        return name


class AppConfig(BaseModel):
    database: DatabaseConfig
    scores: ScoresConfig
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    auto_create_schema: bool = True


def _read_json_file(path: Path) -> dict:
    try:
        if path.exists():
            return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:  # pragma: no cover - defensive
        logger.error("Failed to read JSON config %s: %s", path, e)
    return {}


def load_config() -> AppConfig:
    """Load configuration with validation.

    Precedence (highest first):
    1) Environment variables
    2) Text files in `config/` (optional)
    3) rubric_config.json at project root (primary base)
    4) Safe defaults for development
    """

    base = _read_json_file(ROOT_CONFIG)

    def _base(path: str, default: Optional[str] = None) -> Optional[str]:
        cur: object = base
        for key in path.split("."):
            if not isinstance(cur, dict) or key not in cur:
                return default
            cur = cur[key]
        return str(cur) if cur is not None else default

    dsn = (
        _env("TEST_DATABASE_URL")
        or _env("DATABASE_URL")
        or _read_config_file("database.url")
        or _base("database.dsn")
        or "sqlite+pysqlite:///:memory:"
    )

    min_text = _env("DEFAULT_MIN_QUESTION_SCORE") or _read_config_file("scores.default_min") or _base("scores.default_min", "0")
    max_text = _env("DEFAULT_MAX_QUESTION_SCORE") or _read_config_file("scores.default_max") or _base("scores.default_max", "5")
    auto_schema_text = _env("AUTO_CREATE_SCHEMA") or _read_config_file("auto_create_schema") or _base("auto_create_schema", "true")
    log_level_text = _env("LOG_LEVEL") or _read_config_file("logging.level") or _base("logging.level", "INFO")

    try:
        cfg = AppConfig(
            database=DatabaseConfig(dsn=dsn),
            scores=ScoresConfig(
                default_min=int(str(min_text).strip()),
                default_max=int(str(max_text).strip()),
            ),
            auto_create_schema=str(auto_schema_text).strip().lower() in {"1", "true", "yes"},
            logging=LoggingConfig(level=str(log_level_text)),
        )
        return cfg
    except (PydanticValidationError, ValueError) as e:
        logger.error("Invalid application configuration: %s", e)
        raise


__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "LoggingConfig",
    "ScoresConfig",
    "load_config",
]

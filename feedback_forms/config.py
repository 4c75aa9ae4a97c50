"""Configuration loading for the feedback forms service.

Rules:
- Primary source: `feedback_config.json` at the project root.
- Overrides: environment variables, then optional text files under `config/`.
- Validation: Pydantic models enforce required fields and value constraints.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator


CONFIG_DIR = Path("config")
ROOT_CONFIG = Path("feedback_config.json")
logger = logging.getLogger(__name__)

STORAGE_BACKENDS = {"sql", "memory"}


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


class StorageConfig(BaseModel):
    backend: str = "sql"
    dsn: str = "sqlite:///feedback_forms.db"

    @field_validator("backend")
    @classmethod
    def backend_must_be_known(cls, v: str) -> str:
        v = (v or "").strip().lower()
        if v not in STORAGE_BACKENDS:
            raise ValueError(f"storage.backend must be one of {sorted(STORAGE_BACKENDS)}")
        return v

    @field_validator("dsn")
    @classmethod
    def dsn_must_be_non_empty(cls, v: str) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("storage.dsn must be a non-empty string")
        return v


class AiConfig(BaseModel):
    model: str = "gpt-4o-mini"
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    timeout_seconds: float = Field(default=30.0, gt=0)
    temperature: Optional[float] = Field(default=None, ge=0, le=2)


class ShareConfig(BaseModel):
    base_url: str = "http://localhost:8000/"

    def link_for(self, share_path: str) -> str:
        return self.base_url.rstrip("/") + "/" + share_path.lstrip("/")


class AppConfig(BaseModel):
    storage: StorageConfig
    ai: AiConfig
    share: ShareConfig


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
    3) feedback_config.json at project root
    4) Defaults suitable for local development
    """

    base = _read_json_file(ROOT_CONFIG)

    def _base(path: str, default: Optional[str] = None) -> Optional[str]:
        cur: object = base
        for key in path.split("."):
            if not isinstance(cur, dict) or key not in cur:
                return default
            cur = cur[key]
        return str(cur) if cur is not None else default

    # Storage
    backend = _env("FEEDBACK_STORAGE_BACKEND") or _read_config_file("storage.backend") or _base("storage.backend", "sql")
    dsn = _env("DATABASE_URL") or _read_config_file("database.url") or _base("storage.dsn") or "sqlite:///feedback_forms.db"

    # AI gateway
    model = _env("AI_MODEL") or _read_config_file("ai.model") or _base("ai.model", "gpt-4o-mini")
    api_key = _env("OPENAI_API_KEY") or _read_config_file("ai.api_key") or _base("ai.api_key")
    base_url = _env("AI_BASE_URL") or _read_config_file("ai.base_url") or _base("ai.base_url")
    timeout_text = _env("AI_TIMEOUT_SECONDS") or _read_config_file("ai.timeout_seconds") or _base("ai.timeout_seconds", "30")
    temperature_text = _env("AI_TEMPERATURE") or _read_config_file("ai.temperature") or _base("ai.temperature")

    # Share links
    share_base = _env("SHARE_BASE_URL") or _read_config_file("share.base_url") or _base("share.base_url", "http://localhost:8000/")

    try:
        cfg = AppConfig(
            storage=StorageConfig(backend=backend, dsn=dsn),
            ai=AiConfig(
                model=model,
                api_key=api_key,
                base_url=base_url,
                timeout_seconds=str(timeout_text).strip(),
                temperature=str(temperature_text).strip() if temperature_text else None,
            ),
            share=ShareConfig(base_url=share_base),
        )
        return cfg
    except PydanticValidationError as e:
        logger.error("Invalid application configuration: %s", e)
        raise


__all__ = [
    "AppConfig",
    "StorageConfig",
    "AiConfig",
    "ShareConfig",
    "load_config",
]

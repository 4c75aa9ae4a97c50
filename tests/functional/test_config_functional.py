"""Functional tests for configuration loading and precedence."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from feedback_forms.config import ShareConfig, load_config

ENV_KEYS = (
    "FEEDBACK_STORAGE_BACKEND",
    "DATABASE_URL",
    "AI_MODEL",
    "OPENAI_API_KEY",
    "AI_BASE_URL",
    "AI_TIMEOUT_SECONDS",
    "AI_TEMPERATURE",
    "SHARE_BASE_URL",
)


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_defaults_without_any_source():
    cfg = load_config()
    assert cfg.storage.backend == "sql"
    assert cfg.storage.dsn == "sqlite:///feedback_forms.db"
    assert cfg.ai.model == "gpt-4o-mini"
    assert cfg.ai.api_key is None
    assert cfg.ai.timeout_seconds == 30
    assert cfg.ai.temperature is None
    assert cfg.share.base_url == "http://localhost:8000/"


def test_json_file_is_read(isolated_cwd):
    (isolated_cwd / "feedback_config.json").write_text(
        json.dumps(
            {
                "storage": {"backend": "memory"},
                "ai": {"model": "gpt-4o", "timeout_seconds": 12, "temperature": 0.3},
                "share": {"base_url": "https://feedback.example.org"},
            }
        ),
        encoding="utf-8",
    )
    cfg = load_config()
    assert cfg.storage.backend == "memory"
    assert cfg.ai.model == "gpt-4o"
    assert cfg.ai.timeout_seconds == 12
    assert cfg.ai.temperature == 0.3
    assert cfg.share.base_url == "https://feedback.example.org"


def test_config_dir_overrides_json(isolated_cwd):
    (isolated_cwd / "feedback_config.json").write_text(json.dumps({"ai": {"model": "from-json"}}), encoding="utf-8")
    (isolated_cwd / "config").mkdir()
    (isolated_cwd / "config" / "ai.model").write_text("from-file\n", encoding="utf-8")
    assert load_config().ai.model == "from-file"


def test_environment_overrides_everything(isolated_cwd, monkeypatch):
    (isolated_cwd / "config").mkdir()
    (isolated_cwd / "config" / "ai.model").write_text("from-file", encoding="utf-8")
    monkeypatch.setenv("AI_MODEL", "from-env")
    monkeypatch.setenv("FEEDBACK_STORAGE_BACKEND", "MEMORY")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    cfg = load_config()
    assert cfg.ai.model == "from-env"
    assert cfg.storage.backend == "memory"
    assert cfg.ai.api_key == "sk-env"


@pytest.mark.parametrize(
    "key,value",
    [
        ("FEEDBACK_STORAGE_BACKEND", "redis"),
        ("AI_TIMEOUT_SECONDS", "0"),
        ("AI_TIMEOUT_SECONDS", "soon"),
        ("AI_TEMPERATURE", "3"),
    ],
)
def test_invalid_values_are_rejected(monkeypatch, key, value):
    monkeypatch.setenv(key, value)
    with pytest.raises(ValidationError):
        load_config()


def test_share_link_joins_without_double_slash():
    assert ShareConfig(base_url="https://x.test/").link_for("#/form/f1") == "https://x.test/#/form/f1"
    assert ShareConfig(base_url="https://x.test").link_for("#/form/f1") == "https://x.test/#/form/f1"

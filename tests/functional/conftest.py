"""Functional test bootstrap.

Every test gets a fresh in-memory backend, a deterministic identity
(``id-1``, ``id-2``, ... and a clock starting at 1_700_000_000_000 ms that
advances one second per call) and an AI gateway over a mocked OpenAI client.
No test touches the network or a database file.
"""

from __future__ import annotations

import json
from types import SimpleNamespace
from typing import Any

import pytest

from feedback_forms.config import AiConfig, AppConfig, ShareConfig, StorageConfig
from feedback_forms.logic.ai_gateway import AiGateway
from feedback_forms.logic.events import get_buffered_events
from feedback_forms.logic.form_store import FormStore
from feedback_forms.logic.identity import Identity, fixed_clock, sequential_ids
from feedback_forms.logic.storage_backend import InMemoryBackend

CLOCK_START = 1_700_000_000_000


def completion(content: Any) -> SimpleNamespace:
    """Shape of an OpenAI chat completion carrying ``content``."""
    text = content if isinstance(content, str) or content is None else json.dumps(content)
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=text))])


@pytest.fixture(autouse=True)
def _clear_events():
    get_buffered_events(clear=True)
    yield
    get_buffered_events(clear=True)


@pytest.fixture
def identity() -> Identity:
    return Identity(sequential_ids("id"), fixed_clock(CLOCK_START, 1000))


@pytest.fixture
def backend() -> InMemoryBackend:
    return InMemoryBackend()


@pytest.fixture
def store(backend) -> FormStore:
    return FormStore(backend)


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(
        storage=StorageConfig(backend="memory"),
        ai=AiConfig(model="test-model", timeout_seconds=5),
        share=ShareConfig(base_url="https://forms.example.test/"),
    )


@pytest.fixture
def ai_client(mocker):
    """Mocked OpenAI client; set ``chat.completions.create`` per test."""
    return mocker.MagicMock(name="openai_client")


@pytest.fixture
def gateway(ai_client) -> AiGateway:
    return AiGateway(ai_client, model="test-model", timeout_seconds=5)


@pytest.fixture
def client(app_config, backend, identity, gateway):
    from fastapi.testclient import TestClient
    from feedback_forms.main import create_app

    app = create_app(app_config, backend=backend, identity=identity, gateway=gateway)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_completion():
    return completion

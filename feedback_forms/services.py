"""Construction of the long-lived collaborators shared by the routes.

``build_services`` is the single place that decides which storage backend
and AI gateway the app uses; tests pass their own backend, identity and
gateway instead of touching configuration.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Optional

from fastapi import Request

from feedback_forms.config import AppConfig
from feedback_forms.db.base import get_engine
from feedback_forms.db.migrations_runner import apply_migrations
from feedback_forms.logic.ai_gateway import AiGateway, build_ai_gateway
from feedback_forms.logic.form_store import FormStore
from feedback_forms.logic.identity import Identity
from feedback_forms.logic.inflight import InFlightGuard
from feedback_forms.logic.storage_backend import InMemoryBackend, KeyValueBackend, SqlKeyValueBackend

logger = logging.getLogger(__name__)


@dataclass
class Services:
    config: AppConfig
    store: FormStore
    identity: Identity
    guard: InFlightGuard
    gateway_factory: Callable[[], AiGateway]
    _gateway: Optional[AiGateway] = field(default=None, repr=False)
    _gateway_lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def gateway(self) -> AiGateway:
        """Return the AI gateway, building it on first use.

        Built lazily so the service starts without an API key; the first AI
        request then fails with ``AiServiceError`` instead.
        """
        with self._gateway_lock:
            if self._gateway is None:
                self._gateway = self.gateway_factory()
            return self._gateway


def build_backend(config: AppConfig) -> KeyValueBackend:
    if config.storage.backend == "memory":
        logger.info("storage_backend=memory")
        return InMemoryBackend()
    engine = get_engine(config.storage.dsn)
    apply_migrations(engine)
    logger.info("storage_backend=sql dialect=%s", engine.dialect.name)
    return SqlKeyValueBackend(engine)


def build_services(
    config: AppConfig,
    *,
    backend: Optional[KeyValueBackend] = None,
    identity: Optional[Identity] = None,
    gateway: Optional[AiGateway] = None,
) -> Services:
    services = Services(
        config=config,
        store=FormStore(backend if backend is not None else build_backend(config)),
        identity=identity or Identity(),
        guard=InFlightGuard(),
        gateway_factory=lambda: build_ai_gateway(config.ai),
    )
    if gateway is not None:
        services._gateway = gateway
    return services


def get_services(request: Request) -> Services:
    """FastAPI dependency returning the app's ``Services``."""
    return request.app.state.services


__all__ = ["Services", "build_backend", "build_services", "get_services"]

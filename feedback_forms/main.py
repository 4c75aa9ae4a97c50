from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, FastAPI

from feedback_forms.config import AppConfig, load_config
from feedback_forms.http.problem import register_problem_handlers
from feedback_forms.http.request_id import RequestIdMiddleware
from feedback_forms.logging_setup import configure_logging
from feedback_forms.logic.ai_gateway import AiGateway
from feedback_forms.logic.identity import Identity
from feedback_forms.logic.storage_backend import KeyValueBackend
from feedback_forms.middleware.cors import apply_cors
from feedback_forms.routes import api_router
from feedback_forms.services import Services, build_services, get_services

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[AppConfig] = None,
    *,
    backend: Optional[KeyValueBackend] = None,
    identity: Optional[Identity] = None,
    gateway: Optional[AiGateway] = None,
) -> FastAPI:
    """Build the FastAPI application.

    Collaborators default to what the configuration describes; tests inject
    an in-memory backend, deterministic identity and a stub gateway.
    """
    configure_logging()
    config = config or load_config()
    services = build_services(config, backend=backend, identity=identity, gateway=gateway)

    app = FastAPI(title="Feedback Forms")
    app.state.services = services
    register_problem_handlers(app)
    apply_cors(app)
    # Added last so it wraps CORS and sees every request first
    app.add_middleware(RequestIdMiddleware)

    app.include_router(api_router, prefix="/api/v1")

    @app.get("/health", tags=["Health"])
    def health(services: Services = Depends(get_services)):  # pragma: no cover - trivial
        return {"status": "ok", "storage": services.store.backend_name}

    logger.info("app_created storage=%s ai_model=%s", services.store.backend_name, config.ai.model)
    return app


# Intentionally do not instantiate the app at import time to prevent side effects.

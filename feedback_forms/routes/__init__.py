"""APIRouter registration for the feedback forms service."""

from __future__ import annotations

from fastapi import APIRouter

from feedback_forms.routes.analytics import router as analytics_router
from feedback_forms.routes.forms import router as forms_router
from feedback_forms.routes.generation import router as generation_router
from feedback_forms.routes.responses import router as responses_router

api_router = APIRouter()
api_router.include_router(forms_router)
api_router.include_router(responses_router)
api_router.include_router(analytics_router)
api_router.include_router(generation_router)

__all__ = ["api_router"]

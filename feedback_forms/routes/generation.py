"""AI-assisted form drafting."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from feedback_forms.logic.form_builder import apply_generated_structure, new_form
from feedback_forms.logic.inflight import topic_key
from feedback_forms.models.requests import GenerationPayload
from feedback_forms.services import Services, get_services

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "/generation/forms",
    summary="Draft a form from a topic description (not saved)",
    operation_id="generateForm",
    tags=["Generation"],
)
def generate_form(payload: GenerationPayload, services: Services = Depends(get_services)):
    with services.guard.hold(topic_key(payload.topic)):
        generated = services.gateway().generate_form_structure(payload.topic)
    draft = apply_generated_structure(
        new_form(services.identity, author_id=payload.author_id),
        generated,
        services.identity,
    )
    logger.info("form_drafted form_id=%s questions=%s", draft.id, len(draft.questions))
    return draft.to_record()


__all__ = ["router"]

"""Respondent submission and response listing endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from feedback_forms.http.problem import form_not_found
from feedback_forms.logic.submission import collect_response
from feedback_forms.models.requests import SubmissionPayload
from feedback_forms.services import Services, get_services

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "/forms/{form_id}/responses",
    summary="Submit a response to a form",
    operation_id="submitResponse",
    tags=["Responses"],
)
def submit_response(form_id: str, payload: SubmissionPayload, services: Services = Depends(get_services)):
    form = services.store.get_form(form_id)
    if form is None:
        return form_not_found(form_id)
    # SubmissionValidationError propagates to the problem handler (422)
    response = collect_response(
        form,
        payload.answers,
        services.identity,
        respondent_name=payload.respondent_name,
        anonymous=payload.anonymous,
    )
    services.store.save_response(response)
    logger.info("response_submitted form_id=%s response_id=%s", form_id, response.id)
    return JSONResponse(response.to_record(), status_code=201)


@router.get(
    "/forms/{form_id}/responses",
    summary="List responses for a form",
    operation_id="listFormResponses",
    tags=["Responses"],
)
def list_form_responses(form_id: str, services: Services = Depends(get_services)):
    return [r.to_record() for r in services.store.list_responses_for_form(form_id)]


@router.get("/responses", summary="List all responses", operation_id="listResponses", tags=["Responses"])
def list_responses(services: Services = Depends(get_services)):
    return [r.to_record() for r in services.store.list_responses()]


__all__ = ["router"]

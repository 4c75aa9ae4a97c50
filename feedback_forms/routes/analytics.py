"""Analytics endpoints: per-question aggregates and the AI summary."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from feedback_forms.http.problem import form_not_found, problem, problem_response
from feedback_forms.logic.aggregation import aggregate_form, build_feedback_digest
from feedback_forms.logic.inflight import summary_key
from feedback_forms.services import Services, get_services

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get(
    "/forms/{form_id}/analytics",
    summary="Aggregate a form's responses per question",
    operation_id="getFormAnalytics",
    tags=["Analytics"],
)
def get_analytics(form_id: str, services: Services = Depends(get_services)):
    form = services.store.get_form(form_id)
    if form is None:
        return form_not_found(form_id)
    analytics = aggregate_form(form, services.store.list_responses_for_form(form_id))
    return analytics.model_dump(mode="json", by_alias=True)


@router.post(
    "/forms/{form_id}/summary",
    summary="Generate an AI narrative summary of the feedback",
    operation_id="summarizeFeedback",
    tags=["Analytics"],
)
def summarize(form_id: str, services: Services = Depends(get_services)):
    form = services.store.get_form(form_id)
    if form is None:
        return form_not_found(form_id)
    responses = services.store.list_responses_for_form(form_id)
    if not responses:
        return problem_response(problem(409, "Conflict", "form has no responses to summarize", "NO_RESPONSES"))
    # RequestInFlightError and AiGatewayError propagate to the problem handlers
    with services.guard.hold(summary_key(form_id)):
        summary = services.gateway().summarize_feedback(form.title, build_feedback_digest(form, responses))
    logger.info("feedback_summarized form_id=%s responses=%s", form_id, len(responses))
    return summary.model_dump(mode="json", by_alias=True)


__all__ = ["router"]

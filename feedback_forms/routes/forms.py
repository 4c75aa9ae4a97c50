"""Form authoring endpoints: list, create, read, save, delete, add question."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, Response

from feedback_forms.http.problem import form_not_found
from feedback_forms.logic.form_builder import (
    add_question,
    new_form,
    new_question,
    prepare_for_save,
    questions_from_payload,
    share_path,
)
from feedback_forms.models.form import Form
from feedback_forms.models.requests import FormPayload, NewQuestionPayload
from feedback_forms.services import Services, get_services

router = APIRouter()
logger = logging.getLogger(__name__)


def form_body(form: Form, services: Services) -> dict:
    """Stored record plus the share link that encodes only the form id."""
    return {**form.to_record(), "shareUrl": services.config.share.link_for(share_path(form.id))}


@router.get("/forms", summary="List forms", operation_id="listForms", tags=["Forms"])
def list_forms(
    author_id: Optional[str] = Query(default=None, alias="authorId"),
    services: Services = Depends(get_services),
):
    forms = services.store.list_forms()
    if author_id is not None:
        forms = [f for f in forms if f.author_id == author_id]
    return [form_body(f, services) for f in forms]


@router.post("/forms", summary="Create a form", operation_id="createForm", tags=["Forms"])
def create_form(payload: FormPayload, services: Services = Depends(get_services)):
    form = new_form(services.identity, author_id=payload.author_id).model_copy(
        update={
            "title": payload.title,
            "description": payload.description,
            "questions": questions_from_payload(payload.questions, services.identity),
            "is_published": payload.is_published,
        }
    )
    services.store.save_form(form)
    logger.info("form_created form_id=%s", form.id)
    return JSONResponse(form_body(form, services), status_code=201, headers={"Location": f"/api/v1/forms/{form.id}"})


@router.get("/forms/{form_id}", summary="Get a form", operation_id="getForm", tags=["Forms"])
def get_form(form_id: str, services: Services = Depends(get_services)):
    form = services.store.get_form(form_id)
    if form is None:
        return form_not_found(form_id)
    return form_body(form, services)


@router.put("/forms/{form_id}", summary="Save a form (replace by id)", operation_id="saveForm", tags=["Forms"])
def save_form(form_id: str, payload: FormPayload, services: Services = Depends(get_services)):
    existing = services.store.get_form(form_id)
    incoming = Form(
        id=form_id,
        title=payload.title,
        description=payload.description,
        questions=questions_from_payload(payload.questions, services.identity),
        created_at=services.identity.now(),
        author_id=payload.author_id,
        is_published=payload.is_published,
    )
    form = prepare_for_save(incoming, existing)
    services.store.save_form(form)
    return JSONResponse(form_body(form, services), status_code=200 if existing else 201)


@router.delete("/forms/{form_id}", summary="Delete a form and its responses", operation_id="deleteForm", tags=["Forms"])
def delete_form(form_id: str, services: Services = Depends(get_services)):
    services.store.delete_form(form_id)
    return Response(status_code=204)


@router.post(
    "/forms/{form_id}/questions",
    summary="Append a new question of the given type",
    operation_id="addQuestion",
    tags=["Forms"],
)
def append_question(form_id: str, payload: NewQuestionPayload, services: Services = Depends(get_services)):
    form = services.store.get_form(form_id)
    if form is None:
        return form_not_found(form_id)
    question = new_question(services.identity, payload.type)
    form = add_question(form, question)
    services.store.save_form(form)
    return JSONResponse({"question": question.model_dump(mode="json", exclude_none=True), "form": form_body(form, services)}, status_code=201)


__all__ = ["router", "form_body"]

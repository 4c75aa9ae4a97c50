"""Author-side editing of forms.

All operations return a new ``Form``; the input is left untouched so callers
can keep the stored copy around for comparison.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional

from feedback_forms.logic.identity import Identity
from feedback_forms.models.ai_results import GeneratedForm
from feedback_forms.models.form import Form, Question
from feedback_forms.models.question_type import QuestionType
from feedback_forms.models.requests import QuestionPayload

logger = logging.getLogger(__name__)

DEFAULT_CHOICE_OPTIONS = ("Option 1",)
SHARE_PATH_TEMPLATE = "#/form/{form_id}"


def new_form(identity: Identity, author_id: Optional[str] = None) -> Form:
    return Form(
        id=identity.new_id(),
        title="",
        description="",
        questions=[],
        created_at=identity.now(),
        author_id=author_id,
        is_published=False,
    )


def new_question(identity: Identity, question_type: str) -> Question:
    options = list(DEFAULT_CHOICE_OPTIONS) if question_type == QuestionType.MULTIPLE_CHOICE else None
    return Question(id=identity.new_id(), type=question_type, label="", required=True, options=options)


def questions_from_payload(items: Iterable[QuestionPayload], identity: Identity) -> List[Question]:
    """Editor questions to stored questions; ids are minted only when absent."""
    return [
        Question(
            id=item.id or identity.new_id(),
            type=item.type,
            label=item.label,
            required=item.required,
            options=list(item.options) if item.options is not None else None,
        )
        for item in items
    ]


def add_question(form: Form, question: Question) -> Form:
    return form.model_copy(update={"questions": [*form.questions, question]})


def _normalise_options(question: Question) -> Question:
    if question.type == QuestionType.MULTIPLE_CHOICE:
        if question.options is None:
            return question.model_copy(update={"options": list(DEFAULT_CHOICE_OPTIONS)})
        return question
    if question.options is not None:
        return question.model_copy(update={"options": None})
    return question


def update_question(form: Form, question_id: str, **changes: Any) -> Form:
    """Apply ``changes`` to one question. The question id cannot change."""
    changes.pop("id", None)
    questions = []
    for question in form.questions:
        if question.id == question_id:
            # Re-validate so a bad type name is rejected here, not at render time
            merged = Question.model_validate({**question.model_dump(), **changes})
            question = _normalise_options(merged)
        questions.append(question)
    return form.model_copy(update={"questions": questions})


def remove_question(form: Form, question_id: str) -> Form:
    return form.model_copy(update={"questions": [q for q in form.questions if q.id != question_id]})


def apply_generated_structure(form: Form, generated: GeneratedForm, identity: Identity) -> Form:
    """Replace title, description and questions with an AI proposal.

    Generated questions carry no ids, so each one gets a fresh id here.
    """
    questions = [
        _normalise_options(
            Question(
                id=identity.new_id(),
                type=item.type,
                label=item.label,
                required=item.required,
                options=list(item.options) if item.options is not None else None,
            )
        )
        for item in generated.questions
    ]
    logger.info("generated_structure_applied form_id=%s questions=%s", form.id, len(questions))
    return form.model_copy(
        update={"title": generated.title, "description": generated.description, "questions": questions}
    )


def prepare_for_save(incoming: Form, existing: Optional[Form]) -> Form:
    """Pin ``id`` and ``created_at`` to the stored record on edit."""
    if existing is None:
        return incoming
    return incoming.model_copy(update={"id": existing.id, "created_at": existing.created_at})


def share_path(form_id: str) -> str:
    return SHARE_PATH_TEMPLATE.format(form_id=form_id)


__all__ = [
    "DEFAULT_CHOICE_OPTIONS",
    "new_form",
    "new_question",
    "questions_from_payload",
    "add_question",
    "update_question",
    "remove_question",
    "apply_generated_structure",
    "prepare_for_save",
    "share_path",
]

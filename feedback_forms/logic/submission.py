"""Turn a respondent's answers into an immutable FormResponse."""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from feedback_forms.logic.errors import SubmissionValidationError
from feedback_forms.logic.identity import Identity
from feedback_forms.models.form import Form
from feedback_forms.models.form_response import ANONYMOUS_RESPONDENT, Answer, AnswerValue, FormResponse

logger = logging.getLogger(__name__)


def _is_unanswered(value: Optional[AnswerValue]) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def collect_response(
    form: Form,
    answers: Mapping[str, Optional[AnswerValue]],
    identity: Identity,
    *,
    respondent_name: Optional[str] = None,
    anonymous: bool = True,
) -> FormResponse:
    """Validate ``answers`` against ``form`` and build the response record.

    Raises ``SubmissionValidationError`` when a required question is left
    unanswered or an answer targets a question the form does not have.
    Unanswered entries are dropped, never stored as empty values.
    """
    unknown = [qid for qid in answers if form.question_by_id(qid) is None]
    missing = [
        q.id for q in form.questions if q.required and _is_unanswered(answers.get(q.id))
    ]
    if missing or unknown:
        logger.info(
            "submission_rejected form_id=%s missing=%s unknown=%s", form.id, missing, unknown
        )
        raise SubmissionValidationError(missing=missing, unknown=unknown)

    name = (respondent_name or "").strip()
    stored_name = ANONYMOUS_RESPONDENT if anonymous or not name else name
    # Keep form order so stored answers read naturally
    kept = [
        Answer(question_id=q.id, value=answers[q.id])
        for q in form.questions
        if q.id in answers and not _is_unanswered(answers[q.id])
    ]
    return FormResponse(
        id=identity.new_id(),
        form_id=form.id,
        answers=kept,
        submitted_at=identity.now(),
        respondent_name=stored_name,
    )


__all__ = ["collect_response"]

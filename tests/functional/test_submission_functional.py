"""Functional tests for turning respondent answers into a stored response."""

from __future__ import annotations

import pytest

from feedback_forms.logic.errors import SubmissionValidationError
from feedback_forms.logic.submission import collect_response
from feedback_forms.models.form import Form, Question
from feedback_forms.models.form_response import ANONYMOUS_RESPONDENT


@pytest.fixture
def form() -> Form:
    return Form(
        id="f1",
        title="Sprint review",
        questions=[
            Question(id="q1", type="RATING", label="Overall", required=True),
            Question(id="q2", type="TEXT", label="Anything else?"),
            Question(id="q3", type="YES_NO", label="Again?", required=True),
        ],
        created_at=1,
    )


def test_question_lookup_by_id(form):
    assert form.question_by_id("q2").label == "Anything else?"
    assert form.question_by_id("zz") is None


def test_valid_submission_builds_response(form, identity):
    response = collect_response(form, {"q3": "Yes", "q1": 4, "q2": "Great pacing"}, identity)
    assert response.id == "id-1"
    assert response.form_id == "f1"
    assert response.submitted_at == 1_700_000_000_000
    # Stored in form order, not submission order
    assert [(a.question_id, a.value) for a in response.answers] == [
        ("q1", 4),
        ("q2", "Great pacing"),
        ("q3", "Yes"),
    ]


def test_optional_question_may_be_skipped(form, identity):
    response = collect_response(form, {"q1": 2, "q2": "", "q3": "No"}, identity)
    assert [a.question_id for a in response.answers] == ["q1", "q3"]


@pytest.mark.parametrize("blank", [None, ""])
def test_blank_required_answer_is_rejected(form, identity, blank):
    with pytest.raises(SubmissionValidationError) as excinfo:
        collect_response(form, {"q1": blank, "q3": "Yes"}, identity)
    assert excinfo.value.missing == ["q1"]
    assert excinfo.value.unknown == []


def test_zero_and_false_count_as_answers(form, identity):
    response = collect_response(form, {"q1": 0, "q3": False}, identity)
    assert [a.value for a in response.answers] == [0, False]


def test_answers_for_unknown_questions_are_rejected(form, identity):
    with pytest.raises(SubmissionValidationError) as excinfo:
        collect_response(form, {"q1": 5, "q3": "Yes", "zz": "?"}, identity)
    assert excinfo.value.unknown == ["zz"]


def test_missing_and_unknown_reported_together(form, identity):
    with pytest.raises(SubmissionValidationError) as excinfo:
        collect_response(form, {"zz": 1}, identity)
    assert excinfo.value.missing == ["q1", "q3"]
    assert excinfo.value.unknown == ["zz"]
    assert "q1" in str(excinfo.value)


def test_rejection_consumes_no_id(form, identity):
    with pytest.raises(SubmissionValidationError):
        collect_response(form, {}, identity)
    assert identity.new_id() == "id-1"


def test_anonymous_submission_stores_sentinel(form, identity):
    response = collect_response(form, {"q1": 3, "q3": "No"}, identity, respondent_name="Ada")
    assert response.respondent_name == ANONYMOUS_RESPONDENT
    assert not response.is_attributed


def test_named_submission_keeps_trimmed_name(form, identity):
    response = collect_response(
        form, {"q1": 3, "q3": "No"}, identity, respondent_name="  Ada Lovelace ", anonymous=False
    )
    assert response.respondent_name == "Ada Lovelace"
    assert response.is_attributed


def test_blank_name_falls_back_to_sentinel(form, identity):
    response = collect_response(form, {"q1": 3, "q3": "No"}, identity, respondent_name="  ", anonymous=False)
    assert response.respondent_name == ANONYMOUS_RESPONDENT


def test_form_without_required_questions_accepts_empty_submission(identity):
    form = Form(id="f2", questions=[Question(id="q", type="TEXT")], created_at=1)
    response = collect_response(form, {}, identity)
    assert response.answers == []

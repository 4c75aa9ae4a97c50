"""Functional tests for per-question analytics."""

from __future__ import annotations

import pytest

from feedback_forms.logic.aggregation import aggregate_form, build_feedback_digest, percent
from feedback_forms.models.form import Form, Question
from feedback_forms.models.form_response import Answer, FormResponse


def _form(*questions: Question, form_id: str = "f1") -> Form:
    return Form(id=form_id, title="Retro", description="", questions=list(questions), created_at=1)


def _responses(question_id: str, values, form_id: str = "f1", name=None):
    return [
        FormResponse(
            id=f"r{i}",
            form_id=form_id,
            answers=[Answer(question_id=question_id, value=v)] if v is not None else [],
            submitted_at=i,
            respondent_name=name,
        )
        for i, v in enumerate(values)
    ]


def _option_counts(aggregate):
    return [(entry.option, entry.count) for entry in aggregate.counts]


RATING = Question(id="q1", type="RATING", label="How was it?")
YES_NO = Question(id="q2", type="YES_NO", label="Recommend?")
CHOICE = Question(id="q3", type="MULTIPLE_CHOICE", label="Track", options=["A", "B"])
TEXT = Question(id="q4", type="TEXT", label="Comments")


# ---------------------------------------------------------------------------
# Rounding
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "part,whole,expected",
    [(0, 0, 0), (3, 4, 75), (1, 3, 33), (2, 3, 67), (1, 8, 13), (1, 200, 1), (0, 5, 0), (5, 5, 100)],
)
def test_percent_rounds_half_up(part, whole, expected):
    assert percent(part, whole) == expected


# ---------------------------------------------------------------------------
# Per type
# ---------------------------------------------------------------------------

def test_rating_counts_every_bucket_on_the_scale():
    analytics = aggregate_form(_form(RATING), _responses("q1", [1, 1, 3, 5, 5, 5]))
    agg = analytics.questions["q1"]
    assert agg.type == "RATING"
    assert agg.counts == {1: 2, 2: 0, 3: 1, 4: 0, 5: 3}
    assert agg.answered == 6


def test_rating_ignores_booleans_and_strings():
    analytics = aggregate_form(_form(RATING), _responses("q1", [True, "5", 5]))
    assert analytics.questions["q1"].counts == {1: 0, 2: 0, 3: 0, 4: 0, 5: 1}
    assert analytics.questions["q1"].answered == 1


def test_rating_answered_matches_bucketed_total():
    analytics = aggregate_form(_form(RATING), _responses("q1", [0, 6, 2.5, 3, 4.0, False]))
    agg = analytics.questions["q1"]
    assert agg.counts == {1: 0, 2: 0, 3: 1, 4: 1, 5: 0}
    assert agg.answered == sum(agg.counts.values()) == 2


def test_unanswered_rating_is_not_counted():
    """One response rated 4, another skipped the question."""
    responses = _responses("q1", [4, None])
    analytics = aggregate_form(_form(RATING), responses)
    assert analytics.total_responses == 2
    assert analytics.questions["q1"].counts == {1: 0, 2: 0, 3: 0, 4: 1, 5: 0}
    assert analytics.questions["q1"].answered == 1


def test_yes_no_counts_and_percentages():
    analytics = aggregate_form(_form(YES_NO), _responses("q2", ["Yes", "Yes", "No", "Yes"]))
    agg = analytics.questions["q2"]
    assert agg.counts == {"Yes": 3, "No": 1}
    assert agg.percentages == {"Yes": 75, "No": 25}


def test_yes_no_percentages_are_over_all_responses():
    analytics = aggregate_form(_form(YES_NO), _responses("q2", ["Yes", None, None, None]))
    assert analytics.questions["q2"].percentages == {"Yes": 25, "No": 0}


def test_multiple_choice_only_counts_current_options():
    analytics = aggregate_form(_form(CHOICE), _responses("q3", ["A", "C", "B", "A"]))
    assert _option_counts(analytics.questions["q3"]) == [("A", 2), ("B", 1)]


def test_multiple_choice_counts_every_option_entry_in_order():
    """Duplicate option entries each get their own slot."""
    question = Question(id="q3", type="MULTIPLE_CHOICE", label="Track", options=["B", "A", "A"])
    analytics = aggregate_form(_form(question), _responses("q3", ["A", "B", "A"]))
    assert _option_counts(analytics.questions["q3"]) == [("B", 1), ("A", 2), ("A", 2)]


def test_multiple_choice_without_options_has_no_counts():
    question = Question(id="q3", type="MULTIPLE_CHOICE", label="Track", options=[])
    agg = aggregate_form(_form(question), _responses("q3", ["A"])).questions["q3"]
    assert agg.counts == []
    assert agg.answered == 1


def test_text_keeps_response_order_and_drops_blanks():
    analytics = aggregate_form(_form(TEXT), _responses("q4", ["first", "", None, "second"]))
    assert analytics.questions["q4"].answers == ["first", "second"]
    assert analytics.questions["q4"].answered == 2


# ---------------------------------------------------------------------------
# Whole form
# ---------------------------------------------------------------------------

def test_zero_responses_yield_empty_aggregates():
    analytics = aggregate_form(_form(RATING, YES_NO, CHOICE, TEXT), [])
    assert analytics.total_responses == 0
    assert analytics.attributed_percentage == 0
    assert analytics.questions["q2"].percentages == {"Yes": 0, "No": 0}
    assert analytics.questions["q4"].answers == []
    assert list(analytics.questions) == ["q1", "q2", "q3", "q4"]


def test_answers_for_removed_questions_are_ignored():
    responses = [
        FormResponse(
            id="r1",
            form_id="f1",
            answers=[Answer(question_id="gone", value=5), Answer(question_id="q1", value=2)],
            submitted_at=1,
        )
    ]
    analytics = aggregate_form(_form(RATING), responses)
    assert list(analytics.questions) == ["q1"]
    assert analytics.questions["q1"].counts[2] == 1


def test_duplicate_answers_count_the_first_only():
    responses = [
        FormResponse(
            id="r1",
            form_id="f1",
            answers=[Answer(question_id="q1", value=1), Answer(question_id="q1", value=5)],
            submitted_at=1,
        )
    ]
    counts = aggregate_form(_form(RATING), responses).questions["q1"].counts
    assert counts[1] == 1 and counts[5] == 0


def test_attributed_percentage_excludes_anonymous_respondents():
    responses = (
        _responses("q1", [5], name="Ada")
        + _responses("q1", [4], name="Anonymous")
        + _responses("q1", [3], name=None)
    )
    analytics = aggregate_form(_form(RATING), responses)
    assert analytics.attributed_percentage == 33


def test_aggregation_is_pure_and_repeatable():
    form = _form(RATING, TEXT)
    responses = _responses("q1", [2, 3])
    form_before = form.model_dump()
    responses_before = [r.model_dump() for r in responses]

    first = aggregate_form(form, responses)
    second = aggregate_form(form, responses)

    assert first == second
    assert form.model_dump() == form_before
    assert [r.model_dump() for r in responses] == responses_before


def test_analytics_serialise_with_camel_case_keys():
    body = aggregate_form(_form(YES_NO), _responses("q2", ["No"])).model_dump(mode="json", by_alias=True)
    assert body["formId"] == "f1"
    assert body["totalResponses"] == 1
    assert body["questions"]["q2"]["questionId"] == "q2"
    assert body["questions"]["q2"]["type"] == "YES_NO"


# ---------------------------------------------------------------------------
# Digest for summaries
# ---------------------------------------------------------------------------

def test_digest_has_one_slot_per_response():
    digest = build_feedback_digest(_form(RATING, TEXT), _responses("q1", [4, None, 2]))
    assert digest == [
        {"question": "How was it?", "type": "RATING", "answers": [4, None, 2]},
        {"question": "Comments", "type": "TEXT", "answers": [None, None, None]},
    ]

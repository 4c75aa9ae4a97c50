"""Per-question statistics over a form's responses.

Everything here is a pure function of (form, responses): inputs are never
mutated and nothing is persisted. A response that did not answer a question
is left out of that question's aggregate rather than counted as a default.
Answers whose question no longer exists in the form are ignored.
"""

from __future__ import annotations

import math
from typing import Any, Dict, List, Optional, Sequence

from feedback_forms.models.analytics import (
    ChoiceAggregate,
    FormAnalytics,
    OptionCount,
    QuestionAggregate,
    RatingAggregate,
    TextAggregate,
    YesNoAggregate,
)
from feedback_forms.models.form import Form, Question
from feedback_forms.models.form_response import AnswerValue, FormResponse
from feedback_forms.models.question_type import RATING_SCALE, YES_NO_VALUES, QuestionType


def percent(part: int, whole: int) -> int:
    """Whole-number percentage rounded half-up; 0 when ``whole`` is 0."""
    if whole <= 0:
        return 0
    return int(math.floor(part * 100 / whole + 0.5))


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _column(question: Question, answer_maps: Sequence[Dict[str, AnswerValue]]) -> List[AnswerValue]:
    """Answers to ``question`` in response order, gaps removed."""
    return [m[question.id] for m in answer_maps if question.id in m]


def _aggregate_text(question: Question, values: List[AnswerValue]) -> TextAggregate:
    kept = [v for v in values if v is not None and v != ""]
    return TextAggregate(question_id=question.id, label=question.label, answered=len(kept), answers=kept)


def _aggregate_rating(question: Question, values: List[AnswerValue]) -> RatingAggregate:
    # Booleans, strings and off-scale numbers fall in no bucket and are not answers
    on_scale = [v for v in values if _is_number(v) and v in RATING_SCALE]
    counts = {bucket: sum(1 for v in on_scale if v == bucket) for bucket in RATING_SCALE}
    return RatingAggregate(question_id=question.id, label=question.label, answered=len(on_scale), counts=counts)


def _aggregate_choice(question: Question, values: List[AnswerValue]) -> ChoiceAggregate:
    counts = [
        OptionCount(option=option, count=sum(1 for v in values if isinstance(v, str) and v == option))
        for option in question.options or []
    ]
    return ChoiceAggregate(question_id=question.id, label=question.label, answered=len(values), counts=counts)


def _aggregate_yes_no(question: Question, values: List[AnswerValue], total_responses: int) -> YesNoAggregate:
    counts = {label: sum(1 for v in values if isinstance(v, str) and v == label) for label in YES_NO_VALUES}
    # Percentages are of all responses, not only of those that answered
    percentages = {label: percent(count, total_responses) for label, count in counts.items()}
    return YesNoAggregate(
        question_id=question.id,
        label=question.label,
        answered=len(values),
        counts=counts,
        percentages=percentages,
    )


def aggregate_question(
    question: Question,
    answer_maps: Sequence[Dict[str, AnswerValue]],
) -> Optional[QuestionAggregate]:
    values = _column(question, answer_maps)
    if question.type == QuestionType.TEXT:
        return _aggregate_text(question, values)
    if question.type == QuestionType.RATING:
        return _aggregate_rating(question, values)
    if question.type == QuestionType.MULTIPLE_CHOICE:
        return _aggregate_choice(question, values)
    if question.type == QuestionType.YES_NO:
        return _aggregate_yes_no(question, values, len(answer_maps))
    return None


def aggregate_form(form: Form, responses: Sequence[FormResponse]) -> FormAnalytics:
    """Compute the analytics for ``form`` keyed by question id in form order."""
    answer_maps = [r.answer_map() for r in responses]
    questions: Dict[str, QuestionAggregate] = {}
    for question in form.questions:
        aggregate = aggregate_question(question, answer_maps)
        if aggregate is not None:
            questions[question.id] = aggregate
    attributed = sum(1 for r in responses if r.is_attributed)
    return FormAnalytics(
        form_id=form.id,
        total_responses=len(responses),
        attributed_percentage=percent(attributed, len(responses)),
        questions=questions,
    )


def build_feedback_digest(form: Form, responses: Sequence[FormResponse]) -> List[Dict[str, Any]]:
    """Raw per-question answers for the AI summary.

    One entry per question in form order; ``answers`` has one slot per
    response, ``None`` where the response skipped the question.
    """
    answer_maps = [r.answer_map() for r in responses]
    return [
        {
            "question": question.label,
            "type": question.type,
            "answers": [m.get(question.id) for m in answer_maps],
        }
        for question in form.questions
    ]


__all__ = ["percent", "aggregate_question", "aggregate_form", "build_feedback_digest"]

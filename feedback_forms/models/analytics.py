"""Response bodies for form analytics.

Each question aggregate carries its question type as a discriminator so
clients can pick a chart without re-reading the form.
"""

from __future__ import annotations

from typing import Dict, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from feedback_forms.models.form_response import AnswerValue


class _AggregateBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    question_id: str = Field(alias="questionId")
    label: str
    # Responses that answered this question
    answered: int


class TextAggregate(_AggregateBase):
    type: Literal["TEXT"] = "TEXT"
    answers: List[AnswerValue]


class RatingAggregate(_AggregateBase):
    type: Literal["RATING"] = "RATING"
    counts: Dict[int, int]


class OptionCount(BaseModel):
    option: str
    count: int


class ChoiceAggregate(_AggregateBase):
    type: Literal["MULTIPLE_CHOICE"] = "MULTIPLE_CHOICE"
    # One entry per entry of the question's options, in the same order
    counts: List[OptionCount]


class YesNoAggregate(_AggregateBase):
    type: Literal["YES_NO"] = "YES_NO"
    counts: Dict[str, int]
    percentages: Dict[str, int]


QuestionAggregate = Union[TextAggregate, RatingAggregate, ChoiceAggregate, YesNoAggregate]


class FormAnalytics(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    form_id: str = Field(alias="formId")
    total_responses: int = Field(alias="totalResponses")
    attributed_percentage: int = Field(alias="attributedPercentage")
    # Keyed by question id, in form order
    questions: Dict[str, QuestionAggregate] = Field(default_factory=dict)


__all__ = [
    "TextAggregate",
    "RatingAggregate",
    "OptionCount",
    "ChoiceAggregate",
    "YesNoAggregate",
    "QuestionAggregate",
    "FormAnalytics",
]

"""Pydantic models for request payloads.

Kept apart from the route modules so the route files only wire HTTP to logic.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from feedback_forms.models.form_response import AnswerValue
from feedback_forms.models.question_type import QuestionTypeName


class QuestionPayload(BaseModel):
    """A question as sent by the editor; new questions may omit ``id``."""

    id: Optional[str] = None
    type: QuestionTypeName
    label: str = ""
    required: bool = False
    options: Optional[List[str]] = None


class FormPayload(BaseModel):
    """Body for creating or saving a form. Server owns id and createdAt."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = ""
    description: str = ""
    questions: List[QuestionPayload] = Field(default_factory=list)
    author_id: Optional[str] = Field(default=None, alias="authorId")
    is_published: bool = Field(default=False, alias="isPublished")


class NewQuestionPayload(BaseModel):
    type: QuestionTypeName


class SubmissionPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # question_id -> value; null or "" means unanswered
    answers: Dict[str, Optional[AnswerValue]] = Field(default_factory=dict)
    respondent_name: Optional[str] = Field(default=None, alias="respondentName")
    anonymous: bool = True


class GenerationPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    topic: str = Field(min_length=1)
    author_id: Optional[str] = Field(default=None, alias="authorId")


__all__ = [
    "QuestionPayload",
    "FormPayload",
    "NewQuestionPayload",
    "SubmissionPayload",
    "GenerationPayload",
]

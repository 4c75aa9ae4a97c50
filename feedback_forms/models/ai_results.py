"""Pydantic models for results returned by the AI gateway."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from feedback_forms.models.question_type import QuestionTypeName


class GeneratedQuestion(BaseModel):
    label: str
    type: QuestionTypeName
    required: bool
    options: Optional[List[str]] = None


class GeneratedForm(BaseModel):
    """Form skeleton proposed by the AI. Questions carry no ids yet."""

    title: str
    description: str
    questions: List[GeneratedQuestion]


class FeedbackSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    summary: str
    strengths: List[str]
    weaknesses: List[str]
    # Requested as 0-100; the range is not enforced
    sentiment_score: float = Field(alias="sentimentScore")


__all__ = ["GeneratedQuestion", "GeneratedForm", "FeedbackSummary"]

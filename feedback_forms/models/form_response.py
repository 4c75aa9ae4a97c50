"""Pydantic models for respondent submissions."""

from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# bool first so JSON true/false never degrade to 1/0
AnswerValue = Union[bool, int, float, str]

# Stored in place of a name when the respondent chose not to be attributed
ANONYMOUS_RESPONDENT = "Anonymous"


class Answer(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    question_id: str = Field(alias="questionId")
    value: AnswerValue


class FormResponse(BaseModel):
    """One respondent's submission. Append-only once stored."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    form_id: str = Field(alias="formId")
    answers: List[Answer] = Field(default_factory=list)
    submitted_at: int = Field(alias="submittedAt")
    respondent_name: Optional[str] = Field(default=None, alias="respondentName")

    @property
    def is_attributed(self) -> bool:
        name = (self.respondent_name or "").strip()
        return bool(name) and name != ANONYMOUS_RESPONDENT

    def answer_map(self) -> dict[str, AnswerValue]:
        """Return question_id -> value; the first answer wins on duplicates."""
        values: dict[str, AnswerValue] = {}
        for answer in self.answers:
            values.setdefault(answer.question_id, answer.value)
        return values

    def to_record(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


__all__ = ["AnswerValue", "ANONYMOUS_RESPONDENT", "Answer", "FormResponse"]

"""Pydantic models for forms and their questions.

Field names are snake_case in Python and camelCase on the wire and in
storage. Serialise with ``by_alias=True`` and ``exclude_none=True`` so absent
optional fields (``authorId``, ``options``) are omitted, matching stored
records written by earlier versions.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from feedback_forms.models.question_type import QuestionTypeName


class Question(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    type: QuestionTypeName
    label: str = ""
    required: bool = False
    # Only meaningful for MULTIPLE_CHOICE; may be empty
    options: Optional[List[str]] = None


class Form(BaseModel):
    """An evaluation template: ordered questions plus author metadata.

    ``created_at`` is epoch milliseconds and is never changed by an edit.
    ``is_published`` is informational only; unpublished forms stay reachable
    by direct link.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str = ""
    description: str = ""
    questions: List[Question] = Field(default_factory=list)
    created_at: int = Field(alias="createdAt")
    author_id: Optional[str] = Field(default=None, alias="authorId")
    is_published: bool = Field(default=False, alias="isPublished")

    def question_by_id(self, question_id: str) -> Optional[Question]:
        for question in self.questions:
            if question.id == question_id:
                return question
        return None

    def to_record(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


__all__ = ["Question", "Form"]

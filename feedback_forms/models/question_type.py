"""QuestionType constants for the closed set of form question types.

Kept as a plain constants container so architectural tests and the AI
schemas can import it without pulling in pydantic.
"""

from __future__ import annotations

from typing import Literal


class QuestionType:
    TEXT = "TEXT"
    RATING = "RATING"
    MULTIPLE_CHOICE = "MULTIPLE_CHOICE"
    YES_NO = "YES_NO"


# Order matters: it is the order offered to the AI and used in listings
ALL_QUESTION_TYPES: tuple[str, ...] = (
    QuestionType.TEXT,
    QuestionType.RATING,
    QuestionType.MULTIPLE_CHOICE,
    QuestionType.YES_NO,
)

QuestionTypeName = Literal["TEXT", "RATING", "MULTIPLE_CHOICE", "YES_NO"]

RATING_SCALE: tuple[int, ...] = (1, 2, 3, 4, 5)
YES_NO_VALUES: tuple[str, str] = ("Yes", "No")


__all__ = [
    "QuestionType",
    "QuestionTypeName",
    "ALL_QUESTION_TYPES",
    "RATING_SCALE",
    "YES_NO_VALUES",
]

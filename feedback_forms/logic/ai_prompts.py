"""Prompt text for the AI gateway."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Sequence

from feedback_forms.models.question_type import ALL_QUESTION_TYPES

SYSTEM_PROMPT = (
    "You design and analyse feedback forms for events and courses. "
    "Reply with a single JSON object matching the requested schema."
)

GENERATED_QUESTION_COUNT = 5


def form_structure_messages(topic: str) -> List[Dict[str, str]]:
    user = (
        f"Generate a feedback form structure for: {topic}. "
        f"Include a title, a description, and exactly {GENERATED_QUESTION_COUNT} relevant questions "
        f"with types ({', '.join(ALL_QUESTION_TYPES)}). "
        "Mark each question as required or not, and give options for MULTIPLE_CHOICE questions "
        "(use null for the other types)."
    )
    return [{"role": "system", "content": SYSTEM_PROMPT}, {"role": "user", "content": user}]


def feedback_summary_messages(form_title: str, per_question_data: Sequence[Dict[str, Any]]) -> List[Dict[str, str]]:
    data = json.dumps(list(per_question_data), ensure_ascii=False, default=str)
    user = (
        f'Summarize the following feedback for the event "{form_title}". '
        "Identify key strengths, weaknesses, and a sentiment score (0-100).\n\n"
        f"Data:\n{data}\n"
    )
    return [{"role": "system", "content": SYSTEM_PROMPT}, {"role": "user", "content": user}]


__all__ = [
    "SYSTEM_PROMPT",
    "GENERATED_QUESTION_COUNT",
    "form_structure_messages",
    "feedback_summary_messages",
]

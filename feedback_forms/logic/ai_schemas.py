"""JSON Schemas for the AI gateway.

``*_RESPONSE_FORMAT`` are sent with the request to constrain generation.
``*_VALIDATION_SCHEMA`` are checked locally with ``jsonschema`` against what
actually came back; the service is not trusted to honour the constraint.
"""

from __future__ import annotations

from typing import Any, Dict

from feedback_forms.models.question_type import ALL_QUESTION_TYPES

_QUESTION_TYPES = list(ALL_QUESTION_TYPES)

FORM_STRUCTURE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "title": {"type": "string"},
        "description": {"type": "string"},
        "questions": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "label": {"type": "string"},
                    "type": {"type": "string", "enum": _QUESTION_TYPES},
                    "required": {"type": "boolean"},
                    "options": {"type": ["array", "null"], "items": {"type": "string"}},
                },
                "required": ["label", "type", "required", "options"],
                "additionalProperties": False,
            },
        },
    },
    "required": ["title", "description", "questions"],
    "additionalProperties": False,
}

FEEDBACK_SUMMARY_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "summary": {"type": "string"},
        "strengths": {"type": "array", "items": {"type": "string"}},
        "weaknesses": {"type": "array", "items": {"type": "string"}},
        "sentimentScore": {"type": "number"},
    },
    "required": ["summary", "strengths", "weaknesses", "sentimentScore"],
    "additionalProperties": False,
}


def _response_format(name: str, schema: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "type": "json_schema",
        "json_schema": {"name": name, "schema": schema, "strict": True},
    }


FORM_STRUCTURE_RESPONSE_FORMAT = _response_format("form_structure", FORM_STRUCTURE_SCHEMA)
FEEDBACK_SUMMARY_RESPONSE_FORMAT = _response_format("feedback_summary", FEEDBACK_SUMMARY_SCHEMA)

# Local checks are looser than the request: options may be omitted and
# extra keys are tolerated, but types and the question-type enum are strict.
FORM_STRUCTURE_VALIDATION_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "title": {"type": "string"},
        "description": {"type": "string"},
        "questions": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "label": {"type": "string"},
                    "type": {"type": "string", "enum": _QUESTION_TYPES},
                    "required": {"type": "boolean"},
                    "options": {"type": ["array", "null"], "items": {"type": "string"}},
                },
                "required": ["label", "type", "required"],
            },
        },
    },
    "required": ["title", "description", "questions"],
}

FEEDBACK_SUMMARY_VALIDATION_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": FEEDBACK_SUMMARY_SCHEMA["properties"],
    "required": FEEDBACK_SUMMARY_SCHEMA["required"],
}


__all__ = [
    "FORM_STRUCTURE_SCHEMA",
    "FEEDBACK_SUMMARY_SCHEMA",
    "FORM_STRUCTURE_RESPONSE_FORMAT",
    "FEEDBACK_SUMMARY_RESPONSE_FORMAT",
    "FORM_STRUCTURE_VALIDATION_SCHEMA",
    "FEEDBACK_SUMMARY_VALIDATION_SCHEMA",
]

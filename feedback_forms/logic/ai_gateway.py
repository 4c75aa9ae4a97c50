"""Gateway to the generative-AI service.

Two operations, each a single chat-completions call in JSON-schema mode:
``generate_form_structure`` proposes a form for a topic and
``summarize_feedback`` writes a narrative over collected answers.

There is no retry, caching or fallback. Every failure surfaces as an
``AiGatewayError`` subclass:

- ``AiServiceError``: the HTTP call failed (network, auth, timeout, 5xx)
- ``EmptyAiResponseError``: the service answered without any text
- ``MalformedAiResponseError``: the text is not JSON or not the expected shape
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Sequence

import jsonschema
from openai import OpenAI, OpenAIError
from pydantic import ValidationError as PydanticValidationError

from feedback_forms.config import AiConfig
from feedback_forms.logic.ai_prompts import feedback_summary_messages, form_structure_messages
from feedback_forms.logic.ai_schemas import (
    FEEDBACK_SUMMARY_RESPONSE_FORMAT,
    FEEDBACK_SUMMARY_VALIDATION_SCHEMA,
    FORM_STRUCTURE_RESPONSE_FORMAT,
    FORM_STRUCTURE_VALIDATION_SCHEMA,
)
from feedback_forms.logic.errors import (
    AiServiceError,
    EmptyAiResponseError,
    MalformedAiResponseError,
)
from feedback_forms.models.ai_results import FeedbackSummary, GeneratedForm, GeneratedQuestion
from feedback_forms.models.question_type import QuestionType

logger = logging.getLogger(__name__)


class AiGateway:
    def __init__(
        self,
        client: Any,
        *,
        model: str,
        timeout_seconds: float = 30.0,
        temperature: Optional[float] = None,
    ) -> None:
        self.client = client
        self.model = model
        self.timeout_seconds = timeout_seconds
        self.temperature = temperature

    def _complete_json(
        self,
        operation: str,
        messages: List[Dict[str, str]],
        response_format: Dict[str, Any],
        validation_schema: Dict[str, Any],
    ) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "response_format": response_format,
            "timeout": self.timeout_seconds,
        }
        if self.temperature is not None:
            kwargs["temperature"] = self.temperature
        try:
            response = self.client.chat.completions.create(**kwargs)
        except OpenAIError as exc:
            logger.error("ai_gateway.call_failed operation=%s model=%s", operation, self.model, exc_info=True)
            raise AiServiceError(f"{operation}: {exc}") from exc

        text = ""
        choices = getattr(response, "choices", None) or []
        if choices:
            text = getattr(choices[0].message, "content", None) or ""
        if not text.strip():
            logger.error("ai_gateway.empty_response operation=%s", operation)
            raise EmptyAiResponseError(f"{operation}: empty response from AI")

        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            logger.error("ai_gateway.invalid_json operation=%s preview=%r", operation, text[:200])
            raise MalformedAiResponseError(f"{operation}: response is not JSON") from exc
        try:
            jsonschema.validate(payload, validation_schema)
        except jsonschema.ValidationError as exc:
            logger.error("ai_gateway.schema_mismatch operation=%s error=%s", operation, exc.message)
            raise MalformedAiResponseError(f"{operation}: {exc.message}") from exc
        logger.info("ai_gateway.call_ok operation=%s model=%s", operation, self.model)
        return payload

    def generate_form_structure(self, topic: str) -> GeneratedForm:
        payload = self._complete_json(
            "generate_form_structure",
            form_structure_messages(topic),
            FORM_STRUCTURE_RESPONSE_FORMAT,
            FORM_STRUCTURE_VALIDATION_SCHEMA,
        )
        try:
            generated = GeneratedForm.model_validate(payload)
        except PydanticValidationError as exc:
            raise MalformedAiResponseError(f"generate_form_structure: {exc}") from exc
        return generated.model_copy(update={"questions": [_tidy_options(q) for q in generated.questions]})

    def summarize_feedback(
        self,
        form_title: str,
        per_question_data: Sequence[Dict[str, Any]],
    ) -> FeedbackSummary:
        payload = self._complete_json(
            "summarize_feedback",
            feedback_summary_messages(form_title, per_question_data),
            FEEDBACK_SUMMARY_RESPONSE_FORMAT,
            FEEDBACK_SUMMARY_VALIDATION_SCHEMA,
        )
        try:
            return FeedbackSummary.model_validate(payload)
        except PydanticValidationError as exc:
            raise MalformedAiResponseError(f"summarize_feedback: {exc}") from exc


def _tidy_options(question: GeneratedQuestion) -> GeneratedQuestion:
    # Choice questions always carry a list; other types never do
    if question.type == QuestionType.MULTIPLE_CHOICE:
        return question.model_copy(update={"options": list(question.options or [])})
    return question.model_copy(update={"options": None})


def build_ai_gateway(config: AiConfig) -> AiGateway:
    """Build a gateway over the OpenAI client; retries are disabled."""
    try:
        client = OpenAI(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout=config.timeout_seconds,
            max_retries=0,
        )
    except OpenAIError as exc:
        # Raised when no API key is configured anywhere
        logger.error("ai_gateway.client_unavailable: %s", exc)
        raise AiServiceError(f"AI client unavailable: {exc}") from exc
    return AiGateway(
        client,
        model=config.model,
        timeout_seconds=config.timeout_seconds,
        temperature=config.temperature,
    )


__all__ = ["AiGateway", "build_ai_gateway"]

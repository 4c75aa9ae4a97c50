"""Domain exceptions raised by the logic layer.

The HTTP layer maps each of these to a problem+json response; nothing in
`logic/` knows about status codes.
"""

from __future__ import annotations

from typing import Iterable, List


class StoredDataCorruptError(RuntimeError):
    """A stored collection could not be decoded into domain records."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"stored collection {key!r} is corrupt: {reason}")
        self.key = key
        self.reason = reason


class SubmissionValidationError(ValueError):
    def __init__(
        self,
        missing: Iterable[str] = (),
        unknown: Iterable[str] = (),
    ) -> None:
        self.missing: List[str] = list(missing)
        self.unknown: List[str] = list(unknown)
        parts = []
        if self.missing:
            parts.append(f"required questions unanswered: {self.missing}")
        if self.unknown:
            parts.append(f"answers for unknown questions: {self.unknown}")
        super().__init__("; ".join(parts) or "invalid submission")


class RequestInFlightError(RuntimeError):
    def __init__(self, key: str) -> None:
        super().__init__(f"request already in progress: {key}")
        self.key = key


class AiGatewayError(RuntimeError):
    """Base class for failures talking to the generative-AI service."""

    code = "AI_GATEWAY_FAILED"


class AiServiceError(AiGatewayError):
    code = "AI_SERVICE_FAILED"


class EmptyAiResponseError(AiGatewayError):
    code = "AI_EMPTY_RESPONSE"


class MalformedAiResponseError(AiGatewayError):
    code = "AI_MALFORMED_RESPONSE"


__all__ = [
    "StoredDataCorruptError",
    "SubmissionValidationError",
    "RequestInFlightError",
    "AiGatewayError",
    "AiServiceError",
    "EmptyAiResponseError",
    "MalformedAiResponseError",
]

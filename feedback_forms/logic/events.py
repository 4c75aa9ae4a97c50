"""Domain event constants and publisher.

Events are logged for observability and buffered in-process so tests can
assert on what the store did.
"""

from __future__ import annotations

from typing import Any, Dict, List
import logging

logger = logging.getLogger(__name__)

FORM_SAVED = "form.saved"
FORM_DELETED = "form.deleted"
RESPONSE_SUBMITTED = "response.submitted"

# Bounded so a long-running process does not grow without limit
_BUFFER_LIMIT = 1000
EVENT_BUFFER: List[Dict[str, Any]] = []


def publish(event_type: str, payload: Dict[str, Any]) -> None:
    logger.info("event_publish type=%s payload=%s", event_type, payload)
    EVENT_BUFFER.append({"type": event_type, "payload": payload})
    if len(EVENT_BUFFER) > _BUFFER_LIMIT:
        del EVENT_BUFFER[: len(EVENT_BUFFER) - _BUFFER_LIMIT]


def get_buffered_events(clear: bool = True) -> List[Dict[str, Any]]:
    """Return buffered domain events; optionally clear the buffer."""
    events = list(EVENT_BUFFER)
    if clear:
        EVENT_BUFFER.clear()
    return events


__all__ = [
    "FORM_SAVED",
    "FORM_DELETED",
    "RESPONSE_SUBMITTED",
    "publish",
    "get_buffered_events",
    "EVENT_BUFFER",
]

"""Guard against duplicate concurrent AI requests.

The AI calls are slow and billed, so a second identical request while the
first is still running is refused rather than queued.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator, Set

from feedback_forms.logic.errors import RequestInFlightError


class InFlightGuard:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._held: Set[str] = set()

    def is_held(self, key: str) -> bool:
        with self._lock:
            return key in self._held

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        with self._lock:
            if key in self._held:
                raise RequestInFlightError(key)
            self._held.add(key)
        try:
            yield
        finally:
            with self._lock:
                self._held.discard(key)


def topic_key(topic: str) -> str:
    return "generate:" + " ".join(topic.lower().split())


def summary_key(form_id: str) -> str:
    return f"summarize:{form_id}"


__all__ = ["InFlightGuard", "topic_key", "summary_key"]

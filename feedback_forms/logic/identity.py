"""Id and timestamp sources.

Every record the service creates takes its id and timestamp from an
``Identity`` instance so tests can inject deterministic values.
"""

from __future__ import annotations

import itertools
import time
import uuid
from typing import Callable, Iterator


IdFactory = Callable[[], str]
Clock = Callable[[], int]


def uuid_id() -> str:
    return str(uuid.uuid4())


def epoch_millis() -> int:
    return int(time.time() * 1000)


class Identity:
    def __init__(self, id_factory: IdFactory = uuid_id, clock: Clock = epoch_millis) -> None:
        self._id_factory = id_factory
        self._clock = clock

    def new_id(self) -> str:
        return self._id_factory()

    def now(self) -> int:
        return self._clock()


def sequential_ids(prefix: str = "id") -> IdFactory:
    """Return a factory yielding ``prefix-1``, ``prefix-2``, ..."""
    counter: Iterator[int] = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


def fixed_clock(start: int, step: int = 0) -> Clock:
    counter: Iterator[int] = itertools.count(start, step) if step else itertools.repeat(start)
    return lambda: next(counter)


__all__ = [
    "IdFactory",
    "Clock",
    "Identity",
    "uuid_id",
    "epoch_millis",
    "sequential_ids",
    "fixed_clock",
]

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Hashable


@dataclass(frozen=True)
class RequestTicket:
    key: Hashable
    generation: int


class RequestTracker:
    """Generation counter per scope key.

    Each `begin()` supersedes every earlier ticket for the same key; a response
    may update visible state only while its ticket `is_current()`.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._generations: dict[Hashable, int] = {}

    def begin(self, key: Hashable) -> RequestTicket:
        with self._lock:
            generation = self._generations.get(key, 0) + 1
            self._generations[key] = generation
            return RequestTicket(key=key, generation=generation)

    def is_current(self, ticket: RequestTicket) -> bool:
        with self._lock:
            return self._generations.get(ticket.key) == ticket.generation

    def cancel(self, key: Hashable) -> None:
        """Invalidate any in-flight ticket for `key` without starting a new request."""

        with self._lock:
            self._generations[key] = self._generations.get(key, 0) + 1

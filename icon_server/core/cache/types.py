from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeAlias

# Returns seconds; only differences between readings are meaningful.
Clock: TypeAlias = Callable[[], float]

CacheKey: TypeAlias = str


@dataclass(frozen=True, slots=True)
class CacheEntry:
    content: bytes
    stored_at: float

    def age(self, now: float) -> float:
        return now - self.stored_at

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")

Clock = Callable[[], float]


@dataclass(slots=True)
class _Entry(Generic[T]):
    value: T
    stored_at: float


@dataclass(slots=True)
class TTLCache(Generic[T]):
    """
    In-process cache whose entries expire ttl_seconds after they were stored.

    The clock is injected so expiry can be driven by tests; it must be
    monotonic. Overwrites are last-writer-wins.
    """
    ttl_seconds: float = 300.0
    clock: Clock = time.monotonic
    _entries: dict[str, _Entry[T]] = field(default_factory=dict)

    def get(self, key: str) -> Optional[T]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self.clock() - entry.stored_at >= self.ttl_seconds:
            del self._entries[key]
            return None
        return entry.value

    def set(self, key: str, value: T) -> None:
        self._entries[key] = _Entry(value=value, stored_at=self.clock())

    def invalidate(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: Any) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        now = self.clock()
        expired = [k for k, e in self._entries.items() if now - e.stored_at >= self.ttl_seconds]
        for key in expired:
            del self._entries[key]
        return len(self._entries)

import hashlib
import time
from dataclasses import dataclass
from typing import Callable


DEFAULT_TTL_SECONDS = 5 * 60


@dataclass
class _Entry:
    value: str
    stored_at: float


class ResponseCache:
    """TTL cache of model responses, keyed by provider and prompt.

    Instances are passed explicitly to the engine; nothing is shared
    between engines unless the caller hands them the same cache.
    """

    def __init__(self, ttl_seconds: float = DEFAULT_TTL_SECONDS, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, _Entry] = {}

    @staticmethod
    def make_key(provider: str, prompt: str) -> str:
        digest = hashlib.sha256(prompt.encode("utf-8")).hexdigest()
        return f"{provider}:{digest}"

    def _is_expired(self, entry: _Entry) -> bool:
        return self._clock() - entry.stored_at > self.ttl_seconds

    def _evict_expired(self) -> None:
        expired = [key for key, entry in self._entries.items() if self._is_expired(entry)]
        for key in expired:
            del self._entries[key]

    def get(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._is_expired(entry):
            del self._entries[key]
            return None
        return entry.value

    def set(self, key: str, value: str) -> None:
        self._evict_expired()
        self._entries[key] = _Entry(value=value, stored_at=self._clock())

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        """Number of live entries; expired ones are dropped first."""
        self._evict_expired()
        return len(self._entries)

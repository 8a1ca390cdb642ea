import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Protocol

from fastapi.responses import Response


@dataclass(frozen=True)
class CachedResponse:
    body: bytes
    status_code: int
    media_type: Optional[str]
    headers: Dict[str, str] = field(default_factory=dict)
    stored_at: float = 0.0

    @classmethod
    def from_response(cls, response: Response, stored_at: float) -> "CachedResponse":
        # content-length is recomputed from the body on replay
        headers = {k: v for k, v in response.headers.items() if k.lower() not in ("content-length", "content-type")}
        return cls(
            body=bytes(response.body),
            status_code=response.status_code,
            media_type=response.media_type,
            headers=headers,
            stored_at=stored_at,
        )

    def to_response(self) -> Response:
        return Response(
            content=self.body,
            status_code=self.status_code,
            media_type=self.media_type,
            headers=dict(self.headers),
        )


class ResponseCache(Protocol):
    def get(self, key: str) -> Optional[Response]: ...

    def put(self, key: str, response: Response) -> None: ...


class InMemoryResponseCache:
    """Process-local response cache keyed by request URL.

    Entries expire ``max_age`` seconds after they were stored and are never
    invalidated otherwise. Once ``limit`` entries are held the least recently
    used one is evicted.
    """

    def __init__(self, max_age: int = 86400, limit: int = 64, clock: Callable[[], float] = time.monotonic):
        self.max_age = max_age
        self.limit = limit
        self._clock = clock
        self._entries: Dict[str, CachedResponse] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> Optional[Response]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.stored_at >= self.max_age:
            self._entries.pop(key, None)
            return None
        # touch to make most-recent
        self._entries.pop(key, None)
        self._entries[key] = entry
        return entry.to_response()

    def put(self, key: str, response: Response) -> None:
        self._entries.pop(key, None)
        self._entries[key] = CachedResponse.from_response(response, stored_at=self._clock())
        # Evict oldest
        while len(self._entries) > self.limit:
            first = next(iter(self._entries))
            self._entries.pop(first, None)

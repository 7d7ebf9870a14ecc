"""Process-local, time-bounded memo of fetched job lists."""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Iterator

from jobtracker.log import get_logger
from jobtracker.models import Job

log = get_logger(__name__)

DEFAULT_TTL_SECONDS = 6 * 60 * 60


def fingerprint(role: str | None, location: str | None) -> str:
    """Cache key for a query; case-sensitive, as supplied."""
    return f"jobs_{role or 'default'}_{location or 'all'}"


@dataclass(frozen=True)
class CacheEntry:
    jobs: tuple[Job, ...]
    timestamp: float


class JobCache:
    """get/put by fingerprint; entries at or past the TTL are never served.

    Stale entries stay in memory until the next put for the same key.
    Concurrent puts to one key are last-write-wins.
    """

    def __init__(self, ttl_seconds: float = DEFAULT_TTL_SECONDS, clock: Callable[[], float] = time.time) -> None:
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> list[Job] | None:
        entry = self._entries.get(key)
        if entry is None:
            log.debug("Cache miss: %s", key)
            return None
        age = self.clock() - entry.timestamp
        if age >= self.ttl_seconds:
            log.debug("Cache stale: %s (%.0fs old)", key, age)
            return None
        log.debug("Cache hit: %s", key)
        return list(entry.jobs)

    def put(self, key: str, jobs: list[Job]) -> None:
        self._entries[key] = CacheEntry(jobs=tuple(jobs), timestamp=self.clock())

    def snapshots(self) -> Iterator[list[Job]]:
        """Fresh entries only."""
        now = self.clock()
        for entry in list(self._entries.values()):
            if now - entry.timestamp < self.ttl_seconds:
                yield list(entry.jobs)

    def __len__(self) -> int:
        return len(self._entries)

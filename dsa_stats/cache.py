"""
In-process cache: one slot per platform, overwritten on every successful fetch.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from .models import PlatformStats


@dataclass(frozen=True)
class CacheEntry:
    record: PlatformStats
    fetchedAtEpochMillis: int


class ServerCache:
    def __init__(self, ttl_ms: int) -> None:
        self.ttl_ms = int(ttl_ms)
        self._slots: Dict[str, CacheEntry] = {}

    def get(self, platform: str) -> Optional[CacheEntry]:
        return self._slots.get(platform)

    def put(self, platform: str, record: PlatformStats, now_ms: int) -> CacheEntry:
        entry = CacheEntry(record=record, fetchedAtEpochMillis=int(now_ms))
        self._slots[platform] = entry
        return entry

    def is_fresh(self, entry: Optional[CacheEntry], now_ms: int) -> bool:
        if entry is None:
            return False
        return (now_ms - entry.fetchedAtEpochMillis) < self.ttl_ms

    def get_fresh(self, platform: str, now_ms: int) -> Optional[PlatformStats]:
        entry = self.get(platform)
        return entry.record if self.is_fresh(entry, now_ms) else None

    def age_ms(self, platform: str, now_ms: int) -> Optional[int]:
        entry = self.get(platform)
        return None if entry is None else int(now_ms - entry.fetchedAtEpochMillis)

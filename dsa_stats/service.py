"""
Per-platform orchestration: cache, upstream refresh, and downgrade on failure.

Request flow:
  1) fresh ServerCache entry -> returned verbatim
  2) otherwise one upstream call:
     - success -> cached and returned
     - failure with any cached entry -> that entry, marked stale
     - failure with an empty cache -> the platform's fixed snapshot plus `error`

With ``degrade_failures`` (the default) callers always receive a PlatformStats;
the UI contract has no error state, so failures must not surface as statuses.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from .cache import ServerCache
from .http import UpstreamError
from .models import FALLBACK_ERROR, PlatformStats, default_stats, now_ms

logger = logging.getLogger(__name__)

Fetcher = Callable[[Optional[str]], PlatformStats]


class StatsService:
    def __init__(
        self,
        platform: str,
        fetcher: Fetcher,
        cache: ServerCache,
        *,
        username: str,
        clock: Callable[[], int] = now_ms,
        degrade_failures: bool = True,
    ) -> None:
        self.platform = platform
        self.fetcher = fetcher
        self.cache = cache
        self.username = username
        self.clock = clock
        self.degrade_failures = degrade_failures
        # Single-flight: concurrent misses share one upstream call.
        self._lock = threading.Lock()

    def fallback(self, error: str = FALLBACK_ERROR) -> PlatformStats:
        return default_stats(self.platform, error=error)

    def get_stats(self, username: Optional[str] = None) -> PlatformStats:
        if username and username != self.username:
            return self._fetch_uncached(username)

        now = self.clock()
        cached = self.cache.get_fresh(self.platform, now)
        if cached is not None:
            logger.info("Returning cached %s data", self.platform)
            return cached

        with self._lock:
            now = self.clock()
            cached = self.cache.get_fresh(self.platform, now)
            if cached is not None:
                return cached
            return self._refresh()

    def _refresh(self) -> PlatformStats:
        try:
            record = self.fetcher(self.username)
        except UpstreamError as e:
            if not self.degrade_failures:
                raise
            entry = self.cache.get(self.platform)
            if entry is not None:
                logger.warning("%s refresh failed (%s), returning stale cached data", self.platform, e)
                return entry.record.as_stale()
            logger.error("%s refresh failed with empty cache, returning fallback: %s", self.platform, e)
            return self.fallback()

        self.cache.put(self.platform, record, self.clock())
        logger.info("Returning fresh %s data", self.platform)
        return record

    def _fetch_uncached(self, username: str) -> PlatformStats:
        try:
            return self.fetcher(username)
        except UpstreamError as e:
            if not self.degrade_failures:
                raise
            logger.error("%s fetch for %s failed, returning fallback: %s", self.platform, username, e)
            return self.fallback()

"""
Consumer-side access to the stats endpoints with a persisted, longer-lived cache.

A fresh entry (younger than the client TTL) is used without any network call.
Otherwise the endpoint is called and whatever it returns is persisted, whether
it was live, stale or a fallback snapshot.

Usage:
  python -m dsa_stats.client leetcode
  python -m dsa_stats.client gfg --refresh
"""

from __future__ import annotations

import argparse
import json
import logging
import os
from typing import Any, Callable, Dict, List, Optional

import requests

from . import config
from .models import GFG, LEETCODE, PlatformStats, now_ms

logger = logging.getLogger(__name__)

CACHE_KEYS = {
    LEETCODE: "leetcode_stats_cache",
    GFG: "gfg_stats_cache",
}

ENDPOINTS = {
    LEETCODE: "leetcode-stats",
    GFG: "gfg-stats",
}


class StatsClientError(RuntimeError):
    pass


class ClientCache:
    """JSON file holding one ``{"data": ..., "timestamp": ...}`` entry per platform key."""

    def __init__(self, path: str, ttl_ms: int, clock: Callable[[], int] = now_ms) -> None:
        self.path = path
        self.ttl_ms = int(ttl_ms)
        self.clock = clock

    def _load(self) -> Dict[str, Any]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                doc = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable client cache %s: %s", self.path, e)
            return {}
        return doc if isinstance(doc, dict) else {}

    def _save(self, doc: Dict[str, Any]) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp = self.path + ".tmp"
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(doc, f, indent=2)
            os.replace(tmp, self.path)
        finally:
            if os.path.exists(tmp):
                os.remove(tmp)

    def get(self, platform: str) -> Optional[PlatformStats]:
        """Return the cached record if it is still fresh."""
        entry = self._load().get(CACHE_KEYS[platform])
        if not isinstance(entry, dict) or not isinstance(entry.get("data"), dict):
            return None
        try:
            ts = int(entry.get("timestamp"))
        except (TypeError, ValueError):
            return None
        if self.clock() - ts >= self.ttl_ms:
            return None
        return PlatformStats.from_dict(entry["data"])

    def put(self, platform: str, record: PlatformStats) -> None:
        doc = self._load()
        doc[CACHE_KEYS[platform]] = {"data": record.to_dict(), "timestamp": self.clock()}
        self._save(doc)


class StatsClient:
    def __init__(self, base_url: str, cache: ClientCache, *, timeout: Optional[float] = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.cache = cache
        self.timeout = config.REQUEST_TIMEOUT_SECONDS if timeout is None else timeout

    def _call(self, platform: str) -> PlatformStats:
        url = f"{self.base_url}/{ENDPOINTS[platform]}"
        try:
            resp = requests.post(url, json={}, timeout=self.timeout)
        except requests.RequestException as e:
            raise StatsClientError(f"Failed to reach {url}: {e}") from e
        if resp.status_code >= 400:
            raise StatsClientError(f"{url} returned {resp.status_code}")
        try:
            payload = resp.json()
        except ValueError as e:
            raise StatsClientError(f"{url} returned a non-JSON body") from e
        if not isinstance(payload, dict):
            raise StatsClientError(f"{url} returned an unexpected body")
        return PlatformStats.from_dict(payload)

    def get_stats(self, platform: str, *, refresh: bool = False) -> PlatformStats:
        if not refresh:
            cached = self.cache.get(platform)
            if cached is not None:
                return cached
        # TODO: skip persisting records flagged stale/error once the UI can show degraded data.
        record = self._call(platform)
        self.cache.put(platform, record)
        return record


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print solved-problem stats for a platform.")
    parser.add_argument("platform", choices=sorted(CACHE_KEYS))
    parser.add_argument("--base-url", default=config.STATS_API_BASE)
    parser.add_argument("--cache-path", default=config.CLIENT_CACHE_PATH)
    parser.add_argument("--refresh", action="store_true", help="ignore the local cache")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    cache = ClientCache(args.cache_path, config.CLIENT_CACHE_TTL_SECONDS * 1000)
    client = StatsClient(args.base_url, cache)
    try:
        record = client.get_stats(args.platform, refresh=args.refresh)
    except StatsClientError as e:
        print(json.dumps({"error": str(e)}))
        return 1
    print(json.dumps(record.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

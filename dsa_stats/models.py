"""
PlatformStats record and the hardcoded per-platform snapshots.
"""

from __future__ import annotations

import datetime as dt
import time
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

LEETCODE = "leetcode"
GFG = "gfg"

PLATFORM_NAMES = {
    LEETCODE: "LeetCode",
    GFG: "GeeksforGeeks",
}

# (total, easy, medium, hard)
DEFAULT_COUNTS = {
    LEETCODE: (50, 25, 20, 5),
    GFG: (20, 18, 2, 0),
}

FALLBACK_ERROR = "Failed to fetch live data, showing fallback"
SNAPSHOT_NOTE = "Using cached profile data"


def now_iso() -> str:
    return dt.datetime.now(dt.timezone.utc).isoformat()


def now_ms() -> int:
    return int(time.time() * 1000)


def _count(value: Any) -> int:
    try:
        n = int(value or 0)
    except (TypeError, ValueError):
        return 0
    return max(0, n)


@dataclass(frozen=True)
class PlatformStats:
    platform: str
    totalSolved: int
    easy: int
    medium: int
    hard: int
    lastUpdated: str
    stale: Optional[bool] = None
    error: Optional[str] = None
    note: Optional[str] = None
    ranking: Optional[int] = None

    def __post_init__(self) -> None:
        for name in ("totalSolved", "easy", "medium", "hard"):
            object.__setattr__(self, name, _count(getattr(self, name)))
        if not self.lastUpdated:
            object.__setattr__(self, "lastUpdated", now_iso())

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "platform": self.platform,
            "totalSolved": self.totalSolved,
            "easy": self.easy,
            "medium": self.medium,
            "hard": self.hard,
            "lastUpdated": self.lastUpdated,
        }
        for name in ("stale", "error", "note", "ranking"):
            value = getattr(self, name)
            if value is not None:
                out[name] = value
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlatformStats":
        return cls(
            platform=str(data.get("platform") or ""),
            totalSolved=data.get("totalSolved"),
            easy=data.get("easy"),
            medium=data.get("medium"),
            hard=data.get("hard"),
            lastUpdated=str(data.get("lastUpdated") or ""),
            stale=data.get("stale"),
            error=data.get("error"),
            note=data.get("note"),
            ranking=data.get("ranking"),
        )

    def as_stale(self) -> "PlatformStats":
        return replace(self, stale=True)


def default_stats(platform: str, *, error: Optional[str] = None, note: Optional[str] = None) -> PlatformStats:
    """
    The fixed known-good snapshot for a platform, stamped with the current time.
    """
    total, easy, medium, hard = DEFAULT_COUNTS[platform]
    return PlatformStats(
        platform=PLATFORM_NAMES[platform],
        totalSolved=total,
        easy=easy,
        medium=medium,
        hard=hard,
        lastUpdated=now_iso(),
        error=error,
        note=note,
    )

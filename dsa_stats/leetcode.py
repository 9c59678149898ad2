"""
LeetCode client: accepted-submission counts from the public GraphQL API.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from . import config
from .http import UpstreamError, graphql
from .models import LEETCODE, PLATFORM_NAMES, PlatformStats, now_iso

USERNAME_RE = re.compile(r"^[A-Za-z0-9_-]{1,30}$")

REQUEST_HEADERS = {
    "Referer": "https://leetcode.com",
    "Origin": "https://leetcode.com",
}

USER_PROFILE_QUERY = """
query userProfile($username: String!) {
  matchedUser(username: $username) {
    submitStatsGlobal {
      acSubmissionNum {
        difficulty
        count
      }
    }
    profile {
      ranking
    }
  }
}
"""


def difficulty_counts(ac_submission_num: List[Dict[str, Any]]) -> Dict[str, int]:
    """
    Map difficulty label ("All", "Easy", ...) to its accepted count.

    Raises UpstreamError when an entry is not an object.
    """
    out: Dict[str, int] = {}
    for item in ac_submission_num or []:
        if not isinstance(item, dict):
            raise UpstreamError(f"Unexpected acSubmissionNum entry: {item!r}")
        label = item.get("difficulty")
        if not label:
            continue
        try:
            out[str(label)] = int(item.get("count") or 0)
        except (TypeError, ValueError):
            out[str(label)] = 0
    return out


def stats_from_counts(counts: Dict[str, int], ranking: Optional[int] = None) -> PlatformStats:
    easy = counts.get("Easy", 0)
    medium = counts.get("Medium", 0)
    hard = counts.get("Hard", 0)
    total = counts["All"] if "All" in counts else easy + medium + hard
    return PlatformStats(
        platform=PLATFORM_NAMES[LEETCODE],
        totalSolved=total,
        easy=easy,
        medium=medium,
        hard=hard,
        lastUpdated=now_iso(),
        ranking=ranking or None,
    )


def fetch_leetcode_stats(username: Optional[str] = None, *, timeout: Optional[float] = None) -> PlatformStats:
    username = username or config.LEETCODE_USERNAME
    data = graphql(
        config.LEETCODE_GRAPHQL_URL,
        USER_PROFILE_QUERY,
        {"username": username},
        headers=REQUEST_HEADERS,
        timeout=timeout,
    )
    user = data.get("matchedUser")
    if not user:
        raise UpstreamError(f"LeetCode user not found: {username}")
    if not isinstance(user, dict):
        raise UpstreamError("LeetCode matchedUser is not an object")

    stats_block = user.get("submitStatsGlobal") or {}
    submissions = stats_block.get("acSubmissionNum") if isinstance(stats_block, dict) else None
    if not isinstance(submissions, list):
        raise UpstreamError("LeetCode response is missing acSubmissionNum")

    profile = user.get("profile") or {}
    ranking = profile.get("ranking") if isinstance(profile, dict) else None
    try:
        ranking = int(ranking) if ranking is not None else None
    except (TypeError, ValueError):
        ranking = None
    return stats_from_counts(difficulty_counts(submissions), ranking)

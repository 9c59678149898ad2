"""
GeeksforGeeks client.

The profile page has no stable contract, so counts are recovered by a cascade
of independent extractors. Each takes raw HTML and returns a Breakdown with a
non-zero total, or None. The first hit wins; when none hits, the fixed
snapshot for the configured user is returned with a non-live note.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, NamedTuple, Optional, Tuple

from bs4 import BeautifulSoup

from . import config
from .http import fetch_text
from .models import GFG, PLATFORM_NAMES, SNAPSHOT_NOTE, PlatformStats, default_stats, now_iso

logger = logging.getLogger(__name__)


class Breakdown(NamedTuple):
    total: int
    easy: int
    medium: int
    hard: int


COUNT_IN_PARENS_RE = re.compile(r"\((\d+)\)")
PROBLEMS_SOLVED_RE = re.compile(r"Problems?\s*Solved[:\s]*(\d+)", re.IGNORECASE)


def _bucket_re(label: str) -> Tuple[re.Pattern, re.Pattern]:
    return (
        re.compile(label + r"[:\s]*\((\d+)\)", re.IGNORECASE),
        re.compile(label + r"[:\s]*(\d+)", re.IGNORECASE),
    )


BUCKET_RES = {label: _bucket_re(label) for label in ("BASIC", "SCHOOL", "EASY", "MEDIUM", "HARD")}

EMBEDDED_TOTAL_RE = re.compile(r'"totalProblemsSolved":\s*(\d+)')
EMBEDDED_BUCKET_RES = {
    name: re.compile(r'"' + name + r'":\s*\{[^}]*"count":\s*(\d+)')
    for name in ("easy", "medium", "hard")
}


def _breakdown(total: int, easy: int, medium: int, hard: int) -> Optional[Breakdown]:
    if total == 0:
        total = easy + medium + hard
    if total <= 0:
        return None
    return Breakdown(total, easy, medium, hard)


# -----------------------------
# Extractors
# -----------------------------
def extract_problem_navigation(html: str) -> Optional[Breakdown]:
    """
    Count "<difficulty> (N)" anchors inside the problem navigation block.
    """
    soup = BeautifulSoup(html, "html.parser")
    section = soup.select_one('[class*="problemNavigation"]')
    if section is None:
        return None

    easy = medium = hard = 0
    for link in section.find_all("a"):
        text = link.get_text(" ", strip=True)
        m = COUNT_IN_PARENS_RE.search(text)
        if not m:
            continue
        count = int(m.group(1))
        lower = text.lower()
        if "basic" in lower or "school" in lower or "easy" in lower:
            easy += count
        elif "medium" in lower:
            medium += count
        elif "hard" in lower:
            hard += count
    return _breakdown(easy + medium + hard, easy, medium, hard)


def _bucket(html: str, label: str) -> int:
    with_parens, bare = BUCKET_RES[label]
    m = with_parens.search(html) or bare.search(html)
    return int(m.group(1)) if m else 0


def extract_text_patterns(html: str) -> Optional[Breakdown]:
    """
    "Problems Solved: N" for the total, "EASY (N)"-style phrases for buckets.
    """
    m = PROBLEMS_SOLVED_RE.search(html)
    total = int(m.group(1)) if m else 0
    easy = _bucket(html, "BASIC") + _bucket(html, "SCHOOL") + _bucket(html, "EASY")
    return _breakdown(total, easy, _bucket(html, "MEDIUM"), _bucket(html, "HARD"))


def extract_embedded_data(html: str) -> Optional[Breakdown]:
    """
    Inline JSON fragments such as ``"totalProblemsSolved": N``.

    Only an explicit total counts as a hit; buckets alone are not enough.
    """
    m = EMBEDDED_TOTAL_RE.search(html)
    total = int(m.group(1)) if m else 0
    if total <= 0:
        return None
    counts = {}
    for name, rx in EMBEDDED_BUCKET_RES.items():
        bm = rx.search(html)
        counts[name] = int(bm.group(1)) if bm else 0
    return Breakdown(total, counts["easy"], counts["medium"], counts["hard"])


EXTRACTORS: Tuple[Callable[[str], Optional[Breakdown]], ...] = (
    extract_problem_navigation,
    extract_text_patterns,
    extract_embedded_data,
)


def extract_breakdown(html: str) -> Optional[Breakdown]:
    for extractor in EXTRACTORS:
        found = extractor(html)
        if found is not None:
            logger.info("GFG counts found by %s: %s", extractor.__name__, found)
            return found
    return None


def parse_profile(html: str) -> PlatformStats:
    found = extract_breakdown(html)
    if found is None:
        logger.warning("No GFG counts found in %d chars of HTML, using snapshot", len(html))
        return default_stats(GFG, note=SNAPSHOT_NOTE)
    return PlatformStats(
        platform=PLATFORM_NAMES[GFG],
        totalSolved=found.total,
        easy=found.easy,
        medium=found.medium,
        hard=found.hard,
        lastUpdated=now_iso(),
    )


def fetch_gfg_stats(username: Optional[str] = None, *, timeout: Optional[float] = None) -> PlatformStats:
    username = username or config.GFG_USERNAME
    url = config.GFG_PROFILE_URL.format(username=username)
    logger.info("Fetching GFG profile: %s", url)
    return parse_profile(fetch_text(url, timeout=timeout))

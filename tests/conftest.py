"""Test configuration helpers for import path setup and shared fakes."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from dsa_stats.models import PlatformStats  # noqa: E402


class FakeClock:
    def __init__(self, now: int = 1_700_000_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture()
def clock():
    return FakeClock()


def make_stats(platform="LeetCode", total=120, easy=60, medium=50, hard=10, **extra):
    return PlatformStats(
        platform=platform,
        totalSolved=total,
        easy=easy,
        medium=medium,
        hard=hard,
        lastUpdated="2026-01-01T00:00:00+00:00",
        **extra,
    )

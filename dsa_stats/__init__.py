"""Solved-problem statistics for the portfolio's DSA section."""

from .models import PlatformStats
from .http import UpstreamError
from .cache import ServerCache
from .service import StatsService

__all__ = ["PlatformStats", "UpstreamError", "ServerCache", "StatsService"]

"""
Environment-driven settings. Read once at import time.
"""

from __future__ import annotations

import os

# -----------------------------
# Accounts
# -----------------------------
LEETCODE_USERNAME = os.getenv("LEETCODE_USERNAME", "upratapvarun").strip()
GFG_USERNAME = os.getenv("GFG_USERNAME", "upratapim33").strip()

# -----------------------------
# Upstreams
# -----------------------------
LEETCODE_GRAPHQL_URL = os.getenv("LEETCODE_GRAPHQL_URL", "https://leetcode.com/graphql")
GFG_PROFILE_URL = os.getenv("GFG_PROFILE_URL", "https://www.geeksforgeeks.org/user/{username}/")
REQUEST_TIMEOUT_SECONDS = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "10"))

# -----------------------------
# Caches
# -----------------------------
SERVER_CACHE_TTL_SECONDS = int(os.getenv("SERVER_CACHE_TTL_SECONDS", "1800"))
CLIENT_CACHE_TTL_SECONDS = int(os.getenv("CLIENT_CACHE_TTL_SECONDS", "3600"))
CLIENT_CACHE_PATH = os.path.expanduser(
    os.getenv("CLIENT_CACHE_PATH", "~/.cache/dsa-stats/client_cache.json")
)

# -----------------------------
# Serving
# -----------------------------
STATS_API_BASE = os.getenv("STATS_API_BASE", "http://localhost:5000/functions/v1").rstrip("/")
PORT = int(os.getenv("PORT", "5000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

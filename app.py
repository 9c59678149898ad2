"""
Portfolio DSA Stats (Flask)

What it does:
- Serves solved-problem counts for two fixed accounts:
  - LeetCode via its public GraphQL API
  - GeeksforGeeks by scraping the public profile page
- Keeps the last good record per platform in memory for 30 minutes
- Never fails a stats request: stale cache or a fixed snapshot is served instead

Setup:
  pip install -e .

Run:
  export LEETCODE_USERNAME="..."   # optional, defaults to the portfolio owner
  python app.py
  curl -X POST http://localhost:5000/functions/v1/gfg-stats

Endpoints:
  POST|GET /functions/v1/leetcode-stats  -> PlatformStats JSON, optional body { "username": "..." }
  POST|GET /functions/v1/gfg-stats       -> PlatformStats JSON
  OPTIONS  any path                      -> empty 200 with CORS headers
  GET      /healthz                      -> cache status
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from flask import Flask, current_app, jsonify, request

from dsa_stats import config
from dsa_stats.cache import ServerCache
from dsa_stats.cors import install_cors
from dsa_stats.gfg import fetch_gfg_stats
from dsa_stats.leetcode import USERNAME_RE, fetch_leetcode_stats
from dsa_stats.models import GFG, LEETCODE, default_stats
from dsa_stats.service import StatsService


# -----------------------------
# Wiring
# -----------------------------
def build_services(cache: Optional[ServerCache] = None) -> Dict[str, StatsService]:
    cache = cache or ServerCache(config.SERVER_CACHE_TTL_SECONDS * 1000)
    return {
        LEETCODE: StatsService(LEETCODE, fetch_leetcode_stats, cache, username=config.LEETCODE_USERNAME),
        GFG: StatsService(GFG, fetch_gfg_stats, cache, username=config.GFG_USERNAME),
    }


def _configure_logging(app: Flask) -> None:
    app.logger.setLevel(config.LOG_LEVEL)
    pkg_logger = logging.getLogger("dsa_stats")
    if pkg_logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)s: %(message)s"))
    pkg_logger.setLevel(config.LOG_LEVEL)
    pkg_logger.addHandler(handler)


def _services() -> Dict[str, StatsService]:
    return current_app.extensions["dsa_stats"]


def _get_username_from_request() -> Optional[str]:
    if request.method == "GET":
        username = (request.args.get("username") or "").strip()
    else:
        payload = request.get_json(silent=True) or {}
        username = str(payload.get("username") or "").strip() if isinstance(payload, dict) else ""
    if username and not USERNAME_RE.match(username):
        current_app.logger.warning("Ignoring invalid LeetCode username override: %r", username)
        return None
    return username or None


def _stats_response(platform: str, username: Optional[str] = None):
    try:
        record = _services()[platform].get_stats(username)
    except Exception as e:
        current_app.logger.exception("Error in %s stats handler", platform)
        record = default_stats(platform, error=str(e) or "Unknown error")
    # Always 200: degraded data is still data for the UI.
    return jsonify(record.to_dict()), 200


# -----------------------------
# App factory
# -----------------------------
def create_app(services: Optional[Dict[str, StatsService]] = None) -> Flask:
    app = Flask(__name__)
    _configure_logging(app)
    app.extensions["dsa_stats"] = services if services is not None else build_services()
    install_cors(app)

    @app.route("/functions/v1/leetcode-stats", methods=["GET", "POST"])
    def leetcode_stats():
        return _stats_response(LEETCODE, _get_username_from_request())

    @app.route("/functions/v1/gfg-stats", methods=["GET", "POST"])
    def gfg_stats():
        return _stats_response(GFG)

    @app.route("/healthz", methods=["GET"])
    def healthz():
        platforms = {}
        for name, svc in _services().items():
            age = svc.cache.age_ms(name, svc.clock())
            platforms[name] = {
                "username": svc.username,
                "cache_ttl_seconds": svc.cache.ttl_ms // 1000,
                "cache_age_seconds": None if age is None else age // 1000,
            }
        return jsonify({"ok": True, "platforms": platforms})

    return app


app = create_app()


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=config.PORT, debug=True)

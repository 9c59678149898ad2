"""
Outbound HTTP helpers shared by the platform clients.

Each helper issues exactly one request; callers decide how to degrade.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from . import config

logger = logging.getLogger(__name__)

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class UpstreamError(RuntimeError):
    """The upstream was unreachable or answered with something unusable."""


def browser_headers() -> Dict[str, str]:
    return {
        "User-Agent": BROWSER_USER_AGENT,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.5",
    }


def _send(method: str, url: str, *, headers: Dict[str, str], json: Optional[dict] = None,
          timeout: Optional[float] = None) -> requests.Response:
    timeout = config.REQUEST_TIMEOUT_SECONDS if timeout is None else timeout
    try:
        resp = requests.request(method, url, headers=headers, json=json, timeout=timeout)
    except requests.RequestException as e:
        raise UpstreamError(f"{method} {url} failed: {e}") from e
    if resp.status_code >= 400:
        raise UpstreamError(f"{url} returned {resp.status_code}: {(resp.text or '')[:300]}")
    return resp


def fetch_text(url: str, *, timeout: Optional[float] = None) -> str:
    resp = _send("GET", url, headers=browser_headers(), timeout=timeout)
    text = resp.text or ""
    logger.debug("Received %d chars from %s", len(text), url)
    return text


def graphql(url: str, query: str, variables: Dict[str, Any], *, headers: Optional[Dict[str, str]] = None,
            timeout: Optional[float] = None) -> Dict[str, Any]:
    """
    POST a GraphQL query and return its ``data`` object.

    Raises UpstreamError on a bad status, a non-JSON body or an ``errors`` payload.
    """
    payload = {"query": query, "variables": variables}
    merged = {"Content-Type": "application/json", "User-Agent": BROWSER_USER_AGENT}
    merged.update(headers or {})
    resp = _send("POST", url, headers=merged, json=payload, timeout=timeout)
    try:
        data = resp.json()
    except ValueError as e:
        raise UpstreamError(f"GraphQL response from {url} is not JSON") from e
    if not isinstance(data, dict):
        raise UpstreamError(f"Unexpected GraphQL response shape from {url}")
    errors = data.get("errors")
    if errors:
        # Only the first few errors, to keep logs short
        shown = errors[:3] if isinstance(errors, list) else errors
        raise UpstreamError(f"GraphQL errors: {shown}")
    body = data.get("data") or {}
    if not isinstance(body, dict):
        raise UpstreamError(f"GraphQL data from {url} is not an object")
    return body

from unittest.mock import MagicMock, patch

import pytest
import requests

from dsa_stats.http import UpstreamError, graphql
from dsa_stats.leetcode import difficulty_counts, fetch_leetcode_stats, stats_from_counts


def _mock_response(payload, status=200):
    response = MagicMock()
    response.status_code = status
    response.text = str(payload)
    response.json.return_value = payload
    return response


def _payload(counts, ranking=12345):
    return {
        "data": {
            "matchedUser": {
                "submitStatsGlobal": {
                    "acSubmissionNum": [{"difficulty": k, "count": v} for k, v in counts.items()]
                },
                "profile": {"ranking": ranking},
            }
        }
    }


def test_fetch_success():
    payload = _payload({"All": 100, "Easy": 50, "Medium": 40, "Hard": 10})
    with patch("dsa_stats.http.requests.request", return_value=_mock_response(payload)) as mock_request:
        stats = fetch_leetcode_stats("someone")

    assert stats.platform == "LeetCode"
    assert (stats.totalSolved, stats.easy, stats.medium, stats.hard) == (100, 50, 40, 10)
    assert stats.totalSolved == stats.easy + stats.medium + stats.hard
    assert stats.ranking == 12345
    assert stats.lastUpdated
    body = mock_request.call_args.kwargs["json"]
    assert body["variables"] == {"username": "someone"}
    assert "acSubmissionNum" in body["query"]


def test_missing_labels_default_to_zero():
    stats = stats_from_counts(difficulty_counts([{"difficulty": "Easy", "count": 7}]))
    assert (stats.totalSolved, stats.easy, stats.medium, stats.hard) == (7, 7, 0, 0)


def test_null_counts_are_zero():
    counts = difficulty_counts([{"difficulty": "All", "count": None}, {"difficulty": "Hard", "count": "x"}])
    assert counts == {"All": 0, "Hard": 0}


@pytest.mark.parametrize(
    "payload",
    [
        {"data": {"matchedUser": None}},
        {"errors": [{"message": "That user does not exist."}], "data": {"matchedUser": None}},
        {"data": {"matchedUser": {"profile": {}}}},
    ],
)
def test_shape_errors_raise(payload):
    with patch("dsa_stats.http.requests.request", return_value=_mock_response(payload)):
        with pytest.raises(UpstreamError):
            fetch_leetcode_stats("someone")


def test_bad_status_raises():
    with patch("dsa_stats.http.requests.request", return_value=_mock_response({}, status=502)):
        with pytest.raises(UpstreamError):
            fetch_leetcode_stats("someone")


def test_transport_error_raises():
    with patch("dsa_stats.http.requests.request", side_effect=requests.Timeout("slow")):
        with pytest.raises(UpstreamError):
            fetch_leetcode_stats("someone")


def test_non_json_body_raises():
    response = _mock_response({})
    response.json.side_effect = ValueError("no json")
    with patch("dsa_stats.http.requests.request", return_value=response):
        with pytest.raises(UpstreamError):
            fetch_leetcode_stats("someone")


@pytest.mark.parametrize(
    "payload",
    [
        {"data": {"matchedUser": {"submitStatsGlobal": {"acSubmissionNum": ["x"]}}}},
        {"data": {"matchedUser": "someone"}},
        {"data": {"matchedUser": {"submitStatsGlobal": ["nope"]}}},
        {"errors": "rate limited"},
        {"data": ["not", "an", "object"]},
    ],
)
def test_malformed_payloads_raise_upstream_error(payload):
    with patch("dsa_stats.http.requests.request", return_value=_mock_response(payload)):
        with pytest.raises(UpstreamError):
            fetch_leetcode_stats("someone")


def test_leetcode_headers_are_passed_to_graphql_helper():
    payload = _payload({"All": 1, "Easy": 1})
    with patch("dsa_stats.http.requests.request", return_value=_mock_response(payload)) as mock_request:
        fetch_leetcode_stats("someone")

    headers = mock_request.call_args.kwargs["headers"]
    assert headers["Referer"] == "https://leetcode.com"
    assert headers["Content-Type"] == "application/json"


def test_graphql_helper_adds_no_site_headers():
    with patch("dsa_stats.http.requests.request", return_value=_mock_response({"data": {}})) as mock_request:
        assert graphql("https://api.test/graphql", "query { x }", {}) == {}

    headers = mock_request.call_args.kwargs["headers"]
    assert "Referer" not in headers
    assert "Origin" not in headers

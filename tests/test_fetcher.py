"""Unit tests for the retrying HTTP fetcher."""

from unittest.mock import MagicMock

import pytest
import requests

from ctscan.fetcher import Fetcher, FetchError, RateLimitedError


def _resp(status: int = 200, text: str = "<html></html>") -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    resp.text = text
    return resp


def _fetcher(*responses: object) -> tuple[Fetcher, MagicMock, list[float]]:
    session = MagicMock()
    session.get.side_effect = list(responses)
    sleeps: list[float] = []
    fetcher = Fetcher(retry_delay=2.0, session=session, sleep=sleeps.append)
    return fetcher, session, sleeps


class TestFetcher:
    def test_success_first_try(self) -> None:
        fetcher, session, sleeps = _fetcher(_resp(200, "ok"))
        assert fetcher.get("https://example.com", retries=2) == "ok"
        assert session.get.call_count == 1
        assert sleeps == []

    def test_sends_browser_headers_and_timeout(self) -> None:
        fetcher, session, _ = _fetcher(_resp())
        fetcher.get("https://example.com")
        _, kwargs = session.get.call_args
        assert kwargs["headers"]["User-Agent"].startswith("Mozilla/5.0")
        assert "text/html" in kwargs["headers"]["Accept"]
        assert kwargs["timeout"] > 0

    def test_redirects_bounded(self) -> None:
        fetcher, session, _ = _fetcher(_resp())
        assert session.max_redirects == 3

    def test_rate_limit_backoff_doubles(self) -> None:
        fetcher, session, sleeps = _fetcher(_resp(429), _resp(503), _resp(200, "ok"))
        assert fetcher.get("https://example.com", retries=2) == "ok"
        # attempt 1 → 2.0 * 1 * 2, attempt 2 → 2.0 * 2 * 2
        assert sleeps == [4.0, 8.0]

    def test_transient_backoff_linear(self) -> None:
        fetcher, _, sleeps = _fetcher(
            requests.ConnectionError("reset"),
            requests.Timeout("slow"),
            _resp(200, "ok"),
        )
        assert fetcher.get("https://example.com", retries=2) == "ok"
        assert sleeps == [2.0, 4.0]

    def test_other_status_retried_then_raises(self) -> None:
        fetcher, session, sleeps = _fetcher(_resp(500), _resp(404))
        with pytest.raises(FetchError):
            fetcher.get("https://example.com", retries=1)
        assert session.get.call_count == 2
        assert sleeps == [2.0]

    def test_rate_limit_exhausted_raises_rate_limited(self) -> None:
        fetcher, _, sleeps = _fetcher(_resp(429), _resp(429))
        with pytest.raises(RateLimitedError):
            fetcher.get("https://example.com", retries=1)
        # no wait after the final attempt
        assert sleeps == [4.0]

    def test_rate_limited_is_fetch_error(self) -> None:
        assert issubclass(RateLimitedError, FetchError)

    def test_connection_error_exhausted(self) -> None:
        fetcher, _, _ = _fetcher(requests.ConnectionError("down"))
        with pytest.raises(FetchError):
            fetcher.get("https://example.com", retries=0)

"""Single timed HTTP GET with bounded retry and backoff."""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable

import requests

from ctscan import config

logger = logging.getLogger(__name__)

_USER_AGENTS = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (X11; Linux x86_64; rv:121.0) Gecko/20100101 Firefox/121.0",
)

_RATE_LIMIT_STATUSES = frozenset({429, 503})


class FetchError(Exception):
    """Raised when a URL could not be fetched within the retry budget."""


class RateLimitedError(FetchError):
    """Raised when the last attempt was answered with 429 or 503."""


class Fetcher:
    """Thin wrapper around ``requests.Session.get`` with retry/backoff.

    Attempts are numbered from 1. A 429/503 answer waits
    ``retry_delay * attempt * 2`` before the next attempt; any other failure
    (timeout, connection error, non-2xx status) waits ``retry_delay * attempt``.
    """

    def __init__(
        self,
        timeout: float = config.REQUEST_TIMEOUT,
        retry_delay: float = config.RETRY_DELAY,
        max_redirects: int = config.MAX_REDIRECTS,
        session: requests.Session | None = None,
        sleep: Callable[[float], None] = time.sleep,
        rng: random.Random | None = None,
    ) -> None:
        self._timeout = timeout
        self._retry_delay = retry_delay
        self._sleep = sleep
        self._rng = rng or random.Random()
        self._session = session or requests.Session()
        self._session.max_redirects = max_redirects

    # ── public ──────────────────────────────────────────────────────────

    def get(self, url: str, retries: int = config.MAX_RETRIES) -> str:
        """Fetch *url* and return the response body as text.

        *retries* is the number of extra attempts after the first one.
        Raises :class:`FetchError` once the budget is spent.
        """
        attempts = retries + 1
        for attempt in range(1, attempts + 1):
            last = attempt == attempts
            try:
                resp = self._session.get(
                    url, headers=self._headers(), timeout=self._timeout
                )
            except requests.RequestException as exc:
                if last:
                    raise FetchError(f"GET {url} failed: {exc}") from exc
                self._backoff(url, attempt, self._retry_delay * attempt, str(exc))
                continue

            if resp.status_code in _RATE_LIMIT_STATUSES:
                if last:
                    raise RateLimitedError(
                        f"GET {url} rate-limited ({resp.status_code}) "
                        f"after {attempts} attempts"
                    )
                self._backoff(
                    url, attempt, self._retry_delay * attempt * 2, str(resp.status_code)
                )
                continue

            if resp.status_code >= 400:
                if last:
                    raise FetchError(f"GET {url} returned {resp.status_code}")
                self._backoff(
                    url, attempt, self._retry_delay * attempt, str(resp.status_code)
                )
                continue

            return resp.text

        raise FetchError(f"GET {url}: no attempts made (retries={retries})")

    # ── private ─────────────────────────────────────────────────────────

    def _headers(self) -> dict[str, str]:
        return {
            "User-Agent": self._rng.choice(_USER_AGENTS),
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
        }

    def _backoff(self, url: str, attempt: int, wait: float, reason: str) -> None:
        logger.debug(
            "GET %s attempt %d failed (%s); retrying in %.1fs", url, attempt, reason, wait
        )
        self._sleep(wait)

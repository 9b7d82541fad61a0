"""Discussion-list scraper: direct source first, then shuffled mirror instances.

Each list runs through an ordered chain of strategies; the first strategy that
yields at least one post wins and the rest are never attempted. Lists are
scraped one after another with a randomised politeness pause in between.
"""

from __future__ import annotations

import logging
import math
import random
import re
import time
from collections.abc import Callable, Sequence
from datetime import UTC, datetime, timedelta
from typing import Any, Protocol
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from ctscan import config
from ctscan.dedupe import dedupe, filter_recent
from ctscan.fetcher import Fetcher, FetchError
from ctscan.models import ListSource, Post, ScrapeBatch

logger = logging.getLogger(__name__)

_LIST_ID_RE = re.compile(r"lists/(\d+)")
_ENGAGEMENT_RE = re.compile(r"([\d,.]+)\s*([kmb])?", re.IGNORECASE)
_RT_RE = re.compile(r"\brt\b")

_SUFFIX_SCALE = {"k": 1_000, "m": 1_000_000, "b": 1_000_000_000}

# e.g. "Jan 5, 2024 · 3:04 PM UTC"
_MIRROR_DATE_FORMAT = "%b %d, %Y · %I:%M %p %Z"

# Counter name → label fragments (first match wins)
_STAT_LABELS: list[tuple[str, tuple[str, ...]]] = [
    ("replies", ("comment", "repl")),
    ("retweets", ("retweet", "repeat")),
    ("likes", ("like", "heart", "fav")),
    ("bookmarks", ("bookmark",)),
    ("views", ("view", "play")),
]

_ALL_FAILED_WARNING = (
    "WARNING: All scraping methods failed. The source and its mirrors may be "
    "blocking requests. Results are empty."
)


# ── parsing helpers ────────────────────────────────────────────────────────


def extract_list_id(url: str) -> str | None:
    """Return the numeric list id from a list URL, or None."""
    m = _LIST_ID_RE.search(url)
    return m.group(1) if m else None


def parse_engagement_number(raw: str) -> int:
    """Parse compact counters such as ``1.2K`` or ``5M``; unparsable ⇒ 0."""
    m = _ENGAGEMENT_RE.search(raw)
    if not m:
        return 0
    try:
        num = float(m.group(1).replace(",", ""))
    except ValueError:
        return 0
    suffix = (m.group(2) or "").lower()
    num *= _SUFFIX_SCALE.get(suffix, 1)
    # Round half up, matching how the counters are displayed
    return int(math.floor(num + 0.5))


def parse_timestamp(raw: str) -> datetime | None:
    """Parse an ISO-8601 or mirror-style date string into an aware datetime."""
    raw = raw.strip()
    if not raw:
        return None
    try:
        ts = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        try:
            ts = datetime.strptime(raw, _MIRROR_DATE_FORMAT)
        except ValueError:
            return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts


def _text(el: Any, selector: str) -> str:
    node = el.select_one(selector)
    return node.get_text().strip() if node is not None else ""


def _classify_stat(label: str) -> str | None:
    for field, fragments in _STAT_LABELS:
        if field == "retweets" and _RT_RE.search(label):
            return field
        if any(frag in label for frag in fragments):
            return field
    return None


def parse_stats(el: Any) -> dict[str, int]:
    """Read engagement counters from a timeline item's stat elements.

    Each stat is classified by its label text and icon class names; stats
    that cannot be classified are ignored, leaving that counter at 0. Stats
    belonging to a nested timeline item are not read.
    """
    stats = {"likes": 0, "retweets": 0, "replies": 0, "bookmarks": 0, "views": 0}
    for node in el.select(".tweet-stat") or el.select(".icon-container"):
        owner = node.find_parent(class_="timeline-item")
        if owner is not None and owner is not el:
            continue
        text = node.get_text().strip().lower()
        classes = " ".join(
            cls for tag in [node, *node.find_all(True)] for cls in (tag.get("class") or [])
        )
        field = _classify_stat(f"{text} {classes.lower()}")
        if field is not None:
            stats[field] = parse_engagement_number(text)
    return stats


def _parse_mirror_item(el: Any, page_url: str) -> Post | None:
    author = _text(el, ".username").removeprefix("@")
    fullname = _text(el, ".fullname")
    text = _text(el, ".tweet-content, .media-body")
    if not text and not author:
        return None

    date_link = el.select_one(".tweet-date a")
    date_str = date_link.get("title", "") if date_link is not None else ""
    if not date_str:
        time_el = el.select_one("time")
        date_str = time_el.get("datetime", "") if time_el is not None else ""

    link = el.select_one(".tweet-link, .tweet-date a")
    href = link.get("href", "") if link is not None else ""

    return Post(
        author=author or "unknown",
        display_name=fullname or author or "unknown",
        text=text,
        timestamp=parse_timestamp(date_str),
        source_url=urljoin(page_url, href) if href else page_url,
        origin="mirror",
        **parse_stats(el),
    )


def parse_mirror_timeline(html: str, page_url: str = "") -> list[Post]:
    """Extract posts from a mirror instance's timeline page."""
    soup = BeautifulSoup(html, "html.parser")
    posts: list[Post] = []
    for el in soup.select(".timeline-item, .thread-line"):
        # A thread wrapper is not a post; its items are matched on their own
        if el.select_one(".timeline-item") is not None:
            continue
        try:
            post = _parse_mirror_item(el, page_url)
        except (AttributeError, TypeError, ValueError) as exc:
            logger.debug("Skipping malformed timeline item: %s", exc)
            continue
        if post is not None:
            posts.append(post)
    return posts


def parse_direct_timeline(html: str, page_url: str = "") -> list[Post]:
    """Extract any server-rendered posts from the primary source's page.

    The primary source usually serves a script-only shell, so an empty
    result is the common case.
    """
    soup = BeautifulSoup(html, "html.parser")
    posts: list[Post] = []
    for el in soup.select('[data-testid="tweet"]'):
        try:
            author = _text(el, '[data-testid="User-Name"] a')
            text = _text(el, '[data-testid="tweetText"]')
            time_el = el.select_one("time")
            ts = parse_timestamp(time_el.get("datetime", "")) if time_el is not None else None
            if not text:
                continue
            posts.append(
                Post(
                    author=author or "unknown",
                    display_name=author or "unknown",
                    text=text,
                    timestamp=ts,
                    source_url=page_url,
                    origin="direct",
                )
            )
        except (AttributeError, TypeError, ValueError) as exc:
            logger.debug("Skipping malformed post element: %s", exc)
    return posts


# ── strategies ─────────────────────────────────────────────────────────────


class Strategy(Protocol):
    name: str

    def fetch(self, source: ListSource) -> list[Post]: ...


class DirectStrategy:
    """Fetch the list URL itself."""

    name = "direct"

    def __init__(self, fetcher: Fetcher, retries: int = 1) -> None:
        self._fetcher = fetcher
        self._retries = retries

    def fetch(self, source: ListSource) -> list[Post]:
        html = self._fetcher.get(source.url, retries=self._retries)
        return parse_direct_timeline(html, source.url)


class MirrorStrategy:
    """Try each mirror host in a freshly shuffled order until one has posts."""

    name = "mirror"

    def __init__(
        self,
        fetcher: Fetcher,
        mirrors: Sequence[str] = config.MIRRORS,
        rng: random.Random | None = None,
        retries: int = 1,
    ) -> None:
        self._fetcher = fetcher
        self._mirrors = tuple(mirrors)
        self._rng = rng or random.Random()
        self._retries = retries

    def fetch(self, source: ListSource) -> list[Post]:
        list_id = extract_list_id(source.url)
        if list_id is None:
            logger.info("No list id in %s; skipping mirrors", source.url)
            return []

        instances = list(self._mirrors)
        self._rng.shuffle(instances)

        for host in instances:
            url = f"https://{host}/i/lists/{list_id}"
            try:
                html = self._fetcher.get(url, retries=self._retries)
            except FetchError as exc:
                logger.warning("Mirror %s failed: %s", host, exc)
                continue
            posts = parse_mirror_timeline(html, url)
            if posts:
                logger.info("Mirror %s returned %d posts", host, len(posts))
                return posts
            logger.debug("Mirror %s returned no posts", host)
        return []


# ── scraper ────────────────────────────────────────────────────────────────


class Scraper:
    """Sequential, fallback-chained scraper over configured list sources."""

    def __init__(
        self,
        fetcher: Fetcher | None = None,
        mirrors: Sequence[str] = config.MIRRORS,
        rng: random.Random | None = None,
        sleep: Callable[[float], None] = time.sleep,
        delay_range: tuple[float, float] = config.LIST_DELAY_RANGE,
        window: timedelta = timedelta(hours=config.WINDOW_HOURS),
        strategies: Sequence[Strategy] | None = None,
    ) -> None:
        self._rng = rng or random.Random()
        self._sleep = sleep
        self._delay_range = delay_range
        self._window = window
        if strategies is None:
            fetcher = fetcher or Fetcher(rng=self._rng)
            strategies = [
                DirectStrategy(fetcher),
                MirrorStrategy(fetcher, mirrors, rng=self._rng),
            ]
        self._strategies = list(strategies)

    # ── public ──────────────────────────────────────────────────────────

    def scrape_lists(
        self, lists: Sequence[ListSource], now: datetime | None = None
    ) -> ScrapeBatch:
        """Scrape every list in order and return the filtered, deduped batch.

        Never raises: failures are recorded as warnings on the batch.
        """
        produced_at = datetime.now(UTC)
        warnings: list[str] = []

        if not lists:
            warnings.append("No lists configured")
            return ScrapeBatch(warnings=warnings, produced_at=produced_at)

        collected: list[Post] = []
        succeeded = failed = 0

        for idx, source in enumerate(lists):
            if idx:
                self._pause()
            try:
                posts = self._run_chain(source)
            except Exception as exc:
                logger.exception("Unexpected error scraping '%s'", source.name)
                failed += 1
                warnings.append(f'Error scraping "{source.name}": {exc}')
                continue

            if posts:
                collected.extend(p.model_copy(update={"list_tag": source.name}) for p in posts)
                succeeded += 1
            else:
                failed += 1
                warnings.append(f'No posts scraped from "{source.name}" ({source.url})')

        posts = dedupe(filter_recent(collected, now=now, window=self._window))

        if failed == len(lists):
            warnings.append(_ALL_FAILED_WARNING)

        logger.info(
            "Scraped %d posts from %d/%d lists",
            len(posts),
            succeeded,
            len(lists),
        )
        return ScrapeBatch(
            posts=posts,
            warnings=warnings,
            lists_succeeded=succeeded,
            lists_failed=failed,
            produced_at=produced_at,
        )

    # ── private ─────────────────────────────────────────────────────────

    def _run_chain(self, source: ListSource) -> list[Post]:
        for strategy in self._strategies:
            try:
                posts = strategy.fetch(source)
            except FetchError as exc:
                logger.warning("[%s] %s strategy failed: %s", source.name, strategy.name, exc)
                continue
            if posts:
                logger.info("[%s] %d posts via %s", source.name, len(posts), strategy.name)
                return posts
            logger.info("[%s] %s strategy returned nothing", source.name, strategy.name)
        return []

    def _pause(self) -> None:
        low, high = self._delay_range
        self._sleep(self._rng.uniform(low, high))


def scrape_lists(lists: Sequence[ListSource], **kwargs: Any) -> ScrapeBatch:
    """Convenience wrapper: ``Scraper(**kwargs).scrape_lists(lists)``."""
    return Scraper(**kwargs).scrape_lists(lists)

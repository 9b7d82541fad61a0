"""Batch post-processing: drop stale posts and collapse duplicates."""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta

from ctscan.models import Post

logger = logging.getLogger(__name__)

# Characters of post text that take part in the duplicate key
_KEY_PREFIX = 80


def filter_recent(
    posts: list[Post],
    now: datetime | None = None,
    window: timedelta = timedelta(hours=24),
) -> list[Post]:
    """Drop posts older than *window*; posts without a timestamp are kept."""
    now = now or datetime.now(UTC)
    cutoff = now - window
    kept: list[Post] = []
    for post in posts:
        if post.timestamp is None:
            kept.append(post)
            continue
        ts = post.timestamp
        if ts.tzinfo is None:
            ts = ts.replace(tzinfo=UTC)
        if ts >= cutoff:
            kept.append(post)
    logger.info(
        "Window filter: %d total → %d recent (dropped %d stale)",
        len(posts),
        len(kept),
        len(posts) - len(kept),
    )
    return kept


def dedupe(posts: list[Post]) -> list[Post]:
    """Keep the first post for each (author, text prefix) key."""
    seen: set[tuple[str, str]] = set()
    unique: list[Post] = []
    for post in posts:
        key = (post.author, post.text[:_KEY_PREFIX])
        if key in seen:
            continue
        seen.add(key)
        unique.append(post)
    logger.info(
        "Dedupe: %d total → %d unique (filtered %d duplicates)",
        len(posts),
        len(unique),
        len(posts) - len(unique),
    )
    return unique

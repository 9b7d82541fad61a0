"""Pipeline orchestration: scrape → analyse → aggregate."""

from __future__ import annotations

import logging
import sys
import time
from collections.abc import Sequence
from datetime import UTC, datetime

from ctscan import config
from ctscan.lists import load_lists
from ctscan.models import (
    ListSource,
    PipelineResult,
    Post,
    ScrapeBatch,
    ScrapeSummary,
    SentimentAggregate,
    TrendReport,
)
from ctscan.scraper import Scraper
from ctscan.sentiment import analyze
from ctscan.trends import aggregate_trends

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def setup_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def run_pipeline(
    lists: Sequence[ListSource] | None = None,
    posts: Sequence[Post] | None = None,
    scraper: Scraper | None = None,
) -> PipelineResult:
    """Run the CT scanner end to end and return the structured result.

    When *posts* is given, scraping is skipped. When *lists* is None the list
    sources are read from ``config.LISTS_FILE``. Never raises: failures end up
    in ``PipelineResult.warnings``.
    """
    start = time.perf_counter()
    generated_at = datetime.now(UTC)
    warnings: list[str] = []
    logger.info("=== ctscan pipeline start ===")

    # ── 1. Posts: provided or scraped ─────────────────────────────────
    if posts is not None:
        batch = ScrapeBatch(
            posts=list(posts),
            warnings=["Using pre-provided posts, scraping skipped"],
            produced_at=generated_at,
        )
    else:
        if lists is None:
            lists = load_lists(config.LISTS_FILE)
        batch = (scraper or Scraper()).scrape_lists(lists)
    warnings.extend(batch.warnings)

    summary = ScrapeSummary(
        total_posts=len(batch.posts),
        lists_attempted=batch.lists_attempted,
        lists_succeeded=batch.lists_succeeded,
        lists_failed=batch.lists_failed,
        produced_at=batch.produced_at,
    )

    # ── 2. Sentiment + 3. Trends ──────────────────────────────────────
    try:
        sentiment = analyze(batch.posts)
        trends = aggregate_trends(sentiment)
    except Exception as exc:
        logger.exception("Analysis failed")
        warnings.append(f"CT scanner error: {exc}")
        sentiment = SentimentAggregate()
        trends = TrendReport(generated_at=datetime.now(UTC))
    warnings.extend(trends.warnings)

    elapsed_ms = int((time.perf_counter() - start) * 1000)
    logger.info(
        "=== ctscan pipeline done: %d posts, %d warnings, %dms ===",
        sentiment.total_posts,
        len(warnings),
        elapsed_ms,
    )
    return PipelineResult(
        version=VERSION,
        generated_at=generated_at,
        warnings=warnings,
        scrape_summary=summary,
        sentiment=sentiment,
        trends=trends,
        execution_time_ms=elapsed_ms,
    )

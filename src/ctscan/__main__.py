"""CLI entry-point: ``python -m ctscan run``."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import TypeAdapter

from ctscan import config
from ctscan.lists import load_lists
from ctscan.models import Post
from ctscan.pipeline import run_pipeline, setup_logging

logger = logging.getLogger(__name__)

_POSTS_ADAPTER = TypeAdapter(list[Post])


def _load_posts(path: Path) -> list[Post]:
    """Read a JSON array of posts, e.g. a previous run's scrape dump."""
    return _POSTS_ADAPTER.validate_json(path.read_bytes())


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="ctscan",
        description="Crypto-Twitter list scanner: sentiment, narratives, tokens, KOLs.",
    )
    sub = parser.add_subparsers(dest="command")

    # ── run ────────────────────────────────────────────────────────────
    run_parser = sub.add_parser("run", help="Scrape, analyse and aggregate.")
    run_parser.add_argument(
        "--lists",
        type=Path,
        default=config.LISTS_FILE,
        help="YAML file of lists to scrape (default: %(default)s).",
    )
    run_parser.add_argument(
        "--posts",
        type=Path,
        default=None,
        help="JSON array of posts to analyse instead of scraping.",
    )
    run_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the JSON result here instead of stdout.",
    )
    run_parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging."
    )

    args = parser.parse_args(argv)

    if args.command != "run":
        parser.print_help()
        sys.exit(1)

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    if args.posts is not None:
        result = run_pipeline(posts=_load_posts(args.posts))
    else:
        result = run_pipeline(lists=load_lists(args.lists))

    payload = result.model_dump_json(indent=2)
    if args.output is None:
        sys.stdout.write(payload + "\n")
        return

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(payload, encoding="utf-8")
    logger.info("Wrote %s", args.output)


if __name__ == "__main__":
    main()

"""Load the discussion-list sources to scrape from ``lists.yml``."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ctscan.models import ListSource

logger = logging.getLogger(__name__)


def load_lists(lists_path: Path) -> list[ListSource]:
    """Parse ``lists.yml`` and return the configured list sources in order.

    Expected shape::

        lists:
          - name: Alpha callers
            url: https://x.com/i/lists/1234567890

    A missing file yields an empty list; entries without a usable name/url
    are skipped.
    """
    if not lists_path.exists():
        logger.warning("Lists file not found, nothing to scrape: %s", lists_path)
        return []

    with open(lists_path, encoding="utf-8") as fh:
        cfg: dict[str, Any] = yaml.safe_load(fh) or {}

    entries: list[Any] = cfg.get("lists", []) or []
    sources: list[ListSource] = []

    for idx, entry in enumerate(entries):
        if not isinstance(entry, dict):
            logger.warning("Skipping list entry #%d: expected a mapping", idx)
            continue
        try:
            source = ListSource.model_validate(entry)
        except ValidationError as exc:
            logger.warning("Skipping list entry #%d: %s", idx, exc.errors()[0]["msg"])
            continue
        if not source.url.strip():
            logger.warning("Skipping list '%s': empty url", source.name)
            continue
        sources.append(source)

    logger.debug("Loaded %d list sources from %s", len(sources), lists_path)
    return sources

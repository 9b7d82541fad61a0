"""Centralised configuration loaded from environment variables and dotenv."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# ── Paths ──────────────────────────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parents[2]

LISTS_FILE: Path = Path(
    os.getenv("CTSCAN_LISTS_FILE", str(PROJECT_ROOT / "config" / "lists.yml"))
)

# ── HTTP ───────────────────────────────────────────────────────────────────
REQUEST_TIMEOUT: float = float(os.getenv("CTSCAN_REQUEST_TIMEOUT", "15"))
MAX_RETRIES: int = int(os.getenv("CTSCAN_MAX_RETRIES", "2"))
RETRY_DELAY: float = float(os.getenv("CTSCAN_RETRY_DELAY", "2.0"))
MAX_REDIRECTS: int = 3

# ── Scraping ───────────────────────────────────────────────────────────────
_DEFAULT_MIRRORS = (
    "nitter.privacydev.net,"
    "nitter.poast.org,"
    "nitter.woodland.cafe,"
    "nitter.1d4.us,"
    "nitter.kavin.rocks,"
    "nitter.unixfox.eu"
)
MIRRORS: tuple[str, ...] = tuple(
    host.strip()
    for host in os.getenv("CTSCAN_MIRRORS", _DEFAULT_MIRRORS).split(",")
    if host.strip()
)

# Politeness delay between lists, in seconds (uniformly drawn)
LIST_DELAY_RANGE: tuple[float, float] = (1.5, 3.0)

WINDOW_HOURS: int = int(os.getenv("CTSCAN_WINDOW_HOURS", "24"))

"""Provider utilities to download the AMFI NAV listing."""

from __future__ import annotations

import logging
from functools import partial

import requests

from core.settings import DEFAULT_NAV_URL

from .registry import FeedFetcher

logger = logging.getLogger(__name__)

USER_AGENT = "Mozilla/5.0 (compatible; mf-portfolio-tracker/1.0)"


class NavFeedError(RuntimeError):
    """Raised when the NAV listing cannot be downloaded."""


def fetch_nav_feed(url: str = DEFAULT_NAV_URL, *, timeout: float = 30.0) -> str:
    """Fetch the raw NAV listing text."""
    logger.debug("Fetching NAV listing: %s", url)
    try:
        response = requests.get(url, timeout=timeout, headers={"User-Agent": USER_AGENT})
        response.raise_for_status()
    except requests.RequestException as exc:
        raise NavFeedError(f"Failed to fetch NAV data: {exc}") from exc
    # requests falls back to ISO-8859-1 for text/* without a charset; the listing is UTF-8.
    if "charset" not in response.headers.get("Content-Type", "").lower():
        response.encoding = "utf-8"
    return response.text


def make_fetcher(url: str = DEFAULT_NAV_URL, *, timeout: float = 30.0) -> FeedFetcher:
    return partial(fetch_nav_feed, url, timeout=timeout)

"""In-memory NAV cache with a freshness window."""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from datetime import UTC, datetime, timedelta
from typing import Callable

from core.domain.nav import NavLookup, NavRecord

from .matching import SchemeResolver, resolve_scheme
from .parser import parse_nav_feed

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(hours=24)

FeedFetcher = Callable[[], str]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class NavRegistry:
    """Name-indexed NAV cache rebuilt wholesale on every ingest."""

    def __init__(
        self,
        fetcher: FeedFetcher | None = None,
        *,
        ttl: timedelta = DEFAULT_TTL,
        resolver: SchemeResolver = resolve_scheme,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._fetcher = fetcher
        self._ttl = ttl
        self._resolver = resolver
        self._clock = clock
        self._records: Mapping[str, NavRecord] = {}
        self._last_ingest: datetime | None = None
        self._lock = threading.Lock()

    @property
    def last_ingest(self) -> datetime | None:
        return self._last_ingest

    def __len__(self) -> int:
        return len(self._records)

    def ingest(self, raw_text: str, *, now: datetime | None = None) -> int:
        """Replace the cache with the records parsed from ``raw_text``."""
        records = parse_nav_feed(raw_text)
        with self._lock:
            self._records = records
            self._last_ingest = now or self._clock()
        logger.info("NAV cache rebuilt. Total schemes: %d", len(records))
        return len(records)

    def is_fresh(self, now: datetime | None = None) -> bool:
        if self._last_ingest is None:
            return False
        return (now or self._clock()) - self._last_ingest < self._ttl

    def refresh(self) -> int:
        """Fetch the feed and ingest it; fetch errors propagate untouched."""
        if self._fetcher is None:
            raise RuntimeError("NavRegistry has no feed fetcher configured")
        logger.info("Fetching NAV data")
        return self.ingest(self._fetcher())

    def ensure_fresh(self, now: datetime | None = None) -> bool:
        """Refresh when stale. Returns ``True`` when a refresh happened."""
        if self.is_fresh(now):
            return False
        self.refresh()
        return True

    def resolve(self, scheme_name: str) -> NavLookup:
        lookup = self._resolver(scheme_name, self._records)
        if not lookup.found:
            logger.warning("NAV not found for scheme: %s", scheme_name)
        return lookup

    def get_nav(self, scheme_name: str) -> float | None:
        return self.resolve(scheme_name).nav

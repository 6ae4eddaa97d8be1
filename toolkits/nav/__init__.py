"""AMFI NAV data source and cache."""

from .matching import SchemeResolver, resolve_scheme
from .parser import parse_nav_feed, parse_nav_line, parse_nav_value
from .provider import NavFeedError, fetch_nav_feed, make_fetcher
from .registry import DEFAULT_TTL, NavRegistry

__all__ = [
    "DEFAULT_TTL",
    "NavFeedError",
    "NavRegistry",
    "SchemeResolver",
    "fetch_nav_feed",
    "make_fetcher",
    "parse_nav_feed",
    "parse_nav_line",
    "parse_nav_value",
    "resolve_scheme",
]

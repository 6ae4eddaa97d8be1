"""Scheme name resolution against the cached NAV index."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Callable

from core.domain.nav import MatchKind, NavLookup, NavRecord, normalize_scheme_name

logger = logging.getLogger(__name__)

SchemeResolver = Callable[[str, Mapping[str, NavRecord]], NavLookup]


def resolve_scheme(query: str, index: Mapping[str, NavRecord]) -> NavLookup:
    """Exact normalized match first, then the first containment match in index order.

    The holdings sheet and the AMFI feed are maintained independently, so names
    drift (plan suffixes, spacing). A name that contains the query, or is
    contained in it, is accepted. The first such name in feed order wins, even
    when a later one would be a closer fit.
    """
    key = normalize_scheme_name(query)
    if not key:
        return NavLookup(query=query)

    record = index.get(key)
    if record is not None:
        return NavLookup(query=query, record=record, match=MatchKind.EXACT)

    for candidate, record in index.items():
        if key in candidate or candidate in key:
            logger.info("Fuzzy matched: %r -> %r", query, record.name)
            return NavLookup(query=query, record=record, match=MatchKind.FUZZY)

    return NavLookup(query=query)

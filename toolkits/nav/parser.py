"""Parsing of the AMFI ``NAVAll.txt`` bulk listing."""

from __future__ import annotations

import logging
import math

from core.domain.nav import NavRecord, normalize_scheme_name

logger = logging.getLogger(__name__)

HEADER_PREFIX = "Scheme Code"
FIELD_SEPARATOR = ";"
MIN_FIELDS = 5

CODE_FIELD = 0
NAME_FIELD = 3
NAV_FIELD = 4


def parse_nav_value(raw: str) -> float | None:
    """Return a positive finite NAV, or ``None`` for blanks and markers like ``N.A.``."""
    text = raw.strip().replace(",", "")
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return value


def parse_nav_line(line: str) -> NavRecord | None:
    stripped = line.strip()
    if not stripped or stripped.startswith(HEADER_PREFIX):
        return None
    parts = stripped.split(FIELD_SEPARATOR)
    if len(parts) < MIN_FIELDS:
        return None
    name = parts[NAME_FIELD].strip()
    if not name:
        return None
    nav = parse_nav_value(parts[NAV_FIELD])
    if nav is None:
        return None
    return NavRecord(code=parts[CODE_FIELD].strip(), name=name, nav=nav)


def parse_nav_feed(text: str) -> dict[str, NavRecord]:
    """Parse the listing into records keyed by normalized scheme name.

    Section headings (fund house names, scheme categories) and malformed lines
    are skipped. Keys keep feed order; a repeated name keeps the last record.
    """
    records: dict[str, NavRecord] = {}
    skipped = 0
    for line in text.splitlines():
        record = parse_nav_line(line)
        if record is None:
            if line.strip():
                skipped += 1
            continue
        records[normalize_scheme_name(record.name)] = record
    logger.debug("Parsed %d NAV records, skipped %d non-record lines", len(records), skipped)
    return records

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from core.domain.portfolio import Holding


class HoldingsSource(Protocol):
    """Supplier of normalized holdings, in sheet order."""

    def read_holdings(self) -> Sequence[Holding]:
        """Return the current holdings list; raise on transport failure."""

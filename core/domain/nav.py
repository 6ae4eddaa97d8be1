"""NAV domain models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


def normalize_scheme_name(name: str) -> str:
    """Key used to index schemes: trimmed and case-folded."""
    return name.strip().casefold()


class NavRecord(BaseModel):
    """Single scheme entry of the AMFI NAV listing."""

    code: str = Field(..., description="AMFI scheme code.")
    name: str = Field(..., min_length=1, description="Scheme name as published in the feed.")
    nav: float = Field(..., gt=0, description="Net asset value per unit.")

    model_config = ConfigDict(frozen=True)

    @property
    def key(self) -> str:
        return normalize_scheme_name(self.name)


class MatchKind(str, Enum):
    EXACT = "exact"
    FUZZY = "fuzzy"
    NONE = "none"


class NavLookup(BaseModel):
    """Outcome of resolving a scheme name against the NAV cache."""

    query: str
    record: NavRecord | None = None
    match: MatchKind = MatchKind.NONE

    model_config = ConfigDict(frozen=True)

    @property
    def found(self) -> bool:
        return self.record is not None

    @property
    def nav(self) -> float | None:
        return self.record.nav if self.record else None

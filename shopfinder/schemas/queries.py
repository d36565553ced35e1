from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, field_validator

from shopfinder.services.filters import SearchFilters
from shopfinder.services.offers import RankingMode

VALID_MODES = {"cheapest", "closest", "best"}


class SearchQueryParams(BaseModel):
    """Raw search inputs as typed by the player.

    Numeric fields stay strings here; blank or garbled values are treated as
    "not set" when converted to filters rather than rejected.
    """

    q: str = ""
    selected: Optional[str] = None
    x: Optional[str] = None
    z: Optional[str] = None
    max_distance: Optional[str] = None
    min_rating: Optional[str] = None
    mode: RankingMode = RankingMode.CHEAPEST

    @field_validator("q", mode="before")
    @classmethod
    def _blank_search(cls, value: Optional[str]) -> str:
        return value or ""

    @field_validator("selected", mode="before")
    @classmethod
    def _blank_selection(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not str(value).strip():
            return None
        return value

    @field_validator("mode", mode="before")
    @classmethod
    def normalize_mode(cls, value: object) -> object:
        if value is None or (isinstance(value, str) and not value.strip()):
            return RankingMode.CHEAPEST
        if isinstance(value, str):
            if value.strip().lower() not in VALID_MODES:
                raise ValueError(f"mode must be one of: {', '.join(sorted(VALID_MODES))}")
            return RankingMode(value)
        return value

    def to_filters(self) -> SearchFilters:
        return SearchFilters.from_raw(
            x=self.x,
            z=self.z,
            max_distance=self.max_distance,
            min_rating=self.min_rating,
        )


__all__ = ["SearchQueryParams", "VALID_MODES"]

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional

from shopfinder.schemas.catalogue import Shop
from shopfinder.services.geospatial import is_finite_number


def parse_lenient_number(value: Any) -> Optional[float]:
    """Parse raw user input into a finite float.

    Blank, non-numeric and non-finite input all mean "not set"; this never
    raises.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    if not isinstance(value, str):
        return None

    text = value.strip()
    # float() accepts digit separators such as "1_000"; user input does not
    if not text or "_" in text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


@dataclass(frozen=True)
class SearchFilters:
    user_x: Optional[float] = None
    user_z: Optional[float] = None
    max_distance: Optional[float] = None
    min_rating: Optional[float] = None

    @classmethod
    def from_raw(
        cls,
        *,
        x: Any = None,
        z: Any = None,
        max_distance: Any = None,
        min_rating: Any = None,
    ) -> "SearchFilters":
        return cls(
            user_x=parse_lenient_number(x),
            user_z=parse_lenient_number(z),
            max_distance=parse_lenient_number(max_distance),
            min_rating=parse_lenient_number(min_rating),
        )

    @property
    def has_user_location(self) -> bool:
        return is_finite_number(self.user_x) and is_finite_number(self.user_z)

    def passes(self, shop: Shop, distance: Optional[int]) -> bool:
        """Apply the rating and distance bounds to one shop.

        The rating bound is always evaluated when set. The distance bound only
        applies when the user location and the shop distance are both known,
        so a shop at an unknown distance is never excluded by it.
        """
        if self.min_rating is not None and shop.rating < self.min_rating:
            return False
        if (
            self.max_distance is not None
            and self.has_user_location
            and distance is not None
            and distance > self.max_distance
        ):
            return False
        return True


__all__ = ["parse_lenient_number", "SearchFilters"]

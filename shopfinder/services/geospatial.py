from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

from shopfinder.schemas.catalogue import Coordinate, Shop


def is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def is_usable_coordinate(coords: Optional[Coordinate]) -> bool:
    return coords is not None and is_finite_number(coords.x) and is_finite_number(coords.z)


def planar_distance(x1: Any, z1: Any, x2: Any, z2: Any) -> Optional[int]:
    """Block distance on the x/z plane, rounded to the nearest whole block.

    Returns ``None`` instead of raising when any component is not a finite
    number.
    """
    if not all(is_finite_number(v) for v in (x1, z1, x2, z2)):
        return None

    raw = math.hypot(x1 - x2, z1 - z2)
    if not math.isfinite(raw):
        return None
    return int(Decimal(repr(raw)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def shop_distance(shop: Shop, user_x: Optional[float], user_z: Optional[float]) -> Optional[int]:
    if not is_usable_coordinate(shop.coordinates):
        return None
    if not (is_finite_number(user_x) and is_finite_number(user_z)):
        return None
    return planar_distance(user_x, user_z, shop.coordinates.x, shop.coordinates.z)


__all__ = ["is_finite_number", "is_usable_coordinate", "planar_distance", "shop_distance"]

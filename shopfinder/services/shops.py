from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from shopfinder.schemas.catalogue import Shop
from shopfinder.services.filters import SearchFilters
from shopfinder.services.geospatial import shop_distance
from shopfinder.services.normalize import name_contains, names_match

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShopDistance:
    shop: Shop
    distance: Optional[int]


def _sells(shop: Shop, active_item: Optional[str], search: str) -> bool:
    if active_item:
        return any(names_match(item.name, active_item) for item in shop.items)
    if not search.strip():
        return True
    return any(name_contains(item.name, search) for item in shop.items)


def aggregate_shops(
    catalogue: Sequence[Shop],
    filters: SearchFilters,
    *,
    search: str = "",
    active_item: Optional[str] = None,
) -> list[ShopDistance]:
    """Shops to list for the current search.

    With an active item only shops selling that exact item are kept;
    otherwise any shop with an item containing ``search`` (or every shop, for
    a blank search). Results are nearest-first when the user location is
    known, catalogue order otherwise.
    """
    search = search or ""
    entries: list[ShopDistance] = []
    for shop in catalogue:
        if not _sells(shop, active_item, search):
            continue
        distance = shop_distance(shop, filters.user_x, filters.user_z)
        if not filters.passes(shop, distance):
            continue
        entries.append(ShopDistance(shop=shop, distance=distance))

    if filters.has_user_location:
        entries.sort(key=lambda entry: (entry.distance is None, entry.distance or 0))

    logger.debug("Aggregated %d of %d shops", len(entries), len(catalogue))
    return entries


__all__ = ["ShopDistance", "aggregate_shops"]

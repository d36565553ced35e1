from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from shopfinder.schemas.catalogue import Item, Shop
from shopfinder.services.filters import SearchFilters
from shopfinder.services.geospatial import shop_distance
from shopfinder.services.normalize import normalize_name
from shopfinder.services.pricing import compute_pricing_metrics

logger = logging.getLogger(__name__)

DEFAULT_OFFER_LIMIT = 5


class RankingMode(str, enum.Enum):
    CHEAPEST = "cheapest"
    CLOSEST = "closest"

    @classmethod
    def _missing_(cls, value: object) -> Optional["RankingMode"]:
        # "best" is the label the in-game board used for the price ordering
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized == "best":
                return cls.CHEAPEST
            for member in cls:
                if member.value == normalized:
                    return member
        return None


@dataclass(frozen=True)
class Offer:
    shop: Shop
    item: Item
    quantity: int
    unit_price: float
    distance: Optional[int]


def collect_offers(
    active_item: str,
    catalogue: Sequence[Shop],
    filters: SearchFilters,
) -> list[Offer]:
    """Every (shop, item) pair whose item is ``active_item``, unfiltered."""
    target = normalize_name(active_item)
    offers: list[Offer] = []
    for shop in catalogue:
        distance = shop_distance(shop, filters.user_x, filters.user_z)
        for item in shop.items:
            if normalize_name(item.name) != target:
                continue
            offers.append(
                Offer(
                    shop=shop,
                    item=item,
                    quantity=item.effective_quantity,
                    unit_price=compute_pricing_metrics(item).unit_price,
                    distance=distance,
                )
            )
    return offers


def _closest_key(offer: Offer) -> tuple:
    # Unknown distances go last; among them the cheaper offer wins
    if offer.distance is None:
        return (1, offer.unit_price)
    return (0, offer.distance)


def rank_offers(offers: Sequence[Offer], mode: RankingMode) -> list[Offer]:
    """Stable sort of ``offers`` under ``mode``."""
    if mode is RankingMode.CLOSEST:
        return sorted(offers, key=_closest_key)
    return sorted(offers, key=lambda offer: offer.unit_price)


def find_offers(
    active_item: Optional[str],
    catalogue: Sequence[Shop],
    filters: SearchFilters,
    mode: RankingMode = RankingMode.CHEAPEST,
    limit: int = DEFAULT_OFFER_LIMIT,
) -> list[Offer]:
    """Best offers for the active item, filtered, ranked and truncated.

    An empty result is a normal outcome (nothing passes the filters); when no
    item is active there is nothing to rank at all.
    """
    if not active_item:
        return []

    offers = collect_offers(active_item, catalogue, filters)
    kept = [offer for offer in offers if filters.passes(offer.shop, offer.distance)]
    ranked = rank_offers(kept, mode)[: max(limit, 0)]

    logger.debug(
        "Offers for %r: %d collected, %d after filters, returning %d (%s)",
        active_item,
        len(offers),
        len(kept),
        len(ranked),
        mode.value,
    )
    return ranked


__all__ = [
    "DEFAULT_OFFER_LIMIT",
    "Offer",
    "RankingMode",
    "collect_offers",
    "find_offers",
    "rank_offers",
]

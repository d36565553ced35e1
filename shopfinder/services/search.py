from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from shopfinder.schemas.catalogue import Shop
from shopfinder.schemas.offers import (
    OfferListResponse,
    OfferSchema,
    ResolutionSchema,
    SearchResponse,
    ShopListResponse,
    ShopSummarySchema,
)
from shopfinder.schemas.queries import SearchQueryParams
from shopfinder.services.filters import SearchFilters
from shopfinder.services.offers import DEFAULT_OFFER_LIMIT, Offer, RankingMode, find_offers
from shopfinder.services.pricing import compute_pricing_metrics, round_price
from shopfinder.services.resolver import ItemResolution, resolve_item
from shopfinder.services.shops import ShopDistance, aggregate_shops


@dataclass(frozen=True)
class SearchResult:
    resolution: ItemResolution
    mode: RankingMode
    offers: list[Offer]
    shops: list[ShopDistance]

    @property
    def not_found(self) -> bool:
        """An item is active yet nothing survives the filters.

        Distinct from "no item chosen yet", where there is nothing to find.
        """
        return self.resolution.active_item is not None and not self.offers


def run_search(
    catalogue: Sequence[Shop],
    *,
    search: str,
    selected: Optional[str],
    filters: SearchFilters,
    mode: RankingMode = RankingMode.CHEAPEST,
    limit: int = DEFAULT_OFFER_LIMIT,
) -> SearchResult:
    resolution = resolve_item(catalogue, search, selected)
    offers = find_offers(resolution.active_item, catalogue, filters, mode, limit)
    shops = aggregate_shops(
        catalogue,
        filters,
        search=resolution.search,
        active_item=resolution.active_item,
    )
    return SearchResult(resolution=resolution, mode=mode, offers=offers, shops=shops)


def run_search_query(catalogue: Sequence[Shop], params: SearchQueryParams, limit: int = DEFAULT_OFFER_LIMIT) -> SearchResult:
    return run_search(
        catalogue,
        search=params.q,
        selected=params.selected,
        filters=params.to_filters(),
        mode=params.mode,
        limit=limit,
    )


def resolution_response(resolution: ItemResolution) -> ResolutionSchema:
    return ResolutionSchema(
        state=resolution.state.value,
        search=resolution.search,
        matching_names=list(resolution.matching_names),
        active_item=resolution.active_item,
        needs_disambiguation=resolution.needs_disambiguation,
    )


def _offer_schema(offer: Offer) -> OfferSchema:
    coords = offer.shop.coordinates
    metrics = compute_pricing_metrics(offer.item)
    return OfferSchema(
        shop_name=offer.shop.name,
        coordinates=coords,
        coordinates_label=coords.display() if coords else None,
        rating=offer.shop.rating,
        item_name=offer.item.name,
        price=offer.item.price,
        quantity=offer.quantity,
        measure=metrics.unit_measure,
        display_quantity=offer.item.display_quantity,
        unit_price=offer.unit_price,
        unit_price_display=round_price(offer.unit_price),
        distance=offer.distance,
    )


def _shop_schema(entry: ShopDistance) -> ShopSummarySchema:
    coords = entry.shop.coordinates
    return ShopSummarySchema(
        name=entry.shop.name,
        coordinates=coords,
        coordinates_label=coords.display() if coords else None,
        rating=entry.shop.rating,
        distance=entry.distance,
        item_count=len(entry.shop.items),
    )


def offers_response(result: SearchResult) -> OfferListResponse:
    return OfferListResponse(
        active_item=result.resolution.active_item,
        mode=result.mode.value,
        items=[_offer_schema(offer) for offer in result.offers],
        not_found=result.not_found,
    )


def shops_response(result: SearchResult) -> ShopListResponse:
    return ShopListResponse(
        active_item=result.resolution.active_item,
        items=[_shop_schema(entry) for entry in result.shops],
    )


def search_response(result: SearchResult) -> SearchResponse:
    return SearchResponse(
        resolution=resolution_response(result.resolution),
        mode=result.mode.value,
        offers=[_offer_schema(offer) for offer in result.offers],
        shops=[_shop_schema(entry) for entry in result.shops],
        not_found=result.not_found,
    )


__all__ = [
    "SearchResult",
    "offers_response",
    "resolution_response",
    "run_search",
    "run_search_query",
    "search_response",
    "shops_response",
]

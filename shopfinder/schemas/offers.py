from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from shopfinder.schemas.catalogue import Coordinate, Shop


class ResolutionSchema(BaseModel):
    state: str
    search: str
    matching_names: list[str]
    active_item: Optional[str]
    needs_disambiguation: bool


class OfferSchema(BaseModel):
    shop_name: str
    coordinates: Optional[Coordinate]
    coordinates_label: Optional[str]
    rating: float
    item_name: str
    price: float
    quantity: int
    measure: Optional[str]
    display_quantity: Optional[str] = Field(description="\"64 cs\" style label, null when the item has no unit")
    unit_price: float = Field(description="Total price divided by quantity")
    unit_price_display: float
    distance: Optional[int]


class ShopSummarySchema(BaseModel):
    name: str
    coordinates: Optional[Coordinate]
    coordinates_label: Optional[str]
    rating: float
    distance: Optional[int]
    item_count: int


class OfferListResponse(BaseModel):
    active_item: Optional[str]
    mode: str
    items: list[OfferSchema]
    not_found: bool = Field(description="An item is active but nothing passes the current filters")


class ShopListResponse(BaseModel):
    active_item: Optional[str]
    items: list[ShopSummarySchema]


class SearchResponse(BaseModel):
    resolution: ResolutionSchema
    mode: str
    offers: list[OfferSchema]
    shops: list[ShopSummarySchema]
    not_found: bool


class CatalogueResponse(BaseModel):
    items: list[Shop]


__all__ = [
    "CatalogueResponse",
    "OfferListResponse",
    "OfferSchema",
    "ResolutionSchema",
    "SearchResponse",
    "ShopListResponse",
    "ShopSummarySchema",
]

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from shopfinder.core.auth import require_shopkeeper
from shopfinder.core.config import get_settings
from shopfinder.routes.search import search_params
from shopfinder.schemas.catalogue import Shop, ShopItemInput, ShopOverride
from shopfinder.schemas.offers import ShopListResponse
from shopfinder.schemas.queries import SearchQueryParams
from shopfinder.services.catalogue import find_shop, get_base_catalogue, get_effective_catalogue
from shopfinder.services.overrides import get_override_store
from shopfinder.services.search import run_search_query, shops_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/shops", tags=["shops"])


class ItemsUpdateRequest(BaseModel):
    """Full replacement price list for one shop."""

    items: list[ShopItemInput]


@router.get("", response_model=ShopListResponse)
async def list_shops(params: SearchQueryParams = Depends(search_params)) -> ShopListResponse:
    result = run_search_query(get_effective_catalogue(), params, limit=get_settings().max_offers)
    return shops_response(result)


@router.get("/{shop_name}", response_model=Shop)
async def shop_detail(shop_name: str) -> Shop:
    shop = find_shop(get_effective_catalogue(), shop_name)
    if shop is None:
        raise HTTPException(status_code=404, detail=f"Unknown shop: {shop_name}")
    return shop


# Plain def: saving rewrites the override file, so it runs in the threadpool
@router.put("/{shop_name}/items", response_model=Shop)
def replace_items(
    shop_name: str,
    payload: ItemsUpdateRequest,
    current_shop: str = Depends(require_shopkeeper),
) -> Shop:
    if find_shop(get_base_catalogue(), shop_name) is None:
        raise HTTPException(status_code=404, detail=f"Unknown shop: {shop_name}")
    if current_shop != shop_name:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Shopkeepers can only edit their own shop",
        )

    items = [row.to_item() for row in payload.items]
    get_override_store().save(shop_name, ShopOverride(items=items))
    logger.info("%s now lists %d items", shop_name, len(items))
    return find_shop(get_effective_catalogue(), shop_name)

from __future__ import annotations

from fastapi import APIRouter, Depends

from shopfinder.core.config import get_settings
from shopfinder.routes.search import search_params
from shopfinder.schemas.offers import OfferListResponse
from shopfinder.schemas.queries import SearchQueryParams
from shopfinder.services.catalogue import get_effective_catalogue
from shopfinder.services.search import offers_response, run_search_query

router = APIRouter(prefix="/offers", tags=["offers"])


@router.get("", response_model=OfferListResponse)
async def list_offers(params: SearchQueryParams = Depends(search_params)) -> OfferListResponse:
    result = run_search_query(get_effective_catalogue(), params, limit=get_settings().max_offers)
    return offers_response(result)

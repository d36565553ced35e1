from __future__ import annotations

from fastapi import APIRouter, Depends

from shopfinder.routes.search import search_params
from shopfinder.schemas.offers import ResolutionSchema
from shopfinder.schemas.queries import SearchQueryParams
from shopfinder.services.catalogue import get_effective_catalogue
from shopfinder.services.resolver import resolve_item
from shopfinder.services.search import resolution_response

router = APIRouter(prefix="/items", tags=["items"])


@router.get("/resolve", response_model=ResolutionSchema)
async def resolve(params: SearchQueryParams = Depends(search_params)) -> ResolutionSchema:
    resolution = resolve_item(get_effective_catalogue(), params.q, params.selected)
    return resolution_response(resolution)

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError

from shopfinder.core.config import get_settings
from shopfinder.schemas.offers import SearchResponse
from shopfinder.schemas.queries import SearchQueryParams
from shopfinder.services.catalogue import get_effective_catalogue
from shopfinder.services.search import run_search_query, search_response

router = APIRouter(tags=["search"])


async def search_params(
    q: Optional[str] = Query(None),
    selected: Optional[str] = Query(None),
    x: Optional[str] = Query(None),
    z: Optional[str] = Query(None),
    max_distance: Optional[str] = Query(None),
    min_rating: Optional[str] = Query(None),
    mode: Optional[str] = Query(None),
) -> SearchQueryParams:
    try:
        return SearchQueryParams(
            q=q,
            selected=selected,
            x=x,
            z=z,
            max_distance=max_distance,
            min_rating=min_rating,
            mode=mode,
        )
    except ValidationError as exc:
        raise HTTPException(
            status_code=422,
            detail=exc.errors(include_context=False, include_url=False),
        ) from exc


@router.get("/search", response_model=SearchResponse)
async def search(params: SearchQueryParams = Depends(search_params)) -> SearchResponse:
    result = run_search_query(get_effective_catalogue(), params, limit=get_settings().max_offers)
    return search_response(result)

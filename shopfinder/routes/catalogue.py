from __future__ import annotations

from fastapi import APIRouter

from shopfinder.schemas.offers import CatalogueResponse
from shopfinder.services.catalogue import get_effective_catalogue

router = APIRouter(tags=["catalogue"])


@router.get("/catalogue", response_model=CatalogueResponse)
async def catalogue() -> CatalogueResponse:
    """Every shop with shopkeeper edits applied, in catalogue order."""
    return CatalogueResponse(items=get_effective_catalogue())

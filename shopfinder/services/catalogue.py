from __future__ import annotations

import functools
import json
import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from shopfinder.core.config import get_settings
from shopfinder.db.seed import SEED_SHOPS
from shopfinder.schemas.catalogue import Shop, ShopOverride
from shopfinder.services.overrides import get_override_store

logger = logging.getLogger(__name__)

_SHOP_LIST = TypeAdapter(list[Shop])


class CatalogueError(Exception):
    """Raised when the base catalogue cannot be loaded."""


def parse_catalogue(raw: Any) -> list[Shop]:
    try:
        shops = _SHOP_LIST.validate_python(raw)
    except ValidationError as exc:
        raise CatalogueError(f"Invalid catalogue: {exc.error_count()} validation error(s)") from exc

    seen: set[str] = set()
    for shop in shops:
        if shop.name in seen:
            raise CatalogueError(f"Duplicate shop name in catalogue: {shop.name!r}")
        seen.add(shop.name)
    return shops


def load_base_catalogue(path: Optional[str] = None) -> list[Shop]:
    """Load the immutable base shop list.

    Reads a JSON array from ``path`` when given, otherwise falls back to the
    built-in seed shops.
    """
    if not path:
        logger.info("No catalogue path configured; using %d seed shops", len(SEED_SHOPS))
        return parse_catalogue(SEED_SHOPS)

    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise CatalogueError(f"Could not read catalogue from {path}: {exc}") from exc

    shops = parse_catalogue(raw)
    logger.info("Loaded %d shops from %s", len(shops), path)
    return shops


def merge_shop(base: Shop, override: Optional[ShopOverride]) -> Shop:
    if override is None:
        return base
    fields = override.set_fields()
    if not fields:
        return base
    # Shallow: an overridden field replaces the base value wholesale
    return Shop.model_validate({**base.model_dump(), **fields})


def resolve_catalogue(
    base_shops: Sequence[Shop],
    overrides_by_name: Mapping[str, ShopOverride],
) -> list[Shop]:
    """Apply shopkeeper overrides to the base list, keeping its order and length."""
    return [merge_shop(shop, overrides_by_name.get(shop.name)) for shop in base_shops]


def find_shop(catalogue: Sequence[Shop], name: str) -> Optional[Shop]:
    for shop in catalogue:
        if shop.name == name:
            return shop
    return None


@functools.lru_cache()
def get_base_catalogue() -> tuple[Shop, ...]:
    return tuple(load_base_catalogue(get_settings().catalogue_path))


def get_effective_catalogue() -> list[Shop]:
    """Base catalogue with the current shopkeeper edits applied."""
    return resolve_catalogue(get_base_catalogue(), get_override_store().all())


__all__ = [
    "CatalogueError",
    "find_shop",
    "get_base_catalogue",
    "get_effective_catalogue",
    "load_base_catalogue",
    "merge_shop",
    "parse_catalogue",
    "resolve_catalogue",
]

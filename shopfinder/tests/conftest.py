"""Test fixtures and configuration for Shopfinder API tests."""
from __future__ import annotations

import os
from collections.abc import Iterator

import pytest

MONUMENT_PASSKEY = "MONUMENTBANK0001"
ARTIFICIAL_PASSKEY = "ARTIFICIALIND002"


def pytest_configure(config):
    """Set up environment variables before any test imports happen."""
    os.environ["SECRET_KEY"] = "test-secret-key-that-is-at-least-32-chars-long"
    os.environ["ENVIRONMENT"] = "development"
    os.environ["RATE_LIMIT"] = "10000/minute"
    os.environ["SHOPKEEPER_PASSKEYS"] = (
        f"{MONUMENT_PASSKEY}:Monument Bank,{ARTIFICIAL_PASSKEY}:Artificial Industries"
    )
    os.environ.pop("CATALOGUE_PATH", None)
    os.environ.pop("OVERRIDE_STORE_PATH", None)

    try:
        from shopfinder.core.config import get_settings
        get_settings.cache_clear()
    except ImportError:
        pass


from fastapi.testclient import TestClient

from shopfinder.schemas.catalogue import Coordinate, Item, Shop


def make_shop(
    name: str,
    items: list[tuple],
    *,
    rating: float = 4.0,
    coords: tuple[float, float, float] | None = (0, 64, 0),
) -> Shop:
    """Build a shop from ``(name, price[, quantity[, measure]])`` tuples."""
    built = []
    for entry in items:
        item_name, price, *rest = entry
        quantity = rest[0] if rest else None
        measure = rest[1] if len(rest) > 1 else None
        built.append(Item(name=item_name, price=price, quantity=quantity, measure=measure))
    coordinates = Coordinate(x=coords[0], y=coords[1], z=coords[2]) if coords is not None else None
    return Shop(name=name, coordinates=coordinates, rating=rating, items=built)


@pytest.fixture
def shop_factory():
    return make_shop


@pytest.fixture
def seed_catalogue() -> list[Shop]:
    from shopfinder.db.seed import SEED_SHOPS
    from shopfinder.services.catalogue import parse_catalogue

    return parse_catalogue(SEED_SHOPS)


@pytest.fixture
def reset_state() -> Iterator[None]:
    """Fresh settings, catalogue and override store around each API test."""
    from shopfinder.core.config import get_settings
    from shopfinder.services.catalogue import get_base_catalogue
    from shopfinder.services.overrides import get_override_store

    get_settings.cache_clear()
    get_base_catalogue.cache_clear()
    get_override_store.cache_clear()
    yield
    get_override_store().clear()
    get_override_store.cache_clear()
    get_base_catalogue.cache_clear()


@pytest.fixture
def client(reset_state) -> Iterator[TestClient]:
    from shopfinder.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def shopkeeper_headers(client: TestClient) -> dict[str, str]:
    response = client.post("/auth/login", json={"passkey": MONUMENT_PASSKEY})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}

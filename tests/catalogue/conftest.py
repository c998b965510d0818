import os

import pytest


@pytest.fixture(scope="session")
def _catalogue_domain(request):
    """Initialize the catalogue domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from catalogue.domain import catalogue

    catalogue.init()
    return catalogue


@pytest.fixture(scope="session", autouse=True)
def setup_db(_catalogue_domain):
    from shared.db import drop_db, setup_db

    setup_db(_catalogue_domain)

    yield

    drop_db(_catalogue_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_catalogue_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _catalogue_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


@pytest.fixture()
def make_product():
    """Build an unsaved Product with sensible defaults."""
    from catalogue.product.product import Product

    def _make(**overrides):
        values = {
            "name": "Trail Running Shoe",
            "description": "Lightweight shoe with a grippy outsole",
            "price": 120.0,
            "category": "Footwear",
            "seller_id": "seller-001",
            "stock": 5,
            "images": [{"public_id": "storefront/products/abc", "url": "https://img.example.com/abc"}],
        }
        values.update(overrides)
        return Product.create(**values)

    return _make

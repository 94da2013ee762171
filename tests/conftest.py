from decimal import Decimal

import pytest

from rest_framework.test import APIClient

from modules.products.models import Product


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def make_product():
    """Factory persisting a Product with sensible defaults."""

    def _make(**overrides) -> Product:
        defaults = {
            "retailer": "Acme",
            "brand": "Zed",
            "model": "Z1",
            "name": "Zed Z1",
            "description": "A fine gadget",
            "price": Decimal("19.99"),
        }
        defaults.update(overrides)
        product = Product(**defaults)
        product.save()
        return product

    return _make


@pytest.fixture()
def product_payload():
    """A valid wire-format product body."""
    return {
        "retailer": "Acme",
        "brand": "Zed",
        "model": "Z1",
        "product_name": "Zed Z1",
        "product_description": "A fine gadget",
        "price": 19.99,
    }

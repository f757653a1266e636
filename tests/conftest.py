"""Pytest fixtures for the product catalogue tests."""

import pytest
from fastapi.testclient import TestClient

from app.catalog.schemas import Product
from app.catalog.store import get_catalog
from app.main import app


CARDS = [
    {"sku": "A1", "name": "Card X", "category": "gpu", "credit": "100"},
    {"sku": "B2", "name": "Card Y", "category": "gpu", "credit": "50"},
]

MIXED = [
    {"sku": "GPU-1", "name": "RTX 4070", "category": "GPU", "brand": "ASUS", "credit": "289000", "stock": "7"},
    {"sku": "GPU-2", "name": "RX 7800 XT", "category": "gpu", "brand": "Sapphire", "credit": 265000, "stock": 0},
    {"sku": "CPU-1", "name": "Ryzen 5 7600", "category": "cpu", "brand": "amd", "credit": "98000", "stock": "21"},
    {"sku": "CPU-2", "name": "Core i5-13400F", "category": "cpu", "brand": "Intel", "credit": "87500", "stock": "abc"},
    {"sku": "RAM-1", "name": "DDR4 16GB kit", "category": "ram", "brand": "Corsair", "price": "21000", "stock": "15"},
    {"sku": "PSU-1", "name": "RM750e 750W", "category": "psu", "credit": "48000", "stock": "5"},
]


def make_catalog(entries):
    return tuple(Product.model_validate(e) for e in entries)


@pytest.fixture
def cards():
    return make_catalog(CARDS)


@pytest.fixture
def mixed():
    return make_catalog(MIXED)


@pytest.fixture
def client_for():
    """Return a factory building a TestClient served from the given catalogue."""

    def _build(catalog):
        app.dependency_overrides[get_catalog] = lambda: catalog
        return TestClient(app)

    yield _build
    app.dependency_overrides.clear()

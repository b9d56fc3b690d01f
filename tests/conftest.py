# tests/conftest.py
import pytest

from storefront.cart import Cart
from storefront.catalog import Catalog
from storefront.database import MemoryStore

from helpers import MONITOR, TECLADO, load


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def catalog(store):
    c = Catalog(store, seed=[TECLADO, MONITOR])
    load(c)
    return c


@pytest.fixture
def cart(store, catalog):
    return Cart(store, catalog)

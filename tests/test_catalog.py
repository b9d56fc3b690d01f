# tests/test_catalog.py
import asyncio

import httpx
import pytest

from storefront.catalog import Catalog, SEED_PRODUCTS, parse_products
from storefront.database import PRODUCTS_KEY, FileStore, MemoryStore
from storefront.errors import DuplicateOrInvalidProduct, RemoteFetchFailed
from storefront.models import Product

from helpers import REMOTE_PRODUCTS, TECLADO, load, remote_source, stored


def test_add_then_find_returns_inserted_product(catalog):
    added = catalog.add("W1", "Webcam", 50000)
    assert catalog.find_by_code("W1") == added
    assert catalog.find_by_code("w1") == Product(code="W1", name="Webcam", price=50000)
    assert catalog.products[-1] == added


def test_add_duplicate_code_in_any_case_is_rejected(catalog):
    before = len(catalog)
    with pytest.raises(DuplicateOrInvalidProduct):
        catalog.add("t1", "Otro teclado", 1000)
    assert len(catalog) == before


@pytest.mark.parametrize("code,name,price", [
    ("", "Webcam", 50000),
    ("W1", "Webcam", 0),
    ("W1", "Webcam", -10),
    ("W1", "Webcam", "abc"),
    ("W1", "Webcam", None),
    ("W1", "", 50000),
])
def test_add_invalid_product_is_rejected(catalog, store, code, name, price):
    snapshot = store.get(PRODUCTS_KEY)
    with pytest.raises(DuplicateOrInvalidProduct):
        catalog.add(code, name, price)
    assert len(catalog) == 2
    assert store.get(PRODUCTS_KEY) == snapshot


def test_add_persists_catalog(catalog, store):
    catalog.add("W1", "Webcam", "50000")
    codes = [p["codigo"] for p in stored(store, PRODUCTS_KEY)]
    assert codes == ["T1", "M1", "W1"]


@pytest.mark.parametrize("code", [None, "", "X9"])
def test_find_by_code_not_found(catalog, code):
    assert catalog.find_by_code(code) is None


def test_load_uses_remote_and_persists_it():
    store = MemoryStore()
    catalog = Catalog(store, remote=remote_source(REMOTE_PRODUCTS))
    products = load(catalog)
    assert [p.code for p in products] == ["T1", "W1"]
    assert catalog.loaded
    assert stored(store, PRODUCTS_KEY) == REMOTE_PRODUCTS


def test_remote_source_requests_fixed_path():
    seen = []

    def handler(request):
        seen.append(request.url.path)
        return httpx.Response(200, json=REMOTE_PRODUCTS)

    source = remote_source()
    source.transport = httpx.MockTransport(handler)
    load(Catalog(MemoryStore(), remote=source))
    assert seen == ["/data/productos.json"]


@pytest.mark.parametrize("source", [
    remote_source(status_code=500, payload={"detail": "boom"}),
    remote_source(payload=[]),
    remote_source(payload={"codigo": "T1"}),
    remote_source(payload=[{"codigo": "T1", "nombre": "Teclado"}]),
    remote_source(content=b"<html>not json</html>"),
    remote_source(error=httpx.ConnectError),
    remote_source(error=httpx.ReadTimeout),
])
def test_load_falls_back_to_snapshot(source):
    store = MemoryStore()
    first = Catalog(store, seed=[TECLADO])
    load(first)
    first.add("W9", "Parlante", 30000)

    catalog = Catalog(store, remote=source)
    products = load(catalog)
    assert [p.code for p in products] == ["T1", "W9"]


@pytest.mark.parametrize("raw", [None, "", "{not json", "[]", '{"a": 1}', '[{"codigo": "X"}]'])
def test_load_falls_back_to_seed(raw):
    store = MemoryStore()
    if raw is not None:
        store.set(PRODUCTS_KEY, raw)
    catalog = Catalog(store, remote=remote_source(status_code=404))
    products = load(catalog)
    assert [p.code for p in products] == [p.code for p in SEED_PRODUCTS]
    # the chosen fallback is persisted
    assert [p["codigo"] for p in stored(store, PRODUCTS_KEY)] == ["T1", "M1", "MO1", "L1", "H1"]


def test_remote_fetch_failure_is_raised_by_source():
    with pytest.raises(RemoteFetchFailed):
        asyncio.run(remote_source(status_code=503).fetch())


def test_parse_products_skips_duplicate_codes():
    products = parse_products([
        {"codigo": "T1", "nombre": "Teclado", "precio": 1},
        {"codigo": "t1", "nombre": "Otro", "precio": 2},
    ])
    assert [p.name for p in products] == ["Teclado"]


def test_parse_products_rejects_empty_list():
    with pytest.raises(ValueError):
        parse_products([])


@pytest.mark.parametrize("price", ["1e400", float("inf"), "-inf", float("nan"), "nan"])
def test_add_rejects_non_finite_price(catalog, store, price):
    snapshot = store.get(PRODUCTS_KEY)
    with pytest.raises(DuplicateOrInvalidProduct):
        catalog.add("X1", "Oferta", price)
    assert catalog.find_by_code("X1") is None
    assert store.get(PRODUCTS_KEY) == snapshot


def test_snapshot_with_infinite_price_falls_back_to_seed():
    store = MemoryStore({PRODUCTS_KEY: '[{"codigo": "X1", "nombre": "Oferta", "precio": Infinity}]'})
    products = load(Catalog(store))
    assert [p.code for p in products] == [p.code for p in SEED_PRODUCTS]


def test_undecodable_snapshot_falls_back_to_seed(tmp_path):
    (tmp_path / f"{PRODUCTS_KEY}.json").write_bytes(b"\xff\xfe\x00garbage")
    products = load(Catalog(FileStore(tmp_path), remote=remote_source(status_code=500)))
    assert [p.code for p in products] == [p.code for p in SEED_PRODUCTS]


def test_empty_seed_still_populates_catalog():
    catalog = Catalog(MemoryStore(), remote=remote_source(error=httpx.ConnectError), seed=[])
    products = load(catalog)
    assert [p.code for p in products] == [p.code for p in SEED_PRODUCTS]

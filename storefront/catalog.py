# storefront/catalog.py
import logging
import math
from typing import Any, Awaitable, Callable, List, Optional, Tuple

import httpx
from pydantic import ValidationError

from .database import PRODUCTS_KEY, KeyValueStore, load_json, save_json
from .errors import DuplicateOrInvalidProduct, RemoteFetchFailed
from .models import Product

logger = logging.getLogger(__name__)

SEED_PRODUCTS: List[Product] = [
    Product(code="T1", name="Teclado", price=55000),
    Product(code="M1", name="Monitor", price=350000),
    Product(code="MO1", name="Mouse", price=40000),
    Product(code="L1", name="Impresora", price=150000),
    Product(code="H1", name="Headsets", price=90000),
]


def parse_products(data: Any) -> List[Product]:
    """Validate a decoded product list.

    Raises ValueError when ``data`` is not a non-empty list of product
    records. Later records reusing an earlier code are dropped.
    """
    if not isinstance(data, list) or not data:
        raise ValueError("expected a non-empty list of products")
    products: List[Product] = []
    for item in data:
        product = Product.model_validate(item)
        if any(p.matches(product.code) for p in products):
            logger.warning("Skipping duplicate product code %s", product.code)
            continue
        products.append(product)
    return products


class RemoteProductSource:
    # fixed document path, resolved against base_url
    path = "data/productos.json"

    def __init__(self, base_url: str, timeout: float = 5.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport

    async def fetch(self) -> List[Product]:
        try:
            async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self.transport) as client:
                r = await client.get(self.path)
                r.raise_for_status()
                return parse_products(r.json())
        except (httpx.HTTPError, ValueError) as e:
            raise RemoteFetchFailed(f"{self.base_url}{self.path}: {e}") from e


Supplier = Callable[[], Awaitable[List[Product]]]


class Catalog:
    def __init__(self, store: KeyValueStore, remote: Optional[RemoteProductSource] = None, seed: Optional[List[Product]] = None):
        self.store = store
        self.remote = remote
        # an empty seed would leave nothing to fall back on
        self.seed = list(seed or SEED_PRODUCTS)
        self.products: List[Product] = []
        self.loaded = False

    def _suppliers(self) -> List[Tuple[str, Supplier]]:
        suppliers: List[Tuple[str, Supplier]] = []
        if self.remote is not None:
            suppliers.append(("remote", self.remote.fetch))
        suppliers.append(("snapshot", self._from_store))
        suppliers.append(("seed", self._from_seed))
        return suppliers

    async def _from_store(self) -> List[Product]:
        return parse_products(load_json(self.store, PRODUCTS_KEY, strict=True))

    async def _from_seed(self) -> List[Product]:
        return [p.model_copy() for p in self.seed]

    async def load(self) -> List[Product]:
        # First supplier that yields products wins; failures fall through.
        for name, supplier in self._suppliers():
            try:
                products = await supplier()
            except Exception as e:
                logger.warning("Catalog source '%s' unavailable: %s", name, e)
                continue
            if not products:
                logger.warning("Catalog source '%s' returned no products", name)
                continue
            self.products = products
            self.loaded = True
            self._save()
            logger.info("Catalog loaded from %s (%d products)", name, len(products))
            return self.products

        logger.error("No catalog source produced products")
        self.products = []
        self.loaded = True
        return self.products

    def _save(self) -> None:
        save_json(self.store, PRODUCTS_KEY, [p.model_dump(by_alias=True) for p in self.products])

    def find_by_code(self, code: Optional[str]) -> Optional[Product]:
        if not code:
            return None
        code = str(code)
        for p in self.products:
            if p.matches(code):
                return p
        return None

    def add(self, code: str, name: str, price) -> Product:
        code = (code or "").strip()
        name = (name or "").strip()
        try:
            price = float(price)
        except (TypeError, ValueError):
            raise DuplicateOrInvalidProduct(f"invalid price: {price!r}")
        if not math.isfinite(price) or price <= 0:
            raise DuplicateOrInvalidProduct(f"price must be > 0, got {price}")
        if not code or not name:
            raise DuplicateOrInvalidProduct("code and name are required")
        if self.find_by_code(code) is not None:
            raise DuplicateOrInvalidProduct(f"code already exists: {code}")

        try:
            product = Product(code=code, name=name, price=price)
        except ValidationError as e:
            raise DuplicateOrInvalidProduct(str(e)) from e
        self.products.append(product)
        self._save()
        logger.info("Added product %s (%s) at %s", product.code, product.name, product.price)
        return product

    def __len__(self) -> int:
        return len(self.products)

    def __iter__(self):
        return iter(self.products)

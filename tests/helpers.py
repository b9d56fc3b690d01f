# tests/helpers.py
import asyncio
import json

import httpx

from storefront.catalog import RemoteProductSource
from storefront.models import Product

TECLADO = Product(code="T1", name="Teclado", price=55000)
MONITOR = Product(code="M1", name="Monitor", price=350000)

REMOTE_PRODUCTS = [
    {"codigo": "T1", "nombre": "Teclado", "precio": 55000},
    {"codigo": "W1", "nombre": "Webcam", "precio": 50000},
]


def remote_source(payload=None, status_code=200, content=None, error=None):
    """RemoteProductSource backed by httpx.MockTransport."""
    def handler(request):
        if error is not None:
            raise error(f"cannot reach {request.url}", request=request)
        if content is not None:
            return httpx.Response(status_code, content=content)
        return httpx.Response(status_code, json=payload)

    return RemoteProductSource("http://remote.test/", timeout=1, transport=httpx.MockTransport(handler))


def load(catalog):
    return asyncio.run(catalog.load())


def stored(store, key):
    return json.loads(store.get(key))

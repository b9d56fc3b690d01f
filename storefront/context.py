# storefront/context.py
from dataclasses import dataclass
from typing import Optional

from .cart import Cart
from .catalog import Catalog, RemoteProductSource
from .config import Settings
from .database import FileStore, KeyValueStore


@dataclass
class Storefront:
    """Everything one user session owns: the store, the catalog and the cart."""

    store: KeyValueStore
    catalog: Catalog
    cart: Cart

    @classmethod
    def create(cls, store: KeyValueStore, remote: Optional[RemoteProductSource] = None, seed=None) -> "Storefront":
        catalog = Catalog(store, remote=remote, seed=seed)
        return cls(store=store, catalog=catalog, cart=Cart(store, catalog))

    async def ensure_loaded(self) -> None:
        if not self.catalog.loaded:
            await self.catalog.load()

    def reload_cart(self) -> None:
        self.cart = Cart(self.store, self.catalog)


def build_storefront(settings: Settings) -> Storefront:
    remote = RemoteProductSource(settings.products_base_url, timeout=settings.fetch_timeout)
    return Storefront.create(FileStore(settings.data_dir), remote=remote)

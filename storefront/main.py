# storefront/main.py
from pathlib import Path
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, HTMLResponse

from . import logic
from .config import Settings, load_settings
from .context import Storefront, build_storefront
from .core import AddToCartIn, ProductIn, SetQuantityIn
from .logger import setup_logging
from .pages import render_cart, render_catalog

# document served as the remote product source
PRODUCTS_FILE = Path(__file__).resolve().parent.parent / "data" / "productos.json"


def create_app(storefront: Optional[Storefront] = None, settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    setup_logging(settings.log_level)
    sf = storefront or build_storefront(settings)

    app = FastAPI(title="storefront (catalog + cart demo)")
    app.state.storefront = sf

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # The catalog is loaded on first use so the remote source can be this app.
    async def get_storefront() -> Storefront:
        await sf.ensure_loaded()
        return sf

    # ---------------------------
    # Remote product document
    # ---------------------------
    @app.get("/data/productos.json")
    async def products_document():
        if not PRODUCTS_FILE.exists():
            raise HTTPException(status_code=404, detail="not found")
        return FileResponse(PRODUCTS_FILE, media_type="application/json")

    # ---------------------------
    # Pages
    # ---------------------------
    @app.get("/", response_class=HTMLResponse)
    async def catalog_page(sf: Storefront = Depends(get_storefront)):
        return render_catalog(sf.catalog.products, sf.cart.item_count())

    @app.get("/carrito", response_class=HTMLResponse)
    async def cart_page(sf: Storefront = Depends(get_storefront)):
        return render_cart(sf.cart)

    # ---------------------------
    # Product endpoints
    # ---------------------------
    @app.get("/products")
    async def list_products(sf: Storefront = Depends(get_storefront)):
        return await logic.list_products_logic(sf)

    @app.get("/products/{code}")
    async def get_product(code: str, sf: Storefront = Depends(get_storefront)):
        return await logic.get_product_logic(sf, code)

    @app.post("/products", status_code=201)
    async def add_product(payload: ProductIn, sf: Storefront = Depends(get_storefront)):
        return await logic.add_product_logic(sf, payload)

    # ---------------------------
    # Cart endpoints
    # ---------------------------
    @app.get("/cart")
    async def view_cart(sf: Storefront = Depends(get_storefront)):
        return await logic.view_cart_logic(sf)

    @app.get("/cart/count")
    async def cart_count(sf: Storefront = Depends(get_storefront)):
        return await logic.cart_count_logic(sf)

    @app.post("/cart/add")
    async def cart_add(payload: AddToCartIn, sf: Storefront = Depends(get_storefront)):
        return await logic.cart_add_logic(sf, payload)

    @app.post("/cart/set")
    async def cart_set(payload: SetQuantityIn, sf: Storefront = Depends(get_storefront)):
        return await logic.cart_set_logic(sf, payload)

    @app.post("/cart/clear")
    async def cart_clear(sf: Storefront = Depends(get_storefront)):
        return await logic.cart_clear_logic(sf)

    @app.post("/cart/checkout")
    async def cart_checkout(sf: Storefront = Depends(get_storefront)):
        return await logic.cart_checkout_logic(sf)

    # ---------------------------
    # Utility: reset (for tests/demo)
    # ---------------------------
    @app.post("/reset")
    async def reset_all():
        return await logic.reset_all_logic(sf)

    return app


app = create_app()

from typing import Any, Dict

from fastapi import HTTPException

from .checkout import checkout
from .context import Storefront
from .core import AddToCartIn, ProductIn, SetQuantityIn, _line_dict, _product_dict, _products_list, format_ars
from .database import CART_KEY, PRODUCTS_KEY
from .errors import DuplicateOrInvalidProduct, EmptyCart, InvalidQuantity, ProductNotFound

# This file contains the core logic for all API endpoints.
# Each function expects a Storefront whose catalog is already loaded.

# Catalog endpoints
async def list_products_logic(sf: Storefront):
    return _products_list(sf.catalog.products)

async def get_product_logic(sf: Storefront, code: str):
    p = sf.catalog.find_by_code(code)
    if not p:
        raise HTTPException(status_code=404, detail="product not found")
    return _product_dict(p)

async def add_product_logic(sf: Storefront, payload: ProductIn):
    try:
        p = sf.catalog.add(payload.code, payload.name, payload.price)
    except DuplicateOrInvalidProduct:
        raise HTTPException(status_code=400, detail="Código inválido o existente")
    return {"product": _product_dict(p), "message": "Producto agregado"}

# Cart endpoints
async def view_cart_logic(sf: Storefront) -> Dict[str, Any]:
    cart = sf.cart
    total = cart.total()
    return {
        "items": [_line_dict(line, p) for line, p in cart.entries()],
        "total": total,
        "total_display": format_ars(total),
        "item_count": cart.item_count(),
    }

async def cart_count_logic(sf: Storefront):
    return {"item_count": sf.cart.item_count()}

async def cart_add_logic(sf: Storefront, payload: AddToCartIn):
    try:
        sf.cart.add_quantity(payload.code, payload.quantity)
    except ProductNotFound:
        raise HTTPException(status_code=404, detail="product not found")
    except InvalidQuantity as e:
        raise HTTPException(status_code=400, detail=str(e))
    return await view_cart_logic(sf)

async def cart_set_logic(sf: Storefront, payload: SetQuantityIn):
    try:
        sf.cart.set_quantity(payload.code, payload.quantity)
    except InvalidQuantity as e:
        raise HTTPException(status_code=400, detail=str(e))
    return await view_cart_logic(sf)

async def cart_clear_logic(sf: Storefront):
    sf.cart.clear()
    return await view_cart_logic(sf)

async def cart_checkout_logic(sf: Storefront):
    try:
        result = checkout(sf.cart)
    except EmptyCart:
        raise HTTPException(status_code=400, detail="El carrito está vacío")
    return {
        "status": "completed",
        "message": result.message,
        "total": result.total,
        "total_display": result.formatted_total,
        "item_count": result.item_count,
    }

# Utility: reset (for tests/demo)
async def reset_all_logic(sf: Storefront):
    sf.store.set(PRODUCTS_KEY, "")
    sf.store.set(CART_KEY, "")
    sf.catalog.loaded = False
    await sf.ensure_loaded()
    sf.reload_cart()
    return {"status": "reset", "products": len(sf.catalog)}

import math
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from .models import CartLine, Product

# Request bodies and formatting helpers shared by the API and the pages.

class ProductIn(BaseModel):
    code: str
    name: str
    price: float = Field(allow_inf_nan=False)

class AddToCartIn(BaseModel):
    code: str
    quantity: int = 1

class SetQuantityIn(BaseModel):
    code: str
    quantity: int

def format_ars(amount: float) -> str:
    # "$" + amount rounded half-up, "." as thousands separator: 110000 -> "$110.000"
    rounded = int(math.floor(amount + 0.5))
    return "$" + f"{rounded:,}".replace(",", ".")

def _product_dict(p: Product) -> Dict[str, Any]:
    return {
        "code": p.code,
        "name": p.name,
        "price": p.price,
        "price_display": format_ars(p.price),
    }

def _line_dict(line: CartLine, p: Product) -> Dict[str, Any]:
    subtotal = p.price * line.quantity
    return {
        "product": _product_dict(p),
        "quantity": line.quantity,
        "subtotal": subtotal,
        "subtotal_display": format_ars(subtotal),
    }

def _products_list(products: List[Product]) -> List[Dict[str, Any]]:
    return [_product_dict(p) for p in products]

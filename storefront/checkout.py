# storefront/checkout.py
import logging
from dataclasses import dataclass

from .cart import Cart
from .core import format_ars
from .errors import EmptyCart

logger = logging.getLogger(__name__)


@dataclass
class CheckoutResult:
    total: float
    formatted_total: str
    item_count: int

    @property
    def message(self) -> str:
        return f"Compra realizada con éxito. Total: {self.formatted_total}"


def checkout(cart: Cart) -> CheckoutResult:
    if cart.is_empty:
        raise EmptyCart("El carrito está vacío")

    total = cart.total()
    result = CheckoutResult(total=total, formatted_total=format_ars(total), item_count=cart.item_count())
    cart.clear()
    logger.info("Checkout completed: %d items, total %s", result.item_count, result.formatted_total)
    return result

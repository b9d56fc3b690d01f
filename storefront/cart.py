# storefront/cart.py
import logging
from typing import Dict, List, Optional, Tuple

from pydantic import ValidationError

from .catalog import Catalog
from .database import CART_KEY, KeyValueStore, load_json, save_json
from .errors import InvalidQuantity, ProductNotFound
from .models import CartLine, Product

logger = logging.getLogger(__name__)


def _check_quantity(value) -> int:
    # bool is an int subclass; True must not count as 1
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidQuantity(f"quantity must be an integer, got {value!r}")
    return value


def _restore_lines(data) -> List[CartLine]:
    # Rebuild persisted lines, dropping bad records and merging repeated codes.
    if not isinstance(data, list):
        return []
    merged: Dict[str, CartLine] = {}
    for item in data:
        try:
            line = CartLine.model_validate(item)
        except ValidationError:
            logger.warning("Dropping malformed cart line: %r", item)
            continue
        key = line.code.upper()
        if key in merged:
            merged[key].quantity += line.quantity
        else:
            merged[key] = line
    return [line for line in merged.values() if line.quantity > 0]


class Cart:
    """Lines of (product code, quantity), written through to the store.

    Every line references a product by code only. Lines whose product has
    left the catalog stay in the cart but are skipped by ``entries`` and
    ``total``.
    """

    def __init__(self, store: KeyValueStore, catalog: Catalog):
        self.store = store
        self.catalog = catalog
        self.lines: List[CartLine] = _restore_lines(load_json(store, CART_KEY, []))

    def _find_line(self, code: Optional[str]) -> Optional[CartLine]:
        if not code:
            return None
        code = str(code).upper()
        for line in self.lines:
            if line.code.upper() == code:
                return line
        return None

    def _save(self) -> None:
        save_json(self.store, CART_KEY, [line.model_dump(by_alias=True) for line in self.lines])

    def add_quantity(self, code: str, delta: int = 1) -> Optional[CartLine]:
        delta = _check_quantity(delta)
        product = self.catalog.find_by_code(code)
        if product is None:
            raise ProductNotFound(code)

        line = self._find_line(product.code)
        if line is None:
            line = CartLine(code=product.code, quantity=delta)
            self.lines.append(line)
        else:
            line.quantity += delta

        self.lines = [x for x in self.lines if x.quantity > 0]
        self._save()
        logger.debug("Cart %s %+d -> %d", product.code, delta, line.quantity)
        return line if line.quantity > 0 else None

    def set_quantity(self, code: str, quantity: int) -> Optional[CartLine]:
        quantity = _check_quantity(quantity)
        line = self._find_line(code)
        if line is None:
            return None

        if quantity <= 0:
            self.lines.remove(line)
            line = None
        else:
            line.quantity = quantity
        self._save()
        logger.debug("Cart %s set to %d", code, quantity)
        return line

    def entries(self) -> List[Tuple[CartLine, Product]]:
        out = []
        for line in self.lines:
            product = self.catalog.find_by_code(line.code)
            if product is None:
                continue
            out.append((line, product))
        return out

    def total(self) -> float:
        return sum(product.price * line.quantity for line, product in self.entries())

    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def clear(self) -> None:
        self.lines = []
        self._save()

# sdk/client.py
import requests
from typing import Optional

class StoreClient:
    def __init__(self, base_url: str = "http://localhost:8085", timeout: int = 10):
        self.base_url = base_url.rstrip("/")
        self.session = requests.Session()
        self.timeout = timeout

    def reset(self):
        r = self.session.post(f"{self.base_url}/reset", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Catalog
    def list_products(self):
        r = self.session.get(f"{self.base_url}/products", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def get_product(self, code: str):
        r = self.session.get(f"{self.base_url}/products/{code}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def add_product(self, code: str, name: str, price: float):
        r = self.session.post(f"{self.base_url}/products", json={
            "code": code, "name": name, "price": price
        }, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Cart
    def add_to_cart(self, code: str, quantity: int = 1):
        r = self.session.post(f"{self.base_url}/cart/add", json={"code": code, "quantity": int(quantity)}, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def set_quantity(self, code: str, quantity: int):
        r = self.session.post(f"{self.base_url}/cart/set", json={"code": code, "quantity": int(quantity)}, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def view_cart(self):
        r = self.session.get(f"{self.base_url}/cart", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def cart_count(self) -> int:
        r = self.session.get(f"{self.base_url}/cart/count", timeout=self.timeout)
        r.raise_for_status()
        return r.json()["item_count"]

    def clear_cart(self):
        r = self.session.post(f"{self.base_url}/cart/clear", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Checkout
    def checkout(self):
        r = self.session.post(f"{self.base_url}/cart/checkout", timeout=self.timeout)
        # do not r.raise_for_status(): an empty cart comes back as a 400 body
        return r.json()


if __name__ == "__main__":
    import argparse
    import os

    parser = argparse.ArgumentParser(description="Storefront client")
    parser.add_argument("--url", default=os.getenv("STOREFRONT_API_URL", "http://127.0.0.1:8085"), help="API base URL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # ---------------------------
    # Product commands
    # ---------------------------
    subparsers.add_parser("list-products", help="List all products")

    gp = subparsers.add_parser("get-product", help="Get a product by its code")
    gp.add_argument("--code", required=True, help="Product code")

    ap = subparsers.add_parser("add-product", help="Add a product to the catalog")
    ap.add_argument("--code", required=True, help="Unique product code")
    ap.add_argument("--name", required=True, help="Product name")
    ap.add_argument("--price", type=float, required=True, help="Price in ARS")

    # ---------------------------
    # Cart commands
    # ---------------------------
    add = subparsers.add_parser("add-to-cart", help="Add product to cart")
    add.add_argument("--code", required=True, help="Product code")
    add.add_argument("--qty", type=int, default=1, help="Quantity to add (negative removes)")

    sq = subparsers.add_parser("set-quantity", help="Set the quantity of a cart line")
    sq.add_argument("--code", required=True, help="Product code")
    sq.add_argument("--qty", type=int, required=True, help="New quantity (0 removes the line)")

    subparsers.add_parser("view-cart", help="View cart contents")
    subparsers.add_parser("cart-count", help="Number of items in the cart")
    subparsers.add_parser("clear-cart", help="Empty the cart")
    subparsers.add_parser("checkout", help="Finish the purchase")
    subparsers.add_parser("reset", help="Reset catalog and cart")

    args = parser.parse_args()
    c = StoreClient(base_url=args.url)

    if args.command == "list-products":
        print(c.list_products())
    elif args.command == "get-product":
        print(c.get_product(args.code))
    elif args.command == "add-product":
        print(c.add_product(args.code, args.name, args.price))
    elif args.command == "add-to-cart":
        print(c.add_to_cart(args.code, args.qty))
    elif args.command == "set-quantity":
        print(c.set_quantity(args.code, args.qty))
    elif args.command == "view-cart":
        print(c.view_cart())
    elif args.command == "cart-count":
        print(c.cart_count())
    elif args.command == "clear-cart":
        print(c.clear_cart())
    elif args.command == "checkout":
        print(c.checkout())
    elif args.command == "reset":
        print(c.reset())

#!/usr/bin/env python
from sdk.client import StoreClient

def main():
    c = StoreClient(base_url="http://127.0.0.1:8085")

    # -----------------------------
    # Reset everything for demo
    # -----------------------------
    print("Resetting store...")
    print(c.reset())

    # -----------------------------
    # Catalog
    # -----------------------------
    print("\nListing products...")
    print(c.list_products())

    print("\nAdding a product...")
    print(c.add_product("W2", "Webcam HD", 65000))

    print("\nLooking up 't1' (codes are case-insensitive)...")
    print(c.get_product("t1"))

    # -----------------------------
    # Cart
    # -----------------------------
    print("\nAdding products to cart...")
    print(c.add_to_cart("t1", 2))
    print(c.add_to_cart("W2", 1))

    print("\nChanging quantities...")
    print(c.set_quantity("T1", 1))
    print(c.add_to_cart("W2", -1))

    print("\nBadge count:", c.cart_count())

    # -----------------------------
    # Checkout
    # -----------------------------
    print("\nChecking out...")
    print(c.checkout())

    print("\nChecking out again (empty cart)...")
    print(c.checkout())

if __name__ == "__main__":
    main()

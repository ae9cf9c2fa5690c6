#!/usr/bin/env python
import os

from sdk.products import ProductsClient


def main():
    c = ProductsClient(base_url="http://127.0.0.1:3000", api_key=os.getenv("API_KEY"))

    # -----------------------------
    # Browse the seed catalogue
    # -----------------------------
    print("Endpoints...")
    print(c.root())

    print("\nListing products...")
    print(c.list_products())

    print("\nElectronics in stock...")
    print(c.list_products(category="electronics", in_stock=True))

    print("\nSearching for 'mug'...")
    print(c.list_products(search="mug"))

    # -----------------------------
    # Create, update, delete
    # -----------------------------
    print("\nCreating product...")
    created = c.create_product("Desk Lamp", "LED lamp with adjustable arm", 45.5, "Home")
    print(created)

    print("\nUpdating product...")
    print(c.update_product(created["id"], "Desk Lamp", "LED lamp, warm white", 39.99, "Home", False))

    print("\nStatistics...")
    print(c.stats())

    print("\nDeleting product...")
    c.delete_product(created["id"])
    print(c.list_products(page=1, limit=2))


if __name__ == "__main__":
    main()

#!/usr/bin/env python
from catalog_sdk.catalogclient import CatalogClient


def main():
    # Run against a freshly started server so the seed catalog is untouched.
    c = CatalogClient(base_url="http://127.0.0.1:8085")

    # -----------------------------
    # Full catalog
    # -----------------------------
    print("Listing products...")
    for p in c.list_products():
        print(p)

    # -----------------------------
    # Combined filter
    # -----------------------------
    print("\nFiltering: name='Desk', categoryId=2, price 100..250")
    print(c.filter_products(name="Desk", category_id=2, min_price=100, max_price=250))

    # -----------------------------
    # Partial update, then filter by the new price
    # -----------------------------
    print("\nRepricing product 5 to 149.99...")
    r = c.update_product(5, price="149.99")
    print(r.status_code, r.json())
    print(c.filter_products(min_price=140, max_price=160))

    # -----------------------------
    # Rejected updates
    # -----------------------------
    print("\nUpdating a product that does not exist...")
    r = c.update_product(999, name="X")
    print(r.status_code, r.json())

    print("\nUpdating with an invalid id...")
    r = c.update_product(0, name="X")
    print(r.status_code, r.json())

    # -----------------------------
    # Inverted price range
    # -----------------------------
    print("\nFiltering with minPrice > maxPrice...")
    r = c.session.get(f"{c.base_url}/api/products", params={"minPrice": 500, "maxPrice": 100})
    print(r.status_code, r.json())


if __name__ == "__main__":
    main()

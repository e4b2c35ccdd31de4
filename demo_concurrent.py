import asyncio
from catalog_sdk.catalogclient import CatalogClient

PRODUCT_ID = 1


async def simulate_update(client, label, **fields):
    r = await client.update_product_async(PRODUCT_ID, **fields)
    if r.status_code == 200:
        print(f"✅ {label}: {r.json()['product']}")
    else:
        print(f"❌ {label} failed with HTTP {r.status_code}: {r.json()}")


async def main():
    c = CatalogClient(base_url="http://127.0.0.1:8085")

    before = [p for p in c.list_products() if p["id"] == PRODUCT_ID]
    print(f"\n🖥️  Before: {before}")

    # One client renames, the other reprices. Both changes must survive.
    print("\n⚡ Sending concurrent partial updates...")
    await asyncio.gather(
        simulate_update(c, "rename", name="Gaming Laptop"),
        simulate_update(c, "reprice", price="1299.99"),
    )

    after = [p for p in c.list_products() if p["id"] == PRODUCT_ID]
    print(f"\n📦 After: {after}")


if __name__ == "__main__":
    asyncio.run(main())

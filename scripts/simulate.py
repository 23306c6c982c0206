"""
Checkout Load Simulation

Runs many storefront shoppers at once against a running backend: each one
loads the catalog, fills a cart with random dishes and checks out.
Run from project root: python scripts/simulate.py

Version: 1.0.0
"""

import asyncio
import sys
import os
import random
import time
import argparse
from datetime import datetime
from typing import Any

import httpx
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from storefront.client import DeliveryDetails, StoreClient, Storefront, StorefrontDocument  # noqa: E402
from storefront.core.config import get_settings  # noqa: E402

# Windows event loop fix
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

API_BASE_URL = os.getenv("API_BASE_URL", get_settings().api_base_url)
TOTAL_ORDERS = 50

# Sample data for random shoppers
FIRST_NAMES = ["Ravi", "Priya", "Arjun", "Sneha", "Kiran", "Anjali", "Rahul", "Divya", "Farhan", "Meera"]
LAST_NAMES = ["Reddy", "Sharma", "Khan", "Naidu", "Iyer", "Rao", "Patel", "Varma", "Das", "Menon"]
AREAS = ["Banjara Hills", "Jubilee Hills", "Madhapur", "Gachibowli", "Kondapur", "Ameerpet"]
PAYMENTS = ["Cash on Delivery", "UPI", "Card on Delivery"]


def generate_random_details() -> DeliveryDetails:
    """Generate random delivery details."""
    return DeliveryDetails(
        name=f"{random.choice(FIRST_NAMES)} {random.choice(LAST_NAMES)}",
        phone=f"9{random.randint(100000000, 999999999)}",
        address=f"{random.randint(1, 99)}-{random.randint(1, 999)}, {random.choice(AREAS)}, Hyderabad",
        payment=random.choice(PAYMENTS),
    )


def fill_random_cart(shop: Storefront) -> None:
    """Add one to four random dishes, some of them more than once."""
    dishes = [(r.id, item.id) for r in shop.state.catalog for item in r.menu]
    for restaurant_id, item_id in random.sample(dishes, k=min(len(dishes), random.randint(1, 4))):
        shop.add_to_cart(restaurant_id, item_id)
        for _ in range(random.randint(0, 2)):
            shop.increment(restaurant_id, item_id)


# =============================================================================
# SHOPPER SIMULATION
# =============================================================================

async def run_shopper(order_num: int) -> dict[str, Any]:
    """One full storefront session: load, fill cart, check out."""
    start_time = time.time()

    async with StoreClient(API_BASE_URL, timeout=30.0) as client:
        shop = Storefront(client, document=StorefrontDocument())
        await shop.start()
        fill_random_cart(shop)
        total = shop.state.cart.totals().total
        placed = await shop.submit_checkout(generate_random_details())

    elapsed = round(time.time() - start_time, 3)
    return {
        "order_num": order_num,
        "success": placed,
        "total": total if placed else 0,
        "time": elapsed,
        "error": None if placed else shop.document.last_alert,
    }


# =============================================================================
# MAIN SIMULATION RUNNER
# =============================================================================

async def run_simulation(num_orders: int = TOTAL_ORDERS) -> dict[str, Any]:
    """
    Run the load simulation.

    Args:
        num_orders: Number of concurrent shoppers
    """
    symbol = get_settings().currency_symbol

    print("=" * 70)
    print("🔥 CHECKOUT SIMULATION - HIGH CONCURRENCY TEST")
    print("=" * 70)
    print(f"📋 Shoppers: {num_orders}")
    print(f"🎯 Target: {API_BASE_URL}")
    print(f"⏰ Started: {datetime.now().strftime('%H:%M:%S')}")
    print("=" * 70)

    start_time = time.time()
    results = await asyncio.gather(*[run_shopper(i + 1) for i in range(num_orders)])
    total_time = round(time.time() - start_time, 2)

    successful = [r for r in results if r["success"]]
    failed = [r for r in results if not r["success"]]

    print("\n" + "=" * 70)
    print("📊 SIMULATION RESULTS")
    print("=" * 70)

    print(f"\n✅ Successful Orders: {len(successful)}/{num_orders}")
    print(f"❌ Failed Orders: {len(failed)}/{num_orders}")
    print(f"⏱️  Total Time: {total_time}s")

    if successful:
        avg_time = round(sum(r["time"] for r in successful) / len(successful), 3)
        revenue = sum(r["total"] for r in successful)

        print("\n📈 Performance Metrics:")
        print(f"   Average Session: {avg_time}s")
        print(f"   Fastest: {min(r['time'] for r in successful)}s")
        print(f"   Slowest: {max(r['time'] for r in successful)}s")
        print(f"   💰 Total Revenue: {symbol}{revenue:.2f}")

    if failed:
        print("\n⚠️  Failed Order Details (showing first 5):")
        for f in failed[:5]:
            print(f"   Shopper #{f['order_num']}: {f['error']}")

    print("\n" + "=" * 70)
    print("🔍 VERIFICATION STEPS")
    print("=" * 70)
    print(f"1. Visit {API_BASE_URL}/api/orders - newest orders first")
    print("2. With LEDGER_EXPORT_ENABLED=true, check the Celery terminal")
    print("3. Run: python scripts/verify.py")
    print("=" * 70)

    return {
        "total": num_orders,
        "successful": len(successful),
        "failed": len(failed),
        "total_time": total_time,
        "results": results,
    }


async def preflight() -> bool:
    """Check the backend before firing shoppers."""
    print("\n" + "=" * 70)
    print("🧪 PRE-FLIGHT CHECKS")
    print("=" * 70)

    async with httpx.AsyncClient(base_url=API_BASE_URL) as client:
        print("\n1️⃣ Health Check...")
        try:
            response = await client.get("/health")
        except httpx.HTTPError as e:
            print(f"   ❌ Backend unreachable: {e}")
            return False
        data = response.json()
        print(f"   Status: {data.get('status')}")
        print(f"   Database: {data.get('database')}")
        print(f"   Catalog: {data.get('catalog')}")
        print(f"   Redis: {data.get('redis')}")

        print("\n2️⃣ Catalog...")
        response = await client.get("/api/restaurants")
        if response.status_code != 200:
            print(f"   ❌ Failed: {response.text[:100]}")
            return False
        print(f"   ✅ {len(response.json())} restaurants")

    print("\n" + "=" * 70)
    return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Checkout Load Simulation")
    parser.add_argument("--orders", type=int, default=TOTAL_ORDERS, help="Number of shoppers")
    parser.add_argument("--skip-checks", action="store_true", help="Skip pre-flight checks")
    args = parser.parse_args()

    if not args.skip_checks and not asyncio.run(preflight()):
        print("\n❌ Pre-flight checks failed. Start the backend first: storefront-api")
        sys.exit(1)

    asyncio.run(run_simulation(num_orders=args.orders))

"""
Concurrent Session Simulation

Runs many simulated users against an OrderingClient at once and checks the
data-layer invariants afterwards:

    - every observed cart total equals Σ price × quantity
    - concurrent adds of the same line never lose quantity
    - every checkout order starts pending/pending with the cart's total
    - cancellation succeeds only before preparation
    - payment changes never move the fulfillment status

Run from project root: python scripts/simulate.py --sessions 50

Author: Khalil Bannouri
Version: 1.0.0
"""

import argparse
import asyncio
import random
import sys
import time
from datetime import datetime
from typing import Any

from restaurant_client import create_client
from restaurant_client.cart_engine import compute_total
from restaurant_client.core.config import DataMode, Settings, setup_logging
from restaurant_client.core.exceptions import InvalidTransitionError
from restaurant_client.order_lifecycle import can_cancel
from restaurant_client.schemas import (
    CartItemCreate,
    CustomizationKind,
    DeliveryType,
    MenuItem,
    OrderStatus,
    PaymentStatus,
)

# Windows event loop fix
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

FORWARD_PATH = [
    OrderStatus.CONFIRMED,
    OrderStatus.PREPARING,
    OrderStatus.READY,
    OrderStatus.COMPLETED,
]


def random_customizations(item: MenuItem) -> dict:
    """Pick options for a menu item; free text is skipped."""
    chosen: dict = {}
    for custom in item.customizations:
        if not custom.options:
            continue
        if custom.kind == CustomizationKind.MULTI_CHOICE:
            picks = random.sample(custom.options, k=random.randint(0, 2))
            if picks:
                chosen[custom.id] = picks
        elif custom.required or random.random() < 0.5:
            chosen[custom.id] = random.choice(custom.options)
    return chosen


async def run_session(client, session_num: int, menus: dict[str, list[MenuItem]]) -> dict[str, Any]:
    """One user: fill a cart (with concurrent duplicate adds), check out, move the order."""
    user_id = f"sim-{session_num}"
    start_time = time.time()
    violations: list[str] = []

    try:
        restaurant_id = random.choice([rid for rid, items in menus.items() if items])
        menu = menus[restaurant_id]
        expected_total = 0.0

        for _ in range(random.randint(1, 4)):
            item = random.choice(menu)
            line = CartItemCreate(
                menu_item=item,
                quantity=random.randint(1, 3),
                customizations=random_customizations(item),
            )
            # same line twice at once; the store must merge both
            results = await asyncio.gather(
                client.carts.add_to_cart(user_id, line),
                client.carts.add_to_cart(user_id, line),
            )
            expected_total += 2 * line.quantity * item.price
            for cart in results:
                if cart.total_amount != compute_total(cart.items):
                    violations.append(f"cart total drift: {cart.total_amount}")

        cart = await client.carts.get_cart(user_id)
        if cart.total_amount != round(expected_total, 2):
            violations.append(f"lost cart update: {cart.total_amount} != {expected_total:.2f}")
        order = await client.checkout(
            user_id,
            delivery_type=random.choice(list(DeliveryType)),
            payment_method="card",
        )

        if order.total_amount != cart.total_amount:
            violations.append(f"order total {order.total_amount} != cart {cart.total_amount}")
        if (order.status, order.payment_status) != (OrderStatus.PENDING, PaymentStatus.PENDING):
            violations.append(f"new order not pending/pending: {order.status}/{order.payment_status}")

        if random.random() < 0.7:
            paid = await client.orders.update_payment_status(order.id, PaymentStatus.PAID)
            if paid.status != order.status:
                violations.append("payment update moved status")
            order = paid

        for target in FORWARD_PATH[:random.randint(0, len(FORWARD_PATH))]:
            order = await client.orders.update_order_status(order.id, target)

        try:
            cancelled = await client.orders.cancel_order(order.id)
            if not can_cancel(order):
                violations.append(f"cancelled from {order.status.value}")
            if cancelled.payment_status != order.payment_status:
                violations.append("cancel touched payment status")
            order = cancelled
        except InvalidTransitionError:
            if can_cancel(order):
                violations.append(f"cancel refused from {order.status.value}")

        return {
            "session": session_num,
            "success": not violations,
            "violations": violations,
            "status": order.status.value,
            "total": order.total_amount,
            "time": round(time.time() - start_time, 3),
        }

    except Exception as e:
        return {
            "session": session_num,
            "success": False,
            "violations": [f"{type(e).__name__}: {e}"],
            "time": round(time.time() - start_time, 3),
        }


async def run_simulation(num_sessions: int, max_latency: float) -> dict[str, Any]:
    """
    Run the concurrent session simulation.

    Args:
        num_sessions: Number of simulated users
        max_latency: Upper bound of the simulated store latency
    """
    settings = Settings(
        data_mode=DataMode.MOCK,
        mock_min_latency=0.0,
        mock_max_latency=max_latency,
    )

    print("=" * 70)
    print("🔥 CONCURRENT SESSION SIMULATION")
    print("=" * 70)
    print(f"📋 Sessions: {num_sessions}")
    print(f"🔧 Data mode: {settings.data_mode.value}")
    print(f"⏰ Started: {datetime.now().strftime('%H:%M:%S')}")
    print("=" * 70)

    start_time = time.time()

    async with create_client(settings) as client:
        restaurants = await client.restaurants.get_restaurants()
        menus = {
            r.id: [m for m in await client.restaurants.get_menu(r.id) if m.is_available]
            for r in restaurants
        }

        results = await asyncio.gather(*[
            run_session(client, i + 1, menus) for i in range(num_sessions)
        ])

        leftover_carts = [
            i + 1 for i in range(num_sessions)
            if await client.carts.get_cart(f"sim-{i + 1}") is not None
        ]

    total_time = round(time.time() - start_time, 2)

    successful = [r for r in results if r["success"]]
    failed = [r for r in results if not r["success"]]

    print("\n" + "=" * 70)
    print("📊 SIMULATION RESULTS")
    print("=" * 70)
    print(f"\n✅ Clean sessions: {len(successful)}/{num_sessions}")
    print(f"❌ Sessions with violations: {len(failed)}/{num_sessions}")
    print(f"🛒 Carts left after checkout: {len(leftover_carts)}")
    print(f"⏱️  Total Time: {total_time}s")

    if successful:
        by_status: dict[str, int] = {}
        for r in successful:
            by_status[r["status"]] = by_status.get(r["status"], 0) + 1
        revenue = sum(r["total"] for r in successful if r["status"] != "cancelled")
        print("\n📈 Final order states:")
        for status, count in sorted(by_status.items()):
            print(f"   {status}: {count}")
        print(f"   💰 Non-cancelled revenue: ${revenue:.2f}")

    if failed:
        print("\n⚠️  Violations (showing first 5 sessions):")
        for r in failed[:5]:
            print(f"   Session #{r['session']}: {'; '.join(r['violations'])}")

    print("=" * 70)

    return {
        "total": num_sessions,
        "successful": len(successful),
        "failed": len(failed),
        "leftover_carts": leftover_carts,
        "total_time": total_time,
        "results": results,
    }


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Concurrent Session Simulation")
    parser.add_argument("--sessions", type=int, default=50, help="Number of simulated users")
    parser.add_argument("--max-latency", type=float, default=0.05,
                        help="Upper bound of simulated store latency in seconds")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for a repeatable run")
    parser.add_argument("--verbose", action="store_true", help="Log store activity")
    args = parser.parse_args()

    if args.seed is not None:
        random.seed(args.seed)
    if args.verbose:
        setup_logging()

    summary = asyncio.run(run_simulation(args.sessions, args.max_latency))
    sys.exit(0 if summary["failed"] == 0 and not summary["leftover_carts"] else 1)

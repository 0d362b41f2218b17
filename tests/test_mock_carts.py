import asyncio

import pytest

from restaurant_client.core.exceptions import NotFoundError
from restaurant_client.core.locks import KeyedLock
from restaurant_client.schemas import CartItemCreate, CartItemUpdate


@pytest.mark.anyio
async def test_get_cart_without_cart_returns_none(empty_store):
    assert await empty_store.carts.get_cart("nobody") is None


@pytest.mark.anyio
async def test_same_line_twice_merges(empty_store, menu_item_factory):
    item = menu_item_factory("A", price=10.0)
    choice = {"size": "Large", "toppings": ["Olives", "Basil"]}

    await empty_store.carts.add_to_cart("u1", CartItemCreate(menu_item=item, quantity=2,
                                                             customizations=choice))
    cart = await empty_store.carts.add_to_cart(
        "u1",
        CartItemCreate(menu_item=item, quantity=1,
                       customizations={"toppings": ["Basil", "Olives"], "size": "Large"}),
    )

    assert len(cart.items) == 1
    assert cart.items[0].quantity == 3
    assert cart.total_amount == 30.0


@pytest.mark.anyio
async def test_returned_cart_is_a_copy(empty_store, menu_item_factory):
    cart = await empty_store.carts.add_to_cart(
        "u1", CartItemCreate(menu_item=menu_item_factory("A"), quantity=1)
    )
    cart.items[0].quantity = 50

    fresh = await empty_store.carts.get_cart("u1")
    assert fresh.items[0].quantity == 1
    assert fresh.total_amount == 10.0


@pytest.mark.anyio
async def test_update_remove_and_clear_keep_total_consistent(empty_store, menu_item_factory):
    carts = empty_store.carts
    await carts.add_to_cart("u1", CartItemCreate(menu_item=menu_item_factory("A", price=10.0),
                                                 quantity=2))
    cart = await carts.add_to_cart("u1", CartItemCreate(menu_item=menu_item_factory("B", price=5.0),
                                                        quantity=1))
    line_a, line_b = cart.items

    cart = await carts.update_cart_item("u1", line_a.id, CartItemUpdate(quantity=4))
    assert cart.total_amount == 45.0

    cart = await carts.remove_from_cart("u1", line_a.id)
    assert [line.id for line in cart.items] == [line_b.id]
    assert cart.total_amount == 5.0

    cart = await carts.remove_from_cart("u1", line_b.id)
    assert cart.is_empty
    assert cart.total_amount == 0.0

    await carts.clear_cart("u1")
    assert await carts.get_cart("u1") is None


@pytest.mark.anyio
async def test_unknown_cart_item_raises(empty_store, menu_item_factory):
    with pytest.raises(NotFoundError):
        await empty_store.carts.remove_from_cart("u1", "missing")

    await empty_store.carts.add_to_cart(
        "u1", CartItemCreate(menu_item=menu_item_factory("A"), quantity=1)
    )
    with pytest.raises(NotFoundError):
        await empty_store.carts.update_cart_item("u1", "missing", CartItemUpdate(quantity=2))


@pytest.mark.anyio
async def test_concurrent_adds_do_not_lose_updates(menu_item_factory):
    from restaurant_client.services.mock import MockStore

    store = MockStore(min_latency=0.0, max_latency=0.01, seed=False)
    item = menu_item_factory("A", price=2.5)

    await asyncio.gather(*[
        store.carts.add_to_cart("u1", CartItemCreate(menu_item=item, quantity=1))
        for _ in range(25)
    ])

    cart = await store.carts.get_cart("u1")
    assert len(cart.items) == 1
    assert cart.items[0].quantity == 25
    assert cart.total_amount == 62.5


@pytest.mark.anyio
async def test_keyed_lock_serializes_same_key_only():
    locks = KeyedLock()
    order = []

    async def worker(key, tag):
        async with locks.hold(key):
            assert locks.is_locked(key)
            order.append(f"{tag}-in")
            await asyncio.sleep(0.01)
            order.append(f"{tag}-out")

    await asyncio.gather(worker("a", "1"), worker("a", "2"), worker("b", "3"))

    first = order.index("1-in")
    assert order[first + 1] != "2-in"
    assert order.index("1-out") < order.index("2-in")
    assert order.index("3-in") < order.index("1-out")
    assert len(locks) == 0
    assert not locks.is_locked("a")


@pytest.mark.anyio
async def test_update_into_an_existing_line_merges_them(empty_store, menu_item_factory):
    carts = empty_store.carts
    item = menu_item_factory("A", price=10.0)
    await carts.add_to_cart("u1", CartItemCreate(menu_item=item, quantity=1,
                                                 customizations={"size": "Small"}))
    cart = await carts.add_to_cart("u1", CartItemCreate(menu_item=item, quantity=2,
                                                        customizations={"size": "Large"}))
    small, large = cart.items

    cart = await carts.update_cart_item(
        "u1", large.id, CartItemUpdate(customizations={"size": "Small"})
    )

    assert [(line.id, line.quantity) for line in cart.items] == [(small.id, 3)]
    assert cart.total_amount == 30.0

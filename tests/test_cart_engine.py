import pytest

from restaurant_client import cart_engine
from restaurant_client.core.exceptions import ValidationError
from restaurant_client.schemas import Cart, CartItemCreate, CartItemUpdate


def _ids():
    counter = iter(range(1, 1000))
    return lambda: f"line-{next(counter)}"


def test_canonical_customizations_ignores_order_and_whitespace():
    first = {"toppings": ["Olives", "Basil"], "size": " Large "}
    second = {"size": "Large", "toppings": ["Basil", "Olives"], "note": "  "}

    assert cart_engine.canonical_customizations(first) == {
        "size": "Large",
        "toppings": ["Basil", "Olives"],
    }
    assert cart_engine.identity_key("A", first) == cart_engine.identity_key("A", second)


def test_identity_key_differs_for_different_choices():
    small = cart_engine.identity_key("A", {"size": "Small"})
    large = cart_engine.identity_key("A", {"size": "Large"})
    other_item = cart_engine.identity_key("B", {"size": "Small"})

    assert small != large
    assert small != other_item


def test_empty_selections_match_no_selection():
    assert cart_engine.identity_key("A", {"toppings": []}) == cart_engine.identity_key("A", None)


def test_merge_same_line_sums_quantity(menu_item_factory):
    cart = Cart(id="c1", user_id="u1", restaurant_id="r1")
    item = menu_item_factory("A", price=10.0)
    ids = _ids()

    cart_engine.merge_item(cart, CartItemCreate(menu_item=item, quantity=2,
                                                customizations={"size": "Large"}), ids)
    line = cart_engine.merge_item(cart, CartItemCreate(menu_item=item, quantity=3,
                                                       customizations={"size": "Large"}), ids)

    assert len(cart.items) == 1
    assert line.quantity == 5
    assert cart.total_amount == 50.0


def test_merge_different_customizations_appends(menu_item_factory):
    cart = Cart(id="c1", user_id="u1", restaurant_id="r1")
    item = menu_item_factory("A", price=10.0)
    ids = _ids()

    cart_engine.merge_item(cart, CartItemCreate(menu_item=item, quantity=1,
                                                customizations={"size": "Small"}), ids)
    cart_engine.merge_item(cart, CartItemCreate(menu_item=item, quantity=1,
                                                customizations={"size": "Large"}), ids)

    assert [line.id for line in cart.items] == ["line-1", "line-2"]
    assert cart.total_amount == 20.0


def test_total_rounds_to_cents(menu_item_factory):
    cart = Cart(id="c1", user_id="u1", restaurant_id="r1")
    cart_engine.merge_item(
        cart, CartItemCreate(menu_item=menu_item_factory("A", price=18.99), quantity=3), _ids()
    )
    assert cart.total_amount == 56.97


def test_unavailable_item_rejected(menu_item_factory):
    cart = Cart(id="c1", user_id="u1", restaurant_id="r1")
    sold_out = menu_item_factory("A", is_available=False)

    with pytest.raises(ValidationError):
        cart_engine.merge_item(cart, CartItemCreate(menu_item=sold_out, quantity=1), _ids())
    assert cart.items == []


def test_other_restaurant_rejected_unless_cart_empty(menu_item_factory):
    cart = Cart(id="c1", user_id="u1", restaurant_id="r1")
    ids = _ids()
    cart_engine.merge_item(
        cart, CartItemCreate(menu_item=menu_item_factory("A"), quantity=1), ids
    )

    foreign = menu_item_factory("Z", restaurant_id="r2")
    with pytest.raises(ValidationError):
        cart_engine.merge_item(cart, CartItemCreate(menu_item=foreign, quantity=1), ids)

    cart.items.clear()
    cart_engine.merge_item(cart, CartItemCreate(menu_item=foreign, quantity=1), ids)
    assert cart.restaurant_id == "r2"


def test_apply_update_canonicalizes(menu_item_factory):
    cart = Cart(id="c1", user_id="u1", restaurant_id="r1")
    line = cart_engine.merge_item(
        cart, CartItemCreate(menu_item=menu_item_factory("A"), quantity=1), _ids()
    )

    cart_engine.apply_update(
        cart,
        line,
        CartItemUpdate(quantity=4, customizations={"toppings": ["Olives", "Basil"]}),
    )

    assert line.quantity == 4
    assert line.customizations == {"toppings": ["Basil", "Olives"]}
    assert cart.total_amount == 40.0


def test_update_that_matches_another_line_folds_into_it(menu_item_factory):
    cart = Cart(id="c1", user_id="u1", restaurant_id="r1")
    ids = _ids()
    large = cart_engine.merge_item(
        cart,
        CartItemCreate(menu_item=menu_item_factory("A"), quantity=2,
                       customizations={"size": "Large"}),
        ids,
    )
    small = cart_engine.merge_item(
        cart,
        CartItemCreate(menu_item=menu_item_factory("A"), quantity=1,
                       customizations={"size": "Small"}),
        ids,
    )

    line = cart_engine.apply_update(
        cart, small, CartItemUpdate(customizations={"size": " Large "})
    )

    assert line.id == large.id
    assert [(item.id, item.quantity) for item in cart.items] == [(large.id, 3)]
    assert cart.total_amount == 30.0


def test_merge_has_no_quantity_ceiling(menu_item_factory):
    cart = Cart(id="c1", user_id="u1", restaurant_id="r1")
    ids = _ids()
    item = menu_item_factory("A", price=1.0)
    cart_engine.merge_item(cart, CartItemCreate(menu_item=item, quantity=99), ids)
    line = cart_engine.merge_item(cart, CartItemCreate(menu_item=item, quantity=1), ids)

    assert line.quantity == 100
    # the merged cart still round-trips through the wire model
    reparsed = Cart.model_validate(cart.to_wire())
    assert reparsed.items[0].quantity == 100
    assert reparsed.total_amount == 100.0


def test_to_order_items_snapshots_prices(menu_item_factory):
    cart = Cart(id="c1", user_id="u1", restaurant_id="r1")
    ids = _ids()
    cart_engine.merge_item(
        cart, CartItemCreate(menu_item=menu_item_factory("A", price=10.0), quantity=2,
                             notes="no onions"), ids
    )
    cart_engine.merge_item(
        cart, CartItemCreate(menu_item=menu_item_factory("B", price=5.0), quantity=1), ids
    )

    items = cart_engine.to_order_items(cart)

    assert [(i.menu_item_id, i.price, i.quantity) for i in items] == [
        ("A", 10.0, 2),
        ("B", 5.0, 1),
    ]
    assert items[0].special_instructions == "no onions"
    assert sum(i.line_total for i in items) == cart.total_amount

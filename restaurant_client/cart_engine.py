"""
Cart Consistency Engine

Pure functions that keep a Cart internally consistent:

    - identity_key(): decides whether two lines are "the same line"
    - merge_item(): add-or-increase under that identity rule
    - recompute_total(): total_amount = Σ price × quantity

Customization normalization:
    Two selections merge when they describe the same choice, regardless of
    the order the options were picked in. Mapping keys are sorted,
    multi-choice lists are sorted, free text is stripped, and empty values
    are dropped before serializing.

Author: Khalil Bannouri
Version: 1.0.0
"""

import json
import logging
from typing import Callable, Iterable, Optional

from restaurant_client.core.exceptions import ValidationError
from restaurant_client.schemas import (
    Cart,
    CartItem,
    CartItemCreate,
    CartItemUpdate,
    CustomizationValue,
    MenuItem,
    OrderItem,
)

logger = logging.getLogger(__name__)

IdentityKey = tuple[str, str]


def canonical_customizations(
    customizations: Optional[dict[str, CustomizationValue]],
) -> dict[str, CustomizationValue]:
    """
    Normalize a customization selection.

    Args:
        customizations: customization-id -> chosen value or values

    Returns:
        A new dict with sorted keys, sorted/stripped list values and
        stripped string values; empty selections removed.
    """
    normalized: dict[str, CustomizationValue] = {}
    for key in sorted(customizations or {}):
        value = customizations[key]
        if isinstance(value, (list, tuple, set)):
            options = sorted(str(v).strip() for v in value if str(v).strip())
            if options:
                normalized[key] = options
        elif value is not None:
            text = str(value).strip()
            if text:
                normalized[key] = text
    return normalized


def identity_key(
    menu_item_id: str,
    customizations: Optional[dict[str, CustomizationValue]],
) -> IdentityKey:
    """Merge identity of a cart line: (menu item id, canonical selection)."""
    serialized = json.dumps(
        canonical_customizations(customizations),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return menu_item_id, serialized


def compute_total(items: Iterable[CartItem]) -> float:
    """Σ menu_item.price × quantity, rounded to cents."""
    return round(sum(item.menu_item.price * item.quantity for item in items), 2)


def recompute_total(cart: Cart) -> Cart:
    """Overwrite the derived total in place and return the cart."""
    cart.total_amount = compute_total(cart.items)
    return cart


def find_line(cart: Cart, key: IdentityKey) -> Optional[CartItem]:
    for item in cart.items:
        if identity_key(item.menu_item.id, item.customizations) == key:
            return item
    return None


def find_item(cart: Cart, cart_item_id: str) -> Optional[CartItem]:
    for item in cart.items:
        if item.id == cart_item_id:
            return item
    return None


def ensure_addable(cart: Optional[Cart], menu_item: MenuItem) -> None:
    """
    Reject lines that cannot join the cart.

    Raises:
        ValidationError: item unavailable, or the cart already holds items
            from another restaurant
    """
    if not menu_item.is_available:
        raise ValidationError(f"Menu item '{menu_item.name}' is not available")

    if cart is not None and cart.items and cart.restaurant_id != menu_item.restaurant_id:
        raise ValidationError(
            f"Cart holds items from restaurant {cart.restaurant_id}; "
            f"clear it before ordering from restaurant {menu_item.restaurant_id}"
        )


def merge_item(
    cart: Cart,
    new_item: CartItemCreate,
    id_factory: Callable[[], str],
) -> CartItem:
    """
    Add a line to the cart, merging with an identical line if present.

    The cart is mutated in place and its total recomputed.

    Args:
        cart: Cart to mutate
        new_item: Line to add
        id_factory: Produces the id for a brand-new line

    Returns:
        The line that now holds the added quantity
    """
    ensure_addable(cart, new_item.menu_item)

    if not cart.items:
        cart.restaurant_id = new_item.menu_item.restaurant_id

    key = identity_key(new_item.menu_item.id, new_item.customizations)
    existing = find_line(cart, key)

    if existing is not None:
        existing.quantity += new_item.quantity
        line = existing
        logger.debug(f"Merged {new_item.quantity} into cart line {line.id}")
    else:
        line = CartItem(
            id=id_factory(),
            menu_item=new_item.menu_item.model_copy(deep=True),
            quantity=new_item.quantity,
            customizations=canonical_customizations(new_item.customizations),
            notes=new_item.notes,
        )
        cart.items.append(line)
        logger.debug(f"Appended cart line {line.id} ({line.menu_item.name})")

    recompute_total(cart)
    return line


def apply_update(cart: Cart, item: CartItem, updates: CartItemUpdate) -> CartItem:
    """
    Apply the fields that are set on `updates` to a line, in place.

    If new customizations make the line identical to another line, the two
    are folded into that other line and the updated one is dropped.

    Returns:
        The line that now holds the updated quantity
    """
    if updates.quantity is not None:
        item.quantity = updates.quantity
    if updates.customizations is not None:
        item.customizations = canonical_customizations(updates.customizations)
    if updates.notes is not None:
        item.notes = updates.notes

    key = identity_key(item.menu_item.id, item.customizations)
    twin = next(
        (
            line for line in cart.items
            if line is not item
            and identity_key(line.menu_item.id, line.customizations) == key
        ),
        None,
    )
    if twin is not None:
        twin.quantity += item.quantity
        cart.items.remove(item)
        logger.debug(f"Folded cart line {item.id} into {twin.id}")
        item = twin

    recompute_total(cart)
    return item


def to_order_items(cart: Cart) -> list[OrderItem]:
    """Snapshot cart lines as order lines."""
    return [
        OrderItem(
            menu_item_id=item.menu_item.id,
            name=item.menu_item.name,
            price=item.menu_item.price,
            quantity=item.quantity,
            customizations=dict(item.customizations),
            special_instructions=item.notes,
        )
        for item in cart.items
    ]

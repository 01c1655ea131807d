"""Cart merge rules.

A cart is an ordered tuple of `CartItem` keyed by item id. Every function here
returns a new tuple and keeps the invariant of at most one entry per id.
"""
from typing import Iterable, Tuple

from app.domain.models import CartItem, MenuItem, OrderLine

Cart = Tuple[CartItem, ...]


def add_item(cart: Cart, item: MenuItem) -> Cart:
    """Increment an existing entry or append a new one with quantity 1."""
    if any(entry.id == item.id for entry in cart):
        return tuple(
            entry.model_copy(update={"quantity": entry.quantity + 1}) if entry.id == item.id else entry
            for entry in cart
        )
    return cart + (CartItem.from_menu_item(item),)


def remove_item(cart: Cart, item_id: str) -> Cart:
    return tuple(entry for entry in cart if entry.id != item_id)


def set_quantity(cart: Cart, item_id: str, quantity: int) -> Cart:
    if quantity <= 0:
        return remove_item(cart, item_id)
    return tuple(
        entry.model_copy(update={"quantity": quantity}) if entry.id == item_id else entry
        for entry in cart
    )


def find_item(cart: Cart, item_id: str) -> CartItem | None:
    return next((entry for entry in cart if entry.id == item_id), None)


def normalize(items: Iterable[CartItem]) -> Cart:
    """Merge duplicate ids (first position wins, quantities summed)."""
    merged: dict[str, CartItem] = {}
    for entry in items:
        existing = merged.get(entry.id)
        if existing:
            merged[entry.id] = existing.model_copy(update={"quantity": existing.quantity + entry.quantity})
        else:
            merged[entry.id] = entry
    return tuple(merged.values())


def subtotal(cart: Cart) -> float:
    return sum(entry.price * entry.quantity for entry in cart)


def item_count(cart: Cart) -> int:
    return sum(entry.quantity for entry in cart)


def order_lines(cart: Cart) -> tuple[OrderLine, ...]:
    """Name + quantity snapshot, decoupled from live ids and prices."""
    return tuple(OrderLine(name=entry.name, quantity=entry.quantity) for entry in cart)

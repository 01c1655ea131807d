import json
import logging
from typing import List

from pydantic import TypeAdapter, ValidationError

from app.domain import cart as cart_rules
from app.domain.models import CartItem, MenuItem
from app.infrastructure.cart_storage import CartStorage

logger = logging.getLogger(__name__)

_cart_items = TypeAdapter(List[CartItem])


class CartStore:
    """In-memory cart mirrored to durable storage after every mutation."""

    def __init__(self, storage: CartStorage):
        self.storage = storage
        self._items: cart_rules.Cart = self._restore()

    @property
    def items(self) -> cart_rules.Cart:
        return self._items

    @property
    def count(self) -> int:
        return cart_rules.item_count(self._items)

    @property
    def subtotal(self) -> float:
        return cart_rules.subtotal(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def get(self, item_id: str) -> CartItem | None:
        return cart_rules.find_item(self._items, item_id)

    def add(self, item: MenuItem) -> CartItem:
        self._commit(cart_rules.add_item(self._items, item))
        return self.get(item.id)

    def set_quantity(self, item_id: str, quantity: int):
        if quantity <= 0:
            self.remove(item_id)
            return
        self._commit(cart_rules.set_quantity(self._items, item_id, quantity))

    def remove(self, item_id: str):
        self._commit(cart_rules.remove_item(self._items, item_id))

    def clear(self):
        self._commit(())

    def _commit(self, items: cart_rules.Cart):
        self._items = items
        payload = json.dumps([item.to_wire() for item in items], ensure_ascii=False)
        self.storage.write(payload)

    def _restore(self) -> cart_rules.Cart:
        raw = self.storage.read()
        if not raw:
            return ()
        try:
            items = _cart_items.validate_json(raw)
        except (ValidationError, ValueError) as e:
            logger.warning(f"⚠️ Failed to parse saved cart, starting empty: {e}")
            return ()
        return cart_rules.normalize(items)

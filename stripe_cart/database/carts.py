"""Cart storage for the storefront"""

import logging

from pydantic import ValidationError

from ..models.cart import Cart, CartItemList
from .storage import KeyValueStorage

logger = logging.getLogger(__name__)

CART_KEY = "stripe_cart"


class CartStore:
    """Persists the cart as a JSON array under a single storage key"""

    def __init__(self, storage: KeyValueStorage, key: str = CART_KEY):
        self.storage = storage
        self.key = key

    def load(self) -> Cart:
        """Load the cart, falling back to an empty cart on missing or corrupt data"""
        raw = self.storage.get_item(self.key)
        if raw is None:
            return Cart()

        try:
            items = CartItemList.validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Discarding corrupt cart under '{self.key}': {e.error_count()} error(s)")
            return Cart()

        return Cart(items=items)

    def save(self, cart: Cart) -> None:
        """Serialize and persist the cart"""
        raw = CartItemList.dump_json(cart.items, by_alias=True).decode()
        self.storage.set_item(self.key, raw)

    def clear(self) -> None:
        """Delete the persisted cart"""
        self.storage.remove_item(self.key)

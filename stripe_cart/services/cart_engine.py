"""
Cart Engine

Cart operations over the persisted cart. Every operation reads the full
cart from the store and every mutation writes the full cart back, then
notifies the change listener exactly once.
"""

import logging
from typing import Any, Callable, Optional

from ..database.carts import CartStore
from ..models.cart import Cart, CartItem

logger = logging.getLogger(__name__)


class CartEngine:
    """Mutations and totals for the storefront cart"""

    def __init__(
        self,
        store: CartStore,
        on_change: Optional[Callable[[Cart], None]] = None,
    ):
        """
        Initialize the engine.

        Args:
            store: Durable owner of the cart
            on_change: Called with the written cart after every mutation
        """
        self.store = store
        self.on_change = on_change

    def _commit(self, cart: Cart) -> Cart:
        """Write the cart back and notify the listener"""
        self.store.save(cart)
        if self.on_change:
            self.on_change(cart)
        return cart

    def get_cart(self) -> Cart:
        """Get the current cart"""
        return self.store.load()

    def add_item(self, price_id: str, name: str, price: Any, image: str) -> Cart:
        """Add one unit of an item, merging with an existing line"""
        cart = self.store.load()
        existing_item = cart.find(str(price_id))

        if existing_item:
            existing_item.quantity += 1
        else:
            cart.items.append(CartItem.from_input(price_id, name, price, image))

        logger.debug(f"Added {price_id} to cart")
        return self._commit(cart)

    def remove_item(self, price_id: str) -> Cart:
        """Remove an item from the cart"""
        cart = self.store.load()
        cart.items = [item for item in cart.items if item.price_id != price_id]
        logger.debug(f"Removed {price_id} from cart")
        return self._commit(cart)

    def set_quantity(self, price_id: str, quantity: int) -> Cart:
        """Set an item's quantity; zero or less removes it"""
        if quantity <= 0:
            return self.remove_item(price_id)

        cart = self.store.load()
        item = cart.find(price_id)
        if item:
            item.quantity = quantity
            logger.debug(f"Set {price_id} quantity to {quantity}")

        return self._commit(cart)

    def cart_total(self) -> float:
        """Sum of price times quantity"""
        return self.store.load().total

    def cart_count(self) -> int:
        """Sum of quantities"""
        return self.store.load().count

    def clear(self) -> Cart:
        """Delete the persisted cart"""
        self.store.clear()
        cart = Cart()
        logger.debug("Cart cleared")
        if self.on_change:
            self.on_change(cart)
        return cart

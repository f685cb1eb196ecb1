"""
Storefront Cart

Public cart API for a storefront page. Built once per page from the
settings and wired to the page's controls by mount().
"""

import logging
from typing import Any, Optional

import httpx
from bs4 import Tag

from ..core.config import Settings
from ..database.carts import CartStore
from ..database.storage import FileStorage, KeyValueStorage, MemoryStorage
from ..models.cart import Cart
from ..models.checkout import CheckoutResult
from .cart_engine import CartEngine
from .checkout_client import CheckoutInitiator
from .page import Page
from .renderer import CHECKOUT_SELECTOR, CartRenderer

logger = logging.getLogger(__name__)

ADDED_MESSAGE = "Added to cart!"
ADD_TO_CART_SELECTOR = ".add-to-cart"
TOGGLE_SELECTOR = ".cart-toggle"


def default_storage(settings: Settings) -> KeyValueStorage:
    """File storage when a path is configured, memory otherwise"""
    if settings.cart_storage_path:
        return FileStorage(settings.cart_storage_path)
    return MemoryStorage()


class StorefrontCart:
    """Cart bound to one storefront page"""

    def __init__(
        self,
        page: Page,
        settings: Settings,
        storage: Optional[KeyValueStorage] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.page = page
        self.settings = settings
        self.store = CartStore(storage or default_storage(settings))
        self.renderer = CartRenderer(
            page,
            currency_symbol=settings.currency_symbol,
            notification_delay=settings.notification_delay,
        )
        self.engine = CartEngine(self.store, on_change=self._render)
        self.checkout_initiator = CheckoutInitiator(self.store, page, settings, http_client)
        self.mounted = False

    def _render(self, cart: Cart) -> None:
        self.renderer.render(cart, self.engine)

    def mount(self) -> None:
        """
        Bind page controls and render the persisted cart.

        Controls are bound on the first call only; later calls re-render.
        """
        if self.mounted:
            self.update_cart_ui()
            return
        self.mounted = True

        for button in self.page.select(CHECKOUT_SELECTOR):
            # The handler returns the checkout coroutine for the host loop to await
            self.page.add_event_listener(button, "click", self.checkout)

        for toggle in self.page.select(TOGGLE_SELECTOR):
            self.page.add_event_listener(toggle, "click", self.toggle_cart)

        for button in self.page.select(ADD_TO_CART_SELECTOR):
            self._bind_add_button(button)

        self.update_cart_ui()
        logger.debug(f"Cart mounted on {self.page.location.href}")

    def _bind_add_button(self, button: Tag) -> None:
        price_id = button.get("data-price-id")
        if not price_id:
            logger.warning("Add-to-cart control without data-price-id, skipping")
            return

        name = button.get("data-name", "")
        # Coerced by the engine; unusable prices are stored as 0
        price = button.get("data-price", 0)
        image = button.get("data-image", "")
        self.page.add_event_listener(
            button, "click", lambda: self.add_to_cart(price_id, name, price, image)
        )

    # ==================== Cart API ====================

    def add_to_cart(self, price_id: str, name: str, price: Any, image: str) -> Cart:
        cart = self.engine.add_item(price_id, name, price, image)
        self.renderer.show_notification(ADDED_MESSAGE)
        return cart

    def remove_from_cart(self, price_id: str) -> Cart:
        return self.engine.remove_item(price_id)

    def update_quantity(self, price_id: str, quantity: int) -> Cart:
        return self.engine.set_quantity(price_id, quantity)

    def get_cart(self) -> Cart:
        return self.engine.get_cart()

    def get_cart_count(self) -> int:
        return self.engine.cart_count()

    def get_cart_total(self) -> float:
        return self.engine.cart_total()

    def clear_cart(self) -> Cart:
        """Empty the cart; called by the checkout success page"""
        return self.engine.clear()

    def toggle_cart(self) -> bool:
        return self.renderer.toggle_dropdown()

    def update_cart_ui(self) -> None:
        self._render(self.store.load())

    async def checkout(self) -> CheckoutResult:
        return await self.checkout_initiator.checkout()

    async def close(self) -> None:
        await self.checkout_initiator.close()

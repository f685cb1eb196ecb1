"""
Cart rendering

Projects the cart onto the page. Rendering keeps no state of its own: the
same cart always produces the same markup, and the item list is rebuilt
from scratch on every call.
"""

import logging
from typing import Any, Optional, Protocol

from bs4 import Tag
from jinja2 import Environment, PackageLoader, select_autoescape

from ..models.cart import Cart, CartItem
from .page import Page

logger = logging.getLogger(__name__)

# DOM contract
COUNT_SELECTOR = ".cart-count"
ITEMS_CONTAINER_ID = "cart-items"
TOTAL_SELECTOR = ".cart-total"
CHECKOUT_SELECTOR = ".checkout-btn"
DROPDOWN_ID = "cart-dropdown"
HIDDEN_CLASS = "dn"


class CartControls(Protocol):
    """Operations the rendered row controls call back into"""

    def set_quantity(self, price_id: str, quantity: int) -> Any: ...

    def remove_item(self, price_id: str) -> Any: ...


def format_money(value: float, symbol: str = "$") -> str:
    return f"{symbol}{value:.2f}"


def _set_display(element: Tag, display: str) -> None:
    """Set the display property, keeping other inline styles"""
    declarations = {}
    for declaration in element.get("style", "").split(";"):
        name, sep, value = declaration.partition(":")
        if sep and name.strip():
            declarations[name.strip()] = value.strip()
    declarations["display"] = display
    element["style"] = "; ".join(f"{name}: {value}" for name, value in declarations.items())


class CartRenderer:
    """Renders cart state into a page"""

    def __init__(
        self,
        page: Page,
        currency_symbol: str = "$",
        notification_delay: float = 2.0,
    ):
        self.page = page
        self.currency_symbol = currency_symbol
        self.notification_delay = notification_delay

        self.env = Environment(
            loader=PackageLoader("stripe_cart", "templates"),
            autoescape=select_autoescape(["html"]),
        )
        self.env.filters["money"] = format_money

    def render(self, cart: Cart, controls: CartControls) -> None:
        """Update every bound element from the cart"""
        self._render_counts(cart.count)
        self._render_items(cart, controls)
        self._render_totals(cart.total)
        self._render_checkout_buttons(cart.is_empty)

    def _render_counts(self, count: int) -> None:
        for element in self.page.select(COUNT_SELECTOR):
            element.string = str(count)
            _set_display(element, "inline-flex" if count > 0 else "none")

    def _render_items(self, cart: Cart, controls: CartControls) -> None:
        container = self.page.get_element_by_id(ITEMS_CONTAINER_ID)
        if container is None:
            return

        self.page.release_listeners(container)
        container.clear()

        if cart.is_empty:
            markup = self.env.get_template("cart_empty.html").render()
        else:
            markup = self.env.get_template("cart_items.html").render(
                items=cart.items,
                currency=self.currency_symbol,
            )

        for node in self.page.parse_fragment(markup):
            container.append(node)

        for item in cart.items:
            row = container.find(attrs={"data-price-id": item.price_id})
            if row is not None:
                self._bind_row(row, item, controls)

    def _bind_row(self, row: Tag, item: CartItem, controls: CartControls) -> None:
        """Wire a row's controls to the item it shows"""
        price_id = item.price_id
        quantity = item.quantity

        decrease = row.select_one(".cart-qty-decrease")
        increase = row.select_one(".cart-qty-increase")
        remove = row.select_one(".cart-remove-btn")

        if decrease is not None:
            self.page.add_event_listener(
                decrease, "click", lambda: controls.set_quantity(price_id, quantity - 1)
            )
        if increase is not None:
            self.page.add_event_listener(
                increase, "click", lambda: controls.set_quantity(price_id, quantity + 1)
            )
        if remove is not None:
            self.page.add_event_listener(remove, "click", lambda: controls.remove_item(price_id))

    def _render_totals(self, total: float) -> None:
        formatted = format_money(total, self.currency_symbol)
        for element in self.page.select(TOTAL_SELECTOR):
            element.string = formatted

    def _render_checkout_buttons(self, disabled: bool) -> None:
        for button in self.page.select(CHECKOUT_SELECTOR):
            if disabled:
                button["disabled"] = ""
            elif button.has_attr("disabled"):
                del button["disabled"]

    def show_notification(self, message: str) -> Optional[Tag]:
        """Show a message that removes itself after the notification delay"""
        markup = self.env.get_template("notification.html").render(message=message)
        notification = next(
            (node for node in self.page.parse_fragment(markup) if isinstance(node, Tag)),
            None,
        )
        if notification is None:
            return None

        self.page.body.append(notification)
        self.page.set_timeout(self.notification_delay, notification.decompose)
        return notification

    def toggle_dropdown(self) -> bool:
        """Flip the dropdown's visibility, returning whether it is now visible"""
        dropdown = self.page.get_element_by_id(DROPDOWN_ID)
        if dropdown is None:
            return False

        classes = list(dropdown.get("class", []))
        if HIDDEN_CLASS in classes:
            classes.remove(HIDDEN_CLASS)
        else:
            classes.append(HIDDEN_CLASS)
        dropdown["class"] = classes
        return HIDDEN_CLASS not in classes

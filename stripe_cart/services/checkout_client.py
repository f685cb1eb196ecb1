"""
Checkout Initiator

Submits the cart to the checkout session endpoint and redirects the page
to the hosted payment page it returns.

States: IDLE -> SUBMITTING -> REDIRECTED | FAILED. The cart is only read
here; clearing it is left to the success landing page.
"""

import logging
from typing import Any, Optional

import httpx

from ..core.config import Settings
from ..database.carts import CartStore
from ..models.checkout import CheckoutResult, CheckoutState, FailureReason
from .page import Page

logger = logging.getLogger(__name__)

EMPTY_CART_MESSAGE = "Your cart is empty"
GENERIC_FAILURE_MESSAGE = "Checkout failed. Please try again."


class CheckoutInitiator:
    """Hands the cart off to the session creator"""

    def __init__(
        self,
        store: CartStore,
        page: Page,
        settings: Settings,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the checkout initiator.

        Args:
            store: Cart store to read line items from
            page: Page to alert on and redirect
            settings: Endpoint and callback configuration
            http_client: Client to post with; one is created when omitted
        """
        self.store = store
        self.page = page
        self.settings = settings
        self.state = CheckoutState.IDLE
        self._http_client = http_client or httpx.AsyncClient(timeout=settings.checkout_timeout)

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    @property
    def endpoint(self) -> str:
        return self.settings.resolve_checkout_url(self.page.location.origin)

    def _fail(self, reason: FailureReason, message: str) -> CheckoutResult:
        self.state = CheckoutState.FAILED
        self.page.alert(message)
        return CheckoutResult.failed(reason, message)

    def build_payload(self) -> Optional[dict[str, Any]]:
        """Request body for the current cart, or None when it is empty"""
        cart = self.store.load()
        if cart.is_empty:
            return None

        success_url, cancel_url = self.settings.callback_urls(self.page.location.origin)
        return {
            "lineItems": [item.model_dump() for item in cart.line_items()],
            "successUrl": success_url,
            "cancelUrl": cancel_url,
        }

    async def checkout(self) -> CheckoutResult:
        """
        Run one checkout attempt.

        Line items are captured before the request goes out, so cart
        changes made while it is in flight do not affect it.
        """
        payload = self.build_payload()
        if payload is None:
            logger.info("Checkout attempted with an empty cart")
            return self._fail(FailureReason.EMPTY_CART, EMPTY_CART_MESSAGE)

        self.state = CheckoutState.SUBMITTING
        url = self.endpoint
        logger.info(f"Submitting checkout: {len(payload['lineItems'])} line item(s) to {url}")

        try:
            response = await self._http_client.post(url, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Checkout request failed: {e!r}")
            return self._fail(FailureReason.NETWORK, GENERIC_FAILURE_MESSAGE)

        try:
            data = response.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            data = {}

        redirect_url = data.get("url")
        if not response.is_success or not redirect_url:
            logger.error(f"Checkout rejected: {response.status_code} - {response.text}")
            error = data.get("error")
            message = error if isinstance(error, str) and error else GENERIC_FAILURE_MESSAGE
            return self._fail(FailureReason.BACKEND, message)

        self.state = CheckoutState.REDIRECTED
        self.page.location.assign(redirect_url)
        return CheckoutResult.redirected(redirect_url)

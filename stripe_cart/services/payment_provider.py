"""
Payment Provider Client

Creates hosted Stripe Checkout sessions. Only price ids and quantities are
sent; Stripe resolves the amounts from its own price catalog.
"""

import logging
from typing import Optional

import httpx

from ..models.checkout import LineItem

logger = logging.getLogger(__name__)


class PaymentProviderError(Exception):
    """Raised when a checkout session cannot be created"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class StripeClient:
    """Client for the Stripe Checkout Sessions API"""

    def __init__(
        self,
        secret_key: Optional[str],
        api_base: str = "https://api.stripe.com",
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.secret_key = secret_key
        self.base_url = api_base.rstrip("/")
        self._http_client = http_client or httpx.AsyncClient(timeout=30.0)

        if not secret_key:
            logger.warning("No Stripe secret key provided - session creation will fail")

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    @staticmethod
    def _session_form(
        line_items: list[LineItem],
        success_url: str,
        cancel_url: str,
        mode: str,
    ) -> dict[str, str]:
        """Encode session parameters the way the Stripe API expects them"""
        form = {
            "mode": mode,
            "success_url": success_url,
            "cancel_url": cancel_url,
        }
        for index, item in enumerate(line_items):
            form[f"line_items[{index}][price]"] = item.price
            form[f"line_items[{index}][quantity]"] = str(item.quantity)
        return form

    async def create_checkout_session(
        self,
        line_items: list[LineItem],
        success_url: str,
        cancel_url: str,
        mode: str = "payment",
    ) -> str:
        """
        Create a checkout session.

        Returns:
            URL of the hosted payment page
        """
        if not self.secret_key:
            raise PaymentProviderError("Payment provider is not configured")

        url = f"{self.base_url}/v1/checkout/sessions"
        try:
            response = await self._http_client.post(
                url,
                data=self._session_form(line_items, success_url, cancel_url, mode),
                headers={"Authorization": f"Bearer {self.secret_key}"},
            )
        except httpx.HTTPError as e:
            logger.error(f"Stripe request failed: {e!r}")
            raise PaymentProviderError("Could not reach payment provider") from e

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.status_code >= 400:
            error = data.get("error") if isinstance(data, dict) else None
            message = error.get("message") if isinstance(error, dict) else None
            logger.error(f"Stripe session error: {response.status_code} - {message or response.text}")
            raise PaymentProviderError(
                message or f"Payment provider returned {response.status_code}",
                status_code=response.status_code,
            )

        session_url = data.get("url") if isinstance(data, dict) else None
        if not session_url:
            raise PaymentProviderError("Payment provider returned no session URL")

        logger.info(f"Created checkout session {data.get('id')}")
        return session_url

# Storefront and checkout services

from .page import Page, Location
from .cart_engine import CartEngine
from .renderer import CartRenderer, format_money
from .checkout_client import CheckoutInitiator
from .payment_provider import StripeClient, PaymentProviderError
from .storefront import StorefrontCart

__all__ = [
    "Page",
    "Location",
    "CartEngine",
    "CartRenderer",
    "format_money",
    "CheckoutInitiator",
    "StripeClient",
    "PaymentProviderError",
    "StorefrontCart",
]

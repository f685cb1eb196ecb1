# Stripe Cart Models

from .cart import Cart, CartItem, CartItemList
from .checkout import (
    LineItem,
    CheckoutSessionRequest,
    CheckoutSessionResponse,
    ErrorResponse,
    CheckoutState,
    CheckoutResult,
    FailureReason,
)

__all__ = [
    "Cart",
    "CartItem",
    "CartItemList",
    "LineItem",
    "CheckoutSessionRequest",
    "CheckoutSessionResponse",
    "ErrorResponse",
    "CheckoutState",
    "CheckoutResult",
    "FailureReason",
]

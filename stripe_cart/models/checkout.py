"""Checkout models shared by the storefront and the session creator"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class LineItem(BaseModel):
    """Item sent to the payment backend: identity and quantity, never price"""
    price: str = Field(min_length=1)
    quantity: int = Field(gt=0)


class CheckoutSessionRequest(BaseModel):
    """Request body accepted by the session creator"""
    line_items: list[LineItem] = Field(alias="lineItems", min_length=1)
    success_url: Optional[str] = Field(default=None, alias="successUrl")
    cancel_url: Optional[str] = Field(default=None, alias="cancelUrl")

    class Config:
        populate_by_name = True


class CheckoutSessionResponse(BaseModel):
    """Successful session creator response"""
    url: str


class ErrorResponse(BaseModel):
    """Failed session creator response"""
    error: str


class CheckoutState(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    REDIRECTED = "redirected"
    FAILED = "failed"


class FailureReason(str, Enum):
    EMPTY_CART = "empty_cart"
    NETWORK = "network"
    BACKEND = "backend"


@dataclass
class CheckoutResult:
    """Outcome of one checkout attempt"""
    state: CheckoutState
    redirect_url: Optional[str] = None
    reason: Optional[FailureReason] = None
    error_message: Optional[str] = None

    @classmethod
    def redirected(cls, url: str) -> "CheckoutResult":
        return cls(state=CheckoutState.REDIRECTED, redirect_url=url)

    @classmethod
    def failed(cls, reason: FailureReason, message: str) -> "CheckoutResult":
        return cls(state=CheckoutState.FAILED, reason=reason, error_message=message)

    @property
    def is_redirected(self) -> bool:
        return self.state == CheckoutState.REDIRECTED

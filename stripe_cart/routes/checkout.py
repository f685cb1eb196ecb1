"""Checkout session route, the serverless session creator"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ..core.config import settings, DEFAULT_CHECKOUT_PATH
from ..models.checkout import CheckoutSessionRequest, CheckoutSessionResponse, ErrorResponse
from ..services.payment_provider import StripeClient, PaymentProviderError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Checkout"])

# Created on first use, closed by the app lifespan
payment_provider: Optional[StripeClient] = None


def get_payment_provider() -> StripeClient:
    """Get or create the payment provider client"""
    global payment_provider
    if payment_provider is None:
        payment_provider = StripeClient(
            secret_key=settings.stripe_secret_key,
            api_base=settings.stripe_api_base,
        )
    return payment_provider


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


@router.post(
    DEFAULT_CHECKOUT_PATH,
    response_model=CheckoutSessionResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def create_checkout_session(
    request: Request,
    provider: StripeClient = Depends(get_payment_provider),
):
    """
    Create a hosted checkout session.

    Only price ids and quantities are accepted; the payment provider
    looks up the prices itself.
    """
    try:
        payload = await request.json()
    except ValueError:
        return error_response(400, "Invalid request body")

    try:
        session_request = CheckoutSessionRequest.model_validate(payload)
    except ValidationError:
        return error_response(400, "Invalid line items")

    origin = (request.headers.get("origin") or settings.site_origin).rstrip("/")
    default_success, default_cancel = settings.callback_urls(origin)

    try:
        url = await provider.create_checkout_session(
            line_items=session_request.line_items,
            success_url=session_request.success_url or default_success,
            cancel_url=session_request.cancel_url or default_cancel,
        )
    except PaymentProviderError as e:
        logger.error(f"Stripe session error: {e.message}")
        return error_response(500, e.message)

    logger.info(f"Checkout session created for {len(session_request.line_items)} line item(s)")
    return CheckoutSessionResponse(url=url)


@router.api_route(
    DEFAULT_CHECKOUT_PATH,
    methods=["GET", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def method_not_allowed():
    """Only POST is accepted"""
    return error_response(405, "Method not allowed")

"""
Stripe Cart Checkout Service

Serves the checkout session endpoint the storefront cart posts to and
hands back hosted Stripe Checkout URLs.
"""

import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Load environment variables before settings are read
load_dotenv(os.path.join(os.getcwd(), ".env"))

from .core.config import settings
from .routes import checkout_router
from .routes import checkout as checkout_routes

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Checkout service starting up...")
    logger.info(f"Stripe configured: {settings.stripe_configured}")
    logger.info(f"Site origin: {settings.site_origin}")

    yield

    logger.info("Checkout service shutting down...")
    if checkout_routes.payment_provider:
        await checkout_routes.payment_provider.close()


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Checkout session creator for the static site cart",
    version="1.0.0",
    lifespan=lifespan,
)

# The storefront is served from a different origin in development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(checkout_router)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "stripe-cart-checkout",
        "stripe_configured": settings.stripe_configured,
    }


def run() -> None:
    import uvicorn

    uvicorn.run(
        "stripe_cart.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()

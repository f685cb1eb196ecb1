"""Stripe Cart Configuration"""

from typing import Optional
from urllib.parse import urljoin
from pydantic_settings import BaseSettings
from functools import lru_cache

DEFAULT_CHECKOUT_PATH = "/.netlify/functions/create-checkout-session"


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    # Application
    app_name: str = "Stripe Cart"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8888

    # Storefront
    site_origin: str = "http://localhost:4000"
    publishable_key: Optional[str] = None  # Kept for the site config, not used by the redirect flow
    checkout_url: Optional[str] = None
    success_path: str = "/checkout-success/"
    cancel_path: str = "/checkout-cancel/"
    cart_storage_path: Optional[str] = None
    notification_delay: float = 2.0
    checkout_timeout: float = 30.0
    currency_symbol: str = "$"

    # Payment provider (session creator only)
    stripe_secret_key: Optional[str] = None
    stripe_api_base: str = "https://api.stripe.com"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    def resolve_checkout_url(self, origin: str) -> str:
        """Absolute checkout endpoint for a page served from origin"""
        return urljoin(origin, self.checkout_url or DEFAULT_CHECKOUT_PATH)

    def callback_urls(self, origin: str) -> tuple[str, str]:
        """Success and cancel URLs for a page served from origin"""
        origin = origin.rstrip("/")
        return origin + self.success_path, origin + self.cancel_path

    @property
    def stripe_configured(self) -> bool:
        """Check if the payment provider secret is configured"""
        return bool(self.stripe_secret_key)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()

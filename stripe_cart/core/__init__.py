# Core modules

from .config import settings, get_settings, Settings, DEFAULT_CHECKOUT_PATH

__all__ = ["settings", "get_settings", "Settings", "DEFAULT_CHECKOUT_PATH"]

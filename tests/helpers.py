"""Assertion helpers shared by the test modules"""
import json
from typing import Optional

from stripe_cart.database import CART_KEY, MemoryStorage
from stripe_cart.services import Page


def stored_items(storage: MemoryStorage) -> Optional[list]:
    raw = storage.get_item(CART_KEY)
    return json.loads(raw) if raw is not None else None


def text_of(page: Page, selector: str) -> list[str]:
    return [element.get_text(strip=True) for element in page.select(selector)]

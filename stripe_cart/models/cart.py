"""Cart models for the storefront"""

import logging
from typing import Any, Optional

from pydantic import BaseModel, Field, NonNegativeFloat, TypeAdapter, ValidationError, field_validator

from .checkout import LineItem

logger = logging.getLogger(__name__)

PriceAdapter = TypeAdapter(NonNegativeFloat)


class CartItem(BaseModel):
    """Item in a shopping cart"""
    price_id: str = Field(alias="priceId")
    name: str
    price: float = Field(ge=0)
    image: str
    quantity: int = Field(gt=0)

    class Config:
        populate_by_name = True

    @classmethod
    def from_input(cls, price_id: Any, name: Any, price: Any, image: Any, quantity: int = 1) -> "CartItem":
        """
        Build an item from loosely typed input such as DOM data attributes.

        Numeric strings are coerced; a price that is not a non-negative
        number is stored as 0 so the item always loads back.
        """
        try:
            coerced_price = PriceAdapter.validate_python(price)
        except ValidationError:
            logger.warning(f"Unusable price {price!r} for {price_id!r}, storing 0")
            coerced_price = 0.0

        return cls(
            price_id=str(price_id),
            name="" if name is None else str(name),
            price=coerced_price,
            image="" if image is None else str(image),
            quantity=quantity,
        )


class Cart(BaseModel):
    """Shopping cart, ordered and unique by price_id"""
    items: list[CartItem] = []

    @field_validator("items")
    @classmethod
    def merge_duplicates(cls, items: list[CartItem]) -> list[CartItem]:
        """Fold repeated price ids into the first occurrence"""
        merged: dict[str, CartItem] = {}
        for item in items:
            existing = merged.get(item.price_id)
            if existing:
                # Copy so the caller's instances are left untouched
                merged[item.price_id] = existing.model_copy(
                    update={"quantity": existing.quantity + item.quantity}
                )
            else:
                merged[item.price_id] = item
        return list(merged.values())

    def find(self, price_id: str) -> Optional[CartItem]:
        """Get an item by price id"""
        return next((item for item in self.items if item.price_id == price_id), None)

    @property
    def count(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def total(self) -> float:
        return sum(item.price * item.quantity for item in self.items)

    @property
    def is_empty(self) -> bool:
        return len(self.items) == 0

    def line_items(self) -> list[LineItem]:
        """Items as sent to the payment backend"""
        return [LineItem(price=item.price_id, quantity=item.quantity) for item in self.items]


# Persisted form: a bare JSON array of items
CartItemList = TypeAdapter(list[CartItem])

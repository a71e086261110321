"""
Pydantic schemas for pizza orders.

Orders are append‑only snapshots: the chosen ingredients are kept as
a list of slugs, not as references to live catalog records.  Wire
and storage field names are ``name``, ``address``, ``ingredients``
and ``card_number``; the Python attributes carry descriptive names.
"""

import re
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class OrderCreate(BaseModel):
    """Schema for placing a new order."""

    model_config = ConfigDict(populate_by_name=True)

    customer_name: str = Field(..., alias="name", min_length=1, examples=["Ivan Ivanov"])
    ingredient_slugs: List[str] = Field(
        ..., alias="ingredients", description="Slugs of the chosen toppings",
        examples=[["cucumber", "salami", "bacon"]],
    )
    delivery_address: str = Field(..., alias="address", min_length=1, examples=["Sesame Street"])
    # Stored as opaque text.  Responses only ever expose a masked form.
    card_number: str = Field(..., min_length=1, examples=["0000 0000 0000 0000"])
    size: Optional[int] = Field(None, gt=0, description="Pizza diameter in cm", examples=[30])
    dough: Optional[str] = Field(None, examples=["thick"])
    sauce: Optional[str] = Field(None, examples=["mayo"])
    price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)


class Order(OrderCreate):
    """A stored order."""

    id: str

    def to_record(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class OrderRead(BaseModel):
    """Order as exposed over HTTP, with the card number masked."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    customer_name: str = Field(..., alias="name")
    ingredient_slugs: List[str] = Field(..., alias="ingredients")
    delivery_address: str = Field(..., alias="address")
    card_number: str
    size: Optional[int] = None
    dough: Optional[str] = None
    sauce: Optional[str] = None
    price: Optional[float] = None

    @classmethod
    def from_order(cls, order: Order) -> "OrderRead":
        data = order.model_dump()
        data["card_number"] = mask_card_number(order.card_number)
        return cls(**data)


def mask_card_number(card_number: str) -> str:
    """Keep only the last four digits, e.g. ``**** 4242``."""
    digits = re.sub(r"\D", "", card_number)
    if len(digits) < 4:
        return "****"
    return f"**** {digits[-4:]}"

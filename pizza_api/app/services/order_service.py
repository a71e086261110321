"""
Service layer for customer orders.

Orders are append‑only: they can be placed and listed but never
changed or removed.  The chosen ingredients are stored as slugs and
are not checked against the catalog, so an order keeps its toppings
even after an ingredient is deleted.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from pizza_api.app.core.errors import validation_error_from
from pizza_api.app.core.ids import generate_id
from pizza_api.app.core.store import ORDERS, RecordStore
from pizza_api.app.schemas.order import Order, OrderCreate

logger = logging.getLogger(__name__)


class OrderService:
    def __init__(self, store: RecordStore) -> None:
        self.store = store

    async def list(self) -> List[Order]:
        return [Order.model_validate(r) for r in self.store.list_all(ORDERS)]

    async def get(self, order_id: str) -> Optional[Order]:
        record = self.store.find_by_id(ORDERS, order_id)
        return Order.model_validate(record) if record is not None else None

    async def create(self, data: Union[OrderCreate, Dict[str, Any]]) -> Order:
        """Validate and record a new order.

        Raises ``ValidationError`` when the customer name, ingredients,
        address or card number are missing or malformed.
        """
        try:
            payload = OrderCreate.model_validate(data)
        except PydanticValidationError as exc:
            raise validation_error_from(exc) from exc
        order = Order(id=generate_id(), **payload.model_dump())
        self.store.insert(ORDERS, order.to_record())
        logger.info(
            "Created order %s with %d ingredient(s)", order.id, len(order.ingredient_slugs)
        )
        return order

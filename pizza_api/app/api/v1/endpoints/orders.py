"""
Order endpoints for API v1.

Anyone may place an order; the payload is JSON with ``name``,
``ingredients``, ``address`` and ``card_number`` plus the optional
``size``, ``dough``, ``sauce`` and ``price``.  Card numbers are masked
in every response.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException, status

from pizza_api.app.api.deps import get_order_service
from pizza_api.app.schemas.order import OrderRead
from pizza_api.app.services.order_service import OrderService

router = APIRouter()


@router.get("", response_model=List[OrderRead], summary="List all orders")
async def list_orders(service: OrderService = Depends(get_order_service)) -> List[OrderRead]:
    return [OrderRead.from_order(order) for order in await service.list()]


@router.get("/{order_id}", response_model=OrderRead, summary="Get one order")
async def get_order(order_id: str, service: OrderService = Depends(get_order_service)) -> OrderRead:
    order = await service.get(order_id)
    if order is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
    return OrderRead.from_order(order)


@router.post(
    "",
    response_model=OrderRead,
    status_code=status.HTTP_201_CREATED,
    summary="Place a new order",
)
async def create_order(
    body: Dict[str, Any] = Body(
        ...,
        examples=[
            {
                "name": "Ivan Ivanov",
                "ingredients": ["cucumber", "salami", "bacon"],
                "address": "Sesame Street",
                "card_number": "0000 0000 0000 0000",
                "size": 30,
                "dough": "thick",
                "sauce": "mayo",
            }
        ],
    ),
    service: OrderService = Depends(get_order_service),
) -> OrderRead:
    """Record an order.  Ingredient slugs are not checked against the catalog."""
    order = await service.create(body)
    return OrderRead.from_order(order)

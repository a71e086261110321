"""
FastAPI dependencies giving routes access to the services.

``create_app`` builds the services on startup and keeps them on
``app.state``; these helpers fetch them for the current request.
"""

from fastapi import Request

from pizza_api.app.services.ingredient_service import IngredientService
from pizza_api.app.services.order_service import OrderService
from pizza_api.app.services.session_service import AdminSessionService


def get_ingredient_service(request: Request) -> IngredientService:
    return request.app.state.ingredient_service


def get_order_service(request: Request) -> OrderService:
    return request.app.state.order_service


def get_session_service(request: Request) -> AdminSessionService:
    return request.app.state.session_service

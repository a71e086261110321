"""
Top‑level router for version 1 of the API.

This router aggregates the domain routers under their public
prefixes.  When new domains are introduced, include their routers
here.
"""

from fastapi import APIRouter

from .endpoints import admin_auth, ingredients, orders

router = APIRouter()

router.include_router(ingredients.router, prefix="/ingredients", tags=["Ingredients"])
router.include_router(orders.router, prefix="/orders", tags=["Orders"])
router.include_router(admin_auth.router, prefix="/admin-auth", tags=["Admin Auth"])

"""
Version 1 of the API.

Bundles the ingredient, order and admin authentication endpoints.
"""

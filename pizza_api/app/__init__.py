"""
Application package initializer.

The project is organised into logical pieces: ``core`` holds
configuration, logging, persistence and token handling, ``services``
holds the business logic for ingredients, orders and the admin
session, ``schemas`` holds the pydantic payload models and
``api/v1/endpoints`` exposes one router per domain.
"""

from .main import app  # noqa: F401

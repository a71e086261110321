"""
Top‑level package for the Pizza Storefront API.

This file makes ``pizza_api`` a Python package so that modules within
``app`` can be imported using fully qualified names like
``pizza_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []

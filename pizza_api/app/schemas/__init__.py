"""
Pydantic schema definitions for API payloads.

Each domain (ingredients, orders, admin auth) defines its own models
for request and response bodies.  The same models validate service
input, so a payload is checked before any store interaction.
"""

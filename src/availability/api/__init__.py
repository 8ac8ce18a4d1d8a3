"""Availability domain API package."""

from availability.api.routes import inventory_router, product_router

__all__ = ["product_router", "inventory_router"]

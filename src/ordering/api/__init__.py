"""Ordering API package."""

from ordering.api.errors import register_error_handlers
from ordering.api.routes import cart_router, menu_router, order_router
from ordering.api.stream import stream_router

__all__ = ["menu_router", "cart_router", "order_router", "stream_router", "register_error_handlers"]

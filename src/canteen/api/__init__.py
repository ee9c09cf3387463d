"""Canteen API package."""

from canteen.api.errors import register_error_handlers
from canteen.api.routes import item_router, order_router
from canteen.api.websocket import ws_router

__all__ = ["item_router", "order_router", "ws_router", "register_error_handlers"]

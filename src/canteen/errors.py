"""Typed failures raised by the canteen engine.

Every error carries Protean-style ``messages`` (``{field: [message, ...]}``)
and the HTTP status the API layer answers with.
"""

from protean.exceptions import ObjectNotFoundError, ProteanException, ValidationError


class CanteenError:
    """Mixin giving every engine error a ``messages`` dict and a status code."""

    status_code = 400

    def __init__(self, messages: dict) -> None:
        super().__init__(messages)
        self.messages = messages

    @property
    def error_type(self) -> str:
        return type(self).__name__


class InvalidRequest(CanteenError, ValidationError):
    """Malformed input: empty orders, unknown enum values, bad images."""

    status_code = 400


class InsufficientStock(CanteenError, ValidationError):
    """An order line asks for more than the item currently has."""

    status_code = 409


class InvalidTransition(CanteenError, ValidationError):
    """Order status may only move forward."""

    status_code = 409


class NotFound(CanteenError, ObjectNotFoundError):
    status_code = 404


class Unauthorized(CanteenError, ProteanException):
    status_code = 403


def item_not_found(item_id) -> NotFound:
    return NotFound({"item_id": [f"Item {item_id} not found"]})


def order_not_found(order_id) -> NotFound:
    return NotFound({"order_id": [f"Order {order_id} not found"]})

"""Order placement — command and handler.

Lines are checked in submission order and the first failing line decides the
error. Stock is only read here; it is debited when payment completes.
"""

import json

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from canteen.catalog.store import CatalogStore
from canteen.domain import canteen
from canteen.errors import InsufficientStock, InvalidRequest
from canteen.ordering.order import Order, parse_payment_method
from canteen.stock.ledger import StockLedger


@canteen.command(part_of="Order")
class PlaceOrder:
    user_id: Identifier(required=True)
    lines: Text(required=True)  # JSON list of {item_id, quantity}
    payment_method: String(required=True, max_length=50)


def _requested_lines(raw: str) -> list[dict]:
    try:
        lines = json.loads(raw)
    except (TypeError, ValueError):
        raise InvalidRequest({"lines": ["Lines must be a JSON list"]}) from None
    if not isinstance(lines, list) or not lines:
        raise InvalidRequest({"lines": ["An order needs at least one line"]})
    return lines


@canteen.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        requested = _requested_lines(command.lines)
        parse_payment_method(command.payment_method)

        catalog = CatalogStore()
        ledger = StockLedger(catalog)

        snapshot = []
        for line in requested:
            item = catalog.get(line["item_id"])
            quantity = line["quantity"]
            if not ledger.check_availability(item.id, quantity):
                raise InsufficientStock({"lines": [f"Insufficient stock for {item.name}"]})
            snapshot.append(
                {
                    "item_id": str(item.id),
                    "name": item.name,
                    "price": item.price,
                    "quantity": quantity,
                }
            )

        order = Order.place(command.user_id, snapshot, command.payment_method)
        current_domain.repository_for(Order).add(order)
        return str(order.id)

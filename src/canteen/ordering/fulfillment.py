"""Order fulfillment: staff moving orders through the kitchen."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from canteen.domain import canteen
from canteen.ordering.order import Order


@canteen.command(part_of="Order")
class ChangeOrderStatus:
    order_id = Identifier(required=True)
    order_status = String(required=True, max_length=50)


@canteen.command_handler(part_of=Order)
class OrderFulfillmentHandler:
    @handle(ChangeOrderStatus)
    def change_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.advance_to(command.order_status)
        repo.add(order)
        return str(order.id)

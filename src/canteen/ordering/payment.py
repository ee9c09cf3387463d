"""Payment completion — command and handler.

Only the order's payment status changes here; the engine debits stock for
each line after this command commits.
"""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from canteen.domain import canteen
from canteen.ordering.order import Order


@canteen.command(part_of="Order")
class RecordPaymentCompleted:
    order_id = Identifier(required=True)


@canteen.command_handler(part_of=Order)
class OrderPaymentHandler:
    @handle(RecordPaymentCompleted)
    def record_payment_completed(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.complete_payment()
        repo.add(order)
        return [(line.item_id, line.quantity) for line in order.ordered_lines]

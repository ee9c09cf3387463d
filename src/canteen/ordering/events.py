"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from canteen.domain import canteen


@canteen.event(part_of="Order")
class OrderPlaced:
    """A customer placed an order; stock has not been debited yet."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    total_amount = Float(required=True)
    payment_method = String(required=True)
    line_count = Integer(required=True)
    placed_at = DateTime(required=True)


@canteen.event(part_of="Order")
class OrderStatusChanged:
    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    payment_status = String(required=True)
    changed_at = DateTime(required=True)


@canteen.event(part_of="Order")
class PaymentCompleted:
    """Payment for the order was confirmed (QR callback or cash on delivery)."""

    __version__ = 1

    order_id = Identifier(required=True)
    payment_method = String(required=True)
    total_amount = Float(required=True)
    completed_at = DateTime(required=True)

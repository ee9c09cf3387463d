"""Order aggregate — what a customer bought, at which prices, and how far along it is.

Lines snapshot the item name and price at placement, so later catalog edits
never change an existing order. ``order_status`` only moves forward:

    placed -> processing -> delivered

Skipping ``processing`` is allowed. Delivering a cash-on-delivery order
also completes its payment.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from canteen.domain import canteen
from canteen.errors import InvalidRequest, InvalidTransition
from canteen.ordering.events import OrderPlaced, OrderStatusChanged, PaymentCompleted


class OrderStatus(Enum):
    PLACED = "placed"
    PROCESSING = "processing"
    DELIVERED = "delivered"


class PaymentStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"


class PaymentMethod(Enum):
    QR = "qr"
    COD = "cod"


_STATUS_RANK = {
    OrderStatus.PLACED: 0,
    OrderStatus.PROCESSING: 1,
    OrderStatus.DELIVERED: 2,
}


def parse_order_status(value) -> OrderStatus:
    try:
        return OrderStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise InvalidRequest({"order_status": [f"Unknown status '{value}', expected one of: {allowed}"]}) from None


def parse_payment_method(value) -> PaymentMethod:
    try:
        return PaymentMethod(value)
    except ValueError:
        raise InvalidRequest({"payment_method": [f"Unknown payment method '{value}', expected qr or cod"]}) from None


@canteen.entity(part_of="Order")
class OrderLine:
    item_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    position = Integer(default=0)

    @property
    def subtotal(self) -> float:
        return self.price * self.quantity


@canteen.aggregate
class Order:
    user_id = Identifier(required=True)
    lines = HasMany(OrderLine)
    total_amount = Float(required=True, min_value=0.0)
    payment_method = String(required=True, max_length=10, choices=PaymentMethod)
    payment_status = String(max_length=20, choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    order_status = String(max_length=20, choices=OrderStatus, default=OrderStatus.PLACED.value)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def place(cls, user_id, lines_data, payment_method):
        """Create an order from snapshot lines.

        Args:
            user_id: The customer placing the order.
            lines_data: Dicts with item_id, name, price, quantity, in submission order.
            payment_method: ``qr`` or ``cod``.
        """
        if not lines_data:
            raise InvalidRequest({"lines": ["An order needs at least one line"]})
        method = parse_payment_method(payment_method)

        now = datetime.now(UTC)
        total = sum(line["price"] * line["quantity"] for line in lines_data)

        order = cls(
            user_id=str(user_id),
            total_amount=total,
            payment_method=method.value,
            created_at=now,
            updated_at=now,
        )
        for position, line in enumerate(lines_data):
            order.add_lines(
                OrderLine(
                    item_id=str(line["item_id"]),
                    name=line["name"],
                    price=line["price"],
                    quantity=line["quantity"],
                    position=position,
                )
            )

        order.raise_(
            OrderPlaced(
                order_id=order.id,
                user_id=order.user_id,
                total_amount=total,
                payment_method=method.value,
                line_count=len(lines_data),
                placed_at=now,
            )
        )
        return order

    @property
    def ordered_lines(self) -> list:
        return sorted(self.lines, key=lambda line: line.position or 0)

    def advance_to(self, new_status) -> None:
        target = parse_order_status(new_status)
        current = OrderStatus(self.order_status)
        if _STATUS_RANK[target] <= _STATUS_RANK[current]:
            raise InvalidTransition(
                {"order_status": [f"Cannot move order from {current.value} to {target.value}"]}
            )

        self.order_status = target.value
        if target == OrderStatus.DELIVERED and self.payment_method == PaymentMethod.COD.value:
            self.payment_status = PaymentStatus.COMPLETED.value
        self.updated_at = datetime.now(UTC)

        self.raise_(
            OrderStatusChanged(
                order_id=self.id,
                user_id=self.user_id,
                previous_status=current.value,
                new_status=target.value,
                payment_status=self.payment_status,
                changed_at=self.updated_at,
            )
        )

    def complete_payment(self) -> None:
        """Mark the order paid. Calling it on a paid order keeps it paid."""
        self.payment_status = PaymentStatus.COMPLETED.value
        self.updated_at = datetime.now(UTC)
        self.raise_(
            PaymentCompleted(
                order_id=self.id,
                payment_method=self.payment_method,
                total_amount=self.total_amount,
                completed_at=self.updated_at,
            )
        )

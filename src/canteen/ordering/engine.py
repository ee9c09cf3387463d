"""Order Engine — placing orders, moving them through fulfillment, and settling payment.

Each operation runs one command through Protean and, once it has committed,
publishes the matching hub events. Payment completion debits stock line by
line through the stock ledger; every ``stockUpdate`` it causes goes out before
its single ``paymentUpdate``.
"""

import json
from dataclasses import dataclass

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from canteen.access import Requester, require_elevated, require_owner_or_elevated
from canteen.catalog.store import CatalogStore
from canteen.errors import InvalidRequest, NotFound, order_not_found
from canteen.notifications import get_hub
from canteen.notifications.hub import NotificationHub
from canteen.notifications.topics import STAFF, HubEvent, user_topic
from canteen.ordering.creation import PlaceOrder
from canteen.ordering.fulfillment import ChangeOrderStatus
from canteen.ordering.order import Order, PaymentMethod, parse_order_status, parse_payment_method
from canteen.ordering.payment import RecordPaymentCompleted
from canteen.payments import get_generator
from canteen.payments.port import PaymentReference, PaymentReferenceGenerator
from canteen.stock.ledger import StockLedger

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PlacedOrder:
    order: Order
    payment_reference: PaymentReference | None = None


def _normalize_lines(lines) -> list[dict]:
    if not lines:
        raise InvalidRequest({"lines": ["An order needs at least one line"]})

    normalized = []
    for index, line in enumerate(lines):
        item_id = line.get("item_id") if isinstance(line, dict) else None
        quantity = line.get("quantity") if isinstance(line, dict) else None
        if not item_id:
            raise InvalidRequest({"lines": [f"Line {index + 1} is missing an item"]})
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
            raise InvalidRequest({"lines": [f"Line {index + 1} needs a quantity of at least 1"]})
        normalized.append({"item_id": str(item_id), "quantity": quantity})
    return normalized


class OrderEngine:
    def __init__(
        self,
        catalog: CatalogStore | None = None,
        ledger: StockLedger | None = None,
        hub: NotificationHub | None = None,
        payment_references: PaymentReferenceGenerator | None = None,
    ):
        self.catalog = catalog or CatalogStore()
        self._hub = hub
        self.ledger = ledger or StockLedger(self.catalog, hub)
        self._payment_references = payment_references

    @property
    def hub(self) -> NotificationHub:
        return self._hub or get_hub()

    @property
    def payment_references(self) -> PaymentReferenceGenerator:
        return self._payment_references or get_generator()

    # -------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------
    def create_order(self, requester: Requester, lines, payment_method) -> PlacedOrder:
        normalized = _normalize_lines(lines)
        method = parse_payment_method(payment_method)

        order_id = current_domain.process(
            PlaceOrder(
                user_id=str(requester.user_id),
                lines=json.dumps(normalized),
                payment_method=method.value,
            ),
            asynchronous=False,
        )
        order = self._load(order_id)
        logger.info(
            "order_placed",
            order_id=order_id,
            user_id=order.user_id,
            total_amount=order.total_amount,
            payment_method=method.value,
        )

        reference = None
        if method == PaymentMethod.QR:
            reference = self.payment_references.generate(order_id, order.total_amount)

        payload = {
            "order_id": order_id,
            "user_id": str(order.user_id),
            "total_amount": order.total_amount,
            "payment_method": method.value,
        }
        self.hub.publish(STAFF, HubEvent.NEW_ORDER, payload)
        if method == PaymentMethod.COD:
            self.hub.publish(STAFF, HubEvent.COD_ORDER, payload)

        return PlacedOrder(order=order, payment_reference=reference)

    def update_order_status(self, requester: Requester, order_id, new_status) -> Order:
        require_elevated(requester, "change order status")
        self._load(order_id)
        target = parse_order_status(new_status)

        try:
            current_domain.process(
                ChangeOrderStatus(order_id=str(order_id), order_status=target.value),
                asynchronous=False,
            )
        except ObjectNotFoundError:
            raise order_not_found(order_id) from None

        order = self._load(order_id)
        logger.info(
            "order_status_changed",
            order_id=str(order_id),
            order_status=order.order_status,
            payment_status=order.payment_status,
        )

        payload = {
            "order_id": str(order_id),
            "order_status": order.order_status,
            "payment_status": order.payment_status,
        }
        self.hub.publish(STAFF, HubEvent.ORDER_STATUS_UPDATE, payload)
        self.hub.publish(user_topic(order.user_id), HubEvent.ORDER_UPDATE, payload)
        return order

    def complete_payment(self, requester: Requester, order_id) -> Order:
        """Settle an order and debit stock for each of its lines.

        Lines whose item has since been removed are skipped. Calling this
        again on a settled order keeps it completed and debits again.
        """
        order = self._load(order_id)
        require_owner_or_elevated(requester, order.user_id, "pay for")

        try:
            debits = current_domain.process(RecordPaymentCompleted(order_id=str(order_id)), asynchronous=False)
        except ObjectNotFoundError:
            raise order_not_found(order_id) from None

        for item_id, quantity in debits:
            try:
                self.ledger.debit(item_id, quantity)
            except NotFound:
                logger.warning("payment_debit_skipped", order_id=str(order_id), item_id=str(item_id))

        order = self._load(order_id)
        logger.info("payment_completed", order_id=str(order_id), lines=len(debits))
        self.hub.publish(
            STAFF,
            HubEvent.PAYMENT_UPDATE,
            {"order_id": str(order_id), "payment_status": order.payment_status},
        )
        return order

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def get_order(self, requester: Requester, order_id) -> Order:
        order = self._load(order_id)
        require_owner_or_elevated(requester, order.user_id, "view")
        return order

    def list_orders(self, requester: Requester) -> list[Order]:
        """Staff see every order, customers their own; newest first."""
        query = current_domain.repository_for(Order)._dao.query
        if not requester.is_elevated:
            query = query.filter(user_id=str(requester.user_id))
        return query.order_by("-created_at").limit(None).all().items

    def _load(self, order_id) -> Order:
        try:
            return current_domain.repository_for(Order).get(str(order_id))
        except ObjectNotFoundError:
            raise order_not_found(order_id) from None

"""Stock Ledger — the only writer of ``Item.stock`` and ``Item.is_available``.

Each mutation holds the item's lock across load, mutate and commit, then
announces the new count to staff as ``stockUpdate``. The announcement is made
while the lock is still held so staff see counts in commit order.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from canteen.catalog.store import CatalogStore
from canteen.errors import InvalidRequest, item_not_found
from canteen.notifications import get_hub
from canteen.notifications.hub import NotificationHub
from canteen.notifications.topics import STAFF, HubEvent
from canteen.stock.adjustment import DebitStock, SetStock
from canteen.stock.locks import item_lock

logger = structlog.get_logger(__name__)


class StockLedger:
    def __init__(self, catalog: CatalogStore | None = None, hub: NotificationHub | None = None):
        self.catalog = catalog or CatalogStore()
        self._hub = hub

    @property
    def hub(self) -> NotificationHub:
        return self._hub or get_hub()

    def check_availability(self, item_id, quantity: int) -> bool:
        """True when the item exists and has at least ``quantity`` in stock.

        Advisory only: nothing is reserved, so a later debit may still find
        less stock than this check saw.
        """
        item = self.catalog.find(item_id)
        return item is not None and item.stock >= quantity

    def debit(self, item_id, quantity: int) -> int:
        if quantity is None or quantity < 1:
            raise InvalidRequest({"quantity": ["Quantity must be at least 1"]})

        with item_lock(item_id):
            new_stock = self._process(DebitStock(item_id=str(item_id), quantity=quantity), item_id)
            self._announce(item_id, new_stock)

        logger.info("stock_debited", item_id=str(item_id), quantity=quantity, stock=new_stock)
        return new_stock

    def set_stock(self, item_id, new_stock: int) -> int:
        if new_stock is None or new_stock < 0:
            raise InvalidRequest({"stock": ["Stock cannot be negative"]})

        with item_lock(item_id):
            stock = self._process(SetStock(item_id=str(item_id), stock=new_stock), item_id)
            self._announce(item_id, stock)

        logger.info("stock_set", item_id=str(item_id), stock=stock)
        return stock

    def announce(self, item_id, stock: int) -> None:
        """Publish a ``stockUpdate`` without changing anything."""
        self._announce(item_id, stock)

    def _process(self, command, item_id) -> int:
        try:
            return current_domain.process(command, asynchronous=False)
        except ObjectNotFoundError:
            raise item_not_found(item_id) from None

    def _announce(self, item_id, stock: int) -> None:
        self.hub.publish(STAFF, HubEvent.STOCK_UPDATE, {"item_id": str(item_id), "stock": stock})

"""Catalog Manager — staff-facing item administration.

Wraps the catalog management commands with the requester check, image
upload and hub announcements.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from canteen.access import Requester, require_elevated
from canteen.assets import get_storage
from canteen.assets.port import AssetStorage
from canteen.catalog.images import validate_image
from canteen.catalog.item import Item, parse_category
from canteen.catalog.management import AddItem, RemoveItem, UpdateItemDetails
from canteen.catalog.store import CatalogStore
from canteen.errors import InvalidRequest, item_not_found
from canteen.notifications import get_hub
from canteen.notifications.hub import NotificationHub
from canteen.notifications.topics import STAFF, HubEvent
from canteen.stock.ledger import StockLedger

logger = structlog.get_logger(__name__)


class CatalogManager:
    def __init__(
        self,
        catalog: CatalogStore | None = None,
        ledger: StockLedger | None = None,
        hub: NotificationHub | None = None,
        storage: AssetStorage | None = None,
    ):
        self.catalog = catalog or CatalogStore()
        self._hub = hub
        self.ledger = ledger or StockLedger(self.catalog, hub)
        self._storage = storage

    @property
    def hub(self) -> NotificationHub:
        return self._hub or get_hub()

    @property
    def storage(self) -> AssetStorage:
        return self._storage or get_storage()

    def add_item(
        self,
        requester: Requester,
        name: str,
        price: float,
        category: str,
        stock: int = 0,
        description: str | None = None,
        sub_category: str | None = None,
        image: bytes | None = None,
        image_content_type: str | None = None,
        image_filename: str | None = None,
    ) -> Item:
        require_elevated(requester, "add items")
        if not name or not name.strip():
            raise InvalidRequest({"name": ["Name is required"]})
        if price is None or price < 0:
            raise InvalidRequest({"price": ["Price cannot be negative"]})

        category = parse_category(category)
        image_url = self._upload(image, image_content_type, image_filename)
        item_id = current_domain.process(
            AddItem(
                name=name.strip(),
                description=description,
                price=price,
                category=category,
                sub_category=sub_category,
                stock=stock,
                image_url=image_url,
            ),
            asynchronous=False,
        )
        item = self.catalog.get(item_id)
        logger.info("item_added", item_id=item_id, name=item.name, stock=item.stock, requester=requester.user_id)
        self.ledger.announce(item_id, item.stock)
        return item

    def update_item(
        self,
        requester: Requester,
        item_id,
        name: str | None = None,
        description: str | None = None,
        price: float | None = None,
        category: str | None = None,
        sub_category: str | None = None,
        image: bytes | None = None,
        image_content_type: str | None = None,
        image_filename: str | None = None,
    ) -> Item:
        """Edit an item's descriptive fields. Existing orders keep their snapshot prices."""
        require_elevated(requester, "edit items")
        self.catalog.get(item_id)

        if category is not None:
            category = parse_category(category)
        image_url = self._upload(image, image_content_type, image_filename)
        try:
            current_domain.process(
                UpdateItemDetails(
                    item_id=str(item_id),
                    name=name,
                    description=description,
                    price=price,
                    category=category,
                    sub_category=sub_category,
                    image_url=image_url,
                ),
                asynchronous=False,
            )
        except ObjectNotFoundError:
            raise item_not_found(item_id) from None

        item = self.catalog.get(item_id)
        logger.info("item_updated", item_id=str(item_id), requester=requester.user_id)
        self.hub.publish(STAFF, HubEvent.ITEM_UPDATE, {"item_id": str(item_id), "item": item.as_payload()})
        return item

    def remove_item(self, requester: Requester, item_id) -> None:
        require_elevated(requester, "remove items")
        try:
            current_domain.process(RemoveItem(item_id=str(item_id)), asynchronous=False)
        except ObjectNotFoundError:
            raise item_not_found(item_id) from None

        logger.info("item_removed", item_id=str(item_id), requester=requester.user_id)
        self.hub.publish(STAFF, HubEvent.ITEM_DELETE, {"item_id": str(item_id)})

    def set_stock(self, requester: Requester, item_id, stock: int) -> int:
        """Manual restock from the staff console."""
        require_elevated(requester, "change stock")
        return self.ledger.set_stock(item_id, stock)

    def _upload(self, image: bytes | None, content_type: str | None, filename: str | None) -> str | None:
        if image is None:
            return None
        validate_image(image, content_type, filename)
        return self.storage.store(image, content_type, filename)

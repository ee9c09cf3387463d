"""Item aggregate — a sellable catalog entry and its stock count.

Stock only changes through ``debit`` and ``set_stock``. Both keep
``is_available`` equal to ``stock > 0`` and never let the count go negative;
a debit larger than the remaining stock clamps at zero instead of failing.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.fields import Boolean, DateTime, Float, Integer, String, Text

from canteen.catalog.events import ItemAdded, ItemDetailsUpdated, StockChanged
from canteen.domain import canteen
from canteen.errors import InvalidRequest


class Category(Enum):
    FOOD = "food"
    SNACK = "snack"
    DRINK = "drink"


class StockChangeReason(Enum):
    DEBIT = "debit"
    RESTOCK = "restock"


def parse_category(value) -> str:
    try:
        return Category(value).value
    except ValueError:
        allowed = ", ".join(c.value for c in Category)
        raise InvalidRequest({"category": [f"Unknown category '{value}', expected one of: {allowed}"]}) from None


@canteen.aggregate
class Item:
    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.0)
    category = String(required=True, max_length=10, choices=Category)
    sub_category = String(max_length=100)
    stock = Integer(default=0)
    is_available = Boolean(default=False)
    image_url = String(max_length=1000)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def stock_cannot_be_negative(self):
        if self.stock is not None and self.stock < 0:
            raise InvalidRequest({"stock": ["Stock cannot be negative"]})

    @invariant.post
    def availability_must_follow_stock(self):
        if self.is_available != ((self.stock or 0) > 0):
            raise InvalidRequest({"is_available": ["Availability must match stock"]})

    @classmethod
    def create(cls, name, price, category, stock=0, description=None, sub_category=None, image_url=None):
        if stock is None or stock < 0:
            raise InvalidRequest({"stock": ["Stock cannot be negative"]})

        now = datetime.now(UTC)
        item = cls(
            name=name,
            description=description,
            price=price,
            category=parse_category(category),
            sub_category=sub_category,
            stock=stock,
            is_available=stock > 0,
            image_url=image_url,
            created_at=now,
            updated_at=now,
        )
        item.raise_(
            ItemAdded(
                item_id=item.id,
                name=name,
                price=price,
                category=item.category,
                stock=stock,
                added_at=now,
            )
        )
        return item

    def update_details(
        self,
        name=None,
        description=None,
        price=None,
        category=None,
        sub_category=None,
        image_url=None,
    ):
        if price is not None and price < 0:
            raise InvalidRequest({"price": ["Price cannot be negative"]})

        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if price is not None:
            self.price = price
        if category is not None:
            self.category = parse_category(category)
        if sub_category is not None:
            self.sub_category = sub_category
        if image_url is not None:
            self.image_url = image_url

        self.updated_at = datetime.now(UTC)
        self.raise_(
            ItemDetailsUpdated(
                item_id=self.id,
                name=self.name,
                price=self.price,
                category=self.category,
                sub_category=self.sub_category,
                image_url=self.image_url,
                updated_at=self.updated_at,
            )
        )

    def debit(self, quantity) -> int:
        """Remove ``quantity`` units, clamping at zero. Returns the new stock."""
        if quantity is None or quantity < 1:
            raise InvalidRequest({"quantity": ["Quantity must be at least 1"]})
        return self._change_stock(max(0, self.stock - quantity), StockChangeReason.DEBIT)

    def set_stock(self, new_stock) -> int:
        """Overwrite the stock count, e.g. after a manual recount."""
        if new_stock is None or new_stock < 0:
            raise InvalidRequest({"stock": ["Stock cannot be negative"]})
        return self._change_stock(new_stock, StockChangeReason.RESTOCK)

    def _change_stock(self, new_stock, reason: StockChangeReason) -> int:
        previous = self.stock
        now = datetime.now(UTC)

        with atomic_change(self):
            self.stock = new_stock
            self.is_available = new_stock > 0
            self.updated_at = now

        self.raise_(
            StockChanged(
                item_id=self.id,
                previous_stock=previous,
                new_stock=new_stock,
                is_available=self.is_available,
                reason=reason.value,
                changed_at=now,
            )
        )
        return new_stock

    def as_payload(self) -> dict:
        """Plain-JSON view used for hub payloads."""
        return {
            "id": str(self.id),
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "category": self.category,
            "sub_category": self.sub_category,
            "stock": self.stock,
            "is_available": self.is_available,
            "image_url": self.image_url,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

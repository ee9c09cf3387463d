"""Domain events for the Item aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String

from canteen.domain import canteen


@canteen.event(part_of="Item")
class ItemAdded:
    """A new item was added to the catalog."""

    __version__ = 1

    item_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    category = String(required=True)
    stock = Integer(required=True)
    added_at = DateTime(required=True)


@canteen.event(part_of="Item")
class ItemDetailsUpdated:
    """Descriptive fields or the price of an item changed."""

    __version__ = 1

    item_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    category = String(required=True)
    sub_category = String()
    image_url = String()
    updated_at = DateTime(required=True)


@canteen.event(part_of="Item")
class StockChanged:
    """The stock count of an item was debited or set."""

    __version__ = 1

    item_id = Identifier(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)
    is_available = Boolean(required=True)
    reason = String(required=True)  # debit, restock
    changed_at = DateTime(required=True)

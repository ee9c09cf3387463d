"""Stock adjustment — commands and handler.

Handlers return the item's new stock count.
"""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from canteen.catalog.item import Item
from canteen.domain import canteen


@canteen.command(part_of="Item")
class DebitStock:
    """Remove sold units from an item, clamping at zero."""

    item_id = Identifier(required=True)
    quantity = Integer(required=True)


@canteen.command(part_of="Item")
class SetStock:
    """Overwrite an item's stock count."""

    item_id = Identifier(required=True)
    stock = Integer(required=True)


@canteen.command_handler(part_of=Item)
class StockAdjustmentHandler:
    @handle(DebitStock)
    def debit_stock(self, command):
        repo = current_domain.repository_for(Item)
        item = repo.get(command.item_id)
        new_stock = item.debit(command.quantity)
        repo.add(item)
        return new_stock

    @handle(SetStock)
    def set_stock(self, command):
        repo = current_domain.repository_for(Item)
        item = repo.get(command.item_id)
        new_stock = item.set_stock(command.stock)
        repo.add(item)
        return new_stock

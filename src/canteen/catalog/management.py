"""Catalog management — commands and handler for adding, editing and removing items."""

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from canteen.catalog.item import Item
from canteen.domain import canteen


@canteen.command(part_of="Item")
class AddItem:
    name: String(required=True, max_length=255)
    description: Text()
    price: Float(required=True)
    category: String(required=True, max_length=50)
    sub_category: String(max_length=100)
    stock: Integer(default=0)
    image_url: String(max_length=1000)


@canteen.command(part_of="Item")
class UpdateItemDetails:
    item_id: Identifier(required=True)
    name: String(max_length=255)
    description: Text()
    price: Float()
    category: String(max_length=50)
    sub_category: String(max_length=100)
    image_url: String(max_length=1000)


@canteen.command(part_of="Item")
class RemoveItem:
    item_id: Identifier(required=True)


@canteen.command_handler(part_of=Item)
class CatalogManagementHandler:
    @handle(AddItem)
    def add_item(self, command):
        item = Item.create(
            name=command.name,
            description=command.description,
            price=command.price,
            category=command.category,
            sub_category=command.sub_category,
            stock=command.stock,
            image_url=command.image_url,
        )
        current_domain.repository_for(Item).add(item)
        return str(item.id)

    @handle(UpdateItemDetails)
    def update_item_details(self, command):
        repo = current_domain.repository_for(Item)
        item = repo.get(command.item_id)
        item.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            category=command.category,
            sub_category=command.sub_category,
            image_url=command.image_url,
        )
        repo.add(item)
        return str(item.id)

    @handle(RemoveItem)
    def remove_item(self, command):
        repo = current_domain.repository_for(Item)
        item = repo.get(command.item_id)
        repo._dao.delete(item)
        return str(item.id)

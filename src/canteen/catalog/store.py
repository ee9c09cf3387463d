"""Catalog Store — read access to items."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from canteen.catalog.item import Item, parse_category
from canteen.errors import item_not_found


class CatalogStore:
    """Reads items through the Protean repository.

    Writes never happen here: stock goes through the stock ledger and
    descriptive fields through catalog management. Listings are unpaginated
    and oldest first.
    """

    def get(self, item_id) -> Item:
        try:
            return current_domain.repository_for(Item).get(str(item_id))
        except ObjectNotFoundError:
            raise item_not_found(item_id) from None

    def find(self, item_id) -> Item | None:
        try:
            return current_domain.repository_for(Item).get(str(item_id))
        except ObjectNotFoundError:
            return None

    def list_by_category(self, category) -> list[Item]:
        query = current_domain.repository_for(Item)._dao.query.filter(category=parse_category(category))
        return query.order_by("created_at").limit(None).all().items

    # Defined last so ``list`` in the annotations above still means the builtin
    def list(self) -> list[Item]:
        query = current_domain.repository_for(Item)._dao.query
        return query.order_by("created_at").limit(None).all().items

"""Application tests for reading the catalog."""

import pytest

from canteen.catalog.store import CatalogStore
from canteen.errors import InvalidRequest, NotFound


class TestGet:
    def test_get_existing_item(self, make_item):
        item = make_item(name="Poha", price=18.0, category="food", stock=4)
        loaded = CatalogStore().get(item.id)
        assert loaded.name == "Poha"
        assert loaded.stock == 4

    def test_get_missing_item_raises_not_found(self):
        with pytest.raises(NotFound) as exc:
            CatalogStore().get("missing-item")
        assert "item_id" in exc.value.messages

    def test_find_missing_item_returns_none(self):
        assert CatalogStore().find("missing-item") is None


class TestListing:
    def test_list_returns_all_items(self, make_item):
        make_item(name="Poha", category="food")
        make_item(name="Lassi", category="drink")
        names = {item.name for item in CatalogStore().list()}
        assert names == {"Poha", "Lassi"}

    def test_list_on_empty_catalog(self):
        assert CatalogStore().list() == []

    def test_list_by_category(self, make_item):
        make_item(name="Poha", category="food")
        make_item(name="Lassi", category="drink")
        make_item(name="Nimbu Pani", category="drink")

        drinks = CatalogStore().list_by_category("drink")

        assert {item.name for item in drinks} == {"Lassi", "Nimbu Pani"}

    def test_list_by_unknown_category(self):
        with pytest.raises(InvalidRequest):
            CatalogStore().list_by_category("furniture")

    def test_list_is_not_truncated_and_oldest_first(self, make_item):
        ids = [make_item(name=f"Item {n}").id for n in range(110)]

        listed = CatalogStore().list()

        assert len(listed) == 110
        assert {item.id for item in listed} == set(ids)
        created = [item.created_at for item in listed]
        assert created == sorted(created)

    def test_list_by_category_is_not_truncated(self, make_item):
        for n in range(105):
            make_item(name=f"Chai {n}", category="drink")
        make_item(name="Poha", category="food")

        drinks = CatalogStore().list_by_category("drink")

        assert len(drinks) == 105
        created = [item.created_at for item in drinks]
        assert created == sorted(created)

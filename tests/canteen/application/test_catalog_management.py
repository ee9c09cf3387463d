"""Application tests for staff item administration."""

import pytest

from canteen.assets import get_storage
from canteen.catalog.service import CatalogManager
from canteen.catalog.store import CatalogStore
from canteen.errors import InvalidRequest, NotFound, Unauthorized

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


class TestAddItem:
    def test_add_item_persists_and_announces_stock(self, admin, staff_feed):
        item = CatalogManager().add_item(admin, name="Pav Bhaji", price=60.0, category="food", stock=8)

        assert CatalogStore().get(item.id).stock == 8
        assert staff_feed.payloads("stockUpdate") == [{"item_id": str(item.id), "stock": 8}]

    def test_add_item_with_image_stores_asset(self, admin):
        item = CatalogManager().add_item(
            admin,
            name="Pav Bhaji",
            price=60.0,
            category="food",
            image=PNG,
            image_content_type="image/png",
            image_filename="pav.png",
        )
        assert item.image_url in get_storage().objects

    def test_customer_cannot_add_items(self, customer):
        with pytest.raises(Unauthorized):
            CatalogManager().add_item(customer, name="Free Lunch", price=0.0, category="food")
        assert CatalogStore().list() == []

    def test_blank_name_rejected(self, admin):
        with pytest.raises(InvalidRequest):
            CatalogManager().add_item(admin, name="  ", price=10.0, category="food")

    def test_unknown_category_rejected(self, admin):
        with pytest.raises(InvalidRequest):
            CatalogManager().add_item(admin, name="Chair", price=10.0, category="furniture")

    def test_unknown_category_stores_no_image(self, admin):
        with pytest.raises(InvalidRequest):
            CatalogManager().add_item(
                admin,
                name="Chair",
                price=10.0,
                category="furniture",
                image=PNG,
                image_content_type="image/png",
                image_filename="chair.png",
            )
        assert get_storage().objects == {}

    @pytest.mark.parametrize(
        "blob,content_type,filename",
        [
            (PNG, "image/gif", "anim.gif"),
            (PNG, "image/png", "script.exe"),
            (b"\x00" * (5 * 1024 * 1024 + 1), "image/jpeg", "huge.jpg"),
            (b"", "image/png", "empty.png"),
        ],
    )
    def test_invalid_images_rejected(self, admin, blob, content_type, filename):
        with pytest.raises(InvalidRequest) as exc:
            CatalogManager().add_item(
                admin,
                name="Burger",
                price=50.0,
                category="food",
                image=blob,
                image_content_type=content_type,
                image_filename=filename,
            )
        assert "image" in exc.value.messages


class TestUpdateItem:
    def test_update_publishes_item_update(self, admin, staff_feed, make_item):
        item = make_item(name="Tea", price=10.0, category="drink")

        updated = CatalogManager().update_item(admin, item.id, price=12.0)

        assert updated.price == 12.0
        payload = staff_feed.payloads("itemUpdate")[0]
        assert payload["item_id"] == str(item.id)
        assert payload["item"]["price"] == 12.0

    def test_update_keeps_stock(self, admin, make_item):
        item = make_item(stock=6)
        CatalogManager().update_item(admin, item.id, name="Jumbo Samosa")
        assert CatalogStore().get(item.id).stock == 6

    def test_update_replaces_image(self, admin, make_item):
        item = make_item()
        updated = CatalogManager().update_item(
            admin, item.id, image=PNG, image_content_type="image/png", image_filename="new.png"
        )
        assert updated.image_url.endswith(".png")

    def test_update_missing_item(self, admin):
        with pytest.raises(NotFound):
            CatalogManager().update_item(admin, "missing-item", price=1.0)

    def test_unknown_category_keeps_image_out_of_storage(self, admin, make_item):
        item = make_item()
        with pytest.raises(InvalidRequest):
            CatalogManager().update_item(
                admin,
                item.id,
                category="furniture",
                image=PNG,
                image_content_type="image/png",
                image_filename="chair.png",
            )
        assert get_storage().objects == {}

    def test_customer_cannot_update(self, customer, make_item):
        item = make_item(price=10.0)
        with pytest.raises(Unauthorized):
            CatalogManager().update_item(customer, item.id, price=0.0)
        assert CatalogStore().get(item.id).price == 10.0


class TestRemoveItem:
    def test_remove_deletes_and_announces(self, admin, staff_feed, make_item):
        item = make_item()

        CatalogManager().remove_item(admin, item.id)

        with pytest.raises(NotFound):
            CatalogStore().get(item.id)
        assert staff_feed.payloads("itemDelete") == [{"item_id": str(item.id)}]

    def test_remove_missing_item(self, admin):
        with pytest.raises(NotFound):
            CatalogManager().remove_item(admin, "missing-item")

    def test_customer_cannot_remove(self, customer, make_item):
        item = make_item()
        with pytest.raises(Unauthorized):
            CatalogManager().remove_item(customer, item.id)


class TestManualRestock:
    def test_admin_sets_stock(self, admin, staff_feed, make_item):
        item = make_item(stock=0)
        assert CatalogManager().set_stock(admin, item.id, 15) == 15
        assert staff_feed.payloads("stockUpdate") == [{"item_id": str(item.id), "stock": 15}]

    def test_customer_cannot_restock(self, customer, make_item):
        item = make_item(stock=0)
        with pytest.raises(Unauthorized):
            CatalogManager().set_stock(customer, item.id, 99)

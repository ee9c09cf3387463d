"""Application tests for reading orders."""

import pytest

from canteen.errors import NotFound, Unauthorized
from canteen.ordering.engine import OrderEngine


@pytest.fixture()
def place(make_item):
    item = make_item(stock=50)

    def _place(requester):
        return OrderEngine().create_order(requester, [{"item_id": item.id, "quantity": 1}], "cod").order

    return _place


class TestGetOrder:
    def test_owner_reads_own_order(self, customer, place):
        order = place(customer)
        assert OrderEngine().get_order(customer, order.id).id == order.id

    def test_staff_reads_any_order(self, admin, customer, place):
        order = place(customer)
        assert OrderEngine().get_order(admin, order.id).id == order.id

    def test_other_customer_is_refused(self, customer, other_customer, place):
        order = place(customer)
        with pytest.raises(Unauthorized):
            OrderEngine().get_order(other_customer, order.id)

    def test_unknown_order(self, customer):
        with pytest.raises(NotFound):
            OrderEngine().get_order(customer, "missing-order")


class TestListOrders:
    def test_customer_sees_only_own_orders(self, customer, other_customer, place):
        mine = {place(customer).id, place(customer).id}
        place(other_customer)

        listed = OrderEngine().list_orders(customer)

        assert {order.id for order in listed} == mine

    def test_staff_sees_everything(self, admin, customer, other_customer, place):
        place(customer)
        place(other_customer)
        assert len(OrderEngine().list_orders(admin)) == 2

    def test_newest_first(self, admin, customer, place):
        for _ in range(3):
            place(customer)

        created = [order.created_at for order in OrderEngine().list_orders(admin)]

        assert created == sorted(created, reverse=True)

    def test_no_orders(self, customer):
        assert OrderEngine().list_orders(customer) == []

    def test_large_history_is_not_truncated(self, admin, customer, make_item):
        item = make_item(stock=200)
        engine = OrderEngine()
        for _ in range(120):
            engine.create_order(customer, [{"item_id": item.id, "quantity": 1}], "cod")

        listed = engine.list_orders(admin)

        assert len(listed) == 120
        assert len(engine.list_orders(customer)) == 120
        created = [order.created_at for order in listed]
        assert created == sorted(created, reverse=True)

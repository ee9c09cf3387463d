"""Integration tests for the order endpoints."""

import pytest
import structlog

from canteen.ordering.engine import OrderEngine


@pytest.fixture()
def item_id(client, admin_headers):
    response = client.post(
        "/items",
        data={"name": "Thali", "price": "80", "category": "food", "stock": "3"},
        headers=admin_headers,
    )
    return response.json()["id"]


def _place(client, headers, item_id, quantity=1, payment_method="qr"):
    return client.post(
        "/orders",
        json={"lines": [{"item_id": item_id, "quantity": quantity}], "payment_method": payment_method},
        headers=headers,
    )


class TestPlaceOrder:
    def test_qr_order(self, client, customer_headers, item_id):
        response = _place(client, customer_headers, item_id, quantity=2)

        assert response.status_code == 201
        body = response.json()
        assert body["order"]["total_amount"] == 160.0
        assert body["order"]["user_id"] == "cust-001"
        assert body["order"]["lines"][0]["subtotal"] == 160.0
        assert body["payment_reference"]["amount"] == 160.0

    def test_cod_order_has_no_reference(self, client, customer_headers, item_id):
        body = _place(client, customer_headers, item_id, payment_method="cod").json()
        assert body["payment_reference"] is None

    def test_empty_order_is_400(self, client, customer_headers):
        response = client.post("/orders", json={"lines": [], "payment_method": "qr"}, headers=customer_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "InvalidRequest"

    def test_insufficient_stock_is_409(self, client, customer_headers, item_id):
        response = _place(client, customer_headers, item_id, quantity=4)
        assert response.status_code == 409
        assert response.json()["error"] == "InsufficientStock"

    def test_unknown_item_is_404(self, client, customer_headers):
        assert _place(client, customer_headers, "missing-item").status_code == 404


class TestOrderLifecycle:
    def test_status_then_payment(self, client, admin_headers, customer_headers, item_id):
        order_id = _place(client, customer_headers, item_id, quantity=2).json()["order"]["id"]

        processing = client.put(f"/orders/{order_id}/status", json={"order_status": "processing"}, headers=admin_headers)
        assert processing.json()["order_status"] == "processing"

        paid = client.put(f"/orders/{order_id}/payment", headers=customer_headers)
        assert paid.json()["payment_status"] == "completed"
        assert client.get(f"/items/{item_id}").json()["stock"] == 1

    def test_backward_transition_is_409(self, client, admin_headers, customer_headers, item_id):
        order_id = _place(client, customer_headers, item_id).json()["order"]["id"]
        client.put(f"/orders/{order_id}/status", json={"order_status": "delivered"}, headers=admin_headers)

        response = client.put(f"/orders/{order_id}/status", json={"order_status": "placed"}, headers=admin_headers)

        assert response.status_code == 409
        assert response.json()["error"] == "InvalidTransition"

    def test_customer_cannot_change_status(self, client, customer_headers, item_id):
        order_id = _place(client, customer_headers, item_id).json()["order"]["id"]
        response = client.put(f"/orders/{order_id}/status", json={"order_status": "delivered"}, headers=customer_headers)
        assert response.status_code == 403


class TestReadOrders:
    def test_customer_lists_own_orders(self, client, customer_headers, item_id):
        _place(client, customer_headers, item_id)
        _place(client, {"X-User-Id": "cust-002"}, item_id)

        mine = client.get("/orders", headers=customer_headers).json()
        everything = client.get("/orders", headers={"X-User-Id": "staff-001", "X-User-Role": "admin"}).json()

        assert [order["user_id"] for order in mine] == ["cust-001"]
        assert len(everything) == 2

    def test_other_customer_cannot_read_order(self, client, customer_headers, item_id):
        order_id = _place(client, customer_headers, item_id).json()["order"]["id"]
        response = client.get(f"/orders/{order_id}", headers={"X-User-Id": "cust-002"})
        assert response.status_code == 403

    def test_unknown_role_is_400(self, client):
        response = client.get("/orders", headers={"X-User-Id": "cust-001", "X-User-Role": "root"})
        assert response.status_code == 400


class TestRequestLogContext:
    def test_requester_is_bound_inside_the_route(self, client, customer_headers, monkeypatch):
        seen = {}

        def spy(self, requester):
            seen.update(structlog.contextvars.get_contextvars())
            return []

        monkeypatch.setattr(OrderEngine, "list_orders", spy)

        response = client.get("/orders", headers=customer_headers)

        assert response.status_code == 200
        assert seen["requester_id"] == "cust-001"
        assert seen["requester_role"] == "user"

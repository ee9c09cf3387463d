import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from canteen.api import item_router, order_router, register_error_handlers, ws_router

ADMIN_HEADERS = {"X-User-Id": "staff-001", "X-User-Role": "admin"}
CUSTOMER_HEADERS = {"X-User-Id": "cust-001", "X-User-Role": "user"}


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(item_router)
    app.include_router(order_router)
    app.include_router(ws_router)
    register_error_handlers(app)
    return TestClient(app)


@pytest.fixture()
def admin_headers():
    return dict(ADMIN_HEADERS)


@pytest.fixture()
def customer_headers():
    return dict(CUSTOMER_HEADERS)

"""Pydantic request/response schemas for the canteen API.

Request bodies stay permissive so the engine performs its own checks:
empty orders and bad quantities come back as 400 with engine messages rather
than as framework validation errors.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Items
# ---------------------------------------------------------------------------
class ItemResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    price: float
    category: str
    sub_category: str | None = None
    stock: int
    is_available: bool
    image_url: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_item(cls, item) -> "ItemResponse":
        return cls(
            id=str(item.id),
            name=item.name,
            description=item.description,
            price=item.price,
            category=item.category,
            sub_category=item.sub_category,
            stock=item.stock,
            is_available=item.is_available,
            image_url=item.image_url,
            created_at=item.created_at,
        )


class SetStockRequest(BaseModel):
    stock: int

    model_config = {"json_schema_extra": {"examples": [{"stock": 25}]}}


class StockResponse(BaseModel):
    item_id: str
    stock: int


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class OrderLineRequest(BaseModel):
    item_id: str
    quantity: int


class PlaceOrderRequest(BaseModel):
    lines: list[OrderLineRequest] = Field(default_factory=list)
    payment_method: str

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "lines": [{"item_id": "item-001", "quantity": 2}],
                    "payment_method": "qr",
                }
            ]
        }
    }


class UpdateOrderStatusRequest(BaseModel):
    order_status: str


class OrderLineResponse(BaseModel):
    item_id: str
    name: str
    price: float
    quantity: int
    subtotal: float


class OrderResponse(BaseModel):
    id: str
    user_id: str
    lines: list[OrderLineResponse]
    total_amount: float
    payment_method: str
    payment_status: str
    order_status: str
    created_at: datetime | None = None

    @classmethod
    def from_order(cls, order) -> "OrderResponse":
        return cls(
            id=str(order.id),
            user_id=str(order.user_id),
            lines=[
                OrderLineResponse(
                    item_id=str(line.item_id),
                    name=line.name,
                    price=line.price,
                    quantity=line.quantity,
                    subtotal=line.subtotal,
                )
                for line in order.ordered_lines
            ],
            total_amount=order.total_amount,
            payment_method=order.payment_method,
            payment_status=order.payment_status,
            order_status=order.order_status,
            created_at=order.created_at,
        )


class PaymentReferenceResponse(BaseModel):
    order_id: str
    amount: float
    reference: str
    payload: str
    format: str


class PlacedOrderResponse(BaseModel):
    order: OrderResponse
    payment_reference: PaymentReferenceResponse | None = None

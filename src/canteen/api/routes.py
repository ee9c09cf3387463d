"""FastAPI routes for the canteen — items and orders."""

from fastapi import APIRouter, Depends, File, Form, UploadFile

from canteen.access import Requester
from canteen.api.dependencies import get_requester
from canteen.api.schemas import (
    ItemResponse,
    OrderResponse,
    PaymentReferenceResponse,
    PlacedOrderResponse,
    PlaceOrderRequest,
    SetStockRequest,
    StockResponse,
    UpdateOrderStatusRequest,
)
from canteen.catalog.service import CatalogManager
from canteen.catalog.store import CatalogStore
from canteen.ordering.engine import OrderEngine


async def _read_image(image: UploadFile | None):
    if image is None:
        return None, None, None
    return await image.read(), image.content_type, image.filename


# ---------------------------------------------------------------------------
# Item Router
# ---------------------------------------------------------------------------
item_router = APIRouter(prefix="/items", tags=["items"])


@item_router.get("", response_model=list[ItemResponse])
async def list_items() -> list[ItemResponse]:
    return [ItemResponse.from_item(item) for item in CatalogStore().list()]


@item_router.get("/category/{category}", response_model=list[ItemResponse])
async def list_items_by_category(category: str) -> list[ItemResponse]:
    return [ItemResponse.from_item(item) for item in CatalogStore().list_by_category(category)]


@item_router.get("/{item_id}", response_model=ItemResponse)
async def get_item(item_id: str) -> ItemResponse:
    return ItemResponse.from_item(CatalogStore().get(item_id))


@item_router.post("", status_code=201, response_model=ItemResponse)
async def add_item(
    name: str = Form(...),
    price: float = Form(...),
    category: str = Form(...),
    stock: int = Form(0),
    description: str | None = Form(None),
    sub_category: str | None = Form(None),
    image: UploadFile | None = File(None),
    requester: Requester = Depends(get_requester),
) -> ItemResponse:
    blob, content_type, filename = await _read_image(image)
    item = CatalogManager().add_item(
        requester,
        name=name,
        price=price,
        category=category,
        stock=stock,
        description=description,
        sub_category=sub_category,
        image=blob,
        image_content_type=content_type,
        image_filename=filename,
    )
    return ItemResponse.from_item(item)


@item_router.put("/{item_id}", response_model=ItemResponse)
async def update_item(
    item_id: str,
    name: str | None = Form(None),
    price: float | None = Form(None),
    category: str | None = Form(None),
    description: str | None = Form(None),
    sub_category: str | None = Form(None),
    image: UploadFile | None = File(None),
    requester: Requester = Depends(get_requester),
) -> ItemResponse:
    blob, content_type, filename = await _read_image(image)
    item = CatalogManager().update_item(
        requester,
        item_id,
        name=name,
        price=price,
        category=category,
        description=description,
        sub_category=sub_category,
        image=blob,
        image_content_type=content_type,
        image_filename=filename,
    )
    return ItemResponse.from_item(item)


@item_router.delete("/{item_id}", status_code=204)
async def remove_item(item_id: str, requester: Requester = Depends(get_requester)) -> None:
    CatalogManager().remove_item(requester, item_id)


@item_router.put("/{item_id}/stock", response_model=StockResponse)
async def set_item_stock(
    item_id: str,
    body: SetStockRequest,
    requester: Requester = Depends(get_requester),
) -> StockResponse:
    stock = CatalogManager().set_stock(requester, item_id, body.stock)
    return StockResponse(item_id=item_id, stock=stock)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=PlacedOrderResponse)
async def place_order(body: PlaceOrderRequest, requester: Requester = Depends(get_requester)) -> PlacedOrderResponse:
    placed = OrderEngine().create_order(
        requester,
        lines=[line.model_dump() for line in body.lines],
        payment_method=body.payment_method,
    )
    reference = None
    if placed.payment_reference is not None:
        reference = PaymentReferenceResponse(**placed.payment_reference.as_dict())
    return PlacedOrderResponse(order=OrderResponse.from_order(placed.order), payment_reference=reference)


@order_router.get("", response_model=list[OrderResponse])
async def list_orders(requester: Requester = Depends(get_requester)) -> list[OrderResponse]:
    return [OrderResponse.from_order(order) for order in OrderEngine().list_orders(requester)]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, requester: Requester = Depends(get_requester)) -> OrderResponse:
    return OrderResponse.from_order(OrderEngine().get_order(requester, order_id))


@order_router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str,
    body: UpdateOrderStatusRequest,
    requester: Requester = Depends(get_requester),
) -> OrderResponse:
    order = OrderEngine().update_order_status(requester, order_id, body.order_status)
    return OrderResponse.from_order(order)


@order_router.put("/{order_id}/payment", response_model=OrderResponse)
async def complete_payment(order_id: str, requester: Requester = Depends(get_requester)) -> OrderResponse:
    return OrderResponse.from_order(OrderEngine().complete_payment(requester, order_id))

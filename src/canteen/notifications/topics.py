"""Hub topics and event names.

Staff sessions share the ``staff`` topic; each customer listens on their own
``user:<id>`` topic and never sees anyone else's updates.
"""

from enum import Enum

from canteen.access import Role

STAFF = "staff"


class HubEvent(Enum):
    NEW_ORDER = "newOrder"
    COD_ORDER = "codOrder"
    ORDER_STATUS_UPDATE = "orderStatusUpdate"
    ORDER_UPDATE = "orderUpdate"
    PAYMENT_UPDATE = "paymentUpdate"
    STOCK_UPDATE = "stockUpdate"
    ITEM_UPDATE = "itemUpdate"
    ITEM_DELETE = "itemDelete"


def user_topic(user_id) -> str:
    return f"user:{user_id}"


def topics_for(user_id, role) -> list[str]:
    """Topics a session joins on handshake."""
    if role == Role.ADMIN.value:
        return [STAFF]
    return [user_topic(user_id)]

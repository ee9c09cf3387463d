"""WebSocket endpoint — live hub notifications for staff and customers.

The first message a client sends is the handshake ``{"user_id": ..., "role": ...}``.
The server answers with ``{"event": "joined", "payload": {"topics": [...]}}`` and
then streams every hub message published to those topics.
"""

import asyncio
import os

import structlog
from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from canteen.access import Role
from canteen.notifications import get_hub
from canteen.notifications.queue_subscriber import DEFAULT_QUEUE_SIZE, QueueSubscriber

logger = structlog.get_logger(__name__)

ws_router = APIRouter(tags=["notifications"])

POLICY_VIOLATION = 1008


def _queue_size() -> int:
    return int(os.environ.get("HUB_QUEUE_SIZE", DEFAULT_QUEUE_SIZE))


async def _forward(websocket: WebSocket, subscriber: QueueSubscriber) -> None:
    while True:
        message = await subscriber.next_message()
        await websocket.send_json(message.as_dict())


async def _wait_for_close(websocket: WebSocket) -> None:
    while True:
        incoming = await websocket.receive()
        if incoming["type"] == "websocket.disconnect":
            return


@ws_router.websocket("/ws")
async def notifications_socket(websocket: WebSocket) -> None:
    await websocket.accept()
    try:
        handshake = await websocket.receive_json()
    except WebSocketDisconnect:
        return
    except ValueError:
        handshake = None

    user_id = handshake.get("user_id") if isinstance(handshake, dict) else None
    role = handshake.get("role", Role.USER.value) if isinstance(handshake, dict) else None
    if not user_id or role not in {r.value for r in Role}:
        await websocket.close(code=POLICY_VIOLATION)
        return

    hub = get_hub()
    subscriber = QueueSubscriber(asyncio.get_running_loop(), maxsize=_queue_size(), name=str(user_id))
    topics = hub.connect(subscriber, user_id=user_id, role=role)
    await websocket.send_json({"event": "joined", "payload": {"topics": topics}})

    tasks = {
        asyncio.create_task(_forward(websocket, subscriber)),
        asyncio.create_task(_wait_for_close(websocket)),
    }
    try:
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        for task in done:
            if not task.cancelled() and task.exception() is not None:
                logger.info("hub_session_ended", user_id=str(user_id), reason=repr(task.exception()))
    finally:
        hub.disconnect(subscriber)
        logger.info("hub_session_left", user_id=str(user_id), dropped=subscriber.dropped)

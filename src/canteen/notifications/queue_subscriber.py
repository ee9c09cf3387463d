"""Bounded asyncio queue subscriber used by WebSocket sessions."""

import asyncio

import structlog

from canteen.notifications.subscriber_port import HubMessage, Subscriber

logger = structlog.get_logger(__name__)

DEFAULT_QUEUE_SIZE = 100


class QueueSubscriber(Subscriber):
    """Hands messages to a session's event loop without blocking the publisher.

    When the session's queue is full the message is dropped for this
    session only and counted in ``dropped``.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop, maxsize: int = DEFAULT_QUEUE_SIZE, name: str = ""):
        self.loop = loop
        self.name = name
        self.queue: asyncio.Queue[HubMessage] = asyncio.Queue(maxsize=maxsize)
        self.dropped = 0

    def deliver(self, message: HubMessage) -> None:
        try:
            self.loop.call_soon_threadsafe(self._offer, message)
        except RuntimeError:
            # loop already closed, session is going away
            self.dropped += 1
            logger.warning("hub_session_closed", session=self.name, hub_event=message.event)

    def _offer(self, message: HubMessage) -> None:
        try:
            self.queue.put_nowait(message)
        except asyncio.QueueFull:
            self.dropped += 1
            logger.warning(
                "hub_message_dropped",
                session=self.name,
                topic=message.topic,
                hub_event=message.event,
                dropped=self.dropped,
            )

    async def next_message(self) -> HubMessage:
        return await self.queue.get()

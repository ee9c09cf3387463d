"""Notification Hub — in-process topic pub/sub.

Delivery is fire-and-forget: ``publish`` hands each message to the current
subscribers of a topic and returns. Nothing is buffered for topics without
subscribers, so late joiners only see messages published after they joined.
"""

import threading

import structlog

from canteen.notifications.subscriber_port import HubMessage, Subscriber
from canteen.notifications.topics import topics_for

logger = structlog.get_logger(__name__)


class NotificationHub:
    def __init__(self):
        self._lock = threading.Lock()
        self._topics: dict[str, list[Subscriber]] = {}

    def connect(self, subscriber: Subscriber, user_id, role) -> list[str]:
        """Join the topics a session is entitled to and return them."""
        topics = topics_for(user_id, role)
        for topic in topics:
            self.subscribe(topic, subscriber)
        logger.info("hub_session_joined", user_id=str(user_id), role=role, topics=topics)
        return topics

    def subscribe(self, topic: str, subscriber: Subscriber) -> None:
        with self._lock:
            subscribers = self._topics.setdefault(topic, [])
            if subscriber not in subscribers:
                subscribers.append(subscriber)

    def unsubscribe(self, topic: str, subscriber: Subscriber) -> None:
        with self._lock:
            subscribers = self._topics.get(topic, [])
            if subscriber in subscribers:
                subscribers.remove(subscriber)
            if not subscribers:
                self._topics.pop(topic, None)

    def disconnect(self, subscriber: Subscriber) -> None:
        """Drop a session from every topic it joined."""
        with self._lock:
            for topic in list(self._topics):
                subscribers = self._topics[topic]
                if subscriber in subscribers:
                    subscribers.remove(subscriber)
                if not subscribers:
                    del self._topics[topic]

    def subscribers(self, topic: str) -> list[Subscriber]:
        with self._lock:
            return list(self._topics.get(topic, []))

    def publish(self, topic: str, event, payload: dict) -> int:
        """Deliver ``event`` to everyone on ``topic``. Returns the delivery count."""
        name = event.value if hasattr(event, "value") else event
        message = HubMessage(topic=topic, event=name, payload=payload)

        delivered = 0
        for subscriber in self.subscribers(topic):
            try:
                subscriber.deliver(message)
                delivered += 1
            except Exception:
                logger.exception("hub_delivery_failed", topic=topic, hub_event=name)

        logger.debug("hub_published", topic=topic, hub_event=name, delivered=delivered)
        return delivered

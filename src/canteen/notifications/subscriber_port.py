"""Subscriber port — the hub's view of a connected session."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import UTC, datetime


@dataclass(frozen=True)
class HubMessage:
    topic: str
    event: str
    payload: dict
    published_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def as_dict(self) -> dict:
        return {
            "topic": self.topic,
            "event": self.event,
            "payload": self.payload,
            "published_at": self.published_at.isoformat(),
        }


class Subscriber(ABC):
    """A session that receives hub messages.

    ``deliver`` is called from whichever thread published the message and
    must return without waiting on the session's transport.
    """

    @abstractmethod
    def deliver(self, message: HubMessage) -> None: ...

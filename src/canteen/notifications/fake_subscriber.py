"""Recording subscriber that keeps delivered messages in memory for assertions."""

from canteen.notifications.subscriber_port import HubMessage, Subscriber


class RecordingSubscriber(Subscriber):
    def __init__(self, name: str = "recorder"):
        self.name = name
        self.messages: list[HubMessage] = []
        self.should_fail = False

    def configure(self, should_fail: bool = False):
        self.should_fail = should_fail

    def deliver(self, message: HubMessage) -> None:
        if self.should_fail:
            raise RuntimeError(f"{self.name} refused {message.event}")
        self.messages.append(message)

    def events(self) -> list[str]:
        return [m.event for m in self.messages]

    def payloads(self, event: str) -> list[dict]:
        return [m.payload for m in self.messages if m.event == event]

    def reset(self):
        self.messages.clear()
        self.should_fail = False

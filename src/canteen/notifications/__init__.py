"""Notification hub registry.

``get_hub()`` returns the process-wide hub that engine services publish to
and WebSocket sessions subscribe on.
"""

from canteen.notifications.hub import NotificationHub

_current_hub: NotificationHub | None = None


def get_hub() -> NotificationHub:
    global _current_hub
    if _current_hub is None:
        _current_hub = NotificationHub()
    return _current_hub


def set_hub(hub: NotificationHub) -> None:
    global _current_hub
    _current_hub = hub


def reset_hub() -> None:
    """Forget every subscriber (useful between tests)."""
    global _current_hub
    _current_hub = None

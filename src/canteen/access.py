"""Requester identity supplied by the access gate in front of the engine."""

from dataclasses import dataclass
from enum import Enum

from canteen.errors import Unauthorized


class Role(Enum):
    ADMIN = "admin"
    USER = "user"


@dataclass(frozen=True)
class Requester:
    user_id: str
    role: str = Role.USER.value

    @property
    def is_elevated(self) -> bool:
        return self.role == Role.ADMIN.value

    def can_access(self, owner_id) -> bool:
        return self.is_elevated or str(owner_id) == str(self.user_id)


def require_elevated(requester: Requester, action: str) -> None:
    if not requester.is_elevated:
        raise Unauthorized({"requester": [f"Only staff may {action}"]})


def require_owner_or_elevated(requester: Requester, owner_id, action: str) -> None:
    if not requester.can_access(owner_id):
        raise Unauthorized({"requester": [f"Not allowed to {action} this order"]})

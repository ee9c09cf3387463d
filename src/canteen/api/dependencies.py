"""Access gate adapter: the requester as forwarded by the upstream gateway."""

from fastapi import Header

from canteen.access import Requester, Role
from canteen.errors import InvalidRequest, Unauthorized
from canteen.utils.logging import bind_requester


async def get_requester(
    x_user_id: str | None = Header(default=None),
    x_user_role: str = Header(default=Role.USER.value),
) -> Requester:
    if not x_user_id:
        raise Unauthorized({"requester": ["Missing X-User-Id header"]})
    try:
        role = Role(x_user_role.lower()).value
    except ValueError:
        raise InvalidRequest({"requester": [f"Unknown role '{x_user_role}'"]}) from None

    bind_requester(x_user_id, role)
    return Requester(user_id=x_user_id, role=role)

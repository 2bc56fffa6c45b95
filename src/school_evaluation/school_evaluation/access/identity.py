from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

from ..core.enums import Role
from ..core.exceptions import AuthenticationError


@dataclass(frozen=True)
class Identity:
    """Người dùng đang thao tác: {user_id, roles} do tầng xác thực cung cấp."""

    user_id: int
    roles: frozenset[Role]

    def has(self, role: Role) -> bool:
        return role in self.roles


def _role_name(item: Any) -> Optional[str]:
    if isinstance(item, Role):
        return item.value
    if isinstance(item, str):
        return item
    if isinstance(item, Mapping):
        value = item.get("name") or item.get("role") or item.get("role_name")
        return str(value) if value else None
    return None


def normalize_roles(raw: Any) -> frozenset[Role]:
    """Collapse the role shapes seen from identity providers into a set of Role.

    Accepts a single name (optionally comma-separated), a list of names, a list
    of {"name": ...}/{"role": ...} objects, or one such object. Unknown names
    are ignored.
    """

    if not raw:
        return frozenset()

    if isinstance(raw, (str, Role, Mapping)):
        items: Iterable[Any] = [raw]
    else:
        items = raw

    out = set()
    for item in items:
        name = _role_name(item)
        if not name:
            continue
        for part in name.split(","):
            try:
                out.add(Role(part.strip().lower()))
            except ValueError:
                continue
    return frozenset(out)


def identity_from_session(session: Mapping[str, Any]) -> Identity:
    """Build the acting identity from the Flask session written at login.

    Login itself belongs to the authentication layer; it stores `user_id` and
    either `roles` or the legacy single `role`.
    """

    if "user_id" not in session:
        raise AuthenticationError("Vui lòng đăng nhập để tiếp tục")

    try:
        user_id = int(session["user_id"])
    except (TypeError, ValueError):
        raise AuthenticationError("Phiên đăng nhập không hợp lệ")

    roles = normalize_roles(session.get("roles") or session.get("role"))
    return Identity(user_id=user_id, roles=roles)

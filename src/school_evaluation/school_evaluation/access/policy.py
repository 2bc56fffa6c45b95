"""Role x resource capability matrix.

Every screen/endpoint asks the same question through `AccessPolicy`: given the
caller's roles, what may they do with this resource and which columns are
hidden from them. The answer is computed per request, never stored.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional

from ..core.enums import Operation, Resource, Role
from ..core.exceptions import AuthorizationError
from .identity import Identity

logger = logging.getLogger(__name__)

STUDENT_COLUMN = "student"
TEACHER_COLUMN = "teacher"


@dataclass(frozen=True)
class Capability:
    can_create: bool = False
    can_edit: bool = False
    can_delete: bool = False
    hidden_fields: frozenset[str] = field(default_factory=frozenset)
    # mutations limited to rows the caller owns (own class / own record)
    own_only: bool = False

    def allows(self, operation: Operation) -> bool:
        return {
            Operation.CREATE: self.can_create,
            Operation.EDIT: self.can_edit,
            Operation.DELETE: self.can_delete,
        }[operation]

    def grants_any(self) -> bool:
        return self.can_create or self.can_edit or self.can_delete

    def merge(self, other: "Capability") -> "Capability":
        hidden = self.hidden_fields | other.hidden_fields
        if not other.grants_any():
            own_only = self.own_only
        elif not self.grants_any():
            own_only = other.own_only
        else:
            own_only = self.own_only and other.own_only
        return Capability(
            can_create=self.can_create or other.can_create,
            can_edit=self.can_edit or other.can_edit,
            can_delete=self.can_delete or other.can_delete,
            hidden_fields=hidden,
            own_only=own_only,
        )

    def to_dict(self) -> dict:
        return {
            "can_create": self.can_create,
            "can_edit": self.can_edit,
            "can_delete": self.can_delete,
            "hidden_fields": sorted(self.hidden_fields),
            "own_only": self.own_only,
        }


READ_ONLY = Capability()
_MANAGE = Capability(can_create=True, can_edit=True, can_delete=True)
_AUTHOR = Capability(can_create=True, can_edit=True)

# Missing (role, resource) pairs mean READ_ONLY.
CAPABILITIES: Mapping[tuple[Role, Resource], Capability] = {
    (Role.STUDENT, Resource.EVALUATION): Capability(hidden_fields=frozenset({STUDENT_COLUMN})),
    (Role.PARENT, Resource.EVALUATION): READ_ONLY,
    (Role.TEACHER, Resource.EVALUATION): Capability(
        can_create=True,
        can_delete=True,
        hidden_fields=frozenset({TEACHER_COLUMN}),
        own_only=True,
    ),
    # evaluation authoring is teacher-only
    (Role.MANAGER, Resource.EVALUATION): READ_ONLY,
    (Role.STUDENT, Resource.TEACHER_REVIEW): Capability(hidden_fields=frozenset({STUDENT_COLUMN})),
    (Role.TEACHER, Resource.TEACHER_REVIEW): Capability(hidden_fields=frozenset({TEACHER_COLUMN})),
    (Role.MANAGER, Resource.CLASS): _MANAGE,
    (Role.MANAGER, Resource.PAYROLL): _MANAGE,
    (Role.MANAGER, Resource.TUITION): _MANAGE,
    (Role.MANAGER, Resource.SCHEDULE): _MANAGE,
    (Role.MANAGER, Resource.TEST): _MANAGE,
    (Role.TEACHER, Resource.SCHEDULE): _AUTHOR,
    (Role.TEACHER, Resource.TEST): _AUTHOR,
}


@dataclass(frozen=True)
class AccessScope:
    user_id: int
    roles: frozenset[Role]
    resource: Resource
    capability: Capability

    def allows(self, operation: Operation) -> bool:
        return self.capability.allows(operation)

    @property
    def hidden_fields(self) -> frozenset[str]:
        return self.capability.hidden_fields

    def to_dict(self) -> dict:
        data = self.capability.to_dict()
        data["resource"] = self.resource.value
        data["roles"] = sorted(r.value for r in self.roles)
        return data


class AccessPolicy:
    def __init__(self, table: Optional[Mapping[tuple[Role, Resource], Capability]] = None):
        self._table = dict(CAPABILITIES if table is None else table)

    def capability(self, roles: Iterable[Role], resource: Resource) -> Capability:
        cap = READ_ONLY
        for role in roles:
            cap = cap.merge(self._table.get((role, resource), READ_ONLY))
        return cap

    def scope_for(self, identity: Identity, resource: Resource) -> AccessScope:
        return AccessScope(
            user_id=identity.user_id,
            roles=identity.roles,
            resource=resource,
            capability=self.capability(identity.roles, resource),
        )

    def ensure(self, scope: AccessScope, operation: Operation, *, owned: Optional[bool] = None) -> None:
        """Raise AuthorizationError unless `scope` may perform `operation`.

        `owned` is the caller's answer to "does this row belong to the actor";
        None skips the ownership half when the caller cannot know it.
        """

        if not scope.allows(operation):
            logger.warning(
                "Denied %s on %s for user %s (roles=%s)",
                operation.value,
                scope.resource.value,
                scope.user_id,
                sorted(r.value for r in scope.roles),
            )
            raise AuthorizationError("Bạn không có quyền")

        if scope.capability.own_only and owned is False:
            logger.warning(
                "Denied %s on %s for user %s: not owner",
                operation.value,
                scope.resource.value,
                scope.user_id,
            )
            raise AuthorizationError("Bạn chỉ được thao tác trên dữ liệu của mình")

    def mask(self, scope: AccessScope, rows: Iterable[Mapping[str, Any]]) -> list[dict]:
        hidden = scope.hidden_fields
        return [{k: v for k, v in row.items() if k not in hidden} for row in rows]

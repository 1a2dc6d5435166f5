"""
Role and account-status types.

Profiles store roles as a text[] column. Rows written before the array
migration still carry a single text value; normalize_roles() folds both shapes
into a list of Role so nothing downstream has to branch on the stored shape.
"""

from enum import Enum
from typing import Any, Iterable, List, Optional


class Role(str, Enum):
    ADMIN = "admin"
    RESELLER = "reseller"
    CONSUMER = "consumer"
    VIEWER = "viewer"
    SUPPORT = "support"
    USER = "user"


class AccountStatus(str, Enum):
    ACTIVE = "active"
    DEACTIVE = "deactive"
    EXPIRED_SUBSCRIPTION = "expired_subscription"


SYSTEM_ADMIN = "systemadmin"

# Higher wins when picking the role a console layout is built around
ROLE_PRIORITY = {
    Role.ADMIN: 6,
    Role.RESELLER: 5,
    Role.CONSUMER: 4,
    Role.SUPPORT: 3,
    Role.VIEWER: 2,
    Role.USER: 1,
}


def _parse_role(value: Any) -> Optional[Role]:
    if isinstance(value, Role):
        return value
    if not isinstance(value, str):
        return None
    try:
        return Role(value.strip().lower())
    except ValueError:
        return None


def normalize_roles(value: Any) -> List[Role]:
    """Return the roles held by a stored role value (list, legacy string, or empty)."""
    if not value:
        return []
    items: Iterable[Any] = value if isinstance(value, (list, tuple, set)) else [value]
    roles: List[Role] = []
    for item in items:
        role = _parse_role(item)
        if role is not None and role not in roles:
            roles.append(role)
    return roles


def has_role(value: Any, required: Role) -> bool:
    return required in normalize_roles(value)


def has_any_role(value: Any, required: Iterable[Role]) -> bool:
    """True if at least one required role is held. An empty requirement is satisfied."""
    required = list(required)
    if not required:
        return True
    roles = normalize_roles(value)
    return any(role in roles for role in required)


def has_all_roles(value: Any, required: Iterable[Role]) -> bool:
    required = list(required)
    if not required:
        return True
    roles = normalize_roles(value)
    return all(role in roles for role in required)


def primary_role(value: Any, is_systemadmin: bool = False) -> Optional[str]:
    """Highest-priority role, or "systemadmin" when the system flag is set."""
    if is_systemadmin:
        return SYSTEM_ADMIN
    roles = normalize_roles(value)
    if not roles:
        return None
    return max(roles, key=lambda role: ROLE_PRIORITY[role]).value


def roles_to_storage(roles: Iterable[Role]) -> List[str]:
    return [role.value for role in roles]

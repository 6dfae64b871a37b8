"""User roles and the role policy used by every protected endpoint."""

from collections.abc import Iterable
from enum import Enum
from typing import TYPE_CHECKING

from app.core.errors import InsufficientPermissions

if TYPE_CHECKING:
    from app.core.security import Identity


class Role(str, Enum):
    """Closed set of account roles."""

    ADMIN = "admin"
    USER = "user"


DEFAULT_ROLE = Role.USER


def allows(role: Role | str, required_roles: Iterable[Role | str]) -> bool:
    """
    Return True if `role` satisfies `required_roles`.

    An empty `required_roles` means any authenticated role is sufficient.
    """
    required = {Role(r) for r in required_roles}
    if not required:
        return True
    try:
        return Role(role) in required
    except ValueError:
        return False


def authorize(identity: "Identity", required_roles: Iterable[Role | str]) -> "Identity":
    """Return `identity` unchanged, or raise InsufficientPermissions."""
    if not allows(identity.role, required_roles):
        raise InsufficientPermissions()
    return identity

"""User management: the write path that hashes passwords before they reach the store."""

import logging
import math
from dataclasses import dataclass
from datetime import UTC, datetime

from app.core.errors import BadRequest, NotFound
from app.core.roles import DEFAULT_ROLE, Role
from app.core.security import hash_password, prepare_password
from app.models.user import User
from app.services.user_store import UserStore

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


@dataclass
class UserPage:
    users: list[User]
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


def register_user(
    store: UserStore,
    email: str,
    name: str,
    password: str,
    role: Role | str = DEFAULT_ROLE,
    is_active: bool = True,
) -> User:
    """Hash the password and create the user. Raises EmailAlreadyRegistered on duplicates."""
    if not email or not password:
        raise BadRequest("Email and password are required")
    user = store.create(
        email=email,
        name=name,
        password_hash=hash_password(password),
        role=role,
        is_active=is_active,
    )
    logger.info("User created", extra={"user_id": user.id, "role": user.role})
    return user


def get_user(store: UserStore, user_id: int) -> User:
    user = store.find_by_id(user_id)
    if user is None:
        raise NotFound("User not found")
    return user


def update_user(
    store: UserStore,
    user_id: int,
    name: str | None = None,
    role: Role | str | None = None,
    is_active: bool | None = None,
    password: str | None = None,
) -> User:
    """
    Update the given fields of a user.

    A new password is hashed unless it already is a bcrypt hash, so a value
    read back from the store is never hashed twice.
    """
    user = get_user(store, user_id)
    fields: dict[str, object] = {}
    if name is not None:
        fields["name"] = name
    if role is not None:
        fields["role"] = Role(role)
    if is_active is not None:
        fields["is_active"] = is_active
    if password is not None:
        if not password:
            raise BadRequest("Password must not be empty")
        fields["password_hash"] = prepare_password(password)
    if not fields:
        return user
    return store.update(user, **fields)


def delete_user(store: UserStore, user_id: int, acting_user_id: int) -> None:
    if user_id == acting_user_id:
        raise BadRequest("You cannot delete your own account")
    user = get_user(store, user_id)
    store.delete(user)


def list_users(store: UserStore, page: int = 1, limit: int = DEFAULT_PAGE_SIZE) -> UserPage:
    """Return one page of users, newest created first."""
    if page < 1:
        raise BadRequest("page must be >= 1")
    if limit < 1 or limit > MAX_PAGE_SIZE:
        raise BadRequest(f"limit must be between 1 and {MAX_PAGE_SIZE}")
    users, total = store.list_page(page, limit)
    return UserPage(users=users, page=page, limit=limit, total=total)


def account_age_days(created_at: datetime, now: datetime | None = None) -> int:
    """Whole days since `created_at`. Naive timestamps (SQLite) are taken as UTC."""
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=UTC)
    now = now or datetime.now(UTC)
    return max((now - created_at).days, 0)

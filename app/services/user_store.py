"""Credential store: persistence of user records. Never hashes; callers pass hashes in."""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, undefer

from app.core.errors import EmailAlreadyRegistered
from app.core.roles import DEFAULT_ROLE, Role
from app.models.user import User


UPDATABLE_FIELDS = frozenset({"name", "role", "is_active", "password_hash"})


class UserStore:
    """Repository over the users table, bound to one session (one request)."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find_by_email_with_hash(self, email: str) -> User | None:
        """Find a user by exact email, loading password_hash for authentication."""
        return (
            self.session.query(User)
            .options(undefer(User.password_hash))
            .filter(User.email == email)
            .first()
        )

    def find_by_email(self, email: str) -> User | None:
        return self.session.query(User).filter(User.email == email).first()

    def find_by_id(self, user_id: int) -> User | None:
        return self.session.query(User).filter(User.id == user_id).first()

    def list_page(self, page: int, limit: int) -> tuple[list[User], int]:
        """
        Return (users, total) for a 1-based page of `limit` users, newest first.

        Ties on created_at are broken by id so pages never overlap.
        """
        total = self.session.query(func.count(User.id)).scalar() or 0
        users = (
            self.session.query(User)
            .order_by(User.created_at.desc(), User.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return users, total

    def create(
        self,
        email: str,
        name: str,
        password_hash: str,
        role: Role | str = DEFAULT_ROLE,
        is_active: bool = True,
    ) -> User:
        """Insert a user. Raises EmailAlreadyRegistered on a duplicate email."""
        if self.find_by_email(email) is not None:
            raise EmailAlreadyRegistered()
        user = User(
            email=email,
            name=name,
            password_hash=password_hash,
            role=Role(role).value,
            is_active=is_active,
        )
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent insert of the same email.
            self.session.rollback()
            raise EmailAlreadyRegistered() from e
        self.session.refresh(user)
        return user

    def update(self, user: User, **fields: Any) -> User:
        """Apply the given column values and persist. Unknown fields raise ValueError."""
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")
        if "role" in fields:
            fields["role"] = Role(fields["role"]).value
        for key, value in fields.items():
            setattr(user, key, value)
        self.session.commit()
        self.session.refresh(user)
        return user

    def delete(self, user: User) -> None:
        self.session.delete(user)
        self.session.commit()

    def update_last_login(self, user_id: int, timestamp: datetime | None = None) -> None:
        """Set last_login_at for a user. Last writer wins."""
        try:
            (
                self.session.query(User)
                .filter(User.id == user_id)
                .update(
                    {User.last_login_at: timestamp or datetime.now(UTC)},
                    synchronize_session=False,
                )
            )
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise

    def count_by_role(self) -> dict[str, int]:
        """Return {'admin': n, 'user': m, 'total': n + m + ...}."""
        rows = self.session.query(User.role, func.count(User.id)).group_by(User.role).all()
        counts = {role.value: 0 for role in Role}
        for role, count in rows:
            counts[role] = count
        counts["total"] = sum(count for _, count in rows)
        return counts

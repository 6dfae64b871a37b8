"""Shared test helpers: in-memory SQLite database and user factories."""

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.roles import Role
from app.core.security import hash_password
from app.models import Base, User


def make_session_factory() -> sessionmaker:
    """Fresh in-memory database with the schema created. One connection shared across threads."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


def add_user(
    session: Session,
    email: str = "user@example.com",
    password: str = "password123",
    role: Role = Role.USER,
    is_active: bool = True,
    name: str = "Test User",
) -> User:
    """Insert a user directly (bypassing the service layer) and return it."""
    user = User(
        email=email,
        name=name,
        password_hash=hash_password(password, rounds=4),
        role=role.value,
        is_active=is_active,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user

"""Core app configuration, database, security and error taxonomy."""

from app.core.config import get_settings, settings
from app.core.database import get_db
from app.core.errors import AppError
from app.core.roles import Role
from app.core.security import get_token_service

__all__ = ["AppError", "Role", "get_db", "get_settings", "get_token_service", "settings"]

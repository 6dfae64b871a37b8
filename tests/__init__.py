"""Test package. Environment defaults are set before any app module reads settings."""

import os

os.environ.setdefault("APP_ENV", "dev")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret-do-not-use")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("HTTP_LOGGING_ENABLED", "false")

"""Unit tests for app.services.login: each step of the login flow against a mocked store."""

import unittest
from datetime import timedelta
from types import SimpleNamespace
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from app.core.audit import LOGIN_FAILED, LOGIN_SUCCEEDED
from app.core.errors import AccountDeactivated, BadRequest, InvalidCredentials
from app.core.roles import Role
from app.core.security import TokenService, hash_password
from app.services.login import login

SECRET = "login-test-secret"


def _user(
    email: str = "x@y.com",
    password: str = "secret",
    role: str = "user",
    is_active: bool = True,
    user_id: int = 42,
) -> SimpleNamespace:
    """Stand-in for a User row with its password hash loaded."""
    return SimpleNamespace(
        id=user_id,
        email=email,
        role=role,
        is_active=is_active,
        password_hash=hash_password(password, rounds=4),
    )


def _store(user: SimpleNamespace | None) -> MagicMock:
    store = MagicMock()
    store.find_by_email_with_hash.return_value = user
    return store


def _tokens() -> TokenService:
    return TokenService(secret=SECRET, access_ttl=timedelta(hours=24), refresh_ttl=timedelta(days=7))


class TestLoginInputValidation(unittest.TestCase):
    """Empty email or password fails with BadRequest before any store access."""

    def test_empty_inputs(self) -> None:
        for email, password in (("", "secret"), ("x@y.com", ""), (None, None), ("", "")):
            store = _store(_user())
            audit = MagicMock()
            with self.assertRaises(BadRequest):
                login(store, _tokens(), audit, email, password)
            store.find_by_email_with_hash.assert_not_called()
            store.update_last_login.assert_not_called()
            audit.record.assert_called_once()


class TestLoginSuccess(unittest.TestCase):
    """Valid credentials for an active user return tokens and update last login."""

    def test_returns_tokens_and_summary(self) -> None:
        store = _store(_user(role="admin"))
        tokens = _tokens()
        audit = MagicMock()
        result = login(store, tokens, audit, "x@y.com", "secret", client_ip="10.0.0.1")

        self.assertEqual(result.user.id, 42)
        self.assertEqual(result.user.email, "x@y.com")
        self.assertEqual(result.user.role, Role.ADMIN)
        identity = tokens.verify(result.access_token)
        self.assertEqual((identity.id, identity.email, identity.role), (42, "x@y.com", Role.ADMIN))
        self.assertEqual(tokens.decode(result.refresh_token)["type"], "refresh")

        store.find_by_email_with_hash.assert_called_once_with("x@y.com")
        store.update_last_login.assert_called_once()
        self.assertEqual(store.update_last_login.call_args.args[0], 42)

        audit.record.assert_called_once()
        event = audit.record.call_args.args[0]
        self.assertEqual(event, LOGIN_SUCCEEDED)
        self.assertEqual(audit.record.call_args.kwargs["ip"], "10.0.0.1")

    def test_last_login_failure_does_not_fail_login(self) -> None:
        store = _store(_user())
        store.update_last_login.side_effect = OperationalError("UPDATE users", {}, Exception("db down"))
        with self.assertLogs("app.services.login", level="WARNING"):
            result = login(store, _tokens(), MagicMock(), "x@y.com", "secret")
        self.assertTrue(result.access_token)
        self.assertTrue(result.refresh_token)


class TestLoginInvalidCredentials(unittest.TestCase):
    """Unknown email and wrong password fail identically."""

    def test_unknown_email(self) -> None:
        store = _store(None)
        with self.assertRaises(InvalidCredentials) as ctx:
            login(store, _tokens(), MagicMock(), "nobody@y.com", "secret")
        store.update_last_login.assert_not_called()
        unknown = ctx.exception

        store = _store(_user())
        with self.assertRaises(InvalidCredentials) as ctx:
            login(store, _tokens(), MagicMock(), "x@y.com", "wrong")
        store.update_last_login.assert_not_called()
        wrong = ctx.exception

        self.assertEqual(
            (unknown.status_code, unknown.code, unknown.message),
            (wrong.status_code, wrong.code, wrong.message),
        )
        self.assertEqual(unknown.status_code, 401)
        self.assertEqual(unknown.code, "UNAUTHORIZED")


class TestLoginDeactivated(unittest.TestCase):
    """A deactivated account fails with AccountDeactivated, distinct from InvalidCredentials."""

    def test_deactivated_account(self) -> None:
        store = _store(_user(is_active=False))
        with self.assertRaises(AccountDeactivated) as ctx:
            login(store, _tokens(), MagicMock(), "x@y.com", "secret")
        self.assertNotEqual(ctx.exception.code, InvalidCredentials.code)
        self.assertEqual(ctx.exception.code, "ACCOUNT_DEACTIVATED")
        store.update_last_login.assert_not_called()

    def test_active_check_runs_before_password_check(self) -> None:
        store = _store(_user(is_active=False))
        with self.assertRaises(AccountDeactivated):
            login(store, _tokens(), MagicMock(), "x@y.com", "wrong")


class TestLoginAudit(unittest.TestCase):
    """Every failure is audited with the email attempted and never the password."""

    def test_failures_audited_without_password(self) -> None:
        cases = (
            (_store(None), "x@y.com", "secret", InvalidCredentials, "unknown_email"),
            (_store(_user()), "x@y.com", "hunter2", InvalidCredentials, "wrong_password"),
            (_store(_user(is_active=False)), "x@y.com", "secret", AccountDeactivated, "deactivated"),
        )
        for store, email, password, error, outcome in cases:
            audit = MagicMock()
            with self.assertRaises(error):
                login(store, _tokens(), audit, email, password)
            audit.record.assert_called_once()
            args, kwargs = audit.record.call_args
            self.assertEqual(args[0], LOGIN_FAILED)
            self.assertEqual(kwargs["outcome"], outcome)
            self.assertEqual(kwargs["email"], email)
            self.assertNotIn("password", kwargs)
            self.assertNotIn(password, [str(v) for v in kwargs.values()])


if __name__ == "__main__":
    unittest.main()

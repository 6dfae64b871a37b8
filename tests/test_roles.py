"""Unit tests for app.core.roles: role policy and authorize."""

import unittest

from app.core.errors import InsufficientPermissions
from app.core.roles import Role, allows, authorize
from app.core.security import Identity


def _identity(role: Role) -> Identity:
    return Identity(id=1, email="x@y.com", role=role)


class TestAllows(unittest.TestCase):
    """allows(role, required_roles) is membership, with empty meaning any role."""

    def test_empty_requirement_allows_every_role(self) -> None:
        for role in Role:
            self.assertTrue(allows(role, []))
            self.assertTrue(allows(role, set()))

    def test_membership(self) -> None:
        self.assertTrue(allows(Role.ADMIN, {Role.ADMIN}))
        self.assertFalse(allows(Role.USER, {Role.ADMIN}))
        self.assertTrue(allows(Role.USER, {Role.ADMIN, Role.USER}))

    def test_accepts_plain_strings(self) -> None:
        self.assertTrue(allows("admin", ["admin"]))
        self.assertFalse(allows("user", ["admin"]))

    def test_unknown_role_is_never_allowed(self) -> None:
        self.assertFalse(allows("root", {Role.ADMIN}))


class TestAuthorize(unittest.TestCase):
    """authorize returns the identity or raises InsufficientPermissions."""

    def test_user_denied_admin_scope(self) -> None:
        with self.assertRaises(InsufficientPermissions) as ctx:
            authorize(_identity(Role.USER), {Role.ADMIN})
        self.assertEqual(ctx.exception.status_code, 403)
        self.assertEqual(ctx.exception.code, "FORBIDDEN")

    def test_admin_allowed_admin_scope(self) -> None:
        identity = _identity(Role.ADMIN)
        self.assertIs(authorize(identity, {Role.ADMIN}), identity)

    def test_any_identity_allowed_without_requirement(self) -> None:
        for role in Role:
            identity = _identity(role)
            self.assertIs(authorize(identity, ()), identity)


if __name__ == "__main__":
    unittest.main()

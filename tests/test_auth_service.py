"""Unit tests for planhub.services.auth: registration, login, tokens and roles."""

import unittest
from datetime import UTC, datetime, timedelta
from unittest.mock import patch

import jwt

from planhub.core.config import Settings
from planhub.core.errors import Conflict, Forbidden, InvalidCredentials, InvalidToken, ValidationError
from planhub.models import Document, User
from planhub.schemas.auth import CurrentUser
from planhub.services.auth import (
    authenticate_user,
    complete_login,
    issue_token,
    list_users,
    public_user,
    register_user,
    require_role,
    role_for_email,
    verify_credentials,
    verify_token,
)


def _settings(**overrides: object) -> Settings:
    """Settings for tests, ignoring any local .env file."""
    values = {
        "ADMIN_EMAIL": "admin@watchearn.com",
        "JWT_SECRET": "test-secret",
        "REQUIRE_APPROVAL": True,
        "ISSUE_TOKENS": True,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class AuthTestCase(unittest.TestCase):
    def setUp(self) -> None:
        patcher = patch("planhub.core.security.BCRYPT_ROUNDS", 4)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.settings = _settings()
        self.doc = Document()


class TestRegister(AuthTestCase):
    """register_user normalizes email, derives role and records signup approvals."""

    def test_creates_user_with_normalized_email(self) -> None:
        user = register_user(self.doc, self.settings, "Alice", "  Alice@X.com ", "pw1")
        self.assertEqual(user.email, "alice@x.com")
        self.assertIn("alice@x.com", self.doc.users)
        self.assertEqual(user.role, "user")
        self.assertEqual(user.purchases, [])
        self.assertIsNotNone(user.created_at)

    def test_password_is_hashed(self) -> None:
        user = register_user(self.doc, self.settings, "Alice", "alice@x.com", "pw1")
        self.assertIsNotNone(user.password_hash)
        self.assertNotEqual(user.password_hash, "pw1")
        self.assertIsNone(user.password)

    def test_duplicate_normalized_email_conflicts(self) -> None:
        register_user(self.doc, self.settings, "Alice", "alice@x.com", "pw1")
        with self.assertRaises(Conflict):
            register_user(self.doc, self.settings, "Alice 2", "ALICE@x.com ", "pw2")
        self.assertEqual(len(self.doc.users), 1)

    def test_missing_fields(self) -> None:
        for name, email, password in [
            (None, "a@x.com", "pw"),
            ("A", "", "pw"),
            ("A", "a@x.com", None),
            ("A", "   ", "pw"),
        ]:
            with self.subTest(name=name, email=email, password=password):
                with self.assertRaises(ValidationError):
                    register_user(self.doc, self.settings, name, email, password)
        self.assertEqual(self.doc.users, {})

    def test_short_password_rejected(self) -> None:
        settings = _settings(PASSWORD_MIN_LEN=8)
        with self.assertRaises(ValidationError):
            register_user(self.doc, settings, "Alice", "alice@x.com", "short")

    def test_gated_registration_records_pending_signup(self) -> None:
        user = register_user(self.doc, self.settings, "Alice", "alice@x.com", "pw1")
        self.assertFalse(user.approved)
        self.assertEqual(len(self.doc.approvals), 1)
        approval = self.doc.approvals[0]
        self.assertEqual(approval.type, "signup")
        self.assertEqual(approval.status, "pending")
        self.assertEqual(approval.email, "alice@x.com")
        self.assertEqual(approval.name, "Alice")

    def test_ungated_registration_is_approved(self) -> None:
        settings = _settings(REQUIRE_APPROVAL=False)
        user = register_user(self.doc, settings, "Alice", "alice@x.com", "pw1")
        self.assertTrue(user.approved)
        self.assertEqual(self.doc.approvals, [])

    def test_admin_address_gets_admin_role_and_no_approval(self) -> None:
        user = register_user(self.doc, self.settings, "Boss", "ADMIN@WatchEarn.com", "pw")
        self.assertEqual(user.role, "admin")
        self.assertTrue(user.approved)
        self.assertEqual(self.doc.approvals, [])


class TestRoleForEmail(unittest.TestCase):
    """Only an exact (case-insensitive) match of the admin address is admin."""

    def test_role_derivation(self) -> None:
        settings = _settings(ADMIN_EMAIL="  Admin@Example.com ")
        self.assertEqual(role_for_email("admin@example.com", settings), "admin")
        self.assertEqual(role_for_email(" ADMIN@EXAMPLE.COM", settings), "admin")
        self.assertEqual(role_for_email("admin@example.co", settings), "user")
        self.assertEqual(role_for_email("xadmin@example.com", settings), "user")
        self.assertEqual(role_for_email("admin+1@example.com", settings), "user")


class TestLogin(AuthTestCase):
    """authenticate_user verifies hashed and legacy passwords."""

    def setUp(self) -> None:
        super().setUp()
        register_user(self.doc, self.settings, "Alice", "alice@x.com", "pw1")

    def test_correct_credentials(self) -> None:
        user = authenticate_user(self.doc, self.settings, "ALICE@x.com", "pw1")
        self.assertEqual(user.email, "alice@x.com")

    def test_wrong_password(self) -> None:
        with self.assertRaises(InvalidCredentials):
            authenticate_user(self.doc, self.settings, "alice@x.com", "wrong")

    def test_unknown_user(self) -> None:
        with self.assertRaises(InvalidCredentials):
            authenticate_user(self.doc, self.settings, "nobody@x.com", "pw1")

    def test_missing_fields(self) -> None:
        with self.assertRaises(ValidationError):
            authenticate_user(self.doc, self.settings, "alice@x.com", "")

    def test_gated_login_records_login_approval(self) -> None:
        authenticate_user(self.doc, self.settings, "alice@x.com", "pw1")
        types = [a.type for a in self.doc.approvals]
        self.assertEqual(types, ["signup", "login"])

    def test_failed_login_records_nothing(self) -> None:
        with self.assertRaises(InvalidCredentials):
            authenticate_user(self.doc, self.settings, "alice@x.com", "nope")
        self.assertEqual([a.type for a in self.doc.approvals], ["signup"])

    def test_ungated_login_records_no_approval(self) -> None:
        authenticate_user(self.doc, _settings(REQUIRE_APPROVAL=False), "alice@x.com", "pw1")
        self.assertEqual([a.type for a in self.doc.approvals], ["signup"])

    def test_public_user_has_no_password(self) -> None:
        user = authenticate_user(self.doc, self.settings, "alice@x.com", "pw1")
        data = public_user(user).model_dump(by_alias=True)
        self.assertNotIn("password", data)
        self.assertNotIn("passwordHash", data)
        self.assertEqual(data["name"], "Alice")
        self.assertEqual(data["role"], "user")

    def test_legacy_plaintext_password_is_rehashed(self) -> None:
        self.doc.users["old@x.com"] = User(email="old@x.com", name="Old", password="legacy")
        user = authenticate_user(self.doc, self.settings, "old@x.com", "legacy")
        self.assertIsNone(user.password)
        self.assertIsNotNone(user.password_hash)
        self.assertEqual(user.role, "user")
        # Hash now used for subsequent logins
        authenticate_user(self.doc, self.settings, "old@x.com", "legacy")
        with self.assertRaises(InvalidCredentials):
            authenticate_user(self.doc, self.settings, "old@x.com", "other")


class TestSplitLogin(AuthTestCase):
    """verify_credentials is read-only; complete_login applies the login writes."""

    def setUp(self) -> None:
        super().setUp()
        register_user(self.doc, self.settings, "Alice", "alice@x.com", "pw1")

    def test_verify_credentials_does_not_mutate(self) -> None:
        before = self.doc.model_dump()
        user = verify_credentials(self.doc, "Alice@x.com", "pw1")
        self.assertEqual(user.email, "alice@x.com")
        self.assertEqual(self.doc.model_dump(), before)

    def test_verify_credentials_wrong_password(self) -> None:
        with self.assertRaises(InvalidCredentials):
            verify_credentials(self.doc, "alice@x.com", "nope")

    def test_complete_login_records_approval(self) -> None:
        complete_login(self.doc, self.settings, "alice@x.com")
        self.assertEqual([a.type for a in self.doc.approvals], ["signup", "login"])

    def test_complete_login_applies_rehash_to_legacy_user_only(self) -> None:
        self.doc.users["old@x.com"] = User(email="old@x.com", name="Old", password="legacy")
        complete_login(self.doc, self.settings, "old@x.com", "new-hash")
        self.assertEqual(self.doc.users["old@x.com"].password_hash, "new-hash")
        self.assertIsNone(self.doc.users["old@x.com"].password)

        original = self.doc.users["alice@x.com"].password_hash
        complete_login(self.doc, self.settings, "alice@x.com", "ignored")
        self.assertEqual(self.doc.users["alice@x.com"].password_hash, original)

    def test_complete_login_user_gone(self) -> None:
        with self.assertRaises(InvalidCredentials):
            complete_login(Document(), self.settings, "alice@x.com")

    def test_register_uses_precomputed_hash(self) -> None:
        user = register_user(
            self.doc, self.settings, "Bob", "bob@x.com", "pw2", password_hash="precomputed"
        )
        self.assertEqual(user.password_hash, "precomputed")


class TestTokens(AuthTestCase):
    """issue_token / verify_token round trip and failure modes."""

    def _user(self, role: str = "user") -> User:
        return User(email="alice@x.com", name="Alice", password_hash="x", role=role)

    def test_verify_issued_token(self) -> None:
        token = issue_token(self._user("admin"), self.settings)
        current = verify_token(token, self.settings)
        self.assertEqual(current.email, "alice@x.com")
        self.assertEqual(current.role, "admin")

    def test_default_expiry_is_seven_days(self) -> None:
        token = issue_token(self._user(), self.settings)
        payload = jwt.decode(token, "test-secret", algorithms=["HS256"])
        self.assertEqual(payload["exp"] - payload["iat"], 7 * 24 * 3600)

    def test_wrong_secret(self) -> None:
        token = issue_token(self._user(), _settings(JWT_SECRET="other-secret"))
        with self.assertRaises(InvalidToken):
            verify_token(token, self.settings)

    def test_expired_token(self) -> None:
        past = datetime.now(UTC) - timedelta(days=8)
        token = jwt.encode(
            {"sub": "alice@x.com", "role": "user", "iat": past, "exp": past + timedelta(days=7)},
            "test-secret",
            algorithm="HS256",
        )
        with self.assertRaises(InvalidToken):
            verify_token(token, self.settings)

    def test_garbage_token(self) -> None:
        with self.assertRaises(InvalidToken):
            verify_token("not-a-token", self.settings)

    def test_unknown_role_rejected(self) -> None:
        token = jwt.encode(
            {"sub": "alice@x.com", "role": "root", "exp": datetime.now(UTC) + timedelta(hours=1)},
            "test-secret",
            algorithm="HS256",
        )
        with self.assertRaises(InvalidToken):
            verify_token(token, self.settings)


class TestRequireRole(unittest.TestCase):
    def test_matching_role(self) -> None:
        current = CurrentUser(email="a@x.com", role="admin")
        self.assertIs(require_role(current, "admin"), current)

    def test_mismatched_role(self) -> None:
        with self.assertRaises(Forbidden):
            require_role(CurrentUser(email="a@x.com", role="user"), "admin")


class TestListUsers(AuthTestCase):
    def test_fills_defaults_and_strips_passwords(self) -> None:
        self.doc.users["admin@watchearn.com"] = User(
            email="admin@watchearn.com", name="Boss", password="legacy"
        )
        users = list_users(self.doc, self.settings)
        self.assertEqual(len(users), 1)
        self.assertEqual(users[0].role, "admin")
        self.assertNotIn("password", users[0].model_dump(by_alias=True))


if __name__ == "__main__":
    unittest.main()

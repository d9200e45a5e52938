"""Unit tests for app.services.auth_service with a mocked credential store."""

import unittest
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

from pydantic import SecretStr

from app.core.exceptions import ConflictError, DatabaseError, NotFoundError, UnauthorizedError
from app.core.security import hash_password
from app.core.tokens import TokenConfig, verify_token
from app.schemas.auth import ProfileUpdateRequest, RegisterRequest, UserPublic
from app.services.auth_service import (
    ACCOUNT_INACTIVE,
    INVALID_CREDENTIALS,
    AuthService,
)

CONFIG = TokenConfig(secret=SecretStr("service-test-secret-0123456789abc"), expire_minutes=60)
PASSWORD = "Str0ng!Pass"
PASSWORD_HASH = hash_password(PASSWORD, rounds=10)


def _user(**kwargs: object) -> SimpleNamespace:
    """Stand-in for a User row, including the credential column."""
    defaults = {
        "id": 1,
        "username": "alice",
        "password_hash": PASSWORD_HASH,
        "role_name": "User",
        "status": "active",
        "display_name": None,
        "picture_url": None,
        "created_at": None,
        "last_login_at": None,
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def _service(store: MagicMock) -> AuthService:
    return AuthService(store, CONFIG, default_role_name="User", bcrypt_rounds=10)


class TestRegister(unittest.TestCase):
    """register hashes the password, assigns the default role and strips the credential."""

    def test_creates_user_with_hash_and_default_role(self) -> None:
        store = MagicMock()
        store.find_by_username.return_value = None
        role = SimpleNamespace(id=2, name="User")
        store.find_role_by_name.return_value = role
        store.create.return_value = _user()

        result = _service(store).register(
            RegisterRequest(username="alice", password=PASSWORD)
        )

        self.assertIsInstance(result, UserPublic)
        self.assertEqual(result.username, "alice")
        self.assertNotIn("password_hash", result.model_dump())
        kwargs = store.create.call_args.kwargs
        self.assertIs(kwargs["role"], role)
        self.assertEqual(kwargs["status"], "active")
        self.assertNotEqual(kwargs["password_hash"], PASSWORD)
        self.assertTrue(kwargs["password_hash"].startswith("$2"))
        store.find_role_by_name.assert_called_once_with("User")

    def test_duplicate_username_is_conflict(self) -> None:
        store = MagicMock()
        store.find_by_username.return_value = _user()
        with self.assertRaises(ConflictError):
            _service(store).register(RegisterRequest(username="alice", password=PASSWORD))
        store.create.assert_not_called()

    def test_store_conflict_on_insert_propagates(self) -> None:
        store = MagicMock()
        store.find_by_username.return_value = None
        store.create.side_effect = ConflictError("Username already exists")
        with self.assertRaises(ConflictError):
            _service(store).register(RegisterRequest(username="alice", password=PASSWORD))

    def test_missing_default_role_registers_without_role(self) -> None:
        store = MagicMock()
        store.find_by_username.return_value = None
        store.find_role_by_name.return_value = None
        store.create.return_value = _user(role_name=None)
        result = _service(store).register(RegisterRequest(username="alice", password=PASSWORD))
        self.assertIsNone(store.create.call_args.kwargs["role"])
        self.assertIsNone(result.role)


class TestLogin(unittest.TestCase):
    """login issues a token on success and hides which credential was wrong."""

    def test_success(self) -> None:
        store = MagicMock()
        store.find_by_username.return_value = _user()
        store.update.return_value = _user()

        result = _service(store).login("alice", PASSWORD)

        verification = verify_token(CONFIG, result.token)
        self.assertTrue(verification.ok)
        self.assertEqual(verification.claims.username, "alice")
        self.assertEqual(verification.claims.role, "User")
        self.assertEqual(result.user.username, "alice")
        self.assertEqual(result.expires_in, 3600)
        self.assertIn("last_login_at", store.update.call_args.args[1])

    def test_unknown_user_and_wrong_password_share_message(self) -> None:
        store = MagicMock()
        store.find_by_username.return_value = None
        with self.assertRaises(UnauthorizedError) as unknown:
            _service(store).login("nobody", PASSWORD)

        store.find_by_username.return_value = _user()
        with self.assertRaises(UnauthorizedError) as wrong:
            _service(store).login("alice", "wrong")

        self.assertEqual(unknown.exception.message, INVALID_CREDENTIALS)
        self.assertEqual(wrong.exception.message, INVALID_CREDENTIALS)
        store.update.assert_not_called()

    @patch("app.services.auth_service.burn_verification_time")
    def test_unknown_user_still_runs_a_hash_check(self, mock_burn: MagicMock) -> None:
        store = MagicMock()
        store.find_by_username.return_value = None
        with self.assertRaises(UnauthorizedError):
            _service(store).login("nobody", "whatever")
        mock_burn.assert_called_once_with("whatever")

    def test_inactive_account(self) -> None:
        store = MagicMock()
        store.find_by_username.return_value = _user(status="disabled")
        with self.assertRaises(UnauthorizedError) as ctx:
            _service(store).login("alice", PASSWORD)
        self.assertEqual(ctx.exception.message, ACCOUNT_INACTIVE)

    def test_login_time_failure_is_not_surfaced(self) -> None:
        store = MagicMock()
        store.find_by_username.return_value = _user()
        store.update.side_effect = DatabaseError("Failed to update user")
        with self.assertLogs("app.services.auth_service", level="WARNING"):
            result = _service(store).login("alice", PASSWORD)
        self.assertTrue(result.token)
        self.assertEqual(result.user.username, "alice")

    def test_user_deleted_before_login_time_recorded(self) -> None:
        store = MagicMock()
        store.find_by_username.return_value = _user()
        store.update.side_effect = NotFoundError("User not found")
        with self.assertLogs("app.services.auth_service", level="WARNING"):
            result = _service(store).login("alice", PASSWORD)
        self.assertTrue(result.token)


class TestProfile(unittest.TestCase):
    """get_profile / update_profile return sanitized users and honour the allow-list."""

    def test_get_profile(self) -> None:
        store = MagicMock()
        store.find_by_id.return_value = _user(display_name="Alice")
        result = _service(store).get_profile(1)
        self.assertEqual(result.display_name, "Alice")
        self.assertNotIn("password_hash", result.model_dump())

    def test_get_profile_missing(self) -> None:
        store = MagicMock()
        store.find_by_id.return_value = None
        with self.assertRaises(NotFoundError):
            _service(store).get_profile(99)

    def test_update_profile_applies_only_sent_fields(self) -> None:
        store = MagicMock()
        store.update.return_value = _user(picture_url="https://example.com/a.png")
        body = ProfileUpdateRequest(picture_url="https://example.com/a.png")
        result = _service(store).update_profile(1, body)
        store.update.assert_called_once_with(1, {"picture_url": "https://example.com/a.png"})
        self.assertEqual(result.picture_url, "https://example.com/a.png")

    def test_update_profile_null_clears_field(self) -> None:
        store = MagicMock()
        store.update.return_value = _user()
        _service(store).update_profile(1, ProfileUpdateRequest(display_name=None))
        store.update.assert_called_once_with(1, {"display_name": None})

    def test_empty_update_returns_current_profile(self) -> None:
        store = MagicMock()
        store.find_by_id.return_value = _user()
        result = _service(store).update_profile(1, ProfileUpdateRequest())
        store.update.assert_not_called()
        self.assertEqual(result.username, "alice")

    def test_update_profile_missing_user(self) -> None:
        store = MagicMock()
        store.update.side_effect = NotFoundError("User not found")
        with self.assertRaises(NotFoundError):
            _service(store).update_profile(99, ProfileUpdateRequest(display_name="x"))


if __name__ == "__main__":
    unittest.main()

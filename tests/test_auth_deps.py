"""Unit tests for app.api.deps.authenticate and require_admin."""

import unittest
from datetime import UTC, datetime, timedelta

from pydantic import SecretStr

from app.api.deps import (
    INVALID_TOKEN,
    NO_TOKEN,
    TOKEN_EXPIRED,
    authenticate,
    require_admin,
)
from app.core.exceptions import ForbiddenError, UnauthorizedError
from app.core.tokens import TokenConfig, issue_token
from app.schemas.auth import CurrentUser

CONFIG = TokenConfig(secret=SecretStr("deps-test-secret-0123456789abcdef"), expire_minutes=1)


class TestAuthenticate(unittest.TestCase):
    """authenticate maps the Authorization header to an identity or a 401 reason."""

    def _assert_unauthorized(self, header: str | None, message: str) -> None:
        with self.assertRaises(UnauthorizedError) as ctx:
            authenticate(header, CONFIG)
        self.assertEqual(ctx.exception.message, message)
        self.assertEqual(ctx.exception.status_code, 401)

    def test_missing_header(self) -> None:
        self._assert_unauthorized(None, NO_TOKEN)

    def test_empty_header(self) -> None:
        self._assert_unauthorized("", NO_TOKEN)

    def test_wrong_scheme(self) -> None:
        token = issue_token(CONFIG, 1, "alice", None)
        self._assert_unauthorized(f"Basic {token}", NO_TOKEN)

    def test_bearer_without_token(self) -> None:
        self._assert_unauthorized("Bearer ", NO_TOKEN)

    def test_invalid_token(self) -> None:
        self._assert_unauthorized("Bearer abc.def.ghi", INVALID_TOKEN)

    def test_expired_token(self) -> None:
        token = issue_token(CONFIG, 1, "alice", None, now=datetime.now(UTC) - timedelta(minutes=2))
        self._assert_unauthorized(f"Bearer {token}", TOKEN_EXPIRED)

    def test_messages_are_distinct(self) -> None:
        self.assertEqual(len({NO_TOKEN, INVALID_TOKEN, TOKEN_EXPIRED}), 3)

    def test_valid_token(self) -> None:
        token = issue_token(CONFIG, 5, "alice", "User")
        user = authenticate(f"Bearer {token}", CONFIG)
        self.assertEqual(user, CurrentUser(id=5, username="alice", role="User"))

    def test_scheme_is_case_insensitive(self) -> None:
        token = issue_token(CONFIG, 5, "alice", "User")
        self.assertEqual(authenticate(f"bearer {token}", CONFIG).id, 5)


class TestRequireAdmin(unittest.TestCase):
    """require_admin lets Admin through and rejects every other role with 403."""

    def test_admin(self) -> None:
        admin = CurrentUser(id=1, username="root", role="Admin")
        self.assertIs(require_admin(admin), admin)

    def test_regular_user(self) -> None:
        with self.assertRaises(ForbiddenError):
            require_admin(CurrentUser(id=2, username="alice", role="User"))

    def test_no_role(self) -> None:
        with self.assertRaises(ForbiddenError):
            require_admin(CurrentUser(id=3, username="bob", role=None))


if __name__ == "__main__":
    unittest.main()

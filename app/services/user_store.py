"""Credential store: the only code that reads or writes user rows."""

import logging
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, DatabaseError, NotFoundError
from app.models import Role, User

logger = logging.getLogger(__name__)

USERNAME_TAKEN = "Username already exists"


class UserStore:
    """
    Session-bound access to users and roles.

    Every storage failure surfaces as DatabaseError; the session is rolled
    back before raising so it stays usable for the rest of the request.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def _fail(self, action: str, exc: SQLAlchemyError) -> DatabaseError:
        self.session.rollback()
        logger.error(
            "Database operation failed",
            extra={"action": action, "error": exc.__class__.__name__},
            exc_info=exc,
        )
        return DatabaseError(f"Failed to {action}")

    def find_by_id(self, user_id: int) -> User | None:
        try:
            return self.session.get(User, user_id)
        except SQLAlchemyError as e:
            raise self._fail("retrieve user", e) from e

    def find_by_username(self, username: str) -> User | None:
        try:
            return self.session.scalars(
                select(User).where(User.username == username)
            ).first()
        except SQLAlchemyError as e:
            raise self._fail("retrieve user", e) from e

    def find_role_by_name(self, name: str) -> Role | None:
        try:
            return self.session.scalars(select(Role).where(Role.name == name)).first()
        except SQLAlchemyError as e:
            raise self._fail("retrieve role", e) from e

    def create(
        self,
        username: str,
        password_hash: str,
        role: Role | None = None,
        **profile: Any,
    ) -> User:
        """Insert a user; a unique-constraint violation on username raises ConflictError."""
        user = User(
            username=username,
            password_hash=password_hash,
            role=role,
            password_changed_at=datetime.now(UTC),
            **profile,
        )
        self.session.add(user)
        try:
            self.session.commit()
            self.session.refresh(user)
        except IntegrityError as e:
            self.session.rollback()
            # Lost the race against a concurrent registration of the same name.
            logger.info("Username taken on insert", extra={"username": username})
            raise ConflictError(USERNAME_TAKEN) from e
        except SQLAlchemyError as e:
            raise self._fail("create user", e) from e
        logger.info("User created", extra={"user_id": user.id, "username": username})
        return user

    def update(self, user_id: int, changes: dict[str, Any]) -> User:
        """Apply column changes to an existing user; NotFoundError if absent."""
        user = self.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        for field, value in changes.items():
            setattr(user, field, value)
        try:
            self.session.commit()
            self.session.refresh(user)
        except SQLAlchemyError as e:
            raise self._fail("update user", e) from e
        return user

    def list_page(self, offset: int = 0, limit: int = 10) -> tuple[list[User], int]:
        """Page of users, newest first, plus the total count."""
        try:
            total = self.session.scalar(select(func.count()).select_from(User)) or 0
            users = list(
                self.session.scalars(
                    select(User).order_by(User.id.desc()).offset(offset).limit(limit)
                ).unique()
            )
        except SQLAlchemyError as e:
            raise self._fail("retrieve users", e) from e
        return users, total

    def delete(self, user_id: int) -> None:
        user = self.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        try:
            self.session.delete(user)
            self.session.commit()
        except SQLAlchemyError as e:
            raise self._fail("delete user", e) from e
        logger.info("User deleted", extra={"user_id": user_id})

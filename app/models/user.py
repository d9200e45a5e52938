"""ORM model for application users (auth and profile)."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from app.models.base import Base

STATUS_ACTIVE = "active"
STATUS_DISABLED = "disabled"


class User(Base):
    """
    User account for JWT authentication and profile management.

    username is unique at the storage layer; that index, not the
    application pre-check, is what prevents duplicates.
    last_login_at is telemetry only.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role_id = Column(Integer, ForeignKey("roles.id"), nullable=True)
    status = Column(String(16), nullable=False, default=STATUS_ACTIVE)
    display_name = Column(String(100), nullable=True)
    picture_url = Column(String(200), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
    password_changed_at = Column(DateTime(timezone=True), nullable=True)
    last_login_at = Column(DateTime(timezone=True), nullable=True)

    role = relationship("Role", lazy="joined")

    @property
    def role_name(self) -> str | None:
        return self.role.name if self.role is not None else None

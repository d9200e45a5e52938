"""ORM model for user roles."""

from sqlalchemy import Column, Integer, String

from app.models.base import Base

ROLE_ADMIN = "Admin"
ROLE_USER = "User"


class Role(Base):
    """Reference table of role names; many users point at one role."""

    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(30), nullable=False, unique=True)

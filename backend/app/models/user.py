"""
VeggieFresh Admin API — User Model
====================================

What:  ORM model for the `users` table.
Who:   Customers (phone login, no password) and admins (email + bcrypt hash).
       This API only authenticates admins; customers appear as order owners.
"""

import enum
from typing import Optional

from sqlalchemy import Boolean, String, text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.models.base import RecordMixin


class UserRole(str, enum.Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"


class User(RecordMixin, Base):
    """
    A platform account.

    Invariants:
        - email is unique when present
        - phone is unique when present
        - password_hash is NULL for accounts that never set a password
    """

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(120), nullable=False)

    email: Mapped[Optional[str]] = mapped_column(
        String(255), nullable=True, unique=True, index=True
    )
    phone: Mapped[Optional[str]] = mapped_column(String(32), nullable=True, unique=True)

    # bcrypt hash ($2b$...); never serialized
    password_hash: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    avatar_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)

    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=UserRole.CUSTOMER.value,
        server_default=text("'customer'"),
    )

    is_phone_verified: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"

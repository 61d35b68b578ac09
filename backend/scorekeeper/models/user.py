"""
Scorekeeper Backend — User SQLAlchemy Model
=============================================

What:  ORM model for the `users` table.
How:   `name` carries a UNIQUE constraint; it is the storage-level guard
       behind the service's name-exists pre-check.

Lifecycle:
    Created by signup. Destroyed only by explicit deletion, which removes
    the user's rooms and their players first (see UserService.delete_user).
"""

import uuid
from typing import List, TYPE_CHECKING

from sqlalchemy import String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from scorekeeper.database import Base

if TYPE_CHECKING:
    from scorekeeper.models.room import Room


class User(Base):
    """A registered account that owns rooms."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        comment="Opaque unique identifier",
    )

    # Case-sensitive exact match; unique across all users
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name, unique across all users",
    )

    # bcrypt hash, never the plain password. Never serialized.
    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="bcrypt hash of the user's password",
    )

    rooms: Mapped[List["Room"]] = relationship(
        back_populates="owner",
        passive_deletes=True,
    )

    __table_args__ = (
        UniqueConstraint("name", name="uq_users_name"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, name='{self.name}')>"

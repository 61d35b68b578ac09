"""
Scorekeeper Backend — Room SQLAlchemy Model
=============================================

What:  ORM model for the `rooms` table (one game session).
How:   A room always has exactly one owner (owner_id NOT NULL).
       UNIQUE (owner_id, name): two users may each have "Friday Night",
       one user may not have two.
"""

import uuid
from typing import List, TYPE_CHECKING

from sqlalchemy import ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from scorekeeper.database import Base

if TYPE_CHECKING:
    from scorekeeper.models.player import Player
    from scorekeeper.models.user import User


class Room(Base):
    """A scoring session owned by one user and containing players."""

    __tablename__ = "rooms"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name, unique per owner",
    )

    # ON DELETE CASCADE is a storage-level backstop; the services delete
    # dependents explicitly before the owner row.
    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    owner: Mapped["User"] = relationship(back_populates="rooms")

    players: Mapped[List["Player"]] = relationship(
        back_populates="room",
        order_by="Player.name",
        passive_deletes=True,
    )

    __table_args__ = (
        UniqueConstraint("owner_id", "name", name="uq_rooms_owner_id_name"),
    )

    def __repr__(self) -> str:
        return f"<Room(id={self.id}, name='{self.name}', owner_id={self.owner_id})>"

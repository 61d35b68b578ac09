"""
Scorekeeper Backend — Player SQLAlchemy Model
===============================================

What:  ORM model for the `players` table.
How:   UNIQUE (room_id, name): a room may not hold two players with the
       same name. `points` is a signed 64-bit integer; relative
       updates are issued as `points = points ± n` in a single statement.
"""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, ForeignKey, String, UniqueConstraint, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from scorekeeper.database import Base

if TYPE_CHECKING:
    from scorekeeper.models.room import Room


class Player(Base):
    """A scored participant within one room."""

    __tablename__ = "players"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name, unique per room",
    )

    points: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        default=0,
        server_default=text("0"),
        comment="Signed score; may go negative",
    )

    room_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("rooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    room: Mapped["Room"] = relationship(back_populates="players")

    __table_args__ = (
        UniqueConstraint("room_id", "name", name="uq_players_room_id_name"),
    )

    def __repr__(self) -> str:
        return f"<Player(id={self.id}, name='{self.name}', points={self.points})>"

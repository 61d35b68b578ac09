"""
Scorekeeper Backend — Player & Scoring Service
================================================

What:  Player enrollment/removal and the points-mutation engine.
How:   Two update semantics, each for one player or a whole room:

    ┌──────────────┬──────────────────────────┬──────────────────────────┐
    │              │ one player               │ every player in a room   │
    ├──────────────┼──────────────────────────┼──────────────────────────┤
    │ relative (±) │ adjust_points            │ adjust_all_points        │
    │ absolute (=) │ set_total_points         │ set_all_total_points     │
    └──────────────┴──────────────────────────┴──────────────────────────┘

    Relative updates are sent as `points = points ± n` in one UPDATE, so
    concurrent adjustments from several clients never lose an update.
    A zero delta returns without touching the database.
    Absolute updates always write, including a total of 0.
"""

import logging
from typing import Union
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from scorekeeper.exceptions import ConflictError, NotFoundError
from scorekeeper.repositories import Decrement, Increment, players, rooms
from scorekeeper.schemas.room import PlayerResponse, PointsUpdateResponse

logger = logging.getLogger(__name__)


def relative_update(delta: int) -> Union[Increment, Decrement]:
    """Map a non-zero signed delta onto the gateway's atomic operators."""
    if delta > 0:
        return Increment(delta)
    return Decrement(abs(delta))


class PlayerService:
    """Business logic for players and their points. Stateless."""

    # ── Enrollment ────────────────────────────────────────────────────────

    async def add_player(self, db: AsyncSession, room_id: UUID, player_name: str) -> PlayerResponse:
        """
        Enroll a player with 0 points.

        Raises:
            NotFoundError: The room does not exist.
            ConflictError: The room already has a player called ``player_name``.
        """
        room = await rooms.find_unique(db, room_id)
        if room is None:
            raise NotFoundError(resource="room", resource_id=str(room_id))

        existing = await players.find_first(db, where={"room_id": room_id, "name": player_name})
        if existing is not None:
            logger.warning("Player '%s' already in room %s", player_name, room_id)
            raise ConflictError(
                message="Player with this name already exists in the room",
                context={"player_name": player_name},
            )

        player = await players.create(db, {"name": player_name, "room_id": room_id, "points": 0})
        logger.info("Player %s ('%s') joined room %s", player.id, player_name, room_id)
        return PlayerResponse.model_validate(player)

    async def remove_player(self, db: AsyncSession, room_id: UUID, player_id: UUID) -> None:
        """Raises NotFoundError unless ``player_id`` is a player of ``room_id``."""
        await players.delete(db, player_id, where={"room_id": room_id})
        logger.info("Player %s removed from room %s", player_id, room_id)

    # ── Relative updates ──────────────────────────────────────────────────

    async def adjust_points(
        self, db: AsyncSession, room_id: UUID, player_id: UUID, delta: int
    ) -> PointsUpdateResponse:
        if delta == 0:
            return PointsUpdateResponse(updated=0)
        await players.update(
            db, player_id, {"points": relative_update(delta)}, where={"room_id": room_id}
        )
        logger.debug("Player %s points %+d", player_id, delta)
        return PointsUpdateResponse(updated=1)

    async def adjust_all_points(self, db: AsyncSession, room_id: UUID, delta: int) -> PointsUpdateResponse:
        if delta == 0:
            return PointsUpdateResponse(updated=0)
        updated = await players.update_many(
            db, where={"room_id": room_id}, data={"points": relative_update(delta)}
        )
        logger.debug("Room %s: %d players points %+d", room_id, updated, delta)
        return PointsUpdateResponse(updated=updated)

    # ── Absolute updates ──────────────────────────────────────────────────

    async def set_total_points(
        self, db: AsyncSession, room_id: UUID, player_id: UUID, value: int
    ) -> PointsUpdateResponse:
        await players.update(db, player_id, {"points": value}, where={"room_id": room_id})
        logger.debug("Player %s points set to %d", player_id, value)
        return PointsUpdateResponse(updated=1)

    async def set_all_total_points(self, db: AsyncSession, room_id: UUID, value: int) -> PointsUpdateResponse:
        updated = await players.update_many(db, where={"room_id": room_id}, data={"points": value})
        logger.debug("Room %s: %d players points set to %d", room_id, updated, value)
        return PointsUpdateResponse(updated=updated)


player_service = PlayerService()

"""
Scorekeeper Backend — Room Service
====================================

What:  Room lifecycle: listing per owner, lookup, creation, rename, deletion.
How:   Room names are unique per owner. The pre-check here is the fast path;
       the UNIQUE (owner_id, name) constraint rejects a racing duplicate,
       and the gateway turns that into ConflictError.
Who:   Called by the /rooms and /userRooms route handlers.
"""

import logging
from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from scorekeeper.exceptions import ConflictError, NotFoundError
from scorekeeper.repositories import players, rooms, users
from scorekeeper.schemas.room import RoomResponse

logger = logging.getLogger(__name__)

ROOM_NAME_TAKEN = "Room with this name already exists for this user"


class RoomService:
    """Business logic for rooms. Stateless."""

    async def list_user_rooms(self, db: AsyncSession, user_id: UUID) -> List[RoomResponse]:
        """Rooms owned by ``user_id`` sorted by name, each with its players."""
        found = await rooms.find_many(
            db,
            where={"owner_id": user_id},
            order_by="name",
            include=("players",),
        )
        return [RoomResponse.model_validate(room) for room in found]

    async def get_room(self, db: AsyncSession, room_id: UUID) -> RoomResponse:
        room = await rooms.find_unique(db, room_id, include=("players",))
        if room is None:
            raise NotFoundError(resource="room", resource_id=str(room_id))
        return RoomResponse.model_validate(room)

    async def create_room(self, db: AsyncSession, owner_id: UUID, name: str) -> RoomResponse:
        """
        Create a room for ``owner_id``.

        Raises:
            NotFoundError: The owner does not exist.
            ConflictError: The owner already has a room called ``name``.
        """
        owner = await users.find_unique(db, owner_id)
        if owner is None:
            raise NotFoundError(resource="user", resource_id=str(owner_id))

        existing = await rooms.find_first(db, where={"owner_id": owner_id, "name": name})
        if existing is not None:
            logger.warning("Room name '%s' already used by owner %s", name, owner_id)
            raise ConflictError(message=ROOM_NAME_TAKEN, context={"name": name})

        room = await rooms.create(db, {"name": name, "owner_id": owner_id})
        logger.info("Room created: %s ('%s') for owner %s", room.id, name, owner_id)
        return await self.get_room(db, room.id)

    async def rename_room(self, db: AsyncSession, room_id: UUID, new_name: str) -> RoomResponse:
        """
        Rename a room. The new name must not clash with another room of the
        same owner; renaming to the current name is a no-op.

        Raises:
            NotFoundError: The room does not exist.
            ConflictError: Another room of the owner already has ``new_name``.
        """
        room = await rooms.find_unique(db, room_id)
        if room is None:
            raise NotFoundError(resource="room", resource_id=str(room_id))

        if room.name != new_name:
            clash = await rooms.find_first(
                db, where={"owner_id": room.owner_id, "name": new_name}
            )
            if clash is not None:
                logger.warning("Rename of room %s rejected: '%s' taken", room_id, new_name)
                raise ConflictError(message=ROOM_NAME_TAKEN, context={"name": new_name})
            await rooms.update(db, room_id, {"name": new_name})
            logger.info("Room %s renamed to '%s'", room_id, new_name)

        return await self.get_room(db, room_id)

    async def delete_room(self, db: AsyncSession, room_id: UUID) -> None:
        """
        Delete a room and its players (players first).

        Raises:
            NotFoundError: The room does not exist. The player deletion is
                rolled back with the rest of the request.
        """
        removed = await players.delete_many(db, where={"room_id": room_id})
        await rooms.delete(db, room_id)
        logger.info("Room deleted: %s (removed %d players)", room_id, removed)


room_service = RoomService()

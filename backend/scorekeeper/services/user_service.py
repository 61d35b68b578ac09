"""
Scorekeeper Backend — User Service
====================================

What:  User lifecycle: listing, signup, cascading deletion, authentication.
How:   Pre-checks and writes go through the persistence gateway; bcrypt
       work runs in a worker thread so the event loop stays free.
Who:   Called by the /users route handlers.

Deletion order (referential integrity):
    players of the user's rooms → the user's rooms → the user
"""

import asyncio
import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from scorekeeper.exceptions import ConflictError, UnauthorizedError
from scorekeeper.models import User
from scorekeeper.repositories import players, rooms, users
from scorekeeper.schemas.user import UserResponse
from scorekeeper.security import dummy_hash, hash_password, verify_password

logger = logging.getLogger(__name__)


def _credentials_match(user: Optional[User], password: str) -> bool:
    # An unknown name still pays for one bcrypt comparison
    hashed = user.password if user is not None else dummy_hash()
    matches = verify_password(password, hashed)
    return user is not None and matches


class UserService:
    """
    Business logic for users.

    Stateless: every method receives the request's session.
    """

    async def list_users(self, db: AsyncSession) -> List[UserResponse]:
        """All users as {id, name}, sorted by name ascending."""
        found = await users.find_many(db, order_by="name")
        return [UserResponse.model_validate(user) for user in found]

    async def create_user(self, db: AsyncSession, name: str, password: str) -> UserResponse:
        """
        Register a new user.

        Raises:
            ConflictError: A user with ``name`` already exists. Raised by the
                pre-check, or by the gateway when a concurrent signup wins
                the race and the unique constraint rejects this insert.
            ValidationError: The password exceeds bcrypt's input limit.
        """
        existing = await users.find_first(db, where={"name": name})
        if existing is not None:
            logger.warning("Signup rejected, name already taken: %s", name)
            raise ConflictError(
                message="User with this name already exists",
                context={"name": name},
            )

        hashed = await asyncio.to_thread(hash_password, password)
        user = await users.create(db, {"name": name, "password": hashed})
        logger.info("User created: %s (%s)", user.id, user.name)
        return UserResponse.model_validate(user)

    async def delete_user(self, db: AsyncSession, user_id: UUID) -> None:
        """
        Delete a user together with every room it owns and every player in
        those rooms. Deleting zero rooms/players is not an error.

        Raises:
            NotFoundError: No user with ``user_id``.
        """
        owned = await rooms.find_many(db, where={"owner_id": user_id})
        room_ids = [room.id for room in owned]
        if room_ids:
            removed_players = await players.delete_many(db, where={"room_id": room_ids})
            removed_rooms = await rooms.delete_many(db, where={"id": room_ids})
            logger.info(
                "Cascade for user %s: removed %d players in %d rooms",
                user_id, removed_players, removed_rooms,
            )

        await users.delete(db, user_id)
        logger.info("User deleted: %s", user_id)

    async def authenticate(self, db: AsyncSession, name: str, password: str) -> UserResponse:
        """
        Verify a name/password pair.

        Raises:
            UnauthorizedError: Unknown name or wrong password. Both cases
                raise the same error with the same message.
        """
        user = await users.find_first(db, where={"name": name})
        if not await asyncio.to_thread(_credentials_match, user, password):
            logger.info("Authentication failed")
            raise UnauthorizedError()
        return UserResponse.model_validate(user)


user_service = UserService()

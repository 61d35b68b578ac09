"""
Scorekeeper Backend — Room & Player Schemas
=============================================

What:  API contract for /rooms, /userRooms and the player/points endpoints.
How:   JSON keys keep the established camelCase wire names (ownerId, roomId,
       playerName) through aliases; request bodies also accept snake_case.
"""

import uuid
from typing import List

from pydantic import AliasChoices, BaseModel, Field

# players.points is a BIGINT column
POINTS_MIN = -(2 ** 63)
POINTS_MAX = 2 ** 63 - 1


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class RoomCreate(BaseModel):
    """Body of POST /rooms/{user}."""
    name: str = Field(min_length=1, max_length=255, description="Room name, unique per owner")


class RoomRename(BaseModel):
    """Body of PUT /rooms/{id}."""
    name: str = Field(min_length=1, max_length=255, description="New room name")


class PlayerCreate(BaseModel):
    """Body of POST /rooms/{roomId}/players."""
    player_name: str = Field(
        min_length=1,
        max_length=255,
        validation_alias=AliasChoices("playerName", "player_name"),
        description="Player name, unique per room",
    )


class PointsUpdate(BaseModel):
    """
    Body of the four points endpoints.

    For /points it is a signed delta; for /totalPoints it is the new total.
    """
    points: int = Field(
        ge=POINTS_MIN,
        le=POINTS_MAX,
        description="Delta (relative) or total (absolute)",
    )


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class PlayerSummary(BaseModel):
    """Player as embedded in a room: {id, name, points}."""
    id: uuid.UUID
    name: str
    points: int

    model_config = {"from_attributes": True}


class PlayerResponse(PlayerSummary):
    """Player returned by POST /rooms/{roomId}/players."""
    room_id: uuid.UUID = Field(serialization_alias="roomId")


class RoomResponse(BaseModel):
    """A room with its players (one level of nesting only)."""
    id: uuid.UUID = Field(description="Room identifier (UUID)")
    name: str = Field(description="Room name")
    owner_id: uuid.UUID = Field(serialization_alias="ownerId", description="Owning user")
    players: List[PlayerSummary] = Field(default_factory=list, description="Players ordered by name")

    model_config = {"from_attributes": True}


class PointsUpdateResponse(BaseModel):
    """Result of a points mutation: how many player rows were written."""
    updated: int = Field(description="Number of players updated (0 for a no-op)")

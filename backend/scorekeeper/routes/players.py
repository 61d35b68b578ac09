"""
Scorekeeper Backend — Player & Points Route Handlers
======================================================

What:  Enrollment, removal and the four points endpoints.

    /points       body {points} is a signed delta   (relative)
    /totalPoints  body {points} is the new total    (absolute)

    Each comes in a single-player form (.../players/{player_id}/...) and a
    whole-room form (.../players/...).
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from scorekeeper.database import get_db_session
from scorekeeper.schemas.common import ErrorResponse
from scorekeeper.schemas.room import (
    PlayerCreate,
    PlayerResponse,
    PointsUpdate,
    PointsUpdateResponse,
)
from scorekeeper.services.player_service import player_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rooms/{room_id}/players", tags=["Players"])


@router.post(
    "",
    status_code=201,
    response_model=PlayerResponse,
    responses={
        404: {"description": "Room not found", "model": ErrorResponse},
        409: {"description": "Name already used in this room", "model": ErrorResponse},
    },
    summary="Add a player to a room",
)
async def add_player(
    room_id: UUID,
    body: PlayerCreate,
    db: AsyncSession = Depends(get_db_session),
) -> PlayerResponse:
    return await player_service.add_player(db, room_id, body.player_name)


@router.delete(
    "/{player_id}",
    status_code=204,
    responses={404: {"description": "Player not found in this room", "model": ErrorResponse}},
    summary="Remove a player",
)
async def remove_player(
    room_id: UUID,
    player_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> None:
    await player_service.remove_player(db, room_id, player_id)


@router.put(
    "/points",
    response_model=PointsUpdateResponse,
    summary="Add a signed delta to every player in the room",
)
async def adjust_all_points(
    room_id: UUID,
    body: PointsUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> PointsUpdateResponse:
    return await player_service.adjust_all_points(db, room_id, body.points)


@router.put(
    "/totalPoints",
    response_model=PointsUpdateResponse,
    summary="Set every player's total in the room",
)
async def set_all_total_points(
    room_id: UUID,
    body: PointsUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> PointsUpdateResponse:
    return await player_service.set_all_total_points(db, room_id, body.points)


@router.put(
    "/{player_id}/points",
    response_model=PointsUpdateResponse,
    responses={404: {"description": "Player not found in this room", "model": ErrorResponse}},
    summary="Add a signed delta to one player",
)
async def adjust_points(
    room_id: UUID,
    player_id: UUID,
    body: PointsUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> PointsUpdateResponse:
    return await player_service.adjust_points(db, room_id, player_id, body.points)


@router.put(
    "/{player_id}/totalPoints",
    response_model=PointsUpdateResponse,
    responses={404: {"description": "Player not found in this room", "model": ErrorResponse}},
    summary="Set one player's total",
)
async def set_total_points(
    room_id: UUID,
    player_id: UUID,
    body: PointsUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> PointsUpdateResponse:
    return await player_service.set_total_points(db, room_id, player_id, body.points)

"""
Scorekeeper Backend — Room Route Handlers
===========================================

What:  Room listing per owner, lookup, creation, rename and deletion.

Route Inventory:
    GET    /userRooms/{user_id}   rooms of a user (with players)
    GET    /rooms/{room_id}       one room (with players)
    POST   /rooms/{owner_id}      create a room for a user
    PUT    /rooms/{room_id}       rename
    DELETE /rooms/{room_id}       delete room and its players
"""

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from scorekeeper.database import get_db_session
from scorekeeper.schemas.common import ErrorResponse
from scorekeeper.schemas.room import RoomCreate, RoomRename, RoomResponse
from scorekeeper.services.room_service import room_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Rooms"])


@router.get(
    "/userRooms/{user_id}",
    response_model=List[RoomResponse],
    summary="List a user's rooms",
    description="Rooms owned by the user, sorted by name, each with its players.",
)
async def list_user_rooms(
    user_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> List[RoomResponse]:
    return await room_service.list_user_rooms(db, user_id)


@router.get(
    "/rooms/{room_id}",
    response_model=RoomResponse,
    responses={404: {"description": "Room not found", "model": ErrorResponse}},
    summary="Get a room with its players",
)
async def get_room(
    room_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> RoomResponse:
    return await room_service.get_room(db, room_id)


@router.post(
    "/rooms/{owner_id}",
    status_code=201,
    response_model=RoomResponse,
    responses={
        404: {"description": "Owner not found", "model": ErrorResponse},
        409: {"description": "Owner already has a room with this name", "model": ErrorResponse},
    },
    summary="Create a room",
)
async def create_room(
    owner_id: UUID,
    body: RoomCreate,
    db: AsyncSession = Depends(get_db_session),
) -> RoomResponse:
    return await room_service.create_room(db, owner_id=owner_id, name=body.name)


@router.put(
    "/rooms/{room_id}",
    response_model=RoomResponse,
    responses={
        404: {"description": "Room not found", "model": ErrorResponse},
        409: {"description": "Owner already has a room with this name", "model": ErrorResponse},
    },
    summary="Rename a room",
)
async def rename_room(
    room_id: UUID,
    body: RoomRename,
    db: AsyncSession = Depends(get_db_session),
) -> RoomResponse:
    return await room_service.rename_room(db, room_id, body.name)


@router.delete(
    "/rooms/{room_id}",
    status_code=204,
    responses={404: {"description": "Room not found", "model": ErrorResponse}},
    summary="Delete a room and its players",
)
async def delete_room(
    room_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> None:
    await room_service.delete_room(db, room_id)

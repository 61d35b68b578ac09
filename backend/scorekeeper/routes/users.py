"""
Scorekeeper Backend — User Route Handlers
===========================================

What:  GET/POST /users, DELETE /users/{id}, POST /users/authenticate.
How:   Thin handlers: FastAPI validates the body, UserService does the work,
       global exception handlers format 401/404/409 responses.
"""

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from scorekeeper.database import get_db_session
from scorekeeper.schemas.common import ErrorResponse
from scorekeeper.schemas.user import UserCreate, UserCredentials, UserResponse
from scorekeeper.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


@router.get(
    "",
    response_model=List[UserResponse],
    summary="List users",
    description="All users sorted by name. Password hashes are never returned.",
)
async def list_users(db: AsyncSession = Depends(get_db_session)) -> List[UserResponse]:
    return await user_service.list_users(db)


@router.post(
    "",
    status_code=201,
    response_model=UserResponse,
    responses={
        201: {"description": "User created", "model": UserResponse},
        409: {"description": "Name already taken", "model": ErrorResponse},
    },
    summary="Create a user",
)
async def create_user(
    body: UserCreate,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    return await user_service.create_user(db, name=body.name, password=body.password)


@router.post(
    "/authenticate",
    response_model=UserResponse,
    responses={401: {"description": "Invalid credentials", "model": ErrorResponse}},
    summary="Verify a name/password pair",
)
async def authenticate(
    body: UserCredentials,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    return await user_service.authenticate(db, name=body.name, password=body.password)


@router.delete(
    "/{user_id}",
    status_code=204,
    responses={404: {"description": "User not found", "model": ErrorResponse}},
    summary="Delete a user with all its rooms and players",
)
async def delete_user(
    user_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> None:
    await user_service.delete_user(db, user_id)

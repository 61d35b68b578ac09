"""
Scorekeeper Backend — User Schemas
====================================

What:  API contract for /users endpoints.
"""

import uuid

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class UserCreate(BaseModel):
    """Body of POST /users."""
    name: str = Field(min_length=1, max_length=255, description="Unique display name")
    password: str = Field(min_length=1, description="Plain password; stored as a bcrypt hash")


class UserCredentials(BaseModel):
    """Body of POST /users/authenticate."""
    name: str = Field(description="Display name")
    password: str = Field(description="Plain password")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class UserResponse(BaseModel):
    """
    Public view of a user. Returned by list, create and authenticate.
    The password hash is never part of it.
    """
    id: uuid.UUID = Field(description="User identifier (UUID)")
    name: str = Field(description="Display name")

    model_config = {"from_attributes": True}

"""Pydantic models for API request/response."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from domain.model.cat import AGE_MAX, AGE_MIN


class CatResponse(BaseModel):
    """Response model for a stored cat."""
    id: int = Field(..., description="Cat ID assigned by the store")
    name: str
    age: int
    breed: str


class DogCreate(BaseModel):
    """Request model for creating a dog."""
    name: str
    age: int = Field(..., ge=AGE_MIN, le=AGE_MAX)
    breed: str


class DogResponse(BaseModel):
    """Response model for a stored dog."""
    id: str = Field(..., description="Dog ID")
    name: str
    age: int
    breed: str


class TokenResponse(BaseModel):
    """Bearer token issued by GET /cats/token."""
    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(..., alias="accessToken")
    expires_in: int = Field(..., alias="expiresIn", description="Validity window in seconds")


class EventMessage(BaseModel):
    """Frame exchanged over the /events WebSocket."""
    event: str = Field(..., min_length=1)
    data: Any = None

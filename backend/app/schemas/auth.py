"""
AquaGuard Backend — Login Schemas
===================================

What:  Request/response models for POST /api/login.
Why:   The response shape `{success, user: {username}}` is what the UI keys
       its in-memory session on; no token is issued.
"""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    username: str
    password: str


class UserPublic(BaseModel):
    """The only user data ever returned by the API."""
    username: str

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    success: bool = Field(default=True)
    user: UserPublic

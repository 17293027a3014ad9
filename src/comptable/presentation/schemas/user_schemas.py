"""
API schemas for registration and login.
"""

from pydantic import BaseModel, Field


class CredentialsRequest(BaseModel):
    """Request schema for register and login."""

    login: str = Field(
        ...,
        description="Account login",
        min_length=1,
        max_length=255,
    )
    password: str = Field(
        ...,
        description="Account password",
        min_length=1,
    )


class UserResponse(BaseModel):
    """Response schema after successful register or login."""

    login: str = Field(..., description="Authenticated login")

"""User data model for tasktrack."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class User(BaseModel):
    """User model for tasktrack."""
    
    id: str = Field(..., description="Unique user identifier (UUID v4, assigned on first login)")
    email: str = Field(..., description="User email address as received from Google")
    name: Optional[str] = Field(None, description="User display name")
    picture: Optional[str] = Field(None, description="Avatar image, base64 encoded")
    created_at: datetime = Field(..., description="User creation timestamp")
    updated_at: datetime = Field(..., description="User last update timestamp")


class UserProfile(BaseModel):
    """Public view of a user returned by GET /api/profile."""

    id: str
    name: Optional[str] = None
    email: str
    picture: Optional[str] = None

"""Request/response models for authentication endpoints."""

from pydantic import BaseModel, Field

from tasktrack.models.user import UserProfile


class GoogleLoginRequest(BaseModel):
    """Request model for Google Sign-In login."""
    credential: str = Field(..., description="Google ID token from Google Sign-In")


class LoginResponse(BaseModel):
    """Response model for login."""
    token: str


class ProfileResponse(BaseModel):
    """Response model for the profile endpoint."""
    user: UserProfile

"""
User schemas.
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class CreateUserRequest(BaseModel):
    """Request schema for creating a user."""
    email: str
    full_name: str
    password: str = Field(..., min_length=1)
    daily_card_limit: Optional[int] = Field(None, description="Cards per day, defaults to the server setting")


class UpdateUserSettingsRequest(BaseModel):
    """Request schema for updating user settings. Omitted fields are unchanged."""
    daily_card_limit: Optional[int] = None
    full_name: Optional[str] = None


class UserResponse(BaseModel):
    """User response schema."""
    id: int
    email: str
    full_name: str
    daily_card_limit: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

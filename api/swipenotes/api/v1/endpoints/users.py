"""
User endpoints.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from swipenotes.core.database import get_session
from swipenotes.schemas.user import CreateUserRequest, UpdateUserSettingsRequest, UserResponse
from swipenotes.services.user_service import create_user, get_user, update_user_settings

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register_user(
    request: CreateUserRequest,
    session: Session = Depends(get_session)
):
    """Create a user. The password is stored hashed."""
    user = create_user(
        session,
        email=request.email,
        full_name=request.full_name,
        password=request.password,
        daily_card_limit=request.daily_card_limit,
    )
    return UserResponse.model_validate(user)


@router.get("/{user_id}", response_model=UserResponse)
async def read_user(user_id: int, session: Session = Depends(get_session)):
    return UserResponse.model_validate(get_user(session, user_id))


@router.patch("/{user_id}/settings", response_model=UserResponse)
async def update_settings(
    user_id: int,
    request: UpdateUserSettingsRequest,
    session: Session = Depends(get_session)
):
    """Update study settings such as the daily card limit."""
    user = update_user_settings(
        session,
        user_id,
        daily_card_limit=request.daily_card_limit,
        full_name=request.full_name,
    )
    return UserResponse.model_validate(user)

"""
User service for business logic related to user operations.
"""
import logging
from typing import Optional

from sqlmodel import Session, select

from swipenotes.core.config import settings
from swipenotes.core.exceptions import ConflictError, NotFoundError, ValidationError
from swipenotes.models.models import User

logger = logging.getLogger(__name__)


def get_user(session: Session, user_id: int) -> User:
    """
    Fetch a user by ID.

    Raises:
        NotFoundError: If user not found
    """
    user = session.get(User, user_id)
    if not user:
        raise NotFoundError(f"User with id {user_id} not found")
    return user


def validate_daily_card_limit(daily_card_limit: int) -> int:
    if daily_card_limit <= 0:
        raise ValidationError(f"daily_card_limit must be > 0, got {daily_card_limit}")
    return daily_card_limit


def create_user(
    session: Session,
    email: str,
    full_name: str,
    password: str,
    daily_card_limit: Optional[int] = None
) -> User:
    """
    Register a new user.

    Raises:
        ConflictError: If the email is already registered
        ValidationError: If the daily card limit is not positive
    """
    email = email.strip().lower()
    existing = session.exec(select(User).where(User.email == email)).first()
    if existing:
        raise ConflictError(f"Email {email} is already registered")

    limit = settings.default_daily_card_limit if daily_card_limit is None else daily_card_limit
    user = User(
        email=email,
        full_name=full_name.strip(),
        password=User.hash_password(password),
        daily_card_limit=validate_daily_card_limit(limit),
    )
    session.add(user)
    session.commit()
    session.refresh(user)

    logger.info(f"Created user {user.id}")
    return user


def update_user_settings(
    session: Session,
    user_id: int,
    daily_card_limit: Optional[int] = None,
    full_name: Optional[str] = None
) -> User:
    """
    Update a user's study settings. Fields left as None are unchanged.

    Raises:
        NotFoundError: If user not found
        ValidationError: If the daily card limit is not positive
    """
    user = get_user(session, user_id)

    if daily_card_limit is not None:
        user.daily_card_limit = validate_daily_card_limit(daily_card_limit)
    if full_name is not None:
        user.full_name = full_name.strip()

    session.add(user)
    session.commit()
    session.refresh(user)
    return user

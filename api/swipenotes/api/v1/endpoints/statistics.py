"""
Statistics endpoints: streaks, calendars and daily usage.
"""
from fastapi import APIRouter, Depends
from sqlmodel import Session

from swipenotes.core.database import get_session
from swipenotes.schemas.statistics import (
    ActivityResponse,
    DailySwipesResponse,
    DayActivityResponse,
    ReviewQueueCountResponse,
    StreakResponse
)
from swipenotes.services.card_service import get_review_queue_count
from swipenotes.services.eligibility_service import get_daily_swipes_count
from swipenotes.services.streak_service import (
    calculate_current_streak,
    get_month_activity,
    get_week_activity
)
from swipenotes.services.user_service import get_user

router = APIRouter(prefix="/statistics", tags=["statistics"])


@router.get("/streak", response_model=StreakResponse)
async def streak(user_id: int, session: Session = Depends(get_session)):
    return StreakResponse(user_id=user_id, current_streak=calculate_current_streak(session, user_id))


@router.get("/week", response_model=ActivityResponse)
async def week(user_id: int, session: Session = Depends(get_session)):
    """Study activity for the last 7 days, oldest first."""
    days = get_week_activity(session, user_id)
    return ActivityResponse(days=[DayActivityResponse.model_validate(day) for day in days])


@router.get("/month", response_model=ActivityResponse)
async def month(user_id: int, year: int, month: int, session: Session = Depends(get_session)):
    """Study activity for each day of a month (month is 1-12)."""
    days = get_month_activity(session, user_id, year, month)
    return ActivityResponse(days=[DayActivityResponse.model_validate(day) for day in days])


@router.get("/daily-swipes", response_model=DailySwipesResponse)
async def daily_swipes(user_id: int, session: Session = Depends(get_session)):
    user = get_user(session, user_id)
    return DailySwipesResponse(
        user_id=user_id,
        count=get_daily_swipes_count(session, user_id),
        daily_card_limit=user.daily_card_limit,
    )


@router.get("/review-queue", response_model=ReviewQueueCountResponse)
async def review_queue(user_id: int, session: Session = Depends(get_session)):
    """Number of cards waiting in the review queue."""
    get_user(session, user_id)
    return ReviewQueueCountResponse(user_id=user_id, count=get_review_queue_count(session, user_id))

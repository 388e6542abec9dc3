"""
Statistics schemas.
"""
from pydantic import BaseModel
from typing import List
from datetime import date
from swipenotes.models.enums import DayStatus


class StreakResponse(BaseModel):
    user_id: int
    current_streak: int


class DayActivityResponse(BaseModel):
    """One day of a streak calendar."""
    date: date
    day_abbreviation: str
    day_number: int
    status: DayStatus
    has_studied: bool
    is_today: bool

    class Config:
        from_attributes = True


class ActivityResponse(BaseModel):
    days: List[DayActivityResponse]


class DailySwipesResponse(BaseModel):
    user_id: int
    count: int
    daily_card_limit: int


class ReviewQueueCountResponse(BaseModel):
    user_id: int
    count: int

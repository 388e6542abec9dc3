"""
Study session schemas.
"""
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from datetime import datetime
from swipenotes.models.enums import SwipeDirection


class SwipeEntry(BaseModel):
    """One swipe in a session history."""
    card_id: int
    direction: SwipeDirection
    timestamp: datetime
    previous_last_seen_at: Optional[datetime] = None


class StudySessionResponse(BaseModel):
    """Study session response schema."""
    id: int
    user_id: int
    started_at: datetime
    ended_at: Optional[datetime] = None
    is_active: bool
    cards_swiped: int
    swipe_history: List[SwipeEntry] = []
    cards: List[Dict[str, Any]] = Field([], description="Snapshot of the cards at session start")

    class Config:
        from_attributes = True


class StudySessionsResponse(BaseModel):
    sessions: List[StudySessionResponse]


class StartSessionRequest(BaseModel):
    user_id: int


class StartSessionResponse(BaseModel):
    session: StudySessionResponse
    limit_reached: bool


class SwipeRequest(BaseModel):
    """Request to record a swipe."""
    card_id: int
    direction: SwipeDirection

    class Config:
        json_schema_extra = {
            "example": {
                "card_id": 42,
                "direction": "left"
            }
        }

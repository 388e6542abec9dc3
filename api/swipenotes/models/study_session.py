"""
StudySession model.
"""
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, JSON
from typing import Optional, List, Dict, Any, TYPE_CHECKING
from datetime import datetime

if TYPE_CHECKING:
    from swipenotes.models.user import User


class StudySession(SQLModel, table=True):
    """
    StudySession table - one swipe session.

    swipe_history is an append-only list of {card_id, direction, timestamp}
    entries. cards is the snapshot of the eligible cards taken when the
    session started; it is never rewritten.
    """
    __tablename__ = "study_session"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    started_at: datetime = Field(default_factory=datetime.now)
    ended_at: Optional[datetime] = None
    is_active: bool = Field(default=True)
    cards_swiped: int = Field(default=0)
    swipe_history: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    cards: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    # Relationships
    user: "User" = Relationship(back_populates="study_sessions")

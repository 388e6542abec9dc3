"""
Project model.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime

if TYPE_CHECKING:
    from swipenotes.models.user import User
    from swipenotes.models.card import Card


class Project(SQLModel, table=True):
    """Project table - optional grouping of a user's cards."""
    __tablename__ = "project"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    name: str
    color: str = Field(default="#6366f1")
    created_at: datetime = Field(default_factory=datetime.now)

    # Relationships
    user: "User" = Relationship(back_populates="projects")
    cards: List["Card"] = Relationship(back_populates="project")

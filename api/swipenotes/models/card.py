"""
Card model.
"""
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, String as SAString
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime
from swipenotes.models.card_tag import CardTag
from swipenotes.models.enums import ExtractionMethod

if TYPE_CHECKING:
    from swipenotes.models.user import User
    from swipenotes.models.source_document import SourceDocument
    from swipenotes.models.project import Project
    from swipenotes.models.tag import Tag


class Card(SQLModel, table=True):
    """Card table - a bounded-length study unit and its review state."""
    __tablename__ = "card"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    source_document_id: int = Field(foreign_key="source_document.id", index=True)
    project_id: Optional[int] = Field(default=None, foreign_key="project.id")
    content: str
    created_at: datetime = Field(default_factory=datetime.now)
    last_seen_at: Optional[datetime] = None
    interval_days: int = Field(default=1)  # Current step of the interval ladder
    times_seen: int = Field(default=0)
    times_left_swiped: int = Field(default=0)
    times_right_swiped: int = Field(default=0)
    in_review_queue: bool = Field(default=False)
    word_count: int
    extraction_method: ExtractionMethod = Field(
        sa_column=Column(SAString, nullable=False)
    )  # stored as string, converted to enum

    # Relationships
    user: "User" = Relationship(back_populates="cards")
    source_document: "SourceDocument" = Relationship(back_populates="cards")
    project: Optional["Project"] = Relationship(back_populates="cards")
    tags: List["Tag"] = Relationship(back_populates="cards", link_model=CardTag)

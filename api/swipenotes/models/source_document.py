"""
SourceDocument model.
"""
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import UniqueConstraint
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime

if TYPE_CHECKING:
    from swipenotes.models.user import User
    from swipenotes.models.card import Card


class SourceDocument(SQLModel, table=True):
    """SourceDocument table - an imported document, unique per user and content hash."""
    __tablename__ = "source_document"
    __table_args__ = (
        UniqueConstraint("user_id", "content_hash", name="uq_source_document_user_hash"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    file_name: str
    imported_at: datetime = Field(default_factory=datetime.now)
    raw_text: str
    content_hash: str = Field(index=True)  # SHA-256 hex digest of raw_text
    byte_size: int  # UTF-8 size of raw_text

    # Relationships
    user: "User" = Relationship(back_populates="source_documents")
    cards: List["Card"] = Relationship(back_populates="source_document")

"""
User model.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List
from datetime import datetime
import hashlib


class User(SQLModel, table=True):
    """User table - stores user information and study settings."""
    __tablename__ = "user"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True)  # Email address
    full_name: str
    password: str  # Hashed password
    daily_card_limit: int = Field(default=20)  # Cards that may be swiped per local day
    created_at: datetime = Field(default_factory=datetime.now)

    # Relationships
    source_documents: List["SourceDocument"] = Relationship(back_populates="user")
    cards: List["Card"] = Relationship(back_populates="user")
    projects: List["Project"] = Relationship(back_populates="user")
    study_sessions: List["StudySession"] = Relationship(back_populates="user")

    @staticmethod
    def hash_password(password: str) -> str:
        """Simple password hashing using SHA256."""
        return hashlib.sha256(password.encode()).hexdigest()

    def verify_password(self, password: str) -> bool:
        """Verify a password against the stored hash."""
        return self.password == self.hash_password(password)

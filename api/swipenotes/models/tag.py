"""
Tag model.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING
from swipenotes.models.card_tag import CardTag

if TYPE_CHECKING:
    from swipenotes.models.card import Card


class Tag(SQLModel, table=True):
    """Tag table - a shared vocabulary, names are unique across all users."""
    __tablename__ = "tag"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(unique=True, index=True)  # Case-sensitive

    # Relationships
    cards: List["Card"] = Relationship(back_populates="tags", link_model=CardTag)

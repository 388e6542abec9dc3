"""
CardTag model - junction table for many-to-many relationship between cards and tags.
"""
from sqlmodel import SQLModel, Field


class CardTag(SQLModel, table=True):
    """CardTag junction table - links a card to the tags describing it."""
    __tablename__ = "card_tag"

    card_id: int = Field(foreign_key="card.id", primary_key=True)
    tag_id: int = Field(foreign_key="tag.id", primary_key=True)
